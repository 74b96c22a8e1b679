"""Builders for editor documents used across the test suite."""

from __future__ import annotations

import itertools
import json
from typing import Any

from doc2slides.ingest.collector import collect_blocks
from doc2slides.model.blocks import BlockRecord

_ids = itertools.count(1)


def _block(block_type: str, content: Any = None, **props: Any) -> dict[str, Any]:
    block: dict[str, Any] = {
        "id": f"b{next(_ids)}",
        "type": block_type,
        "props": props,
        "content": content if content is not None else [],
        "children": [],
    }
    return block


def text(value: str, **styles: Any) -> dict[str, Any]:
    return {"type": "text", "text": value, "styles": styles}


def p(value: str = "", **props: Any) -> dict[str, Any]:
    return _block("paragraph", [text(value)] if value else [], **props)


def h(level: int, value: str) -> dict[str, Any]:
    return _block("heading", [text(value)], level=level)


def li(
    value: str, style: str = "bullet", children: list[dict[str, Any]] | None = None
) -> dict[str, Any]:
    block_type = {
        "bullet": "bulletListItem",
        "numbered": "numberedListItem",
        "check": "checkListItem",
    }[style]
    block = _block(block_type, [text(value)] if value else [])
    block["children"] = children or []
    return block


def code(value: str, language: str = "python") -> dict[str, Any]:
    return _block("codeBlock", [text(value)], language=language)


def quote(value: str) -> dict[str, Any]:
    return _block("quote", [text(value)])


def hr() -> dict[str, Any]:
    return _block("horizontalRule")


def image(url: str = "https://example.com/a.png", caption: str = "") -> dict[str, Any]:
    return _block("image", None, url=url, caption=caption)


def table(rows: list[list[str]]) -> dict[str, Any]:
    content = {
        "type": "tableContent",
        "rows": [{"cells": [[text(cell)] for cell in row]} for row in rows],
    }
    return _block("table", content)


def whiteboard(
    elements: list[dict[str, Any]] | None = None, title: str = "Sketch"
) -> dict[str, Any]:
    data = json.dumps({"elements": elements or [], "appState": {}, "files": {}})
    return _block("whiteboard", None, title=title, data=data, settings="{}")


def spreadsheet(title: str = "Budget") -> dict[str, Any]:
    return _block(
        "spreadsheet",
        None,
        title=title,
        columns=json.dumps([{"title": "A"}]),
        data=json.dumps([["1"], ["2"]]),
        settings="{}",
        meta="{}",
    )


def records(document: Any) -> list[BlockRecord]:
    return collect_blocks(document)


def texts(slide: list[BlockRecord]) -> list[str]:
    return [block.text_content for block in slide]
