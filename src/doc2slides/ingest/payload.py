"""Decoding of atomic media payloads stored as JSON strings in block props.

Whiteboard and spreadsheet blocks persist their state as serialized JSON in
props (``data``, ``settings``, ...). Hosts may hand us broken strings after a
failed save, so every field decodes to a default instead of raising.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from doc2slides.feature_logger import log_error_policy
from doc2slides.model.blocks import BlockRecord, MediaKind

from .host import extract_text, node_content, node_props

DEFAULT_TITLES: dict[MediaKind, str] = {
    MediaKind.WHITEBOARD: "Untitled Whiteboard",
    MediaKind.SPREADSHEET: "Untitled Spreadsheet",
    MediaKind.DIAGRAM: "Diagram",
}


def decode_json_prop(raw: Any, default: Any, *, field: str) -> Any:
    """Decode a JSON prop, returning ``default`` when missing or malformed.

    The decoded value must have the same container type as ``default``.
    Already-decoded values are accepted as-is.
    """
    expected = type(default)
    if raw is None or raw == "":
        return default
    value = raw
    if isinstance(raw, str):
        try:
            value = json.loads(raw)
        except ValueError as exc:
            log_error_policy("payload", "invalid_json", "default", f"{field}: {exc}")
            return default
    if not isinstance(value, expected):
        log_error_policy(
            "payload",
            "unexpected_type",
            "default",
            f"{field}: expected {expected.__name__}, got {type(value).__name__}",
        )
        return default
    return value


def _whiteboard_payload(props: Mapping[str, Any]) -> dict[str, Any]:
    data = decode_json_prop(props.get("data"), {}, field="whiteboard.data")
    elements = data.get("elements")
    if elements is None:
        elements = []
    elif not isinstance(elements, list):
        log_error_policy("payload", "unexpected_type", "default", "whiteboard.elements")
        elements = []
    app_state = data.get("appState")
    files = data.get("files")
    return {
        # Deleted shapes stay in the scene history but must not be shown
        "elements": [e for e in elements if isinstance(e, Mapping) and not e.get("isDeleted")],
        "appState": app_state if isinstance(app_state, dict) else {},
        "files": files if isinstance(files, dict) else {},
        "settings": decode_json_prop(props.get("settings"), {}, field="whiteboard.settings"),
    }


def _spreadsheet_payload(props: Mapping[str, Any]) -> dict[str, Any]:
    return {
        "columns": decode_json_prop(props.get("columns"), [], field="spreadsheet.columns"),
        "data": decode_json_prop(props.get("data"), [], field="spreadsheet.data"),
        "settings": decode_json_prop(props.get("settings"), {}, field="spreadsheet.settings"),
        "meta": decode_json_prop(props.get("meta"), {}, field="spreadsheet.meta"),
    }


def _diagram_payload(props: Mapping[str, Any], text: str) -> dict[str, Any]:
    source = props.get("code")
    if not isinstance(source, str):
        source = props.get("source")
    if not isinstance(source, str):
        source = text
    return {"source": source}


def media_title(record: BlockRecord) -> str:
    kind = record.media_kind or MediaKind.DIAGRAM
    title = node_props(record.handle).get("title")
    if isinstance(title, str) and title.strip():
        return title.strip()
    return DEFAULT_TITLES[kind]


def media_payload(record: BlockRecord) -> dict[str, Any]:
    """Build the structured payload for an atomic media block."""
    props = node_props(record.handle)
    if record.media_kind is MediaKind.WHITEBOARD:
        return _whiteboard_payload(props)
    if record.media_kind is MediaKind.SPREADSHEET:
        return _spreadsheet_payload(props)
    return _diagram_payload(props, extract_text(node_content(record.handle)))


__all__ = [
    "DEFAULT_TITLES",
    "decode_json_prop",
    "media_payload",
    "media_title",
]
