"""Best-effort accessors over host block nodes.

Editors hand us either plain JSON-like mappings (``editor.document``) or node
objects exposing the same fields as attributes; both are read the same way.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any


def node_attr(node: object, name: str, default: Any = None) -> Any:
    if isinstance(node, Mapping):
        return node.get(name, default)
    return getattr(node, name, default)


def node_type(node: object) -> str:
    raw = node_attr(node, "type")
    # ProseMirror-style nodes carry a NodeType object with a name
    name = getattr(raw, "name", raw)
    return name if isinstance(name, str) else ""


def node_props(node: object) -> Mapping[str, Any]:
    props = node_attr(node, "props")
    if props is None:
        props = node_attr(node, "attrs")
    return props if isinstance(props, Mapping) else {}


def node_content(node: object) -> Any:
    return node_attr(node, "content")


def node_children(node: object) -> list[Any]:
    children = node_attr(node, "children")
    if isinstance(children, Sequence) and not isinstance(children, str | bytes):
        return [c for c in children if c is not None]
    return []


def node_id(node: object) -> str | None:
    raw = node_attr(node, "id")
    if isinstance(raw, str) and raw:
        return raw
    return None


def _table_cells(content: Mapping[str, Any]) -> list[Any]:
    cells: list[Any] = []
    rows = content.get("rows")
    if not isinstance(rows, Sequence):
        return cells
    for row in rows:
        row_cells = row.get("cells") if isinstance(row, Mapping) else None
        if isinstance(row_cells, Sequence):
            cells.extend(row_cells)
    return cells


def table_rows(content: Any) -> list[list[Any]]:
    """Return table content as rows of cell inline content."""
    if not isinstance(content, Mapping):
        return []
    rows = content.get("rows")
    if not isinstance(rows, Sequence):
        return []
    result: list[list[Any]] = []
    for row in rows:
        cells = row.get("cells") if isinstance(row, Mapping) else None
        if not isinstance(cells, Sequence):
            continue
        result.append([cell_content(c) for c in cells])
    return result


def cell_content(cell: Any) -> Any:
    # Newer editor versions wrap cells as {"type": "tableCell", "content": [...]}
    if isinstance(cell, Mapping) and cell.get("type") == "tableCell":
        return cell.get("content")
    return cell


def extract_text(content: Any) -> str:
    """Plain-text projection of inline content (strings, text and link items)."""
    if not content:
        return ""
    if isinstance(content, str):
        return content
    if isinstance(content, Mapping):
        if content.get("type") == "tableContent":
            parts = [extract_text(cell_content(c)) for c in _table_cells(content)]
            return " ".join(p for p in parts if p)
        return extract_text([content])
    if not isinstance(content, Sequence):
        return ""

    parts: list[str] = []
    for item in content:
        if isinstance(item, str):
            parts.append(item)
        elif isinstance(item, Mapping):
            kind = item.get("type")
            if kind == "text":
                text = item.get("text")
                parts.append(text if isinstance(text, str) else "")
            elif kind == "link":
                parts.append(extract_text(item.get("content") or []))
    return "".join(parts)


__all__ = [
    "cell_content",
    "extract_text",
    "node_attr",
    "node_children",
    "node_content",
    "node_id",
    "node_props",
    "node_type",
    "table_rows",
]
