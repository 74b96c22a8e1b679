from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping, Sequence
from typing import Any

from doc2slides.errors import HostAccessError
from doc2slides.model.blocks import BlockKind, BlockRecord, ListStyle, MediaKind
from doc2slides.types import DocumentLike, HostNode

from .host import extract_text, node_children, node_content, node_id, node_props, node_type

logger = logging.getLogger(__name__)

# Structural nodes with no content of their own; their children are collected in place
WRAPPER_TYPES = frozenset({"doc", "blockContainer", "blockGroup"})

# Output containers of this engine; collecting them would embed decks in decks
SLIDE_CONTAINER_TYPES = frozenset({"slideshow", "slide"})

_KIND_BY_TYPE: dict[str, BlockKind] = {
    "heading": BlockKind.HEADING,
    "paragraph": BlockKind.PARAGRAPH,
    "bulletListItem": BlockKind.LIST_ITEM,
    "toggleListItem": BlockKind.LIST_ITEM,
    "numberedListItem": BlockKind.LIST_ITEM,
    "checkListItem": BlockKind.LIST_ITEM,
    "codeBlock": BlockKind.CODE_BLOCK,
    "table": BlockKind.TABLE,
    "quote": BlockKind.QUOTE,
    "image": BlockKind.IMAGE,
    "video": BlockKind.IMAGE,
    "audio": BlockKind.IMAGE,
    "file": BlockKind.IMAGE,
    "whiteboard": BlockKind.ATOMIC_MEDIA,
    "spreadsheet": BlockKind.ATOMIC_MEDIA,
    "mermaid": BlockKind.ATOMIC_MEDIA,
    "diagram": BlockKind.ATOMIC_MEDIA,
    "horizontalRule": BlockKind.SEPARATOR,
    "divider": BlockKind.SEPARATOR,
}

_LIST_STYLE_BY_TYPE: dict[str, ListStyle] = {
    "bulletListItem": ListStyle.BULLET,
    "toggleListItem": ListStyle.BULLET,
    "numberedListItem": ListStyle.NUMBERED,
    "checkListItem": ListStyle.CHECK,
}

_MEDIA_KIND_BY_TYPE: dict[str, MediaKind] = {
    "whiteboard": MediaKind.WHITEBOARD,
    "spreadsheet": MediaKind.SPREADSHEET,
    "mermaid": MediaKind.DIAGRAM,
    "diagram": MediaKind.DIAGRAM,
}


def _top_level_nodes(document: object) -> list[Any]:
    if document is None:
        raise HostAccessError("document is None")

    nodes: object = document
    try:
        if isinstance(document, Mapping):
            nodes = document.get("blocks")
            if nodes is None:
                nodes = document.get("document")
            if nodes is None and node_type(document) in WRAPPER_TYPES:
                nodes = node_children(document) or node_content(document)
        elif not isinstance(document, Sequence):
            nodes = getattr(document, "document")
    except HostAccessError:
        raise
    except Exception as exc:
        raise HostAccessError("document blocks are not readable", cause=exc) from exc

    if nodes is None:
        return []
    if isinstance(nodes, str | bytes) or not isinstance(nodes, Iterable):
        raise HostAccessError(f"expected a sequence of blocks, got {type(nodes).__name__}")
    try:
        return list(nodes)
    except Exception as exc:
        raise HostAccessError("document blocks are not iterable", cause=exc) from exc


def _iter_content_nodes(nodes: Iterable[Any]) -> Iterator[Any]:
    for node in nodes:
        if node is None:
            continue
        block_type = node_type(node)
        if block_type in WRAPPER_TYPES:
            inner = node_children(node)
            if not inner:
                content = node_content(node)
                inner = list(content) if isinstance(content, Sequence) else []
            yield from _iter_content_nodes(inner)
            continue
        if block_type in SLIDE_CONTAINER_TYPES:
            logger.debug("Skipping %s container block", block_type)
            continue
        if not block_type:
            logger.debug("Skipping node without a type tag: %r", node)
            continue
        yield node


def _absorb_children(children: list[Any]) -> tuple[str, int]:
    """Collect text and a count of every nested descendant block."""
    texts: list[str] = []
    count = 0
    for child in children:
        count += 1
        text = extract_text(node_content(child))
        if text:
            texts.append(text)
        child_text, child_count = _absorb_children(node_children(child))
        if child_text:
            texts.append(child_text)
        count += child_count
    return " ".join(texts), count


def _heading_level(props: Mapping[str, Any]) -> int:
    raw = props.get("level", 1)
    try:
        level = int(raw)
    except (TypeError, ValueError):
        logger.debug("Invalid heading level %r; defaulting to 1", raw)
        return 1
    return max(1, level)


def make_record(node: HostNode) -> BlockRecord:
    """Project one host block node into a BlockRecord."""
    block_type = node_type(node)
    props = node_props(node)
    kind = _KIND_BY_TYPE.get(block_type, BlockKind.GENERIC)

    text = extract_text(node_content(node))
    if kind is BlockKind.ATOMIC_MEDIA and not text:
        title = props.get("title")
        text = title if isinstance(title, str) else ""

    child_text, nested = _absorb_children(node_children(node))
    if child_text:
        text = f"{text} {child_text}" if text else child_text

    return BlockRecord(
        kind=kind,
        block_type=block_type,
        text_content=text,
        heading_level=_heading_level(props) if kind is BlockKind.HEADING else None,
        media_kind=_MEDIA_KIND_BY_TYPE.get(block_type),
        list_style=_LIST_STYLE_BY_TYPE.get(block_type),
        nested_count=nested,
        block_id=node_id(node),
        handle=node,
    )


def collect_blocks(document: DocumentLike | None) -> list[BlockRecord]:
    """Flatten a host document into ordered top-level block records.

    Raises:
        HostAccessError: If the document or its block list cannot be read
    """
    nodes = _top_level_nodes(document)
    records = [make_record(node) for node in _iter_content_nodes(nodes)]
    logger.debug("Collected %d blocks from %d top-level nodes", len(records), len(nodes))
    return records


__all__ = [
    "SLIDE_CONTAINER_TYPES",
    "WRAPPER_TYPES",
    "collect_blocks",
    "make_record",
]
