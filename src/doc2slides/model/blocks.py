"""Block records: the unit the segmentation stages work on."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class BlockKind(Enum):
    HEADING = "heading"
    PARAGRAPH = "paragraph"
    LIST_ITEM = "list_item"
    CODE_BLOCK = "code_block"
    TABLE = "table"
    QUOTE = "quote"
    IMAGE = "image"
    ATOMIC_MEDIA = "atomic_media"
    SEPARATOR = "separator"
    GENERIC = "generic"  # host block types we do not model


class MediaKind(Enum):
    """Atomic media subkinds; each needs its own slide and renderer."""

    WHITEBOARD = "whiteboard"
    SPREADSHEET = "spreadsheet"
    DIAGRAM = "diagram"


class ListStyle(Enum):
    BULLET = "bullet"
    NUMBERED = "numbered"
    CHECK = "check"


@dataclass(slots=True, eq=False)
class BlockRecord:
    """Read-only projection of one top-level host block.

    - kind: tagged variant driving every pipeline stage
    - block_type: the host's own type tag (e.g. "bulletListItem")
    - text_content: plain text of the block, nested children included
    - nested_count: number of nested child blocks absorbed into this record
    - handle: host node, only dereferenced when rendering

    Records compare by identity so the same text appearing twice in a document
    stays two distinct blocks.
    """

    kind: BlockKind
    block_type: str
    text_content: str = ""
    heading_level: int | None = None
    media_kind: MediaKind | None = None
    list_style: ListStyle | None = None
    nested_count: int = 0
    block_id: str | None = None
    handle: object = field(default=None, repr=False)
    estimated_weight: float | None = field(default=None, repr=False)
    # Source that produced estimated_weight; another source recomputes it
    weight_source: object = field(default=None, repr=False)

    @property
    def is_heading(self) -> bool:
        return self.kind is BlockKind.HEADING

    @property
    def is_atomic(self) -> bool:
        return self.kind is BlockKind.ATOMIC_MEDIA

    @property
    def is_empty(self) -> bool:
        """Paragraphs and list items with blank text carry no visible content."""
        if self.kind in (BlockKind.PARAGRAPH, BlockKind.LIST_ITEM):
            return not self.text_content.strip()
        return False


def heading_level_of(block: BlockRecord) -> int:
    """Return the heading level of a block, or 0 when it is not a heading."""
    if block.kind is not BlockKind.HEADING:
        return 0
    return block.heading_level or 1


def placeholder_block(text: str) -> BlockRecord:
    """Synthetic paragraph used when a deck would otherwise be empty."""
    return BlockRecord(kind=BlockKind.PARAGRAPH, block_type="paragraph", text_content=text)


Section = list[BlockRecord]
Slide = list[BlockRecord]


__all__ = [
    "BlockKind",
    "BlockRecord",
    "ListStyle",
    "MediaKind",
    "Section",
    "Slide",
    "heading_level_of",
    "placeholder_block",
]
