from __future__ import annotations

from collections.abc import Iterable, Sequence

from doc2slides.model.blocks import BlockKind, BlockRecord, Section
from doc2slides.model.options import DEFAULT_BREAK_GLYPHS


def is_manual_separator(
    block: BlockRecord, glyphs: Iterable[str] = DEFAULT_BREAK_GLYPHS
) -> bool:
    """Divider blocks, or paragraphs whose only text is a break glyph like ``---``."""
    if block.kind is BlockKind.SEPARATOR:
        return True
    if block.kind is BlockKind.PARAGRAPH:
        return block.text_content.strip() in tuple(glyphs)
    return False


def split_by_separators(
    blocks: Sequence[BlockRecord], glyphs: Iterable[str] = DEFAULT_BREAK_GLYPHS
) -> list[Section]:
    """Split blocks into sections at manual separators.

    Separators are consumed. Input made only of separators yields no sections.
    """
    glyph_set = tuple(glyphs)
    sections: list[Section] = []
    current: Section = []
    for block in blocks:
        if is_manual_separator(block, glyph_set):
            if current:
                sections.append(current)
                current = []
        else:
            current.append(block)
    if current:
        sections.append(current)
    return sections


__all__ = [
    "is_manual_separator",
    "split_by_separators",
]
