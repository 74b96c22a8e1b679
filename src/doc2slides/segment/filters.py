from __future__ import annotations

import logging
from collections.abc import Sequence

from doc2slides.model.blocks import BlockRecord, Slide, placeholder_block

logger = logging.getLogger(__name__)


def trim_empty_prefix(blocks: Sequence[BlockRecord]) -> list[BlockRecord]:
    """Drop the leading run of empty blocks so the deck never opens blank.

    Interior and trailing empties are kept; they are handled per slide.
    """
    start = 0
    while start < len(blocks) and blocks[start].is_empty:
        start += 1
    if start:
        logger.debug("Trimmed %d leading empty blocks", start)
    return list(blocks[start:])


def is_empty_slide(blocks: Sequence[BlockRecord]) -> bool:
    return all(block.is_empty for block in blocks)


def drop_empty_slides(slides: Sequence[Slide], *, placeholder_text: str) -> list[Slide]:
    """Remove slides made only of empty blocks.

    Returns a single placeholder slide when nothing survives.
    """
    kept = [list(slide) for slide in slides if not is_empty_slide(slide)]
    dropped = len(slides) - len(kept)
    if dropped:
        logger.debug("Dropped %d empty slides", dropped)
    if not kept:
        return [[placeholder_block(placeholder_text)]]
    return kept


__all__ = [
    "drop_empty_slides",
    "is_empty_slide",
    "trim_empty_prefix",
]
