from __future__ import annotations

import logging
from collections.abc import Sequence

from doc2slides.feature_logger import log_stage_decision
from doc2slides.model.blocks import BlockKind, BlockRecord, Slide, heading_level_of
from doc2slides.model.options import OverflowMode, SegmentationOptions

from .weight import StaticWeightSource, WeightSource, block_weight, total_weight

logger = logging.getLogger(__name__)

# Minimum room (in blocks) an H3 needs for an early break in block-count mode
MIN_BLOCKS_FOR_H3 = 3


def _has_body(group: Sequence[BlockRecord]) -> bool:
    return any(not block.is_heading for block in group)


def split_by_weight(
    section: Sequence[BlockRecord], budget: float, source: WeightSource
) -> list[Slide]:
    """Greedy weighted packing of a section into slides within ``budget``.

    - a block heavier than the budget is emitted alone (headings waiting for it
      stay attached), never truncated
    - a block that would overflow the running slide starts a new one
    - before an H3 (or deeper), break early when the heading's first block
      would not fit on the running slide
    - trailing headings of a flushed slide move to the next slide
    """
    blocks = list(section)
    if not blocks:
        return []
    if total_weight(blocks, source) <= budget:
        return [blocks]

    slides: list[Slide] = []
    current: Slide = []
    running = 0.0

    def flush() -> None:
        nonlocal current, running
        if not _has_body(current):
            # Headings only: keep them for whatever comes next
            return
        cut = len(current)
        while current[cut - 1].is_heading:
            cut -= 1
        slides.append(current[:cut])
        current = current[cut:]
        running = total_weight(current, source)

    for index, block in enumerate(blocks):
        weight = block_weight(block, source)

        if weight > budget:
            log_stage_decision(
                "overflow", "oversized block", {"type": block.block_type, "weight": f"{weight:.2f}"}
            )
            flush()
            slides.append([*current, block])
            current = []
            running = 0.0
            continue

        if current and running + weight > budget:
            flush()
        elif heading_level_of(block) >= 3 and _has_body(current):
            next_weight = (
                block_weight(blocks[index + 1], source) if index + 1 < len(blocks) else 0.0
            )
            if running + weight + next_weight > budget:
                flush()

        current.append(block)
        running += weight

    if current:
        slides.append(current)
    return slides


def _good_break_before(blocks: Sequence[BlockRecord], index: int) -> bool:
    """A break before ``blocks[index]`` does not cut through a list."""
    if index <= 0 or index >= len(blocks):
        return index >= len(blocks)
    if heading_level_of(blocks[index]) > 0:
        return True
    return blocks[index - 1].kind is not BlockKind.LIST_ITEM


def split_by_block_count(section: Sequence[BlockRecord], max_blocks: int) -> list[Slide]:
    """Split a section into slides of at most ``max_blocks`` blocks.

    Prefers breaking before an H3 once the slide is nearly full, and avoids
    breaking inside a list when a nearby break point exists.
    """
    blocks = list(section)
    if len(blocks) <= max_blocks:
        return [blocks] if blocks else []

    slides: list[Slide] = []
    current: Slide = []
    for index, block in enumerate(blocks):
        if (
            heading_level_of(block) == 3
            and current
            and len(current) >= max_blocks - MIN_BLOCKS_FOR_H3
        ):
            slides.append(current)
            current = [block]
            continue

        current.append(block)
        if len(current) < max_blocks:
            continue

        upcoming = [*current, *blocks[index + 1 : index + 2]]
        if _good_break_before(upcoming, len(current)):
            slides.append(current)
            current = []
            continue

        # Look back a few blocks for a break point outside the list
        cut = len(current)
        for candidate in range(len(current) - 1, max(0, len(current) - MIN_BLOCKS_FOR_H3) - 1, -1):
            if candidate > 0 and _good_break_before(current, candidate):
                cut = candidate
                break
        slides.append(current[:cut])
        current = current[cut:]

    if current:
        slides.append(current)
    return slides


def split_overflow(
    section: Sequence[BlockRecord],
    options: SegmentationOptions,
    source: WeightSource | None = None,
) -> list[Slide]:
    """Split a heading section that exceeds the per-slide budget.

    Idempotent: applying it again to any of its output slides returns that
    slide unchanged.
    """
    if options.overflow_mode is OverflowMode.BLOCK_COUNT:
        return split_by_block_count(section, options.max_blocks_per_slide)
    return split_by_weight(
        section, options.max_weight_per_slide, source or StaticWeightSource(options)
    )


__all__ = [
    "MIN_BLOCKS_FOR_H3",
    "split_by_block_count",
    "split_by_weight",
    "split_overflow",
]
