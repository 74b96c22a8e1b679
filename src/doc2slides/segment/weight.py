"""Visual weight estimation for blocks.

Weight is a coarse proxy for the vertical space a block takes on a rendered
slide. The static heuristic is the portable default; hosts that can measure
rendered elements plug in a ``MeasuredWeightSource`` instead.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Protocol

from doc2slides.model.blocks import BlockKind, BlockRecord
from doc2slides.model.options import SegmentationOptions

logger = logging.getLogger(__name__)


class WeightSource(Protocol):
    def __call__(self, block: BlockRecord) -> float: ...


def estimate_weight(block: BlockRecord, options: SegmentationOptions) -> float:
    """Static weight heuristic, monotonic in text length and nesting."""
    kind = block.kind
    if kind in (BlockKind.HEADING, BlockKind.SEPARATOR):
        # Headings act as split points only, they never force an overflow
        return 0.0
    if kind in (BlockKind.PARAGRAPH, BlockKind.LIST_ITEM, BlockKind.QUOTE):
        return _text_weight(block, options)
    if kind in (BlockKind.CODE_BLOCK, BlockKind.TABLE):
        return _text_weight(block, options) * options.dense_block_factor
    if kind is BlockKind.IMAGE:
        return options.image_weight
    if kind is BlockKind.ATOMIC_MEDIA:
        return options.atomic_weight
    return options.generic_weight


def _text_weight(block: BlockRecord, options: SegmentationOptions) -> float:
    base = 1.0 + len(block.text_content) / options.chars_per_weight_unit
    return base * (1.0 + options.nesting_factor * block.nested_count)


class StaticWeightSource:
    def __init__(self, options: SegmentationOptions) -> None:
        self.options = options

    def __call__(self, block: BlockRecord) -> float:
        return estimate_weight(block, self.options)


class MeasuredWeightSource:
    """Weight from a host measurement callable, falling back to another source.

    ``measure`` receives the block's host handle and returns a weight in the
    same units as the static heuristic, or None when it cannot measure it.
    """

    def __init__(
        self,
        measure: Callable[[object], float | None],
        fallback: WeightSource,
    ) -> None:
        self.measure = measure
        self.fallback = fallback

    def __call__(self, block: BlockRecord) -> float:
        try:
            measured = self.measure(block.handle)
        except Exception as exc:
            logger.debug("Measurement failed for %s block: %s", block.block_type, exc)
            measured = None
        if measured is None or measured < 0:
            return self.fallback(block)
        if block.is_heading:
            return 0.0
        return float(measured)


def block_weight(block: BlockRecord, source: WeightSource) -> float:
    """Weight of a block, cached on the record for the source that computed it."""
    if block.estimated_weight is None or block.weight_source is not source:
        block.estimated_weight = source(block)
        block.weight_source = source
    return block.estimated_weight


def total_weight(blocks: Sequence[BlockRecord], source: WeightSource) -> float:
    return sum(block_weight(block, source) for block in blocks)


__all__ = [
    "MeasuredWeightSource",
    "StaticWeightSource",
    "WeightSource",
    "block_weight",
    "estimate_weight",
    "total_weight",
]
