from __future__ import annotations

__all__ = [
    "MeasuredWeightSource",
    "StaticWeightSource",
    "WeightSource",
    "block_weight",
    "detect_nested_headings",
    "drop_empty_slides",
    "estimate_weight",
    "is_empty_slide",
    "is_manual_separator",
    "isolate_atomic_blocks",
    "split_by_block_count",
    "split_by_headings",
    "split_by_separators",
    "split_by_weight",
    "split_overflow",
    "total_weight",
    "trim_empty_prefix",
]

# Re-export stage functions (explicit alias marks intent for linters)
from .atomic import isolate_atomic_blocks as isolate_atomic_blocks
from .filters import drop_empty_slides as drop_empty_slides
from .filters import is_empty_slide as is_empty_slide
from .filters import trim_empty_prefix as trim_empty_prefix
from .headings import detect_nested_headings as detect_nested_headings
from .headings import split_by_headings as split_by_headings
from .overflow import split_by_block_count as split_by_block_count
from .overflow import split_by_weight as split_by_weight
from .overflow import split_overflow as split_overflow
from .separators import is_manual_separator as is_manual_separator
from .separators import split_by_separators as split_by_separators
from .weight import MeasuredWeightSource as MeasuredWeightSource
from .weight import StaticWeightSource as StaticWeightSource
from .weight import WeightSource as WeightSource
from .weight import block_weight as block_weight
from .weight import estimate_weight as estimate_weight
from .weight import total_weight as total_weight
