"""Segmentation options for doc2slides.

Every numeric threshold used by the pipeline lives here so hosts can tune the
overflow heuristics without touching the stages themselves. Defaults match the
behavior of the editor's "Present" action.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class OverflowMode(Enum):
    """Which budget governs splitting of long sections."""

    WEIGHT = "weight"  # Estimated visual weight per slide (default)
    BLOCK_COUNT = "blocks"  # Plain block count per slide


DEFAULT_BREAK_GLYPHS: tuple[str, ...] = ("---", "***", "___", "—", "- - -")


@dataclass
class SegmentationOptions:
    """Tunable parameters for slide segmentation.

    ``max_weight_per_slide`` governs ``OverflowMode.WEIGHT`` and
    ``max_blocks_per_slide`` governs ``OverflowMode.BLOCK_COUNT``.
    """

    max_weight_per_slide: float = 20.0
    max_blocks_per_slide: int = 15
    overflow_mode: OverflowMode = OverflowMode.WEIGHT

    # Weight heuristic: (1 + chars / chars_per_weight_unit) * (1 + nesting_factor * children)
    chars_per_weight_unit: float = 200.0
    nesting_factor: float = 0.3
    dense_block_factor: float = 1.5
    image_weight: float = 2.0
    generic_weight: float = 1.0
    atomic_weight: float = 2.0

    break_glyphs: tuple[str, ...] = DEFAULT_BREAK_GLYPHS

    empty_document_text: str = "Empty Canvas"
    empty_slide_text: str = "Empty slide"
    host_error_text: str = "Error: Could not access document"

    def __post_init__(self) -> None:
        if self.max_weight_per_slide <= 0:
            raise ValueError(
                f"max_weight_per_slide must be positive, got {self.max_weight_per_slide}"
            )
        if self.max_blocks_per_slide < 1:
            raise ValueError(
                f"max_blocks_per_slide must be at least 1, got {self.max_blocks_per_slide}"
            )
        if self.chars_per_weight_unit <= 0:
            raise ValueError(
                f"chars_per_weight_unit must be positive, got {self.chars_per_weight_unit}"
            )
        if self.nesting_factor < 0 or self.dense_block_factor < 1:
            raise ValueError("nesting_factor must be >= 0 and dense_block_factor >= 1")
        self.break_glyphs = tuple(self.break_glyphs)
        if not all(isinstance(glyph, str) and glyph.strip() for glyph in self.break_glyphs):
            raise ValueError(f"break_glyphs must be non-blank strings, got {self.break_glyphs!r}")

    @classmethod
    def from_cli(
        cls,
        *,
        overflow: str = "weight",
        max_weight: float = 20.0,
        max_blocks: int = 15,
    ) -> SegmentationOptions:
        """Build SegmentationOptions from CLI argument values.

        Args:
            overflow: Overflow mode ("weight", "blocks")
            max_weight: Maximum visual weight per slide
            max_blocks: Maximum number of blocks per slide

        Returns:
            SegmentationOptions instance with mapped enum values

        Raises:
            ValueError: If any argument has an invalid value
        """
        try:
            overflow_mode = OverflowMode(overflow)
        except ValueError as exc:
            valid_values = [mode.value for mode in OverflowMode]
            raise ValueError(
                f"Invalid overflow mode '{overflow}'. Valid values: {valid_values}"
            ) from exc

        return cls(
            max_weight_per_slide=float(max_weight),
            max_blocks_per_slide=int(max_blocks),
            overflow_mode=overflow_mode,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization/logging."""
        return {
            "max_weight_per_slide": self.max_weight_per_slide,
            "max_blocks_per_slide": self.max_blocks_per_slide,
            "overflow_mode": self.overflow_mode.value,
            "chars_per_weight_unit": self.chars_per_weight_unit,
            "nesting_factor": self.nesting_factor,
            "dense_block_factor": self.dense_block_factor,
            "break_glyphs": list(self.break_glyphs),
        }

    def __repr__(self) -> str:
        return (
            f"SegmentationOptions("
            f"overflow_mode={self.overflow_mode.value}, "
            f"max_weight_per_slide={self.max_weight_per_slide}, "
            f"max_blocks_per_slide={self.max_blocks_per_slide}"
            f")"
        )


__all__ = [
    "DEFAULT_BREAK_GLYPHS",
    "OverflowMode",
    "SegmentationOptions",
]
