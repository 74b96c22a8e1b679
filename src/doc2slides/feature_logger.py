"""Centralized decision logging for the doc2slides pipeline.

Stages call into these helpers instead of formatting their own messages so the
log output stays uniform when debugging why a document was split the way it was.
"""

from __future__ import annotations

import logging
from typing import Any

from doc2slides.model.options import SegmentationOptions

logger = logging.getLogger(__name__)


def log_segmentation_configuration(options: SegmentationOptions) -> None:
    """Log the segmentation configuration at debug level.

    Args:
        options: Segmentation options to log
    """
    logger.debug("Segmentation configuration:")
    logger.debug("  Overflow mode: %s", options.overflow_mode.value)
    logger.debug("  Max weight per slide: %.2f", options.max_weight_per_slide)
    logger.debug("  Max blocks per slide: %d", options.max_blocks_per_slide)
    logger.debug("  Break glyphs: %s", ", ".join(options.break_glyphs))


def log_stage_result(stage: str, groups_in: int, groups_out: int) -> None:
    """Log how many groups a stage received and produced.

    Args:
        stage: Name of the stage (e.g., "separators", "headings")
        groups_in: Number of blocks or sections handed to the stage
        groups_out: Number of sections or slides the stage produced
    """
    logger.debug("%s: %d -> %d", stage, groups_in, groups_out)


def log_stage_decision(stage: str, decision: str, context: dict[str, Any] | None = None) -> None:
    """Log a segmentation decision.

    Args:
        stage: Name of the stage making the decision
        decision: The decision made (e.g., "nested", "oversized block")
        context: Optional context information
    """
    if context:
        context_str = ", ".join(f"{k}={v}" for k, v in context.items())
        logger.debug("%s: %s (%s)", stage, decision, context_str)
    else:
        logger.debug("%s: %s", stage, decision)


def log_error_policy(
    feature: str, error_type: str, action: str, details: str | None = None
) -> None:
    """Log error handling policy decisions.

    Args:
        feature: Name of the feature encountering the error (e.g., "payload", "render")
        error_type: Type of error (e.g., "invalid_json", "missing_source")
        action: Action taken (e.g., "default", "skip", "placeholder")
        details: Optional additional details
    """
    if details:
        logger.warning("%s error policy: %s -> %s (%s)", feature, error_type, action, details)
    else:
        logger.warning("%s error policy: %s -> %s", feature, error_type, action)


__all__ = [
    "log_error_policy",
    "log_segmentation_configuration",
    "log_stage_decision",
    "log_stage_result",
]
