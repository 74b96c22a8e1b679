"""Exception types raised inside the segmentation pipeline.

None of these escape ``generate_slides``: host failures are turned into a
placeholder deck and render failures drop the offending block.
"""

from __future__ import annotations


class HostAccessError(RuntimeError):
    """The host document could not be read."""

    def __init__(self, reason: str, cause: Exception | None = None) -> None:
        self.reason = reason
        self.cause = cause
        message = f"Could not access host document: {reason}"
        if cause is not None:
            message += f" ({cause})"
        super().__init__(message)


class BlockRenderError(RuntimeError):
    """A single block could not be materialized into slide content."""

    def __init__(
        self,
        block_type: str,
        reason: str,
        *,
        block_id: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.block_type = block_type
        self.reason = reason
        self.block_id = block_id
        self.cause = cause
        message = f"Failed to render {block_type} block"
        if block_id:
            message += f" {block_id}"
        message += f": {reason}"
        super().__init__(message)


__all__ = [
    "BlockRenderError",
    "HostAccessError",
]
