"""Slide content values handed to the presentation runtime."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .blocks import MediaKind


@dataclass(slots=True)
class HtmlSlide:
    content: str
    # Host ids of the blocks on this slide, in order
    block_ids: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"kind": "html", "content": self.content, "block_ids": list(self.block_ids)}


@dataclass(slots=True)
class MediaSlide:
    subkind: MediaKind
    title: str
    # Passed through unchanged to the specialized renderer
    payload: dict[str, Any] = field(default_factory=dict)
    block_ids: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": "media",
            "subkind": self.subkind.value,
            "title": self.title,
            "payload": self.payload,
            "block_ids": list(self.block_ids),
        }


SlideContent = HtmlSlide | MediaSlide


__all__ = [
    "HtmlSlide",
    "MediaSlide",
    "SlideContent",
]
