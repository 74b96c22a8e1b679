"""doc2slides - segment rich-text editor documents into presentation slides."""

from __future__ import annotations

__version__ = "0.3.0"

__all__ = [
    "HtmlSlide",
    "MediaSlide",
    "SegmentationOptions",
    "SlideContent",
    "__version__",
    "generate_slides",
]

from .model.content import HtmlSlide as HtmlSlide
from .model.content import MediaSlide as MediaSlide
from .model.content import SlideContent as SlideContent
from .model.options import SegmentationOptions as SegmentationOptions
from .pipeline import generate_slides as generate_slides
