"""Document-to-slides pipeline.

Stages run strictly in order, each consuming the previous stage's output:

collect -> trim empty prefix -> separators -> atomic isolation -> headings
-> overflow -> empty-slide filter -> render

``generate_slides`` is total: whatever the host hands over, it returns a
non-empty list of slide contents.
"""

from __future__ import annotations

import html
import logging
from collections.abc import Callable, Sequence

from doc2slides.errors import HostAccessError
from doc2slides.feature_logger import (
    log_error_policy,
    log_segmentation_configuration,
    log_stage_result,
)
from doc2slides.ingest.collector import collect_blocks
from doc2slides.model.blocks import BlockRecord, Slide
from doc2slides.model.content import HtmlSlide, SlideContent
from doc2slides.model.options import SegmentationOptions
from doc2slides.segment import (
    StaticWeightSource,
    WeightSource,
    drop_empty_slides,
    isolate_atomic_blocks,
    split_by_headings,
    split_by_separators,
    split_overflow,
    trim_empty_prefix,
)
from doc2slides.transform.render import BlockRenderer, render_slide
from doc2slides.types import DocumentLike

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, dict[str, int | str]], None] | None


def _safe_emit(on_progress: ProgressCallback, event: str, payload: dict[str, int | str]) -> None:
    if on_progress is None:
        return
    from contextlib import suppress

    with suppress(Exception):
        on_progress(event, payload)


def segment_blocks(
    blocks: Sequence[BlockRecord],
    options: SegmentationOptions | None = None,
    *,
    weight_source: WeightSource | None = None,
    on_progress: ProgressCallback = None,
) -> list[Slide]:
    """Partition collected blocks into slides.

    Always returns at least one slide; an empty document yields the
    placeholder slide.
    """
    opts = options or SegmentationOptions()
    source = weight_source or StaticWeightSource(opts)

    trimmed = trim_empty_prefix(blocks)
    sections = split_by_separators(trimmed, opts.break_glyphs)
    log_stage_result("separators", len(trimmed), len(sections))
    _safe_emit(on_progress, "segment:sections", {"sections": len(sections)})

    slides: list[Slide] = []
    for section in sections:
        for run in isolate_atomic_blocks(section):
            if len(run) == 1 and run[0].is_atomic:
                slides.append(run)
                continue
            for group in split_by_headings(run):
                slides.extend(split_overflow(group, opts, source))
    log_stage_result("overflow", len(sections), len(slides))

    result = drop_empty_slides(slides, placeholder_text=opts.empty_document_text)
    log_stage_result("empty-filter", len(slides), len(result))
    _safe_emit(on_progress, "segment:slides", {"slides": len(result)})
    return result


def _text_slide(text: str) -> HtmlSlide:
    return HtmlSlide(content=f"<p>{html.escape(text)}</p>")


def render_slides(
    slides: Sequence[Slide],
    options: SegmentationOptions | None = None,
    *,
    block_renderer: BlockRenderer | None = None,
) -> list[SlideContent]:
    """Render slides, dropping those where no block could be materialized."""
    opts = options or SegmentationOptions()
    contents: list[SlideContent] = []
    for index, slide in enumerate(slides):
        content = render_slide(slide, block_renderer)
        if content is None:
            log_error_policy("render", "empty_slide", "skip", f"slide {index}")
            continue
        contents.append(content)
    if not contents:
        return [_text_slide(opts.empty_slide_text)]
    return contents


def generate_slides(
    document: DocumentLike | None,
    options: SegmentationOptions | None = None,
    *,
    block_renderer: BlockRenderer | None = None,
    weight_source: WeightSource | None = None,
    on_progress: ProgressCallback = None,
) -> list[SlideContent]:
    """Turn a host document into an ordered, non-empty list of slide contents.

    Args:
        document: Block list, ``{"blocks": [...]}`` mapping or editor exposing ``document``
        options: Segmentation options (defaults when None)
        block_renderer: Optional host hook producing HTML for a block
        weight_source: Optional weight source replacing the static heuristic
        on_progress: Optional progress callback ``(event, payload)``

    Returns:
        Slide contents in presentation order; never empty and never raises
    """
    opts = options or SegmentationOptions()

    try:
        log_segmentation_configuration(opts)
        _safe_emit(on_progress, "segment:start", {"overflow_mode": opts.overflow_mode.value})
        blocks = collect_blocks(document)
        slides = segment_blocks(
            blocks, opts, weight_source=weight_source, on_progress=on_progress
        )
        contents = render_slides(slides, opts, block_renderer=block_renderer)
    except HostAccessError as exc:
        log_error_policy("host", "unreachable", "placeholder", str(exc))
        return [_text_slide(opts.host_error_text)]
    except Exception:
        logger.exception("Slide generation failed; returning placeholder deck")
        return [_text_slide(opts.host_error_text)]

    _safe_emit(on_progress, "render:done", {"slides": len(contents)})
    return contents


__all__ = [
    "ProgressCallback",
    "generate_slides",
    "render_slides",
    "segment_blocks",
]
