"""Serialization of slides into renderable content.

Text slides become self-contained HTML fragments; a slide holding a single
atomic media block becomes a structured payload for the matching renderer.
Blocks that cannot be materialized are skipped, never the whole slide.
"""

from __future__ import annotations

import html
import logging
import re
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from doc2slides.errors import BlockRenderError
from doc2slides.feature_logger import log_error_policy
from doc2slides.ingest.collector import make_record
from doc2slides.ingest.host import (
    extract_text,
    node_children,
    node_content,
    node_props,
    table_rows,
)
from doc2slides.ingest.payload import media_payload, media_title
from doc2slides.model.blocks import BlockKind, BlockRecord, ListStyle, MediaKind
from doc2slides.model.content import HtmlSlide, MediaSlide, SlideContent

logger = logging.getLogger(__name__)

# Host hook (e.g. DOM cloning); returns HTML for a block or None to use ours.
# List items must come back as bare <li> elements; the list wrapper is added here.
BlockRenderer = Callable[[BlockRecord], str | None]

_LIST_TAGS: dict[ListStyle, tuple[str, str]] = {
    ListStyle.BULLET: ("<ul>", "</ul>"),
    ListStyle.NUMBERED: ("<ol>", "</ol>"),
    ListStyle.CHECK: ('<ul class="checklist">', "</ul>"),
}

_ALIGNMENTS = frozenset({"left", "center", "right", "justify"})
_LANGUAGE_RE = re.compile(r"^[A-Za-z0-9_+#.-]{1,40}$")
_COLOR_RE = re.compile(r"^[A-Za-z]{1,20}$|^#[0-9A-Fa-f]{3,8}$")
_SAFE_URL_RE = re.compile(r"^(https?:|data:image/|blob:|/|\./|\.\./|[\w.-]+(/|$))", re.IGNORECASE)


def _safe_url(url: str) -> bool:
    return bool(_SAFE_URL_RE.match(url.strip()))


def _styled_text(text: str, styles: Mapping[str, Any]) -> str:
    out = html.escape(text)
    if styles.get("code"):
        out = f"<code>{out}</code>"
    if styles.get("bold"):
        out = f"<strong>{out}</strong>"
    if styles.get("italic"):
        out = f"<em>{out}</em>"
    if styles.get("underline"):
        out = f"<u>{out}</u>"
    if styles.get("strike"):
        out = f"<s>{out}</s>"
    for key, attr in (
        ("textColor", "data-text-color"),
        ("backgroundColor", "data-background-color"),
    ):
        color = styles.get(key)
        if isinstance(color, str) and color != "default" and _COLOR_RE.match(color):
            out = f'<span {attr}="{color}">{out}</span>'
    return out


def render_inline(content: Any) -> str:
    """Serialize inline content (strings, styled text, links) to escaped HTML."""
    if not content:
        return ""
    if isinstance(content, str):
        return html.escape(content)
    if isinstance(content, Mapping):
        return render_inline([content])
    if not isinstance(content, Sequence):
        return ""

    parts: list[str] = []
    for item in content:
        if isinstance(item, str):
            parts.append(html.escape(item))
        elif isinstance(item, Mapping):
            kind = item.get("type")
            if kind == "text":
                text = item.get("text")
                styles = item.get("styles")
                parts.append(
                    _styled_text(
                        text if isinstance(text, str) else "",
                        styles if isinstance(styles, Mapping) else {},
                    )
                )
            elif kind == "link":
                inner = render_inline(item.get("content") or [])
                href = item.get("href")
                if isinstance(href, str) and href and _safe_url(href):
                    parts.append(f'<a href="{html.escape(href)}">{inner}</a>')
                else:
                    parts.append(inner)
    return "".join(parts)


def _block_inline(block: BlockRecord) -> str:
    if block.handle is None:
        return html.escape(block.text_content)
    return render_inline(node_content(block.handle))


def _align_attr(block: BlockRecord) -> str:
    alignment = node_props(block.handle).get("textAlignment")
    if isinstance(alignment, str) and alignment in _ALIGNMENTS and alignment != "left":
        return f' style="text-align: {alignment}"'
    return ""


def _children_html(block: BlockRecord, block_renderer: BlockRenderer | None) -> str:
    if block.handle is None:
        return ""
    children = [make_record(child) for child in node_children(block.handle)]
    return render_blocks(children, block_renderer) if children else ""


def _media_html(block: BlockRecord) -> str:
    props = node_props(block.handle)
    url = props.get("url")
    if not isinstance(url, str) or not url.strip():
        raise BlockRenderError(block.block_type, "missing url", block_id=block.block_id)
    if not _safe_url(url):
        raise BlockRenderError(block.block_type, "unsupported url", block_id=block.block_id)

    src = html.escape(url.strip())
    caption = props.get("caption")
    caption = caption if isinstance(caption, str) else ""
    name = props.get("name")
    name = name if isinstance(name, str) else ""

    if block.block_type == "video":
        element = f'<video controls src="{src}"></video>'
    elif block.block_type == "audio":
        element = f'<audio controls src="{src}"></audio>'
    elif block.block_type == "file":
        element = f'<a href="{src}" download>{html.escape(name or caption or url)}</a>'
    else:
        width = props.get("previewWidth")
        width_attr = ""
        if isinstance(width, int | float) and width > 0:
            width_attr = f' width="{int(width)}"'
        alt = html.escape(caption or name)
        element = f'<img src="{src}" alt="{alt}"{width_attr}>'

    if caption:
        return f"<figure>{element}<figcaption>{html.escape(caption)}</figcaption></figure>"
    return f"<figure>{element}</figure>"


def _table_html(block: BlockRecord) -> str:
    rows = table_rows(node_content(block.handle))
    if not rows:
        raise BlockRenderError(block.block_type, "table has no rows", block_id=block.block_id)
    body = "".join(
        "<tr>" + "".join(f"<td>{render_inline(cell)}</td>" for cell in row) + "</tr>"
        for row in rows
    )
    return f"<table><tbody>{body}</tbody></table>"


def _code_html(block: BlockRecord) -> str:
    language = node_props(block.handle).get("language")
    code = extract_text(node_content(block.handle)) if block.handle is not None else ""
    if isinstance(language, str) and _LANGUAGE_RE.match(language):
        return f'<pre><code class="language-{language}">{html.escape(code)}</code></pre>'
    return f"<pre><code>{html.escape(code)}</code></pre>"


def render_block_html(block: BlockRecord, block_renderer: BlockRenderer | None = None) -> str:
    """Serialize one block; list items come back as bare ``<li>`` elements.

    Raises:
        BlockRenderError: If the block cannot be materialized
    """
    kind = block.kind
    children = _children_html(block, block_renderer)
    nested = f'<div class="bn-block-group">{children}</div>' if children else ""

    if kind is BlockKind.HEADING:
        level = min(block.heading_level or 1, 6)
        return f"<h{level}{_align_attr(block)}>{_block_inline(block)}</h{level}>{nested}"
    if kind is BlockKind.PARAGRAPH:
        return f"<p{_align_attr(block)}>{_block_inline(block)}</p>{nested}"
    if kind is BlockKind.LIST_ITEM:
        checked = ""
        if block.list_style is ListStyle.CHECK:
            is_checked = bool(node_props(block.handle).get("checked"))
            checked = f' data-checked="{str(is_checked).lower()}"'
        return f"<li{checked}>{_block_inline(block)}{children}</li>"
    if kind is BlockKind.QUOTE:
        return f"<blockquote>{_block_inline(block)}</blockquote>{nested}"
    if kind is BlockKind.CODE_BLOCK:
        return _code_html(block) + nested
    if kind is BlockKind.TABLE:
        return _table_html(block) + nested
    if kind is BlockKind.IMAGE:
        return _media_html(block) + nested
    if kind is BlockKind.ATOMIC_MEDIA:
        title = html.escape(media_title(block))
        return (
            f'<div data-content-type="{html.escape(block.block_type)}" '
            f'data-title="{title}"></div>{nested}'
        )
    if kind is BlockKind.SEPARATOR:
        return "<hr>"
    return (
        f'<div data-content-type="{html.escape(block.block_type)}">'
        f"{_block_inline(block)}{children}</div>"
    )


def _render_fragment(block: BlockRecord, block_renderer: BlockRenderer | None) -> tuple[str, bool]:
    """Return (fragment, is_list_item) for a block."""
    if block_renderer is not None and block.handle is not None:
        try:
            custom = block_renderer(block)
        except Exception as exc:
            raise BlockRenderError(
                block.block_type, "host renderer failed", block_id=block.block_id, cause=exc
            ) from exc
        if custom is not None:
            return custom, block.kind is BlockKind.LIST_ITEM
    try:
        fragment = render_block_html(block, block_renderer)
    except BlockRenderError:
        raise
    except Exception as exc:
        raise BlockRenderError(
            block.block_type, "unexpected error", block_id=block.block_id, cause=exc
        ) from exc
    return fragment, block.kind is BlockKind.LIST_ITEM


def render_blocks(
    blocks: Sequence[BlockRecord], block_renderer: BlockRenderer | None = None
) -> str:
    """Serialize blocks in order, bracketing consecutive list items into lists."""
    parts: list[str] = []
    open_style: ListStyle | None = None

    for block in blocks:
        try:
            fragment, is_list_item = _render_fragment(block, block_renderer)
        except BlockRenderError as exc:
            log_error_policy("render", "block_omitted", "skip", str(exc))
            continue

        style = (block.list_style or ListStyle.BULLET) if is_list_item else None
        if style is not open_style:
            if open_style is not None:
                parts.append(_LIST_TAGS[open_style][1])
            if style is not None:
                parts.append(_LIST_TAGS[style][0])
            open_style = style
        parts.append(fragment)

    if open_style is not None:
        parts.append(_LIST_TAGS[open_style][1])
    return "".join(parts)


def _block_ids(slide: Sequence[BlockRecord]) -> list[str]:
    return [block.block_id for block in slide if block.block_id]


def render_slide(
    slide: Sequence[BlockRecord], block_renderer: BlockRenderer | None = None
) -> SlideContent | None:
    """Render one slide, or return None when none of its blocks could be rendered."""
    if len(slide) == 1 and slide[0].is_atomic:
        block = slide[0]
        return MediaSlide(
            subkind=block.media_kind or MediaKind.DIAGRAM,
            title=media_title(block),
            payload=media_payload(block),
            block_ids=_block_ids(slide),
        )

    content = render_blocks(slide, block_renderer)
    if not content:
        return None
    return HtmlSlide(content=content, block_ids=_block_ids(slide))


__all__ = [
    "BlockRenderer",
    "render_block_html",
    "render_blocks",
    "render_inline",
    "render_slide",
]
