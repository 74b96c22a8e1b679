from __future__ import annotations

import re

_WRAP_RE = re.compile(
    r"^\s*<div[^>]*\bclass\s*=\s*(['\"])"  # class attribute start (single or double quote)
    r"[^'\"]*\bdoc2slides\b[^'\"]*\1[^>]*>",
    re.IGNORECASE,
)

_MEDIA_SRC_RE = re.compile(
    r"<(?P<tag>img|video|audio|source)\s+[^>]*?"
    r"(?<![\w-])src=(?P<q>['\"])\s*(?P<src>[^'\"]+)(?P=q)",
    re.IGNORECASE,
)


def wrap_html(content: str) -> str:
    """Ensure slide content is wrapped in a single div.doc2slides.

    Idempotent: if already wrapped at the root, returns content unchanged.
    """

    if _WRAP_RE.search(content or ""):
        return content
    return f"<div class='doc2slides'>{content}</div>"


def rebase_media_srcs(html: str, base_url: str) -> str:
    """Prefix relative media sources with ``base_url``.

    - images/foo.png -> <base_url>/images/foo.png
    - Leave data:, blob:, http(s):, protocol-relative and root-absolute paths unchanged
    - Handle single/double quotes; avoid double-prefixing
    """

    base = base_url.rstrip("/")
    if not base:
        return html

    def _repl(m: re.Match[str]) -> str:
        src = m.group("src")
        if src.startswith(("http://", "https://", "data:", "blob:", "//", "/")):
            return m.group(0)
        if src.startswith(base + "/"):
            return m.group(0)
        start, end = m.span("src")
        offset = m.start(0)
        whole = m.group(0)
        return whole[: start - offset] + f"{base}/{src}" + whole[end - offset :]

    return _MEDIA_SRC_RE.sub(_repl, html)


__all__ = [
    "rebase_media_srcs",
    "wrap_html",
]
