"""Standalone HTML deck export.

Renders generated slide contents into a single self-contained HTML file: one
``<section>`` per slide, HTML slides scoped in ``div.doc2slides`` and media
slides carrying their payload as embedded JSON for a client-side renderer.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from jinja2 import ChoiceLoader, DictLoader, Environment, FileSystemLoader, StrictUndefined

from doc2slides.ids import compute_slide_id
from doc2slides.model.content import HtmlSlide, MediaSlide, SlideContent
from doc2slides.transform.html_wrap import rebase_media_srcs, wrap_html

logger = logging.getLogger(__name__)

THEMES: dict[str, dict[str, str]] = {
    "white": {"background": "#ffffff", "color": "#222222", "accent": "#2a76dd"},
    "black": {"background": "#191919", "color": "#ffffff", "accent": "#42affa"},
    "beige": {"background": "#f7f3de", "color": "#333333", "accent": "#8b743d"},
    "sky": {"background": "#f7fbfc", "color": "#333333", "accent": "#3b759e"},
}

DEFAULT_TEMPLATES: dict[str, str] = {
    "deck.html": """
<!doctype html>
<html lang="{{ lang }}">
  <head>
    <meta charset="utf-8">
    <title>{{ title }}</title>
    <style>
      body { margin: 0; background: {{ theme.background }}; color: {{ theme.color }}; }
      .slide { box-sizing: border-box; min-height: 100vh; padding: 4vh 6vw; }
      .slide a { color: {{ theme.accent }}; }
      .doc2slides img { max-width: 100%; height: auto; }
      .media-title { font-weight: bold; margin-bottom: 1em; }
    </style>
  </head>
  <body class="doc2slides-deck theme-{{ theme_name }}">
    <div class="slides">
{{ body|safe }}
    </div>
  </body>
</html>
""".strip(),
    "slide.html": """
<section id="slide-{{ slide_id }}" class="slide slide-{{ kind }}" data-index="{{ index }}">
{% if kind == "html" %}  {{ html|safe }}
{% else %}  <div class="doc2slides media-slide" data-subkind="{{ subkind }}">
    <div class="media-title">{{ title }}</div>
    <script type="application/json" class="media-payload">{{ payload_json|safe }}</script>
  </div>
{% endif %}</section>
""".strip(),
}


@dataclass(frozen=True)
class Templates:
    env: Environment

    def render_deck(self, context: dict[str, Any]) -> str:
        tpl = self.env.get_template("deck.html")
        return str(tpl.render(**context))

    def render_slide(self, context: dict[str, Any]) -> str:
        tpl = self.env.get_template("slide.html")
        return str(tpl.render(**context))


def create_environment(templates_dir: Path | None = None) -> Templates:
    """Build the template environment.

    Templates found in ``templates_dir`` override the built-in defaults.
    """
    defaults = DictLoader(DEFAULT_TEMPLATES)
    loader: ChoiceLoader | DictLoader = defaults
    if templates_dir is not None:
        loader = ChoiceLoader([FileSystemLoader(str(templates_dir)), defaults])
    env = Environment(loader=loader, undefined=StrictUndefined, autoescape=True)
    return Templates(env=env)


def write_default_templates(target_dir: Path) -> None:
    target_dir.mkdir(parents=True, exist_ok=True)
    for name, text in DEFAULT_TEMPLATES.items():
        (target_dir / name).write_text(text, encoding="utf-8")


def _payload_json(payload: dict[str, Any]) -> str:
    # "</" would close the surrounding <script> element early
    return json.dumps(payload, ensure_ascii=False, sort_keys=True).replace("</", "<\\/")


class DeckRenderer:
    """Owns a template environment and renders decks with it."""

    def __init__(
        self,
        templates: Templates | None = None,
        *,
        theme: str = "white",
        asset_base: str | None = None,
        lang: str = "en",
    ) -> None:
        if theme not in THEMES:
            raise ValueError(f"Invalid theme '{theme}'. Valid values: {sorted(THEMES)}")
        self.templates = templates or create_environment()
        self.theme = theme
        self.asset_base = asset_base
        self.lang = lang

    def render_section(self, slide: SlideContent, index: int, deck_id: str) -> str:
        slide_id = compute_slide_id(deck_id, index, slide.block_ids)
        if isinstance(slide, HtmlSlide):
            content = slide.content
            if self.asset_base:
                content = rebase_media_srcs(content, self.asset_base)
            return self.templates.render_slide(
                {"slide_id": slide_id, "index": index, "kind": "html", "html": wrap_html(content)}
            )
        if isinstance(slide, MediaSlide):
            return self.templates.render_slide(
                {
                    "slide_id": slide_id,
                    "index": index,
                    "kind": "media",
                    "subkind": slide.subkind.value,
                    "title": slide.title,
                    "payload_json": _payload_json(slide.payload),
                }
            )
        raise TypeError(f"Unsupported slide content: {type(slide).__name__}")

    def render(
        self, slides: Sequence[SlideContent], *, title: str, deck_id: str | None = None
    ) -> str:
        """Render a full HTML document for the given slides."""
        deck = deck_id or title
        sections = [self.render_section(s, i, deck) for i, s in enumerate(slides)]
        logger.debug("Rendered %d slide sections for deck %r", len(sections), deck)
        return self.templates.render_deck(
            {
                "title": title,
                "lang": self.lang,
                "theme": THEMES[self.theme],
                "theme_name": self.theme,
                "body": "\n".join(sections),
            }
        )


__all__ = [
    "DEFAULT_TEMPLATES",
    "THEMES",
    "DeckRenderer",
    "Templates",
    "create_environment",
    "write_default_templates",
]
