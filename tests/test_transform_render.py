from __future__ import annotations

import logging

import pytest
from helpers import code, h, hr, image, li, p, quote, records, spreadsheet, table, text, whiteboard

from doc2slides.model.blocks import BlockKind, BlockRecord, MediaKind
from doc2slides.model.content import HtmlSlide, MediaSlide
from doc2slides.transform.render import (
    render_block_html,
    render_blocks,
    render_inline,
    render_slide,
)


def test_render_inline_escapes_and_styles() -> None:
    content = [
        text("<b>", bold=True),
        text("it", italic=True, underline=True),
        text("x", code=True),
        text("red", textColor="red"),
        text("bad", textColor='"><script>'),
    ]
    out = render_inline(content)
    assert "<strong>&lt;b&gt;</strong>" in out
    assert "<u><em>it</em></u>" in out
    assert "<code>x</code>" in out
    assert '<span data-text-color="red">red</span>' in out
    assert "<script>" not in out
    assert out.endswith("bad")


def test_render_inline_links() -> None:
    safe = {"type": "link", "href": "https://example.com?a=1&b=2", "content": [text("site")]}
    unsafe = {"type": "link", "href": "javascript:alert(1)", "content": [text("click")]}
    out = render_inline([safe, " ", unsafe])
    assert '<a href="https://example.com?a=1&amp;b=2">site</a>' in out
    assert "javascript" not in out
    assert out.endswith(" click")


def test_headings_paragraphs_and_quotes() -> None:
    heading, para, aligned, q = records(
        [h(2, "Title"), p("Body"), p("Mid", textAlignment="center"), quote("Said")]
    )
    assert render_block_html(heading) == "<h2>Title</h2>"
    assert render_block_html(para) == "<p>Body</p>"
    assert render_block_html(aligned) == '<p style="text-align: center">Mid</p>'
    assert render_block_html(q) == "<blockquote>Said</blockquote>"


def test_heading_level_is_clamped() -> None:
    (heading,) = records([h(9, "Deep")])
    assert render_block_html(heading) == "<h6>Deep</h6>"


def test_consecutive_list_items_are_bracketed_by_style() -> None:
    blocks = records(
        [li("a"), li("b"), li("1", style="numbered"), p("gap"), li("done", style="check")]
    )
    out = render_blocks(blocks)
    assert out == (
        "<ul><li>a</li><li>b</li></ul>"
        "<ol><li>1</li></ol>"
        "<p>gap</p>"
        '<ul class="checklist"><li data-checked="false">done</li></ul>'
    )


def test_nested_list_children_are_rendered() -> None:
    (block,) = records([li("parent", children=[li("child")])])
    assert render_blocks([block]) == "<ul><li>parent<ul><li>child</li></ul></li></ul>"


def test_paragraph_children_render_in_block_group() -> None:
    node = p("outer")
    node["children"] = [p("inner")]
    (block,) = records([node])
    assert render_block_html(block) == '<p>outer</p><div class="bn-block-group"><p>inner</p></div>'


def test_code_table_and_separator() -> None:
    snippet, grid, rule = records([code("a < b", language="python"), table([["x", "y"]]), hr()])
    assert render_block_html(snippet) == (
        '<pre><code class="language-python">a &lt; b</code></pre>'
    )
    assert render_block_html(grid) == "<table><tbody><tr><td>x</td><td>y</td></tr></tbody></table>"
    assert render_block_html(rule) == "<hr>"


def test_code_with_unsafe_language_drops_class() -> None:
    (snippet,) = records([code("x", language='py" onclick="x')])
    assert render_block_html(snippet) == "<pre><code>x</code></pre>"


def test_image_with_caption() -> None:
    (img,) = records([image("media/a.png", caption="A & B")])
    assert render_block_html(img) == (
        '<figure><img src="media/a.png" alt="A &amp; B">'
        "<figcaption>A &amp; B</figcaption></figure>"
    )


def test_failing_blocks_are_skipped_with_warning(caplog: pytest.LogCaptureFixture) -> None:
    blocks = records([p("keep"), image(url=""), image(url="javascript:alert(1)"), p("also")])
    with caplog.at_level(logging.WARNING, logger="doc2slides"):
        out = render_blocks(blocks)
    assert out == "<p>keep</p><p>also</p>"
    assert "missing url" in caplog.text
    assert "unsupported url" in caplog.text


def test_custom_block_renderer_is_used_verbatim() -> None:
    blocks = records([p("a"), li("b")])

    def renderer(block: BlockRecord) -> str | None:
        if block.kind is BlockKind.PARAGRAPH:
            return "<p class='host'>a</p>"
        return None

    assert render_blocks(blocks, renderer) == "<p class='host'>a</p><ul><li>b</li></ul>"


def test_custom_block_renderer_failure_omits_block() -> None:
    blocks = records([p("a"), p("b")])

    def renderer(block: BlockRecord) -> str | None:
        if block.text_content == "a":
            raise RuntimeError("clone failed")
        return None

    assert render_blocks(blocks, renderer) == "<p>b</p>"


def test_render_slide_html_and_block_ids() -> None:
    blocks = records([h(1, "T"), p("x")])
    slide = render_slide(blocks)
    assert isinstance(slide, HtmlSlide)
    assert slide.content == "<h1>T</h1><p>x</p>"
    assert slide.block_ids == [b.block_id for b in blocks]


def test_render_slide_media_singletons() -> None:
    elements = [{"id": "e1", "type": "rect"}, {"id": "e2", "type": "rect", "isDeleted": True}]
    (board,) = records([whiteboard(elements, title="Plan")])
    slide = render_slide([board])
    assert isinstance(slide, MediaSlide)
    assert slide.subkind is MediaKind.WHITEBOARD
    assert slide.title == "Plan"
    assert slide.payload["elements"] == [{"id": "e1", "type": "rect"}]

    (sheet,) = records([spreadsheet(title="")])
    media = render_slide([sheet])
    assert isinstance(media, MediaSlide)
    assert media.title == "Untitled Spreadsheet"
    assert media.payload["data"] == [["1"], ["2"]]


def test_render_slide_returns_none_when_nothing_renders() -> None:
    (broken,) = records([image(url="")])
    assert render_slide([broken]) is None


def test_placeholder_block_without_handle_renders_text() -> None:
    block = BlockRecord(kind=BlockKind.PARAGRAPH, block_type="paragraph", text_content="<Empty>")
    slide = render_slide([block])
    assert isinstance(slide, HtmlSlide)
    assert slide.content == "<p>&lt;Empty&gt;</p>"
    assert slide.block_ids == []


@pytest.mark.parametrize(
    "node",
    [code("x = 1"), table([["x"]]), image(), whiteboard(title="Board")],
    ids=["code", "table", "image", "whiteboard"],
)
def test_nested_children_follow_dense_and_media_blocks(node: dict[str, object]) -> None:
    node["children"] = [p("nested note")]
    (block,) = records([node])
    out = render_block_html(block)
    assert out.endswith('<div class="bn-block-group"><p>nested note</p></div>')
    assert out.count("nested note") == 1


def test_code_block_children_stay_outside_pre() -> None:
    node = code("x = 1")
    node["children"] = [p("nested note")]
    (block,) = records([node])
    assert render_block_html(block) == (
        '<pre><code class="language-python">x = 1</code></pre>'
        '<div class="bn-block-group"><p>nested note</p></div>'
    )


def test_custom_rendered_list_items_are_grouped() -> None:
    blocks = records([li("a"), li("b"), p("c")])

    def renderer(block: BlockRecord) -> str | None:
        if block.kind is BlockKind.LIST_ITEM:
            return f"<li>{block.text_content}</li>"
        return None

    assert render_blocks(blocks, renderer) == "<ul><li>a</li><li>b</li></ul><p>c</p>"


def test_atomic_block_without_media_kind_renders_as_diagram() -> None:
    block = BlockRecord(
        kind=BlockKind.ATOMIC_MEDIA, block_type="embed", handle={"type": "embed", "props": {}}
    )
    slide = render_slide([block])
    assert isinstance(slide, MediaSlide)
    assert slide.subkind is MediaKind.DIAGRAM
    assert slide.title == "Diagram"
    assert slide.payload == {"source": ""}
