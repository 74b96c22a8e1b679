from __future__ import annotations

from doc2slides.transform.html_wrap import rebase_media_srcs, wrap_html


def test_wrap_html_idempotent() -> None:
    raw = "<p>hello</p>"
    wrapped = wrap_html(raw)
    assert wrapped.startswith("<div class='doc2slides'>")
    assert wrap_html(wrapped) == wrapped
    assert wrap_html('<div class="media-slide doc2slides">x</div>').count("<div") == 1


def test_rebase_media_srcs() -> None:
    base = "https://cdn.example.com/decks/"
    html = (
        "<div>"
        '<img src="assets/a.png">'
        "<video controls src='clips/b.mp4'></video>"
        '<img src="http://example.com/c.png">'
        '<img src="data:image/png;base64,AAA">'
        '<img src="/static/d.png">'
        '<img src="https://cdn.example.com/decks/e.png">'
        '<img data-src="lazy/f.png" src="g.png">'
        "</div>"
    )
    out = rebase_media_srcs(html, base)
    assert 'src="https://cdn.example.com/decks/assets/a.png"' in out
    assert "src='https://cdn.example.com/decks/clips/b.mp4'" in out
    assert 'src="http://example.com/c.png"' in out
    assert "data:image/png;base64,AAA" in out
    assert 'src="/static/d.png"' in out
    assert out.count("decks/e.png") == 1
    assert 'data-src="lazy/f.png"' in out
    assert 'src="https://cdn.example.com/decks/g.png"' in out


def test_rebase_media_srcs_ignores_links_and_empty_base() -> None:
    html = '<a href="doc.pdf">doc</a><img src="a.png">'
    assert rebase_media_srcs(html, "") == html
    assert '<a href="doc.pdf">' in rebase_media_srcs(html, "base")
