from __future__ import annotations

from typing import Any

import pytest
from helpers import code, h, hr, image, li, p, quote, records, table, whiteboard

from doc2slides.model.options import SegmentationOptions
from doc2slides.pipeline import segment_blocks
from doc2slides.segment import (
    MeasuredWeightSource,
    StaticWeightSource,
    block_weight,
    estimate_weight,
    split_by_weight,
    total_weight,
)

OPTIONS = SegmentationOptions()


def _weight(node: dict[str, Any]) -> float:
    (block,) = records([node])
    return estimate_weight(block, OPTIONS)


def test_headings_and_separators_weigh_nothing() -> None:
    assert _weight(h(1, "x" * 500)) == 0.0
    assert _weight(hr()) == 0.0


def test_text_weight_grows_with_length() -> None:
    assert _weight(p("")) == pytest.approx(1.0)
    assert _weight(p("x" * 200)) == pytest.approx(2.0)
    assert _weight(p("x" * 100)) < _weight(p("x" * 101))
    assert _weight(quote("x" * 200)) == pytest.approx(2.0)


def test_nesting_increases_weight() -> None:
    flat = _weight(li("item"))
    nested = _weight(li("item", children=[li("a"), li("b")]))
    # text grows to "item a b" and the nesting factor is 1 + 0.3 * 2
    assert nested == pytest.approx((1 + len("item a b") / 200) * 1.6)
    assert nested > flat


def test_dense_blocks_and_fixed_weights() -> None:
    assert _weight(code("x" * 200)) == pytest.approx(3.0)
    assert _weight(table([["a", "b"]])) == pytest.approx((1 + 3 / 200) * 1.5)
    assert _weight(image()) == pytest.approx(2.0)
    assert _weight(whiteboard()) == pytest.approx(2.0)
    generic = {"id": "g1", "type": "columnList", "props": {}, "content": [], "children": []}
    assert _weight(generic) == pytest.approx(1.0)


def test_options_tune_the_heuristic() -> None:
    (block,) = records([p("x" * 100)])
    opts = SegmentationOptions(chars_per_weight_unit=100.0)
    assert estimate_weight(block, opts) == pytest.approx(2.0)


def test_block_weight_is_cached_on_the_record() -> None:
    calls: list[str] = []

    def source(block: Any) -> float:
        calls.append(block.block_type)
        return 3.0

    blocks = records([p("a"), p("b")])
    assert total_weight(blocks, source) == 6.0
    assert total_weight(blocks, source) == 6.0
    assert len(calls) == 2
    assert blocks[0].estimated_weight == 3.0


def test_measured_source_uses_measurements_and_falls_back() -> None:
    heading, para, other, broken = records([h(1, "T"), p("a"), p("b"), p("c")])
    measured = {id(para.handle): 7.5, id(heading.handle): 4.0}

    def measure(handle: object) -> float | None:
        if handle is broken.handle:
            raise RuntimeError("element detached")
        return measured.get(id(handle))

    source = MeasuredWeightSource(measure, StaticWeightSource(OPTIONS))
    assert source(para) == 7.5
    assert source(heading) == 0.0
    assert source(other) == pytest.approx(1.005)
    assert source(broken) == pytest.approx(1.005)
    assert block_weight(para, source) == 7.5


def test_measured_source_rejects_negative_values() -> None:
    (block,) = records([p("abc")])
    source = MeasuredWeightSource(lambda _handle: -1.0, StaticWeightSource(OPTIONS))
    assert source(block) == pytest.approx(1.015)


def test_cached_weight_is_recomputed_for_another_source() -> None:
    blocks = records([p("a"), p("b"), p("c"), p("d")])
    static = StaticWeightSource(OPTIONS)
    assert split_by_weight(blocks, 20.0, static) == [blocks]

    measured = MeasuredWeightSource(lambda _handle: 15.0, static)
    assert [len(s) for s in split_by_weight(blocks, 20.0, measured)] == [1, 1, 1, 1]
    assert blocks[0].estimated_weight == 15.0

    # Back to the first source: its own weights apply again
    assert split_by_weight(blocks, 20.0, static) == [blocks]


def test_segment_blocks_honours_new_options_on_reused_records() -> None:
    blocks = records([p("x" * 300) for _ in range(10)])
    assert len(segment_blocks(blocks, SegmentationOptions())) == 2
    assert len(segment_blocks(blocks, SegmentationOptions(chars_per_weight_unit=2000.0))) == 1
