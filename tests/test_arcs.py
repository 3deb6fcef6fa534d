import math

import pytest

from chart_engine.arcs import build_slices, compute_pie_chart, polar_to_cartesian, slice_anchor, slice_path
from chart_engine.colors import CATEGORICAL_PALETTE
from chart_engine.config import ChartConfig
from chart_engine.highlight import HighlightState
from chart_engine.models import Observation


def test_two_slice_example(two_slices):
    a, b = build_slices(two_slices, size=300)
    assert (a.start_angle, a.end_angle, a.percentage) == (0, 90, 25)
    assert (b.start_angle, b.end_angle, b.percentage) == (90, 360, 75)
    assert a.large_arc_flag == 0
    assert b.large_arc_flag == 1


def test_full_pie_path(two_slices):
    a, _ = build_slices(two_slices, size=300)
    assert a.path == "M 150 150 L 150 0 A 150 150 0 0 1 300 150 Z"


def test_slices_partition_the_circle():
    values = [3, 1, 4, 1, 5, 9, 2, 6, 5, 3, 5]
    slices = build_slices([Observation(label=str(v), value=v) for v in values], size=200)
    assert slices[0].start_angle == 0
    for prev, cur in zip(slices, slices[1:]):
        assert prev.end_angle == cur.start_angle
    assert slices[-1].end_angle == pytest.approx(360, abs=1e-6)
    assert sum(s.percentage for s in slices) == pytest.approx(100, abs=1e-6)


def test_zero_total_is_degenerate_not_an_error():
    slices = build_slices([Observation("a", 0), Observation("b", 0)], size=100)
    assert [s.percentage for s in slices] == [0, 0]
    assert all(s.start_angle == s.end_angle == 0 for s in slices)


def test_empty_input():
    assert build_slices([], size=100) == []


def test_angle_over_half_circle_sets_large_arc_flag():
    big, small = build_slices([Observation("big", 51), Observation("small", 49)], size=100)
    assert big.angle > 180
    assert big.large_arc_flag == 1
    assert small.large_arc_flag == 0


def test_donut_ring_path():
    a, _ = build_slices([Observation("a", 1), Observation("b", 1)], size=200, donut=True, inner_radius_percent=50)
    assert a.path == "M 100 0 A 100 100 0 0 1 100 200 L 100 150 A 50 50 0 0 0 100 50 Z"


def test_donut_with_zero_inner_radius_falls_back_to_pie(two_slices):
    pie = build_slices(two_slices, size=300, donut=False)
    donut = build_slices(two_slices, size=300, donut=True, inner_radius_percent=0)
    assert [s.path for s in donut] == [s.path for s in pie]


def test_inner_radius_ignored_without_donut_flag(two_slices):
    pie = build_slices(two_slices, size=300)
    not_donut = build_slices(two_slices, size=300, donut=False, inner_radius_percent=60)
    assert [s.path for s in not_donut] == [s.path for s in pie]


def test_default_colors_cycle_by_index():
    slices = build_slices([Observation(str(i), 1) for i in range(12)], size=100)
    assert [s.color for s in slices[:10]] == list(CATEGORICAL_PALETTE)
    assert slices[10].color == CATEGORICAL_PALETTE[0]
    assert slices[11].color == CATEGORICAL_PALETTE[1]


def test_explicit_color_wins():
    (s,) = build_slices([Observation("a", 1, color="#123456")], size=100)
    assert s.color == "#123456"


def test_polar_origin_is_twelve_oclock():
    x, y = polar_to_cartesian(0, 0, 10, 0)
    assert x == pytest.approx(0)
    assert y == pytest.approx(-10)
    x, y = polar_to_cartesian(0, 0, 10, 90)
    assert x == pytest.approx(10)
    assert y == pytest.approx(0, abs=1e-9)


def test_slice_path_without_inner_radius_starts_at_center():
    assert slice_path(50, 50, 0, 90, 0).startswith("M 50 50 L 50 0")


def test_anchor_sits_at_mid_angle_and_mid_radius(two_slices):
    a, _ = build_slices(two_slices, size=300)
    x, y = slice_anchor(a, 300)
    offset = 75 * math.cos(math.radians(45))
    assert x == pytest.approx(150 + offset)
    assert y == pytest.approx(150 - offset)


class TestPieChartPayload:
    def test_legend_uses_slice_percentage(self, two_slices):
        payload = compute_pie_chart(two_slices)
        assert payload["total"] == 100
        assert [e["percentage_text"] for e in payload["legend"]] == ["25.0%", "75.0%"]
        assert [s["percentage_text"] for s in payload["slices"]] == ["25.0%", "75.0%"]

    def test_legend_hidden(self, two_slices):
        assert compute_pie_chart(two_slices, ChartConfig(show_legend=False))["legend"] == []

    def test_idle_state_has_full_opacity_and_no_tooltip(self, two_slices):
        payload = compute_pie_chart(two_slices)
        assert payload["highlight"] is None
        assert payload["tooltip"] is None
        assert all(s["emphasis"]["opacity"] == 1.0 for s in payload["slices"])

    def test_highlighted_slice(self, two_slices):
        state = HighlightState()
        state.enter(0)
        payload = compute_pie_chart(two_slices, ChartConfig(donut=True, inner_radius_percent=60), highlight=state)
        a, b = payload["slices"]
        assert a["emphasis"] == {"opacity": 1.0, "scale": 1.02, "z_index": 10, "highlighted": True}
        assert b["emphasis"]["opacity"] == 0.6
        assert payload["center_text"] == "25.0%"
        assert payload["tooltip"]["label"] == "A"
        assert payload["tooltip"]["percentage_text"] == "25.0%"
        # donut band runs from 90 to 150, so the anchor radius is 120
        anchor = payload["tooltip"]["anchor"]
        assert math.hypot(anchor["x"] - 150, anchor["y"] - 150) == pytest.approx(120)

    def test_donut_center_text_shows_total_when_idle(self, two_slices):
        payload = compute_pie_chart(two_slices, ChartConfig(donut=True, inner_radius_percent=50))
        assert payload["center_text"] == "100"
        assert compute_pie_chart(two_slices)["center_text"] is None

    def test_vega_spec_is_arc(self, two_slices):
        spec = compute_pie_chart(two_slices)["vega_spec"]
        assert spec["mark"]["type"] == "arc"

    def test_ref_past_the_last_slice_renders_idle(self, two_slices):
        state = HighlightState()
        state.enter(5)
        payload = compute_pie_chart(two_slices, highlight=state)
        assert payload["highlight"] is None
        assert payload["tooltip"] is None
        assert [s["emphasis"]["opacity"] for s in payload["slices"]] == [1.0, 1.0]

    def test_cell_ref_on_pie_renders_idle(self, two_slices):
        state = HighlightState()
        state.enter((0, 1))
        payload = compute_pie_chart(two_slices, highlight=state)
        assert payload["highlight"] is None
        assert all(not s["emphasis"]["highlighted"] and s["emphasis"]["opacity"] == 1.0 for s in payload["slices"])


def test_negative_value_gives_negative_angle():
    neg, pos = build_slices([Observation("a", -1), Observation("b", 3)], size=100)
    assert neg.percentage == pytest.approx(-50)
    assert neg.angle == pytest.approx(-180)
    assert neg.large_arc_flag == 0
    assert pos.end_angle == pytest.approx(360)
