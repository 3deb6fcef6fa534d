import pytest

from chart_engine.bar import compute_bar_chart
from chart_engine.config import ChartConfig
from chart_engine.highlight import HighlightState
from chart_engine.scale import LinearScale, bar_heights, bar_scale, fmt_coord


def test_bar_heights_example():
    assert bar_heights([0, 50], 100) == [0.0, 100.0]


def test_all_zero_values_give_zero_heights():
    assert bar_heights([0, 0, 0], 100) == [0.0, 0.0, 0.0]


def test_empty_input_gives_empty_output():
    assert bar_heights([], 100) == []


def test_domain_is_floored_at_one():
    assert bar_scale([0.25, 0.5], 100).domain_max == 1
    assert bar_heights([0.5], 100) == [50.0]


def test_heights_stay_within_extent():
    values = [3, 17, 0, 42.5, 8, 42.5]
    for h in bar_heights(values, 260):
        assert 0 <= h <= 260


def test_zero_width_domain_maps_to_range_min():
    scale = LinearScale(5, 5, 240, 0)
    assert scale(5) == 240
    assert scale(100) == 240


def test_inverted_range():
    scale = LinearScale(0, 100, 240, 0)
    assert scale(0) == 240
    assert scale(50) == pytest.approx(120)
    assert scale(100) == pytest.approx(0)


@pytest.mark.parametrize(
    "value, expected",
    [(150.0, "150"), (150.00000000000003, "150"), (0.0, "0"), (-1e-9, "0"), (12.5, "12.5"), (1 / 3, "0.3333")],
)
def test_fmt_coord(value, expected):
    assert fmt_coord(value) == expected


class TestBarChartPayload:
    def test_layout_and_value_labels(self):
        payload = compute_bar_chart(
            [{"label": "Jan", "value": 0}, {"label": "Feb", "value": 50}],
            ChartConfig(height=140, width=800),
        )
        assert payload["chart_height"] == 100
        jan, feb = payload["bars"]
        assert jan["height"] == 0
        assert feb["height"] == 100
        assert (jan["x"], feb["x"]) == (200, 600)
        assert feb["y"] == 0
        assert jan["show_value_label"] is False
        assert feb["show_value_label"] is True

    def test_colors_cycle_unless_given(self):
        data = [{"label": str(i), "value": i} for i in range(11)]
        data[2]["color"] = "#000000"
        bars = compute_bar_chart(data)["bars"]
        assert bars[0]["color"] == "#3b82f6"
        assert bars[2]["color"] == "#000000"
        assert bars[10]["color"] == bars[0]["color"]

    def test_grid_lines(self):
        payload = compute_bar_chart([{"label": "a", "value": 1}], ChartConfig(height=140))
        assert [g["y"] for g in payload["grid_lines"]] == [0, 25, 50, 75, 100]
        assert compute_bar_chart([], ChartConfig(show_grid=False))["grid_lines"] == []

    def test_highlight_emphasis_and_tooltip(self):
        state = HighlightState()
        state.enter(1)
        payload = compute_bar_chart(
            [{"label": "Jan", "value": 0}, {"label": "Feb", "value": 50}],
            ChartConfig(height=140),
            highlight=state,
        )
        jan, feb = payload["bars"]
        assert feb["emphasis"]["opacity"] == 1.0
        assert feb["emphasis"]["z_index"] == 10
        assert jan["emphasis"]["opacity"] == 0.6
        assert payload["tooltip"]["anchor"] == {"x": 600, "y": 0}

    def test_empty_chart(self):
        payload = compute_bar_chart([])
        assert payload["bars"] == []
        assert payload["tooltip"] is None
        assert payload["vega_spec"]["mark"]["type"] == "bar"

    def test_ref_past_the_last_bar_renders_idle(self):
        state = HighlightState()
        state.enter(7)
        payload = compute_bar_chart([{"label": "Jan", "value": 10}, {"label": "Feb", "value": 20}], highlight=state)
        assert payload["highlight"] is None
        assert payload["tooltip"] is None
        assert [b["emphasis"]["opacity"] for b in payload["bars"]] == [1.0, 1.0]

    def test_cell_ref_on_bars_renders_idle(self):
        state = HighlightState()
        state.enter((0, 0))
        payload = compute_bar_chart([{"label": "Jan", "value": 10}, {"label": "Feb", "value": 20}], highlight=state)
        assert payload["highlight"] is None
        assert [b["emphasis"]["opacity"] for b in payload["bars"]] == [1.0, 1.0]


def test_negative_values_give_negative_heights():
    assert bar_heights([-5, 10], 100) == [-50.0, 100.0]
