from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, Iterable, List, Optional

from chart_engine.charts import bar_spec
from chart_engine.colors import cycle_color
from chart_engine.config import ChartConfig, default_config
from chart_engine.highlight import BAR_STYLE, HighlightState
from chart_engine.models import Observation, as_observations
from chart_engine.scale import bar_scale

LABEL_STRIP = 40.0
VALUE_LABEL_MIN_HEIGHT = 20.0
GRID_PERCENTS = (0, 25, 50, 75, 100)


def compute_bar_chart(
    data: Optional[Iterable[Any]],
    config: Optional[ChartConfig] = None,
    highlight: Optional[HighlightState] = None,
) -> Dict[str, Any]:
    config = config or default_config("bar")
    highlight = highlight or HighlightState()
    observations: List[Observation] = as_observations(data)
    highlight = highlight.resolved(range(len(observations)))

    chart_height = max(config.height - LABEL_STRIP, 0.0)
    scale = bar_scale([o.value for o in observations], chart_height)
    slot_width = config.width / len(observations) if observations else 0.0

    bars: List[Dict[str, Any]] = []
    for i, obs in enumerate(observations):
        height = scale(obs.value)
        bars.append(
            {
                "index": i,
                "label": obs.label,
                "value": obs.value,
                "color": obs.color or cycle_color(config.palette, i),
                "height": height,
                "x": (i + 0.5) * slot_width,
                "y": chart_height - height,
                "slot_width": slot_width,
                "show_value_label": config.show_values and height > VALUE_LABEL_MIN_HEIGHT,
                "emphasis": asdict(highlight.emphasis(i, BAR_STYLE)),
            }
        )

    grid_lines = (
        [{"percent": p, "y": chart_height * p / 100} for p in GRID_PERCENTS] if config.show_grid else []
    )

    tooltip = None
    ref = highlight.ref
    if config.show_tooltip and isinstance(ref, int) and 0 <= ref < len(bars):
        bar = bars[ref]
        tooltip = {
            "label": bar["label"],
            "value": bar["value"],
            "color": bar["color"],
            "anchor": {"x": bar["x"], "y": bar["y"]},
        }

    return {
        "config": asdict(config),
        "chart_height": chart_height,
        "domain_max": scale.domain_max,
        "bars": bars,
        "grid_lines": grid_lines,
        "highlight": ref,
        "tooltip": tooltip,
        "vega_spec": bar_spec(bars, width=config.width, height=chart_height),
    }
