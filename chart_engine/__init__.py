"""Chart geometry engine (UI-agnostic).

This package contains:
- input coercion and geometry records (models)
- chart configuration with per-chart defaults (config)
- linear scaling for bar and line charts (scale, bar, line)
- pie/donut slice angles and SVG arc paths (arcs)
- heat-map grid building and color-bucket quantization (heatmap, colors)
- the shared hover/highlight state machine (highlight)
- Vega-Lite export of computed geometry (charts)
"""

from chart_engine.arcs import build_slices, compute_pie_chart
from chart_engine.bar import compute_bar_chart
from chart_engine.colors import CATEGORICAL_PALETTE, LINE_PALETTE, SEQUENTIAL_BLUES, bucket_index
from chart_engine.config import ChartConfig, normalize_config
from chart_engine.heatmap import build_heat_grid, compute_heat_map
from chart_engine.highlight import HighlightState
from chart_engine.line import build_line_geometry, compute_line_chart
from chart_engine.scale import LinearScale, bar_heights

__all__ = [
    "CATEGORICAL_PALETTE",
    "LINE_PALETTE",
    "SEQUENTIAL_BLUES",
    "ChartConfig",
    "HighlightState",
    "LinearScale",
    "bar_heights",
    "bucket_index",
    "build_heat_grid",
    "build_line_geometry",
    "build_slices",
    "compute_bar_chart",
    "compute_heat_map",
    "compute_line_chart",
    "compute_pie_chart",
    "normalize_config",
]
