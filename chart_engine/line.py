from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from chart_engine.charts import line_spec
from chart_engine.colors import LINE_PALETTE, cycle_color
from chart_engine.config import ChartConfig, default_config
from chart_engine.highlight import LINE_STYLE, HighlightState
from chart_engine.models import LineSeries, as_line_series
from chart_engine.scale import LinearScale, fmt_coord

PADDING = {"top": 20.0, "right": 20.0, "bottom": 40.0, "left": 50.0}
GRID_PERCENTS = (0, 25, 50, 75, 100)
SNAP_DISTANCE = 50.0
SMOOTHING = 0.3
DOT_RADIUS = 4.0


@dataclass(frozen=True)
class PlotPoint:
    x: float
    y: float
    label: str
    value: float


@dataclass(frozen=True)
class SeriesPath:
    name: str
    color: str
    path: str
    points: List[PlotPoint] = field(default_factory=list)


@dataclass(frozen=True)
class LineGeometry:
    plot_width: float
    plot_height: float
    min_value: float
    max_value: float
    series: List[SeriesPath] = field(default_factory=list)

    @property
    def value_range(self) -> float:
        return self.max_value - self.min_value


def straight_path(points: Sequence[PlotPoint]) -> str:
    if not points:
        return ""
    return "M " + " L ".join(f"{fmt_coord(p.x)},{fmt_coord(p.y)}" for p in points)


def smooth_path(points: Sequence[PlotPoint]) -> str:
    """Cubic Bezier path through the points; the last segment is straight."""
    if not points:
        return ""
    parts = [f"M {fmt_coord(points[0].x)},{fmt_coord(points[0].y)}"]
    for i in range(1, len(points)):
        prev, cur = points[i - 1], points[i]
        if i == len(points) - 1:
            parts.append(f"L {fmt_coord(cur.x)},{fmt_coord(cur.y)}")
            continue
        dx = cur.x - prev.x
        cp1 = (prev.x + dx * SMOOTHING, prev.y)
        cp2 = (cur.x - dx * SMOOTHING, cur.y)
        parts.append(
            f"C {fmt_coord(cp1[0])},{fmt_coord(cp1[1])} {fmt_coord(cp2[0])},{fmt_coord(cp2[1])} {fmt_coord(cur.x)},{fmt_coord(cur.y)}"
        )
    return " ".join(parts)


def value_bounds(series: Sequence[LineSeries], y_min: Optional[float], y_max: Optional[float]) -> Tuple[float, float]:
    values = [p.value for s in series for p in s.data]
    lo = y_min if y_min is not None else min([*values, 0.0])
    hi = y_max if y_max is not None else max([*values, 10.0])
    return float(lo), float(hi)


def build_line_geometry(
    series: Iterable[LineSeries],
    width: float = 800.0,
    height: float = 300.0,
    smooth: bool = False,
    y_min: Optional[float] = None,
    y_max: Optional[float] = None,
    palette: Sequence[str] = LINE_PALETTE,
) -> LineGeometry:
    series = list(series)
    plot_width = width - PADDING["left"] - PADDING["right"]
    plot_height = height - PADDING["top"] - PADDING["bottom"]
    lo, hi = value_bounds(series, y_min, y_max)
    y_scale = LinearScale(lo, hi, plot_height, 0.0)

    paths: List[SeriesPath] = []
    for i, s in enumerate(series):
        n = len(s.data)
        points = [
            PlotPoint(
                x=(j / (n - 1)) * plot_width if n > 1 else 0.0,
                y=y_scale(p.value),
                label=p.label,
                value=p.value,
            )
            for j, p in enumerate(s.data)
        ]
        paths.append(
            SeriesPath(
                name=s.name,
                color=s.color or cycle_color(palette, i),
                path=smooth_path(points) if smooth else straight_path(points),
                points=points,
            )
        )
    return LineGeometry(plot_width=plot_width, plot_height=plot_height, min_value=lo, max_value=hi, series=paths)


def closest_point(geometry: LineGeometry, pointer_x: float) -> Optional[Tuple[int, int]]:
    """(series_index, point_index) nearest to an SVG-relative pointer x, if close enough."""
    mouse_x = pointer_x - PADDING["left"]
    best: Optional[Tuple[int, int]] = None
    best_distance = float("inf")
    for si, s in enumerate(geometry.series):
        for pi, p in enumerate(s.points):
            distance = abs(mouse_x - p.x)
            if distance < best_distance:
                best_distance = distance
                best = (si, pi)
    if best is None or best_distance >= SNAP_DISTANCE:
        return None
    return best


def grid_ticks(geometry: LineGeometry) -> List[Dict[str, Any]]:
    return [
        {
            "percent": p,
            "y": PADDING["top"] + geometry.plot_height * (100 - p) / 100,
            "label": math.floor(geometry.min_value + geometry.value_range * p / 100 + 0.5),
        }
        for p in GRID_PERCENTS
    ]


def compute_line_chart(
    data: Optional[Iterable[Any]],
    config: Optional[ChartConfig] = None,
    pointer_x: Optional[float] = None,
    highlight: Optional[HighlightState] = None,
) -> Dict[str, Any]:
    config = config or default_config("line")
    highlight = highlight or HighlightState()
    geometry = build_line_geometry(
        as_line_series(data),
        width=config.width,
        height=config.height,
        smooth=config.smooth,
        y_min=config.y_min,
        y_max=config.y_max,
        palette=config.palette,
    )

    if pointer_x is not None:
        ref = closest_point(geometry, pointer_x)
        if ref is None:
            highlight.clear()
        else:
            highlight.enter(ref)

    highlight = highlight.resolved(
        {(si, pi) for si, s in enumerate(geometry.series) for pi in range(len(s.points))}
    )
    current = highlight.ref if isinstance(highlight.ref, tuple) else None
    series_rows: List[Dict[str, Any]] = []
    for si, s in enumerate(geometry.series):
        dimmed = current is not None and current[0] != si
        dots = []
        if config.show_dots:
            for pi, p in enumerate(s.points):
                emphasis = highlight.emphasis((si, pi), LINE_STYLE)
                dots.append(
                    {
                        "x": p.x,
                        "y": p.y,
                        "radius": DOT_RADIUS * emphasis.scale,
                        "opacity": LINE_STYLE.dimmed_opacity if dimmed else 1.0,
                        "z_index": emphasis.z_index,
                    }
                )
        series_rows.append(
            {
                "index": si,
                "name": s.name,
                "color": s.color,
                "path": s.path,
                "opacity": LINE_STYLE.dimmed_opacity if dimmed else 1.0,
                "points": [asdict(p) for p in s.points],
                "dots": dots,
            }
        )

    tooltip = None
    if config.show_tooltip and current is not None:
        si, pi = current
        if si < len(geometry.series) and pi < len(geometry.series[si].points):
            s = geometry.series[si]
            p = s.points[pi]
            tooltip = {
                "series_name": s.name,
                "label": p.label,
                "value": p.value,
                "color": s.color,
                "anchor": {"x": p.x + PADDING["left"], "y": p.y + PADDING["top"]},
            }

    legend = [{"name": s.name, "color": s.color} for s in geometry.series] if config.show_legend else []
    vega_points = [
        {"series": s.name, "point_index": pi, "label": p.label, "value": p.value, "color": s.color}
        for s in geometry.series
        for pi, p in enumerate(s.points)
    ]

    return {
        "config": asdict(config),
        "padding": dict(PADDING),
        "plot_width": geometry.plot_width,
        "plot_height": geometry.plot_height,
        "min_value": geometry.min_value,
        "max_value": geometry.max_value,
        "series": series_rows,
        "grid": grid_ticks(geometry) if config.show_grid else [],
        "legend": legend,
        "highlight": list(current) if current is not None else None,
        "tooltip": tooltip,
        "vega_spec": line_spec(
            vega_points,
            y_domain=[geometry.min_value, geometry.max_value],
            show_dots=config.show_dots,
            width=max(geometry.plot_width, 1.0),
            height=max(geometry.plot_height, 1.0),
        ),
    }
