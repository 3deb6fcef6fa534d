"""Pie and donut slice geometry.

Angles are in degrees with 0 at 12 o'clock, increasing clockwise. A slice at
angle ``a`` and radius ``r`` sits at ``(cx + r*cos(a - 90), cy + r*sin(a - 90))``.
"""

from __future__ import annotations

import logging
import math
from dataclasses import asdict
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from chart_engine.charts import pie_spec
from chart_engine.colors import CATEGORICAL_PALETTE, cycle_color
from chart_engine.config import ChartConfig, default_config
from chart_engine.highlight import PIE_STYLE, HighlightState
from chart_engine.models import Observation, Slice, as_observations
from chart_engine.scale import fmt_coord


logger = logging.getLogger(__name__)


def polar_to_cartesian(cx: float, cy: float, radius: float, angle: float) -> Tuple[float, float]:
    rad = math.radians(angle - 90)
    return cx + radius * math.cos(rad), cy + radius * math.sin(rad)


def is_ring(donut: bool, inner_radius_percent: float) -> bool:
    return bool(donut) and inner_radius_percent > 0


def slice_path(
    center: float,
    radius: float,
    start_angle: float,
    end_angle: float,
    large_arc_flag: int,
    inner_radius: float = 0.0,
) -> str:
    """SVG path for one slice; a positive ``inner_radius`` carves a ring segment."""
    x1, y1 = polar_to_cartesian(center, center, radius, start_angle)
    x2, y2 = polar_to_cartesian(center, center, radius, end_angle)
    r = fmt_coord(radius)
    outer_arc = f"A {r} {r} 0 {large_arc_flag} 1 {fmt_coord(x2)} {fmt_coord(y2)}"

    if inner_radius <= 0:
        return f"M {fmt_coord(center)} {fmt_coord(center)} L {fmt_coord(x1)} {fmt_coord(y1)} {outer_arc} Z"

    ix1, iy1 = polar_to_cartesian(center, center, inner_radius, start_angle)
    ix2, iy2 = polar_to_cartesian(center, center, inner_radius, end_angle)
    ir = fmt_coord(inner_radius)
    # inner arc runs back counter-clockwise to close the ring
    return (
        f"M {fmt_coord(x1)} {fmt_coord(y1)} {outer_arc} "
        f"L {fmt_coord(ix2)} {fmt_coord(iy2)} "
        f"A {ir} {ir} 0 {large_arc_flag} 0 {fmt_coord(ix1)} {fmt_coord(iy1)} Z"
    )


def build_slices(
    observations: Iterable[Observation],
    size: float,
    donut: bool = False,
    inner_radius_percent: float = 0.0,
    palette: Sequence[str] = CATEGORICAL_PALETTE,
) -> List[Slice]:
    observations = list(observations)
    total = sum(o.value for o in observations)
    radius = size / 2
    inner_radius = radius * (inner_radius_percent / 100) if is_ring(donut, inner_radius_percent) else 0.0

    if total == 0 and observations:
        logger.debug("Pie total is zero; emitting %d empty slices", len(observations))

    slices: List[Slice] = []
    start_angle = 0.0
    for i, obs in enumerate(observations):
        percentage = obs.value / total * 100 if total != 0 else 0.0
        angle = percentage / 100 * 360
        end_angle = start_angle + angle
        large_arc_flag = 1 if angle > 180 else 0
        slices.append(
            Slice(
                index=i,
                label=obs.label,
                value=obs.value,
                color=obs.color or cycle_color(palette, i),
                percentage=percentage,
                start_angle=start_angle,
                end_angle=end_angle,
                angle=angle,
                large_arc_flag=large_arc_flag,
                path=slice_path(radius, radius, start_angle, end_angle, large_arc_flag, inner_radius),
            )
        )
        start_angle = end_angle
    return slices


def format_percentage(percentage: float) -> str:
    return f"{percentage:.1f}%"


def slice_anchor(slc: Slice, size: float, inner_radius: float = 0.0) -> Tuple[float, float]:
    """Tooltip anchor: the slice's mid angle at the middle of its radial band."""
    radius = size / 2
    mid_radius = (inner_radius + radius) / 2
    return polar_to_cartesian(radius, radius, mid_radius, (slc.start_angle + slc.end_angle) / 2)


def compute_pie_chart(
    data: Optional[Iterable[Any]],
    config: Optional[ChartConfig] = None,
    highlight: Optional[HighlightState] = None,
) -> Dict[str, Any]:
    config = config or default_config("pie")
    highlight = highlight or HighlightState()
    observations = as_observations(data)
    total = sum(o.value for o in observations)

    ring = is_ring(config.donut, config.inner_radius_percent)
    inner_radius = config.size / 2 * (config.inner_radius_percent / 100) if ring else 0.0
    slices = build_slices(
        observations,
        config.size,
        donut=config.donut,
        inner_radius_percent=config.inner_radius_percent,
        palette=config.palette,
    )
    highlight = highlight.resolved(range(len(slices)))

    slice_rows: List[Dict[str, Any]] = []
    for s in slices:
        row = asdict(s)
        row["percentage_text"] = format_percentage(s.percentage)
        row["emphasis"] = asdict(highlight.emphasis(s.index, PIE_STYLE))
        slice_rows.append(row)

    legend: List[Dict[str, Any]] = []
    if config.show_legend:
        legend = [
            {
                "index": row["index"],
                "label": row["label"],
                "color": row["color"],
                "percentage_text": row["percentage_text"] if config.show_percentages else None,
            }
            for row in slice_rows
        ]

    ref = highlight.ref
    current = slice_rows[ref] if isinstance(ref, int) and 0 <= ref < len(slice_rows) else None

    tooltip = None
    if config.show_tooltip and current is not None:
        ax, ay = slice_anchor(slices[current["index"]], config.size, inner_radius)
        tooltip = {
            "label": current["label"],
            "value": current["value"],
            "percentage_text": current["percentage_text"],
            "color": current["color"],
            "anchor": {"x": ax, "y": ay},
        }

    center_text = None
    if ring:
        center_text = current["percentage_text"] if current is not None else f"{total:g}"

    return {
        "config": asdict(config),
        "total": total,
        "radius": config.size / 2,
        "inner_radius": inner_radius,
        "slices": slice_rows,
        "legend": legend,
        "center_text": center_text,
        "highlight": ref,
        "tooltip": tooltip,
        "vega_spec": pie_spec(slice_rows, size=config.size, inner_radius=inner_radius),
    }
