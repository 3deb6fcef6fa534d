from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Dict, Iterable, Literal, Optional, Tuple

from chart_engine.colors import CATEGORICAL_PALETTE, LINE_PALETTE, SEQUENTIAL_BLUES


logger = logging.getLogger(__name__)

ChartKind = Literal["bar", "pie", "heatmap", "line"]


@dataclass(frozen=True)
class ChartConfig:
    size: float = 300.0
    width: float = 800.0
    height: float = 300.0
    donut: bool = False
    inner_radius_percent: float = 0.0
    palette: Tuple[str, ...] = CATEGORICAL_PALETTE
    show_legend: bool = True
    show_tooltip: bool = True
    show_values: bool = True
    show_grid: bool = True
    show_percentages: bool = True
    show_dots: bool = True
    smooth: bool = False
    y_min: Optional[float] = None
    y_max: Optional[float] = None


DEFAULT_CONFIGS: Dict[str, ChartConfig] = {
    "bar": ChartConfig(),
    "pie": ChartConfig(),
    "heatmap": ChartConfig(height=500.0, show_values=False, palette=SEQUENTIAL_BLUES),
    "line": ChartConfig(palette=LINE_PALETTE),
}


def default_config(kind: ChartKind) -> ChartConfig:
    return DEFAULT_CONFIGS[kind]


def _as_positive_float(value: Any, default: float) -> float:
    if value is None:
        return default
    try:
        out = float(value)
    except Exception:
        logger.debug("Ignoring non-numeric dimension %r", value)
        return default
    if out <= 0 or out != out:
        return default
    return out


def _as_optional_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except Exception:
        return None


def _as_bool(value: Any, default: bool) -> bool:
    if value is None:
        return default
    return bool(value)


def _as_palette(values: Optional[Iterable[object]], default: Tuple[str, ...]) -> Tuple[str, ...]:
    if not values or isinstance(values, str):
        return default
    palette = tuple(str(v) for v in values if v is not None and str(v).strip())
    if len(palette) < 2:
        logger.debug("Palette %r has fewer than 2 colors, using default", values)
        return default
    return palette


def normalize_config(raw: Optional[dict], *, kind: ChartKind = "bar") -> ChartConfig:
    base = default_config(kind)
    raw = raw or {}

    inner = _as_optional_float(raw.get("inner_radius_percent"))
    if inner is None or not (0 <= inner < 100):
        if inner is not None:
            logger.debug("inner_radius_percent %r outside [0, 100), using 0", inner)
        inner = 0.0

    return replace(
        base,
        size=_as_positive_float(raw.get("size"), base.size),
        width=_as_positive_float(raw.get("width"), base.width),
        height=_as_positive_float(raw.get("height"), base.height),
        donut=_as_bool(raw.get("donut"), base.donut),
        inner_radius_percent=inner,
        palette=_as_palette(raw.get("palette"), base.palette),
        show_legend=_as_bool(raw.get("show_legend"), base.show_legend),
        show_tooltip=_as_bool(raw.get("show_tooltip"), base.show_tooltip),
        show_values=_as_bool(raw.get("show_values"), base.show_values),
        show_grid=_as_bool(raw.get("show_grid"), base.show_grid),
        show_percentages=_as_bool(raw.get("show_percentages"), base.show_percentages),
        show_dots=_as_bool(raw.get("show_dots"), base.show_dots),
        smooth=_as_bool(raw.get("smooth"), base.smooth),
        y_min=_as_optional_float(raw.get("y_min")),
        y_max=_as_optional_float(raw.get("y_max")),
    )
