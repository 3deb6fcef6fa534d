from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from chart_engine.charts import heat_spec
from chart_engine.colors import SEQUENTIAL_BLUES, bucket_indices
from chart_engine.config import ChartConfig, default_config
from chart_engine.highlight import HEAT_STYLE, HighlightState
from chart_engine.models import Cell, HeatPoint, as_heat_points


logger = logging.getLogger(__name__)

LABEL_GUTTER = 100.0
TOP_OFFSET = 12.0
AXIS_MARGIN = 100.0


@dataclass(frozen=True)
class HeatGrid:
    rows: List[List[Cell]] = field(default_factory=list)
    x_labels: List[str] = field(default_factory=list)
    y_labels: List[str] = field(default_factory=list)
    min_value: Optional[float] = None
    max_value: Optional[float] = None

    @property
    def cells(self) -> List[Cell]:
        return [cell for row in self.rows for cell in row]


def format_range(min_value: Optional[float], max_value: Optional[float]) -> str:
    if min_value is None or max_value is None:
        return ""
    return f"{min_value:g} - {max_value:g}"


def build_heat_grid(points: Iterable[HeatPoint], palette: Sequence[str] = SEQUENTIAL_BLUES) -> HeatGrid:
    """Dense grid over the distinct x and y labels, in first-seen order.

    Pairs missing from the input get value 0. When a pair occurs more than
    once only its first occurrence is used.
    """
    frame = pd.DataFrame(
        [(str(p.x), str(p.y), p.value, p.color) for p in points],
        columns=["x", "y", "value", "color"],
    )
    if frame.empty:
        return HeatGrid()

    x_labels = [str(v) for v in pd.unique(frame["x"])]
    y_labels = [str(v) for v in pd.unique(frame["y"])]
    min_value = float(frame["value"].min())
    max_value = float(frame["value"].max())
    value_range = max_value - min_value

    firsts = frame.drop_duplicates(subset=["x", "y"], keep="first")
    if len(firsts) < len(frame):
        logger.debug("Dropped %d duplicate heat points", len(frame) - len(firsts))
    lookup: Dict[Tuple[str, str], Tuple[float, Optional[str]]] = {
        (row.x, row.y): (float(row.value), row.color if isinstance(row.color, str) else None)
        for row in firsts.itertuples(index=False)
    }

    pairs = [(x, y) for y in y_labels for x in x_labels]
    matched = [lookup.get(pair) for pair in pairs]
    values = np.array([m[0] if m is not None else 0.0 for m in matched], dtype=float)
    t = (values - min_value) / value_range if value_range != 0 else np.zeros_like(values)
    buckets = bucket_indices(t, len(palette))

    rows: List[List[Cell]] = [[] for _ in y_labels]
    for k, ((x, y), m) in enumerate(zip(pairs, matched)):
        y_index, x_index = divmod(k, len(x_labels))
        explicit = m[1] if m is not None else None
        bucket = int(buckets[k])
        rows[y_index].append(
            Cell(
                x=x,
                y=y,
                value=float(values[k]),
                color=explicit or palette[bucket],
                x_index=x_index,
                y_index=y_index,
                bucket=None if explicit else bucket,
            )
        )

    return HeatGrid(rows=rows, x_labels=x_labels, y_labels=y_labels, min_value=min_value, max_value=max_value)


def cell_size(grid: HeatGrid, width: float, height: float) -> Tuple[float, float]:
    cell_width = (width - AXIS_MARGIN) / len(grid.x_labels) if grid.x_labels else 0.0
    cell_height = (height - AXIS_MARGIN) / len(grid.y_labels) if grid.y_labels else 0.0
    return cell_width, cell_height


def compute_heat_map(
    data: Optional[Iterable[Any]],
    config: Optional[ChartConfig] = None,
    highlight: Optional[HighlightState] = None,
) -> Dict[str, Any]:
    config = config or default_config("heatmap")
    highlight = highlight or HighlightState()
    grid = build_heat_grid(as_heat_points(data), palette=config.palette)
    highlight = highlight.resolved({(c.x_index, c.y_index) for c in grid.cells})
    cell_width, cell_height = cell_size(grid, config.width, config.height)

    cell_rows: List[Dict[str, Any]] = []
    for cell in grid.cells:
        row = asdict(cell)
        row["left"] = LABEL_GUTTER + cell.x_index * cell_width
        row["top"] = TOP_OFFSET + cell.y_index * cell_height
        row["show_value_label"] = config.show_values
        row["emphasis"] = asdict(highlight.emphasis((cell.x_index, cell.y_index), HEAT_STYLE))
        cell_rows.append(row)

    tooltip = None
    ref = highlight.ref
    if config.show_tooltip and isinstance(ref, tuple):
        x_index, y_index = ref
        if 0 <= x_index < len(grid.x_labels) and 0 <= y_index < len(grid.y_labels):
            cell = grid.rows[y_index][x_index]
            tooltip = {
                "title": f"{cell.x} - {cell.y}",
                "value": cell.value,
                "color": cell.color,
                "anchor": {
                    "x": LABEL_GUTTER + x_index * cell_width + cell_width / 2,
                    "y": TOP_OFFSET + y_index * cell_height,
                },
            }

    legend = None
    if config.show_legend:
        legend = {"palette": list(config.palette), "range_text": format_range(grid.min_value, grid.max_value)}

    return {
        "config": asdict(config),
        "x_labels": grid.x_labels,
        "y_labels": grid.y_labels,
        "min_value": grid.min_value,
        "max_value": grid.max_value,
        "cell_width": cell_width,
        "cell_height": cell_height,
        "cells": cell_rows,
        "legend": legend,
        "highlight": list(ref) if isinstance(ref, tuple) else None,
        "tooltip": tooltip,
        "vega_spec": heat_spec(
            cell_rows,
            x_labels=grid.x_labels,
            y_labels=grid.y_labels,
            width=max(config.width - AXIS_MARGIN, 1.0),
            height=max(config.height - AXIS_MARGIN, 1.0),
        ),
    }
