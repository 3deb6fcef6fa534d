from __future__ import annotations

from typing import Any, Dict, List, Sequence

import altair as alt
import pandas as pd

alt.data_transformers.disable_max_rows()


def to_vega_spec(chart: alt.Chart) -> Dict[str, Any]:
    """Convert an Altair chart into a Vega-Lite spec dict (JSON-serializable)."""
    return chart.to_dict()


def bar_spec(bars: List[Dict[str, Any]], *, width: float, height: float) -> Dict[str, Any]:
    df = pd.DataFrame(bars, columns=["index", "label", "value", "color"])
    chart = (
        alt.Chart(df)
        .mark_bar()
        .encode(
            x=alt.X("index:O", title=None),
            y=alt.Y("value:Q", title=None, scale=alt.Scale(domainMin=0)),
            color=alt.Color("color:N", scale=None),
            tooltip=["label", alt.Tooltip("value:Q", format=",")],
        )
        .properties(width=width, height=height)
    )
    return to_vega_spec(chart)


def pie_spec(slices: List[Dict[str, Any]], *, size: float, inner_radius: float) -> Dict[str, Any]:
    df = pd.DataFrame(slices, columns=["index", "label", "value", "color", "percentage"])
    chart = (
        alt.Chart(df)
        .mark_arc(innerRadius=inner_radius, outerRadius=size / 2)
        .encode(
            theta=alt.Theta("value:Q", stack=True),
            order=alt.Order("index:Q"),
            color=alt.Color("color:N", scale=None),
            tooltip=["label", alt.Tooltip("value:Q", format=","), alt.Tooltip("percentage:Q", format=".1f")],
        )
        .properties(width=size, height=size)
    )
    return to_vega_spec(chart)


def heat_spec(
    cells: List[Dict[str, Any]],
    *,
    x_labels: Sequence[str],
    y_labels: Sequence[str],
    width: float,
    height: float,
) -> Dict[str, Any]:
    df = pd.DataFrame(cells, columns=["x", "y", "value", "color"])
    chart = (
        alt.Chart(df)
        .mark_rect(stroke="white")
        .encode(
            x=alt.X("x:N", sort=list(x_labels), title=None),
            y=alt.Y("y:N", sort=list(y_labels), title=None),
            color=alt.Color("color:N", scale=None),
            tooltip=["x", "y", alt.Tooltip("value:Q", format=",")],
        )
        .properties(width=width, height=height)
    )
    return to_vega_spec(chart)


def line_spec(
    points: List[Dict[str, Any]],
    *,
    y_domain: Sequence[float],
    show_dots: bool,
    width: float,
    height: float,
) -> Dict[str, Any]:
    df = pd.DataFrame(points, columns=["series", "point_index", "label", "value", "color"])
    chart = (
        alt.Chart(df)
        .mark_line(point=show_dots)
        .encode(
            x=alt.X("point_index:O", title=None),
            y=alt.Y("value:Q", title=None, scale=alt.Scale(domain=list(y_domain))),
            color=alt.Color("color:N", scale=None),
            detail="series:N",
            tooltip=["series", "label", alt.Tooltip("value:Q", format=",")],
        )
        .properties(width=width, height=height)
    )
    return to_vega_spec(chart)
