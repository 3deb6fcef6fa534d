from __future__ import annotations

import logging
import math

import numpy as np
from fastapi import FastAPI
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.schemas import (
    BarChartRequest,
    ChartConfigModel,
    HeatMapRequest,
    LineChartRequest,
    PieChartRequest,
)
from chart_engine.arcs import compute_pie_chart
from chart_engine.bar import compute_bar_chart
from chart_engine.colors import CATEGORICAL_PALETTE, LINE_PALETTE, SEQUENTIAL_BLUES
from chart_engine.config import ChartConfig, ChartKind, normalize_config
from chart_engine.heatmap import compute_heat_map
from chart_engine.highlight import HighlightState
from chart_engine.line import compute_line_chart


app = FastAPI(title="Chart Geometry API", version="0.1.0")
logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _config_from_model(model: ChartConfigModel, *, kind: ChartKind) -> ChartConfig:
    raw = model.model_dump(exclude_none=True)
    return normalize_config(raw, kind=kind)


def _highlight(ref: object) -> HighlightState:
    state = HighlightState()
    if ref is not None:
        state.enter(ref)
    return state


def _json(data: object) -> JSONResponse:
    """Return JSON with safe encoding for numpy objects and non-finite floats."""

    def _safe_float(value: object) -> float | None:
        try:
            out = float(value)  # type: ignore[arg-type]
        except Exception:
            return None
        if math.isnan(out) or math.isinf(out):
            return None
        return out

    return JSONResponse(
        content=jsonable_encoder(
            data,
            custom_encoder={
                np.integer: int,
                float: _safe_float,
                np.floating: _safe_float,
                np.bool_: bool,
                np.ndarray: lambda arr: arr.tolist(),
            },
        )
    )


def _error(exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": str(exc), "type": type(exc).__name__})


@app.get("/meta/palettes")
def meta_palettes():
    return _json(
        {
            "categorical": list(CATEGORICAL_PALETTE),
            "line": list(LINE_PALETTE),
            "sequential": list(SEQUENTIAL_BLUES),
        }
    )


@app.post("/charts/bar")
def bar_chart(request: BarChartRequest):
    try:
        config = _config_from_model(request.config, kind="bar")
        data = [d.model_dump() for d in request.data]
        return _json(compute_bar_chart(data, config, highlight=_highlight(request.highlight)))
    except Exception as exc:
        logger.exception("bar_chart failed")
        return _error(exc)


@app.post("/charts/pie")
def pie_chart(request: PieChartRequest):
    try:
        config = _config_from_model(request.config, kind="pie")
        data = [d.model_dump() for d in request.data]
        return _json(compute_pie_chart(data, config, highlight=_highlight(request.highlight)))
    except Exception as exc:
        logger.exception("pie_chart failed")
        return _error(exc)


@app.post("/charts/heatmap")
def heat_map(request: HeatMapRequest):
    try:
        config = _config_from_model(request.config, kind="heatmap")
        data = [d.model_dump() for d in request.data]
        return _json(compute_heat_map(data, config, highlight=_highlight(request.highlight)))
    except Exception as exc:
        logger.exception("heat_map failed")
        return _error(exc)


@app.post("/charts/line")
def line_chart(request: LineChartRequest):
    try:
        config = _config_from_model(request.config, kind="line")
        series = [s.model_dump() for s in request.series]
        return _json(compute_line_chart(series, config, pointer_x=request.pointer_x))
    except Exception as exc:
        logger.exception("line_chart failed")
        return _error(exc)
