from __future__ import annotations

from typing import List, Optional, Tuple

from pydantic import BaseModel, Field


class ChartConfigModel(BaseModel):
    size: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None
    donut: bool = False
    inner_radius_percent: float = 0.0
    palette: List[str] = Field(default_factory=list)
    show_legend: bool = True
    show_tooltip: bool = True
    show_values: Optional[bool] = None
    show_grid: bool = True
    show_percentages: bool = True
    show_dots: bool = True
    smooth: bool = False
    y_min: Optional[float] = None
    y_max: Optional[float] = None


class ObservationModel(BaseModel):
    label: str
    value: float
    color: Optional[str] = None


class HeatPointModel(BaseModel):
    x: str
    y: str
    value: float
    color: Optional[str] = None


class SeriesPointModel(BaseModel):
    label: str
    value: float


class LineSeriesModel(BaseModel):
    name: str
    data: List[SeriesPointModel] = Field(default_factory=list)
    color: Optional[str] = None


class BarChartRequest(BaseModel):
    data: List[ObservationModel] = Field(default_factory=list)
    config: ChartConfigModel = Field(default_factory=ChartConfigModel)
    highlight: Optional[int] = None


class PieChartRequest(BaseModel):
    data: List[ObservationModel] = Field(default_factory=list)
    config: ChartConfigModel = Field(default_factory=ChartConfigModel)
    highlight: Optional[int] = None


class HeatMapRequest(BaseModel):
    data: List[HeatPointModel] = Field(default_factory=list)
    config: ChartConfigModel = Field(default_factory=ChartConfigModel)
    highlight: Optional[Tuple[int, int]] = None


class LineChartRequest(BaseModel):
    series: List[LineSeriesModel] = Field(default_factory=list)
    config: ChartConfigModel = Field(default_factory=ChartConfigModel)
    pointer_x: Optional[float] = None

