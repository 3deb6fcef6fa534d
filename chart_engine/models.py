from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, List, Mapping, Optional, Union


@dataclass(frozen=True)
class Observation:
    label: str
    value: float
    color: Optional[str] = None


@dataclass(frozen=True)
class HeatPoint:
    x: str
    y: str
    value: float
    color: Optional[str] = None


@dataclass(frozen=True)
class SeriesPoint:
    label: str
    value: float


@dataclass(frozen=True)
class LineSeries:
    name: str
    data: List[SeriesPoint] = field(default_factory=list)
    color: Optional[str] = None


@dataclass(frozen=True)
class Slice:
    index: int
    label: str
    value: float
    color: str
    percentage: float
    start_angle: float
    end_angle: float
    angle: float
    large_arc_flag: int
    path: str


@dataclass(frozen=True)
class Cell:
    x: str
    y: str
    value: float
    color: str
    x_index: int
    y_index: int
    bucket: Optional[int] = None


def _get(record: Any, key: str, default: Any = None) -> Any:
    if isinstance(record, Mapping):
        return record.get(key, default)
    return getattr(record, key, default)


def _as_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except Exception:
        return None


def _as_color(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def as_observations(records: Optional[Iterable[Union[Observation, Mapping[str, Any]]]]) -> List[Observation]:
    if not records:
        return []
    out: List[Observation] = []
    for r in records:
        if isinstance(r, Observation):
            out.append(r)
            continue
        value = _as_float(_get(r, "value"))
        if value is None:
            continue
        out.append(Observation(label=str(_get(r, "label", "")), value=value, color=_as_color(_get(r, "color"))))
    return out


def as_heat_points(records: Optional[Iterable[Union[HeatPoint, Mapping[str, Any]]]]) -> List[HeatPoint]:
    if not records:
        return []
    out: List[HeatPoint] = []
    for r in records:
        if isinstance(r, HeatPoint):
            out.append(r)
            continue
        value = _as_float(_get(r, "value"))
        if value is None:
            continue
        out.append(
            HeatPoint(
                x=str(_get(r, "x", "")),
                y=str(_get(r, "y", "")),
                value=value,
                color=_as_color(_get(r, "color")),
            )
        )
    return out


def as_line_series(records: Optional[Iterable[Union[LineSeries, Mapping[str, Any]]]]) -> List[LineSeries]:
    if not records:
        return []
    out: List[LineSeries] = []
    for r in records:
        if isinstance(r, LineSeries):
            out.append(r)
            continue
        points: List[SeriesPoint] = []
        for p in _get(r, "data") or []:
            if isinstance(p, SeriesPoint):
                points.append(p)
                continue
            value = _as_float(_get(p, "value"))
            if value is None:
                continue
            points.append(SeriesPoint(label=str(_get(p, "label", "")), value=value))
        out.append(LineSeries(name=str(_get(r, "name", "")), data=points, color=_as_color(_get(r, "color"))))
    return out
