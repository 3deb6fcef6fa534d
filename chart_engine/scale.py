from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List


@dataclass(frozen=True)
class LinearScale:
    domain_min: float
    domain_max: float
    range_min: float
    range_max: float

    @property
    def domain_span(self) -> float:
        return self.domain_max - self.domain_min

    def __call__(self, value: float) -> float:
        span = self.domain_span
        if span == 0:
            return self.range_min
        return self.range_min + (value - self.domain_min) / span * (self.range_max - self.range_min)


def bar_scale(values: Iterable[float], extent: float) -> LinearScale:
    """Scale for bar heights: [0, max(values, 1)] onto [0, extent].

    The floor of 1 keeps the domain non-empty when the input is empty or all
    zero, so every height stays finite.
    """
    domain_max = max([*values, 1])
    return LinearScale(0.0, float(domain_max), 0.0, float(extent))


def bar_heights(values: Iterable[float], extent: float) -> List[float]:
    values = list(values)
    scale = bar_scale(values, extent)
    return [scale(v) for v in values]


def fmt_coord(value: float) -> str:
    """Pixel coordinate for path strings: up to 4 decimals, no trailing zeros."""
    text = f"{value:.4f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text
