"""Hover/highlight state shared by every chart type.

The state is either idle or highlighting exactly one primitive, identified by
a ref: a bar or slice index, or an ``(x_index, y_index)`` /
``(series_index, point_index)`` pair. Renderers wire pointer-enter to
:meth:`HighlightState.enter` and pointer-leave to :meth:`HighlightState.leave`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Container, Hashable, Optional, Tuple, Union

Ref = Union[int, Tuple[int, int]]


@dataclass(frozen=True)
class EmphasisStyle:
    dimmed_opacity: float
    highlight_scale: float = 1.02
    raised_z_index: int = 10
    base_z_index: int = 1


@dataclass(frozen=True)
class Emphasis:
    opacity: float
    scale: float
    z_index: int
    highlighted: bool


BAR_STYLE = EmphasisStyle(dimmed_opacity=0.6)
PIE_STYLE = EmphasisStyle(dimmed_opacity=0.6)
HEAT_STYLE = EmphasisStyle(dimmed_opacity=0.8)
LINE_STYLE = EmphasisStyle(dimmed_opacity=0.3, highlight_scale=1.5)


def normalize_ref(ref: Any) -> Optional[Ref]:
    if ref is None:
        return None
    if isinstance(ref, (list, tuple)):
        if len(ref) != 2:
            raise ValueError(f"highlight ref must be an index or a pair, got {ref!r}")
        return (int(ref[0]), int(ref[1]))
    return int(ref)


class HighlightState:
    """Idle, or Highlighted(ref). The last enter wins; stale leaves are ignored."""

    def __init__(self) -> None:
        self._ref: Optional[Ref] = None

    @property
    def ref(self) -> Optional[Ref]:
        return self._ref

    @property
    def is_idle(self) -> bool:
        return self._ref is None

    def enter(self, ref: Hashable) -> None:
        self._ref = normalize_ref(ref)

    def leave(self, ref: Hashable) -> None:
        # a leave racing a newer enter must not clear the newer highlight
        if self._ref is not None and self._ref == normalize_ref(ref):
            self._ref = None

    def clear(self) -> None:
        self._ref = None

    def is_highlighted(self, ref: Hashable) -> bool:
        return self._ref is not None and self._ref == normalize_ref(ref)

    def resolved(self, refs: Container[Any]) -> "HighlightState":
        """This state if its ref names one of ``refs``, else an idle state."""
        if self._ref is not None and self._ref in refs:
            return self
        return HighlightState()

    def emphasis(self, ref: Hashable, style: EmphasisStyle) -> Emphasis:
        if self._ref is None:
            return Emphasis(opacity=1.0, scale=1.0, z_index=style.base_z_index, highlighted=False)
        if self.is_highlighted(ref):
            return Emphasis(opacity=1.0, scale=style.highlight_scale, z_index=style.raised_z_index, highlighted=True)
        return Emphasis(opacity=style.dimmed_opacity, scale=1.0, z_index=style.base_z_index, highlighted=False)

    def __repr__(self) -> str:
        return "HighlightState(Idle)" if self._ref is None else f"HighlightState(Highlighted({self._ref!r}))"
