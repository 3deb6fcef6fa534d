from __future__ import annotations

from typing import Sequence, Tuple, Union

import numpy as np


CATEGORICAL_PALETTE: Tuple[str, ...] = (
    "#3b82f6",  # primary
    "#10b981",  # secondary
    "#f59e0b",  # warning
    "#ef4444",  # danger
    "#8b5cf6",  # purple
    "#ec4899",  # pink
    "#14b8a6",  # teal
    "#f97316",  # orange
    "#6b7280",  # gray
    "#6366f1",  # indigo
)

LINE_PALETTE: Tuple[str, ...] = CATEGORICAL_PALETTE[:8]

SEQUENTIAL_BLUES: Tuple[str, ...] = (
    "#f7fbff",  # lightest
    "#deebf7",
    "#c6dbef",
    "#9ecae1",
    "#6baed6",
    "#4292c6",
    "#2171b5",
    "#08519c",
    "#08306b",  # darkest
)


def cycle_color(palette: Sequence[str], index: int) -> str:
    return palette[index % len(palette)]


def bucket_indices(values: Union[Sequence[float], np.ndarray], palette_len: int) -> np.ndarray:
    """Quantize normalized values in [0, 1] to palette indices.

    Values outside [0, 1] are clamped and NaN maps to 0, so every index is a
    valid position in a palette of ``palette_len`` entries.
    """
    if palette_len < 1:
        raise ValueError("palette must contain at least one color")
    t = np.nan_to_num(np.asarray(values, dtype=float), nan=0.0, posinf=1.0, neginf=0.0)
    t = np.clip(t, 0.0, 1.0)
    # t == 1 would otherwise land one past the last bucket on wider grids
    idx = np.minimum(np.floor(t * (palette_len - 1)), palette_len - 1)
    return idx.astype(int)


def bucket_index(t: float, palette_len: int) -> int:
    return int(bucket_indices([t], palette_len)[0])


def bucket_color(t: float, palette: Sequence[str]) -> str:
    return palette[bucket_index(t, len(palette))]
