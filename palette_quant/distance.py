# palette_quant/distance.py
from __future__ import annotations

"""
Colour distance in RGBA space.

The metric is the squared Euclidean distance over the four channels. Channels
are widened before subtracting (Python ints for the scalar form, int64 for the
vectorised forms) so numpy uint8 inputs never wrap.
"""

import numpy as np

from .constants import CHANNELS
from .core_types import RGBATuple, U8Rows


def colour_distance(a: RGBATuple, b: RGBATuple) -> int:
    """Squared Euclidean distance dr² + dg² + db² + da²."""
    dr = int(a[0]) - int(b[0])
    dg = int(a[1]) - int(b[1])
    db = int(a[2]) - int(b[2])
    da = int(a[3]) - int(b[3])
    return dr * dr + dg * dg + db * db + da * da


def colour_distances(query: RGBATuple, palette_rgba: U8Rows) -> np.ndarray:
    """Distances from one colour to every row of a (P, 4) array. Returns int64 [P]."""
    diff = palette_rgba.astype(np.int64) - np.asarray(query, dtype=np.int64)
    return np.sum(diff * diff, axis=1)


def pairwise_distances(rows: U8Rows, palette_rgba: U8Rows) -> np.ndarray:
    """Distances between every row and every palette row. Returns int64 [N, P]."""
    diff = rows.astype(np.int64)[:, None, :] - palette_rgba.astype(np.int64)[None, :, :]
    return np.sum(diff * diff, axis=2)


def axis_channel(depth: int) -> int:
    """Channel a k-d tree level splits on."""
    return depth % CHANNELS


__all__ = [
    "colour_distance",
    "colour_distances",
    "pairwise_distances",
    "axis_channel",
]
