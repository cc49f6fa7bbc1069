# palette_quant/brute_force.py
from __future__ import annotations

"""
Linear-scan nearest-colour matcher.

Reference oracle for the k-d tree: every palette entry is compared with the
query and the first entry at the minimal distance wins, so ties resolve to
the earliest palette position.
"""

from typing import Sequence

import numpy as np

from .core_types import Palette, RGBATuple, U8Rows, coerce_to_rgba_tuple, palette_to_array
from .distance import colour_distance, pairwise_distances
from .errors import EmptyPaletteError


def nearest_in_palette(query: RGBATuple, palette: Sequence[RGBATuple]) -> RGBATuple:
    """Closest palette colour to query; first-encountered wins ties."""
    if not palette:
        raise EmptyPaletteError("cannot match against an empty palette")
    query = coerce_to_rgba_tuple(query)
    best = palette[0]
    best_dist = colour_distance(query, best)
    for colour in palette[1:]:
        dist = colour_distance(query, colour)
        if dist < best_dist:
            best, best_dist = colour, dist
    return best


class BruteForceMatcher:
    """Matcher scanning the whole palette for every query. O(P) per query."""

    def __init__(self, palette: Sequence[RGBATuple]) -> None:
        colours: Palette = tuple(coerce_to_rgba_tuple(c) for c in palette)
        if not colours:
            raise EmptyPaletteError("cannot build a brute-force matcher from zero colours")
        self._palette = colours
        self._palette_rgba = palette_to_array(colours)

    @property
    def palette(self) -> Palette:
        return self._palette

    def __len__(self) -> int:
        return len(self._palette)

    def nearest(self, query: RGBATuple) -> RGBATuple:
        return nearest_in_palette(query, self._palette)

    def nearest_rows(self, rows: U8Rows, chunk: int = 65_536) -> U8Rows:
        """
        Map an (N, 4) uint8 array to palette colours in one pass.

        np.argmin returns the first minimum, matching nearest_in_palette ties.
        """
        out = np.empty((rows.shape[0], 4), dtype=np.uint8)
        for start in range(0, rows.shape[0], chunk):
            part = rows[start : start + chunk]
            idx = np.argmin(pairwise_distances(part, self._palette_rgba), axis=1)
            out[start : start + chunk] = self._palette_rgba[idx]
        return out


__all__ = ["nearest_in_palette", "BruteForceMatcher"]
