# palette_quant/matchers.py
from __future__ import annotations

"""
Matcher selection by name.

  "kdtree" : PaletteIndex, k-d tree search
  "brute"  : BruteForceMatcher, linear scan (reference)
"""

from typing import Sequence

from .brute_force import BruteForceMatcher
from .constants import MATCHER_NAMES
from .core_types import RGBATuple
from .kdtree import PaletteIndex
from .quantizer import Matcher


def build_matcher(name: str, palette: Sequence[RGBATuple]) -> Matcher:
    """
    Build the named matcher over palette.

    Raises:
      ValueError: unknown matcher name.
      EmptyPaletteError: palette has no colours.
    """
    if name == "kdtree":
        return PaletteIndex.build(palette)
    if name == "brute":
        return BruteForceMatcher(palette)
    raise ValueError(f"unknown matcher {name!r}; expected one of {MATCHER_NAMES}")


__all__ = ["build_matcher"]
