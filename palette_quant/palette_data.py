# palette_quant/palette_data.py
from __future__ import annotations

"""
Built-in palette definitions and builders.

Exports:
  BUILTIN_PALETTES: dict[str, list[tuple[str, str]]]  # name -> [(hex, colour name), ...]
  builtin_palette(name) -> Palette
  build_name_lookup(hex_name_pairs) -> dict "#rrggbb" -> colour name
"""

from typing import Dict, List, Tuple

from .core_types import NameOf, Palette, hex_to_rgba

COMMODORE64: List[Tuple[str, str]] = [
    ("#000000", "Black"),
    ("#626262", "Dark Grey"),
    ("#898989", "Grey"),
    ("#adadad", "Light Grey"),
    ("#ffffff", "White"),
    ("#9f4e44", "Red"),
    ("#cb7e75", "Light Red"),
    ("#6d5412", "Brown"),
    ("#a1683c", "Orange"),
    ("#c9d487", "Yellow"),
    ("#9ae29b", "Light Green"),
    ("#5cab5e", "Green"),
    ("#6abfc6", "Cyan"),
    ("#887ecb", "Light Blue"),
    ("#50459b", "Blue"),
    ("#a057a3", "Purple"),
]

CGA: List[Tuple[str, str]] = [
    ("#000000", "Black"),
    ("#0000aa", "Blue"),
    ("#00aa00", "Green"),
    ("#00aaaa", "Cyan"),
    ("#aa0000", "Red"),
    ("#aa00aa", "Magenta"),
    ("#aa5500", "Brown"),
    ("#aaaaaa", "Light Grey"),
    ("#555555", "Dark Grey"),
    ("#5555ff", "Light Blue"),
    ("#55ff55", "Light Green"),
    ("#55ffff", "Light Cyan"),
    ("#ff5555", "Light Red"),
    ("#ff55ff", "Light Magenta"),
    ("#ffff55", "Yellow"),
    ("#ffffff", "White"),
]

GREY4: List[Tuple[str, str]] = [
    ("#000000", "Black"),
    ("#555555", "Dark Grey"),
    ("#aaaaaa", "Light Grey"),
    ("#ffffff", "White"),
]

BLACK_WHITE: List[Tuple[str, str]] = [
    ("#000000", "Black"),
    ("#ffffff", "White"),
]

BUILTIN_PALETTES: Dict[str, List[Tuple[str, str]]] = {
    "commodore64": COMMODORE64,
    "cga": CGA,
    "grey4": GREY4,
    "bw": BLACK_WHITE,
}


def builtin_palette(name: str) -> Palette:
    """Opaque RGBA palette for a built-in name (case-insensitive)."""
    key = name.lower()
    if key not in BUILTIN_PALETTES:
        raise KeyError(
            f"unknown palette {name!r}; choose from {', '.join(sorted(BUILTIN_PALETTES))}"
        )
    return tuple(hex_to_rgba(hx) for hx, _ in BUILTIN_PALETTES[key])


def build_name_lookup(hex_name_pairs: List[Tuple[str, str]]) -> NameOf:
    """Map lowercase '#rrggbb' -> colour name."""
    return {hx.lower(): name for hx, name in hex_name_pairs}


__all__ = [
    "COMMODORE64",
    "CGA",
    "GREY4",
    "BLACK_WHITE",
    "BUILTIN_PALETTES",
    "builtin_palette",
    "build_name_lookup",
]
