# palette_quant/core_types.py
from __future__ import annotations

"""
Core type aliases and lightweight helpers shared by the matchers.
"""

from typing import Mapping, Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

from .constants import CHANNELS, OPAQUE

# Basic aliases

RGBATuple = Tuple[int, int, int, int]
Palette = Tuple[RGBATuple, ...]
HexStr = str
NameOf = Mapping[HexStr, str]  # "#rrggbb" -> human-readable name

U8Image = NDArray[np.uint8]  # (H, W, 4)
U8Rows = NDArray[np.uint8]  # (N, 4)


# Small helpers


def rgba_to_hex(rgba: RGBATuple) -> HexStr:
    """RGBA tuple to lowercase hex string '#rrggbb', or '#rrggbbaa' when not opaque."""
    text = f"#{rgba[0]:02x}{rgba[1]:02x}{rgba[2]:02x}"
    if rgba[3] != OPAQUE:
        text += f"{rgba[3]:02x}"
    return text


def hex_to_rgba(hex_str: str) -> RGBATuple:
    """Parse '#rrggbb' or '#rrggbbaa' (case-insensitive) into an RGBA tuple."""
    s = hex_str.strip().lower()
    if not s.startswith("#"):
        raise ValueError("hex must start with '#'")
    if len(s) == 7:
        s += f"{OPAQUE:02x}"
    if len(s) != 9:
        raise ValueError("hex must be '#rrggbb' or '#rrggbbaa'")
    return (int(s[1:3], 16), int(s[3:5], 16), int(s[5:7], 16), int(s[7:9], 16))


def coerce_to_rgba_tuple(
    value: Union[Sequence[int], NDArray[np.generic]]
) -> RGBATuple:
    """
    Coerce a 3- or 4-length sequence or array to an (r, g, b, a) tuple.
    Missing alpha is taken as opaque.
    """
    seq = value.tolist() if isinstance(value, np.ndarray) else list(value)
    if len(seq) == 3:
        seq.append(OPAQUE)
    if len(seq) != CHANNELS:
        raise ValueError(f"expected 3 or 4 channels, got {len(seq)}")
    r, g, b, a = (int(c) for c in seq)
    for c in (r, g, b, a):
        if not 0 <= c <= 255:
            raise ValueError(f"channel value out of range 0..255: {c}")
    return (r, g, b, a)


def palette_to_array(palette: Sequence[RGBATuple]) -> U8Rows:
    """Palette as a (P, 4) uint8 array in palette order."""
    out = np.zeros((len(palette), CHANNELS), dtype=np.uint8)
    for i, rgba in enumerate(palette):
        out[i] = rgba
    return out


def assert_u8_image_rgba(image: np.ndarray) -> U8Image:
    """Validate a uint8 (H,W,4) image and return it typed as U8Image."""
    if image.dtype != np.uint8 or image.ndim != 3 or image.shape[-1] != CHANNELS:
        raise TypeError("expected uint8 (H,W,4) image")
    return image  # type: ignore[return-value]


__all__ = [
    "RGBATuple",
    "Palette",
    "HexStr",
    "NameOf",
    "U8Image",
    "U8Rows",
    "rgba_to_hex",
    "hex_to_rgba",
    "coerce_to_rgba_tuple",
    "palette_to_array",
    "assert_u8_image_rgba",
]
