# palette_quant/quantizer.py
from __future__ import annotations

"""
Image quantizer.

Replaces every pixel with the colour a matcher picks for it. Any object with a
nearest(query) -> colour method works as a matcher (PaletteIndex,
BruteForceMatcher). Output alpha is whatever the matched palette colour
carries; input alpha only takes part in the distance.
"""

from typing import Protocol, Tuple

import numpy as np

from .core_types import RGBATuple, U8Image, U8Rows
from .image_grid import RGBAImage


class Matcher(Protocol):
    def nearest(self, query: RGBATuple) -> RGBATuple: ...


def convert_pixel(colour: RGBATuple, matcher: Matcher) -> RGBATuple:
    """Nearest palette colour for a single pixel."""
    return matcher.nearest(colour)


def _unique_colours_with_inverse(pixels: U8Image) -> Tuple[U8Rows, np.ndarray]:
    """
    Unique RGBA rows and the inverse index.

    Returns:
      unique_rgba: uint8 [U,4]
      inverse_idx: int64 [H*W], unique_rgba[inverse_idx] rebuilds the flattened pixels
    """
    flat = pixels.reshape(-1, pixels.shape[-1])
    unique_rgba, inverse_idx = np.unique(flat, axis=0, return_inverse=True)
    return (
        unique_rgba.astype(np.uint8, copy=False),
        inverse_idx.reshape(-1).astype(np.int64, copy=False),
    )


def map_unique_colours(unique_rgba: U8Rows, matcher: Matcher) -> U8Rows:
    """Matched colour for each row of a (U, 4) array."""
    nearest_rows = getattr(matcher, "nearest_rows", None)
    if callable(nearest_rows):
        return nearest_rows(unique_rgba)
    mapped = np.empty_like(unique_rgba)
    for i, (r, g, b, a) in enumerate(unique_rgba.tolist()):
        mapped[i] = matcher.nearest((r, g, b, a))
    return mapped


def convert_image(image: RGBAImage, matcher: Matcher) -> RGBAImage:
    """
    New image with the same bounds where every pixel is matcher.nearest(pixel).

    Each distinct colour is matched once and scattered back with the inverse
    index; matchers are deterministic so this equals a per-pixel loop.
    The input image is not modified.
    """
    output = RGBAImage.blank(image.bounds)
    if image.pixels.size == 0:
        return output
    unique_rgba, inverse_idx = _unique_colours_with_inverse(image.pixels)
    mapped = map_unique_colours(unique_rgba, matcher)
    output.pixels[...] = mapped[inverse_idx].reshape(image.pixels.shape)
    return output


def convert_pixels(image: RGBAImage, matcher: Matcher) -> RGBAImage:
    """Per-coordinate version of convert_image. Slow; kept as the plain reference loop."""
    output = RGBAImage.blank(image.bounds)
    for x, y in image.coords():
        output.set(x, y, matcher.nearest(image.at(x, y)))
    return output


__all__ = [
    "Matcher",
    "convert_pixel",
    "map_unique_colours",
    "convert_image",
    "convert_pixels",
]
