# palette_quant/image_grid.py
from __future__ import annotations

"""
RGBA pixel grid addressed by (x, y).

Bounds are inclusive on both axes: an image with origin (0, 0) and size
W x H spans x in [0, W-1] and y in [0, H-1]. Storage is a uint8 (H, W, 4)
array indexed [y - min_y, x - min_x].
"""

from dataclasses import dataclass
from typing import Iterator, Tuple

import numpy as np
from PIL import Image

from .constants import CHANNELS
from .core_types import RGBATuple, U8Image, assert_u8_image_rgba


@dataclass(frozen=True)
class Bounds:
    """Inclusive pixel rectangle."""

    min_x: int
    min_y: int
    max_x: int  # inclusive
    max_y: int  # inclusive

    @property
    def width(self) -> int:
        return self.max_x - self.min_x + 1

    @property
    def height(self) -> int:
        return self.max_y - self.min_y + 1

    def contains(self, x: int, y: int) -> bool:
        return self.min_x <= x <= self.max_x and self.min_y <= y <= self.max_y


class RGBAImage:
    """Width x height grid of RGBA colours with random-access get/set."""

    def __init__(self, pixels: np.ndarray, origin: Tuple[int, int] = (0, 0)) -> None:
        self._pixels: U8Image = assert_u8_image_rgba(pixels)
        self._origin = (int(origin[0]), int(origin[1]))

    @classmethod
    def blank(cls, bounds: Bounds) -> "RGBAImage":
        """Fully transparent black image covering bounds."""
        pixels = np.zeros((bounds.height, bounds.width, CHANNELS), dtype=np.uint8)
        return cls(pixels, origin=(bounds.min_x, bounds.min_y))

    @classmethod
    def from_pil(cls, im: Image.Image) -> "RGBAImage":
        return cls(np.array(im.convert("RGBA"), dtype=np.uint8))

    def to_pil(self) -> Image.Image:
        return Image.fromarray(np.ascontiguousarray(self._pixels))

    @property
    def pixels(self) -> U8Image:
        """Backing (H, W, 4) array."""
        return self._pixels

    @property
    def origin(self) -> Tuple[int, int]:
        return self._origin

    @property
    def bounds(self) -> Bounds:
        h, w = self._pixels.shape[:2]
        x0, y0 = self._origin
        return Bounds(x0, y0, x0 + w - 1, y0 + h - 1)

    @property
    def width(self) -> int:
        return int(self._pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self._pixels.shape[0])

    def _offset(self, x: int, y: int) -> Tuple[int, int]:
        if not self.bounds.contains(x, y):
            raise IndexError(f"pixel ({x}, {y}) outside {self.bounds}")
        return y - self._origin[1], x - self._origin[0]

    def at(self, x: int, y: int) -> RGBATuple:
        row, col = self._offset(x, y)
        r, g, b, a = self._pixels[row, col].tolist()
        return (r, g, b, a)

    def set(self, x: int, y: int, colour: RGBATuple) -> None:
        row, col = self._offset(x, y)
        self._pixels[row, col] = colour

    def coords(self) -> Iterator[Tuple[int, int]]:
        """Every (x, y) inside the inclusive bounds, each exactly once."""
        b = self.bounds
        for x in range(b.min_x, b.max_x + 1):
            for y in range(b.min_y, b.max_y + 1):
                yield x, y

    def __repr__(self) -> str:
        return f"RGBAImage({self.width}x{self.height}, origin={self._origin})"


__all__ = ["Bounds", "RGBAImage"]
