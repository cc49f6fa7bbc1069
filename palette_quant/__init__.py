"""
palette_quant package.

Purpose:
  Recolour images so every pixel becomes its nearest colour in a fixed palette.
  See quantize.py for the CLI.

Public API:
  PaletteIndex       : k-d tree over palette colours, exact nearest queries.
  BruteForceMatcher  : linear-scan matcher, the reference for ties.
  convert_pixel      : nearest palette colour for one pixel.
  convert_image      : quantize a whole RGBAImage with any matcher.
  build_matcher      : matcher by name ("kdtree" or "brute").
  colour_distance    : squared RGBA distance used by both matchers.
  parse_hex_palette  : RRGGBB-per-line text to palette.
  read_hex_palette   : same, from a file.
  load_palette       : built-in name or file path.
  RGBAImage          : (x, y) addressed pixel grid with inclusive bounds.

Quick start:
  from palette_quant import PaletteIndex, convert_image, load_palette
  from palette_quant.image_io import load_image, save_image
"""

__version__ = "0.1.0"

from . import core_types
from . import errors
from . import palette_data
from . import utils

from .brute_force import BruteForceMatcher, nearest_in_palette
from .distance import colour_distance
from .errors import (
    EmptyPaletteError,
    InvalidHexDigitError,
    MalformedLineError,
    PaletteError,
    PaletteReadError,
)
from .image_grid import Bounds, RGBAImage
from .kdtree import PaletteIndex
from .matchers import build_matcher
from .palette_io import load_palette, parse_hex_palette, read_hex_palette
from .quantizer import Matcher, convert_image, convert_pixel

__all__ = [
    "__version__",
    "core_types",
    "errors",
    "palette_data",
    "utils",
    "BruteForceMatcher",
    "nearest_in_palette",
    "colour_distance",
    "PaletteError",
    "EmptyPaletteError",
    "MalformedLineError",
    "InvalidHexDigitError",
    "PaletteReadError",
    "Bounds",
    "RGBAImage",
    "PaletteIndex",
    "build_matcher",
    "load_palette",
    "parse_hex_palette",
    "read_hex_palette",
    "Matcher",
    "convert_image",
    "convert_pixel",
]
