# palette_quant/palette_io.py
from __future__ import annotations

"""
Hex palette files.

Format: one colour per line, exactly six hex digits RRGGBB (any case), no
header, no comments, no blank lines. Every colour is opaque.

Functions:
  parse_hex_palette(lines) -> Palette
  read_hex_palette(path) -> Palette
  format_hex_palette(palette) -> list of lines
  write_hex_palette(path, palette) -> Path
  load_palette(source) -> Palette   (built-in name or file path)
"""

import string
from pathlib import Path
from typing import Iterable, List, Sequence, Union

from .constants import HEX_LINE_LEN, OPAQUE
from .core_types import Palette, RGBATuple
from .errors import (
    InvalidHexDigitError,
    MalformedLineError,
    PaletteReadError,
)
from .palette_data import BUILTIN_PALETTES, builtin_palette

_HEX_DIGITS = frozenset(string.hexdigits)


def _strip_line_ending(line: str) -> str:
    if line.endswith("\n"):
        line = line[:-1]
    if line.endswith("\r"):
        line = line[:-1]
    return line


def _parse_hex_byte(pair: str, line_no: int, line: str) -> int:
    # int(..., 16) alone would also accept signs, spaces and underscores.
    if len(pair) != 2 or not all(ch in _HEX_DIGITS for ch in pair):
        raise InvalidHexDigitError(f"invalid hex byte {pair!r}", line_no, line)
    return int(pair, 16)


def parse_hex_line(line: str, line_no: int = 1) -> RGBATuple:
    """Parse one 'RRGGBB' line (line ending allowed) into an opaque RGBA tuple."""
    text = _strip_line_ending(line)
    if len(text) != HEX_LINE_LEN:
        raise MalformedLineError(
            f"expected {HEX_LINE_LEN} chars per line, got {len(text)}", line_no, text
        )
    r = _parse_hex_byte(text[0:2], line_no, text)
    g = _parse_hex_byte(text[2:4], line_no, text)
    b = _parse_hex_byte(text[4:6], line_no, text)
    return (r, g, b, OPAQUE)


def parse_hex_palette(lines: Iterable[str]) -> Palette:
    """
    Parse hex lines into a palette, in input order.

    Stops at the first bad line. Empty input gives an empty palette; it is the
    matchers that reject empty palettes.

    Raises:
      MalformedLineError: a line is not exactly 6 characters.
      InvalidHexDigitError: a byte pair is not hexadecimal.
    """
    colours: List[RGBATuple] = []
    for line_no, line in enumerate(lines, start=1):
        colours.append(parse_hex_line(line, line_no))
    return tuple(colours)


def read_hex_palette(path: Union[str, Path]) -> Palette:
    """
    Read a hex palette file.

    Raises:
      PaletteReadError: the file cannot be opened, read or decoded.
      MalformedLineError, InvalidHexDigitError: as parse_hex_palette.
    """
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8", newline="") as fh:
            return parse_hex_palette(fh)
    except (OSError, UnicodeDecodeError) as e:
        raise PaletteReadError(
            f"error while reading palette file {path}: {e}", path=str(path)
        ) from e


def format_hex_palette(palette: Sequence[RGBATuple]) -> List[str]:
    """Palette as lowercase 'rrggbb' lines. Alpha is dropped."""
    return [f"{r:02x}{g:02x}{b:02x}" for r, g, b, _a in palette]


def write_hex_palette(path: Union[str, Path], palette: Sequence[RGBATuple]) -> Path:
    path = Path(path)
    text = "".join(f"{line}\n" for line in format_hex_palette(palette))
    path.write_text(text, encoding="utf-8")
    return path


def load_palette(source: Union[str, Path]) -> Palette:
    """
    Resolve a palette from a built-in name or a hex file path.

    Built-in names win over files of the same name in the working directory.
    A missing file raises PaletteReadError like any other read fault.
    """
    if isinstance(source, str) and source.lower() in BUILTIN_PALETTES:
        return builtin_palette(source)
    return read_hex_palette(source)


__all__ = [
    "parse_hex_line",
    "parse_hex_palette",
    "read_hex_palette",
    "format_hex_palette",
    "write_hex_palette",
    "load_palette",
]
