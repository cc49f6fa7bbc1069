# palette_quant/errors.py
"""
Exceptions raised while reading palettes and building matchers.

  PaletteError          : base class (a ValueError)
  EmptyPaletteError     : a matcher was asked to work with zero colours
  MalformedLineError    : palette line is not exactly 6 characters
  InvalidHexDigitError  : palette line has a pair that is not a hex byte
  PaletteReadError      : the palette source could not be read
"""

from __future__ import annotations

from typing import Optional


class PaletteError(ValueError):
    """Raised when a palette cannot be parsed, read or used."""


class EmptyPaletteError(PaletteError):
    """Raised when a nearest-colour matcher is built from an empty palette."""

    def __init__(self, message: str = "palette is empty") -> None:
        super().__init__(message)


class _LineError(PaletteError):
    """Palette line error carrying the 1-based line number and raw text."""

    def __init__(self, message: str, line_no: int, line: str) -> None:
        super().__init__(f"line {line_no}: {message} (got {line!r})")
        self.line_no = line_no
        self.line = line


class MalformedLineError(_LineError):
    """Raised when a palette line is not exactly 6 characters long."""


class InvalidHexDigitError(_LineError):
    """Raised when a palette line contains a non-hex byte pair."""


class PaletteReadError(PaletteError):
    """Raised when the palette file cannot be opened or decoded."""

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.path = path


__all__ = [
    "PaletteError",
    "EmptyPaletteError",
    "MalformedLineError",
    "InvalidHexDigitError",
    "PaletteReadError",
]
