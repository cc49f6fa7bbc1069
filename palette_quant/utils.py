# palette_quant/utils.py
from __future__ import annotations

"""
Shared utilities for palette_quant.

Includes time formatting, image comparison and colour usage reports used by
the CLI, and tidy logging.
"""

from typing import Any, Iterable, List, Tuple

import numpy as np

from .core_types import NameOf, RGBATuple, rgba_to_hex
from .image_grid import RGBAImage


#  Time formatting


def format_seconds_compact(seconds: float) -> str:
    """Human-friendly seconds: '<ms>ms', '<s>s', or 'Mm Ss'."""
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f}ms"
    if seconds < 60.0:
        return f"{seconds:.3f}s"
    minutes = int(seconds // 60)
    return f"{minutes}m {seconds - 60 * minutes:.1f}s"


def format_total_duration_compact(seconds: float) -> str:
    """Compact total duration: 'Mm Ss', 'Ss.s', or 'ms'."""
    if seconds >= 60.0:
        minutes = int(seconds // 60)
        rem = int(round(seconds - 60 * minutes))
        return f"{minutes}m {rem}s"
    if seconds >= 1.0:
        return f"{seconds:.1f}s"
    return f"{seconds * 1000.0:.1f}ms"


# Image comparison / reports


def mismatch_ratio(got: RGBAImage, want: RGBAImage) -> float:
    """
    Fraction of pixels (0..1) that differ between two images with equal bounds.

    Raises:
      ValueError: bounds differ.
    """
    if got.bounds != want.bounds:
        raise ValueError(f"bounds differ: {got.bounds} != {want.bounds}")
    total = got.width * got.height
    if total == 0:
        return 0.0
    differs = np.any(got.pixels != want.pixels, axis=-1)
    return float(np.count_nonzero(differs)) / float(total)


def worse_match_ratio(source: RGBAImage, got: RGBAImage, want: RGBAImage) -> float:
    """
    Fraction of pixels (0..1) where got is strictly farther from source than want.

    Exact ties count as agreement, so two exact matchers always give 0.0.

    Raises:
      ValueError: bounds differ.
    """
    if not (source.bounds == got.bounds == want.bounds):
        raise ValueError(f"bounds differ: {got.bounds} != {want.bounds}")
    total = source.width * source.height
    if total == 0:
        return 0.0
    src = source.pixels.astype(np.int64)
    got_d = np.sum((got.pixels.astype(np.int64) - src) ** 2, axis=-1)
    want_d = np.sum((want.pixels.astype(np.int64) - src) ** 2, axis=-1)
    return float(np.count_nonzero(got_d > want_d)) / float(total)


def mean_match_distance(source: RGBAImage, mapped: RGBAImage) -> float:
    """Mean squared RGBA distance between source pixels and their mapped colours."""
    if source.pixels.size == 0:
        return 0.0
    diff = source.pixels.astype(np.int64) - mapped.pixels.astype(np.int64)
    return float(np.mean(np.sum(diff * diff, axis=-1)))


def colour_usage_report(
    image: RGBAImage, name_of: NameOf
) -> List[Tuple[str, str, int]]:
    """
    Compute a simple colour usage report over all pixels.

    Returns a list of (hex, name, count) sorted by count descending.
    """
    if image.pixels.size == 0:
        return []
    flat = image.pixels.reshape(-1, 4)
    uniques, counts = np.unique(flat, axis=0, return_counts=True)
    report: List[Tuple[str, str, int]] = []
    for rgba_row, count in sorted(zip(uniques.tolist(), counts), key=lambda x: -int(x[1])):
        rgba: RGBATuple = (rgba_row[0], rgba_row[1], rgba_row[2], rgba_row[3])
        hex_str = rgba_to_hex(rgba)
        report.append((hex_str, name_of.get(hex_str[:7], "?"), int(count)))
    return report


#  CLI logging


def enable_line_buffered_stdout() -> None:
    """
    Enable line-buffered stdout when supported.
    Helps live progress printing in terminals that expose .reconfigure().
    """
    import sys

    reconfig = getattr(sys.stdout, "reconfigure", None)
    if callable(reconfig):
        try:
            reconfig(line_buffering=True, write_through=True)
        except (ValueError, OSError):
            pass


# Pretty logging


def _format_value(value: Any) -> str:
    """'on'/'off' for bools, 1,234 style for ints, str() otherwise."""
    if isinstance(value, bool):
        return "on" if value else "off"
    if isinstance(value, int):
        return f"{value:,}"
    return str(value)


def format_percentage(x: float, decimals: int = 1) -> str:
    """Format a 0..1 fraction as a percentage."""
    return f"{x * 100.0:.{decimals}f}%"


def key_value_pairs_to_string(
    pairs: Iterable[Tuple[str, Any]], sep: str = "  ", eq: str = ": "
) -> str:
    """
    Format (name, value) pairs as 'Name: value' blocks separated by sep.
    """
    return sep.join(f"{name}{eq}{_format_value(value)}" for name, value in pairs)


def print_config_line(
    section: str, pairs: Iterable[Tuple[str, Any]], debug: bool
) -> None:
    """
    Emit a single human-readable config line, e.g.:
      [run] Matcher: kdtree  Palette: commodore64  Jobs: 2
    Routes to debug_log() when debug=True, else to log().
    """
    line = f"[{section}] {key_value_pairs_to_string(pairs)}"
    (debug_log if debug else log)(line)


def print_banner(title: str) -> None:
    """Section banner."""
    print(f"\n=== {title} ===", flush=True)


def log(message: str) -> None:
    """Plain log line."""
    print(message, flush=True)


def debug_log(message: str) -> None:
    """Debug log line."""
    print(f"[debug] {message}", flush=True)


def warn(message: str) -> None:
    """Warning log line."""
    print(f"[warn] {message}", flush=True)


def error(message: str) -> None:
    """Error log line to stderr."""
    import sys

    print(f"[error] {message}", file=sys.stderr, flush=True)


__all__ = [
    "format_seconds_compact",
    "format_total_duration_compact",
    "mismatch_ratio",
    "worse_match_ratio",
    "mean_match_distance",
    "colour_usage_report",
    "enable_line_buffered_stdout",
    "format_percentage",
    "key_value_pairs_to_string",
    "print_config_line",
    "print_banner",
    "log",
    "debug_log",
    "warn",
    "error",
]
