"""
Global constants and tunables used across the project.

- Colour layout (CHANNELS, OPAQUE, MAX_DISTANCE)
- Palette text format (HEX_LINE_LEN)
- CLI defaults (output suffix, image extensions, matcher, jobs)
- Verification (MISMATCH_THRESHOLD)
"""
from __future__ import annotations

from typing import FrozenSet, Tuple

# ==============
# Colour layout
# ==============
CHANNELS: int = 4
OPAQUE: int = 255

# Largest possible squared distance between two RGBA colours (4 * 255**2).
MAX_DISTANCE: int = CHANNELS * 255 * 255

# ===================
# Palette text format
# ===================
HEX_LINE_LEN: int = 6

# ============
# CLI defaults
# ============
OUTPUT_SUFFIX: str = "_quant"
IMAGE_EXTS: FrozenSet[str] = frozenset(
    {".png", ".jpg", ".jpeg", ".webp", ".gif", ".bmp"}
)
MATCHER_NAMES: Tuple[str, str] = ("kdtree", "brute")
DEFAULT_MATCHER: str = "kdtree"
DEFAULT_JOBS: int = 2


# ============
# Verification
# ============
# Fraction of pixels (0..1) allowed to match strictly farther than the
# brute-force matcher does. Exact ties never count.
MISMATCH_THRESHOLD: float = 0.0

__all__ = [
    "CHANNELS",
    "OPAQUE",
    "MAX_DISTANCE",
    "HEX_LINE_LEN",
    "OUTPUT_SUFFIX",
    "IMAGE_EXTS",
    "MATCHER_NAMES",
    "DEFAULT_MATCHER",
    "DEFAULT_JOBS",
    "MISMATCH_THRESHOLD",
]
