#!/usr/bin/env python3
"""
quantize.py
Recolour RGBA images to a fixed palette using nearest-colour matching.

Usage:
  python quantize.py INPUT --palette [NAME|FILE] --matcher [kdtree|brute] --outdir DIR --jobs N --verify --debug
  python quantize.py --list-palettes

Matchers:
  kdtree : k-d tree over the palette colours. Exact, sub-linear per query.
  brute  : linear scan over the palette. Reference result for ties.

Input:
  Any Pillow-readable image, or a folder of them. Every pixel is recoloured,
  alpha included: the matched palette colour's alpha replaces the source alpha.

Palette:
  A built-in name (see --list-palettes) or a text file with one RRGGBB per line.

Output:
  PNG. Writes <stem>_quant.png next to INPUT, or into --outdir.

Notes:
  --verify also runs the brute-force matcher and reports pixels the chosen
  matcher mapped strictly farther than brute force did. Exact ties may pick
  different palette colours; they are reported but never count as failures.
"""

from __future__ import annotations

import argparse
import os
import sys
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from palette_quant.brute_force import BruteForceMatcher
from palette_quant.constants import (
    DEFAULT_JOBS,
    DEFAULT_MATCHER,
    IMAGE_EXTS,
    MATCHER_NAMES,
    MISMATCH_THRESHOLD,
    OUTPUT_SUFFIX,
)
from palette_quant.core_types import NameOf, Palette
from palette_quant.errors import PaletteError
from palette_quant.image_grid import Bounds, RGBAImage
from palette_quant.image_io import is_image_file, load_image, save_image
from palette_quant.matchers import build_matcher
from palette_quant.palette_data import BUILTIN_PALETTES, build_name_lookup
from palette_quant.palette_io import load_palette
from palette_quant.quantizer import Matcher, convert_image
from palette_quant.utils import (
    # formatting
    format_total_duration_compact,
    format_seconds_compact,
    format_percentage,
    # reports
    colour_usage_report,
    mismatch_ratio,
    worse_match_ratio,
    mean_match_distance,
    # pretty logging
    print_banner,
    log,
    debug_log,
    warn,
    error,
    print_config_line,
    key_value_pairs_to_string,
    enable_line_buffered_stdout,
)

# CLI args


def build_arg_parser() -> argparse.ArgumentParser:
    """
    CLI arguments for palette quantization.

    Namespace fields:
      src: Path to image or folder (optional with --list-palettes)
      outdir: optional Path for outputs
      palette: built-in palette name or hex file path
      matcher: "kdtree" | "brute"
      jobs: files processed in parallel
      verify: cross-check against the brute-force matcher
      threshold: allowed fraction of worse matches for --verify
      list_palettes: print built-in palettes and exit
      debug: bool for verbose details
    """
    parser = argparse.ArgumentParser(
        prog="quantize",
        description="Recolour image(s) to the nearest colours of a fixed palette.",
    )
    parser.add_argument("src", type=Path, nargs="?", help="Input image or folder")
    parser.add_argument(
        "--outdir", type=Path, default=None, help="Output directory (optional)"
    )
    parser.add_argument(
        "--palette",
        default="commodore64",
        help="Built-in palette name or hex palette file (one RRGGBB per line).",
    )
    parser.add_argument(
        "--matcher",
        choices=list(MATCHER_NAMES),
        default=DEFAULT_MATCHER,
        help="Nearest-colour strategy.",
    )
    parser.add_argument(
        "--jobs", type=int, default=DEFAULT_JOBS, help="Files processed in parallel"
    )
    parser.add_argument(
        "--verify",
        action="store_true",
        help="Also map with the brute-force matcher and report worse matches.",
    )
    parser.add_argument(
        "--threshold",
        type=float,
        default=MISMATCH_THRESHOLD,
        help="Largest fraction (0..1) of worse matches accepted by --verify.",
    )
    parser.add_argument(
        "--list-palettes", action="store_true", help="List built-in palettes and exit"
    )
    parser.add_argument("--debug", action="store_true", help="Verbose details")
    return parser


@dataclass(frozen=True)
class RunContext:
    """Everything a worker needs to process one file. Shared read-only."""

    palette: Palette
    matcher_name: str
    matcher: Matcher
    reference: Optional[Matcher]
    name_of: NameOf
    outdir: Optional[Path]
    threshold: float
    debug: bool


def output_path_for(src_path: Path, outdir: Optional[Path]) -> Path:
    name = f"{src_path.stem}{OUTPUT_SUFFIX}.png"
    return (outdir / name) if outdir else src_path.with_name(name)


def list_input_files(folder: Path) -> List[Path]:
    """Images in folder, sorted by name, skipping earlier outputs."""
    files = [
        p
        for p in folder.iterdir()
        if p.is_file()
        and p.suffix.lower() in IMAGE_EXTS
        and not p.stem.endswith(OUTPUT_SUFFIX)
    ]
    files.sort(key=lambda p: p.name.lower())
    return files


def _format_bounds(b: Bounds) -> str:
    return f"({b.min_x},{b.min_y})..({b.max_x},{b.max_y})"


# Per-file processing


@dataclass
class FileResult:
    """Outcome of mapping one file; printed later by _report_file."""

    src_path: Path
    written: Path
    image: RGBAImage
    mapped: RGBAImage
    differing: Optional[float]
    mismatch: Optional[float]
    t_load: float
    t_map: float
    t_save: float
    t_verify: float


def _map_file(src_path: Path, ctx: RunContext) -> FileResult:
    """
    Process a single image path end-to-end without printing:
      load -> map -> save (-> verify against brute force).
    """
    t0 = time.perf_counter()
    image = load_image(src_path)
    t1 = time.perf_counter()
    mapped = convert_image(image, ctx.matcher)
    t2 = time.perf_counter()
    written = save_image(output_path_for(src_path, ctx.outdir), mapped)
    t3 = time.perf_counter()

    differing: Optional[float] = None
    mismatch: Optional[float] = None
    if ctx.reference is not None:
        want = convert_image(image, ctx.reference)
        differing = mismatch_ratio(mapped, want)
        mismatch = worse_match_ratio(image, mapped, want)
    t4 = time.perf_counter()

    return FileResult(
        src_path=src_path,
        written=written,
        image=image,
        mapped=mapped,
        differing=differing,
        mismatch=mismatch,
        t_load=t1 - t0,
        t_map=t2 - t1,
        t_save=t3 - t2,
        t_verify=t4 - t3,
    )


def _report_file(res: FileResult, ctx: RunContext) -> None:
    """Banner, colours used, verification verdict and timings for one file."""
    image = res.image
    print_banner(res.src_path.name)
    if ctx.debug:
        debug_log(
            key_value_pairs_to_string(
                [
                    ("Loaded", f"{image.width}x{image.height}"),
                    ("Bounds", _format_bounds(image.bounds)),
                ]
            )
        )

    log(f"Matcher: {ctx.matcher_name}")
    log(
        f"Wrote {res.written.name} | size={image.width}x{image.height} | palette_size={len(ctx.palette)}"
    )
    log("Colours used:")
    for hex_code, name, count in colour_usage_report(res.mapped, ctx.name_of):
        log(f"  {hex_code}  {name}: {count:,}")

    total_pixels = image.width * image.height
    log(f"Total pixels: {total_pixels:,}")

    if ctx.debug:
        if res.t_map > 0:
            rate_mpx_s = (total_pixels / res.t_map) / 1e6
            debug_log(
                f"throughput {rate_mpx_s:.2f} MPx/s  ({total_pixels / 1e6:.2f} MPx in {format_seconds_compact(res.t_map)})"
            )
        debug_log(f"mean match distance {mean_match_distance(image, res.mapped):.1f}")

    if res.mismatch is not None:
        verdict = "ok" if res.mismatch <= ctx.threshold else "FAILED"
        log(
            f"Verify vs brute: worse={format_percentage(res.mismatch, 3)}  "
            f"differing={format_percentage(res.differing or 0.0, 3)}  "
            f"threshold={format_percentage(ctx.threshold, 3)}  {verdict}"
        )

    total = res.t_load + res.t_map + res.t_save + res.t_verify
    if ctx.debug:
        debug_log(
            f"Total {format_total_duration_compact(total)}  "
            f"(load={format_seconds_compact(res.t_load)}, map={format_seconds_compact(res.t_map)}, "
            f"save={format_seconds_compact(res.t_save)}, verify={format_seconds_compact(res.t_verify)})"
        )
    else:
        log(f"Total time {format_total_duration_compact(total)}")


def _name_lookup_for(palette_arg: str) -> NameOf:
    pairs = BUILTIN_PALETTES.get(palette_arg.lower())
    return build_name_lookup(pairs) if pairs else {}


def _print_builtin_palettes() -> None:
    for name in sorted(BUILTIN_PALETTES):
        pairs = BUILTIN_PALETTES[name]
        log(f"{name} ({len(pairs)} colours)")
        for hex_code, colour_name in pairs:
            log(f"  {hex_code}  {colour_name}")


# Entry point


def main(argv: Optional[List[str]] = None) -> None:
    """
    CLI entry point.

    Handles single file or folder. In folder mode supports --jobs parallelism
    while preserving readable output ordering. Exit status 2 for a missing
    input or a bad palette, 1 when --verify exceeds the threshold.
    """
    enable_line_buffered_stdout()
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if args.list_palettes:
        _print_builtin_palettes()
        return
    if args.src is None:
        parser.error("the following arguments are required: src")

    print_config_line(
        "run",
        [
            ("CPU cores", os.cpu_count() or 1),
            ("Matcher", args.matcher),
            ("Palette", args.palette),
            ("Jobs", args.jobs),
            ("Verify", bool(args.verify)),
        ],
        debug=False,
    )

    src = args.src
    if not src.exists():
        error(f"not found: {src}")
        sys.exit(2)

    try:
        palette = load_palette(args.palette)
        matcher = build_matcher(args.matcher, palette)
        reference = BruteForceMatcher(palette) if args.verify else None
    except PaletteError as e:
        error(str(e))
        sys.exit(2)

    ctx = RunContext(
        palette=palette,
        matcher_name=args.matcher,
        matcher=matcher,
        reference=reference,
        name_of=_name_lookup_for(args.palette),
        outdir=args.outdir,
        threshold=args.threshold,
        debug=args.debug,
    )
    if args.debug:
        depth = getattr(matcher, "depth", None)
        debug_log(
            key_value_pairs_to_string(
                [("Palette size", len(palette)), ("Tree depth", depth if depth else "-")]
            )
        )

    if src.is_dir():
        files = list_input_files(src)
        if args.debug:
            debug_log(key_value_pairs_to_string([("Images", len(files)), ("Jobs", args.jobs)]))
        unreadable = [p for p in files if not is_image_file(p)]
        for p in unreadable:
            warn(f"skipping unreadable image {p.name}")
        files = [p for p in files if p not in unreadable]
    else:
        files = [src]

    results: List[FileResult] = []
    if args.jobs <= 1 or len(files) <= 1:
        for p in files:
            res = _map_file(p, ctx)
            _report_file(res, ctx)
            results.append(res)
    else:
        # Workers only compute; reports are printed here in file order.
        with ThreadPoolExecutor(max_workers=args.jobs) as ex:
            futures = [ex.submit(_map_file, p, ctx) for p in files]
            for fu in futures:
                res = fu.result()
                _report_file(res, ctx)
                results.append(res)

    failed = [
        r for r in results if r.mismatch is not None and r.mismatch > ctx.threshold
    ]
    if failed:
        error(f"verification failed for {len(failed)} of {len(results)} file(s)")
        sys.exit(1)


if __name__ == "__main__":
    main()
