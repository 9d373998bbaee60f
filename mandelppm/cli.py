from __future__ import annotations

import argparse
import logging
import subprocess
import sys
from typing import Optional

from mandelppm.config import build_render_config, load_config, normalise_config
from mandelppm.output.sampling_data import write_sampling_data
from mandelppm.pipeline import render_to_stream
from mandelppm.shading import SHADERS
from mandelppm.util.logging_setup import configure_root_logging, get_logger
from mandelppm.util.manifest import build_manifest, write_manifest

def _git_commit() -> Optional[str]:
    try:
        r = subprocess.run(["git", "rev-parse", "HEAD"], capture_output=True, text=True, check=True)
        return r.stdout.strip()
    except (OSError, subprocess.CalledProcessError):
        return None

def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="mandelppm", description="Anti-aliased Mandelbrot renderer writing plain-text PPM.")
    p.add_argument("--config", type=str, default=None, help="Path to config JSON. If omitted, built-in defaults are used.")
    p.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG","INFO","WARNING","ERROR"], help="Log level.")
    p.add_argument("--log-file", type=str, default="", help="Log file path (rotating). Empty disables file logging.")
    sub = p.add_subparsers(dest="cmd", required=True)

    r = sub.add_parser("render", help="Render the image as P3 text.")
    r.add_argument("--output", "-o", type=str, default="-", help="Output PPM file, '-' for stdout.")
    r.add_argument("--png", type=str, default=None, help="Also save a PNG preview to this path.")
    r.add_argument("--width", type=int, default=None)
    r.add_argument("--height", type=int, default=None)
    r.add_argument("--iterations", type=int, default=None, help="Iteration budget per sample.")
    r.add_argument("--samples", dest="sample_count", type=int, default=None, help="Subpixel samples per pixel.")
    r.add_argument("--filter-radius", dest="filter_radius", type=float, default=None, help="Sample footprint in pixels.")
    r.add_argument("--window", type=float, nargs=4, default=None, metavar=("X0", "X1", "Y0", "Y1"), help="Complex-plane window.")
    r.add_argument("--tile-size", dest="tile_size", type=int, default=None, help="Square tile edge in pixels.")
    r.add_argument("--shader", type=str, default=None, choices=sorted(SHADERS), help="Shading strategy.")
    r.add_argument("--progress", action="store_true", help="Show a progress bar on stderr.")
    r.add_argument("--manifest", type=str, default=None, help="Write a JSON run manifest to this path.")

    s = sub.add_parser("samples", help="Write Halton/Mitchell sampling data files.")
    s.add_argument("--output-dir", type=str, default=".", help="Directory for the .dat files.")
    s.add_argument("--count", type=int, default=1024, help="Number of Halton samples.")
    s.add_argument("--filter-radius", dest="filter_radius", type=float, default=2.0)

    return p

def _overrides(args: argparse.Namespace) -> dict:
    out = {k: getattr(args, k) for k in ("width", "height", "iterations", "sample_count", "filter_radius", "window", "shader")}
    if args.tile_size is not None:
        out["tile_width"] = out["tile_height"] = args.tile_size
    return {k: v for k, v in out.items() if v is not None}

def _render(args: argparse.Namespace, cfg: dict) -> int:
    logger = get_logger()
    cfg.update(_overrides(args))
    config = build_render_config(normalise_config(cfg))

    if args.output == "-":
        render_to_stream(config, sys.stdout, png_path=args.png, progress=args.progress)
        sys.stdout.flush()
    else:
        with open(args.output, "w", encoding="ascii", buffering=1 << 20) as f:
            render_to_stream(config, f, png_path=args.png, progress=args.progress)
        logger.info("Image written: %s", args.output)

    if args.manifest:
        write_manifest(args.manifest, build_manifest(config=config, git_commit=_git_commit()))
        logger.info("Run manifest written: %s", args.manifest)
    return 0

def main(argv: Optional[list] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    log_level = getattr(logging, args.log_level.upper(), logging.INFO)
    log_file = args.log_file if args.log_file and args.log_file.strip() else None
    configure_root_logging(level=log_level, console=True, log_file=log_file)
    logger = get_logger()

    try:
        cfg = load_config(args.config)

        if args.cmd == "render":
            return _render(args, cfg)

        if args.cmd == "samples":
            if args.count <= 0 or not args.filter_radius > 0:
                raise ValueError("--count and --filter-radius must be positive.")
            write_sampling_data(args.output_dir, count=args.count, filter_radius=args.filter_radius)
            return 0

        raise RuntimeError("Unknown command.")
    except ValueError as e:
        logger.error("Invalid configuration: %s", e)
        return 2

if __name__ == "__main__":
    sys.exit(main())
