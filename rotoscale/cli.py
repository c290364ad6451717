"""Command-line interface for rotating images and rendering spin animations.

Examples:
    rotoscale rotate sprite.png rotated.png --degrees 30 --scale-x 2
    rotoscale spin sprite.png spin.gif --frames 64 --delay 10
"""

from __future__ import annotations

import argparse
import logging
import math
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from rotoscale.config import RenderConfig
from rotoscale.io.export import load_texture, save_gif, save_png
from rotoscale.raster.rotate import rotate
from rotoscale.spin import spin_frames


def eprint(*args: object) -> None:
    print(*args, file=sys.stderr)


def _add_scale_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--scale-x", type=int, default=1, dest="scale_x",
                   help="Horizontal magnification, integer >= 1 (default: 1)")
    p.add_argument("--scale-y", type=int, default=1, dest="scale_y",
                   help="Vertical magnification, integer >= 1 (default: 1)")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="rotoscale",
        description="Rotate and upscale RGBA images with nearest-neighbor sampling.",
    )
    p.add_argument("--verbose", action="store_true", help="Enable debug logging")
    p.add_argument("--debug-bounds", action="store_true", dest="debug_bounds",
                   help="Paint the scanned start/end column of every row (diagnostics only)")
    sub = p.add_subparsers(dest="command", required=True)

    rot = sub.add_parser("rotate", help="Rotate one image and write a PNG")
    rot.add_argument("input", help="Input image path (any format Pillow reads)")
    rot.add_argument("output", help="Output PNG path")
    angle = rot.add_mutually_exclusive_group()
    angle.add_argument("--degrees", type=float, default=None, help="Rotation angle in degrees")
    angle.add_argument("--radians", type=float, default=None, help="Rotation angle in radians")
    _add_scale_args(rot)

    spin = sub.add_parser("spin", help="Render a full-turn animation and write a GIF")
    spin.add_argument("input", help="Input image path (any format Pillow reads)")
    spin.add_argument("output", help="Output GIF path")
    spin.add_argument("--frames", type=int, default=64, help="Number of frames in one turn (default: 64)")
    spin.add_argument("--delay", type=int, default=100, help="Frame delay in milliseconds (default: 100)")
    spin.add_argument("--workers", type=int, default=None, help="Worker count (default: runtime choice)")
    _add_scale_args(spin)

    return p


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def _angle_radians(args: argparse.Namespace) -> float:
    if args.radians is not None:
        return args.radians
    if args.degrees is not None:
        return math.radians(args.degrees)
    return 0.0


def run(args: argparse.Namespace) -> int:
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        config = RenderConfig.from_env()
        if args.debug_bounds:
            config = replace(config, debug_bounds=True)

        texture, width = load_texture(Path(args.input).expanduser())
        out_path = Path(args.output).expanduser()

        if args.command == "rotate":
            rotated = rotate(
                texture, width, _angle_radians(args), args.scale_x, args.scale_y,
                debug_bounds=config.debug_bounds,
            )
            save_png(out_path, rotated.buffer, rotated.width)
            print(f"Done. Wrote: {out_path} ({rotated.width}x{rotated.height})")
            return 0

        animation = spin_frames(
            texture, width, args.frames, args.scale_x, args.scale_y,
            max_workers=args.workers, config=config,
        )
        save_gif(out_path, animation.frames, animation.width, frame_delay=args.delay)
        print(f"Done. Wrote: {out_path} ({len(animation)} frames, {animation.width}x{animation.height})")
        return 0

    except Exception as ex:
        eprint(f"Error: {ex}")
        return 2


def main(argv: Optional[List[str]] = None) -> int:
    """Console-script entrypoint."""
    return run(parse_args(argv))


if __name__ == "__main__":
    raise SystemExit(main())
