"""Command-line entry point for the Python CHIP-8 interpreter."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from pychip8.ui.app import AppConfig, Chip8App
from pychip8.video import MONOCHROME, parse_color


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="run.py",
        description="CHIP-8 interpreter",
    )
    parser.add_argument(
        "rom",
        nargs="?",
        type=Path,
        help="Path to the CHIP-8 program image",
    )
    parser.add_argument(
        "--rom",
        dest="rom_option",
        type=Path,
        help="Alternative way to pass the program image path",
    )
    parser.add_argument(
        "--scale",
        type=int,
        default=16,
        help="Integer window scale factor (default: 16)",
    )
    parser.add_argument(
        "--cycle-delay",
        type=float,
        default=1.0,
        help="Milliseconds between interpreter cycles (default: 1)",
    )
    parser.add_argument(
        "--fullscreen",
        action="store_true",
        help="Launch the interpreter in fullscreen mode",
    )
    parser.add_argument(
        "--wrap-sprites",
        action="store_true",
        help="Wrap sprites around the screen edges instead of clipping them",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Seed for the RND instruction's random source",
    )
    parser.add_argument(
        "--foreground",
        type=parse_color,
        default=MONOCHROME[1],
        help="Lit pixel colour as #rrggbb (default: #ffffff)",
    )
    parser.add_argument(
        "--background",
        type=parse_color,
        default=MONOCHROME[0],
        help="Unlit pixel colour as #rrggbb (default: #000000)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    rom_path = args.rom_option or args.rom
    if rom_path is None:
        parser.error("a ROM path is required")
    if not rom_path.exists():
        parser.error(f"ROM file not found: {rom_path}")
    if args.scale <= 0:
        parser.error("--scale must be positive")
    if args.cycle_delay <= 0:
        parser.error("--cycle-delay must be positive")

    config = AppConfig(
        rom_path=rom_path,
        scale=args.scale,
        cycle_delay_ms=args.cycle_delay,
        fullscreen=args.fullscreen,
        wrap_sprites=args.wrap_sprites,
        palette=(args.background, args.foreground),
        rng_seed=args.seed,
    )
    app = Chip8App(config)
    try:
        app.run()
    except RuntimeError as exc:
        parser.exit(1, f"run.py: {exc}\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
