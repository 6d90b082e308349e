#!/usr/bin/env python3
"""
SNES Paint command line exporter
Converts an indexed PNG into .vram and .pal files
"""

import argparse
import sys
from pathlib import Path

from .constants import PALETTE_EXTENSION, VRAM_EXTENSION
from .controllers.canvas_controller import CanvasController
from .logging_config import setup_logging


def main(argv=None):
    parser = argparse.ArgumentParser(description="Export an indexed image as SNES tiles and palette")
    parser.add_argument("image", help="Indexed PNG (8x8, 16x16, 32x32 or 64x64)")
    parser.add_argument("output", nargs="?", help="Output path without extension (default: next to the image)")
    parser.add_argument("--pad-tiles", action="store_true", help="Append 16 zero bytes after each tile")
    parser.add_argument("--log-level", default="WARNING", help="DEBUG, INFO, WARNING or ERROR")
    parser.add_argument("--log-file", help="Also write log messages to this file")

    args = parser.parse_args(argv)

    setup_logging(args.log_level, args.log_file)

    controller = CanvasController()
    controller.error.connect(lambda message: print(f"Error: {message}", file=sys.stderr))

    if not controller.load_image(args.image):
        return 1

    base = Path(args.output) if args.output else Path(args.image).with_suffix("")
    if not controller.export_to_base(base, pad_tiles=args.pad_tiles or None):
        return 1

    print(f"Exported {base.with_suffix(VRAM_EXTENSION)} and {base.with_suffix(PALETTE_EXTENSION)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
