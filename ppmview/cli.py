from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from .constants import DEFAULT_JPEG_QUALITY
from .errors import DecodeError
from .io.ppm import decode_ppm, read_ppm_header


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="ppmview",
        description="PPM Viewer: decode, inspect and export PPM (P3/P6) images.",
    )
    parser.add_argument("path", nargs="?", help="PPM file to open (.ppm/.pnm)")
    parser.add_argument("--strict", action="store_true", help="Fail on truncated pixel data")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--info", action="store_true", help="Print header information and exit")
    mode.add_argument("--to-jpeg", metavar="OUT", help="Convert PATH to a JPEG file and exit")
    parser.add_argument(
        "--quality",
        type=float,
        default=DEFAULT_JPEG_QUALITY,
        help=f"JPEG quality 0.0-1.0 (default: {DEFAULT_JPEG_QUALITY})",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.epilog = "Without --info/--to-jpeg the GUI is launched."
    return parser.parse_args(argv)


def _read(path: str) -> bytes:
    with open(path, "rb") as f:
        return f.read()


def show_info(path: str, strict: bool) -> int:
    data = _read(path)
    header = read_ppm_header(data)
    image = decode_ppm(data, strict=strict)
    print(f"format: {header.format}")
    print(f"size: {header.width}x{header.height}")
    print(f"maxval: {header.max_color_value}")
    print(f"pixels: {len(image.pixels)}/{header.pixel_count}")
    return 0


def convert_to_jpeg(path: str, out: str, quality: float, strict: bool) -> int:
    from .io.jpeg_io import write_jpeg

    image = decode_ppm(_read(path), strict=strict)
    write_jpeg(out, image, quality)
    print(f"Saved {out} ({image.width}x{image.height})")
    return 0


def launch_gui(path: Optional[str], strict: bool) -> int:
    from .app import App

    app = App(strict=strict)
    if path:
        app.after_idle(lambda: app.load_ppm(path))
    app.mainloop()
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if (args.info or args.to_jpeg) and not args.path:
        print("error: PATH is required with --info/--to-jpeg", file=sys.stderr)
        return 2
    try:
        if args.info:
            return show_info(args.path, args.strict)
        if args.to_jpeg:
            return convert_to_jpeg(args.path, args.to_jpeg, args.quality, args.strict)
    except (DecodeError, OSError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    except MemoryError:
        print("error: out of memory while building the image buffer", file=sys.stderr)
        return 1
    return launch_gui(args.path, args.strict)
