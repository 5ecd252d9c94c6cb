"""Command line entry point."""

from __future__ import annotations
import argparse
import sys
import traceback
from typing import List, Optional

from . import __version__
from .app import show
from .errors import PixviewError
from .formats import get_registry
from .logging import log, set_enabled
from .types import ViewerConfig

TITLE = "pixview - preview an image in a window."


def _rgb24(text: str) -> int:
    value = text[1:] if text.startswith('#') else text
    try:
        color = int(value, 16)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid colour: {text}")
    if not 0 <= color <= 0xFFFFFF or len(value) != 6:
        raise argparse.ArgumentTypeError(f"invalid colour: {text}")
    return color


def _non_negative(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {text}")
    if value < 0:
        raise argparse.ArgumentTypeError(f"must not be negative: {text}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pixview",
        description=TITLE,
        epilog="Default values are specified in brackets.",
    )
    parser.add_argument("file", nargs="?", metavar="FILE")
    parser.add_argument("-b", "--border", type=_non_negative, default=0, metavar="N",
                        help="window border size in pixels [0]")
    parser.add_argument("-s", "--scale", type=_non_negative, default=0, metavar="PERCENT",
                        help="initial image scale [0:auto]")
    parser.add_argument("-e", "--exit-unfocus", action="store_true",
                        help="exit if window lost focus [off]")
    parser.add_argument("--background", type=_rgb24, default=0x000000, metavar="RRGGBB",
                        help="window background colour [000000]")
    parser.add_argument("-q", "--quiet", action="store_true",
                        help="do not write log messages [off]")
    parser.add_argument("-v", "--version", action="store_true",
                        help="print version and exit")
    return parser


def format_version() -> str:
    lines = [TITLE, f"Version {__version__}.", "Image format support:"]
    for desc, available in get_registry().formats():
        lines.append(f"  {desc:<15}: {'YES' if available else 'NO'}")
    return "\n".join(lines)


def _make_renderer(config: ViewerConfig):
    # raylib is only needed once there is something to show
    from .renderer import Renderer
    return Renderer(config.border, config.background)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.version:
        print(format_version())
        return 0

    if args.file is None:
        print("File name expected, use `pixview --help`.", file=sys.stderr)
        return 1
    if not args.file:
        print("File name can not be empty", file=sys.stderr)
        return 1

    set_enabled(not args.quiet)
    config = ViewerConfig(
        scale=args.scale,
        border=args.border,
        exit_unfocus=args.exit_unfocus,
        background=args.background,
    )
    log(f"[MAIN] {args.file} scale={config.scale} border={config.border}")

    try:
        show(args.file, lambda: _make_renderer(config), config)
    except (PixviewError, OSError) as e:
        log(f"[MAIN][ERR] {e!r}")
        print(f"Unable to preview file {args.file}: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        log(f"[MAIN][CRITICAL] Unhandled exception: {e!r}")
        log(f"[MAIN][CRITICAL] Traceback:\n{traceback.format_exc()}")
        print(f"Unable to preview file {args.file}: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
