"""Command line entry point for the binary viewer."""
import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence

from binviewer import config
from binviewer.colors import ColorScheme
from binviewer.logging_config import setup_logging
from binviewer.settings import SettingsError, ViewSettings, format_size

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="binviewer",
        description="Visualize the raw bytes of a file as a zoomable pixel canvas",
    )
    parser.add_argument(
        "path",
        nargs="?",
        type=Path,
        default=Path(config.DEFAULT_INPUT_PATH),
        help=f"File to view (default: {config.DEFAULT_INPUT_PATH})",
    )
    parser.add_argument("--zoom", type=int, default=config.DEFAULT_ZOOM,
                        help="Screen pixels per byte cell")
    parser.add_argument("--width", dest="row_width", type=int, default=config.DEFAULT_ROW_WIDTH,
                        help="Byte cells per row")
    parser.add_argument("--offset", type=lambda s: int(s, 0), default=0,
                        help="Start offset in bytes (prefix with 0x for hex)")
    parser.add_argument("--stride", type=int, default=config.DEFAULT_STRIDE,
                        help="Buffer bytes advanced per column")
    parser.add_argument(
        "--scheme",
        choices=[s.value for s in ColorScheme],
        default=config.DEFAULT_COLOR_SCHEME,
        help="Initial color scheme",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--log-file", default=None, help="Also write the log to this file")
    return parser.parse_args(argv)


def load_buffer(path: Path) -> bytes:
    """Read the whole file into memory. OSError propagates to the caller."""
    with open(path, "rb") as f:
        return f.read()


def settings_from_args(args: argparse.Namespace, buffer_length: int) -> ViewSettings:
    settings = ViewSettings(
        zoom=args.zoom,
        row_width=args.row_width,
        offset=args.offset,
        stride=args.stride,
        color_scheme=ColorScheme(args.scheme),
        buffer_length=buffer_length,
    )
    settings.validate()
    return settings


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO, args.log_file)

    try:
        buffer = load_buffer(args.path)
    except OSError as exc:
        logger.error("Could not read %s: %s", args.path, exc)
        raise SystemExit(1) from exc
    logger.info("Loaded %s (%s)", args.path, format_size(len(buffer)))

    try:
        settings = settings_from_args(args, len(buffer))
    except SettingsError as exc:
        logger.error("Invalid view settings: %s", exc)
        raise SystemExit(2) from exc

    # Tk is only needed once a window opens
    from binviewer.app import BinViewerApp

    app = BinViewerApp(buffer, filename=str(args.path), settings=settings)
    app.mainloop()
