"""
settings.py

ViewSettings: the mutable view state shared between the control panel and
the frame renderer. The renderer only reads it; every mutation below keeps
the invariants (zoom, row_width, stride >= 1; offsets >= 0) and clamps the
coarse offset to the buffer.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

import humanize

from binviewer import config
from binviewer.colors import ColorScheme

logger = logging.getLogger(__name__)

SCHEME_ORDER = list(ColorScheme)


class SettingsError(ValueError):
    """Raised when a ViewSettings instance breaks one of its invariants."""


@dataclass
class ViewSettings:
    zoom: int = config.DEFAULT_ZOOM
    row_width: int = config.DEFAULT_ROW_WIDTH
    offset: int = 0
    offset_fine: int = 0
    stride: int = config.DEFAULT_STRIDE
    color_scheme: ColorScheme = field(
        default_factory=lambda: ColorScheme(config.DEFAULT_COLOR_SCHEME))
    # informational only
    buffer_length: int = 0
    canvas_width: int = config.CANVAS_WIDTH

    @property
    def base_offset(self) -> int:
        return self.offset + self.offset_fine

    def validate(self) -> None:
        if self.zoom < 1:
            raise SettingsError(f"zoom must be >= 1, got {self.zoom}")
        if self.row_width < 1:
            raise SettingsError(f"row_width must be >= 1, got {self.row_width}")
        if self.stride < 1:
            raise SettingsError(f"stride must be >= 1, got {self.stride}")
        if self.offset < 0 or self.offset_fine < 0:
            raise SettingsError(
                f"offsets must be non-negative, got offset={self.offset} "
                f"offset_fine={self.offset_fine}")
        if not isinstance(self.color_scheme, ColorScheme):
            raise SettingsError(f"not a color scheme: {self.color_scheme!r}")

    # ---------------------------
    # Control surface mutations
    # ---------------------------
    def clamp(self) -> None:
        self.zoom = min(config.MAX_ZOOM, max(1, self.zoom))
        self.row_width = min(config.MAX_ROW_WIDTH, max(1, self.row_width))
        self.stride = min(config.MAX_STRIDE, max(1, self.stride))
        self.offset = min(max(0, self.buffer_length), max(0, self.offset))
        self.offset_fine = min(config.MAX_OFFSET_FINE, max(0, self.offset_fine))

    def zoom_by(self, delta: int) -> None:
        self.zoom += delta
        self.clamp()

    def resize_row(self, delta: int) -> None:
        self.row_width += delta
        self.clamp()

    def change_stride(self, delta: int) -> None:
        self.stride += delta
        self.clamp()

    def nudge_fine(self, delta: int) -> None:
        self.offset_fine += delta
        self.clamp()

    def scroll_rows(self, rows: int) -> None:
        """Move the coarse offset by whole logical rows (negative scrolls up)."""
        self.offset += rows * self.row_width * self.stride
        self.clamp()

    def cycle_color_scheme(self, step: int = 1) -> ColorScheme:
        i = SCHEME_ORDER.index(self.color_scheme)
        self.color_scheme = SCHEME_ORDER[(i + step) % len(SCHEME_ORDER)]
        logger.debug("color scheme -> %s", self.color_scheme.label)
        return self.color_scheme

    def visible_rows(self, canvas_height: int) -> int:
        return max(1, canvas_height // self.zoom)


def default_settings(buffer_length: int, canvas_width: int = config.CANVAS_WIDTH) -> ViewSettings:
    return ViewSettings(buffer_length=buffer_length, canvas_width=canvas_width)


def format_size(n: int) -> str:
    """Human readable byte count in binary units ("1.5 KiB")."""
    return humanize.naturalsize(n, binary=True)


def parse_int(text: str, allow_hex: bool = False) -> Optional[int]:
    """
    Parse control-panel text into an int, or None when it is not a number.
    With ``allow_hex`` a leading "0x" selects base 16.
    """
    s = text.strip()
    try:
        if allow_hex and s.lower().startswith("0x"):
            return int(s, 16)
        return int(s, 10)
    except ValueError:
        logger.debug("ignoring non-integer input %r", text)
        return None
