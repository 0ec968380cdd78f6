"""
colors.py

Byte -> RGBA color schemes.

Every scheme is a pure function of one byte value (0..255) and returns an
opaque RGBA tuple. The frame renderer uses the 256-entry lookup tables from
palette() instead of calling the functions per pixel; row ``b`` of a palette
is always identical to ``map_byte(scheme, b)``.
"""

import functools
from enum import Enum
from typing import Tuple

import matplotlib
import numpy as np

RGBA = Tuple[int, int, int, int]

TRANSPARENT: RGBA = (0, 0, 0, 0)

# Category colors
BLACK: RGBA = (0, 0, 0, 255)
GREEN: RGBA = (60, 255, 96, 255)
NEAR_WHITE: RGBA = (240, 240, 240, 255)
BLUE: RGBA = (60, 178, 255, 255)
RED: RGBA = (249, 53, 94, 255)

# Space, tab, line feed, form feed, carriage return. Vertical tab (0x0B) is
# not whitespace here and ends up in the "other ASCII" class.
ASCII_WHITESPACE = frozenset((0x20, 0x09, 0x0A, 0x0C, 0x0D))

GRADIENTS = ("magma", "plasma", "viridis", "rainbow")


class ColorScheme(Enum):
    CATEGORY = "category"
    COLORFUL = "colorful"
    GRAYSCALE = "grayscale"
    GRADIENT_MAGMA = "magma"
    GRADIENT_PLASMA = "plasma"
    GRADIENT_VIRIDIS = "viridis"
    GRADIENT_RAINBOW = "rainbow"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def from_label(cls, label: str) -> "ColorScheme":
        for scheme, text in _LABELS.items():
            if text == label:
                return scheme
        raise ValueError(f"unknown color scheme label: {label!r}")

    def map(self, b: int) -> RGBA:
        return map_byte(self, b)


_LABELS = {
    ColorScheme.CATEGORY: "Category",
    ColorScheme.COLORFUL: "Colorful",
    ColorScheme.GRAYSCALE: "Grayscale",
    ColorScheme.GRADIENT_MAGMA: "Gradient (magma)",
    ColorScheme.GRADIENT_PLASMA: "Gradient (plasma)",
    ColorScheme.GRADIENT_VIRIDIS: "Gradient (viridis)",
    ColorScheme.GRADIENT_RAINBOW: "Gradient (rainbow)",
}


# ---------------------------
# Scheme functions
# ---------------------------
def grayscale(b: int) -> RGBA:
    return (b, b, b, 255)


def colorful(b: int) -> RGBA:
    # modular on purpose, not saturating
    return (b, (b * 2) % 256, (b * 4) % 256, 255)


def category(b: int) -> RGBA:
    """Color a byte by ASCII class. Checks run in priority order."""
    if b == 0x00:
        return BLACK
    if 0x21 <= b <= 0x7E:
        return GREEN
    if b in ASCII_WHITESPACE:
        return NEAR_WHITE
    if b < 0x80:
        return BLUE
    return RED


def gradient(name: str, b: int) -> RGBA:
    """Sample the named gradient at ``b / 255``."""
    r, g, bl, a = _gradient_lut(name)[b]
    return (int(r), int(g), int(bl), int(a))


def _rainbow(t: np.ndarray) -> np.ndarray:
    """Cubehelix rainbow; returns float RGB in [0, 1] for each t."""
    ts = np.abs(t - 0.5)
    hue = np.radians(360.0 * t - 100.0 + 120.0)
    sat = 1.5 - 1.5 * ts
    light = 0.8 - 0.9 * ts
    amp = sat * light * (1.0 - light)
    cos_h = np.cos(hue)
    sin_h = np.sin(hue)
    r = light + amp * (-0.14861 * cos_h + 1.78277 * sin_h)
    g = light + amp * (-0.29227 * cos_h - 0.90649 * sin_h)
    b = light + amp * (1.97294 * cos_h)
    return np.clip(np.stack([r, g, b], axis=-1), 0.0, 1.0)


@functools.lru_cache(maxsize=None)
def _gradient_lut(name: str) -> np.ndarray:
    if name not in GRADIENTS:
        raise ValueError(f"unknown gradient: {name!r}")
    t = np.arange(256, dtype=np.float64) / 255.0
    if name == "rainbow":
        rgb = _rainbow(t)
    else:
        rgb = matplotlib.colormaps[name](t)[:, :3]
    lut = np.full((256, 4), 255, dtype=np.uint8)
    # truncate, do not round: channel * 255 -> floor
    lut[:, :3] = (rgb * 255.0).astype(np.uint8)
    lut.flags.writeable = False
    return lut


# ---------------------------
# Dispatch
# ---------------------------
def map_byte(scheme: ColorScheme, b: int) -> RGBA:
    if scheme is ColorScheme.CATEGORY:
        return category(b)
    elif scheme is ColorScheme.COLORFUL:
        return colorful(b)
    elif scheme is ColorScheme.GRAYSCALE:
        return grayscale(b)
    elif scheme in (ColorScheme.GRADIENT_MAGMA, ColorScheme.GRADIENT_PLASMA,
                    ColorScheme.GRADIENT_VIRIDIS, ColorScheme.GRADIENT_RAINBOW):
        return gradient(scheme.value, b)
    raise ValueError(f"unhandled color scheme: {scheme!r}")


@functools.lru_cache(maxsize=None)
def palette(scheme: ColorScheme) -> np.ndarray:
    """Read-only (256, 4) uint8 table with row b == map_byte(scheme, b)."""
    if scheme.value in GRADIENTS:
        return _gradient_lut(scheme.value)
    lut = np.array([map_byte(scheme, b) for b in range(256)], dtype=np.uint8)
    lut.flags.writeable = False
    return lut
