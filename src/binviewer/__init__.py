"""Interactive binary file viewer: bytes in, pixels out."""
from binviewer.colors import ColorScheme, map_byte, palette
from binviewer.mapper import draw, pixel_color, render
from binviewer.settings import SettingsError, ViewSettings

__version__ = "0.1.0"

__all__ = [
    "ColorScheme",
    "SettingsError",
    "ViewSettings",
    "draw",
    "map_byte",
    "palette",
    "pixel_color",
    "render",
]
