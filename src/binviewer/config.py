"""
Configuration
=============
Central registry for window geometry, default view settings and the ranges
the control panel allows.

Exports:
    DEFAULT_INPUT_PATH (str): File opened when no path is given on the command line.
    CANVAS_WIDTH, CANVAS_HEIGHT (int): Initial canvas size in pixels.
"""
import os

# Window
CANVAS_WIDTH: int = 1024
CANVAS_HEIGHT: int = 1024
SIDEBAR_WIDTH: int = 300
WINDOW_TITLE: str = "binviewer"

# Fallback input (relative to the working directory)
DEFAULT_INPUT_PATH: str = os.path.join("tests", "bag-small")

# Default view settings
DEFAULT_ZOOM: int = 1
DEFAULT_ROW_WIDTH: int = 804
DEFAULT_STRIDE: int = 1
DEFAULT_COLOR_SCHEME: str = "colorful"

# Control ranges
MAX_ZOOM: int = 20
MAX_ROW_WIDTH: int = 2048
MAX_STRIDE: int = 64
MAX_OFFSET_FINE: int = 4096

# Keyboard / mouse paging
PAGE_FRACTION: float = 2 / 3
WHEEL_ROWS_SMALL: int = 1
WHEEL_ROWS_LARGE: int = 3
