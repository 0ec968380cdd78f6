"""
mapper.py

Byte buffer -> RGBA frame.

A canvas pixel at linear index i (row-major, width W) shows the byte at

    offset + offset_fine + ((i // W // zoom) * row_width + (i % W // zoom)) * stride

colored by the active scheme. Columns past the row width and indices past
the end of the buffer are fully transparent. Nothing here keeps state: the
same buffer, settings and canvas size always give the same frame.
"""

import logging
from typing import Union

import numpy as np

from binviewer.colors import RGBA, TRANSPARENT, map_byte, palette
from binviewer.settings import ViewSettings

logger = logging.getLogger(__name__)

ByteBuffer = Union[bytes, bytearray, memoryview]


def buffer_index(i: int, settings: ViewSettings, canvas_width: int):
    """Buffer offset shown at pixel i, or None when the column lies past the row."""
    x = (i % canvas_width) // settings.zoom
    y = (i // canvas_width) // settings.zoom
    # strictly greater: column == row_width is still drawn
    if x > settings.row_width:
        return None
    return settings.base_offset + (y * settings.row_width + x) * settings.stride


def pixel_color(i: int, buffer: ByteBuffer, settings: ViewSettings, canvas_width: int) -> RGBA:
    index = buffer_index(i, settings, canvas_width)
    if index is None or index >= len(buffer):
        return TRANSPARENT
    return map_byte(settings.color_scheme, buffer[index])


def draw(frame, buffer: ByteBuffer, settings: ViewSettings,
         canvas_width: int, canvas_height: int) -> None:
    """
    Fill ``frame`` (writable, canvas_width * canvas_height * 4 bytes, RGBA)
    with the view of ``buffer``. Same result as pixel_color() for every
    pixel, computed a whole frame at a time.
    """
    settings.validate()
    expected = canvas_width * canvas_height * 4
    if len(frame) != expected:
        raise ValueError(
            f"frame holds {len(frame)} bytes, expected {expected} "
            f"for a {canvas_width}x{canvas_height} canvas")
    if expected == 0:
        return

    out = np.frombuffer(frame, dtype=np.uint8).reshape(canvas_height, canvas_width, 4)
    data = np.frombuffer(buffer, dtype=np.uint8)

    out[...] = 0
    base = settings.base_offset
    if base >= data.size:
        return

    # Settings are unbounded Python ints. Reduce them to equivalent values
    # below len(buffer) so the int64 arrays cannot overflow:
    #   last       highest logical cell (y * row_width + x) still in the buffer
    #   row_width  any width past last + 1 hides every row after the first
    #   stride     only cell 0 is visible once stride >= len(buffer)
    #   zoom       a zoom past the canvas size maps every pixel to cell 0
    last = (data.size - 1 - base) // settings.stride
    row_width = min(settings.row_width, last + 1)
    stride = min(settings.stride, data.size)
    col_limit = min(settings.row_width, canvas_width)

    cols = np.arange(canvas_width, dtype=np.int64) // min(settings.zoom, canvas_width)
    rows = np.arange(canvas_height, dtype=np.int64) // min(settings.zoom, canvas_height)
    cell = rows[:, None] * row_width + cols[None, :]

    visible = (cols <= col_limit)[None, :] & (cell <= last)
    index = base + cell[visible] * stride

    out[visible] = palette(settings.color_scheme)[data[index]]


def render(buffer: ByteBuffer, settings: ViewSettings,
           canvas_width: int, canvas_height: int) -> bytearray:
    frame = bytearray(canvas_width * canvas_height * 4)
    draw(frame, buffer, settings, canvas_width, canvas_height)
    return frame
