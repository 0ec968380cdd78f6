import matplotlib
import numpy as np
import pytest

from binviewer.colors import (
    BLACK,
    BLUE,
    GREEN,
    NEAR_WHITE,
    RED,
    ColorScheme,
    category,
    colorful,
    gradient,
    grayscale,
    map_byte,
    palette,
)


def test_grayscale_repeats_byte_in_every_channel() -> None:
    for b in range(256):
        assert grayscale(b) == (b, b, b, 255)


def test_colorful_wraps_instead_of_saturating() -> None:
    for b in range(256):
        r, g, bl, a = colorful(b)
        assert r == b
        assert g == (b * 2) % 256
        assert bl == (b * 4) % 256
        assert a == 255

    assert colorful(128)[1] == 0
    assert colorful(64)[2] == 0


@pytest.mark.parametrize(
    "b, expected",
    [
        (0x00, BLACK),
        (0x41, GREEN),   # 'A'
        (0x21, GREEN),   # '!'
        (0x7E, GREEN),   # '~'
        (0x20, NEAR_WHITE),
        (0x09, NEAR_WHITE),
        (0x0A, NEAR_WHITE),
        (0x0D, NEAR_WHITE),
        (0x0B, BLUE),    # vertical tab is not whitespace here
        (0x7F, BLUE),    # DEL
        (0x01, BLUE),
        (0x80, RED),
        (0xFF, RED),
    ],
)
def test_category_classes(b: int, expected) -> None:
    assert category(b) == expected


@pytest.mark.parametrize("name", ["magma", "plasma", "viridis"])
def test_matplotlib_gradients_truncate_channels(name: str) -> None:
    cmap = matplotlib.colormaps[name]
    for b in range(256):
        r, g, bl, _ = cmap(b / 255.0)
        # int() truncates; rounding would differ for many entries
        assert gradient(name, b) == (int(r * 255), int(g * 255), int(bl * 255), 255)


@pytest.mark.parametrize("name", ["magma", "plasma", "viridis"])
def test_matplotlib_gradient_endpoints(name: str) -> None:
    cmap = matplotlib.colormaps[name]
    first = tuple(int(c * 255) for c in cmap(0.0)[:3]) + (255,)
    last = tuple(int(c * 255) for c in cmap(1.0)[:3]) + (255,)
    assert gradient(name, 0) == first
    assert gradient(name, 255) == last


def test_rainbow_endpoints_are_truncated_and_cyclic() -> None:
    # exact channels are 109.70, 63.81, 169.91; rounding would give 110, 64, 170
    assert gradient("rainbow", 0) == (109, 63, 169, 255)
    assert gradient("rainbow", 255) == (109, 63, 169, 255)


def test_unknown_gradient_raises() -> None:
    with pytest.raises(ValueError):
        gradient("jet", 10)


@pytest.mark.parametrize("scheme", list(ColorScheme))
def test_every_scheme_is_opaque_and_in_range(scheme: ColorScheme) -> None:
    for b in range(256):
        color = scheme.map(b)
        assert len(color) == 4
        assert all(0 <= c <= 255 for c in color)
        assert color[3] == 255


@pytest.mark.parametrize("scheme", list(ColorScheme))
def test_palette_rows_match_map_byte(scheme: ColorScheme) -> None:
    lut = palette(scheme)
    assert lut.shape == (256, 4)
    assert lut.dtype == np.uint8
    for b in range(256):
        assert tuple(int(c) for c in lut[b]) == map_byte(scheme, b)


def test_palette_is_read_only() -> None:
    lut = palette(ColorScheme.GRAYSCALE)
    with pytest.raises(ValueError):
        lut[0, 0] = 1


def test_labels_round_trip() -> None:
    for scheme in ColorScheme:
        assert ColorScheme.from_label(scheme.label) is scheme

    with pytest.raises(ValueError):
        ColorScheme.from_label("Sepia")
