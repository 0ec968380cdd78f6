import logging

import pytest

from binviewer import config
from binviewer.colors import ColorScheme
from binviewer.settings import SettingsError, ViewSettings, default_settings, format_size, parse_int


def test_defaults() -> None:
    s = default_settings(buffer_length=1234)

    assert s.zoom == 1
    assert s.row_width == 804
    assert s.offset == 0 and s.offset_fine == 0
    assert s.stride == 1
    assert s.color_scheme is ColorScheme.COLORFUL
    assert s.buffer_length == 1234
    assert s.canvas_width == config.CANVAS_WIDTH
    s.validate()


@pytest.mark.parametrize(
    "kwargs",
    [
        {"zoom": 0},
        {"row_width": 0},
        {"stride": 0},
        {"offset": -1},
        {"offset_fine": -5},
        {"color_scheme": "colorful"},
    ],
)
def test_validate_rejects_broken_invariants(kwargs) -> None:
    with pytest.raises(SettingsError):
        ViewSettings(**kwargs).validate()


def test_settings_error_is_value_error() -> None:
    assert issubclass(SettingsError, ValueError)


def test_zoom_is_clamped() -> None:
    s = ViewSettings(buffer_length=100)
    s.zoom_by(-3)
    assert s.zoom == 1
    s.zoom_by(1000)
    assert s.zoom == config.MAX_ZOOM


def test_stride_and_row_width_never_drop_below_one() -> None:
    s = ViewSettings(row_width=2, stride=2, buffer_length=100)
    s.change_stride(-5)
    s.resize_row(-5)
    assert s.stride == 1
    assert s.row_width == 1


def test_scroll_moves_whole_rows_and_stays_in_buffer() -> None:
    s = ViewSettings(row_width=16, stride=2, buffer_length=100)
    s.scroll_rows(1)
    assert s.offset == 32
    s.scroll_rows(10)
    assert s.offset == 100
    s.scroll_rows(-100)
    assert s.offset == 0


def test_nudge_fine_offset() -> None:
    s = ViewSettings(buffer_length=100)
    s.nudge_fine(+1)
    s.nudge_fine(+1)
    assert s.offset_fine == 2
    s.nudge_fine(-10)
    assert s.offset_fine == 0
    assert s.base_offset == 0


def test_cycle_color_scheme_wraps_both_ways() -> None:
    schemes = list(ColorScheme)
    s = ViewSettings(color_scheme=schemes[-1])

    assert s.cycle_color_scheme(+1) is schemes[0]
    assert s.cycle_color_scheme(-1) is schemes[-1]
    assert s.cycle_color_scheme(-1) is schemes[-2]


def test_visible_rows() -> None:
    s = ViewSettings(zoom=4)
    assert s.visible_rows(1024) == 256
    assert s.visible_rows(2) == 1


@pytest.mark.parametrize(
    "n, text",
    [
        (0, "0 Bytes"),
        (1, "1 Byte"),
        (1023, "1023 Bytes"),
        (1536, "1.5 KiB"),
        (5 * 1024 * 1024, "5.0 MiB"),
        (3 * 1024 ** 3, "3.0 GiB"),
    ],
)
def test_format_size(n: int, text: str) -> None:
    assert format_size(n) == text


@pytest.mark.parametrize(
    "text, allow_hex, expected",
    [
        ("42", False, 42),
        ("  7 ", False, 7),
        ("0x10", True, 16),
        ("0X1f", True, 31),
        ("0x10", False, None),
        ("", False, None),
        ("abc", True, None),
    ],
)
def test_parse_int(text: str, allow_hex: bool, expected) -> None:
    assert parse_int(text, allow_hex=allow_hex) == expected


def test_parse_int_logs_rejected_text(caplog) -> None:
    with caplog.at_level(logging.DEBUG, logger="binviewer.settings"):
        assert parse_int("12x") is None

    assert "'12x'" in caplog.text
