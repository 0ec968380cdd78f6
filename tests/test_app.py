import pytest

tk = pytest.importorskip("tkinter")

from binviewer.app import BinViewerApp  # noqa: E402
from binviewer.settings import ViewSettings  # noqa: E402


@pytest.fixture
def app():
    try:
        viewer = BinViewerApp(bytes(range(256)) * 4, filename="sample.bin",
                              settings=ViewSettings(row_width=64))
    except tk.TclError as exc:
        pytest.skip(f"no display available: {exc}")
    viewer.withdraw()
    yield viewer
    viewer.destroy()


def test_sliders_exist_for_zoom_width_and_stride(app) -> None:
    assert set(app._scale_vars) == {"zoom", "row_width", "stride"}
    assert app._scale_vars["row_width"].get() == 64


def test_slider_drag_updates_settings_and_spinbox(app) -> None:
    app._on_scale("zoom", "3.4")
    app._on_scale("stride", "2.0")

    assert app.settings.zoom == 3
    assert app.settings.stride == 2
    assert app.zoom_var.get() == 3
    assert app.stride_var.get() == 2


def test_spinbox_garbage_keeps_previous_value(app) -> None:
    app.width_spin.set("wide")
    app.on_width_spin()

    assert app.settings.row_width == 64
    assert app.width_spin.get() == "64"


def test_spinbox_text_is_applied(app) -> None:
    app.stride_spin.set("5")
    app.on_stride_spin()

    assert app.settings.stride == 5
    assert app._scale_vars["stride"].get() == 5


def test_hex_offset_entry(app) -> None:
    app.offset_var.set("0x20")
    app.apply_offset()

    assert app.settings.offset == 32
