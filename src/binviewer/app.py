"""
app.py

Binary viewer window: ttk control panel on the left, byte canvas on the right.
The window owns the loaded buffer, the ViewSettings and the RGBA frame; each
redraw hands them to mapper.draw() and presents the frame through Pillow.
Keyboard shortcuts are bound to the canvas only.
"""

import logging
import os
import tkinter as tk
from tkinter import ttk

from PIL import Image, ImageTk

from binviewer import config
from binviewer.colors import ColorScheme
from binviewer.mapper import draw
from binviewer.settings import ViewSettings, format_size, parse_int

logger = logging.getLogger(__name__)


class BinViewerApp(tk.Tk):
    def __init__(self, buffer: bytes, filename: str = None, settings: ViewSettings = None):
        super().__init__()
        self.title(config.WINDOW_TITLE)
        self.geometry(f"{config.CANVAS_WIDTH + config.SIDEBAR_WIDTH}x{config.CANVAS_HEIGHT}")

        # State
        self.buffer = buffer
        self.filename = filename
        self.settings = settings or ViewSettings()
        self.settings.buffer_length = len(buffer)
        self.settings.clamp()

        # frame + images
        self._frame = bytearray()
        self._frame_size = (0, 0)
        self._tk_image = None

        self._make_ui()
        self._bind_canvas_keys()
        self._update_status()

    # ---------------------------
    # UI
    # ---------------------------
    def _make_ui(self):
        mainframe = ttk.Frame(self)
        mainframe.pack(fill='both', expand=True)

        sidebar = ttk.Frame(mainframe, width=config.SIDEBAR_WIDTH, padding=6)
        sidebar.pack(side='left', fill='y')

        viewframe = ttk.Frame(mainframe)
        viewframe.pack(side='right', fill='both', expand=True)

        ttk.Label(sidebar, text="binviewer", font=('TkDefaultFont', 14, 'bold')).pack(pady=(0, 8))

        s = self.settings
        self._scale_vars = {}

        # Zoom
        zoom_frame = ttk.LabelFrame(sidebar, text="Zoom (pixels / byte)")
        zoom_frame.pack(fill='x', pady=(0, 8))
        self.zoom_var = tk.IntVar(value=s.zoom)
        self.zoom_spin = ttk.Spinbox(zoom_frame, from_=1, to=config.MAX_ZOOM,
                                     textvariable=self.zoom_var, command=self.on_zoom_spin)
        self.zoom_spin.pack(fill='x', padx=4, pady=4)
        self._bind_spinbox_return(self.zoom_spin, self.on_zoom_spin)
        self._add_scale(zoom_frame, 'zoom', 1, config.MAX_ZOOM)

        # Row width
        width_frame = ttk.LabelFrame(sidebar, text="Width (bytes / row)")
        width_frame.pack(fill='x', pady=(0, 8))
        self.width_var = tk.IntVar(value=s.row_width)
        self.width_spin = ttk.Spinbox(width_frame, from_=1, to=config.MAX_ROW_WIDTH,
                                      textvariable=self.width_var, command=self.on_width_spin)
        self.width_spin.pack(fill='x', padx=4, pady=4)
        self._bind_spinbox_return(self.width_spin, self.on_width_spin)
        self._add_scale(width_frame, 'row_width', 1, config.MAX_ROW_WIDTH)

        # Offset: slider for dragging, entry for exact values
        off_frame = ttk.LabelFrame(sidebar, text="Offset (bytes)")
        off_frame.pack(fill='x', pady=(0, 8))
        self.offset_scale_var = tk.DoubleVar(value=s.offset)
        self.offset_scale = ttk.Scale(off_frame, from_=0, to=max(1, len(self.buffer)),
                                      variable=self.offset_scale_var, command=self.on_offset_scale)
        self.offset_scale.pack(fill='x', padx=4, pady=(6, 4))
        self.offset_var = tk.StringVar(value=str(s.offset))
        self.offset_entry = ttk.Entry(off_frame, textvariable=self.offset_var)
        self.offset_entry.pack(fill='x', padx=4, pady=4)
        ttk.Label(off_frame, text="(Prefix with 0x for hex)").pack(anchor='w', padx=4)
        self.offset_entry.bind("<Return>", lambda e: (self.apply_offset(), self._park_focus()))

        # Fine offset
        fine_frame = ttk.LabelFrame(sidebar, text="Offset fine (bytes)")
        fine_frame.pack(fill='x', pady=(0, 8))
        self.fine_var = tk.IntVar(value=s.offset_fine)
        self.fine_spin = ttk.Spinbox(fine_frame, from_=0, to=config.MAX_OFFSET_FINE,
                                     textvariable=self.fine_var, command=self.on_fine_spin)
        self.fine_spin.pack(fill='x', padx=4, pady=4)
        self._bind_spinbox_return(self.fine_spin, self.on_fine_spin)

        # Stride
        stride_frame = ttk.LabelFrame(sidebar, text="Stride (bytes / column)")
        stride_frame.pack(fill='x', pady=(0, 8))
        self.stride_var = tk.IntVar(value=s.stride)
        self.stride_spin = ttk.Spinbox(stride_frame, from_=1, to=config.MAX_STRIDE,
                                       textvariable=self.stride_var, command=self.on_stride_spin)
        self.stride_spin.pack(fill='x', padx=4, pady=4)
        self._bind_spinbox_return(self.stride_spin, self.on_stride_spin)
        self._add_scale(stride_frame, 'stride', 1, config.MAX_STRIDE)

        # Color scheme
        scheme_frame = ttk.LabelFrame(sidebar, text="Color scheme")
        scheme_frame.pack(fill='x', pady=(0, 8))
        self.scheme_var = tk.StringVar(value=s.color_scheme.label)
        self.scheme_combo = ttk.Combobox(scheme_frame, state='readonly', textvariable=self.scheme_var,
                                         values=[scheme.label for scheme in ColorScheme])
        self.scheme_combo.pack(fill='x', padx=4, pady=(6, 6))
        self.scheme_combo.bind('<<ComboboxSelected>>', lambda ev: (self.on_scheme_selected(), self._park_focus()))

        # parking focus frame: receives focus after Enter in an entry so
        # keyboard shortcuts then go to the canvas only
        self.focus_parking = ttk.Frame(sidebar, height=2, takefocus=True)
        self.focus_parking.pack(fill='x', pady=(8, 2))
        self.focus_parking.bind("<Button-1>", lambda e: self.canvas.focus_set())

        tips = ttk.Label(sidebar, text=(
            "Shortcuts (only when image area focused):\n"
            "+/- zoom in / out\n"
            "↑/↓ scroll one row\n"
            "PgUp/PgDn page +/- (2/3 visible rows)\n"
            "←/→ fine offset -/+ 1 byte\n"
            "Shift+←/→ change width\n"
            "[/] change stride\n"
            "c / C cycle color scheme\n"
            "Esc / q quit"
        ), justify='left', wraplength=260)
        tips.pack(pady=(8, 8))

        # status bar
        self.status_var = tk.StringVar(value="")
        self.status = ttk.Label(self, anchor='w', textvariable=self.status_var, relief='sunken')
        self.status.pack(side='bottom', fill='x')

        # canvas
        canvas_outer = ttk.Frame(viewframe)
        canvas_outer.pack(fill='both', expand=True)
        self.canvas = tk.Canvas(canvas_outer, bg='black', highlightthickness=0)
        self.canvas.pack(side='left', fill='both', expand=True)

        # re-render on resize
        self.canvas.bind("<Configure>", lambda e: self.render_image())
        self.canvas.bind_all("<MouseWheel>", self._on_mousewheel)  # Windows / macOS
        self.canvas.bind_all("<Button-4>", self._on_mousewheel)    # Linux up
        self.canvas.bind_all("<Button-5>", self._on_mousewheel)    # Linux down

        self.canvas.focus_set()

    def _add_scale(self, parent, name: str, from_: int, to: int):
        """Drag slider bound to one integer ViewSettings field."""
        var = tk.DoubleVar(value=getattr(self.settings, name))
        scale = ttk.Scale(parent, from_=from_, to=to, variable=var,
                          command=lambda value: self._on_scale(name, value))
        scale.pack(fill='x', padx=4, pady=(0, 6))
        self._scale_vars[name] = var
        return scale

    def _bind_spinbox_return(self, spinbox_widget, callback):
        # ttk.Spinbox sometimes exposes its internal entry as 'entry'
        entry = spinbox_widget.children.get('entry')
        target = entry if entry is not None else spinbox_widget
        target.bind("<Return>", lambda e: (callback(), self._park_focus()))

    def _bind_canvas_keys(self):
        c = self.canvas
        c.bind("<Escape>", lambda e: self.quit_app())
        c.bind("<KeyPress-q>", lambda e: self.quit_app())

        c.bind("<KeyPress-plus>", lambda e: (self._apply(self.settings.zoom_by, +1), "break"))
        c.bind("<KeyPress-equal>", lambda e: (self._apply(self.settings.zoom_by, +1), "break"))
        c.bind("<KeyPress-minus>", lambda e: (self._apply(self.settings.zoom_by, -1), "break"))

        c.bind("<Up>", lambda e: (self._apply(self.settings.scroll_rows, -1), "break"))
        c.bind("<Down>", lambda e: (self._apply(self.settings.scroll_rows, +1), "break"))
        c.bind("<Prior>", lambda e: (self._page_move(-1), "break"))  # PageUp
        c.bind("<Next>", lambda e: (self._page_move(+1), "break"))   # PageDown

        c.bind("<Left>", lambda e: (self._apply(self.settings.nudge_fine, -1), "break"))
        c.bind("<Right>", lambda e: (self._apply(self.settings.nudge_fine, +1), "break"))
        c.bind("<Shift-Left>", lambda e: (self._apply(self.settings.resize_row, -1), "break"))
        c.bind("<Shift-Right>", lambda e: (self._apply(self.settings.resize_row, +1), "break"))

        c.bind("<bracketleft>", lambda e: (self._apply(self.settings.change_stride, -1), "break"))
        c.bind("<bracketright>", lambda e: (self._apply(self.settings.change_stride, +1), "break"))

        c.bind("<KeyPress-c>", lambda e: (self._apply(self.settings.cycle_color_scheme, +1), "break"))
        c.bind("<KeyPress-C>", lambda e: (self._apply(self.settings.cycle_color_scheme, -1), "break"))

    def quit_app(self):
        logger.info("Quit requested")
        self.destroy()

    # ---------------------------
    # Control callbacks
    # ---------------------------
    def _spin_to_setting(self, spinbox: ttk.Spinbox, name: str):
        # spinbox.get() is the raw text; invalid text keeps the old value
        v = parse_int(spinbox.get())
        if v is not None:
            setattr(self.settings, name, v)
        self._settings_changed()

    def on_zoom_spin(self):
        self._spin_to_setting(self.zoom_spin, 'zoom')

    def on_width_spin(self):
        self._spin_to_setting(self.width_spin, 'row_width')

    def on_fine_spin(self):
        self._spin_to_setting(self.fine_spin, 'offset_fine')

    def on_stride_spin(self):
        self._spin_to_setting(self.stride_spin, 'stride')

    def _on_scale(self, name: str, value):
        v = int(float(value))
        if v == getattr(self.settings, name):
            return
        setattr(self.settings, name, v)
        self._settings_changed()

    def on_offset_scale(self, value):
        self._on_scale('offset', value)

    def apply_offset(self):
        v = parse_int(self.offset_var.get(), allow_hex=True)
        if v is None:
            logger.warning("Could not parse offset %r", self.offset_var.get())
            self.offset_var.set(str(self.settings.offset))
            return
        self.settings.offset = v
        self._settings_changed()

    def on_scheme_selected(self):
        self.settings.color_scheme = ColorScheme.from_label(self.scheme_var.get())
        self._settings_changed()

    # ---------------------------
    # Keyboard helpers & focus parking
    # ---------------------------
    def _park_focus(self):
        """Park focus on the neutral frame, then hand it back to the canvas."""
        self.focus_parking.focus_set()
        self.after(20, lambda: self.canvas.focus_set())

    def _apply(self, mutation, arg):
        mutation(arg)
        self._settings_changed()

    def _page_move(self, direction):
        """Move by 2/3 of the visible rows. direction: -1 PageUp, +1 PageDown."""
        self.update_idletasks()
        rows = int(self.settings.visible_rows(self.canvas.winfo_height()) * config.PAGE_FRACTION)
        self._apply(self.settings.scroll_rows, direction * max(1, rows))

    def _on_mousewheel(self, event):
        delta = 0
        if getattr(event, 'delta', 0):
            delta = event.delta
        elif hasattr(event, 'num'):
            # Button-4 up, Button-5 down
            delta = 120 if event.num == 4 else -120 if event.num == 5 else 0
        if delta == 0:
            return
        rows = config.WHEEL_ROWS_LARGE if abs(delta) > 120 else config.WHEEL_ROWS_SMALL
        direction = -1 if delta > 0 else +1
        self._apply(self.settings.scroll_rows, direction * rows)

    def _settings_changed(self):
        self.settings.clamp()
        self._sync_controls()
        self.render_image()

    def _sync_controls(self):
        s = self.settings
        self.zoom_var.set(s.zoom)
        self.width_var.set(s.row_width)
        self.fine_var.set(s.offset_fine)
        self.stride_var.set(s.stride)
        self.offset_var.set(str(s.offset))
        self.offset_scale_var.set(s.offset)
        for name, var in self._scale_vars.items():
            var.set(getattr(s, name))
        self.scheme_var.set(s.color_scheme.label)

    # ---------------------------
    # Rendering
    # ---------------------------
    def render_image(self):
        self.update_idletasks()
        canvas_w = max(1, self.canvas.winfo_width())
        canvas_h = max(1, self.canvas.winfo_height())

        if self._frame_size != (canvas_w, canvas_h):
            logger.debug("canvas resized to %dx%d", canvas_w, canvas_h)
            self._frame = bytearray(canvas_w * canvas_h * 4)
            self._frame_size = (canvas_w, canvas_h)
        self.settings.canvas_width = canvas_w

        draw(self._frame, self.buffer, self.settings, canvas_w, canvas_h)

        img = Image.frombuffer("RGBA", (canvas_w, canvas_h), bytes(self._frame), "raw", "RGBA", 0, 1)
        self._tk_image = ImageTk.PhotoImage(img)
        self.canvas.delete("viewport_image")
        self.canvas.create_image(0, 0, anchor='nw', image=self._tk_image, tags=("viewport_image",))
        self._update_status()

    # ---------------------------
    # Status
    # ---------------------------
    def _update_status(self):
        s = self.settings
        fname = os.path.basename(self.filename) if self.filename else "(no file)"
        status = (f"File: {fname} size={format_size(s.buffer_length)} | "
                  f"offset={s.offset}+{s.offset_fine} stride={s.stride} | "
                  f"width={s.row_width} zoom={s.zoom} scheme='{s.color_scheme.label}' | "
                  f"canvas_width={s.canvas_width}px")
        self.status_var.set(status)
