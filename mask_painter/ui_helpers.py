import tkinter as tk
from tkinter import ttk
from PIL import Image, ImageTk
import cv2


def to_photoimage_with_scale(rgb, scale=1.0):
    """Convert an RGB/gray numpy array to a Tk PhotoImage (optional scaling).

    Builds a fresh PIL Image on every call so the display reflects the current
    array contents.
    """
    if rgb is None:
        return ImageTk.PhotoImage(Image.new('RGB', (1, 1)))

    scale = 1.0 if scale is None else float(scale)
    if scale == 1.0:
        return ImageTk.PhotoImage(Image.fromarray(rgb))

    new_w = max(1, int(round(rgb.shape[1] * scale)))
    new_h = max(1, int(round(rgb.shape[0] * scale)))

    # Large upscaling -> Nearest Neighbor (crisp pixels)
    # Downscaling -> Area (best quality)
    if scale >= 2.0:
        cv_interp = cv2.INTER_NEAREST
    elif scale < 1.0:
        cv_interp = cv2.INTER_AREA
    else:
        cv_interp = cv2.INTER_LINEAR

    resized = cv2.resize(rgb, (new_w, new_h), interpolation=cv_interp)
    return ImageTk.PhotoImage(Image.fromarray(resized))


def make_slider_row(parent, label_text, var, frm, to, is_int=False, fmt=None, command=None):
    """Create a labeled slider with a live value label; returns the Scale widget."""
    if command is None:
        def command(_=None):
            return
    row = ttk.Frame(parent)
    ttk.Label(row, text=label_text).pack(side='left', padx=(0, 4))
    scale = ttk.Scale(row, from_=frm, to=to, variable=var, command=command, length=120)
    scale.pack(side='left', fill='x', expand=True)
    val_var = tk.StringVar()
    if fmt is None:
        fmt = "{}"

    def _update_val(*a):
        v = var.get()
        if is_int:
            val_var.set(f"{int(round(v))}")
        else:
            val_var.set(fmt.format(v))

    _update_val()
    var.trace_add('write', lambda *a: _update_val())

    ttk.Label(row, textvariable=val_var, width=4, anchor='e').pack(side='left', padx=(6, 0))
    return row, scale
