"""
Inpainting Mask Editor

Features:
- Open an image (PNG, JPG, WEBP; up to 10MB), scaled down to fit 800×600
- Paint the region to regenerate with a brush, or erase it again
- Adjustable brush size (slider or Ctrl + Mouse Wheel)
- Undo / redo per stroke (last 20 states), clear
- Persistent brush-size circle overlay around the cursor
- Save the black/white mask as PNG (white = painted)
"""

import os
import tkinter as tk
from tkinter import filedialog, messagebox, ttk

from mask_painter import ImageLoadFailed, PaintSession, Tool, read_rgba, save_mask
from mask_painter.config import (DEFAULT_BRUSH_RADIUS, IMAGE_EXTENSIONS, MASK_FILENAME,
                                 MAX_BRUSH_RADIUS, MIN_BRUSH_RADIUS)
from mask_painter.log import setup_logging
from mask_painter.ui_helpers import make_slider_row, to_photoimage_with_scale


class MaskEditorFrame(tk.Frame):
    """
    Embeddable mask editor as a tkinter Frame.
    - on_mask_changed(mask) is forwarded from the paint session
    - on_close() callback will be invoked when user clicks 'Close' (when embedded)
    """
    def __init__(self, master=None, on_mask_changed=None, on_close=None):
        super().__init__(master)
        self._on_mask_changed = on_mask_changed
        self._on_close = on_close
        self._own_root = None  # set when launched standalone via main()

        self.session = PaintSession(on_mask_changed=self._handle_mask_changed,
                                    status_callback=self.set_status)
        self._photo = None
        self._scale = 1.0
        self._img_topleft = (0, 0)

        # Toolbar
        self.toolbar = ttk.Frame(self)
        self.toolbar.pack(side="top", fill="x")

        ttk.Button(self.toolbar, text="Open Image", command=self.open_image).pack(side="left", padx=3, pady=2)
        self.save_btn = ttk.Button(self.toolbar, text="Save Mask…", command=self.save_mask)
        self.save_btn.pack(side="left", padx=3, pady=2)
        ttk.Separator(self.toolbar, orient="vertical").pack(side="left", fill="y", padx=4)

        # Tools
        self.mode_var = tk.StringVar(value=Tool.BRUSH.value)
        for text, tool in (("Brush", Tool.BRUSH), ("Eraser", Tool.ERASER)):
            ttk.Radiobutton(self.toolbar, text=text, value=tool.value, variable=self.mode_var,
                            command=self._on_tool_changed).pack(side="left", padx=3)
        ttk.Separator(self.toolbar, orient="vertical").pack(side="left", fill="y", padx=4)

        # Brush size
        self.brush_var = tk.DoubleVar(value=float(DEFAULT_BRUSH_RADIUS))
        size_row, _ = make_slider_row(self.toolbar, "Size", self.brush_var, MIN_BRUSH_RADIUS,
                                      MAX_BRUSH_RADIUS, is_int=True, command=self._on_brush_changed)
        size_row.pack(side="left", padx=3)
        ttk.Separator(self.toolbar, orient="vertical").pack(side="left", fill="y", padx=4)

        # History
        self.undo_btn = ttk.Button(self.toolbar, text="Undo", command=self.undo)
        self.undo_btn.pack(side="left", padx=3)
        self.redo_btn = ttk.Button(self.toolbar, text="Redo", command=self.redo)
        self.redo_btn.pack(side="left", padx=3)
        self.clear_btn = ttk.Button(self.toolbar, text="Clear", command=self.clear)
        self.clear_btn.pack(side="left", padx=3)
        ttk.Button(self.toolbar, text="Close", command=self._handle_close).pack(side="right", padx=3)

        # Status bar
        self.status = ttk.Label(self, text="Upload an image to start editing", anchor="w")
        self.status.pack(side="bottom", fill="x")

        # Canvas
        self.canvas = tk.Canvas(self, bg="gray20", highlightthickness=0)
        self.canvas.pack(side="top", fill="both", expand=True)

        self.canvas.bind("<Configure>", lambda e: self._refresh_display())
        self.canvas.bind("<Button-1>", self._on_paint_start)
        self.canvas.bind("<B1-Motion>", self._on_paint_move)
        self.canvas.bind("<ButtonRelease-1>", self._on_paint_end)
        self.canvas.bind("<Motion>", self._on_mouse_move)
        self.canvas.bind("<Leave>", self._on_mouse_leave)
        self.canvas.bind("<Control-MouseWheel>", self._on_ctrl_mouse_wheel)

        self._bind_to_toplevel("<Control-z>", lambda e: self.undo())
        self._bind_to_toplevel("<Control-y>", lambda e: self.redo())
        self._bind_to_toplevel("<Key-b>", lambda e: self._set_mode(Tool.BRUSH))
        self._bind_to_toplevel("<Key-e>", lambda e: self._set_mode(Tool.ERASER))

        self._cursor_circle_id = None
        self._last_mouse_pos = None
        self._update_buttons()

    # -------------- Public API --------------
    def set_image(self, rgba):
        """Start editing an already-decoded RGBA image."""
        self.session.load_image(rgba)
        self._refresh_display()
        self._update_buttons()

    def get_mask(self):
        return self.session.mask

    # -------------- Internal helpers --------------
    def _bind_to_toplevel(self, sequence, func):
        self.winfo_toplevel().bind(sequence, func)

    def _handle_close(self):
        if callable(self._on_close):
            self._on_close()
        elif self._own_root is not None:
            self._own_root.destroy()
        else:
            self.destroy()

    def _handle_mask_changed(self, mask):
        self._update_buttons()
        if callable(self._on_mask_changed):
            self._on_mask_changed(mask)

    def _update_buttons(self):
        def enable(btn, on):
            btn.state(["!disabled"] if on else ["disabled"])
        enable(self.undo_btn, self.session.can_undo)
        enable(self.redo_btn, self.session.can_redo)
        enable(self.clear_btn, self.session.overlay is not None)
        enable(self.save_btn, self.session.mask is not None)

    def set_status(self, text):
        self.status.config(text=text)

    # -------------- Tool controls --------------
    def _set_mode(self, tool):
        self.mode_var.set(tool.value)
        self._on_tool_changed()

    def _on_tool_changed(self):
        self.session.set_tool(self.mode_var.get())
        if self._last_mouse_pos is not None:
            self._update_cursor_circle(*self._last_mouse_pos)

    def _on_brush_changed(self, value=None):
        self.session.set_brush_radius(round(float(self.brush_var.get())))

    def _on_ctrl_mouse_wheel(self, event):
        delta = int(getattr(event, "delta", 0))
        step = 1 if delta > 0 else -1
        self.brush_var.set(self.session.set_brush_radius(self.session.brush_radius + step))
        self._last_mouse_pos = (event.x, event.y)
        self._update_cursor_circle(event.x, event.y)

    # -------------- File actions --------------
    def open_image(self):
        patterns = tuple(f"*{ext}" for ext in IMAGE_EXTENSIONS)
        path = filedialog.askopenfilename(
            parent=self.winfo_toplevel(),
            title="Open image",
            filetypes=[("Images", patterns)],
            initialdir=os.path.expanduser("~"),
        )
        if not path:
            return
        try:
            rgba = read_rgba(path)
        except ImageLoadFailed as e:
            messagebox.showerror("Open error", str(e))
            return
        self.set_image(rgba)

    def save_mask(self):
        mask = self.session.mask
        if mask is None:
            messagebox.showinfo("Nothing to save", "No mask to download. Please paint on the image first.")
            return
        path = filedialog.asksaveasfilename(
            parent=self.winfo_toplevel(),
            title="Save mask",
            initialfile=MASK_FILENAME,
            defaultextension=".png",
            filetypes=[("PNG", "*.png")],
        )
        if not path:
            return
        try:
            save_mask(mask, path)
        except OSError as e:
            messagebox.showerror("Save error", str(e))
            return
        self.set_status(f"Saved: {os.path.basename(path)}")

    # -------------- Commands --------------
    def undo(self):
        if self.session.undo():
            self.set_status("Undid last stroke")
        self._refresh_display()
        self._update_buttons()

    def redo(self):
        if self.session.redo():
            self.set_status("Redid stroke")
        self._refresh_display()
        self._update_buttons()

    def clear(self):
        self.session.clear()
        self._refresh_display()
        self._update_buttons()

    # -------------- Rendering --------------
    def _refresh_display(self):
        preview = self.session.preview()
        self.canvas.delete("all")
        self._cursor_circle_id = None
        if preview is None:
            return
        h, w = preview.shape[:2]
        cw = max(1, self.canvas.winfo_width())
        ch = max(1, self.canvas.winfo_height())
        self._scale = max(1e-6, min(1.0, cw / w, ch / h))
        disp_w = max(1, int(round(w * self._scale)))
        disp_h = max(1, int(round(h * self._scale)))
        x0 = (cw - disp_w) // 2
        y0 = (ch - disp_h) // 2
        self._img_topleft = (x0, y0)
        self.session.set_display_rect(x0, y0, disp_w, disp_h)

        self._photo = to_photoimage_with_scale(preview, self._scale)
        self.canvas.create_image(x0, y0, anchor="nw", image=self._photo)

        if self._last_mouse_pos is not None:
            self._update_cursor_circle(*self._last_mouse_pos)

    # -------------- Painting --------------
    def _on_paint_start(self, event):
        if self.session.pointer_down(event.x, event.y):
            self._refresh_display()
        self._last_mouse_pos = (event.x, event.y)
        self._update_cursor_circle(event.x, event.y)

    def _on_paint_move(self, event):
        if self.session.pointer_move(event.x, event.y):
            self._refresh_display()
        self._last_mouse_pos = (event.x, event.y)
        self._update_cursor_circle(event.x, event.y)

    def _on_paint_end(self, event):
        if self.session.pointer_up():
            self._refresh_display()

    # -------------- Cursor overlay --------------
    def _on_mouse_move(self, event):
        self._last_mouse_pos = (event.x, event.y)
        self._update_cursor_circle(event.x, event.y)

    def _on_mouse_leave(self, event):
        if self.session.pointer_leave():
            self._refresh_display()
        if self._cursor_circle_id is not None:
            self.canvas.delete(self._cursor_circle_id)
            self._cursor_circle_id = None
        self._last_mouse_pos = None

    def _update_cursor_circle(self, x, y):
        if self.session.overlay is None:
            if self._cursor_circle_id is not None:
                self.canvas.delete(self._cursor_circle_id)
                self._cursor_circle_id = None
            return
        # brush radius is in surface pixels; convert to canvas pixels
        r_canvas = max(1.0, self.session.brush_radius * self._scale)
        x0, y0, x1, y1 = x - r_canvas, y - r_canvas, x + r_canvas, y + r_canvas
        color = "#a253ff" if self.session.tool is Tool.BRUSH else "#ff5555"
        if self._cursor_circle_id is None:
            self._cursor_circle_id = self.canvas.create_oval(x0, y0, x1, y1, outline=color, width=1)
        else:
            self.canvas.coords(self._cursor_circle_id, x0, y0, x1, y1)
            self.canvas.itemconfig(self._cursor_circle_id, outline=color)


def main():
    setup_logging()
    root = tk.Tk()
    root.title("Inpainting Mask Editor")
    root.geometry("1000x700")
    editor = MaskEditorFrame(root)
    editor._own_root = root
    editor.pack(fill="both", expand=True)
    root.mainloop()


if __name__ == "__main__":
    main()
