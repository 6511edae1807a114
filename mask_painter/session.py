"""Paint session: turns pointer events into overlay edits, history and masks.

States::

    IDLE ──load_image──> READY ──pointer_down──> STROKING
                           ^                        │
                           └──pointer_up / leave────┘

clear, undo and redo are accepted only in READY. Events that do not apply to
the current state are ignored.
"""
import logging
from enum import Enum
from typing import Callable, Optional

import cv2
import numpy as np

from .config import (DEFAULT_BRUSH_RADIUS, HISTORY_CAPACITY, MAX_BRUSH_RADIUS,
                     MAX_CANVAS_HEIGHT, MAX_CANVAS_WIDTH, MIN_BRUSH_RADIUS)
from .coords import CoordinateMapper, fit_within
from .errors import InvalidDimensions
from .history import HistoryStack
from .image_io import to_rgba8
from .mask_utils import MaskArtifact, binarize_overlay, compose_preview
from .stroke_renderer import Stroke, Tool, render_point, render_segment
from .surface import Surface

logger = logging.getLogger(__name__)


class State(Enum):
    IDLE = 'idle'
    READY = 'ready'
    STROKING = 'stroking'


def _to_uint8(arr: np.ndarray) -> np.ndarray:
    """Cast 8-bit-range values to uint8 without rescaling; reject anything outside 0..255."""
    if arr.dtype == np.uint8:
        return arr
    if arr.dtype == np.bool_ or not (np.issubdtype(arr.dtype, np.integer) or np.issubdtype(arr.dtype, np.floating)):
        raise ValueError(f"Unsupported pixel dtype {arr.dtype}")
    if arr.size and (not np.isfinite(arr).all() or arr.min() < 0 or arr.max() > 255):
        raise ValueError("Pixel values must lie in 0..255")
    if np.issubdtype(arr.dtype, np.floating):
        arr = np.rint(arr)
    return arr.astype(np.uint8)


def _as_image_array(pixels, width, height) -> np.ndarray:
    """Accept an (H, W[, C]) array or a flat RGBA buffer with explicit size.

    Values are taken as 8-bit channel values; decoded 16-bit or float images
    go through ``image_io.read_rgba``/``decode_rgba`` first.
    """
    arr = np.asarray(pixels)
    if arr.ndim == 1:
        if width is None or height is None:
            raise InvalidDimensions("width and height are required for a flat pixel buffer")
        width = int(width)
        height = int(height)
        if width <= 0 or height <= 0:
            raise InvalidDimensions(f"Image size must be positive, got {width}x{height}")
        if arr.size != width * height * 4:
            raise InvalidDimensions(
                f"Buffer of {arr.size} values does not hold {width}x{height} RGBA pixels")
        return _to_uint8(arr).reshape(height, width, 4)
    if arr.ndim not in (2, 3) or arr.shape[0] == 0 or arr.shape[1] == 0:
        raise InvalidDimensions(f"Unsupported image shape {arr.shape}")
    if (width is not None and int(width) != arr.shape[1]) or (height is not None and int(height) != arr.shape[0]):
        raise InvalidDimensions(
            f"Declared size {width}x{height} does not match array {arr.shape[1]}x{arr.shape[0]}")
    arr = _to_uint8(arr)
    if arr.ndim == 3 and arr.shape[2] == 4:
        return arr
    # arrays handed to the session are already RGB(A)
    return to_rgba8(arr, bgr_order=False)


class PaintSession:
    """
    Owns the background and overlay Surfaces of one loaded image.
    - on_mask_changed(mask) fires after every stroke, clear, undo and redo.
    - status_callback(text) receives short user-facing messages.
    """

    def __init__(
        self,
        on_mask_changed: Optional[Callable[[MaskArtifact], None]] = None,
        status_callback: Optional[Callable[[str], None]] = None,
        history_capacity: int = HISTORY_CAPACITY,
        max_size=(MAX_CANVAS_WIDTH, MAX_CANVAS_HEIGHT),
    ):
        self.on_mask_changed = on_mask_changed
        self.status_callback = status_callback
        self.max_size = max_size
        self.history = HistoryStack(history_capacity)

        self.tool = Tool.BRUSH
        self.brush_radius = float(DEFAULT_BRUSH_RADIUS)

        self.state = State.IDLE
        self.background: Optional[Surface] = None
        self.overlay: Optional[Surface] = None
        self.mask: Optional[MaskArtifact] = None
        self.mapper: Optional[CoordinateMapper] = None
        self.current_stroke: Optional[Stroke] = None

    # -------------- Lifecycle --------------
    def load_image(self, pixels, width=None, height=None):
        """Start a session on a decoded image, scaled down to fit the canvas box."""
        rgba = _as_image_array(pixels, width, height)
        src_h, src_w = rgba.shape[:2]
        w, h = fit_within(src_w, src_h, *self.max_size)
        if (w, h) != (src_w, src_h):
            rgba = cv2.resize(rgba, (w, h), interpolation=cv2.INTER_AREA)

        self.background = Surface.from_array(rgba)
        self.background.pixels.flags.writeable = False
        self.overlay = Surface(w, h)
        self.mapper = CoordinateMapper(w, h)
        self.history.reset(self.overlay)
        self.mask = None
        self.current_stroke = None
        self.state = State.READY
        logger.info("Image loaded: %dx%d -> canvas %dx%d", src_w, src_h, w, h)
        self._status(f"Image loaded ({w}×{h}). Start painting areas to modify.")

    def reset(self):
        """Forget the image and all edits."""
        self.background = None
        self.overlay = None
        self.mask = None
        self.mapper = None
        self.current_stroke = None
        self.history.clear()
        self.state = State.IDLE
        logger.info("Session reset")

    @property
    def size(self):
        return None if self.overlay is None else self.overlay.size

    # -------------- Tool configuration --------------
    def set_tool(self, tool):
        self.tool = Tool(tool)

    def set_brush_radius(self, radius):
        r = float(max(MIN_BRUSH_RADIUS, min(MAX_BRUSH_RADIUS, float(radius))))
        if r != float(radius):
            logger.debug("Brush radius %s clamped to %s", radius, r)
        self.brush_radius = r
        return r

    def set_display_rect(self, left, top, width, height):
        if self.mapper is None:
            return
        self.mapper.set_display_rect(left, top, width, height)

    # -------------- Pointer events --------------
    def pointer_down(self, x, y) -> bool:
        if self.state is not State.READY:
            logger.debug("pointer_down ignored in state %s", self.state.value)
            return False
        pt = self.mapper.to_surface(x, y)
        self.current_stroke = Stroke(self.tool, self.brush_radius, start=pt)
        self.state = State.STROKING
        render_point(self.overlay, pt, self.brush_radius, self.current_stroke.composition)
        return True

    def pointer_move(self, x, y) -> bool:
        if self.state is not State.STROKING:
            return False
        stroke = self.current_stroke
        pt = self.mapper.to_surface(x, y)
        last = stroke.last_point
        stroke.add_point(*pt)
        render_segment(self.overlay, last, pt, stroke.radius, stroke.composition)
        # leaving the surface ends the stroke, the same as pointer_leave
        if not self.mapper.contains(*pt):
            logger.debug("Pointer left the surface at (%.1f, %.1f)", pt[0], pt[1])
            self._end_stroke()
        return True

    def pointer_up(self) -> bool:
        if self.state is not State.STROKING:
            return False
        return self._end_stroke()

    def pointer_leave(self) -> bool:
        if self.state is not State.STROKING:
            return False
        return self._end_stroke()

    def _end_stroke(self) -> bool:
        n = len(self.current_stroke)
        tool = self.current_stroke.tool
        self.current_stroke = None
        self.state = State.READY
        self.history.capture(self.overlay)
        logger.debug("%s stroke finished (%d points)", tool.value, n)
        self._update_mask()
        return True

    # -------------- Commands --------------
    def clear(self) -> bool:
        if self.state is not State.READY:
            logger.debug("clear ignored in state %s", self.state.value)
            return False
        self.overlay.clear()
        self.history.capture(self.overlay)
        self._update_mask()
        logger.info("Canvas cleared")
        self._status("Canvas cleared!")
        return True

    def undo(self) -> bool:
        if self.state is not State.READY:
            logger.debug("undo ignored in state %s", self.state.value)
            return False
        snapshot = self.history.undo()
        if snapshot is None:
            self._status("Nothing to undo")
            return False
        self._restore(snapshot)
        logger.info("Undo -> history %d/%d", self.history.cursor + 1, len(self.history))
        return True

    def redo(self) -> bool:
        if self.state is not State.READY:
            logger.debug("redo ignored in state %s", self.state.value)
            return False
        snapshot = self.history.redo()
        if snapshot is None:
            self._status("Nothing to redo")
            return False
        self._restore(snapshot)
        logger.info("Redo -> history %d/%d", self.history.cursor + 1, len(self.history))
        return True

    @property
    def can_undo(self) -> bool:
        return self.state is not State.IDLE and self.history.can_undo

    @property
    def can_redo(self) -> bool:
        return self.state is not State.IDLE and self.history.can_redo

    # -------------- Output --------------
    def preview(self) -> Optional[np.ndarray]:
        """RGB image of the overlay blended over the background."""
        if self.background is None:
            return None
        return compose_preview(self.background, self.overlay)

    def _restore(self, snapshot: Surface):
        # the live overlay never aliases a history entry
        self.overlay = snapshot.clone()
        self._update_mask()

    def _update_mask(self):
        self.mask = binarize_overlay(self.overlay)
        if callable(self.on_mask_changed):
            self.on_mask_changed(self.mask)

    def _status(self, text):
        if callable(self.status_callback):
            self.status_callback(text)
