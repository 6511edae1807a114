"""Display-to-surface coordinate mapping.

The surface is drawn into a rectangle on screen that may be scaled relative to
its native pixel size. Pointer positions arrive in display coordinates and are
mapped back with

    surface_x = (client_x - rect_left) * (surface_width / displayed_width)

and the same for y.
"""
from typing import Tuple

from .config import MAX_CANVAS_HEIGHT, MAX_CANVAS_WIDTH
from .errors import InvalidDimensions


def fit_within(src_w, src_h, max_w=MAX_CANVAS_WIDTH, max_h=MAX_CANVAS_HEIGHT) -> Tuple[int, int]:
    """Return (w, h) scaled down to fit inside max_w x max_h, keeping aspect ratio.

    Images already inside the box are returned unchanged (never scaled up).
    """
    if src_w <= 0 or src_h <= 0:
        raise InvalidDimensions(f"Image size must be positive, got {src_w}x{src_h}")
    w, h = float(src_w), float(src_h)
    if w > max_w or h > max_h:
        ratio = min(max_w / w, max_h / h)
        w *= ratio
        h *= ratio
    # canvas sizes are integers; fractional sizes truncate
    return max(1, int(w)), max(1, int(h))


class CoordinateMapper:
    def __init__(self, surface_width: int, surface_height: int):
        self.surface_width = 0
        self.surface_height = 0
        self.rect = (0.0, 0.0, 1.0, 1.0)
        self.resize(surface_width, surface_height)

    def resize(self, surface_width: int, surface_height: int):
        """Adopt a new surface size; the display rect resets to 1:1 at the origin."""
        if surface_width <= 0 or surface_height <= 0:
            raise InvalidDimensions(f"Surface size must be positive, got {surface_width}x{surface_height}")
        self.surface_width = int(surface_width)
        self.surface_height = int(surface_height)
        self.rect = (0.0, 0.0, float(surface_width), float(surface_height))

    def set_display_rect(self, left, top, width, height):
        """Record where (and how large) the surface is currently displayed."""
        if width <= 0 or height <= 0:
            raise InvalidDimensions(f"Display size must be positive, got {width}x{height}")
        self.rect = (float(left), float(top), float(width), float(height))

    @property
    def scale_x(self) -> float:
        return self.surface_width / self.rect[2]

    @property
    def scale_y(self) -> float:
        return self.surface_height / self.rect[3]

    def to_surface(self, client_x, client_y) -> Tuple[float, float]:
        left, top, _, _ = self.rect
        return (client_x - left) * self.scale_x, (client_y - top) * self.scale_y

    def contains(self, x, y) -> bool:
        """True if surface coordinate (x, y) lies on the surface."""
        return 0 <= x < self.surface_width and 0 <= y < self.surface_height
