"""Rasterize brush and eraser strokes onto an overlay Surface.

A stroke is drawn one point pair at a time as pointer input arrives. Each pair
covers every pixel whose centre lies within ``radius`` of the segment between
the two points, i.e. a capsule with round ends. A single point is the
degenerate segment and produces a filled disc.
"""
from enum import Enum

import numpy as np

from .config import PAINT_ALPHA, PAINT_COLOR
from .surface import Surface


class Tool(Enum):
    BRUSH = 'brush'
    ERASER = 'eraser'


class Composition(Enum):
    PAINT = 'source-over'       # composite paint over existing alpha
    CLEAR = 'destination-out'   # zero every covered pixel


def composition_for(tool: Tool) -> Composition:
    return Composition.PAINT if tool is Tool.BRUSH else Composition.CLEAR


class Stroke:
    """Points of one pointer-down to pointer-up gesture, in surface coordinates."""

    def __init__(self, tool: Tool, radius: float, start=None):
        self.tool = tool
        self.radius = float(radius)
        self.points = []
        if start is not None:
            self.points.append((float(start[0]), float(start[1])))

    @property
    def composition(self) -> Composition:
        return composition_for(self.tool)

    @property
    def last_point(self):
        return self.points[-1] if self.points else None

    def add_point(self, x, y):
        self.points.append((float(x), float(y)))

    def __len__(self):
        return len(self.points)


def segment_footprint(shape, p0, p1, radius):
    """Boolean capsule mask around segment p0-p1, clipped to ``shape`` (H, W).

    Returns (y_slice, x_slice, mask) or None when the capsule misses the surface.
    """
    h, w = shape[:2]
    r = float(radius)
    x0, y0 = float(p0[0]), float(p0[1])
    x1, y1 = float(p1[0]), float(p1[1])

    # integer bounds for the affected box
    x_min = int(max(0, np.floor(min(x0, x1) - r)))
    x_max = int(min(w - 1, np.ceil(max(x0, x1) + r)))
    y_min = int(max(0, np.floor(min(y0, y1) - r)))
    y_max = int(min(h - 1, np.ceil(max(y0, y1) + r)))
    if x_max < x_min or y_max < y_min:
        return None

    yy, xx = np.ogrid[y_min:y_max + 1, x_min:x_max + 1]
    dx = x1 - x0
    dy = y1 - y0
    len2 = dx * dx + dy * dy
    if len2 <= 1e-12:
        d2 = (xx - x0) ** 2 + (yy - y0) ** 2
    else:
        # project each pixel onto the segment, clamped to its end points
        t = ((xx - x0) * dx + (yy - y0) * dy) / len2
        t = np.clip(t, 0.0, 1.0)
        d2 = (xx - (x0 + t * dx)) ** 2 + (yy - (y0 + t * dy)) ** 2
    footprint = d2 <= r * r
    if not footprint.any():
        return None
    return slice(y_min, y_max + 1), slice(x_min, x_max + 1), footprint


def _paint_over(region, footprint, color, alpha):
    """Source-over composite of a flat colour onto the covered pixels."""
    dst = region[footprint].astype(np.float32)
    sa = float(alpha) / 255.0
    da = dst[:, 3] / 255.0
    out_a = sa + da * (1.0 - sa)
    src_rgb = np.asarray(color, dtype=np.float32)[None, :]
    rgb = (src_rgb * sa + dst[:, :3] * (da * (1.0 - sa))[:, None]) / np.maximum(out_a, 1e-6)[:, None]
    out = np.empty_like(dst)
    out[:, :3] = rgb
    out[:, 3] = out_a * 255.0
    region[footprint] = np.clip(np.rint(out), 0, 255).astype(np.uint8)


def render_segment(surface: Surface, p0, p1, radius, composition: Composition,
                   color=PAINT_COLOR, alpha=PAINT_ALPHA) -> bool:
    """Draw one point pair onto ``surface``. Returns False if nothing was covered."""
    hit = segment_footprint(surface.pixels.shape, p0, p1, radius)
    if hit is None:
        return False
    ys, xs, footprint = hit
    region = surface.pixels[ys, xs]
    if composition is Composition.CLEAR:
        region[footprint] = 0
    else:
        _paint_over(region, footprint, color, alpha)
    return True


def render_point(surface: Surface, p, radius, composition: Composition, **kwargs) -> bool:
    return render_segment(surface, p, p, radius, composition, **kwargs)


def render_stroke(surface: Surface, stroke: Stroke, **kwargs):
    """Replay a whole stroke the same way it is drawn incrementally."""
    if not stroke.points:
        return
    render_point(surface, stroke.points[0], stroke.radius, stroke.composition, **kwargs)
    for a, b in zip(stroke.points, stroke.points[1:]):
        render_segment(surface, a, b, stroke.radius, stroke.composition, **kwargs)
