"""mask_painter package: paint a region over an image and derive a binary inpainting mask."""

from .errors import ImageLoadFailed, InvalidDimensions, MaskPainterError, OutOfBounds
from .surface import Surface
from .coords import CoordinateMapper, fit_within
from .stroke_renderer import Composition, Stroke, Tool, render_point, render_segment, render_stroke
from .history import HistoryStack
from .mask_utils import MaskArtifact, binarize_overlay, compose_preview
from .image_io import decode_rgba, encode_png, read_rgba, save_mask
from .session import PaintSession, State

__all__ = [
    'ImageLoadFailed', 'InvalidDimensions', 'MaskPainterError', 'OutOfBounds',
    'Surface',
    'CoordinateMapper', 'fit_within',
    'Composition', 'Stroke', 'Tool', 'render_point', 'render_segment', 'render_stroke',
    'HistoryStack',
    'MaskArtifact', 'binarize_overlay', 'compose_preview',
    'decode_rgba', 'encode_png', 'read_rgba', 'save_mask',
    'PaintSession', 'State',
]
