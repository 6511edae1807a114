"""Tunables for the mask painter.

Values can be overridden for a run through environment variables where noted.
"""
import os

# Canvas sizing: loaded images are scaled down to fit inside this box
MAX_CANVAS_WIDTH = 800
MAX_CANVAS_HEIGHT = 600

# Undo/redo depth (number of overlay snapshots kept)
HISTORY_CAPACITY = 20

# Brush radius limits in surface pixels
MIN_BRUSH_RADIUS = 5
MAX_BRUSH_RADIUS = 50
DEFAULT_BRUSH_RADIUS = 20

# Paint colour (RGB) and alpha used for brush strokes on the overlay
PAINT_COLOR = (162, 83, 255)
PAINT_ALPHA = 128

# Image loader limits
MAX_IMAGE_BYTES = 10 * 1024 * 1024
IMAGE_EXTENSIONS = ('.png', '.jpg', '.jpeg', '.webp', '.bmp', '.tif', '.tiff')

MASK_FILENAME = 'mask.png'

# Logging
LOG_DIR = os.environ.get(
    'MASK_PAINTER_LOG_DIR',
    os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'logs'),
)
LOG_LEVEL = os.environ.get('MASK_PAINTER_LOG_LEVEL', 'INFO').upper()
