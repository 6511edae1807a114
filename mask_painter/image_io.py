"""Image loading and mask export.

Decoding and encoding go through OpenCV; everything handed to or returned by
the painting core is RGBA uint8.
"""
import logging
import os

import cv2
import numpy as np

from .config import IMAGE_EXTENSIONS, MAX_IMAGE_BYTES
from .errors import ImageLoadFailed
from .surface import Surface

logger = logging.getLogger(__name__)


def to_rgba8(img: np.ndarray, bgr_order=True) -> np.ndarray:
    """Normalize a decoded image to (H, W, 4) RGBA uint8.

    - Gray, BGR/RGB and BGRA/RGBA inputs are accepted.
    - 16-bit/float images are rescaled to 0..255 using min/max.
    """
    if img is None or img.size == 0:
        raise ImageLoadFailed("Empty image")
    if img.dtype != np.uint8:
        imin = float(np.min(img))
        imax = float(np.max(img))
        if imax <= imin:
            img = np.zeros_like(img, dtype=np.uint8)
        else:
            img = cv2.normalize(img, None, alpha=0, beta=255, norm_type=cv2.NORM_MINMAX).astype(np.uint8)
    if img.ndim == 2:
        return cv2.cvtColor(img, cv2.COLOR_GRAY2RGBA)
    channels = img.shape[2]
    if channels == 1:
        return cv2.cvtColor(img[..., 0], cv2.COLOR_GRAY2RGBA)
    if channels == 3:
        return cv2.cvtColor(img, cv2.COLOR_BGR2RGBA if bgr_order else cv2.COLOR_RGB2RGBA)
    if channels == 4:
        return cv2.cvtColor(img, cv2.COLOR_BGRA2RGBA) if bgr_order else img.copy()
    raise ImageLoadFailed(f"Unsupported channel count: {channels}")


def decode_rgba(data: bytes) -> np.ndarray:
    """Decode an encoded image held in memory."""
    buf = np.frombuffer(data, dtype=np.uint8)
    img = cv2.imdecode(buf, cv2.IMREAD_UNCHANGED) if buf.size else None
    if img is None:
        raise ImageLoadFailed("Failed to decode image data")
    return to_rgba8(img)


def read_rgba(path, max_bytes=MAX_IMAGE_BYTES) -> np.ndarray:
    """Read an image file as RGBA uint8, enforcing size and extension limits."""
    path = os.fspath(path)
    if not os.path.isfile(path):
        raise ImageLoadFailed(f"File not found: {path}")
    ext = os.path.splitext(path)[1].lower()
    if ext not in IMAGE_EXTENSIONS:
        raise ImageLoadFailed(f"Unsupported image type '{ext}' (use PNG, JPG or WEBP)")
    nbytes = os.path.getsize(path)
    if max_bytes is not None and nbytes > max_bytes:
        raise ImageLoadFailed(f"File size must be less than {max_bytes // (1024 * 1024)}MB")
    # imdecode handles non-ASCII paths that cv2.imread cannot open on Windows
    with open(path, 'rb') as f:
        data = f.read()
    try:
        rgba = decode_rgba(data)
    except ImageLoadFailed as e:
        raise ImageLoadFailed(f"Failed to read the image: {os.path.basename(path)}") from e
    logger.info("Loaded %s (%dx%d)", os.path.basename(path), rgba.shape[1], rgba.shape[0])
    return rgba


def encode_png(surface: Surface) -> bytes:
    """Encode a Surface (typically a MaskArtifact) as PNG bytes."""
    ok, buf = cv2.imencode('.png', cv2.cvtColor(surface.pixels, cv2.COLOR_RGBA2BGRA))
    if not ok:
        raise RuntimeError("cv2.imencode returned False")
    return buf.tobytes()


def save_mask(surface: Surface, path):
    path = os.fspath(path)
    data = encode_png(surface)
    with open(path, 'wb') as f:
        f.write(data)
    logger.info("Saved mask to %s", path)
    return path
