"""Exception types raised by the mask painting core."""


class MaskPainterError(Exception):
    """Base class for mask painter errors."""


class InvalidDimensions(MaskPainterError, ValueError):
    """Width or height is zero, negative, or does not match the pixel buffer."""


class OutOfBounds(MaskPainterError, IndexError):
    """Pixel access outside the extents of a Surface."""


class ImageLoadFailed(MaskPainterError, IOError):
    """The image loader could not read or decode the source image."""
