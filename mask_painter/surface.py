import numpy as np

from .errors import InvalidDimensions, OutOfBounds


class Surface:
    """Owned RGBA pixel buffer.

    pixels: uint8 array, shape (height, width, 4). A new Surface is fully
    transparent. Pixel access through get/set is bounds-checked; renderers
    and the binarizer work on ``pixels`` directly.
    """

    def __init__(self, width: int, height: int):
        width = int(width)
        height = int(height)
        if width <= 0 or height <= 0:
            raise InvalidDimensions(f"Surface size must be positive, got {width}x{height}")
        self._pixels = np.zeros((height, width, 4), dtype=np.uint8)

    @classmethod
    def from_array(cls, arr: np.ndarray) -> "Surface":
        """Build a Surface from an (H, W, 4) array. The data is copied."""
        a = np.asarray(arr)
        if a.ndim != 3 or a.shape[2] != 4:
            raise InvalidDimensions(f"Expected an (H, W, 4) array, got shape {a.shape}")
        surf = cls(a.shape[1], a.shape[0])
        surf._pixels[...] = a.astype(np.uint8, copy=False)
        return surf

    @property
    def width(self) -> int:
        return self._pixels.shape[1]

    @property
    def height(self) -> int:
        return self._pixels.shape[0]

    @property
    def size(self):
        return self.width, self.height

    @property
    def pixels(self) -> np.ndarray:
        return self._pixels

    @property
    def alpha(self) -> np.ndarray:
        return self._pixels[..., 3]

    @property
    def read_only(self) -> bool:
        return not self._pixels.flags.writeable

    def _check(self, x, y):
        if x < 0 or y < 0 or x >= self.width or y >= self.height:
            raise OutOfBounds(f"({x}, {y}) outside {self.width}x{self.height} surface")

    def get(self, x: int, y: int):
        self._check(x, y)
        return tuple(int(v) for v in self._pixels[y, x])

    def set(self, x: int, y: int, rgba):
        self._check(x, y)
        self._pixels[y, x] = rgba

    def clear(self):
        self._pixels[...] = 0

    def clone(self) -> "Surface":
        """Independent, writable copy."""
        return Surface.from_array(self._pixels)

    def frozen(self) -> "Surface":
        """Independent copy whose buffer cannot be written to."""
        surf = self.clone()
        surf._pixels.flags.writeable = False
        return surf

    def copy_from(self, other: "Surface"):
        """Replace every pixel with the pixels of ``other`` (same size)."""
        if other.size != self.size:
            raise InvalidDimensions(f"Cannot copy {other.width}x{other.height} into {self.width}x{self.height}")
        self._pixels[...] = other.pixels

    def tobytes(self) -> bytes:
        return self._pixels.tobytes()

    def __eq__(self, other):
        if not isinstance(other, Surface):
            return NotImplemented
        return np.array_equal(self._pixels, other._pixels)

    __hash__ = None

    def __repr__(self):
        return f"{type(self).__name__}({self.width}x{self.height})"
