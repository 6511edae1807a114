import numpy as np

from .errors import InvalidDimensions
from .surface import Surface

BLACK = (0, 0, 0, 255)
WHITE = (255, 255, 255, 255)


class MaskArtifact(Surface):
    """Read-only black/white mask. Pixels are only BLACK or WHITE."""

    @classmethod
    def from_painted(cls, painted: np.ndarray) -> "MaskArtifact":
        h, w = painted.shape[:2]
        mask = cls(w, h)
        mask.pixels[..., 3] = 255
        mask.pixels[painted, :3] = 255
        mask.pixels.flags.writeable = False
        return mask

    @property
    def painted(self) -> np.ndarray:
        """Boolean (H, W) array, True where the mask is white."""
        return self.pixels[..., 0] == 255

    def as_gray(self) -> np.ndarray:
        """Single-channel uint8 mask (0 or 255), the layout most inpainting backends take."""
        return np.where(self.painted, 255, 0).astype(np.uint8)

    def coverage(self) -> float:
        """Fraction of pixels marked white."""
        return float(self.painted.mean())


def binarize_overlay(overlay: Surface) -> MaskArtifact:
    """White wherever the overlay alpha is above zero, black elsewhere.

    Any non-zero alpha counts as painted, including partially transparent
    brush pixels. Output alpha is always 255.
    """
    return MaskArtifact.from_painted(overlay.alpha > 0)


def compose_preview(background: Surface, overlay: Surface) -> np.ndarray:
    """Blend the overlay over the background; returns an (H, W, 3) uint8 RGB array."""
    if background.size != overlay.size:
        raise InvalidDimensions(
            f"Background {background.width}x{background.height} does not match "
            f"overlay {overlay.width}x{overlay.height}")
    base = background.pixels[..., :3].astype(np.float32)
    top = overlay.pixels[..., :3].astype(np.float32)
    a = overlay.pixels[..., 3:4].astype(np.float32) / 255.0
    out = top * a + base * (1.0 - a)
    return np.clip(np.rint(out), 0, 255).astype(np.uint8)
