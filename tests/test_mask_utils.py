import numpy as np
import pytest

from mask_painter import InvalidDimensions, MaskArtifact, Surface, binarize_overlay, compose_preview
from mask_painter.mask_utils import BLACK, WHITE


def test_alpha_threshold_maps_to_black_and_white():
    ov = Surface(4, 1)
    ov.pixels[0, 0] = (0, 0, 0, 0)
    ov.pixels[0, 1] = (255, 255, 255, 0)     # colour without alpha is unpainted
    ov.pixels[0, 2] = (0, 0, 0, 1)           # faintest alpha is painted
    ov.pixels[0, 3] = (162, 83, 255, 128)
    mask = binarize_overlay(ov)
    assert isinstance(mask, MaskArtifact)
    assert [mask.get(x, 0) for x in range(4)] == [BLACK, BLACK, WHITE, WHITE]


def test_mask_alpha_is_always_opaque():
    rng = np.random.default_rng(0)
    ov = Surface.from_array(rng.integers(0, 256, size=(16, 16, 4), dtype=np.uint8))
    mask = binarize_overlay(ov)
    assert (mask.pixels[..., 3] == 255).all()
    assert np.array_equal(mask.painted, ov.alpha > 0)
    assert set(np.unique(mask.pixels[..., :3])) <= {0, 255}


def test_binarize_is_deterministic():
    ov = Surface(10, 10)
    ov.pixels[2:5, 3:8, 3] = 40
    assert binarize_overlay(ov).tobytes() == binarize_overlay(ov).tobytes()


def test_blank_overlay_gives_all_black_mask():
    mask = binarize_overlay(Surface(6, 4))
    assert mask.size == (6, 4)
    assert not mask.painted.any()
    assert mask.coverage() == 0.0
    assert not mask.as_gray().any()


def test_mask_is_read_only():
    mask = binarize_overlay(Surface(2, 2))
    with pytest.raises(ValueError):
        mask.set(0, 0, WHITE)


def test_as_gray_and_coverage():
    ov = Surface(4, 2)
    ov.pixels[:, :1, 3] = 255
    mask = binarize_overlay(ov)
    gray = mask.as_gray()
    assert gray.shape == (2, 4)
    assert gray[:, 0].tolist() == [255, 255]
    assert gray[:, 1:].max() == 0
    assert mask.coverage() == pytest.approx(0.25)


def test_compose_preview_blends_overlay():
    bg = Surface.from_array(np.full((2, 2, 4), (100, 100, 100, 255), np.uint8))
    ov = Surface(2, 2)
    ov.pixels[0, 0] = (200, 0, 0, 255)
    ov.pixels[0, 1] = (200, 0, 0, 0)
    out = compose_preview(bg, ov)
    assert out.shape == (2, 2, 3)
    assert out[0, 0].tolist() == [200, 0, 0]
    assert out[0, 1].tolist() == [100, 100, 100]


def test_compose_preview_requires_matching_sizes():
    with pytest.raises(InvalidDimensions):
        compose_preview(Surface(2, 2), Surface(3, 2))
