import numpy as np
import pytest

from mask_painter import PaintSession, Surface


@pytest.fixture
def overlay():
    return Surface(64, 48)


@pytest.fixture
def masks():
    """Collects every mask emitted by the session fixture."""
    return []


@pytest.fixture
def session(masks):
    s = PaintSession(on_mask_changed=masks.append)
    s.load_image(np.full((200, 300, 3), 90, dtype=np.uint8))
    return s
