import cv2
import numpy as np
import pytest

from mask_painter import ImageLoadFailed, Surface, binarize_overlay, decode_rgba, encode_png, read_rgba, save_mask


def _write_png(path, rgb):
    ok = cv2.imwrite(str(path), cv2.cvtColor(rgb, cv2.COLOR_RGB2BGR))
    assert ok
    return path


def test_read_rgba_converts_channel_order(tmp_path):
    rgb = np.zeros((5, 7, 3), np.uint8)
    rgb[..., 0] = 200   # red
    path = _write_png(tmp_path / "red.png", rgb)
    rgba = read_rgba(path)
    assert rgba.shape == (5, 7, 4)
    assert rgba[0, 0].tolist() == [200, 0, 0, 255]


def test_read_rgba_gray_image(tmp_path):
    gray = np.full((3, 3), 77, np.uint8)
    path = tmp_path / "gray.png"
    cv2.imwrite(str(path), gray)
    assert read_rgba(path)[1, 1].tolist() == [77, 77, 77, 255]


def test_read_rgba_normalizes_16bit(tmp_path):
    img = np.zeros((2, 2), np.uint16)
    img[0, 0] = 1000
    img[1, 1] = 3000
    path = tmp_path / "deep.png"
    cv2.imwrite(str(path), img)
    rgba = read_rgba(path)
    assert rgba.dtype == np.uint8
    assert rgba[1, 1, 0] == 255
    assert rgba[0, 1, 0] == 0


def test_read_rgba_rejects_missing_file(tmp_path):
    with pytest.raises(ImageLoadFailed):
        read_rgba(tmp_path / "nope.png")


def test_read_rgba_rejects_unsupported_extension(tmp_path):
    path = tmp_path / "notes.txt"
    path.write_text("hello")
    with pytest.raises(ImageLoadFailed):
        read_rgba(path)


def test_read_rgba_rejects_large_files(tmp_path):
    path = _write_png(tmp_path / "img.png", np.zeros((8, 8, 3), np.uint8))
    with pytest.raises(ImageLoadFailed, match="less than"):
        read_rgba(path, max_bytes=10)


def test_read_rgba_rejects_corrupt_data(tmp_path):
    path = tmp_path / "broken.png"
    path.write_bytes(b"not really a png")
    with pytest.raises(ImageLoadFailed):
        read_rgba(path)


def test_mask_png_export_keeps_pixels(tmp_path):
    ov = Surface(6, 4)
    ov.pixels[1:3, 2:5, 3] = 128
    mask = binarize_overlay(ov)
    assert np.array_equal(decode_rgba(encode_png(mask)), mask.pixels)

    path = save_mask(mask, tmp_path / "mask.png")
    assert np.array_equal(read_rgba(path), mask.pixels)


def test_decode_rgba_rejects_empty_buffer():
    with pytest.raises(ImageLoadFailed):
        decode_rgba(b"")


def test_read_rgba_keeps_the_decode_error_as_cause(tmp_path):
    path = tmp_path / "broken.png"
    path.write_bytes(b"\x89PNG garbage")
    with pytest.raises(ImageLoadFailed) as info:
        read_rgba(path)
    assert isinstance(info.value.__cause__, ImageLoadFailed)
