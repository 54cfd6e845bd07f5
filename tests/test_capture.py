import numpy as np
import pytest

from photobooth.capture import capture_photo, decode_image, encode_png, placeholder_frame
from photobooth.models import Box


def _split_frame():
    # BGR: left half red, right half blue
    frame = np.zeros((1000, 1000, 3), dtype=np.uint8)
    frame[:, :500] = (0, 0, 255)
    frame[:, 500:] = (255, 0, 0)
    return frame


def test_capture_outputs_rgba_at_target_size(settings):
    out = capture_photo(_split_frame(), settings)
    assert out.shape == (800, 600, 4)
    assert out.dtype == np.uint8
    assert np.all(out[..., 3] == 255)


def test_capture_mirrors_horizontally(settings):
    out = capture_photo(_split_frame(), settings)
    # centered crop spans both halves; mirrored, blue lands on the left
    assert out[400, 10].tolist() == [0, 0, 255, 255]
    assert out[400, 590].tolist() == [255, 0, 0, 255]

    unmirrored = capture_photo(_split_frame(), settings.model_copy(update={"MIRROR": False}))
    assert unmirrored[400, 10].tolist() == [255, 0, 0, 255]


def test_capture_frames_around_the_face(settings):
    frame = np.zeros((1000, 1000, 3), dtype=np.uint8)
    frame[:300, :300] = 255
    # face crop for this box is (20, 0, 210, 280): entirely inside the white corner
    out = capture_photo(frame, settings, face=Box(x=100, y=100, w=50, h=50))
    assert np.all(out[..., :3] == 255)

    centered = capture_photo(frame, settings, face=None)
    assert centered[..., :3].mean() < 128


def test_capture_applies_beauty_level(settings):
    frame = np.full((400, 300, 3), 128, dtype=np.uint8)
    plain = capture_photo(frame, settings, level=0)
    bright = capture_photo(frame, settings, level=6)
    assert np.all(bright[..., :3] > plain[..., :3])
    with pytest.raises(ValueError):
        capture_photo(frame, settings, level=12)


def test_placeholder_frame_is_dark_with_speckles():
    a = placeholder_frame(600, 800, seed=7)
    b = placeholder_frame(600, 800, seed=7)
    assert a.shape == (800, 600, 4)
    assert np.array_equal(a, b)
    values = set(np.unique(a[..., 0]).tolist())
    assert values == {0x15, 40}
    assert np.all(a[..., 3] == 255)


def test_png_encoding_decodes_back_to_a_frame():
    raster = placeholder_frame(60, 80, seed=1)
    frame = decode_image(encode_png(raster))
    assert frame.shape == (80, 60, 3)
    assert decode_image(b"") is None
    assert decode_image(b"not an image") is None
