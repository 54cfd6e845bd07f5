
import numpy as np

from photobooth.models import Box, CropRect
from photobooth.visual import draw_overlays


def test_draw_overlays_cases():
    frame = np.zeros((60, 80, 3), dtype=np.uint8)
    out1 = draw_overlays(frame, flag="TRACKING OFF")
    assert out1.shape == frame.shape
    assert out1.any()
    out2 = draw_overlays(frame, face=Box(x=10, y=10, w=15, h=12), label="happy 80%")
    assert out2.shape == frame.shape
    # face box drawn in the default green
    assert out2[10, 10].tolist() == [0, 255, 0]
    out3 = draw_overlays(frame, crop=CropRect(sx=5, sy=0, sw=45, sh=60))
    assert out3[30, 5].tolist() == [255, 200, 0]


def test_draw_overlays_leaves_input_untouched():
    frame = np.zeros((40, 40, 3), dtype=np.uint8)
    draw_overlays(frame, face=Box(x=30, y=30, w=50, h=50), label="x", flag="NO_FACE")
    assert not frame.any()
