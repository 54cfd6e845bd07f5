"""Raster capture: crop a camera frame to the output size, mirror it, and beautify it."""
from __future__ import annotations

from typing import Optional

import cv2
import numpy as np

from photobooth.beauty import beautify, check_level
from photobooth.config import Settings
from photobooth.framing import plan_crop
from photobooth.models import Box, CropRect

PLACEHOLDER_BG = 0x15
PLACEHOLDER_SPECKLES = 1200
PLACEHOLDER_SPECKLE_ALPHA = 0.08


def _crop_pixels(rect: CropRect, source_w: int, source_h: int) -> tuple[int, int, int, int]:
    x0 = int(round(rect.sx))
    y0 = int(round(rect.sy))
    x1 = min(source_w, max(x0 + 1, int(round(rect.sx + rect.sw))))
    y1 = min(source_h, max(y0 + 1, int(round(rect.sy + rect.sh))))
    return x0, y0, x1, y1


def capture_photo(
    frame: np.ndarray,
    settings: Settings,
    face: Optional[Box] = None,
    level: Optional[int] = None,
) -> np.ndarray:
    """
    Turn a BGR camera frame into the beautified RGBA photo.

    Args:
        frame: BGR frame (H, W, 3) as read from OpenCV.
        settings: output size, mirroring and default beauty level.
        face: tracked face box; None falls back to a centered crop.
        level: beauty level override (0..10).

    Returns:
        RGBA uint8 raster of OUTPUT_HEIGHT x OUTPUT_WIDTH.
    """
    level = check_level(settings.BEAUTY_LEVEL if level is None else level)
    h, w = frame.shape[:2]
    out_w, out_h = settings.OUTPUT_WIDTH, settings.OUTPUT_HEIGHT

    rect = plan_crop(w, h, out_w, out_h, face)
    x0, y0, x1, y1 = _crop_pixels(rect, w, h)
    chip = frame[y0:y1, x0:x1]
    photo = cv2.resize(chip, (out_w, out_h), interpolation=cv2.INTER_AREA)
    if settings.MIRROR:
        photo = cv2.flip(photo, 1)

    raster = cv2.cvtColor(photo, cv2.COLOR_BGR2RGBA)
    return beautify(raster, level)


def placeholder_frame(width: int, height: int, seed: Optional[int] = None) -> np.ndarray:
    """Dark speckled RGBA frame used when the camera is not running."""
    raster = np.full((height, width, 4), PLACEHOLDER_BG, dtype=np.uint8)
    raster[..., 3] = 255
    speck = int(round(PLACEHOLDER_BG + (255 - PLACEHOLDER_BG) * PLACEHOLDER_SPECKLE_ALPHA))
    rng = np.random.default_rng(seed)
    xs = rng.integers(0, width, PLACEHOLDER_SPECKLES)
    ys = rng.integers(0, height, PLACEHOLDER_SPECKLES)
    raster[ys, xs, :3] = speck
    return raster


def encode_png(raster: np.ndarray) -> bytes:
    ok, buf = cv2.imencode(".png", cv2.cvtColor(raster, cv2.COLOR_RGBA2BGRA))
    if not ok:
        raise RuntimeError("PNG encoding failed")
    return buf.tobytes()


def decode_image(data: bytes) -> Optional[np.ndarray]:
    """Decode uploaded image bytes to a BGR frame; None if undecodable."""
    if not data:
        return None
    arr = np.frombuffer(data, dtype=np.uint8)
    return cv2.imdecode(arr, cv2.IMREAD_COLOR)
