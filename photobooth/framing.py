"""
Face-aware crop planning for the capture step.
"""
from __future__ import annotations
from typing import Optional

from photobooth.models import Box, CropRect

DESIRED_FACE_RATIO = 0.45  # face share of crop width/height
MIN_CROP_FRACTION = 0.28   # smallest crop, relative to the largest that fits


def _clamp(v: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, v))


def _check_dims(source_w: float, source_h: float, target_w: float, target_h: float) -> None:
    if source_w <= 0 or source_h <= 0:
        raise ValueError(f"invalid source size {source_w}x{source_h}")
    if target_w <= 0 or target_h <= 0:
        raise ValueError(f"invalid target size {target_w}x{target_h}")


def compute_face_crop(
    source_w: float,
    source_h: float,
    target_w: float,
    target_h: float,
    face: Box,
) -> CropRect:
    """
    Compute a source rectangle at the target aspect ratio, centered on the face.

    The face fills about DESIRED_FACE_RATIO of the crop. The crop size is kept
    between MIN_CROP_FRACTION and 100% of the largest aspect-consistent
    rectangle that fits in the source, then shifted to stay inside it.

    Raises:
        ValueError: non-positive source/target size or face box.
    """
    _check_dims(source_w, source_h, target_w, target_h)
    if face.w <= 0 or face.h <= 0:
        raise ValueError(f"invalid face box {face}")

    aspect = target_w / target_h
    cx, cy = face.center()

    crop_w = face.w / DESIRED_FACE_RATIO
    crop_h = face.h / DESIRED_FACE_RATIO
    if crop_w / crop_h < aspect:
        crop_w = crop_h * aspect
    else:
        crop_h = crop_w / aspect

    # Clamp the width within the aspect-consistent range and derive the height,
    # so sw/sh stays equal to the target aspect after clamping.
    max_w = min(source_w, source_h * aspect)
    crop_w = _clamp(crop_w, max_w * MIN_CROP_FRACTION, max_w)
    crop_h = min(crop_w / aspect, source_h)

    sx = _clamp(cx - crop_w / 2.0, 0.0, source_w - crop_w)
    sy = _clamp(cy - crop_h / 2.0, 0.0, source_h - crop_h)
    return CropRect(sx=sx, sy=sy, sw=crop_w, sh=crop_h)


def centered_crop(source_w: float, source_h: float, target_w: float, target_h: float) -> CropRect:
    """Largest centered rectangle at the target aspect ratio (no-face fallback)."""
    _check_dims(source_w, source_h, target_w, target_h)
    aspect = target_w / target_h
    if source_w / source_h > aspect:
        sh = float(source_h)
        sw = sh * aspect
        return CropRect(sx=(source_w - sw) / 2.0, sy=0.0, sw=sw, sh=sh)
    sw = float(source_w)
    sh = sw / aspect
    return CropRect(sx=0.0, sy=(source_h - sh) / 2.0, sw=sw, sh=sh)


def plan_crop(
    source_w: float,
    source_h: float,
    target_w: float,
    target_h: float,
    face: Optional[Box] = None,
) -> CropRect:
    if face is None:
        return centered_crop(source_w, source_h, target_w, target_h)
    return compute_face_crop(source_w, source_h, target_w, target_h, face)
