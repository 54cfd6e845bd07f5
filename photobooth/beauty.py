"""Skin-adaptive beautification for captured RGBA rasters.

- smooth_skin: blend a Gaussian-blurred copy into low-detail skin pixels
- whiten: soft-light wash of a warm near-white over the whole frame
- beautify: both passes, smoothing first

Both passes mutate the raster in place and return it. Level 0 is a no-op.
"""
from __future__ import annotations

from typing import Callable

import cv2
import numpy as np

MAX_LEVEL = 10
WHITEN_COLOR = (255, 250, 240)
WHITEN_ALPHA_PER_LEVEL = 0.06
MAX_BLEND = 0.8

SkinMask = Callable[[np.ndarray], np.ndarray]


def check_level(level: int) -> int:
    level = int(level)
    if not 0 <= level <= MAX_LEVEL:
        raise ValueError(f"beauty level must be in [0, {MAX_LEVEL}], got {level}")
    return level


def _check_raster(raster: np.ndarray) -> None:
    if raster.ndim != 3 or raster.shape[2] != 4 or raster.dtype != np.uint8:
        raise ValueError(f"expected an RGBA uint8 raster, got shape={raster.shape} dtype={raster.dtype}")


def is_skin(r: int, g: int, b: int) -> bool:
    """Coarse fixed-threshold RGB skin test."""
    return r > 45 and g > 40 and b > 20 and r > g and r > b and abs(r - g) > 10


def skin_mask(raster: np.ndarray) -> np.ndarray:
    """Vectorized is_skin over an (H, W, >=3) raster; returns a bool (H, W) mask."""
    rgb = raster[..., :3].astype(np.int16)
    r, g, b = rgb[..., 0], rgb[..., 1], rgb[..., 2]
    return (r > 45) & (g > 40) & (b > 20) & (r > g) & (r > b) & (np.abs(r - g) > 10)


def blur_radius(level: int) -> float:
    return 2 + level * 1.5


def smooth_skin(raster: np.ndarray, level: int, skin: SkinMask = skin_mask) -> np.ndarray:
    """
    Blend a blurred copy into skin pixels whose local detail is low.

    Pixels differing from the blur by less than `15 + 2 * level` (summed over
    RGB) get blend factor `min((1 - diff / threshold) * level / 5, 0.8)`;
    edges, non-skin pixels and alpha stay as captured.
    """
    level = check_level(level)
    _check_raster(raster)
    if level == 0:
        return raster

    sigma = blur_radius(level)
    src = np.ascontiguousarray(raster[..., :3])
    blurred = cv2.GaussianBlur(src, (0, 0), sigmaX=sigma, sigmaY=sigma).astype(np.float32)
    rgb = raster[..., :3].astype(np.float32)

    threshold = 15.0 + level * 2.0
    diff = np.abs(rgb - blurred).sum(axis=2)
    factor = np.minimum((1.0 - diff / threshold) * level / 5.0, MAX_BLEND)
    factor = np.where(skin(raster) & (diff < threshold), factor, 0.0)[..., None]

    out = rgb * (1.0 - factor) + blurred * factor
    raster[..., :3] = np.clip(np.rint(out), 0, 255).astype(np.uint8)
    return raster


def _soft_light(cb: np.ndarray, cs: np.ndarray) -> np.ndarray:
    # W3C soft-light blend; cb = backdrop, cs = source, both in [0, 1]
    d = np.where(cb <= 0.25, ((16.0 * cb - 12.0) * cb + 4.0) * cb, np.sqrt(cb))
    return np.where(
        cs <= 0.5,
        cb - (1.0 - 2.0 * cs) * cb * (1.0 - cb),
        cb + (2.0 * cs - 1.0) * (d - cb),
    )


def whiten(raster: np.ndarray, level: int) -> np.ndarray:
    """Soft-light composite WHITEN_COLOR at alpha `0.06 * level` over the whole frame."""
    level = check_level(level)
    _check_raster(raster)
    if level == 0:
        return raster

    alpha_s = level * WHITEN_ALPHA_PER_LEVEL
    cb = raster[..., :3].astype(np.float64) / 255.0
    alpha_b = raster[..., 3:4].astype(np.float64) / 255.0
    cs = np.asarray(WHITEN_COLOR, dtype=np.float64) / 255.0

    blended = (1.0 - alpha_b) * cs + alpha_b * _soft_light(cb, cs)
    alpha_o = alpha_s + alpha_b * (1.0 - alpha_s)
    premul = alpha_s * blended + alpha_b * cb * (1.0 - alpha_s)
    color = premul / np.maximum(alpha_o, 1e-12)

    raster[..., :3] = np.clip(np.rint(color * 255.0), 0, 255).astype(np.uint8)
    raster[..., 3] = np.clip(np.rint(alpha_o[..., 0] * 255.0), 0, 255).astype(np.uint8)
    return raster


def beautify(raster: np.ndarray, level: int, skin: SkinMask = skin_mask) -> np.ndarray:
    level = check_level(level)
    if level == 0:
        return raster
    smooth_skin(raster, level, skin=skin)
    return whiten(raster, level)
