"""Preview overlay helpers.

- draw_overlays: draw the tracked face box, the planned crop rectangle, and a label or flag
"""
from __future__ import annotations
import cv2
import numpy as np
from typing import Optional, Tuple

from photobooth.models import Box, CropRect


def draw_overlays(frame: np.ndarray,
                  face: Optional[Box] = None,
                  crop: Optional[CropRect] = None,
                  label: Optional[str] = None,
                  flag: Optional[str] = None,
                  color: Tuple[int, int, int] = (0, 255, 0)) -> np.ndarray:
    """Draw preview overlays on a copy of a frame.

    Args:
        frame: BGR image
        face: smoothed face box, if tracking
        crop: crop rectangle the next capture would use
        label: optional text drawn above the face box (or top-left without a face)
        flag: optional status text (e.g., "NO_FACE", "TRACKING OFF")
        color: BGR color for the face rectangle

    Returns:
        Annotated copy of the frame
    """
    out = frame.copy()
    h, w = out.shape[:2]

    if crop is not None:
        x0, y0 = int(round(crop.sx)), int(round(crop.sy))
        x1, y1 = int(round(crop.sx + crop.sw)), int(round(crop.sy + crop.sh))
        cv2.rectangle(out, (x0, y0), (min(w - 1, x1), min(h - 1, y1)), (255, 200, 0), 1)

    if flag:
        cv2.putText(out, flag, (10, 30), cv2.FONT_HERSHEY_SIMPLEX, 1.0, (0, 0, 255), 2, cv2.LINE_AA)

    if face is not None:
        x, y = int(face.x), int(face.y)
        fw, fh = int(face.w), int(face.h)
        # clamp to image bounds
        x = max(0, min(x, w - 1)); y = max(0, min(y, h - 1))
        fw = max(0, min(fw, w - x)); fh = max(0, min(fh, h - y))
        cv2.rectangle(out, (x, y), (x + fw, y + fh), color, 2)
        if label:
            cv2.putText(out, label, (x, max(0, y - 10)), cv2.FONT_HERSHEY_SIMPLEX, 0.6, color, 2, cv2.LINE_AA)
    elif label:
        cv2.putText(out, label, (10, h - 15), cv2.FONT_HERSHEY_SIMPLEX, 0.6, color, 2, cv2.LINE_AA)

    return out
