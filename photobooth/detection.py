"""
Frame source and face detector adapters (OpenCV camera + DeepFace).
"""
from __future__ import annotations
from typing import Dict, List, Optional, Tuple
import asyncio
import logging

import cv2
import numpy as np

from photobooth.config import Settings
from photobooth.models import Box

logger = logging.getLogger(__name__)


class CameraSource:
    """
    Webcam frame source. grab() decodes one frame and caches it for the tracker.
    """
    def __init__(self, camera_index: int = 0):
        self.camera_index = camera_index
        self._cap: Optional[cv2.VideoCapture] = None
        self._frame: Optional[np.ndarray] = None

    def open(self) -> "CameraSource":
        self._cap = cv2.VideoCapture(self.camera_index)
        if not self._cap.isOpened():
            raise RuntimeError(f"Could not open camera index {self.camera_index}")
        logger.debug(f"[camera] opened index={self.camera_index}")
        return self

    def grab(self) -> Optional[np.ndarray]:
        if self._cap is None:
            return None
        ok, frame = self._cap.read()
        if not ok or frame is None:
            return None
        self._frame = frame
        return frame

    @property
    def ready(self) -> bool:
        return self._frame is not None

    @property
    def frame_size(self) -> Optional[Tuple[int, int]]:
        if self._frame is None:
            return None
        h, w = self._frame.shape[:2]
        return (w, h) if w and h else None

    @property
    def latest_frame(self) -> Optional[np.ndarray]:
        return self._frame

    def release(self) -> None:
        if self._cap is not None:
            self._cap.release()
            self._cap = None


def _region_to_box(region: Dict, confidence: float, min_conf: float) -> Optional[Box]:
    w = float(region.get("w", 0) or 0)
    h = float(region.get("h", 0) or 0)
    if w <= 0 or h <= 0 or confidence < min_conf:
        return None
    return Box(x=float(region.get("x", 0) or 0), y=float(region.get("y", 0) or 0), w=w, h=h)


class DeepFaceDetector:
    """
    FaceDetector backed by DeepFace.extract_faces (imported lazily).

    Returns at most one face: the first region passing the size and
    confidence filters.
    """
    def __init__(self, settings: Settings):
        self.backend = settings.DETECTOR_BACKEND
        self.min_conf = settings.MIN_DET_CONF

    def detect_sync(self, frame: np.ndarray) -> Optional[Box]:
        from deepface import DeepFace

        dets: List[Dict] = DeepFace.extract_faces(
            img_path=frame,
            detector_backend=self.backend,
            enforce_detection=False,
            align=False,
        ) or []
        for d in dets:
            fa = d.get("facial_area") or {}
            try:
                conf = float(d.get("confidence", 1.0))
            except (TypeError, ValueError):
                conf = 1.0
            box = _region_to_box(fa, conf, self.min_conf)
            if box is not None:
                return box
        return None

    async def detect(self, frame: np.ndarray) -> Optional[Box]:
        return await asyncio.to_thread(self.detect_sync, frame)
