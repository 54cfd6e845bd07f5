# photobooth/pipeline.py
from __future__ import annotations
from typing import Optional, Tuple
import logging

import numpy as np

from photobooth.capture import capture_photo, placeholder_frame
from photobooth.config import Settings
from photobooth.expression import EmotionAnalyzer
from photobooth.models import Box, FaceAnalysisResponse
from photobooth.tracker import FaceTracker

logger = logging.getLogger(__name__)


def framing_face(tracker: Optional[FaceTracker], settings: Settings) -> Optional[Box]:
    """Face box to frame the capture with, or None for a centered shot."""
    if tracker is None or not settings.FACE_ZOOM:
        return None
    return tracker.current()


async def take_photo(
    frame: Optional[np.ndarray],
    settings: Settings,
    analyzer: EmotionAnalyzer,
    face: Optional[Box] = None,
    level: Optional[int] = None,
) -> Tuple[np.ndarray, FaceAnalysisResponse]:
    """
    Capture one photo and classify the subject's expression.

    Without a camera frame the photo is the dark placeholder, which is
    neither beautified nor analyzed.

    Returns:
      (raster, analysis) where raster is the beautified RGBA photo and
      analysis is a FaceAnalysisResponse (face_detected=False on no face).
    """
    if frame is None:
        logger.debug("[pipeline] camera inactive; using placeholder photo")
        raster = placeholder_frame(settings.OUTPUT_WIDTH, settings.OUTPUT_HEIGHT)
        return raster, FaceAnalysisResponse(ok=True, face_detected=False)

    logger.debug(f"[pipeline] take_photo face={face} level={level}")
    raster = capture_photo(frame, settings, face=face, level=level)
    logger.debug(f"[pipeline] captured raster shape={raster.shape}; analyzing expression")
    analysis = await analyzer.analyze(raster)
    logger.debug(f"[pipeline] take_photo finished ok={analysis.ok} face_detected={analysis.face_detected}")
    return raster, analysis
