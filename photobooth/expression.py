"""
Expression probabilities for a captured photo, and the photo-level analyzer.

EmotionAnalyzer takes an injected ExpressionProvider; the DeepFace-backed
provider is one implementation. A missing face is a normal outcome
(face_detected=False); a provider failure is reported as ok=False.
"""
from __future__ import annotations
from typing import Dict, Optional, Protocol
import asyncio
import logging

import cv2
import numpy as np

from photobooth.config import Settings
from photobooth.emotion import classify
from photobooth.models import BASE_LABELS, FaceAnalysisResponse

logger = logging.getLogger(__name__)

# DeepFace emotion keys -> base labels
DEEPFACE_LABELS = {
    "happy": "happy",
    "sad": "sad",
    "angry": "angry",
    "surprise": "surprised",
    "fear": "fearful",
    "disgust": "disgusted",
    "neutral": "neutral",
}


class ExpressionProvider(Protocol):
    async def expressions(self, image: np.ndarray) -> Optional[Dict[str, float]]:
        ...


def preprocess_for_expression(raster: np.ndarray, contrast: float = 1.1, brightness: float = 10.0) -> np.ndarray:
    """Contrast/brightness lift applied to RGB before expression detection. Returns a copy."""
    out = raster.copy()
    rgb = out[..., :3].astype(np.float32)
    adjusted = contrast * (rgb - 128.0) + 128.0 + brightness
    out[..., :3] = np.clip(np.rint(adjusted), 0, 255).astype(np.uint8)
    return out


def map_deepface_emotions(emotion: Dict[str, float]) -> Dict[str, float]:
    """Map DeepFace's percentage scores (0..100) onto base labels in [0, 1]."""
    scores = {label: 0.0 for label in BASE_LABELS}
    for key, value in (emotion or {}).items():
        label = DEEPFACE_LABELS.get(str(key).lower())
        if label is None:
            continue
        scores[label] = max(0.0, min(1.0, float(value) / 100.0))
    return scores


class DeepFaceExpressionProvider:
    """ExpressionProvider backed by DeepFace.analyze(actions=['emotion'])."""

    def __init__(self, settings: Settings):
        self.backend = settings.DETECTOR_BACKEND
        self.min_conf = settings.MIN_DET_CONF

    def expressions_sync(self, image_bgr: np.ndarray) -> Optional[Dict[str, float]]:
        # Lazy import so tests can swap sys.modules['deepface']
        from deepface import DeepFace

        res = DeepFace.analyze(
            image_bgr,
            actions=["emotion"],
            enforce_detection=False,
            detector_backend=self.backend,
        )
        res = res if isinstance(res, list) else [res]
        if not res:
            return None
        r0 = res[0] or {}
        try:
            conf = float(r0.get("face_confidence", 1.0))
        except (TypeError, ValueError):
            conf = 1.0
        emotion = r0.get("emotion")
        if conf < self.min_conf or not isinstance(emotion, dict) or not emotion:
            return None
        return map_deepface_emotions(emotion)

    async def expressions(self, image: np.ndarray) -> Optional[Dict[str, float]]:
        return await asyncio.to_thread(self.expressions_sync, image)


class EmotionAnalyzer:
    """Runs the expression provider on a captured RGBA photo and classifies the result."""

    def __init__(self, provider: ExpressionProvider, settings: Optional[Settings] = None):
        settings = settings or Settings()
        self.provider = provider
        self.contrast = settings.PREPROCESS_CONTRAST
        self.brightness = settings.PREPROCESS_BRIGHTNESS

    async def analyze(self, raster: np.ndarray) -> FaceAnalysisResponse:
        prepared = preprocess_for_expression(raster, self.contrast, self.brightness)
        image_bgr = cv2.cvtColor(prepared, cv2.COLOR_RGBA2BGR)
        try:
            base = await self.provider.expressions(image_bgr)
        except Exception as e:
            logger.exception("[analyzer] expression detection failed")
            return FaceAnalysisResponse(ok=False, face_detected=False, error=str(e))

        if base is None:
            logger.debug("[analyzer] no face detected")
            return FaceAnalysisResponse(ok=True, face_detected=False)

        result = classify(base)
        logger.debug(f"[analyzer] emotion={result.emotion} confidence={result.confidence}")
        return FaceAnalysisResponse(ok=True, face_detected=True, result=result)
