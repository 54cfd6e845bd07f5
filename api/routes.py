"""
REST endpoints for capture and emotion classification.
"""
from typing import Optional
import logging

import cv2
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from fastapi.responses import Response

from photobooth.capture import capture_photo, decode_image, encode_png
from photobooth.config import Settings
from photobooth.emotion import classify
from photobooth.expression import DeepFaceExpressionProvider, EmotionAnalyzer
from photobooth.models import BaseScores, Box, EmotionResult, FaceAnalysisResponse

router = APIRouter()
logger = logging.getLogger(__name__)


def get_settings() -> Settings:
    return Settings()


def get_analyzer(settings: Settings = Depends(get_settings)) -> EmotionAnalyzer:
    return EmotionAnalyzer(DeepFaceExpressionProvider(settings), settings)


async def _read_image(file: UploadFile):
    data = await file.read()
    frame = decode_image(data)
    if frame is None:
        logger.debug(f"[api] undecodable upload filename={file.filename} bytes={len(data)}")
        raise HTTPException(status_code=400, detail="Upload is not a decodable image")
    return frame


@router.post("/classify", response_model=EmotionResult)
def classify_scores(scores: BaseScores) -> EmotionResult:
    """
    Classify base expression scores into one of the eleven emotion labels.

    Args:
        scores: Base expression probabilities (missing labels default to 0).

    Returns:
        EmotionResult: label, confidence and all eleven scores.
    """
    return classify(scores.model_dump())


@router.post("/analyze/photo", response_model=FaceAnalysisResponse)
async def analyze_photo(
    file: UploadFile = File(...),
    analyzer: EmotionAnalyzer = Depends(get_analyzer),
):
    """
    Classify the expression of the face in an already-captured photo.

    Returns:
        FaceAnalysisResponse: face_detected=False when no face is found.
    """
    logger.debug(f"[api] /analyze/photo filename={file.filename}")
    frame = await _read_image(file)
    raster = cv2.cvtColor(frame, cv2.COLOR_BGR2RGBA)
    return await analyzer.analyze(raster)


@router.post("/capture")
async def capture(
    file: UploadFile = File(...),
    beauty_level: Optional[int] = Form(None),
    face_x: Optional[float] = Form(None),
    face_y: Optional[float] = Form(None),
    face_w: Optional[float] = Form(None),
    face_h: Optional[float] = Form(None),
    settings: Settings = Depends(get_settings),
):
    """
    Frame, mirror and beautify a camera frame into the output photo.

    Args:
        file: Uploaded camera frame.
        beauty_level: Optional 0..10 override of the configured level.
        face_x, face_y, face_w, face_h: Optional face box; a centered crop is used without it.

    Returns:
        Response: PNG image of OUTPUT_WIDTH x OUTPUT_HEIGHT.
    """
    logger.debug(f"[api] /capture filename={file.filename} beauty_level={beauty_level}")
    if beauty_level is not None and not 0 <= beauty_level <= 10:
        raise HTTPException(status_code=422, detail="beauty_level must be in [0, 10]")

    face = None
    if None not in (face_x, face_y, face_w, face_h) and face_w > 0 and face_h > 0:
        face = Box(x=face_x, y=face_y, w=face_w, h=face_h)

    frame = await _read_image(file)
    try:
        raster = capture_photo(frame, settings, face=face, level=beauty_level)
        return Response(content=encode_png(raster), media_type="image/png")
    except Exception as e:
        logger.exception("[api] capture failed")
        raise HTTPException(status_code=500, detail=str(e))
