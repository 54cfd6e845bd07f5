"""
Pydantic data models shared by the tracker, planner, classifier and API.
"""
from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, Literal, Optional, Tuple

BaseLabel = Literal["happy", "sad", "angry", "surprised", "fearful", "disgusted", "neutral"]
CompositeLabel = Literal["satisfied", "understanding", "intrigued", "confused"]
EmotionLabel = Literal[
    "happy", "sad", "angry", "surprised", "fearful", "disgusted", "neutral",
    "satisfied", "understanding", "intrigued", "confused",
]

# Fixed evaluation orders; the classifier's tie-breaks depend on them.
BASE_LABELS: Tuple[str, ...] = ("happy", "sad", "angry", "surprised", "fearful", "disgusted", "neutral")
COMPOSITE_LABELS: Tuple[str, ...] = ("satisfied", "understanding", "intrigued", "confused")
ALL_LABELS: Tuple[str, ...] = BASE_LABELS + COMPOSITE_LABELS


class Box(BaseModel):
    """Face bounding box in source-pixel coordinates. A missing face is None, never a zero box."""
    model_config = ConfigDict(frozen=True)

    x: float
    y: float
    w: float = Field(gt=0)
    h: float = Field(gt=0)

    def center(self) -> tuple[float, float]:
        return self.x + self.w / 2.0, self.y + self.h / 2.0


class CropRect(BaseModel):
    model_config = ConfigDict(frozen=True)

    sx: float
    sy: float
    sw: float
    sh: float


class BaseScores(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    happy: float = Field(0.0, ge=0)
    sad: float = Field(0.0, ge=0)
    angry: float = Field(0.0, ge=0)
    surprised: float = Field(0.0, ge=0)
    fearful: float = Field(0.0, ge=0)
    disgusted: float = Field(0.0, ge=0)
    neutral: float = Field(0.0, ge=0)


class EmotionResult(BaseModel):
    # "allScores" on the wire; all_scores in Python
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    emotion: EmotionLabel
    confidence: int = Field(ge=0, le=100)
    all_scores: Dict[EmotionLabel, float] = Field(alias="allScores")


class EmotionInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    icon: str
    color: str
    description: str


class FaceAnalysisResponse(BaseModel):
    ok: bool
    face_detected: bool = False
    result: Optional[EmotionResult] = None
    error: Optional[str] = None
