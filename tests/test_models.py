
import pytest
from pydantic import ValidationError

from photobooth.models import ALL_LABELS, BaseScores, Box, EmotionResult, FaceAnalysisResponse

def test_models():
    b = Box(x=10, y=20, w=30, h=40)
    assert b.center() == (25.0, 40.0)
    scores = BaseScores(happy=0.7)
    assert scores.model_dump()["neutral"] == 0.0
    res = EmotionResult(emotion="happy", confidence=70, all_scores={k: 0.0 for k in ALL_LABELS})
    fr = FaceAnalysisResponse(ok=True, face_detected=True, result=res)
    assert fr.result.confidence == 70
    assert len(ALL_LABELS) == 11


def test_models_reject_invalid_values():
    with pytest.raises(ValidationError):
        Box(x=0, y=0, w=0, h=10)
    with pytest.raises(ValidationError):
        BaseScores(sad=-0.2)
    with pytest.raises(ValidationError):
        BaseScores(happy=float("inf"))
    with pytest.raises(ValidationError):
        BaseScores(neutral=float("nan"))
    with pytest.raises(ValidationError):
        EmotionResult(emotion="bored", confidence=10, all_scores={})
    with pytest.raises(ValidationError):
        EmotionResult(emotion="happy", confidence=101, all_scores={})
