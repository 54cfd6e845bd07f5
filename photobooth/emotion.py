"""
Composite-emotion classification from base expression probabilities.
"""
# photobooth/emotion.py
from __future__ import annotations
from typing import Dict, Mapping, Tuple
import logging
import math

from photobooth.models import (
    BASE_LABELS,
    EmotionInfo,
    EmotionResult,
)

logger = logging.getLogger(__name__)

MIN_THRESHOLD = 0.15   # both components must exceed this for a composite to count
COMPOSITE_MIN = 0.25   # composite must exceed this to override the primary label

# composite -> ((component, weight), (component, weight)), in override order
COMPOSITES: Tuple[Tuple[str, Tuple[Tuple[str, float], Tuple[str, float]]], ...] = (
    ("satisfied", (("happy", 0.65), ("neutral", 0.35))),
    ("understanding", (("surprised", 0.45), ("neutral", 0.55))),
    ("intrigued", (("surprised", 0.55), ("happy", 0.45))),
    ("confused", (("surprised", 0.5), ("fearful", 0.5))),
)

EMOTIONS: Dict[str, EmotionInfo] = {
    "happy": EmotionInfo(label="happy", icon="😊", color="#FFD93D", description="They look happy"),
    "sad": EmotionInfo(label="sad", icon="😢", color="#6BCB77", description="They look sad"),
    "angry": EmotionInfo(label="angry", icon="😠", color="#FF6B6B", description="They seem angry"),
    "surprised": EmotionInfo(label="surprised", icon="😲", color="#4D96FF", description="They look surprised"),
    "fearful": EmotionInfo(label="fearful", icon="😨", color="#9B59B6", description="They seem uneasy"),
    "disgusted": EmotionInfo(label="disgusted", icon="🤢", color="#1ABC9C", description="They seem displeased"),
    "neutral": EmotionInfo(label="neutral", icon="😐", color="#95A5A6", description="They look calm"),
    "satisfied": EmotionInfo(label="satisfied", icon="😌", color="#F39C12", description="They look satisfied"),
    "understanding": EmotionInfo(label="understanding", icon="🤔", color="#3498DB",
                                 description="They seem to understand and agree"),
    "intrigued": EmotionInfo(label="intrigued", icon="🤨", color="#E74C3C", description="They look intrigued"),
    "confused": EmotionInfo(label="confused", icon="😕", color="#FFA07A", description="They look puzzled"),
}

NO_FACE_MESSAGE = "No face was detected."


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def _base_vector(base: Mapping[str, float]) -> Dict[str, float]:
    scores: Dict[str, float] = {}
    for label in BASE_LABELS:
        v = float(base.get(label, 0.0) or 0.0)
        if not math.isfinite(v) or v < 0:
            raise ValueError(f"base score for {label!r} must be finite and non-negative, got {v}")
        scores[label] = v
    return scores


def composite_scores(base: Mapping[str, float]) -> Dict[str, float]:
    """Gated composite scores; a composite whose gate fails is exactly 0."""
    out: Dict[str, float] = {}
    for name, ((a, wa), (b, wb)) in COMPOSITES:
        va, vb = base[a], base[b]
        if va > MIN_THRESHOLD and vb > MIN_THRESHOLD:
            out[name] = min(va * wa + vb * wb, 1.0)
        else:
            out[name] = 0.0
    return out


def classify(base: Mapping[str, float]) -> EmotionResult:
    """
    Pick the final emotion label from base expression scores.

    1) Primary: highest base score, first max wins in BASE_LABELS order.
    2) Composites from gated pairs of base scores.
    3) Each composite, in COMPOSITES order, replaces the current best when it
       exceeds COMPOSITE_MIN and the current best value (both strict).

    Args:
        base: base label -> score; missing labels count as 0.

    Returns:
        EmotionResult with all eleven scores.
    """
    scores = _base_vector(base)

    best_label, best_value = "neutral", 0.0
    for label in BASE_LABELS:
        if scores[label] > best_value:
            best_label, best_value = label, scores[label]

    composites = composite_scores(scores)
    for name, _ in COMPOSITES:
        value = composites[name]
        if value > COMPOSITE_MIN and value > best_value:
            best_label, best_value = name, value

    all_scores = {**scores, **composites}
    logger.debug(f"[emotion] final={best_label} value={best_value:.3f} composites={composites}")
    return EmotionResult(
        emotion=best_label,
        confidence=max(0, min(100, _round_half_up(best_value * 100))),
        all_scores=all_scores,
    )


def describe(result: EmotionResult) -> str:
    """One-line narration text for a classification result."""
    info = EMOTIONS[result.emotion]
    return f"{info.description}. Confidence {result.confidence} percent."
