import math

import pydantic
import pytest

import photobooth.emotion as emotion_mod
from photobooth.emotion import EMOTIONS, classify, composite_scores, describe
from photobooth.models import ALL_LABELS, EmotionResult

ZERO = {"happy": 0, "sad": 0, "angry": 0, "surprised": 0, "fearful": 0, "disgusted": 0, "neutral": 0}


def test_weak_satisfied_does_not_override_happy():
    res = classify({**ZERO, "happy": 0.2, "neutral": 0.2})
    assert res.emotion == "happy"
    assert res.confidence == 20
    assert res.all_scores["satisfied"] == pytest.approx(0.2)


def test_confused_below_primary_keeps_surprised():
    res = classify({**ZERO, "surprised": 0.5, "fearful": 0.3})
    assert res.emotion == "surprised"
    assert res.confidence == 50
    assert res.all_scores["confused"] == pytest.approx(0.4)


def test_all_eleven_scores_reported():
    res = classify({**ZERO, "sad": 0.7})
    assert set(res.all_scores) == set(ALL_LABELS)
    assert len(res.all_scores) == 11
    for name in ("satisfied", "understanding", "intrigued", "confused"):
        assert res.all_scores[name] == 0.0


def test_gate_requires_both_components_strictly_above_threshold():
    scores = composite_scores({**ZERO, "happy": 0.9, "neutral": 0.15, "surprised": 0.16})
    assert scores["satisfied"] == 0.0
    assert scores["intrigued"] == pytest.approx(0.16 * 0.55 + 0.9 * 0.45)
    assert scores["understanding"] == 0.0


def test_classify_is_idempotent():
    base = {**ZERO, "happy": 0.31, "surprised": 0.42, "neutral": 0.27}
    assert classify(base) == classify(base)


def test_ties_resolve_in_fixed_order():
    assert classify({**ZERO, "happy": 0.3, "sad": 0.3}).emotion == "happy"
    assert classify({**ZERO, "sad": 0.3, "angry": 0.3}).emotion == "sad"
    assert classify({**ZERO, "disgusted": 0.4, "neutral": 0.4}).emotion == "disgusted"


def test_all_zero_scores_fall_back_to_neutral():
    res = classify(ZERO)
    assert res.emotion == "neutral"
    assert res.confidence == 0


def test_missing_labels_count_as_zero_and_invalid_scores_rejected():
    assert classify({"fearful": 0.6}).emotion == "fearful"
    with pytest.raises(ValueError):
        classify({"happy": -0.1})
    with pytest.raises(ValueError):
        classify({"happy": math.inf})
    with pytest.raises(ValueError):
        classify({"neutral": math.nan})


def test_confidence_rounds_half_up():
    assert classify({"happy": 0.125}).confidence == 13


def test_later_composite_overrides_earlier_in_fixed_order(monkeypatch):
    # Unnormalised weights let composites exceed the primary score, exposing the override order
    monkeypatch.setattr(emotion_mod, "COMPOSITES", (
        ("satisfied", (("happy", 1.0), ("neutral", 1.0))),
        ("understanding", (("surprised", 1.0), ("neutral", 1.0))),
        ("intrigued", (("surprised", 1.0), ("happy", 1.0))),
        ("confused", (("surprised", 1.0), ("fearful", 1.0))),
    ))
    res = classify({**ZERO, "surprised": 0.4, "happy": 0.3, "neutral": 0.2})
    assert res.all_scores["satisfied"] == pytest.approx(0.5)
    assert res.all_scores["understanding"] == pytest.approx(0.6)
    assert res.emotion == "intrigued"
    assert res.confidence == 70

    # an equal later composite does not replace an earlier one (strict >)
    res = classify({**ZERO, "happy": 0.3, "neutral": 0.3, "surprised": 0.3})
    assert res.emotion == "satisfied"


def test_result_is_frozen_and_serializes_all_scores():
    res = classify({**ZERO, "happy": 0.8, "neutral": 0.3})
    with pytest.raises(pydantic.ValidationError):
        res.confidence = 1
    restored = EmotionResult.model_validate_json(res.model_dump_json())
    assert restored == res
    wire = res.model_dump(by_alias=True)
    assert set(wire) == {"emotion", "confidence", "allScores"}
    assert EmotionResult.model_validate(wire) == res


def test_describe_uses_label_metadata():
    res = classify({**ZERO, "happy": 0.87})
    assert describe(res) == "They look happy. Confidence 87 percent."
    assert set(EMOTIONS) == set(ALL_LABELS)
