"""Unit tests for data models"""

from datetime import datetime, timezone

import pytest

from moodmirror.models import (
    EmotionSample,
    VoiceFeatures,
    VoiceVariation,
    SpeechHints,
    EmotionResult,
    EmotionInsight,
    EmotionSummary,
    DetectorConfig,
    UserBaseline,
    BASELINE_WINDOW,
    EmotionType,
    DetectorModel,
    MoodTrend,
    Severity,
)


def test_emotion_type_has_ten_members():
    """Test the closed emotion set"""
    assert [e.value for e in EmotionType] == [
        "happy", "sad", "angry", "calm", "excited", "anxious",
        "neutral", "surprised", "disgusted", "fearful",
    ]


def test_emotion_sample_valid():
    sample = EmotionSample(audio=b"\x00\x01", duration=3.0, mime_type="audio/webm")
    assert not sample.is_empty
    assert sample.mime_type == "audio/webm"


def test_emotion_sample_empty():
    assert EmotionSample(audio=b"", duration=0.0).is_empty


def test_emotion_sample_rejects_negative_duration():
    with pytest.raises(AssertionError):
        EmotionSample(audio=b"x", duration=-1.0)


def test_voice_features_range_validation():
    VoiceFeatures(pitch=120, tempo=110, volume=0.5, clarity=0.7, rhythm=0.5, energy=0.5)

    with pytest.raises(AssertionError):
        VoiceFeatures(pitch=120, tempo=110, volume=1.5, clarity=0.7, rhythm=0.5, energy=0.5)

    with pytest.raises(AssertionError):
        VoiceFeatures(pitch=-1, tempo=110, volume=0.5, clarity=0.7, rhythm=0.5, energy=0.5)


def test_voice_variation_range_validation():
    VoiceVariation(pitch=0.0, tempo=1.0, volume=0.5)

    with pytest.raises(AssertionError):
        VoiceVariation(pitch=1.1, tempo=0.0, volume=0.0)


def test_speech_hints_defaults_and_validation():
    hints = SpeechHints()
    assert hints.positive_words == 0
    assert hints.filler_words == 0

    with pytest.raises(AssertionError):
        SpeechHints(negative_words=-1)


class TestEmotionResult:
    """Test EmotionResult validation and serialization"""

    def test_confidence_bounds(self):
        EmotionResult(emotion=EmotionType.CALM, confidence=0.4)
        EmotionResult(emotion=EmotionType.CALM, confidence=0.95)

        with pytest.raises(AssertionError):
            EmotionResult(emotion=EmotionType.CALM, confidence=0.39)

        with pytest.raises(AssertionError):
            EmotionResult(emotion=EmotionType.CALM, confidence=0.96)

    def test_emotion_must_be_enum(self):
        with pytest.raises(AssertionError):
            EmotionResult(emotion="calm", confidence=0.7)

    def test_timestamp_defaults_to_utc_now(self):
        before = datetime.now(timezone.utc)
        result = EmotionResult(emotion=EmotionType.HAPPY, confidence=0.7)
        after = datetime.now(timezone.utc)
        assert before <= result.timestamp <= after

    def test_to_dict_uses_public_field_names(self):
        timestamp = datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)
        result = EmotionResult(
            emotion=EmotionType.HAPPY,
            confidence=0.8,
            timestamp=timestamp,
            audio_duration=12.0,
            user_id="u1",
        )

        assert result.to_dict() == {
            "emotion": "happy",
            "confidence": 0.8,
            "timestamp": "2024-05-01T12:30:00+00:00",
            "audioDuration": 12.0,
            "userId": "u1",
        }

    def test_to_dict_omits_missing_user(self):
        data = EmotionResult(emotion=EmotionType.SAD, confidence=0.6).to_dict()
        assert "userId" not in data


def test_emotion_insight_to_dict():
    insight = EmotionInsight(
        description="You sound calm.",
        recommendations=("Breathe", "Rest"),
        severity=Severity.LOW,
    )
    assert insight.to_dict() == {
        "description": "You sound calm.",
        "recommendations": ["Breathe", "Rest"],
        "severity": "low",
    }


def test_emotion_summary_distribution_sorted_by_count():
    counts = {emotion: 0 for emotion in EmotionType}
    counts[EmotionType.SAD] = 1
    counts[EmotionType.CALM] = 3
    counts[EmotionType.HAPPY] = 1

    summary = EmotionSummary(
        total_recordings=5,
        emotion_counts=counts,
        dominant_emotion=EmotionType.CALM,
        average_confidence=0.7,
        mood_trend=MoodTrend.STABLE,
        recent=[],
    )

    rows = summary.distribution()
    assert [row[0] for row in rows] == [EmotionType.CALM, EmotionType.HAPPY, EmotionType.SAD]
    assert rows[0][2] == pytest.approx(60.0)
    assert rows[1][2] == pytest.approx(20.0)


class TestDetectorConfig:
    """Test DetectorConfig coercion and merging"""

    def test_defaults(self):
        cfg = DetectorConfig()
        assert cfg.sensitivity == 0.7
        assert cfg.language == "en"
        assert cfg.model is DetectorModel.ADVANCED
        assert cfg.context_aware is True
        assert cfg.baseline_adjustment is True

    def test_model_string_is_coerced(self):
        assert DetectorConfig(model="basic").model is DetectorModel.BASIC

    def test_unknown_model_rejected(self):
        with pytest.raises(ValueError):
            DetectorConfig(model="gigantic")

    def test_sensitivity_range(self):
        with pytest.raises(AssertionError):
            DetectorConfig(sensitivity=1.5)

    def test_merged_is_shallow_and_non_mutating(self):
        cfg = DetectorConfig()
        merged = cfg.merged(sensitivity=0.9)

        assert merged.sensitivity == 0.9
        assert merged.language == "en"
        assert cfg.sensitivity == 0.7

    def test_merged_rejects_unknown_fields(self):
        with pytest.raises(KeyError):
            DetectorConfig().merged(volume=11)

    def test_to_dict(self):
        assert DetectorConfig().to_dict() == {
            "sensitivity": 0.7,
            "language": "en",
            "model": "advanced",
            "contextAware": True,
            "baselineAdjustment": True,
        }


class TestUserBaseline:
    """Test UserBaseline updates"""

    def test_record_returns_new_baseline(self):
        baseline = UserBaseline()
        updated = baseline.record(EmotionType.NEUTRAL)

        assert baseline.total_recordings == 0
        assert updated.total_recordings == 1
        assert updated.neutral_count == 1
        assert updated.last_emotions == (EmotionType.NEUTRAL,)

    def test_non_neutral_does_not_count_as_neutral(self):
        updated = UserBaseline().record(EmotionType.HAPPY)
        assert updated.neutral_count == 0

    def test_last_emotions_bounded(self):
        baseline = UserBaseline()
        emotions = [list(EmotionType)[i % 10] for i in range(BASELINE_WINDOW + 5)]
        for emotion in emotions:
            baseline = baseline.record(emotion)

        assert baseline.total_recordings == BASELINE_WINDOW + 5
        assert baseline.last_emotions == tuple(emotions[-BASELINE_WINDOW:])

    def test_invalid_counts_rejected(self):
        with pytest.raises(AssertionError):
            UserBaseline(neutral_count=2, total_recordings=1)
