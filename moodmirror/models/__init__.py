"""Data models and interfaces"""

from moodmirror.models.samples import EmotionSample
from moodmirror.models.features import VoiceFeatures, VoiceVariation, SpeechHints
from moodmirror.models.results import (
    EmotionResult,
    EmotionInsight,
    EmotionSummary,
    CONFIDENCE_MIN,
    CONFIDENCE_MAX,
)
from moodmirror.models.state import DetectorConfig, UserBaseline, BASELINE_WINDOW
from moodmirror.models.enums import (
    EmotionType,
    DetectorModel,
    SpeakerCount,
    Severity,
    MoodTrend,
    SessionState,
)
from moodmirror.models.interfaces import FeatureExtractor, CaptureDevice

__all__ = [
    # Samples
    "EmotionSample",
    # Features
    "VoiceFeatures",
    "VoiceVariation",
    "SpeechHints",
    # Results
    "EmotionResult",
    "EmotionInsight",
    "EmotionSummary",
    "CONFIDENCE_MIN",
    "CONFIDENCE_MAX",
    # State
    "DetectorConfig",
    "UserBaseline",
    "BASELINE_WINDOW",
    # Enums
    "EmotionType",
    "DetectorModel",
    "SpeakerCount",
    "Severity",
    "MoodTrend",
    "SessionState",
    # Interfaces
    "FeatureExtractor",
    "CaptureDevice",
]
