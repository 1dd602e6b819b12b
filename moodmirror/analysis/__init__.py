"""Emotion detection, insights and history aggregation"""

from moodmirror.analysis.detector import (
    EmotionDetector,
    DetectionError,
    EmptyInputError,
    BASE_WEIGHTS,
    detect,
    detect_speaker_count,
    adjust_weights,
    normalize_weights,
    compute_weights,
    select_emotion,
    compute_confidence,
)
from moodmirror.analysis.extractors import RandomFeatureExtractor, create_extractor
from moodmirror.analysis.insights import describe, summary_messages
from moodmirror.analysis.history import EmotionHistory

__all__ = [
    "EmotionDetector",
    "DetectionError",
    "EmptyInputError",
    "BASE_WEIGHTS",
    "detect",
    "detect_speaker_count",
    "adjust_weights",
    "normalize_weights",
    "compute_weights",
    "select_emotion",
    "compute_confidence",
    "RandomFeatureExtractor",
    "create_extractor",
    "describe",
    "summary_messages",
    "EmotionHistory",
]
