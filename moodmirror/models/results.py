"""Data models for detection results, insights and session summaries"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

from moodmirror.models.enums import EmotionType, MoodTrend, Severity


CONFIDENCE_MIN = 0.4
CONFIDENCE_MAX = 0.95


@dataclass
class EmotionResult:
    """Result of a single emotion detection

    Attributes:
        emotion: Detected emotion
        confidence: Confidence in the detection, always within [0.4, 0.95]
        timestamp: When the detection completed (UTC)
        audio_duration: Length of the analyzed recording in seconds
        user_id: Caller identifier, if one was supplied
    """
    emotion: EmotionType
    confidence: float
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    audio_duration: float = 0.0
    user_id: Optional[str] = None

    def __post_init__(self):
        """Validate result data"""
        assert isinstance(self.emotion, EmotionType), "Emotion must be an EmotionType"
        assert CONFIDENCE_MIN <= self.confidence <= CONFIDENCE_MAX, \
            f"Confidence must be in [{CONFIDENCE_MIN}, {CONFIDENCE_MAX}]"
        assert self.audio_duration >= 0, "Audio duration must be non-negative"

    def to_dict(self) -> Dict:
        """Serialize using the public JSON field names"""
        data = {
            "emotion": self.emotion.value,
            "confidence": self.confidence,
            "timestamp": self.timestamp.isoformat(),
            "audioDuration": self.audio_duration,
        }
        if self.user_id is not None:
            data["userId"] = self.user_id
        return data


@dataclass(frozen=True)
class EmotionInsight:
    """Human-readable interpretation of an emotion

    Attributes:
        description: One-sentence description of how the speaker sounds
        recommendations: Ordered suggestions for the speaker
        severity: How much attention the emotion warrants
    """
    description: str
    recommendations: Tuple[str, ...]
    severity: Severity

    def to_dict(self) -> Dict:
        return {
            "description": self.description,
            "recommendations": list(self.recommendations),
            "severity": self.severity.value,
        }


@dataclass
class EmotionSummary:
    """Aggregates over a session's detection history

    Attributes:
        total_recordings: Number of results in the history
        emotion_counts: Count per emotion, every EmotionType present
        dominant_emotion: Most frequent emotion (ties go to the one heard first)
        average_confidence: Mean confidence across the history
        mood_trend: Recent confidence compared with early confidence
        recent: Most recent results, oldest first
    """
    total_recordings: int
    emotion_counts: Dict[EmotionType, int]
    dominant_emotion: EmotionType
    average_confidence: float
    mood_trend: MoodTrend
    recent: List[EmotionResult]

    def distribution(self) -> List[Tuple[EmotionType, int, float]]:
        """Non-zero counts sorted by count descending, with percentage of total"""
        rows = [
            (emotion, count, 100.0 * count / self.total_recordings)
            for emotion, count in self.emotion_counts.items()
            if count > 0
        ]
        # sorted() is stable, so equal counts keep EmotionType order
        return sorted(rows, key=lambda row: row[1], reverse=True)
