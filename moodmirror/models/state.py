"""Detector configuration and per-user baseline state"""

from dataclasses import dataclass, field, fields, replace
from typing import Tuple

from moodmirror.models.enums import DetectorModel, EmotionType


BASELINE_WINDOW = 10


@dataclass
class DetectorConfig:
    """Emotion detector settings

    Attributes:
        sensitivity: Detection sensitivity [0, 1]
        language: Spoken language code (e.g., "en")
        model: Detection model tier
        context_aware: Whether contextual cues may be used
        baseline_adjustment: Whether an established baseline raises confidence
    """
    sensitivity: float = 0.7
    language: str = "en"
    model: DetectorModel = DetectorModel.ADVANCED
    context_aware: bool = True
    baseline_adjustment: bool = True

    def __post_init__(self):
        """Coerce and validate settings"""
        if isinstance(self.model, str):
            self.model = DetectorModel(self.model)
        assert 0.0 <= self.sensitivity <= 1.0, "Sensitivity must be in [0, 1]"
        assert isinstance(self.language, str) and self.language, "Language must be a non-empty string"

    def merged(self, **changes) -> "DetectorConfig":
        """Return a copy with the given fields replaced (shallow merge)

        Raises:
            KeyError: If a change names an unknown field
        """
        known = {f.name for f in fields(self)}
        unknown = set(changes) - known
        if unknown:
            raise KeyError(f"Unknown detector config fields: {sorted(unknown)}")
        return replace(self, **changes)

    def to_dict(self) -> dict:
        return {
            "sensitivity": self.sensitivity,
            "language": self.language,
            "model": self.model.value,
            "contextAware": self.context_aware,
            "baselineAdjustment": self.baseline_adjustment,
        }


@dataclass(frozen=True)
class UserBaseline:
    """What the detector has learned about one speaker

    Immutable: every detection returns a new baseline instead of mutating
    this one, so the caller decides where it lives.

    Attributes:
        neutral_count: Number of recordings detected as neutral
        total_recordings: Number of recordings analyzed
        last_emotions: Most recent emotions, oldest first, at most 10
    """
    neutral_count: int = 0
    total_recordings: int = 0
    last_emotions: Tuple[EmotionType, ...] = field(default_factory=tuple)

    def __post_init__(self):
        """Validate baseline counters"""
        assert self.total_recordings >= 0, "Total recordings must be non-negative"
        assert 0 <= self.neutral_count <= self.total_recordings, \
            "Neutral count must be within [0, total_recordings]"
        assert len(self.last_emotions) <= BASELINE_WINDOW, \
            f"At most {BASELINE_WINDOW} recent emotions are kept"

    def record(self, emotion: EmotionType) -> "UserBaseline":
        """Return the baseline after observing one more detection"""
        recent = (self.last_emotions + (emotion,))[-BASELINE_WINDOW:]
        return UserBaseline(
            neutral_count=self.neutral_count + (1 if emotion is EmotionType.NEUTRAL else 0),
            total_recordings=self.total_recordings + 1,
            last_emotions=recent,
        )
