"""Data model for captured audio samples"""

import math
from dataclasses import dataclass


@dataclass
class EmotionSample:
    """Captured audio handed to the emotion detector

    Attributes:
        audio: Opaque audio bytes (any container format)
        duration: Recording length in seconds
        mime_type: Declared content type of the audio bytes
    """
    audio: bytes
    duration: float
    mime_type: str = "audio/wav"

    def __post_init__(self):
        """Validate sample data"""
        assert isinstance(self.audio, (bytes, bytearray)), "Audio must be bytes"
        assert math.isfinite(self.duration) and self.duration >= 0, \
            "Duration must be finite and non-negative"

    @property
    def is_empty(self) -> bool:
        return len(self.audio) == 0
