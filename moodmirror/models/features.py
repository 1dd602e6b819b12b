"""Data models for extracted voice features and speech hints"""

from dataclasses import dataclass


@dataclass
class VoiceFeatures:
    """Voice characteristics used to bias emotion weights

    Attributes:
        pitch: Mean fundamental frequency in Hz (plausible range 80-160)
        tempo: Speaking tempo in words per minute (plausible range 90-150)
        volume: Normalized loudness [0, 1]
        clarity: Normalized articulation clarity [0, 1]
        rhythm: Regularity of speech rhythm [0, 1]
        energy: Normalized vocal energy [0, 1]
    """
    pitch: float
    tempo: float
    volume: float
    clarity: float
    rhythm: float
    energy: float

    def __post_init__(self):
        """Validate feature ranges"""
        assert self.pitch >= 0, "Pitch must be non-negative"
        assert self.tempo >= 0, "Tempo must be non-negative"
        for name in ("volume", "clarity", "rhythm", "energy"):
            value = getattr(self, name)
            assert 0.0 <= value <= 1.0, f"{name} must be in [0, 1]"


@dataclass
class VoiceVariation:
    """Spread of pitch, tempo and volume across a sample, each in [0, 1]

    High variation suggests more than one speaker.
    """
    pitch: float
    tempo: float
    volume: float

    def __post_init__(self):
        """Validate variation ranges"""
        for name in ("pitch", "tempo", "volume"):
            value = getattr(self, name)
            assert 0.0 <= value <= 1.0, f"{name} variation must be in [0, 1]"


@dataclass
class SpeechHints:
    """Counts of emotionally loaded speech content

    Attributes:
        positive_words: Number of positive words
        negative_words: Number of negative words
        question_marks: Number of questions asked
        exclamation_marks: Number of exclamations
        filler_words: Number of filler words ("um", "uh", ...)
    """
    positive_words: int = 0
    negative_words: int = 0
    question_marks: int = 0
    exclamation_marks: int = 0
    filler_words: int = 0

    def __post_init__(self):
        """Validate counts"""
        for name in ("positive_words", "negative_words", "question_marks",
                     "exclamation_marks", "filler_words"):
            assert getattr(self, name) >= 0, f"{name} must be non-negative"
