"""Placeholder feature extraction

Produces plausible voice features and speech hints from a random number
generator without reading the audio. This keeps the weighting and selection
pipeline exercisable until a real analyzer is plugged in (see
moodmirror.analysis.acoustic for a signal-based variant).
"""

import logging
from typing import Optional

import numpy as np

from moodmirror.models.samples import EmotionSample
from moodmirror.models.features import VoiceFeatures, VoiceVariation, SpeechHints
from moodmirror.models.interfaces import FeatureExtractor


logger = logging.getLogger(__name__)


class RandomFeatureExtractor(FeatureExtractor):
    """Feature extractor that samples every signal uniformly at random.

    Ranges (half-open, upper bound excluded):
        pitch 80-160 Hz, tempo 90-150 wpm, volume 0.4-0.8, clarity 0.55-0.85,
        rhythm 0.25-0.75, energy 0.25-0.75; positive words 0-4, negative words
        0-2, questions 0-2, exclamations 0-1, filler words 0-3.

    Attributes:
        rng: Random generator shared by every draw
    """

    def __init__(self, rng: Optional[np.random.Generator] = None):
        self.rng = rng if rng is not None else np.random.default_rng()

    def _around(self, center: float, span: float) -> float:
        # center +/- span/2
        return center + (self.rng.random() - 0.5) * span

    def extract_features(self, sample: EmotionSample) -> VoiceFeatures:
        return VoiceFeatures(
            pitch=self._around(120.0, 80.0),
            tempo=self._around(120.0, 60.0),
            volume=self._around(0.6, 0.4),
            clarity=self._around(0.7, 0.3),
            rhythm=self._around(0.5, 0.5),
            energy=self._around(0.5, 0.5),
        )

    def measure_variation(self, sample: EmotionSample, features: VoiceFeatures) -> VoiceVariation:
        return VoiceVariation(
            pitch=float(self.rng.random()),
            tempo=float(self.rng.random()),
            volume=float(self.rng.random()),
        )

    def analyze_speech(self, sample: EmotionSample) -> SpeechHints:
        return SpeechHints(
            positive_words=int(self.rng.integers(0, 5)),
            negative_words=int(self.rng.integers(0, 3)),
            question_marks=int(self.rng.integers(0, 3)),
            exclamation_marks=int(self.rng.integers(0, 2)),
            filler_words=int(self.rng.integers(0, 4)),
        )


def create_extractor(name: str, rng: Optional[np.random.Generator] = None) -> FeatureExtractor:
    """Build a feature extractor by configured name

    Args:
        name: "random" or "acoustic"
        rng: Random generator for the random extractor

    Returns:
        Feature extractor instance

    Raises:
        ValueError: If the name is unknown
    """
    if name == "random":
        return RandomFeatureExtractor(rng)
    if name == "acoustic":
        # librosa is slow to import, only pay for it when configured
        from moodmirror.analysis.acoustic import AcousticFeatureExtractor
        return AcousticFeatureExtractor()
    raise ValueError(f"Unknown feature extractor: {name}")
