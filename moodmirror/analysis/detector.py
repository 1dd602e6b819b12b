"""Emotion Detector

This module turns a captured audio sample into an emotion result. Voice
features, speech hints and a speaker-count estimate bias a fixed table of
emotion weights; one emotion is then drawn by cumulative-weight sampling and
a confidence score is derived from recording length and speaker baseline.

The weighting and selection functions are pure: they take data model inputs
and return data model outputs. The only state, the per-speaker baseline, is
passed in and a new baseline is returned, so the caller decides where it
lives.
"""

import asyncio
import logging
from dataclasses import replace
from typing import Dict, Optional, Tuple

import numpy as np

from moodmirror.models.enums import EmotionType, SpeakerCount
from moodmirror.models.features import VoiceFeatures, VoiceVariation, SpeechHints
from moodmirror.models.results import EmotionResult, CONFIDENCE_MIN, CONFIDENCE_MAX
from moodmirror.models.samples import EmotionSample
from moodmirror.models.state import DetectorConfig, UserBaseline
from moodmirror.models.interfaces import FeatureExtractor
from moodmirror.analysis.extractors import RandomFeatureExtractor, create_extractor
from moodmirror.config.config_loader import config


logger = logging.getLogger(__name__)


# Base weights before adjustment. Insertion order is the sampling order.
BASE_WEIGHTS: Dict[EmotionType, float] = {
    EmotionType.NEUTRAL: 0.35,
    EmotionType.CALM: 0.25,
    EmotionType.HAPPY: 0.20,
    EmotionType.EXCITED: 0.08,
    EmotionType.SAD: 0.05,
    EmotionType.ANXIOUS: 0.04,
    EmotionType.ANGRY: 0.03,
    EmotionType.SURPRISED: 0.01,
    EmotionType.DISGUSTED: 0.005,
    EmotionType.FEARFUL: 0.005,
}

SPEAKER_VARIATION_THRESHOLD = 0.7
JITTER_SPAN = 0.1


class DetectionError(Exception):
    """Exception raised when emotion detection fails unexpectedly"""
    pass


class EmptyInputError(ValueError):
    """Exception raised when no audio reaches the detector"""
    pass


def detect_speaker_count(variation: VoiceVariation) -> SpeakerCount:
    """Estimate speaker count from voice variation.

    Any of pitch, tempo or volume varying by more than 0.7 suggests more than
    one speaker.

    Args:
        variation: Pitch, tempo and volume spread in [0, 1]

    Returns:
        SpeakerCount.MULTIPLE on high variation, SpeakerCount.SINGLE otherwise
    """
    if (variation.pitch > SPEAKER_VARIATION_THRESHOLD
            or variation.tempo > SPEAKER_VARIATION_THRESHOLD
            or variation.volume > SPEAKER_VARIATION_THRESHOLD):
        return SpeakerCount.MULTIPLE
    return SpeakerCount.SINGLE


def adjust_weights(
    weights: Dict[EmotionType, float],
    features: VoiceFeatures,
    hints: SpeechHints,
    speakers: SpeakerCount,
    duration: float
) -> Dict[EmotionType, float]:
    """Apply additive adjustments to emotion weights.

    Pure function; the input dictionary is not modified. All adjustments are
    additive, so their order does not matter.

    Adjustments:
        - Pitch: >140 Hz excited/happy, <100 Hz calm/sad
        - Tempo: >130 wpm excited/anxious, <100 wpm calm/neutral
        - Volume: >0.8 excited/angry, <0.5 calm/sad
        - Speech: positive words >2 happy/excited, negative words >1
          sad/anxious, exclamations >0 excited/happy, questions >1
          anxious/neutral
        - Multiple speakers: excited/happy/neutral
        - Duration: <5 s neutral, >20 s happy/calm

    Args:
        weights: Unadjusted weights for every emotion
        features: Voice features of the sample
        hints: Speech hints of the sample
        speakers: Estimated speaker count
        duration: Recording length in seconds

    Returns:
        Adjusted (unnormalized) weights
    """
    w = dict(weights)

    # Voice patterns
    if features.pitch > 140:
        w[EmotionType.EXCITED] += 0.05
        w[EmotionType.HAPPY] += 0.03
    elif features.pitch < 100:
        w[EmotionType.CALM] += 0.05
        w[EmotionType.SAD] += 0.02

    if features.tempo > 130:
        w[EmotionType.EXCITED] += 0.04
        w[EmotionType.ANXIOUS] += 0.02
    elif features.tempo < 100:
        w[EmotionType.CALM] += 0.04
        w[EmotionType.NEUTRAL] += 0.02

    if features.volume > 0.8:
        w[EmotionType.EXCITED] += 0.03
        w[EmotionType.ANGRY] += 0.02
    elif features.volume < 0.5:
        w[EmotionType.CALM] += 0.03
        w[EmotionType.SAD] += 0.02

    # Speech content
    if hints.positive_words > 2:
        w[EmotionType.HAPPY] += 0.08
        w[EmotionType.EXCITED] += 0.04

    if hints.negative_words > 1:
        w[EmotionType.SAD] += 0.06
        w[EmotionType.ANXIOUS] += 0.03

    if hints.exclamation_marks > 0:
        w[EmotionType.EXCITED] += 0.05
        w[EmotionType.HAPPY] += 0.03

    if hints.question_marks > 1:
        w[EmotionType.ANXIOUS] += 0.04
        w[EmotionType.NEUTRAL] += 0.02

    if speakers is SpeakerCount.MULTIPLE:
        w[EmotionType.EXCITED] += 0.03
        w[EmotionType.HAPPY] += 0.02
        w[EmotionType.NEUTRAL] += 0.02

    if duration < 5:
        w[EmotionType.NEUTRAL] += 0.03
    elif duration > 20:
        w[EmotionType.HAPPY] += 0.02
        w[EmotionType.CALM] += 0.02

    return w


def normalize_weights(weights: Dict[EmotionType, float]) -> Dict[EmotionType, float]:
    """Scale weights to sum to 1.0, preserving key order.

    Falls back to a uniform distribution if every weight is zero.
    """
    total = sum(weights.values())
    if total > 0:
        return {k: v / total for k, v in weights.items()}
    n = len(weights)
    return {k: 1.0 / n for k in weights}


def compute_weights(
    features: VoiceFeatures,
    hints: SpeechHints,
    speakers: SpeakerCount,
    duration: float
) -> Dict[EmotionType, float]:
    """Adjusted and normalized weights for every emotion, in sampling order."""
    return normalize_weights(adjust_weights(BASE_WEIGHTS, features, hints, speakers, duration))


def select_emotion(weights: Dict[EmotionType, float], draw: float) -> EmotionType:
    """Select an emotion by cumulative-weight sampling.

    Walks the weights in order, accumulating them, and returns the first
    emotion whose cumulative weight reaches the draw.

    Args:
        weights: Normalized weights in sampling order
        draw: Uniform random number in [0, 1)

    Returns:
        Selected emotion, NEUTRAL if rounding leaves the draw unmatched
    """
    cumulative = 0.0
    for emotion, weight in weights.items():
        cumulative += weight
        if draw <= cumulative:
            return emotion
    return EmotionType.NEUTRAL


def compute_confidence(
    duration: float,
    detector_config: DetectorConfig,
    baseline: UserBaseline,
    jitter: float = 0.0
) -> float:
    """Compute detection confidence.

    Starts at 0.7, then:
        - +0.15 for recordings over 20 s, else +0.10 over 10 s,
          else -0.15 under 5 s
        - +0.05 when baseline adjustment is enabled and the speaker has more
          than 5 prior recordings
        - + jitter (expected in [-0.05, 0.05])

    Args:
        duration: Recording length in seconds
        detector_config: Detector settings
        baseline: Speaker baseline before this detection
        jitter: Random variation

    Returns:
        Confidence clamped to [0.4, 0.95]
    """
    confidence = 0.7

    if duration > 20:
        confidence += 0.15
    elif duration > 10:
        confidence += 0.10
    elif duration < 5:
        confidence -= 0.15

    if detector_config.baseline_adjustment and baseline.total_recordings > 5:
        confidence += 0.05

    confidence += jitter

    return max(CONFIDENCE_MIN, min(CONFIDENCE_MAX, confidence))


def detect(
    sample: EmotionSample,
    detector_config: DetectorConfig,
    baseline: UserBaseline,
    extractor: Optional[FeatureExtractor] = None,
    rng: Optional[np.random.Generator] = None,
    user_id: Optional[str] = None
) -> Tuple[EmotionResult, UserBaseline]:
    """Detect the emotion in an audio sample.

    The detection pipeline:
    1. Extracts voice features and speech hints
    2. Estimates speaker count from voice variation
    3. Adjusts and normalizes the base emotion weights
    4. Draws one emotion by cumulative-weight sampling
    5. Computes confidence independently of the selected emotion
    6. Records the emotion in a new baseline

    Args:
        sample: Captured audio (must not be empty)
        detector_config: Detector settings
        baseline: Speaker baseline before this detection
        extractor: Feature extractor, random placeholder if None
        rng: Random generator for selection and jitter
        user_id: Caller identifier to attach to the result

    Returns:
        (EmotionResult, updated UserBaseline)

    Raises:
        EmptyInputError: If the sample carries no audio
    """
    if sample.is_empty:
        raise EmptyInputError("No audio data provided")

    rng = rng if rng is not None else np.random.default_rng()
    extractor = extractor if extractor is not None else RandomFeatureExtractor(rng)

    features = extractor.extract_features(sample)
    hints = extractor.analyze_speech(sample)
    variation = extractor.measure_variation(sample, features)
    speakers = detect_speaker_count(variation)

    weights = compute_weights(features, hints, speakers, sample.duration)
    emotion = select_emotion(weights, float(rng.random()))

    jitter = (float(rng.random()) - 0.5) * JITTER_SPAN
    confidence = compute_confidence(sample.duration, detector_config, baseline, jitter)

    result = EmotionResult(
        emotion=emotion,
        confidence=confidence,
        audio_duration=sample.duration,
        user_id=user_id,
    )

    logger.debug(f"Detected {emotion.value} (confidence={confidence:.3f}, "
                 f"duration={sample.duration:.1f}s, speakers={speakers.value})")

    return result, baseline.record(emotion)


class EmotionDetector:
    """Configurable emotion detector with simulated inference latency.

    Wraps the pure detect() pipeline with a runtime-mutable configuration,
    a feature extractor and a random generator. Baselines are not stored
    here; callers pass one in and keep the one returned.

    Attributes:
        extractor: Feature extractor used for every detection
        simulated_latency: Seconds analyze() waits to emulate a remote call
        rng: Random generator for selection and jitter
    """

    def __init__(
        self,
        detector_config: Optional[DetectorConfig] = None,
        extractor: Optional[FeatureExtractor] = None,
        seed: Optional[int] = None,
        simulated_latency: Optional[float] = None
    ):
        """Initialize the detector from arguments, falling back to configuration.

        Args:
            detector_config: Detector settings
            extractor: Feature extractor, built from 'detector.extractor' if None
            seed: Random seed, 'detector.random_seed' if None
            simulated_latency: Inference delay, 'detector.simulated_latency' if None
        """
        if detector_config is None:
            detector_config = DetectorConfig(
                sensitivity=config.get('detector.sensitivity', 0.7),
                language=config.get('detector.language', 'en'),
                model=config.get('detector.model', 'advanced'),
                context_aware=config.get('detector.context_aware', True),
                baseline_adjustment=config.get('detector.baseline_adjustment', True),
            )
        self._config = detector_config

        if seed is None:
            seed = config.get('detector.random_seed')
        self.rng = np.random.default_rng(seed)

        if extractor is None:
            extractor = create_extractor(config.get('detector.extractor', 'random'), self.rng)
        self.extractor = extractor

        if simulated_latency is None:
            simulated_latency = config.get('detector.simulated_latency', 2.0)
        self.simulated_latency = simulated_latency

        logger.info(f"EmotionDetector initialized with model={self._config.model.value}, "
                    f"extractor={type(self.extractor).__name__}, "
                    f"simulated_latency={self.simulated_latency}s")

    def update_config(self, **changes) -> None:
        """Merge the given settings over the current configuration.

        Raises:
            KeyError: If a setting name is unknown
        """
        self._config = self._config.merged(**changes)
        logger.info(f"Detector config updated: {sorted(changes)}")

    def get_config(self) -> DetectorConfig:
        """Return a copy of the current configuration."""
        return replace(self._config)

    def detect(
        self,
        sample: EmotionSample,
        baseline: UserBaseline,
        user_id: Optional[str] = None
    ) -> Tuple[EmotionResult, UserBaseline]:
        """Run detection synchronously (no simulated latency)."""
        return detect(sample, self._config, baseline, self.extractor, self.rng, user_id)

    async def analyze(
        self,
        sample: EmotionSample,
        baseline: UserBaseline,
        user_id: Optional[str] = None
    ) -> Tuple[EmotionResult, UserBaseline]:
        """Run detection after the simulated inference latency.

        Args:
            sample: Captured audio
            baseline: Speaker baseline before this detection
            user_id: Caller identifier to attach to the result

        Returns:
            (EmotionResult, updated UserBaseline)

        Raises:
            EmptyInputError: If the sample carries no audio
            DetectionError: On any unexpected failure during detection
        """
        if self.simulated_latency > 0:
            await asyncio.sleep(self.simulated_latency)

        try:
            return self.detect(sample, baseline, user_id)
        except EmptyInputError:
            raise
        except Exception as e:
            logger.error(f"Emotion detection failed: {e}", exc_info=True)
            raise DetectionError(f"Failed to process emotion detection: {e}") from e
