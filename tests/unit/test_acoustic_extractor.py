"""Unit tests for the acoustic feature extractor"""

import numpy as np
import pytest

from moodmirror.analysis.acoustic import AcousticFeatureExtractor, AudioProcessingError
from moodmirror.analysis.extractors import create_extractor
from moodmirror.models.features import VoiceFeatures, VoiceVariation, SpeechHints
from moodmirror.models.samples import EmotionSample

pytestmark = pytest.mark.slow


@pytest.fixture
def extractor():
    return AcousticFeatureExtractor()


@pytest.fixture
def tone_sample(wav_factory):
    return EmotionSample(audio=wav_factory(seconds=1.0, frequency=150.0), duration=1.0)


def test_create_extractor_acoustic():
    assert isinstance(create_extractor("acoustic"), AcousticFeatureExtractor)


def test_extract_features_from_tone(extractor, tone_sample):
    features = extractor.extract_features(tone_sample)

    assert isinstance(features, VoiceFeatures)
    assert features.pitch == pytest.approx(150.0, rel=0.05)
    assert 0.0 < features.volume < 1.0
    assert 0.0 <= features.clarity <= 1.0
    assert features.energy > 0.5


def test_louder_tone_has_higher_volume(extractor, wav_factory):
    quiet = EmotionSample(audio=wav_factory(amplitude=0.05), duration=1.0)
    loud = EmotionSample(audio=wav_factory(amplitude=0.8), duration=1.0)

    assert extractor.extract_features(loud).volume > extractor.extract_features(quiet).volume


def test_steady_tone_has_low_variation(extractor, tone_sample):
    features = extractor.extract_features(tone_sample)
    variation = extractor.measure_variation(tone_sample, features)

    assert isinstance(variation, VoiceVariation)
    assert variation.pitch < 0.2
    assert variation.volume < 0.7


def test_silence_gives_neutral_features(extractor, wav_factory):
    sample = EmotionSample(audio=wav_factory(amplitude=0.0), duration=1.0)
    features = extractor.extract_features(sample)
    assert features.pitch == 120.0
    assert features.volume == 0.6


def test_very_short_clip(extractor, wav_factory):
    sample = EmotionSample(audio=wav_factory(seconds=0.05), duration=0.0)
    features = extractor.extract_features(sample)
    assert features.tempo == 120.0


def test_undecodable_audio(extractor):
    with pytest.raises(AudioProcessingError):
        extractor.extract_features(EmotionSample(audio=b"definitely not audio", duration=1.0))


def test_speech_hints_are_empty(extractor, tone_sample):
    assert extractor.analyze_speech(tone_sample) == SpeechHints()
