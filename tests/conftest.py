"""Pytest configuration and fixtures"""

import io
import os

# Must be set before moodmirror.config is first imported
os.environ.setdefault("MOODMIRROR_ENV", "test")

import numpy as np
import pytest
import soundfile as sf
from hypothesis import settings, Verbosity

from moodmirror.analysis.detector import EmotionDetector
from moodmirror.analysis.history import EmotionHistory
from moodmirror.models.state import DetectorConfig
from moodmirror.session.devices import BufferedCaptureDevice
from moodmirror.session.lifecycle import RecordingSession

# Register Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20, verbosity=Verbosity.normal)
settings.register_profile("debug", max_examples=10, verbosity=Verbosity.verbose)

# Use CI profile by default
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))


def make_wav(seconds: float = 1.0, frequency: float = 220.0, amplitude: float = 0.3,
             sample_rate: int = 16000) -> bytes:
    """Encode a sine tone as 16-bit PCM WAV bytes"""
    t = np.arange(int(seconds * sample_rate)) / sample_rate
    samples = (amplitude * np.sin(2 * np.pi * frequency * t)).astype(np.float32)
    buffer = io.BytesIO()
    sf.write(buffer, samples, sample_rate, format='WAV', subtype='PCM_16')
    return buffer.getvalue()


@pytest.fixture
def wav_bytes():
    """One second of a 220 Hz tone as WAV"""
    return make_wav()


@pytest.fixture
def detector():
    """Seeded detector with no simulated latency"""
    return EmotionDetector(detector_config=DetectorConfig(), seed=1234, simulated_latency=0.0)


@pytest.fixture
def device(wav_bytes):
    return BufferedCaptureDevice(wav_bytes)


@pytest.fixture
def session(device, detector):
    return RecordingSession(device, detector=detector, history=EmotionHistory())


@pytest.fixture
def wav_factory():
    """Factory for sine-tone WAV bytes"""
    return make_wav
