"""Acoustic Feature Extraction

This module decodes captured audio and measures the voice characteristics the
emotion detector weighs: pitch, speaking tempo, loudness, clarity, rhythm and
energy, plus the pitch/tempo/volume spread used to estimate speaker count.

There is no transcription step, so speech hints are reported as zero counts.
"""

import io
import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np
import librosa

from moodmirror.models.samples import EmotionSample
from moodmirror.models.features import VoiceFeatures, VoiceVariation, SpeechHints
from moodmirror.models.interfaces import FeatureExtractor
from moodmirror.config.config_loader import config


logger = logging.getLogger(__name__)

# Average syllables per spoken English word
SYLLABLES_PER_WORD = 1.5


class AudioProcessingError(Exception):
    """Exception raised for errors during audio processing"""
    pass


@dataclass
class SignalAnalysis:
    """Frame-level measurements of one decoded sample"""
    voiced_pitch: np.ndarray  # f0 (Hz) of non-silent frames
    rms: np.ndarray           # RMS per frame
    onsets: np.ndarray        # onset times in seconds
    flatness: np.ndarray      # spectral flatness per frame
    duration: float           # decoded length in seconds


class AcousticFeatureExtractor(FeatureExtractor):
    """Extracts voice features from the audio signal with librosa.

    The extractor:
    1. Decodes the sample bytes (WAV, FLAC, OGG) to mono PCM at a fixed rate
    2. Estimates pitch with YIN over voiced (non-silent) frames
    3. Estimates tempo and rhythm from onset detection
    4. Derives volume and energy from RMS and clarity from spectral flatness
    5. Caches the analysis so variation is measured on the same audio

    Signals too short or too quiet to analyze produce neutral mid-range
    features rather than an error.

    Attributes:
        sample_rate: Decode sample rate in Hz
        silence_threshold: RMS below which a frame counts as silent
    """

    def __init__(self):
        """Initialize the extractor from configuration."""
        self.sample_rate = config.get('audio.sample_rate', 16000)
        self.silence_threshold = config.get('audio.silence_threshold', 0.01)
        self.frame_length = 2048
        self.hop_length = 512

        self._cache_key: Optional[int] = None
        self._cache: Optional[SignalAnalysis] = None

        logger.info(f"AcousticFeatureExtractor initialized with sample_rate={self.sample_rate}")

    def _decode(self, sample: EmotionSample) -> np.ndarray:
        """Decode sample bytes to mono float32 PCM.

        Raises:
            AudioProcessingError: If the bytes are not decodable audio
        """
        try:
            samples, _ = librosa.load(io.BytesIO(bytes(sample.audio)), sr=self.sample_rate, mono=True)
            return samples.astype(np.float32)
        except Exception as e:
            logger.error(f"Audio decoding failed: {e}")
            raise AudioProcessingError(f"Failed to decode audio ({sample.mime_type}): {e}")

    def _analyze_signal(self, sample: EmotionSample) -> SignalAnalysis:
        """Decode and measure a sample, reusing the last analysis for the same bytes."""
        key = hash(bytes(sample.audio))
        if key == self._cache_key and self._cache is not None:
            return self._cache

        samples = self._decode(sample)
        duration = len(samples) / self.sample_rate
        empty = np.array([], dtype=np.float32)

        if len(samples) < self.frame_length:
            logger.debug("Signal shorter than one analysis frame")
            analysis = SignalAnalysis(empty, empty, empty, empty, duration)
        else:
            rms = librosa.feature.rms(
                y=samples, frame_length=self.frame_length, hop_length=self.hop_length
            )[0]

            f0 = librosa.yin(
                samples,
                fmin=librosa.note_to_hz('C2'),
                fmax=librosa.note_to_hz('C6'),
                sr=self.sample_rate,
                frame_length=self.frame_length,
                hop_length=self.hop_length,
            )
            n = min(len(f0), len(rms))
            voiced = f0[:n][rms[:n] >= self.silence_threshold]

            onset_env = librosa.onset.onset_strength(y=samples, sr=self.sample_rate)
            onsets = librosa.onset.onset_detect(
                onset_envelope=onset_env, sr=self.sample_rate, units='time'
            )

            flatness = librosa.feature.spectral_flatness(
                y=samples, n_fft=self.frame_length, hop_length=self.hop_length
            )[0]

            analysis = SignalAnalysis(voiced, rms, np.asarray(onsets), flatness, duration)

        self._cache_key = key
        self._cache = analysis
        return analysis

    def extract_features(self, sample: EmotionSample) -> VoiceFeatures:
        """Extract voice features from the audio signal.

        Args:
            sample: Captured audio

        Returns:
            VoiceFeatures measured from the signal

        Raises:
            AudioProcessingError: If the audio cannot be decoded
        """
        analysis = self._analyze_signal(sample)
        rms = analysis.rms

        if len(rms) == 0 or float(np.max(rms)) < self.silence_threshold:
            logger.warning("Signal too short or silent, using neutral voice features")
            return VoiceFeatures(pitch=120.0, tempo=120.0, volume=0.6, clarity=0.7, rhythm=0.5, energy=0.5)

        voiced = analysis.voiced_pitch
        pitch = float(np.mean(voiced)) if len(voiced) > 0 else 120.0

        # Map mean RMS from [-60, 0] dBFS onto [0, 1]
        rms_mean = float(np.mean(rms))
        volume = float(np.clip(1.0 + 20.0 * np.log10(rms_mean + 1e-10) / 60.0, 0.0, 1.0))

        # Share of frames carrying at least half of the peak energy
        energy = float(np.mean(rms >= 0.5 * np.max(rms)))

        duration = analysis.duration
        onsets = analysis.onsets
        tempo = len(onsets) / duration * 60.0 / SYLLABLES_PER_WORD if duration > 0 else 0.0

        rhythm = 0.5
        if len(onsets) >= 3:
            intervals = np.diff(onsets)
            rhythm = float(np.clip(1.0 - np.std(intervals) / (np.mean(intervals) + 1e-10), 0.0, 1.0))

        # Noise has a flat spectrum, voiced speech does not
        clarity = float(np.clip(1.0 - np.mean(analysis.flatness), 0.0, 1.0))

        features = VoiceFeatures(
            pitch=pitch,
            tempo=float(tempo),
            volume=volume,
            clarity=clarity,
            rhythm=rhythm,
            energy=energy,
        )
        logger.debug(f"Acoustic features: {features}")
        return features

    def measure_variation(self, sample: EmotionSample, features: VoiceFeatures) -> VoiceVariation:
        """Measure coefficient of variation of pitch, onset spacing and RMS.

        Each coefficient is doubled and clipped to [0, 1], so a spread of half
        the mean or more counts as maximal variation.
        """
        analysis = self._analyze_signal(sample)

        def spread(values: np.ndarray) -> float:
            if len(values) < 2 or float(np.mean(values)) <= 0:
                return 0.0
            return float(np.clip(2.0 * np.std(values) / np.mean(values), 0.0, 1.0))

        onsets = analysis.onsets
        intervals = np.diff(onsets) if len(onsets) >= 2 else np.array([])
        return VoiceVariation(
            pitch=spread(analysis.voiced_pitch),
            tempo=spread(intervals),
            volume=spread(analysis.rms),
        )

    def analyze_speech(self, sample: EmotionSample) -> SpeechHints:
        # Requires a transcript, which this extractor does not produce
        return SpeechHints()
