"""Base interfaces for feature extraction and audio capture"""

from abc import ABC, abstractmethod
from moodmirror.models.samples import EmotionSample
from moodmirror.models.features import VoiceFeatures, VoiceVariation, SpeechHints


class FeatureExtractor(ABC):
    """Turns an audio sample into the signals the detector weighs"""

    @abstractmethod
    def extract_features(self, sample: EmotionSample) -> VoiceFeatures:
        """Measure voice characteristics

        Args:
            sample: Captured audio

        Returns:
            Voice features for the sample
        """
        pass

    @abstractmethod
    def measure_variation(self, sample: EmotionSample, features: VoiceFeatures) -> VoiceVariation:
        """Measure how much pitch, tempo and volume vary across the sample

        Args:
            sample: Captured audio
            features: Features already extracted from the sample

        Returns:
            Variation signal used for speaker counting
        """
        pass

    @abstractmethod
    def analyze_speech(self, sample: EmotionSample) -> SpeechHints:
        """Count emotionally loaded speech content

        Args:
            sample: Captured audio

        Returns:
            Speech hints for the sample
        """
        pass


class CaptureDevice(ABC):
    """An audio input that can be exclusively acquired by one session"""

    mime_type: str = "audio/wav"

    @abstractmethod
    async def probe(self) -> bool:
        """Check whether the device can be acquired

        Returns:
            True if capture is possible
        """
        pass

    @abstractmethod
    async def open(self) -> None:
        """Acquire the device and begin capturing

        Raises:
            Exception: Any failure to acquire the device
        """
        pass

    @abstractmethod
    async def close(self) -> bytes:
        """Stop capturing and release the device and its metering

        Must be safe to call when the device is not open.

        Returns:
            Audio captured since open(), empty if nothing was captured
        """
        pass

    @abstractmethod
    def level(self) -> float:
        """Current input level in [0, 1], advisory only"""
        pass
