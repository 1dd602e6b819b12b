"""Capture devices backed by pre-recorded audio"""

import io
import logging
from typing import Optional

import numpy as np
import soundfile as sf

from moodmirror.models.interfaces import CaptureDevice


logger = logging.getLogger(__name__)


def pcm16_level(audio: bytes) -> float:
    """RMS level in [0, 1] of bytes read as 16-bit little-endian PCM.

    Container headers are read as samples too; the result is advisory only.
    """
    usable = len(audio) - len(audio) % 2
    if usable == 0:
        return 0.0
    samples = np.frombuffer(audio[:usable], dtype='<i2').astype(np.float32) / 32768.0
    return float(np.clip(np.sqrt(np.mean(samples ** 2)), 0.0, 1.0))


class BufferedCaptureDevice(CaptureDevice):
    """Capture device that "records" audio supplied ahead of time.

    Used when the browser does the recording (the web UI hands over the
    recorded clip) and in tests.

    Attributes:
        available: Result reported by probe()
        is_open: Whether a session currently holds the device
    """

    def __init__(self, audio: bytes = b"", mime_type: str = "audio/wav", available: bool = True):
        self._audio = audio
        self.mime_type = mime_type
        self.available = available
        self.is_open = False

    def load(self, audio: bytes, mime_type: Optional[str] = None) -> None:
        """Set the audio the next recording will produce."""
        self._audio = audio
        if mime_type:
            self.mime_type = mime_type

    async def probe(self) -> bool:
        return self.available

    async def open(self) -> None:
        if not self.available:
            raise RuntimeError("Capture device is not available")
        self.is_open = True
        logger.debug(f"Buffered device opened with {len(self._audio)} bytes")

    async def close(self) -> bytes:
        if not self.is_open:
            return b""
        self.is_open = False
        return self._audio

    def level(self) -> float:
        if not self.is_open:
            return 0.0
        return pcm16_level(self._audio)


def clip_duration(audio: bytes) -> float:
    """Length in seconds of an encoded clip, 0.0 if libsndfile cannot read it.

    Browser recordings are often WebM/Opus, which libsndfile does not decode.
    """
    if not audio:
        return 0.0
    try:
        info = sf.info(io.BytesIO(audio))
    except RuntimeError as e:
        logger.debug(f"Could not read clip header: {e}")
        return 0.0
    return float(info.duration)
