"""Microphone capture device using sounddevice"""

import io
import logging
import threading
from typing import List, Optional, Union

import numpy as np
import soundfile as sf

from moodmirror.models.interfaces import CaptureDevice
from moodmirror.config.config_loader import config


logger = logging.getLogger(__name__)


class MicrophoneCaptureDevice(CaptureDevice):
    """Records from a local input device and returns WAV bytes.

    Audio blocks arrive on the PortAudio callback thread and are buffered
    until close(). The RMS of the latest block is kept for level metering.

    Attributes:
        device_id: sounddevice input device index or name, default device if None
        sample_rate: Capture sample rate in Hz
        channels: Number of input channels (downmixed to mono)
        block_size: Frames per callback block
    """

    mime_type = "audio/wav"

    def __init__(self, device_id: Optional[Union[int, str]] = None):
        self.device_id = device_id
        self.sample_rate = config.get('audio.sample_rate', 16000)
        self.channels = config.get('audio.channels', 1)
        self.block_size = config.get('audio.block_size', 1024)

        self.stream = None
        self._chunks: List[np.ndarray] = []
        self._lock = threading.Lock()
        self._level = 0.0

    async def probe(self) -> bool:
        """Check that an input device with at least one channel exists."""
        try:
            # sounddevice loads PortAudio on import; a missing library means no device
            import sounddevice as sd
            info = sd.query_devices(self.device_id, kind='input')
            available = info['max_input_channels'] > 0
            if available:
                logger.info(f"Found input device: {info['name']}")
            return available
        except Exception as e:
            logger.warning(f"No usable input device: {e}")
            return False

    def _callback(self, indata, frames, time_info, status):
        if status:
            logger.debug(f"Input stream status: {status}")
        block = indata.astype(np.float32)
        block = block.mean(axis=1) if block.ndim > 1 else block.reshape(-1)
        with self._lock:
            self._chunks.append(block.copy())
            self._level = float(np.clip(np.sqrt(np.mean(block ** 2)), 0.0, 1.0)) if len(block) else 0.0

    async def open(self) -> None:
        """Start an input stream on the device."""
        import sounddevice as sd

        with self._lock:
            self._chunks = []
            self._level = 0.0

        self.stream = sd.InputStream(
            device=self.device_id,
            channels=self.channels,
            samplerate=self.sample_rate,
            blocksize=self.block_size,
            dtype='float32',
            callback=self._callback,
        )
        self.stream.start()
        logger.info(f"Microphone stream started at {self.sample_rate} Hz")

    async def close(self) -> bytes:
        """Stop the stream and encode the buffered audio as 16-bit WAV."""
        if self.stream is None:
            return b""

        try:
            self.stream.stop()
            self.stream.close()
        finally:
            self.stream = None
            logger.info("Microphone stream closed")

        with self._lock:
            chunks, self._chunks = self._chunks, []
            self._level = 0.0

        if not chunks:
            return b""

        audio = np.concatenate(chunks)
        buffer = io.BytesIO()
        sf.write(buffer, audio, self.sample_rate, format='WAV', subtype='PCM_16')
        return buffer.getvalue()

    def level(self) -> float:
        with self._lock:
            return self._level
