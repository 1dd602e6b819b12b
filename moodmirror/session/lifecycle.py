"""Recording Session Lifecycle

This module implements the recording state machine that connects a capture
device to the emotion detector:

    IDLE -> RECORDING -> ANALYZING -> IDLE
    DEVICE_UNAVAILABLE -> (retry_probe) -> IDLE

Only one capture runs at a time. The capture device is exclusively owned by
the session while RECORDING and is released on every path out of that state.
ANALYZING cannot be cancelled; a start request during analysis is rejected.
"""

import asyncio
import logging
import math
from typing import Optional

from moodmirror.models.enums import SessionState
from moodmirror.models.interfaces import CaptureDevice
from moodmirror.models.results import EmotionResult
from moodmirror.models.samples import EmotionSample
from moodmirror.models.state import UserBaseline
from moodmirror.analysis.detector import EmotionDetector, DetectionError
from moodmirror.analysis.history import EmotionHistory
from moodmirror.config.config_loader import config


logger = logging.getLogger(__name__)


class SessionError(Exception):
    """Base exception for recording session failures"""
    pass


class SessionStateError(SessionError):
    """Exception raised when an action is not allowed in the current state"""
    pass


class DeviceUnavailableError(SessionError):
    """Exception raised when no capture device can be acquired"""
    pass


class CaptureStartError(SessionError):
    """Exception raised when acquiring the device fails after a successful probe"""
    pass


class RecordingSession:
    """State machine for one user's recording session.

    The session:
    1. Probes the capture device when mounted
    2. Acquires the device and counts elapsed seconds while recording
    3. Releases the device and hands the captured sample to the detector
    4. Appends each result to the session history and keeps it as current
    5. Threads the speaker baseline from one detection to the next

    Attributes:
        device: Capture device owned by this session
        detector: Emotion detector
        history: Results of this session, oldest first
        baseline: Speaker baseline after the latest detection
        user_id: Identifier attached to results
        state: Current SessionState
        elapsed: Whole seconds recorded in the current capture
        current_result: Latest result, cleared when a new recording starts
        tick_interval: Seconds between elapsed-duration ticks
    """

    def __init__(
        self,
        device: CaptureDevice,
        detector: Optional[EmotionDetector] = None,
        history: Optional[EmotionHistory] = None,
        baseline: Optional[UserBaseline] = None,
        user_id: Optional[str] = None
    ):
        self.device = device
        self.detector = detector if detector is not None else EmotionDetector()
        self.history = history if history is not None else EmotionHistory()
        self.baseline = baseline if baseline is not None else UserBaseline()
        self.user_id = user_id

        self.state = SessionState.IDLE
        self.elapsed = 0
        self.current_result: Optional[EmotionResult] = None
        self.tick_interval = config.get('session.tick_interval', 1.0)

        self._ticker: Optional[asyncio.Task] = None
        self._probed = False

    async def __aenter__(self) -> "RecordingSession":
        await self.probe()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.teardown()

    async def probe(self) -> bool:
        """Check whether the capture device can be acquired.

        Moves to DEVICE_UNAVAILABLE when it cannot, and back to IDLE when a
        later probe succeeds. Ignored while recording or analyzing.

        Returns:
            True if the device is available
        """
        if self.state in (SessionState.RECORDING, SessionState.ANALYZING):
            return True

        try:
            available = await self.device.probe()
        except Exception as e:
            logger.warning(f"Capture device probe failed: {e}")
            available = False

        self._probed = True
        if available:
            if self.state is SessionState.DEVICE_UNAVAILABLE:
                logger.info("Capture device available again")
            self.state = SessionState.IDLE
        else:
            logger.warning("Capture device unavailable")
            self.state = SessionState.DEVICE_UNAVAILABLE
        return available

    async def retry_probe(self) -> bool:
        """Probe again after the device was reported unavailable."""
        return await self.probe()

    async def start(self) -> None:
        """Acquire the capture device and begin recording.

        Raises:
            SessionStateError: If already recording or analyzing
            DeviceUnavailableError: If the device probe failed
            CaptureStartError: If the device could not be opened
        """
        if self.state is SessionState.ANALYZING:
            raise SessionStateError("Cannot start recording while analysis is in progress")
        if self.state is SessionState.RECORDING:
            raise SessionStateError("Recording already in progress")
        if not self._probed:
            await self.probe()
        if self.state is SessionState.DEVICE_UNAVAILABLE:
            raise DeviceUnavailableError("Microphone access is required for emotion detection")

        try:
            await self.device.open()
        except Exception as e:
            logger.error(f"Error starting recording: {e}", exc_info=True)
            await self._close_device()
            raise CaptureStartError(
                "Failed to start recording. Please check microphone permissions."
            ) from e

        self.current_result = None
        self.elapsed = 0
        self.state = SessionState.RECORDING
        self._ticker = asyncio.create_task(self._tick_loop(), name="recording_timer")

        logger.info("Recording started")

    def tick(self) -> None:
        """Advance the elapsed-duration counter by one second while recording."""
        if self.state is SessionState.RECORDING:
            self.elapsed += 1

    async def _tick_loop(self) -> None:
        while True:
            await asyncio.sleep(self.tick_interval)
            self.tick()

    async def _stop_ticker(self) -> None:
        if self._ticker is None:
            return
        self._ticker.cancel()
        try:
            await self._ticker
        except asyncio.CancelledError:
            pass
        self._ticker = None

    async def _close_device(self) -> bytes:
        try:
            return await self.device.close()
        except Exception as e:
            logger.error(f"Error releasing capture device: {e}", exc_info=True)
            return b""

    async def _release(self) -> bytes:
        """Stop the timer and release the device, returning the captured audio."""
        try:
            await self._stop_ticker()
        finally:
            audio = await self._close_device()
        return audio

    def level(self) -> float:
        """Live input level in [0, 1] while recording, 0.0 otherwise."""
        if self.state is not SessionState.RECORDING:
            return 0.0
        return self.device.level()

    async def stop(self, duration: Optional[float] = None) -> EmotionResult:
        """Stop recording and analyze the captured audio.

        Args:
            duration: Recording length measured by the device itself, the
                elapsed tick count if None

        Returns:
            The detection result, also appended to history

        Raises:
            SessionStateError: If not recording
            ValueError: If the duration is negative or not finite
            DetectionError: If detection fails; no result is recorded
        """
        if self.state is not SessionState.RECORDING:
            raise SessionStateError("No recording in progress")
        if duration is not None and (not math.isfinite(duration) or duration < 0):
            raise ValueError(f"Duration must be finite and non-negative, got {duration}")

        # Leave RECORDING before the first await so a concurrent stop() is rejected
        self.state = SessionState.ANALYZING

        try:
            audio = await self._release()
            sample = EmotionSample(
                audio=audio,
                duration=float(self.elapsed) if duration is None else duration,
                mime_type=self.device.mime_type,
            )
            logger.info(f"Recording stopped after {self.elapsed}s, analyzing {len(audio)} bytes")

            result, baseline = await self.detector.analyze(sample, self.baseline, self.user_id)
        except DetectionError:
            raise
        except Exception as e:
            logger.error(f"Error analyzing emotion: {e}", exc_info=True)
            raise DetectionError("Failed to analyze emotion. Please try again.") from e
        else:
            self.history.append(result)
            self.current_result = result
            self.baseline = baseline
            logger.info(f"Emotion detected: {result.emotion.value} "
                        f"(confidence={result.confidence:.2f})")
            return result
        finally:
            self.state = SessionState.IDLE

    async def teardown(self) -> None:
        """Abandon any active recording without analysis and release the device."""
        if self.state is SessionState.RECORDING:
            await self._release()
            self.state = SessionState.IDLE
            logger.info("Recording abandoned")
