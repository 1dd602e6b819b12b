"""Recording session lifecycle and capture devices"""

from moodmirror.session.lifecycle import (
    RecordingSession,
    SessionError,
    SessionStateError,
    DeviceUnavailableError,
    CaptureStartError,
)
from moodmirror.session.devices import BufferedCaptureDevice, clip_duration, pcm16_level

__all__ = [
    "RecordingSession",
    "SessionError",
    "SessionStateError",
    "DeviceUnavailableError",
    "CaptureStartError",
    "BufferedCaptureDevice",
    "clip_duration",
    "pcm16_level",
]
