"""
Integration tests for the recording pipeline.

Runs complete recording sessions (device -> session -> detector -> history)
and checks the dashboard aggregates computed from the resulting history.
"""

import pytest

from moodmirror.analysis.detector import EmotionDetector
from moodmirror.analysis.acoustic import AcousticFeatureExtractor
from moodmirror.analysis.history import EmotionHistory
from moodmirror.analysis.insights import describe, summary_messages
from moodmirror.models.enums import EmotionType, SessionState
from moodmirror.models.state import BASELINE_WINDOW
from moodmirror.session.devices import BufferedCaptureDevice, clip_duration
from moodmirror.session.lifecycle import RecordingSession


@pytest.mark.asyncio
async def test_repeated_recordings_build_history(device, detector):
    history = EmotionHistory()
    session = RecordingSession(device, detector=detector, history=history, user_id="u1")

    for i in range(15):
        await session.start()
        result = await session.stop(duration=float(i * 2))
        assert result.user_id == "u1"
        assert session.state is SessionState.IDLE

    assert len(history) == 15
    assert session.baseline.total_recordings == 15
    assert list(session.baseline.last_emotions) == [r.emotion for r in history.results[-BASELINE_WINDOW:]]

    summary = history.summarize()
    assert summary.total_recordings == 15
    assert sum(summary.emotion_counts.values()) == 15
    assert summary.recent == history.results[-3:]
    assert sum(row[1] for row in summary.distribution()) == 15
    assert 0.4 <= summary.average_confidence <= 0.95

    messages = summary_messages(summary)
    assert messages[0].startswith(f"Your dominant emotion is {summary.dominant_emotion.value}.")


@pytest.mark.asyncio
async def test_every_result_has_an_insight(device, detector):
    session = RecordingSession(device, detector=detector)
    for _ in range(10):
        await session.start()
        result = await session.stop(duration=6.0)
        assert describe(result.emotion).description


@pytest.mark.asyncio
@pytest.mark.slow
async def test_acoustic_pipeline_on_real_audio(wav_factory):
    audio = wav_factory(seconds=3.0, frequency=180.0)
    detector = EmotionDetector(extractor=AcousticFeatureExtractor(), seed=9, simulated_latency=0.0)
    session = RecordingSession(BufferedCaptureDevice(audio), detector=detector)

    await session.start()
    result = await session.stop(duration=clip_duration(audio))

    assert isinstance(result.emotion, EmotionType)
    assert result.audio_duration == pytest.approx(3.0)
    # Under 5 s: base confidence 0.55 with +/-0.05 jitter
    assert 0.5 <= result.confidence <= 0.6
