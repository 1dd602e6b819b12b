#!/usr/bin/env python3
"""Simple demo of the emotion detection pipeline without a microphone.

Runs a handful of recording sessions over synthetic tones and prints each
result followed by the session summary and insight messages.
"""

import asyncio
import io

import numpy as np
import soundfile as sf

from moodmirror.analysis.detector import EmotionDetector
from moodmirror.analysis.insights import describe, summary_messages
from moodmirror.session.devices import BufferedCaptureDevice, clip_duration
from moodmirror.session.lifecycle import RecordingSession


def synthetic_clip(seconds: float, pitch: float, sample_rate: int = 16000) -> bytes:
    """A quiet sine tone with some noise, encoded as 16-bit WAV."""
    t = np.arange(int(seconds * sample_rate)) / sample_rate
    signal = 0.3 * np.sin(2 * np.pi * pitch * t) + 0.02 * np.random.randn(len(t))
    buffer = io.BytesIO()
    sf.write(buffer, signal.astype(np.float32), sample_rate, format='WAV', subtype='PCM_16')
    return buffer.getvalue()


async def demo_pipeline(recordings: int = 8):
    """Demonstrate the emotion detection pipeline with synthetic audio."""

    print("=" * 60)
    print("MoodMirror Pipeline Demo")
    print("=" * 60)
    print()

    device = BufferedCaptureDevice()
    session = RecordingSession(device, detector=EmotionDetector(simulated_latency=0.2))

    print(f"Processing {recordings} synthetic recordings...")
    print("-" * 60)

    for i in range(recordings):
        seconds = float(np.random.randint(2, 12))
        audio = synthetic_clip(seconds, pitch=float(np.random.uniform(100, 220)))
        device.load(audio)

        await session.start()
        result = await session.stop(duration=clip_duration(audio))

        insight = describe(result.emotion)
        print(f"Recording {i + 1}/{recordings}: {seconds:.0f}s -> "
              f"{result.emotion.value:<10} confidence {result.confidence:.0%} "
              f"[{insight.severity.value}]")

    print("-" * 60)
    summary = session.history.summarize()

    print()
    print("Summary:")
    print(f"  Total recordings: {summary.total_recordings}")
    print(f"  Dominant emotion: {summary.dominant_emotion.value}")
    print(f"  Average confidence: {summary.average_confidence:.0%}")
    print(f"  Mood trend: {summary.mood_trend.value}")
    print("  Distribution:")
    for emotion, count, pct in summary.distribution():
        print(f"    - {emotion.value}: {count} ({pct:.0f}%)")

    print()
    for message in summary_messages(summary):
        print(f"* {message}")
    print("=" * 60)


if __name__ == "__main__":
    try:
        asyncio.run(demo_pipeline())
    except KeyboardInterrupt:
        print("\nDemo interrupted by user")
