#!/usr/bin/env python3
"""MoodMirror Web UI Runner

Runs the emotion detection demo as a Streamlit app. The browser records the
clip; each submitted clip goes through a recording session backed by a
buffered capture device, and the result feeds the session dashboard.

    streamlit run run_web_ui.py
"""

import asyncio
import logging

import streamlit as st

from moodmirror.analysis.detector import DetectionError, EmotionDetector
from moodmirror.analysis.history import EmotionHistory
from moodmirror.models.enums import DetectorModel, SessionState
from moodmirror.models.results import EmotionResult
from moodmirror.session.devices import BufferedCaptureDevice, clip_duration
from moodmirror.session.lifecycle import RecordingSession, SessionError
from moodmirror.ui.dashboard import EmotionDashboard


logger = logging.getLogger(__name__)


async def analyze_clip(session: RecordingSession, audio: bytes, mime_type: str) -> EmotionResult:
    """Replay a browser recording through the session."""
    session.device.load(audio, mime_type)
    await session.start()
    return await session.stop(duration=clip_duration(audio))


def init_state() -> None:
    if 'session' in st.session_state:
        return
    detector = EmotionDetector()
    st.session_state.session = RecordingSession(
        BufferedCaptureDevice(),
        detector=detector,
        history=EmotionHistory(),
    )
    st.session_state.last_clip = None


def render_sidebar(session: RecordingSession) -> None:
    detector = session.detector
    current = detector.get_config()

    with st.sidebar:
        st.header("Detector Settings")

        sensitivity = st.slider("Sensitivity", 0.0, 1.0, current.sensitivity, 0.05)
        models = [m.value for m in DetectorModel]
        model = st.selectbox("Model", models, index=models.index(current.model.value))
        context_aware = st.checkbox("Context aware", value=current.context_aware)
        baseline_adjustment = st.checkbox("Baseline adjustment", value=current.baseline_adjustment)

        changes = {
            'sensitivity': sensitivity,
            'model': DetectorModel(model),
            'context_aware': context_aware,
            'baseline_adjustment': baseline_adjustment,
        }
        if any(getattr(current, k) != v for k, v in changes.items()):
            detector.update_config(**changes)

        st.markdown("---")
        st.markdown("### Session")
        st.metric("Recordings", len(session.history))
        st.metric("Baseline samples", session.baseline.total_recordings)

        if st.button("🗑️ Clear History", disabled=len(session.history) == 0):
            session.history.clear()
            session.current_result = None
            st.rerun()


def main():
    """Main Streamlit application."""
    st.set_page_config(
        page_title="MoodMirror",
        page_icon="🪞",
        layout="wide"
    )

    st.title("🪞 MoodMirror Voice Emotion Detection")
    st.markdown("Record a short clip and see how you sound.")

    init_state()
    session: RecordingSession = st.session_state.session
    render_sidebar(session)

    clip = st.audio_input("🎙️ Record your voice")

    # audio_input keeps returning the same clip on every rerun
    if clip is not None and clip.file_id != st.session_state.last_clip:
        st.session_state.last_clip = clip.file_id
        audio = clip.getvalue()

        with st.spinner("Analyzing your emotion..."):
            try:
                result = asyncio.run(analyze_clip(session, audio, clip.type or "audio/wav"))
                st.toast(f"Detected {result.emotion.value} ({result.confidence:.0%})", icon="✅")
            except (SessionError, DetectionError) as e:
                logger.error(f"Clip analysis failed: {e}")
                st.toast(str(e), icon="⚠️")

    if session.state is SessionState.DEVICE_UNAVAILABLE:
        st.warning("Microphone access is required for emotion detection.")

    EmotionDashboard(session.history).render(session.current_result)


if __name__ == "__main__":
    main()
