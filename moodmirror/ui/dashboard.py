"""Emotion Dashboard Interface

This module provides a Streamlit-based view of a recording session: the current
detection result with its insight, the distribution of detected emotions, the
most recent emotions, confidence history, and summary messages derived from the
session history.
"""

import streamlit as st
import pandas as pd
from typing import List, Optional
import plotly.graph_objects as go

from moodmirror.models.enums import EmotionType, MoodTrend, Severity
from moodmirror.models.results import EmotionResult, EmotionSummary
from moodmirror.analysis.history import EmotionHistory
from moodmirror.analysis.insights import describe, summary_messages


EMOTION_COLORS = {
    EmotionType.HAPPY: '#FFD93D',
    EmotionType.SAD: '#6C5CE7',
    EmotionType.ANGRY: '#FF6B6B',
    EmotionType.CALM: '#55EFC4',
    EmotionType.EXCITED: '#FFA502',
    EmotionType.ANXIOUS: '#FD79A8',
    EmotionType.NEUTRAL: '#DFE6E9',
    EmotionType.SURPRISED: '#FDCB6E',
    EmotionType.DISGUSTED: '#74B9FF',
    EmotionType.FEARFUL: '#A29BFE',
}

EMOTION_EMOJI = {
    EmotionType.HAPPY: '😊',
    EmotionType.SAD: '😢',
    EmotionType.ANGRY: '😠',
    EmotionType.CALM: '😌',
    EmotionType.EXCITED: '🤩',
    EmotionType.ANXIOUS: '😰',
    EmotionType.NEUTRAL: '😐',
    EmotionType.SURPRISED: '😲',
    EmotionType.DISGUSTED: '🤢',
    EmotionType.FEARFUL: '😨',
}

SEVERITY_COLORS = {
    Severity.LOW: 'green',
    Severity.MEDIUM: 'orange',
    Severity.HIGH: 'red',
}

TREND_LABELS = {
    MoodTrend.IMPROVING: '📈 Improving',
    MoodTrend.DECLINING: '📉 Declining',
    MoodTrend.STABLE: '➡️ Stable',
}


def _empty_figure(message: str, height: int = 300) -> go.Figure:
    fig = go.Figure()
    fig.add_annotation(
        text=message,
        xref="paper", yref="paper",
        x=0.5, y=0.5, showarrow=False,
        font=dict(size=16, color="gray")
    )
    fig.update_layout(height=height, margin=dict(l=20, r=20, t=20, b=20))
    return fig


def create_confidence_gauge(result: EmotionResult) -> go.Figure:
    """Gauge of the current result's confidence on a 0-100 scale.

    Args:
        result: Detection result to display

    Returns:
        Plotly Figure with the gauge, colored by the detected emotion
    """
    value = result.confidence * 100

    fig = go.Figure(go.Indicator(
        mode="gauge+number",
        value=value,
        number={'suffix': "%"},
        domain={'x': [0, 1], 'y': [0, 1]},
        title={'text': f"{EMOTION_EMOJI[result.emotion]} {result.emotion.value.title()}"},
        gauge={
            'axis': {'range': [0, 100], 'tickwidth': 1, 'tickcolor': "darkgray"},
            'bar': {'color': EMOTION_COLORS[result.emotion]},
            'bgcolor': "white",
            'borderwidth': 2,
            'bordercolor': "gray",
            'steps': [
                {'range': [0, 60], 'color': '#ffcccc'},
                {'range': [60, 80], 'color': '#ffffcc'},
                {'range': [80, 100], 'color': '#ccffcc'}
            ],
        }
    ))

    fig.update_layout(
        height=300,
        margin=dict(l=20, r=20, t=60, b=20)
    )

    return fig


def create_distribution_chart(summary: Optional[EmotionSummary]) -> go.Figure:
    """Bar chart of detected emotions, most frequent first.

    Only emotions detected at least once are shown. Each bar is labeled with
    its share of all recordings.
    """
    if summary is None:
        return _empty_figure("No recordings yet")

    rows = summary.distribution()
    emotions = [emotion for emotion, _, _ in rows]

    fig = go.Figure(data=[
        go.Bar(
            x=[f"{EMOTION_EMOJI[e]} {e.value}" for e in emotions],
            y=[count for _, count, _ in rows],
            marker_color=[EMOTION_COLORS[e] for e in emotions],
            text=[f"{pct:.0f}%" for _, _, pct in rows],
            textposition='auto',
        )
    ])

    fig.update_layout(
        title="Emotion Distribution",
        xaxis_title="Emotion",
        yaxis_title="Recordings",
        height=300,
        margin=dict(l=20, r=20, t=40, b=20),
        showlegend=False
    )

    return fig


def history_frame(results: List[EmotionResult]) -> pd.DataFrame:
    """Tabulate results for charting, one row per recording."""
    return pd.DataFrame({
        'recording': list(range(1, len(results) + 1)),
        'emotion': [r.emotion.value for r in results],
        'confidence': [r.confidence for r in results],
        'duration': [r.audio_duration for r in results],
        'timestamp': [r.timestamp for r in results],
    })


def create_confidence_history_chart(results: List[EmotionResult]) -> go.Figure:
    """Line chart of confidence per recording, markers colored by emotion."""
    if not results:
        return _empty_figure("No data yet")

    frame = history_frame(results)

    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=frame['recording'],
        y=frame['confidence'],
        mode='lines+markers',
        name='Confidence',
        line=dict(color='blue', width=2),
        marker=dict(size=10, color=[EMOTION_COLORS[r.emotion] for r in results],
                    line=dict(width=1, color='gray')),
        customdata=frame['emotion'],
        hovertemplate='Recording %{x}<br>%{customdata}<br>Confidence: %{y:.0%}<extra></extra>'
    ))

    fig.update_layout(
        title="Confidence History",
        xaxis_title="Recording",
        yaxis_title="Confidence",
        yaxis_range=[0.3, 1.0],
        height=300,
        margin=dict(l=20, r=20, t=40, b=20),
        hovermode='x unified'
    )

    return fig


class EmotionDashboard:
    """Streamlit view over a session's detection history.

    Attributes:
        history: Session history the aggregates are computed from
    """

    def __init__(self, history: EmotionHistory):
        self.history = history

    def render_current(self, result: Optional[EmotionResult]) -> None:
        """Show the current result with its insight."""
        if result is None:
            st.info("🎙️ Record a clip to see your emotion.")
            return

        insight = describe(result.emotion)
        col1, col2 = st.columns([1, 1])

        with col1:
            st.plotly_chart(create_confidence_gauge(result), use_container_width=True)
            st.caption(
                f"{result.audio_duration:.0f}s recording at "
                f"{result.timestamp.astimezone().strftime('%H:%M:%S')}"
            )

        with col2:
            color = SEVERITY_COLORS[insight.severity]
            st.markdown(f"### {EMOTION_EMOJI[result.emotion]} {result.emotion.value.title()}")
            st.markdown(f"**Attention:** :{color}[{insight.severity.value}]")
            st.write(insight.description)
            st.markdown("**Suggestions**")
            for recommendation in insight.recommendations:
                st.markdown(f"- {recommendation}")

    def render_summary(self) -> None:
        """Show aggregates over the session history."""
        summary = self.history.summarize()
        if summary is None:
            st.info("⏳ Your emotion summary will appear after the first recording.")
            return

        col1, col2, col3, col4 = st.columns(4)
        col1.metric("Recordings", summary.total_recordings)
        col2.metric("Dominant",
                    f"{EMOTION_EMOJI[summary.dominant_emotion]} {summary.dominant_emotion.value}")
        col3.metric("Avg Confidence", f"{summary.average_confidence:.0%}")
        col4.metric("Mood Trend", TREND_LABELS[summary.mood_trend])

        left, right = st.columns([1, 1])
        with left:
            st.plotly_chart(create_distribution_chart(summary), use_container_width=True)
        with right:
            st.plotly_chart(create_confidence_history_chart(self.history.results),
                            use_container_width=True)

        st.markdown("### Recent Emotions")
        for result in reversed(summary.recent):
            st.markdown(
                f"{EMOTION_EMOJI[result.emotion]} **{result.emotion.value}** "
                f"({result.confidence:.0%})"
            )

        st.markdown("### Insights")
        for message in summary_messages(summary):
            st.info(message)

    def render(self, current: Optional[EmotionResult] = None) -> None:
        """Render the complete dashboard."""
        st.markdown("---")
        self.render_current(current)
        st.markdown("---")
        self.render_summary()
