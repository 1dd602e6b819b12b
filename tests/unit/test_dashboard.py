"""Unit tests for dashboard figures"""

import plotly.graph_objects as go
import pytest

from moodmirror.analysis.history import EmotionHistory
from moodmirror.models.enums import EmotionType
from moodmirror.models.results import EmotionResult
from moodmirror.ui.dashboard import (
    EMOTION_COLORS,
    EMOTION_EMOJI,
    create_confidence_gauge,
    create_distribution_chart,
    create_confidence_history_chart,
    history_frame,
)


def make_history(*pairs):
    history = EmotionHistory()
    for emotion, confidence in pairs:
        history.append(EmotionResult(emotion=emotion, confidence=confidence, audio_duration=6.0))
    return history


def test_every_emotion_has_color_and_emoji():
    assert set(EMOTION_COLORS) == set(EmotionType)
    assert set(EMOTION_EMOJI) == set(EmotionType)


def test_gauge_shows_confidence_percent():
    fig = create_confidence_gauge(EmotionResult(emotion=EmotionType.CALM, confidence=0.82))

    assert isinstance(fig, go.Figure)
    indicator = fig.data[0]
    assert indicator.value == pytest.approx(82.0)
    assert "Calm" in indicator.title.text


def test_distribution_empty():
    fig = create_distribution_chart(None)
    assert len(fig.data) == 0
    assert fig.layout.annotations[0].text == "No recordings yet"


def test_distribution_sorted_by_count():
    history = make_history(
        (EmotionType.SAD, 0.6),
        (EmotionType.CALM, 0.7),
        (EmotionType.CALM, 0.8),
    )
    bar = create_distribution_chart(history.summarize()).data[0]

    assert list(bar.y) == [2, 1]
    assert bar.x[0].endswith("calm")
    assert list(bar.text) == ["67%", "33%"]


def test_history_frame():
    history = make_history((EmotionType.HAPPY, 0.7), (EmotionType.SAD, 0.5))
    frame = history_frame(history.results)

    assert list(frame['recording']) == [1, 2]
    assert list(frame['emotion']) == ["happy", "sad"]
    assert list(frame['confidence']) == [0.7, 0.5]


def test_confidence_history_chart():
    history = make_history((EmotionType.HAPPY, 0.7), (EmotionType.SAD, 0.5))
    fig = create_confidence_history_chart(history.results)

    assert list(fig.data[0].y) == [0.7, 0.5]


def test_confidence_history_chart_empty():
    fig = create_confidence_history_chart([])
    assert fig.layout.annotations[0].text == "No data yet"
