"""Emotion insights and dashboard messages"""

import logging
from typing import List, Union

from moodmirror.models.enums import EmotionType, MoodTrend, Severity
from moodmirror.models.results import EmotionInsight, EmotionSummary


logger = logging.getLogger(__name__)


INSIGHTS = {
    EmotionType.HAPPY: EmotionInsight(
        description="You sound cheerful and positive!",
        recommendations=(
            "Keep up the positive energy",
            "Share your good mood with others",
            "Consider doing something creative",
        ),
        severity=Severity.LOW,
    ),
    EmotionType.SAD: EmotionInsight(
        description="You sound a bit down or melancholic.",
        recommendations=(
            "Talk to a friend or family member",
            "Try doing something you enjoy",
            "Consider light exercise or a walk",
            "Practice self-care activities",
        ),
        severity=Severity.MEDIUM,
    ),
    EmotionType.ANGRY: EmotionInsight(
        description="You sound frustrated or upset.",
        recommendations=(
            "Take deep breaths and count to 10",
            "Step away from the situation temporarily",
            "Express your feelings in a healthy way",
            "Consider talking to someone about what's bothering you",
        ),
        severity=Severity.MEDIUM,
    ),
    EmotionType.CALM: EmotionInsight(
        description="You sound peaceful and relaxed.",
        recommendations=(
            "Maintain this balanced state",
            "Use this calm energy for focused work",
            "Consider meditation or mindfulness",
        ),
        severity=Severity.LOW,
    ),
    EmotionType.EXCITED: EmotionInsight(
        description="You sound enthusiastic and energetic!",
        recommendations=(
            "Channel this energy into productive activities",
            "Share your excitement with others",
            "Consider physical activity to release energy",
        ),
        severity=Severity.LOW,
    ),
    EmotionType.ANXIOUS: EmotionInsight(
        description="You sound worried or nervous.",
        recommendations=(
            "Practice deep breathing exercises",
            "Try progressive muscle relaxation",
            "Focus on the present moment",
            "Consider talking to someone about your concerns",
        ),
        severity=Severity.HIGH,
    ),
    EmotionType.NEUTRAL: EmotionInsight(
        description="You sound balanced and neutral.",
        recommendations=(
            "This is a good baseline state",
            "Consider what might help you feel more engaged",
            "Use this time for reflection",
        ),
        severity=Severity.LOW,
    ),
    EmotionType.SURPRISED: EmotionInsight(
        description="You sound surprised or astonished.",
        recommendations=(
            "Take a moment to process what happened",
            "Share your surprise with others if appropriate",
            "Use this energy for positive exploration",
        ),
        severity=Severity.LOW,
    ),
    EmotionType.DISGUSTED: EmotionInsight(
        description="You sound disgusted or repulsed.",
        recommendations=(
            "Identify what's causing this feeling",
            "Remove yourself from the situation if possible",
            "Practice self-compassion",
        ),
        severity=Severity.MEDIUM,
    ),
    EmotionType.FEARFUL: EmotionInsight(
        description="You sound afraid or frightened.",
        recommendations=(
            "Take deep breaths to calm your nervous system",
            "Identify if the fear is based on real or perceived threats",
            "Talk to someone you trust about your fears",
        ),
        severity=Severity.HIGH,
    ),
}

DOMINANT_EMOTION_ADVICE = {
    EmotionType.HAPPY: "Keep up the positive energy!",
    EmotionType.SAD: "Consider talking to someone or doing something you enjoy.",
    EmotionType.ANXIOUS: "Try some deep breathing exercises or meditation.",
    EmotionType.CALM: "You seem to be in a good, balanced state.",
}


def describe(emotion: Union[EmotionType, str, None]) -> EmotionInsight:
    """Look up the insight for an emotion.

    Accepts an EmotionType or its string value. Anything unrecognized
    resolves to the neutral insight.

    Args:
        emotion: Emotion to describe

    Returns:
        Insight with description, recommendations and severity
    """
    if not isinstance(emotion, EmotionType):
        try:
            emotion = EmotionType(str(emotion).strip().lower())
        except ValueError:
            logger.debug(f"Unknown emotion {emotion!r}, using neutral insight")
            emotion = EmotionType.NEUTRAL
    return INSIGHTS.get(emotion, INSIGHTS[EmotionType.NEUTRAL])


def summary_messages(summary: EmotionSummary) -> List[str]:
    """Dashboard messages for a session summary.

    Returns:
        Dominant-emotion message, confidence message and, when the mood is
        not stable, a mood-trend message
    """
    dominant = summary.dominant_emotion
    message = f"Your dominant emotion is {dominant.value}."
    advice = DOMINANT_EMOTION_ADVICE.get(dominant)
    if advice:
        message = f"{message} {advice}"
    messages = [message]

    percent = round(summary.average_confidence * 100)
    if summary.average_confidence > 0.8:
        quality = "Excellent! The detector is very confident in reading your emotions."
    elif summary.average_confidence > 0.6:
        quality = "Good! Try speaking more clearly for even better results."
    else:
        quality = "Try speaking more clearly and in a quieter environment."
    messages.append(f"Your emotion detection confidence is {percent}%. {quality}")

    if summary.mood_trend is MoodTrend.IMPROVING:
        messages.append("Great news! Your mood has been improving over time.")
    elif summary.mood_trend is MoodTrend.DECLINING:
        messages.append("Your mood has been declining. Consider reaching out for support "
                        "or trying stress-relief activities.")

    return messages
