"""Session emotion history and dashboard aggregates"""

import logging
from typing import Dict, Iterator, List, Optional, Sequence

import numpy as np

from moodmirror.models.enums import EmotionType, MoodTrend
from moodmirror.models.results import EmotionResult, EmotionSummary
from moodmirror.config.config_loader import config


logger = logging.getLogger(__name__)


def count_emotions(results: Sequence[EmotionResult]) -> Dict[EmotionType, int]:
    """Count results per emotion, with a zero entry for every EmotionType."""
    counts = {emotion: 0 for emotion in EmotionType}
    for result in results:
        counts[result.emotion] += 1
    return counts


def dominant_emotion(results: Sequence[EmotionResult]) -> EmotionType:
    """Most frequent emotion; on a tie, the one that appears first in results.

    Returns:
        Dominant emotion, NEUTRAL for an empty sequence
    """
    counts: Dict[EmotionType, int] = {}
    for result in results:
        # dict keeps first-appearance order
        counts[result.emotion] = counts.get(result.emotion, 0) + 1
    if not counts:
        return EmotionType.NEUTRAL
    # max() returns the first maximal element
    return max(counts, key=counts.get)


def mood_trend(confidences: Sequence[float], window: int = 5, threshold: float = 0.1) -> MoodTrend:
    """Compare mean confidence of the latest results with the earliest ones.

    The early and recent windows never overlap: each holds
    min(window, len // 2) entries, so fewer than two results are always
    stable.

    Args:
        confidences: Confidence values, oldest first
        window: Maximum entries per window
        threshold: Difference in means required to leave STABLE

    Returns:
        IMPROVING, DECLINING or STABLE
    """
    size = min(window, len(confidences) // 2)
    if size == 0:
        return MoodTrend.STABLE

    early = float(np.mean(confidences[:size]))
    recent = float(np.mean(confidences[-size:]))

    if recent > early + threshold:
        return MoodTrend.IMPROVING
    if recent < early - threshold:
        return MoodTrend.DECLINING
    return MoodTrend.STABLE


class EmotionHistory:
    """Append-only, in-memory record of a session's detection results.

    Attributes:
        trend_window: Entries per window in the mood-trend comparison
        trend_threshold: Hysteresis band for the mood trend
        recent_count: Number of recent results included in summaries
    """

    def __init__(self):
        self.trend_window = config.get('history.trend_window', 5)
        self.trend_threshold = config.get('history.trend_threshold', 0.1)
        self.recent_count = config.get('history.recent_count', 3)
        self._results: List[EmotionResult] = []

    def append(self, result: EmotionResult) -> None:
        self._results.append(result)
        logger.debug(f"History now holds {len(self._results)} results")

    def clear(self) -> None:
        self._results = []

    @property
    def results(self) -> List[EmotionResult]:
        """Copy of the results, oldest first"""
        return list(self._results)

    def __len__(self) -> int:
        return len(self._results)

    def __iter__(self) -> Iterator[EmotionResult]:
        return iter(list(self._results))

    def summarize(self) -> Optional[EmotionSummary]:
        """Aggregate the history for the dashboard.

        Returns:
            EmotionSummary, or None when the history is empty
        """
        if not self._results:
            return None

        confidences = [r.confidence for r in self._results]

        return EmotionSummary(
            total_recordings=len(self._results),
            emotion_counts=count_emotions(self._results),
            dominant_emotion=dominant_emotion(self._results),
            average_confidence=float(np.mean(confidences)),
            mood_trend=mood_trend(confidences, self.trend_window, self.trend_threshold),
            recent=self._results[-self.recent_count:],
        )
