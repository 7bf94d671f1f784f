"""
Time-based grade suggestion.

Maps (response latency, correctness) to a quality grade. The session layer
calls this before scheduling unless the learner overrides the grade.
"""

from __future__ import annotations

from recall.core.config import DEFAULT_TIME_THRESHOLDS, GradingThresholds
from recall.core.models import Quality


def suggest_grade_from_time(
    response_time_ms: int,
    was_correct: bool,
    thresholds: GradingThresholds = DEFAULT_TIME_THRESHOLDS,
) -> Quality:
    """
    Suggest a grade from how long a response took.

    Boundaries are exclusive: an answer exactly at a threshold falls into
    the next, harder bucket. A very slow correct answer is graded Again
    even though the answer itself was right.

    Args:
        response_time_ms: Time to answer in milliseconds
        was_correct: Whether the answer was correct
        thresholds: Threshold set in seconds

    Returns:
        Suggested Quality
    """
    if response_time_ms < 0:
        raise ValueError(f"response_time_ms must be >= 0, got {response_time_ms}")

    if not was_correct:
        return Quality.AGAIN

    seconds = response_time_ms / 1000

    if seconds < thresholds.fast:
        return Quality.EASY  # Quick confident recall
    if seconds < thresholds.normal:
        return Quality.GOOD  # Normal thinking time
    if seconds < thresholds.slow:
        return Quality.HARD  # Slow or uncertain
    return Quality.AGAIN  # Very slow, likely struggling
