"""
Legacy SM-2 calculation.

The plain three-field SM-2 variant used for question stats recorded before
the state machine existed. Kept so those records can still be advanced
until they are migrated into a CardRecord.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from recall.core.models import Quality
from recall.core.units import round_half_up
from recall.study.scheduler import coerce_quality

MINIMUM_EASINESS = 1.3
FIRST_INTERVAL = 1  # Days for first review
SECOND_INTERVAL = 6  # Days for second review


@dataclass(frozen=True)
class SM2Review:
    """SM-2 state after a review."""

    ease_factor: float
    interval: int
    repetitions: int
    next_review_date: datetime


def calculate_next_review(
    ease_factor: float,
    interval: int,
    repetitions: int,
    quality: Quality | int,
    now: datetime,
) -> SM2Review:
    """
    Calculate the next SM-2 review.

    Args:
        ease_factor: Current easiness factor
        interval: Current interval in days
        repetitions: Consecutive successful reviews
        quality: Answer grade (0-3)
        now: Current time

    Returns:
        SM2Review with the new state
    """
    q = coerce_quality(quality)

    if q < Quality.GOOD:
        # Failed - reset to beginning
        repetitions = 0
        interval = FIRST_INTERVAL
    else:
        if repetitions == 0:
            interval = FIRST_INTERVAL
        elif repetitions == 1:
            interval = SECOND_INTERVAL
        else:
            interval = round_half_up(interval * ease_factor)
        repetitions += 1

    # EF' = EF + (0.1 - (3 - q) * (0.08 + (3 - q) * 0.02)), on the 0-3 scale
    miss = Quality.EASY - q
    ease_factor = max(MINIMUM_EASINESS, ease_factor + 0.1 - miss * (0.08 + miss * 0.02))

    return SM2Review(
        ease_factor=ease_factor,
        interval=interval,
        repetitions=repetitions,
        next_review_date=now + timedelta(days=interval),
    )
