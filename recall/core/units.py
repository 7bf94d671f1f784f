"""Time-unit and rounding helpers shared by the scheduler and formatters."""

from __future__ import annotations

import math
from datetime import UTC, datetime, timedelta

MINUTES_PER_DAY = 24 * 60

# Floor for sub-day learning steps (~1.4 minutes)
MIN_STEP_DAYS = 0.001

# Latest representable review time; far-future schedules saturate here
MAX_REVIEW_TIME = datetime.max.replace(tzinfo=UTC)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from -inf (2.5 -> 3)."""
    return math.floor(value + 0.5)


def minutes_to_days(minutes: float) -> float:
    """Convert a learning step in minutes to a fractional day interval."""
    return max(MIN_STEP_DAYS, minutes / MINUTES_PER_DAY)


def add_days(start: datetime, days: float) -> datetime:
    """
    Return start + days, saturating at MAX_REVIEW_TIME.

    Intervals grow geometrically on Easy answers and eventually exceed the
    datetime range; such a card is simply scheduled at the end of time.
    """
    try:
        return start + timedelta(days=days)
    except OverflowError:
        return MAX_REVIEW_TIME


def ensure_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC; aware ones are converted to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)
