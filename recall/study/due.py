"""
Due queries and interval formatting for session construction.
"""

from __future__ import annotations

from datetime import datetime, timedelta

from recall.core.models import CardRecord, CardState
from recall.core.units import MINUTES_PER_DAY, round_half_up

OVERDUE_GRACE = timedelta(days=1)

DAYS_PER_MONTH = 30.44
DAYS_PER_YEAR = 365.25


def is_due(card: CardRecord, now: datetime) -> bool:
    """
    Check whether a card should be presented.

    New cards are always due. Other cards are due once their next review
    time has passed; a non-new card with no schedule is not due.
    """
    if card.state == CardState.NEW:
        return True
    if card.next_review is None:
        return False
    return card.next_review <= now


def days_overdue(card: CardRecord, now: datetime) -> float:
    """Fractional days past the scheduled review (0 if not yet due)."""
    if card.state == CardState.NEW or card.next_review is None:
        return 0.0
    delta = now - card.next_review
    return max(0.0, delta.total_seconds() / 86400)


def is_overdue(card: CardRecord, now: datetime, grace: timedelta = OVERDUE_GRACE) -> bool:
    """Check whether a card is more than `grace` past its review time."""
    if card.state == CardState.NEW or card.next_review is None:
        return False
    return now - card.next_review > grace


def get_interval_description(interval_days: float) -> str:
    """
    Short human-readable interval.

    Examples:
        0.0069 -> "10m", 4 -> "4d", 45 -> "1mo", 800 -> "2y"
    """
    if interval_days < 1:
        return f"{round_half_up(interval_days * MINUTES_PER_DAY)}m"
    elif interval_days < 30:
        return f"{round_half_up(interval_days)}d"
    elif interval_days < 365:
        return f"{round_half_up(interval_days / DAYS_PER_MONTH)}mo"
    else:
        return f"{round_half_up(interval_days / DAYS_PER_YEAR)}y"
