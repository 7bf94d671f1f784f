"""
recall - spaced repetition scheduling engine for quiz study.

Quick start:
    from recall import CardRecord, CardScheduler, Quality

    scheduler = CardScheduler()
    card, result = scheduler.schedule(CardRecord.new("q-42"), Quality.GOOD)
"""

from recall.core import (
    CardRecord,
    CardState,
    Quality,
    SchedulerConfig,
    SchedulingResult,
)
from recall.study import CardScheduler, get_interval_description, is_due, suggest_grade_from_time

__version__ = "1.0.0"

__all__ = [
    "CardRecord",
    "CardState",
    "Quality",
    "SchedulerConfig",
    "SchedulingResult",
    "CardScheduler",
    "suggest_grade_from_time",
    "is_due",
    "get_interval_description",
]
