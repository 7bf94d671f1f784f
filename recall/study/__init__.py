"""
Study Module - Scheduling algorithms.

Provides:
- CardScheduler: the review state machine
- suggest_grade_from_time: latency-based grade suggestion
- Due queries and interval formatting
- Session queue ordering with daily limits
- Mastery classification and legacy SM-2
"""

from recall.study.due import days_overdue, get_interval_description, is_due, is_overdue
from recall.study.grading import suggest_grade_from_time
from recall.study.mastery import MasteryLevel, classify_mastery, mastery_percentage
from recall.study.scheduler import CardScheduler, coerce_quality
from recall.study.session_queue import (
    QueueBucket,
    QueueEntry,
    QueueItem,
    build_session_queue,
)
from recall.study.sm2 import SM2Review, calculate_next_review

__all__ = [
    "CardScheduler",
    "coerce_quality",
    "suggest_grade_from_time",
    "is_due",
    "is_overdue",
    "days_overdue",
    "get_interval_description",
    "QueueBucket",
    "QueueItem",
    "QueueEntry",
    "build_session_queue",
    "MasteryLevel",
    "classify_mastery",
    "mastery_percentage",
    "SM2Review",
    "calculate_next_review",
]
