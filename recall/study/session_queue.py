"""
Session Queue - Priority ordering of due cards.

Builds the review queue for a study session from the cards a learner owns:
1. Starred cards (learner-flagged, highest priority)
2. Overdue reviews (more than a day past due)
3. Reviews due today
4. New cards (progressive introduction)

New cards are capped by daily_new_cards, everything else by
daily_review_cards. Suspended and not-yet-due cards are left out.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from loguru import logger

from recall.core.config import DEFAULT_SCHEDULER_CONFIG, SchedulerConfig
from recall.core.models import CardRecord, CardState
from recall.study.due import days_overdue, is_due, is_overdue


class QueueBucket(str, Enum):
    """Priority bucket, in presentation order."""

    STARRED = "starred"
    OVERDUE = "overdue"
    DUE_TODAY = "due_today"
    NEW = "new"


BUCKET_ORDER = list(QueueBucket)


@dataclass(frozen=True)
class QueueItem:
    """A candidate card supplied by the caller."""

    key: Hashable  # Caller's identifier, e.g. (user_id, question_id)
    card: CardRecord
    starred: bool = False


@dataclass(frozen=True)
class QueueEntry:
    """A card selected for the session."""

    key: Hashable
    card: CardRecord
    bucket: QueueBucket

    @property
    def is_new(self) -> bool:
        return self.card.state == CardState.NEW


def classify(item: QueueItem, now: datetime) -> QueueBucket | None:
    """Pick the bucket for an item, or None if it should not be shown."""
    card = item.card
    if card.state == CardState.SUSPENDED or not is_due(card, now):
        return None
    if item.starred:
        return QueueBucket.STARRED
    if card.state == CardState.NEW:
        return QueueBucket.NEW
    if is_overdue(card, now):
        return QueueBucket.OVERDUE
    return QueueBucket.DUE_TODAY


def build_session_queue(
    items: Iterable[QueueItem],
    now: datetime,
    config: SchedulerConfig = DEFAULT_SCHEDULER_CONFIG,
    limit: int | None = None,
) -> list[QueueEntry]:
    """
    Select and order cards for a study session.

    Args:
        items: Candidate cards with caller keys
        now: Current time
        config: Supplies the daily new/review limits
        limit: Optional overall cap on the queue length

    Returns:
        Ordered list of QueueEntry
    """
    buckets: dict[QueueBucket, list[QueueItem]] = {bucket: [] for bucket in BUCKET_ORDER}
    for item in items:
        bucket = classify(item, now)
        if bucket is not None:
            buckets[bucket].append(item)

    # Most overdue first, then earliest due
    buckets[QueueBucket.OVERDUE].sort(key=lambda i: days_overdue(i.card, now), reverse=True)
    buckets[QueueBucket.DUE_TODAY].sort(key=lambda i: i.card.next_review)

    queue: list[QueueEntry] = []
    new_count = 0
    review_count = 0

    for bucket in BUCKET_ORDER:
        for item in buckets[bucket]:
            if limit is not None and len(queue) >= limit:
                break
            if item.card.state == CardState.NEW:
                if new_count >= config.daily_new_cards:
                    continue
                new_count += 1
            else:
                if review_count >= config.daily_review_cards:
                    continue
                review_count += 1
            queue.append(QueueEntry(key=item.key, card=item.card, bucket=bucket))

    logger.debug(
        f"Session queue: {len(queue)} cards "
        f"({review_count} reviews, {new_count} new) from "
        + ", ".join(f"{b.value}={len(buckets[b])}" for b in BUCKET_ORDER)
    )

    return queue
