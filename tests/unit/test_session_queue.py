"""
Unit tests for session queue construction.

Run: pytest tests/unit/test_session_queue.py -v
"""

from datetime import timedelta

from recall.core.config import SchedulerConfig
from recall.core.models import CardRecord, CardState
from recall.study.session_queue import QueueBucket, QueueItem, build_session_queue, classify


def _review_item(key, now, due_offset: timedelta, starred: bool = False) -> QueueItem:
    card = CardRecord(
        card_id=key,
        state=CardState.REVIEW,
        interval=3.0,
        repetitions=2,
        next_review=now + due_offset,
    )
    return QueueItem(key=key, card=card, starred=starred)


def _new_item(key) -> QueueItem:
    return QueueItem(key=key, card=CardRecord.new(key))


class TestClassify:
    def test_buckets(self, now):
        assert classify(_new_item("n"), now) == QueueBucket.NEW
        assert classify(_review_item("d", now, -timedelta(hours=2)), now) == QueueBucket.DUE_TODAY
        assert classify(_review_item("o", now, -timedelta(days=3)), now) == QueueBucket.OVERDUE
        assert (
            classify(_review_item("s", now, -timedelta(hours=2), starred=True), now)
            == QueueBucket.STARRED
        )

    def test_not_due_excluded(self, now):
        assert classify(_review_item("f", now, timedelta(days=1)), now) is None

    def test_starred_not_due_excluded(self, now):
        assert classify(_review_item("f", now, timedelta(days=1), starred=True), now) is None

    def test_suspended_excluded(self, now):
        card = CardRecord(state=CardState.SUSPENDED, next_review=now - timedelta(days=5))
        assert classify(QueueItem(key="x", card=card), now) is None


class TestBuildSessionQueue:
    def test_bucket_order(self, now):
        items = [
            _new_item("new"),
            _review_item("today", now, -timedelta(hours=1)),
            _review_item("overdue", now, -timedelta(days=4)),
            _review_item("star", now, -timedelta(minutes=1), starred=True),
        ]

        queue = build_session_queue(items, now)

        assert [e.key for e in queue] == ["star", "overdue", "today", "new"]
        assert [e.bucket for e in queue] == [
            QueueBucket.STARRED,
            QueueBucket.OVERDUE,
            QueueBucket.DUE_TODAY,
            QueueBucket.NEW,
        ]
        assert queue[-1].is_new

    def test_overdue_most_overdue_first(self, now):
        items = [
            _review_item("2d", now, -timedelta(days=2)),
            _review_item("10d", now, -timedelta(days=10)),
            _review_item("5d", now, -timedelta(days=5)),
        ]
        assert [e.key for e in build_session_queue(items, now)] == ["10d", "5d", "2d"]

    def test_due_today_earliest_first(self, now):
        items = [
            _review_item("1h", now, -timedelta(hours=1)),
            _review_item("20h", now, -timedelta(hours=20)),
            _review_item("5h", now, -timedelta(hours=5)),
        ]
        assert [e.key for e in build_session_queue(items, now)] == ["20h", "5h", "1h"]

    def test_new_cards_keep_input_order(self, now):
        items = [_new_item(k) for k in ("c", "a", "b")]
        assert [e.key for e in build_session_queue(items, now)] == ["c", "a", "b"]

    def test_excludes_future_and_suspended(self, now):
        items = [
            _review_item("future", now, timedelta(days=2)),
            QueueItem(key="sus", card=CardRecord(state=CardState.SUSPENDED)),
            _new_item("new"),
        ]
        assert [e.key for e in build_session_queue(items, now)] == ["new"]

    def test_daily_new_limit(self, now):
        config = SchedulerConfig(daily_new_cards=2)
        items = [_new_item(f"n{i}") for i in range(5)] + [_review_item("r", now, -timedelta(hours=1))]

        queue = build_session_queue(items, now, config)

        assert [e.key for e in queue] == ["r", "n0", "n1"]

    def test_daily_review_limit_includes_starred(self, now):
        config = SchedulerConfig(daily_review_cards=2)
        items = [
            _review_item("star", now, -timedelta(hours=1), starred=True),
            _review_item("overdue", now, -timedelta(days=3)),
            _review_item("today", now, -timedelta(hours=1)),
            _new_item("new"),
        ]

        queue = build_session_queue(items, now, config)

        assert [e.key for e in queue] == ["star", "overdue", "new"]

    def test_zero_new_cards(self, now):
        config = SchedulerConfig(daily_new_cards=0)
        assert build_session_queue([_new_item("n")], now, config) == []

    def test_overall_limit(self, now):
        items = [_review_item(f"r{i}", now, -timedelta(hours=i + 1)) for i in range(3)]
        items += [_new_item("n")]

        queue = build_session_queue(items, now, limit=2)

        assert [e.key for e in queue] == ["r2", "r1"]

    def test_persisted_naive_timestamps(self, now):
        items = [
            QueueItem(
                key="stored",
                card=CardRecord.from_dict(
                    {"state": "review", "interval": 3, "next_review": "2024-02-20T00:00:00"}
                ),
            ),
            _review_item("today", now, -timedelta(hours=1)),
        ]

        queue = build_session_queue(items, now)

        assert [(e.key, e.bucket) for e in queue] == [
            ("stored", QueueBucket.OVERDUE),
            ("today", QueueBucket.DUE_TODAY),
        ]

    def test_empty(self, now):
        assert build_session_queue([], now) == []
