"""
Core Scheduling Models.

Pure data structures shared by the scheduler, the due-query helpers and the
session queue. Records are immutable: the scheduler returns a new snapshot
instead of mutating the one it was given.

Design:
- CardState: the five review states
- Quality: four-level answer grade
- RuleTag: closed set of audit tags emitted by the scheduler
- CardRecord: review state of one (user, question) pair
- SchedulingResult: audit value describing one scheduling call
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from datetime import datetime
from enum import Enum, IntEnum
from typing import Any

from recall.core.errors import SUSPENDED_STATE, InvalidStateError
from recall.core.units import ensure_utc


class CardState(str, Enum):
    """Review state of a card."""

    NEW = "new"
    LEARNING = "learning"
    REVIEW = "review"
    RELEARNING = "relearning"
    SUSPENDED = SUSPENDED_STATE

    @classmethod
    def parse(cls, value: Any) -> CardState:
        """
        Coerce a persisted value into a CardState.

        Raises:
            InvalidStateError: If the value names no known state
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise InvalidStateError(value) from None


class Quality(IntEnum):
    """Answer quality grade."""

    AGAIN = 0  # Failed recall
    HARD = 1   # Recalled with serious difficulty
    GOOD = 2   # Recalled with normal effort
    EASY = 3   # Recalled effortlessly

    @property
    def label(self) -> str:
        return self.name.capitalize()


class LeechAction(str, Enum):
    """What happens to a card once it crosses the leech threshold."""

    SUSPEND = "suspend"
    TAG = "tag"


class RuleTag(str, Enum):
    """Audit tags describing which scheduling rules fired."""

    # New cards
    EASY_GRADUATION = "easy_graduation"
    ENTERED_LEARNING = "entered_learning"
    AGAIN_RESTART = "again_restart"

    # Learning
    LEARNING_AGAIN_RESTART = "learning_again_restart"
    EASY_GRADUATION_FROM_LEARNING = "easy_graduation_from_learning"
    LEARNING_HARD_REPEAT = "learning_hard_repeat"
    LEARNING_STEP_ADVANCED = "learning_step_advanced"
    GRADUATED_TO_REVIEW = "graduated_to_review"

    # Review
    FAILED_INTERVAL_REDUCED = "failed_interval_reduced_4x"
    EASE_PENALTY_AGAIN = "ease_penalty_again"
    LAPSE_RECORDED = "lapse_recorded"
    LEECH_DETECTED = "leech_detected"
    LEECH_SUSPENDED = "leech_suspended"
    EASE_PENALTY_HARD = "ease_penalty_hard"
    HARD_INTERVAL_MULTIPLIER = "hard_interval_multiplier"
    GOOD_STANDARD_PROGRESSION = "good_standard_progression"
    EASE_BONUS_EASY = "ease_bonus_easy"
    EASY_BONUS_MULTIPLIER = "easy_bonus_multiplier"
    INTERVAL_MODIFIER = "interval_modifier"

    # Relearning
    RELEARNING_AGAIN_REDUCED = "relearning_again_reduced_4x"
    RELEARNING_EASY_GRADUATION = "relearning_easy_graduation"
    RELEARNING_STEP_ADVANCED = "relearning_step_advanced"
    RELEARNING_GRADUATED = "relearning_graduated"

    # Shared
    EASE_BONUS = "ease_bonus"


def _parse_timestamp(value: Any) -> datetime | None:
    if value is None:
        return None
    if not isinstance(value, datetime):
        value = datetime.fromisoformat(str(value))
    # Stored timestamps without an offset were written in UTC
    return ensure_utc(value)


@dataclass(frozen=True)
class CardRecord:
    """
    Review state of one (user, question) pair.

    A record starts in NEW and is only ever replaced by scheduler output.
    Intervals are in days; sub-day learning steps are fractional days.
    """

    state: CardState = CardState.NEW
    current_step: int = 0
    ease_factor: float = 2.5
    interval: float = 1.0
    repetitions: int = 0  # Consecutive successful Review cycles
    lapses: int = 0  # Again grades while in Review

    last_review_date: datetime | None = None
    last_answered: datetime | None = None
    next_review: datetime | None = None

    # Lifetime counters
    times_answered: int = 0
    times_correct: int = 0

    card_id: str | None = None

    @classmethod
    def new(cls, card_id: str | None = None, ease_factor: float = 2.5) -> CardRecord:
        """Create the implicit record of a never-reviewed card."""
        return cls(card_id=card_id, ease_factor=ease_factor)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CardRecord:
        """
        Build a record from its persisted representation.

        Raises:
            InvalidStateError: If the stored state is unknown
        """
        return cls(
            state=CardState.parse(data.get("state", CardState.NEW)),
            current_step=int(data.get("current_step", 0)),
            ease_factor=float(data.get("ease_factor", 2.5)),
            interval=float(data.get("interval", 1.0)),
            repetitions=int(data.get("repetitions", 0)),
            lapses=int(data.get("lapses", 0)),
            last_review_date=_parse_timestamp(data.get("last_review_date")),
            last_answered=_parse_timestamp(data.get("last_answered")),
            next_review=_parse_timestamp(data.get("next_review")),
            times_answered=int(data.get("times_answered", 0)),
            times_correct=int(data.get("times_correct", 0)),
            card_id=data.get("card_id"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dictionary suitable for persistence."""
        data = asdict(self)
        data["state"] = self.state.value
        for key in ("last_review_date", "last_answered", "next_review"):
            if data[key] is not None:
                data[key] = data[key].isoformat()
        return data

    def evolve(self, **changes: Any) -> CardRecord:
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    @property
    def is_suspended(self) -> bool:
        return self.state == CardState.SUSPENDED


@dataclass(frozen=True)
class SchedulingResult:
    """Audit trail of a single scheduling call. Diagnostic only."""

    from_state: CardState
    to_state: CardState
    prev_interval: float
    next_interval: float
    next_review: datetime
    ease_factor: float
    quality: Quality
    response_time_ms: int | None = None
    applied_rules: tuple[RuleTag, ...] = field(default_factory=tuple)
    card_id: str | None = None

    @property
    def graduated(self) -> bool:
        """True when this call moved the card into Review."""
        return self.from_state != CardState.REVIEW and self.to_state == CardState.REVIEW

    def fired(self, tag: RuleTag) -> bool:
        """Check whether a rule tag was applied."""
        return tag in self.applied_rules
