"""
Card Scheduler - Quality-graded review state machine.

Implements the SM-2 derived scheduler used for quiz questions:
- New cards pass through short learning steps (minutes) before graduating
- Review cards grow their interval by the ease factor
- Lapses drop the interval by 4x (not a full reset) and move the card
  through relearning steps
- Cards that lapse too often are flagged as leeches and may be suspended

State machine:
    NEW --(Easy)--> REVIEW
    NEW --(Again/Hard/Good)--> LEARNING
    LEARNING --(steps done / Easy)--> REVIEW
    REVIEW --(Again)--> RELEARNING | SUSPENDED (leech)
    RELEARNING --(steps done / Easy)--> REVIEW

The scheduler is pure: it never mutates the record it receives and performs
no I/O. Persisting the returned record atomically is the caller's job.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

from loguru import logger

from recall.core.config import DEFAULT_SCHEDULER_CONFIG, SchedulerConfig
from recall.core.errors import CardSuspendedError, InvalidQualityError
from recall.core.models import (
    CardRecord,
    CardState,
    LeechAction,
    Quality,
    RuleTag,
    SchedulingResult,
)
from recall.core.units import add_days, minutes_to_days, round_half_up

Clock = Callable[[], datetime]

# Review lapses divide the interval by this factor
LAPSE_INTERVAL_DIVISOR = 4


def utc_now() -> datetime:
    """Default clock."""
    return datetime.now(UTC)


def coerce_quality(quality: Any) -> Quality:
    """
    Validate a caller-supplied grade.

    Raises:
        InvalidQualityError: If quality is not an integer 0-3
    """
    if isinstance(quality, bool) or not isinstance(quality, int):
        raise InvalidQualityError(quality)
    try:
        return Quality(quality)
    except ValueError:
        raise InvalidQualityError(quality) from None


class CardScheduler:
    """
    Spaced repetition scheduler for a single card at a time.

    Configuration and clock are injected so that per-deck tuning and
    deterministic tests need no global state.
    """

    def __init__(
        self,
        config: SchedulerConfig | None = None,
        clock: Clock | None = None,
    ):
        """
        Initialize the scheduler.

        Args:
            config: Scheduler parameters (uses defaults if None)
            clock: Callable returning the current aware datetime
        """
        self.config = config or DEFAULT_SCHEDULER_CONFIG
        self.clock = clock or utc_now
        self._handlers = {
            CardState.NEW: self._handle_new,
            CardState.LEARNING: self._handle_learning,
            CardState.REVIEW: self._handle_review,
            CardState.RELEARNING: self._handle_relearning,
        }

    def schedule(
        self,
        card: CardRecord,
        quality: Quality | int,
        response_time_ms: int | None = None,
        now: datetime | None = None,
    ) -> tuple[CardRecord, SchedulingResult]:
        """
        Process an answer and compute the card's next review.

        Args:
            card: Current review record
            quality: Answer grade (0=Again .. 3=Easy)
            response_time_ms: Informational, copied into the audit trail
            now: Override the injected clock for this call

        Returns:
            (updated record, audit result)

        Raises:
            InvalidStateError: Card state is unknown (corrupt data)
            CardSuspendedError: Card is suspended
            InvalidQualityError: Grade outside 0..3
        """
        state = CardState.parse(card.state)
        if state == CardState.SUSPENDED:
            logger.warning(f"Refusing to schedule suspended card {card.card_id}")
            raise CardSuspendedError(card.card_id)
        handler = self._handlers[state]
        if card.state is not state:
            card = card.evolve(state=state)

        grade = coerce_quality(quality)
        if response_time_ms is not None and response_time_ms < 0:
            raise ValueError(f"response_time_ms must be >= 0, got {response_time_ms}")

        now = now or self.clock()
        applied: list[RuleTag] = []

        changes = handler(card, grade, applied)

        updated = card.evolve(
            **changes,
            times_answered=card.times_answered + 1,
            times_correct=card.times_correct + (1 if grade >= Quality.GOOD else 0),
            last_answered=now,
            last_review_date=now,
        )
        updated = updated.evolve(
            ease_factor=self._clamp_ease(updated.ease_factor),
            next_review=add_days(now, updated.interval),
        )

        result = SchedulingResult(
            from_state=state,
            to_state=updated.state,
            prev_interval=card.interval,
            next_interval=updated.interval,
            next_review=updated.next_review,
            ease_factor=updated.ease_factor,
            quality=grade,
            response_time_ms=response_time_ms,
            applied_rules=tuple(applied),
            card_id=card.card_id,
        )

        logger.debug(
            f"Scheduled {card.card_id or '<card>'}: {state.value} -> {updated.state.value}, "
            f"grade={grade.label}, interval={card.interval:g} -> {updated.interval:g}d, "
            f"ease={updated.ease_factor:.2f}, rules={[tag.value for tag in applied]}"
        )

        return updated, result

    # =========================================================================
    # State handlers
    #
    # Each handler returns the fields to change and appends the rules it
    # applied. Counters and timestamps are handled by schedule().
    # =========================================================================

    def _handle_new(
        self, card: CardRecord, quality: Quality, applied: list[RuleTag]
    ) -> dict[str, Any]:
        if quality == Quality.EASY:
            applied.extend([RuleTag.EASY_GRADUATION, RuleTag.EASE_BONUS])
            return self._easy_graduation()

        # Again, Hard and Good all start the learning steps
        applied.append(RuleTag.AGAIN_RESTART if quality == Quality.AGAIN else RuleTag.ENTERED_LEARNING)
        return {
            "state": CardState.LEARNING,
            "current_step": 0,
            "interval": minutes_to_days(self.config.learning_steps[0]),
        }

    def _handle_learning(
        self, card: CardRecord, quality: Quality, applied: list[RuleTag]
    ) -> dict[str, Any]:
        steps = self.config.learning_steps

        if quality == Quality.AGAIN:
            applied.append(RuleTag.LEARNING_AGAIN_RESTART)
            return {"current_step": 0, "interval": minutes_to_days(steps[0])}

        if quality == Quality.EASY:
            applied.extend([RuleTag.EASY_GRADUATION_FROM_LEARNING, RuleTag.EASE_BONUS])
            return self._easy_graduation()

        if quality == Quality.HARD and card.current_step > 0:
            # Repeat the current step; an out-of-range step repeats the last one
            step = min(card.current_step, len(steps) - 1)
            applied.append(RuleTag.LEARNING_HARD_REPEAT)
            return {"interval": minutes_to_days(steps[step])}

        # Good, or Hard on the first step
        next_step = card.current_step + 1
        if next_step >= len(steps):
            applied.append(RuleTag.GRADUATED_TO_REVIEW)
            return {
                "state": CardState.REVIEW,
                "current_step": next_step,
                "interval": self.config.graduating_interval,
                "ease_factor": self.config.starting_ease_factor,
                "repetitions": 1,
            }

        applied.append(RuleTag.LEARNING_STEP_ADVANCED)
        return {"current_step": next_step, "interval": minutes_to_days(steps[next_step])}

    def _handle_review(
        self, card: CardRecord, quality: Quality, applied: list[RuleTag]
    ) -> dict[str, Any]:
        config = self.config
        old_interval = card.interval

        if quality == Quality.AGAIN:
            lapses = card.lapses + 1
            changes: dict[str, Any] = {
                "state": CardState.RELEARNING,
                "current_step": 0,
                "lapses": lapses,
                "ease_factor": max(config.min_ease_factor, card.ease_factor + config.again_penalty),
                "interval": max(1.0, old_interval / LAPSE_INTERVAL_DIVISOR),
            }
            applied.extend(
                [RuleTag.FAILED_INTERVAL_REDUCED, RuleTag.EASE_PENALTY_AGAIN, RuleTag.LAPSE_RECORDED]
            )

            if lapses >= config.leech_threshold:
                applied.append(RuleTag.LEECH_DETECTED)
                logger.info(f"Leech detected: {card.card_id or '<card>'} has {lapses} lapses")
                if config.leech_action == LeechAction.SUSPEND:
                    changes["state"] = CardState.SUSPENDED
                    applied.append(RuleTag.LEECH_SUSPENDED)
                    logger.info(f"Suspended leech {card.card_id or '<card>'}")
            return changes

        ease = card.ease_factor
        if quality == Quality.HARD:
            ease = max(config.min_ease_factor, ease + config.hard_penalty)
            interval = max(1, round_half_up(old_interval * config.hard_interval_multiplier))
            applied.extend([RuleTag.EASE_PENALTY_HARD, RuleTag.HARD_INTERVAL_MULTIPLIER])
        elif quality == Quality.EASY:
            ease = min(config.max_ease_factor, ease + config.easy_bonus_ease)
            interval = round_half_up(old_interval * ease * config.easy_bonus)
            applied.extend([RuleTag.EASE_BONUS_EASY, RuleTag.EASY_BONUS_MULTIPLIER])
        else:
            interval = round_half_up(old_interval * ease)
            applied.append(RuleTag.GOOD_STANDARD_PROGRESSION)

        interval = max(1, round_half_up(interval * config.interval_modifier))
        if config.interval_modifier != 1.0:
            applied.append(RuleTag.INTERVAL_MODIFIER)

        return {
            "repetitions": card.repetitions + 1,
            "ease_factor": ease,
            "interval": float(interval),
        }

    def _handle_relearning(
        self, card: CardRecord, quality: Quality, applied: list[RuleTag]
    ) -> dict[str, Any]:
        config = self.config
        steps = config.relearning_steps

        if quality == Quality.AGAIN:
            # Compounds with the reduction applied on the lapse
            applied.append(RuleTag.RELEARNING_AGAIN_REDUCED)
            return {
                "current_step": 0,
                "interval": max(1.0, card.interval / LAPSE_INTERVAL_DIVISOR),
            }

        if quality == Quality.EASY:
            applied.extend([RuleTag.RELEARNING_EASY_GRADUATION, RuleTag.EASE_BONUS])
            return {
                "state": CardState.REVIEW,
                "interval": float(max(1, round_half_up(card.interval * config.easy_bonus))),
                "ease_factor": min(config.max_ease_factor, card.ease_factor + config.easy_bonus_ease),
            }

        # Good and Hard both advance
        next_step = card.current_step + 1
        if next_step >= len(steps):
            applied.append(RuleTag.RELEARNING_GRADUATED)
            return {
                "state": CardState.REVIEW,
                "current_step": next_step,
                # Keep the reduced interval; never graduate below a day
                "interval": max(1.0, card.interval),
            }

        applied.append(RuleTag.RELEARNING_STEP_ADVANCED)
        return {"current_step": next_step, "interval": minutes_to_days(steps[next_step])}

    # =========================================================================
    # Helpers
    # =========================================================================

    def _easy_graduation(self) -> dict[str, Any]:
        """Changes for skipping straight to Review with the easy interval."""
        config = self.config
        return {
            "state": CardState.REVIEW,
            "interval": config.easy_interval,
            "ease_factor": min(config.max_ease_factor, config.starting_ease_factor + config.easy_bonus_ease),
            "repetitions": 1,
        }

    def _clamp_ease(self, ease: float) -> float:
        """Keep legacy records inside the configured ease bounds."""
        return min(self.config.max_ease_factor, max(self.config.min_ease_factor, ease))
