"""
Scheduler Configuration.

Immutable, validated parameter sets for the scheduling engine and the
time-based grading heuristic. Both are pydantic models with frozen
instances; cross-field checks raise ConfigValidationError at construction
so the scheduler can never run with an inconsistent configuration.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from recall.core.errors import ConfigValidationError
from recall.core.models import LeechAction


class GradingThresholds(BaseModel):
    """Response-time thresholds (seconds) for suggesting a grade."""

    model_config = ConfigDict(frozen=True)

    fast: float = Field(default=10.0, description="Below this: Easy")
    normal: float = Field(default=20.0, description="Below this: Good")
    slow: float = Field(default=40.0, description="Below this: Hard, otherwise Again")
    very_slow: float = Field(default=120.0, description="Answer timeout")

    @model_validator(mode="after")
    def check_ordering(self) -> GradingThresholds:
        values = [self.fast, self.normal, self.slow, self.very_slow]
        if any(v <= 0 for v in values):
            raise ConfigValidationError(f"Grading thresholds must be positive, got {values}")
        if any(a >= b for a, b in zip(values, values[1:])):
            raise ConfigValidationError(
                f"Grading thresholds must be strictly increasing "
                f"(fast < normal < slow < very_slow), got {values}"
            )
        return self


DEFAULT_TIME_THRESHOLDS = GradingThresholds()


class SchedulerConfig(BaseModel):
    """
    Parameters controlling every threshold, multiplier and step table
    used by the scheduler.

    Learning and relearning steps are in minutes; intervals in days.
    Ease adjustments are absolute deltas (-0.20 means 2.5 -> 2.3).
    """

    model_config = ConfigDict(frozen=True)

    # Learning steps (minutes)
    learning_steps: tuple[float, ...] = (1.0, 10.0)
    relearning_steps: tuple[float, ...] = (10.0,)

    # Graduation (days)
    graduating_interval: float = 1.0
    easy_interval: float = 4.0

    # Interval multipliers
    hard_interval_multiplier: float = 1.2
    easy_bonus: float = 1.3
    interval_modifier: float = 1.0

    # Ease factor bounds
    starting_ease_factor: float = 2.5
    min_ease_factor: float = 1.3
    max_ease_factor: float = 2.5

    # Ease factor adjustments
    again_penalty: float = -0.20
    hard_penalty: float = -0.15
    easy_bonus_ease: float = 0.15

    # Daily limits
    daily_new_cards: int = 20
    daily_review_cards: int = 200

    # Leech control
    leech_threshold: int = 8
    leech_action: LeechAction = LeechAction.SUSPEND

    # Time-based grading
    grading: GradingThresholds = Field(default_factory=GradingThresholds)

    @model_validator(mode="after")
    def check_consistency(self) -> SchedulerConfig:
        if self.min_ease_factor > self.max_ease_factor:
            raise ConfigValidationError(
                f"min_ease_factor ({self.min_ease_factor}) exceeds "
                f"max_ease_factor ({self.max_ease_factor})"
            )
        if not self.min_ease_factor <= self.starting_ease_factor <= self.max_ease_factor:
            raise ConfigValidationError(
                f"starting_ease_factor ({self.starting_ease_factor}) outside "
                f"[{self.min_ease_factor}, {self.max_ease_factor}]"
            )

        for name in ("learning_steps", "relearning_steps"):
            steps = getattr(self, name)
            if not steps:
                raise ConfigValidationError(f"{name} must not be empty")
            if any(step <= 0 for step in steps):
                raise ConfigValidationError(f"{name} must be positive, got {list(steps)}")

        for name in (
            "graduating_interval",
            "easy_interval",
            "hard_interval_multiplier",
            "easy_bonus",
            "interval_modifier",
            "min_ease_factor",
        ):
            if getattr(self, name) <= 0:
                raise ConfigValidationError(f"{name} must be positive, got {getattr(self, name)}")

        if self.again_penalty > 0 or self.hard_penalty > 0:
            raise ConfigValidationError("again_penalty and hard_penalty must not be positive")
        if self.easy_bonus_ease < 0:
            raise ConfigValidationError("easy_bonus_ease must not be negative")
        if self.leech_threshold < 1:
            raise ConfigValidationError(f"leech_threshold must be at least 1, got {self.leech_threshold}")
        if self.daily_new_cards < 0 or self.daily_review_cards < 0:
            raise ConfigValidationError("Daily limits must not be negative")
        return self


DEFAULT_SCHEDULER_CONFIG = SchedulerConfig()
