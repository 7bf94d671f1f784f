"""
Configuration settings for the recall scheduler.

Uses Pydantic Settings for environment variable management with .env file support.
Every variable is prefixed with RECALL_ (e.g. RECALL_LEECH_THRESHOLD=6,
RECALL_LEARNING_STEPS='[1, 10, 60]').
"""
from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from recall.core.config import GradingThresholds, SchedulerConfig
from recall.core.models import LeechAction


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="RECALL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Learning Steps (minutes)
    # ========================================
    learning_steps: list[float] = Field(
        default=[1.0, 10.0],
        description="Steps for new cards",
    )
    relearning_steps: list[float] = Field(
        default=[10.0],
        description="Steps for cards that lapsed in review",
    )

    # ========================================
    # Graduation (days)
    # ========================================
    graduating_interval: float = Field(
        default=1.0,
        description="Interval when graduating from learning",
    )
    easy_interval: float = Field(
        default=4.0,
        description="Interval when answering Easy on a new or learning card",
    )

    # ========================================
    # Interval Modifiers
    # ========================================
    hard_interval_multiplier: float = Field(default=1.2, description="Multiplier for Hard answers")
    easy_bonus: float = Field(default=1.3, description="Additional multiplier for Easy answers")
    interval_modifier: float = Field(default=1.0, description="Global interval modifier")

    # ========================================
    # Ease Factor
    # ========================================
    starting_ease_factor: float = Field(default=2.5, description="Initial ease for new cards")
    min_ease_factor: float = Field(default=1.3, description="Ease floor")
    max_ease_factor: float = Field(default=2.5, description="Ease cap")
    again_penalty: float = Field(default=-0.20, description="Ease change on Again")
    hard_penalty: float = Field(default=-0.15, description="Ease change on Hard")
    easy_bonus_ease: float = Field(default=0.15, description="Ease change on Easy")

    # ========================================
    # Daily Limits
    # ========================================
    daily_new_cards: int = Field(default=20, description="New cards per day")
    daily_review_cards: int = Field(default=200, description="Review cards per day")

    # ========================================
    # Leech Control
    # ========================================
    leech_threshold: int = Field(
        default=8,
        description="Lapses before a card is marked as a leech",
    )
    leech_action: LeechAction = Field(
        default=LeechAction.SUSPEND,
        description="What to do with leeches: suspend or tag",
    )

    # ========================================
    # Time-Based Grading (seconds)
    # ========================================
    grading_fast_threshold: float = Field(default=10.0, description="Below this: Easy")
    grading_normal_threshold: float = Field(default=20.0, description="Below this: Good")
    grading_slow_threshold: float = Field(default=40.0, description="Below this: Hard")
    grading_very_slow_threshold: float = Field(default=120.0, description="Answer timeout")

    # ========================================
    # Logging
    # ========================================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging verbosity level",
    )
    log_file: str | None = Field(
        default=None,
        description="Log file path (None for stderr only)",
    )

    # ========================================
    # Helper Methods
    # ========================================
    def get_grading_thresholds(self) -> GradingThresholds:
        """Build validated grading thresholds."""
        return GradingThresholds(
            fast=self.grading_fast_threshold,
            normal=self.grading_normal_threshold,
            slow=self.grading_slow_threshold,
            very_slow=self.grading_very_slow_threshold,
        )

    def get_scheduler_config(self) -> SchedulerConfig:
        """
        Build the validated scheduler configuration.

        Raises:
            ConfigValidationError: If the settings are inconsistent
        """
        return SchedulerConfig(
            learning_steps=tuple(self.learning_steps),
            relearning_steps=tuple(self.relearning_steps),
            graduating_interval=self.graduating_interval,
            easy_interval=self.easy_interval,
            hard_interval_multiplier=self.hard_interval_multiplier,
            easy_bonus=self.easy_bonus,
            interval_modifier=self.interval_modifier,
            starting_ease_factor=self.starting_ease_factor,
            min_ease_factor=self.min_ease_factor,
            max_ease_factor=self.max_ease_factor,
            again_penalty=self.again_penalty,
            hard_penalty=self.hard_penalty,
            easy_bonus_ease=self.easy_bonus_ease,
            daily_new_cards=self.daily_new_cards,
            daily_review_cards=self.daily_review_cards,
            leech_threshold=self.leech_threshold,
            leech_action=self.leech_action,
            grading=self.get_grading_thresholds(),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
