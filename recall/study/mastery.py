"""
Per-card mastery classification.

Buckets a card into new / apprentice / guru / master from its spaced
repetition variables, for question stats and browse views.
"""

from __future__ import annotations

from enum import Enum

from recall.core.models import CardRecord
from recall.core.units import round_half_up

# Thresholds for the upper levels
MASTERY_MIN_REPETITIONS = 3
MASTERY_MIN_EASE = 2.3
MASTER_MIN_INTERVAL = 21  # days


class MasteryLevel(str, Enum):
    """Mastery level of a single card."""

    NEW = "new"
    APPRENTICE = "apprentice"
    GURU = "guru"
    MASTER = "master"

    @property
    def display_name(self) -> str:
        """Human-readable name."""
        return self.value.title()

    @property
    def emoji(self) -> str:
        """Status glyph for CLI display."""
        return {
            MasteryLevel.NEW: "○",
            MasteryLevel.APPRENTICE: "◔",
            MasteryLevel.GURU: "◕",
            MasteryLevel.MASTER: "●",
        }[self]

    @property
    def color(self) -> str:
        """Rich color for CLI display."""
        return {
            MasteryLevel.NEW: "dim",
            MasteryLevel.APPRENTICE: "yellow",
            MasteryLevel.GURU: "cyan",
            MasteryLevel.MASTER: "green",
        }[self]


def classify_mastery(card: CardRecord) -> MasteryLevel:
    """
    Classify a card's mastery.

    Args:
        card: Review record

    Returns:
        MasteryLevel
    """
    if card.repetitions == 0:
        return MasteryLevel.NEW

    established = (
        card.repetitions >= MASTERY_MIN_REPETITIONS
        and card.ease_factor >= MASTERY_MIN_EASE
    )
    if established and card.interval >= MASTER_MIN_INTERVAL:
        return MasteryLevel.MASTER
    if established:
        return MasteryLevel.GURU
    return MasteryLevel.APPRENTICE


def mastery_percentage(card: CardRecord) -> int:
    """Lifetime accuracy as a whole percentage (0 when never answered)."""
    if card.times_answered == 0:
        return 0
    return round_half_up(card.times_correct / card.times_answered * 100)
