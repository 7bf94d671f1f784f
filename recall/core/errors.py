"""
Scheduler exceptions.

Every error raised by the scheduling core derives from SchedulerError so
callers can catch the whole family at their boundary.
"""

# CardState.SUSPENDED.value; models imports this module
SUSPENDED_STATE = "suspended"


class SchedulerError(Exception):
    """Base class for scheduling core errors."""
    pass


class InvalidStateError(SchedulerError):
    """Raised when a card carries a state the scheduler does not know.

    This indicates corrupted persisted data and is never retried.
    """

    def __init__(self, state: object, message: str | None = None):
        self.state = state
        super().__init__(message or f"Unknown card state: {state!r}")


class CardSuspendedError(InvalidStateError):
    """Raised when a suspended card is passed to the scheduler."""

    def __init__(self, card_id: str | None = None):
        self.card_id = card_id
        label = f" {card_id}" if card_id else ""
        super().__init__(
            SUSPENDED_STATE,
            f"Card{label} is suspended and cannot be scheduled until reinstated",
        )


class InvalidQualityError(SchedulerError):
    """Raised when a quality grade is outside 0..3."""

    def __init__(self, quality: object):
        self.quality = quality
        super().__init__(f"Quality must be an integer 0-3 (Again..Easy), got {quality!r}")


class ConfigValidationError(SchedulerError):
    """Raised when a configuration is internally inconsistent."""
    pass
