"""
Core Module - Scheduling domain models, configuration and errors.

Nothing in this package performs I/O. Study algorithms in recall.study
import from here rather than redefining shared concepts.
"""

from recall.core.config import (
    DEFAULT_SCHEDULER_CONFIG,
    DEFAULT_TIME_THRESHOLDS,
    GradingThresholds,
    SchedulerConfig,
)
from recall.core.errors import (
    CardSuspendedError,
    ConfigValidationError,
    InvalidQualityError,
    InvalidStateError,
    SchedulerError,
)
from recall.core.models import (
    CardRecord,
    CardState,
    LeechAction,
    Quality,
    RuleTag,
    SchedulingResult,
)

__all__ = [
    # Models
    "CardRecord",
    "CardState",
    "LeechAction",
    "Quality",
    "RuleTag",
    "SchedulingResult",
    # Configuration
    "SchedulerConfig",
    "GradingThresholds",
    "DEFAULT_SCHEDULER_CONFIG",
    "DEFAULT_TIME_THRESHOLDS",
    # Errors
    "SchedulerError",
    "InvalidStateError",
    "CardSuspendedError",
    "InvalidQualityError",
    "ConfigValidationError",
]
