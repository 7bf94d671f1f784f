"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
import pytest
import sys
from datetime import UTC, datetime, timedelta
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from recall.core.config import SchedulerConfig
from recall.core.models import CardRecord, CardState
from recall.study.scheduler import CardScheduler

FIXED_NOW = datetime(2024, 3, 1, 9, 0, tzinfo=UTC)


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "smoke: Smoke tests for CLI commands")
    config.addinivalue_line("markers", "slow: Slow tests")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        # Mark based on test file location
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "smoke" in str(item.fspath):
            item.add_marker(pytest.mark.smoke)


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def now():
    """A fixed, timezone-aware current time."""
    return FIXED_NOW


@pytest.fixture
def config():
    """Default scheduler configuration."""
    return SchedulerConfig()


@pytest.fixture
def scheduler(config, now):
    """Scheduler with default configuration and a frozen clock."""
    return CardScheduler(config=config, clock=lambda: now)


@pytest.fixture
def new_card():
    """A never-reviewed card."""
    return CardRecord.new("q-1")


@pytest.fixture
def review_card(now):
    """A mature card: 10 day interval, default ease, no lapses."""
    return CardRecord(
        card_id="q-2",
        state=CardState.REVIEW,
        ease_factor=2.5,
        interval=10.0,
        repetitions=3,
        lapses=0,
        last_review_date=now - timedelta(days=10),
        next_review=now,
        times_answered=5,
        times_correct=5,
    )
