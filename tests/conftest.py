"""Pytest configuration and fixtures."""

import asyncio
import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from fit_journey.config import get_settings
from fit_journey.db import init_db
from fit_journey.models.goal import Goal, GoalType, Measurement

NOW = datetime(2026, 2, 15, tzinfo=timezone.utc)


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime = NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


def make_goal(
    goal_type: GoalType = GoalType.FAT_LOSS,
    starting_weight: float = 80.0,
    target_weight: float = 75.0,
    start_date: datetime = datetime(2026, 1, 1, tzinfo=timezone.utc),
    target_date: datetime = datetime(2026, 4, 1, tzinfo=timezone.utc),
    user_id: str = "user-1",
    **kwargs,
) -> Goal:
    return Goal(
        user_id=user_id,
        goal_type=goal_type,
        starting_weight=starting_weight,
        target_weight=target_weight,
        start_date=start_date,
        target_date=target_date,
        **kwargs,
    )


def make_measurements(
    weights: list[float],
    newest: datetime = NOW,
    user_id: str = "user-1",
) -> list[Measurement]:
    """Daily measurements, newest first, ``weights[0]`` taken at ``newest``."""
    return [
        Measurement(user_id=user_id, weight=w, date=newest - timedelta(days=i))
        for i, w in enumerate(weights)
    ]


@pytest.fixture
def temp_db_path():
    """Create a temporary database path."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "test.db"


@pytest.fixture
def db_path(temp_db_path):
    """A temporary database with the schema created."""
    asyncio.run(init_db(temp_db_path))
    return temp_db_path


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture(autouse=True)
def quiet_settings(monkeypatch):
    """Keep log output out of captured CLI output and reset cached settings."""
    monkeypatch.setenv("FIT_JOURNEY_LOG_LEVEL", "WARNING")
    monkeypatch.setenv("FIT_JOURNEY_TIMEZONE", "UTC")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
