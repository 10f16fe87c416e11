"""Database layer for fit-journey."""

from .engine import get_db_path, init_db, transaction
from .repositories import (
    GoalRepository,
    MeasurementRepository,
    StreakRepository,
)

__all__ = [
    "get_db_path",
    "GoalRepository",
    "init_db",
    "MeasurementRepository",
    "StreakRepository",
    "transaction",
]
