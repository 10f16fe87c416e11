"""Data models for fit-journey."""

from .goal import Goal, GoalStatus, GoalType, Measurement
from .progress import GoalProgress, ProgressStatus, Trend
from .streak import Streak, StreakReport, StreakStats, StreakStatus

__all__ = [
    "Goal",
    "GoalProgress",
    "GoalStatus",
    "GoalType",
    "Measurement",
    "ProgressStatus",
    "Streak",
    "StreakReport",
    "StreakStats",
    "StreakStatus",
    "Trend",
]
