"""Derived goal progress report."""

from dataclasses import dataclass, field
from enum import Enum


class ProgressStatus(str, Enum):
    """Where the current weight sits relative to the linear plan."""

    AHEAD = "ahead"
    ON_TRACK = "on_track"
    BEHIND = "behind"


class Trend(str, Enum):
    """Direction of week-over-week weight change, relative to the goal."""

    IMPROVING = "improving"
    STABLE = "stable"
    DECLINING = "declining"


@dataclass
class GoalProgress:
    """Progress report for a goal. Not persisted.

    ``days_remaining`` is the raw value and goes negative once the
    target date has passed.
    """

    percent_complete: float
    current_weight: float
    target_weight: float
    starting_weight: float
    days_elapsed: int
    days_remaining: int
    expected_weight: float
    status: ProgressStatus
    trend: Trend
    recommendations: list[str] = field(default_factory=list)
    goal_id: int | None = None

    @property
    def is_overdue(self) -> bool:
        return self.days_remaining < 0

    def to_dict(self) -> dict:
        return {
            "goal_id": self.goal_id,
            "percent_complete": self.percent_complete,
            "current_weight": self.current_weight,
            "target_weight": self.target_weight,
            "starting_weight": self.starting_weight,
            "days_elapsed": self.days_elapsed,
            "days_remaining": self.days_remaining,
            "expected_weight": self.expected_weight,
            "status": self.status.value,
            "trend": self.trend.value,
            "recommendations": list(self.recommendations),
            "is_overdue": self.is_overdue,
        }
