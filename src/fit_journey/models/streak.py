"""Workout streak record and derived reports."""

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum

from ..utils.time import parse_timestamp


class StreakStatus(str, Enum):
    """Streak health as seen at read time."""

    ON_FIRE = "on_fire"
    ACTIVE = "active"
    AT_RISK = "at_risk"
    BROKEN = "broken"


@dataclass
class Streak:
    """Persisted per-user workout consistency counter."""

    user_id: str
    current_streak: int = 0
    longest_streak: int = 0
    last_workout_date: datetime | None = None
    id: int | None = None
    updated_at: datetime | None = None

    def copy(self, **changes) -> "Streak":
        return replace(self, **changes)

    def same_state(self, other: "Streak") -> bool:
        """True if the counters and timestamp match ``other``."""
        return (
            self.current_streak == other.current_streak
            and self.longest_streak == other.longest_streak
            and self.last_workout_date == other.last_workout_date
        )

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "current_streak": self.current_streak,
            "longest_streak": self.longest_streak,
            "last_workout_date": (
                self.last_workout_date.isoformat() if self.last_workout_date else None
            ),
        }

    @classmethod
    def from_dict(cls, data: dict, id: int | None = None) -> "Streak":
        return cls(
            id=id,
            user_id=data["user_id"],
            current_streak=data.get("current_streak", 0),
            longest_streak=data.get("longest_streak", 0),
            last_workout_date=parse_timestamp(data.get("last_workout_date")),
        )


@dataclass
class StreakReport:
    """Normalized view of a streak returned to callers."""

    current_streak: int
    longest_streak: int
    last_workout_date: datetime | None
    is_streak_active: bool
    streak_status: StreakStatus
    hours_until_break: float | None
    message: str

    def to_dict(self) -> dict:
        return {
            "current_streak": self.current_streak,
            "longest_streak": self.longest_streak,
            "last_workout_date": (
                self.last_workout_date.isoformat() if self.last_workout_date else None
            ),
            "is_streak_active": self.is_streak_active,
            "streak_status": self.streak_status.value,
            "hours_until_break": self.hours_until_break,
            "message": self.message,
        }


@dataclass
class StreakStats:
    """Streak counters plus workout totals."""

    current: int
    longest: int
    total_workouts: int
    workouts_this_week: int
    workouts_this_month: int

    def to_dict(self) -> dict:
        return {
            "current": self.current,
            "longest": self.longest,
            "total_workouts": self.total_workouts,
            "workouts_this_week": self.workouts_this_week,
            "workouts_this_month": self.workouts_this_month,
        }
