"""Weight goal and body-weight measurement models."""

import math
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from ..errors import InvalidInputError
from ..utils.time import ensure_aware, parse_timestamp, utcnow


class GoalType(str, Enum):
    """What the user is trying to do with their body weight."""

    FAT_LOSS = "fat_loss"
    MUSCLE_BUILDING = "muscle_building"
    RECOMP = "recomp"


class GoalStatus(str, Enum):
    """Goal lifecycle status."""

    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"
    ARCHIVED = "archived"


def validate_weight(weight: float, label: str = "weight") -> float:
    """Return ``weight`` as a float, rejecting non-positive or non-finite values."""
    try:
        value = float(weight)
    except (TypeError, ValueError):
        raise InvalidInputError(f"{label} must be a number, got {weight!r}") from None
    if not math.isfinite(value) or value <= 0:
        raise InvalidInputError(f"{label} must be a positive number, got {weight!r}")
    return value


@dataclass
class Goal:
    """A user's weight objective over a date range.

    ``start_date`` and ``starting_weight`` are fixed once the goal is
    stored; only the status, target date and target weight may change.
    """

    user_id: str
    goal_type: GoalType
    start_date: datetime
    target_date: datetime
    starting_weight: float
    target_weight: float
    status: GoalStatus = GoalStatus.ACTIVE
    id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self):
        self.goal_type = GoalType(self.goal_type)
        self.status = GoalStatus(self.status)
        self.start_date = ensure_aware(self.start_date)
        self.target_date = ensure_aware(self.target_date)

    @property
    def is_recomp(self) -> bool:
        return self.starting_weight == self.target_weight

    def validate(self) -> None:
        """Raise InvalidInputError if the goal cannot be tracked."""
        validate_weight(self.starting_weight, "starting_weight")
        validate_weight(self.target_weight, "target_weight")
        if self.target_date < self.start_date:
            raise InvalidInputError(
                f"target_date {self.target_date.isoformat()} is before "
                f"start_date {self.start_date.isoformat()}"
            )

    def pause(self) -> None:
        """Pause an active goal."""
        if self.status != GoalStatus.ACTIVE:
            raise InvalidInputError(f"Cannot pause a goal that is {self.status.value}")
        self.status = GoalStatus.PAUSED

    def resume(self) -> None:
        """Resume a paused goal."""
        if self.status != GoalStatus.PAUSED:
            raise InvalidInputError(f"Cannot resume a goal that is {self.status.value}")
        self.status = GoalStatus.ACTIVE

    def complete(self) -> None:
        self.status = GoalStatus.COMPLETED

    def archive(self) -> None:
        self.status = GoalStatus.ARCHIVED

    def transition_to(self, status: GoalStatus) -> None:
        """Move to ``status`` using the matching lifecycle method."""
        status = GoalStatus(status)
        if status == self.status:
            return
        transitions = {
            GoalStatus.ACTIVE: self.resume,
            GoalStatus.PAUSED: self.pause,
            GoalStatus.COMPLETED: self.complete,
            GoalStatus.ARCHIVED: self.archive,
        }
        transitions[status]()

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "goal_type": self.goal_type.value,
            "status": self.status.value,
            "start_date": self.start_date.isoformat(),
            "target_date": self.target_date.isoformat(),
            "starting_weight": self.starting_weight,
            "target_weight": self.target_weight,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Goal":
        """Create from dictionary."""
        return cls(
            id=data.get("id"),
            user_id=data["user_id"],
            goal_type=GoalType(data["goal_type"]),
            status=GoalStatus(data.get("status", "active")),
            start_date=parse_timestamp(data["start_date"]),
            target_date=parse_timestamp(data["target_date"]),
            starting_weight=float(data["starting_weight"]),
            target_weight=float(data["target_weight"]),
            created_at=parse_timestamp(data.get("created_at")),
            updated_at=parse_timestamp(data.get("updated_at")),
        )

    def get_status_display(self) -> str:
        """Get a human-readable status string."""
        status_map = {
            GoalStatus.ACTIVE: "In Progress",
            GoalStatus.PAUSED: "Paused",
            GoalStatus.COMPLETED: "Completed",
            GoalStatus.ARCHIVED: "Archived",
        }
        return status_map[self.status]


@dataclass
class Measurement:
    """A single dated body-weight sample."""

    user_id: str
    weight: float
    date: datetime = field(default_factory=utcnow)
    goal_id: int | None = None
    notes: str | None = None
    id: int | None = None

    def __post_init__(self):
        self.date = ensure_aware(self.date)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "goal_id": self.goal_id,
            "date": self.date.isoformat(),
            "weight": self.weight,
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Measurement":
        return cls(
            id=data.get("id"),
            user_id=data["user_id"],
            goal_id=data.get("goal_id"),
            date=parse_timestamp(data["date"]),
            weight=float(data["weight"]),
            notes=data.get("notes"),
        )
