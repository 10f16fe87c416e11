"""Request bodies for the JSON API."""

from datetime import datetime

from pydantic import BaseModel, Field

from ..models.goal import GoalStatus, GoalType


class GoalCreate(BaseModel):
    goal_type: GoalType
    target_date: datetime
    starting_weight: float = Field(gt=0)
    target_weight: float = Field(gt=0)
    start_date: datetime | None = None


class GoalUpdate(BaseModel):
    """Fields that may change after a goal is created."""

    status: GoalStatus | None = None
    target_date: datetime | None = None
    target_weight: float | None = Field(default=None, gt=0)


class MeasurementCreate(BaseModel):
    weight: float = Field(gt=0)
    date: datetime | None = None
    notes: str | None = None
    goal_id: int | None = None
