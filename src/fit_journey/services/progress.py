"""Goal progress lookup."""

import logging
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from ..analysis.progress import MEASUREMENT_WINDOW, compute_progress
from ..db.repositories import GoalRepository, MeasurementRepository
from ..errors import ForbiddenError, NotFoundError
from ..models.progress import GoalProgress
from ..utils.time import utcnow

logger = logging.getLogger(__name__)


class ProgressService:
    """Loads a goal and its measurements and reports progress."""

    def __init__(
        self,
        db_path: Path | None = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.goals = GoalRepository(db_path)
        self.measurements = MeasurementRepository(db_path)
        self.clock = clock

    async def get_goal_progress(self, goal_id: int, user_id: str | None = None) -> GoalProgress:
        """Compute progress for a stored goal.

        When ``user_id`` is given the goal must belong to that user.

        Raises:
            NotFoundError: If no goal has this ID.
            ForbiddenError: If the goal belongs to another user.
            InvalidInputError: If the stored goal or measurements are invalid.
        """
        goal = await self.goals.get(goal_id)
        if goal is None:
            raise NotFoundError(f"Goal {goal_id} not found")
        if user_id is not None and goal.user_id != user_id:
            raise ForbiddenError(f"Goal {goal_id} does not belong to user {user_id}")

        measurements = await self.measurements.list_by_user(goal.user_id, limit=MEASUREMENT_WINDOW)
        logger.debug("Computing progress for goal %s from %d measurements", goal_id, len(measurements))
        return compute_progress(goal, measurements, now=self.clock())
