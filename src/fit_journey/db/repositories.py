"""Data access layer for fit-journey."""

import logging
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

import aiosqlite

from ..errors import ActiveGoalExistsError, NotFoundError
from ..models.goal import Goal, GoalStatus, GoalType, Measurement, validate_weight
from ..models.streak import Streak
from ..utils.time import format_timestamp, parse_timestamp, utcnow
from .engine import connect, get_db_path, transaction

logger = logging.getLogger(__name__)


class GoalRepository:
    """Repository for weight goals."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, goal: Goal) -> int:
        """Create a new goal.

        Raises:
            InvalidInputError: If the goal fails validation.
            ActiveGoalExistsError: If the user already has an active goal.
        """
        goal.validate()
        async with transaction(self.db_path) as db:
            if goal.status == GoalStatus.ACTIVE:
                await self._ensure_no_other_active(db, goal.user_id)
            cursor = await db.execute(
                """
                INSERT INTO goals
                (user_id, goal_type, status, start_date, target_date,
                 starting_weight, target_weight)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    goal.user_id,
                    goal.goal_type.value,
                    goal.status.value,
                    format_timestamp(goal.start_date),
                    format_timestamp(goal.target_date),
                    float(goal.starting_weight),
                    float(goal.target_weight),
                ),
            )
            goal.id = cursor.lastrowid

        logger.info("Created %s goal %s for user %s", goal.goal_type.value, goal.id, goal.user_id)
        return goal.id

    async def get(self, goal_id: int) -> Goal | None:
        """Get a goal by ID."""
        async with connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute("SELECT * FROM goals WHERE id = ?", (goal_id,))
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_goal(row)

    async def get_active(self, user_id: str) -> Goal | None:
        """Get the user's active goal, if any."""
        async with connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM goals WHERE user_id = ? AND status = ? LIMIT 1",
                (user_id, GoalStatus.ACTIVE.value),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_goal(row)

    async def list_by_user(self, user_id: str) -> list[Goal]:
        """List all goals for a user, newest first."""
        async with connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM goals WHERE user_id = ? ORDER BY start_date DESC, id DESC",
                (user_id,),
            )
            rows = await cursor.fetchall()
            return [self._row_to_goal(row) for row in rows]

    async def update(self, goal: Goal) -> None:
        """Update status, target date and target weight of a goal.

        Start date and starting weight are never rewritten.
        """
        if goal.id is None:
            raise ValueError("Goal must have an ID to update")

        goal.validate()
        async with transaction(self.db_path) as db:
            if goal.status == GoalStatus.ACTIVE:
                await self._ensure_no_other_active(db, goal.user_id, exclude_id=goal.id)
            cursor = await db.execute(
                """
                UPDATE goals SET
                    status = ?, target_date = ?, target_weight = ?,
                    updated_at = CURRENT_TIMESTAMP
                WHERE id = ?
                """,
                (
                    goal.status.value,
                    format_timestamp(goal.target_date),
                    float(goal.target_weight),
                    goal.id,
                ),
            )
            if cursor.rowcount == 0:
                raise NotFoundError(f"Goal {goal.id} not found")

    async def _ensure_no_other_active(
        self, db: aiosqlite.Connection, user_id: str, exclude_id: int | None = None
    ) -> None:
        cursor = await db.execute(
            "SELECT id FROM goals WHERE user_id = ? AND status = ? AND id IS NOT ?",
            (user_id, GoalStatus.ACTIVE.value, exclude_id),
        )
        if await cursor.fetchone() is not None:
            raise ActiveGoalExistsError(user_id)

    def _row_to_goal(self, row: aiosqlite.Row) -> Goal:
        """Convert a database row to a Goal."""
        return Goal(
            id=row["id"],
            user_id=row["user_id"],
            goal_type=GoalType(row["goal_type"]),
            status=GoalStatus(row["status"]),
            start_date=parse_timestamp(row["start_date"]),
            target_date=parse_timestamp(row["target_date"]),
            starting_weight=row["starting_weight"],
            target_weight=row["target_weight"],
            created_at=parse_timestamp(row["created_at"]),
            updated_at=parse_timestamp(row["updated_at"]),
        )


class MeasurementRepository:
    """Repository for body-weight measurements."""

    # Samples returned when no limit is given
    DEFAULT_LIMIT = 30

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, measurement: Measurement) -> int:
        """Store a measurement."""
        measurement.weight = validate_weight(measurement.weight)
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                """
                INSERT INTO measurements (user_id, goal_id, date, weight, notes)
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    measurement.user_id,
                    measurement.goal_id,
                    format_timestamp(measurement.date),
                    measurement.weight,
                    measurement.notes,
                ),
            )
            await db.commit()
            measurement.id = cursor.lastrowid
            return measurement.id

    async def list_by_user(self, user_id: str, limit: int = DEFAULT_LIMIT) -> list[Measurement]:
        """Get a user's measurements, most recent first."""
        async with connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                """
                SELECT * FROM measurements
                WHERE user_id = ?
                ORDER BY date DESC, id DESC
                LIMIT ?
                """,
                (user_id, limit),
            )
            rows = await cursor.fetchall()
            return [self._row_to_measurement(row) for row in rows]

    def _row_to_measurement(self, row: aiosqlite.Row) -> Measurement:
        return Measurement(
            id=row["id"],
            user_id=row["user_id"],
            goal_id=row["goal_id"],
            date=parse_timestamp(row["date"]),
            weight=row["weight"],
            notes=row["notes"],
        )


class StreakRepository:
    """Repository for workout streaks.

    All mutations go through :meth:`apply`, which performs the whole
    load, transition and store cycle under the database write lock.
    """

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def get(self, user_id: str) -> Streak | None:
        """Get the stored streak for a user without creating one."""
        async with connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute("SELECT * FROM streaks WHERE user_id = ?", (user_id,))
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_streak(row)

    async def apply(
        self,
        user_id: str,
        transition: Callable[[Streak], Streak],
        log_workout_at: datetime | None = None,
    ) -> tuple[Streak, Streak]:
        """Atomically transform a user's streak.

        Loads the record (creating the initial one if missing), passes it
        to ``transition`` and stores the result if it differs. When
        ``log_workout_at`` is given a workout is logged in the same
        transaction.

        Returns:
            The record before and after the transition.
        """
        async with transaction(self.db_path) as db:
            cursor = await db.execute("SELECT * FROM streaks WHERE user_id = ?", (user_id,))
            row = await cursor.fetchone()
            if row is None:
                cursor = await db.execute(
                    """
                    INSERT INTO streaks (user_id, current_streak, longest_streak, last_workout_date)
                    VALUES (?, 0, 0, NULL)
                    """,
                    (user_id,),
                )
                before = Streak(user_id=user_id, id=cursor.lastrowid)
            else:
                before = self._row_to_streak(row)

            after = transition(before)

            if not after.same_state(before):
                await db.execute(
                    """
                    UPDATE streaks SET
                        current_streak = ?, longest_streak = ?,
                        last_workout_date = ?, updated_at = ?
                    WHERE id = ?
                    """,
                    (
                        after.current_streak,
                        after.longest_streak,
                        format_timestamp(after.last_workout_date),
                        format_timestamp(utcnow()),
                        before.id,
                    ),
                )

            if log_workout_at is not None:
                await db.execute(
                    "INSERT INTO workout_log (user_id, completed_at) VALUES (?, ?)",
                    (user_id, format_timestamp(log_workout_at)),
                )

        return before, after

    async def count_workouts(self, user_id: str, since: datetime | None = None) -> int:
        """Count logged workouts, optionally only those at or after ``since``."""
        async with connect(self.db_path) as db:
            if since is None:
                cursor = await db.execute(
                    "SELECT COUNT(*) FROM workout_log WHERE user_id = ?", (user_id,)
                )
            else:
                cursor = await db.execute(
                    "SELECT COUNT(*) FROM workout_log WHERE user_id = ? AND completed_at >= ?",
                    (user_id, format_timestamp(since)),
                )
            (count,) = await cursor.fetchone()
            return count

    def _row_to_streak(self, row: aiosqlite.Row) -> Streak:
        """Convert a database row to a Streak."""
        return Streak(
            id=row["id"],
            user_id=row["user_id"],
            current_streak=row["current_streak"],
            longest_streak=row["longest_streak"],
            last_workout_date=parse_timestamp(row["last_workout_date"]),
            updated_at=parse_timestamp(row["updated_at"]),
        )
