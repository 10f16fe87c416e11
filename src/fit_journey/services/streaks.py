"""Workout streak tracking backed by the database.

Every read and write of a user's streak runs as one ``BEGIN IMMEDIATE``
transaction (see ``db.engine.transaction``), so concurrent workout
completions for the same user are applied one after the other and the
same-day check in ``record_workout`` always sees the previous write.
"""

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime, timedelta, tzinfo
from pathlib import Path

from ..analysis.streaks import evaluate_streak, record_workout
from ..config import get_settings
from ..db.repositories import StreakRepository
from ..models.streak import Streak, StreakReport, StreakStats
from ..utils.time import utcnow

logger = logging.getLogger(__name__)

WEEK = timedelta(days=7)
MONTH = timedelta(days=30)


class StreakService:
    """Read and update per-user workout streaks."""

    def __init__(
        self,
        db_path: Path | None = None,
        clock: Callable[[], datetime] = utcnow,
        tz: tzinfo | None = None,
    ):
        self.repository = StreakRepository(db_path)
        self.clock = clock
        self.tz = tz or get_settings().tzinfo

    async def get_streak(self, user_id: str) -> StreakReport:
        """Current streak report, resetting a broken streak to zero."""
        report: StreakReport | None = None

        def decay(streak: Streak) -> Streak:
            nonlocal report
            updated, report = evaluate_streak(streak, self.clock())
            return updated

        before, after = await self.repository.apply(user_id, decay)

        if after.current_streak != before.current_streak:
            logger.info(
                "Streak for user %s broken, reset from %d to 0",
                user_id,
                before.current_streak,
            )
        return report

    async def on_workout_completed(self, user_id: str) -> StreakReport:
        """Record a completed workout and return the updated report."""
        completed_at = self.clock()

        def complete(streak: Streak) -> Streak:
            return record_workout(streak, completed_at, self.tz)

        before, after = await self.repository.apply(
            user_id, complete, log_workout_at=completed_at
        )

        if after.current_streak > before.current_streak:
            logger.info("Streak for user %s is now %d", user_id, after.current_streak)
        elif after.current_streak < before.current_streak:
            logger.info(
                "Streak for user %s restarted (was %d)", user_id, before.current_streak
            )
        else:
            logger.debug("Workout for user %s on a day already counted", user_id)

        return await self.get_streak(user_id)

    async def get_streak_stats(
        self, user_id: str, report: StreakReport | None = None
    ) -> StreakStats:
        """Streak counters plus workout counts for the last 7 and 30 days.

        Pass the report from a preceding ``get_streak`` call to avoid
        evaluating the streak twice.
        """
        if report is None:
            report = await self.get_streak(user_id)
        now = self.clock()

        total, this_week, this_month = await asyncio.gather(
            self.repository.count_workouts(user_id),
            self.repository.count_workouts(user_id, since=now - WEEK),
            self.repository.count_workouts(user_id, since=now - MONTH),
        )

        return StreakStats(
            current=report.current_streak,
            longest=report.longest_streak,
            total_workouts=total,
            workouts_this_week=this_week,
            workouts_this_month=this_month,
        )
