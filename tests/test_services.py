"""Tests for the progress and streak services."""

import asyncio
from datetime import timezone

import pytest

from conftest import NOW, FakeClock, make_goal, make_measurements
from fit_journey.db.repositories import GoalRepository, MeasurementRepository, StreakRepository
from fit_journey.errors import ForbiddenError, NotFoundError
from fit_journey.models.progress import ProgressStatus
from fit_journey.models.streak import StreakStatus
from fit_journey.services import ProgressService, StreakService


class TestProgressService:
    def test_missing_goal(self, db_path, clock):
        service = ProgressService(db_path, clock=clock)
        with pytest.raises(NotFoundError):
            asyncio.run(service.get_goal_progress(123))

    def test_progress_from_stored_data(self, db_path, clock):
        goal_id = asyncio.run(GoalRepository(db_path).create(make_goal()))
        measurements = MeasurementRepository(db_path)
        for measurement in make_measurements([76.0, 77.0, 78.0]):
            asyncio.run(measurements.create(measurement))

        progress = asyncio.run(ProgressService(db_path, clock=clock).get_goal_progress(goal_id))

        assert progress.goal_id == goal_id
        assert progress.current_weight == 76.0
        assert progress.status == ProgressStatus.AHEAD
        assert progress.days_elapsed == 45

    def test_no_measurements(self, db_path, clock):
        goal_id = asyncio.run(GoalRepository(db_path).create(make_goal()))
        progress = asyncio.run(ProgressService(db_path, clock=clock).get_goal_progress(goal_id))

        assert progress.percent_complete == 0
        assert progress.current_weight == 80.0

    def test_goal_of_another_user(self, db_path, clock):
        goal_id = asyncio.run(GoalRepository(db_path).create(make_goal(user_id="user-1")))
        service = ProgressService(db_path, clock=clock)

        with pytest.raises(ForbiddenError):
            asyncio.run(service.get_goal_progress(goal_id, user_id="user-2"))
        assert asyncio.run(service.get_goal_progress(goal_id, user_id="user-1")).goal_id == goal_id


@pytest.fixture
def streaks(db_path, clock):
    return StreakService(db_path, clock=clock, tz=timezone.utc)


class TestStreakService:
    def test_new_user_is_created_broken(self, db_path, streaks):
        report = asyncio.run(streaks.get_streak("user-1"))

        assert report.streak_status == StreakStatus.BROKEN
        assert report.current_streak == 0
        assert report.hours_until_break is None
        assert asyncio.run(StreakRepository(db_path).get("user-1")) is not None

    def test_first_workout(self, streaks):
        report = asyncio.run(streaks.on_workout_completed("user-1"))

        assert report.current_streak == 1
        assert report.longest_streak == 1
        assert report.streak_status == StreakStatus.ACTIVE
        assert report.last_workout_date == NOW
        assert report.message == "Great start! Keep it going tomorrow."

    def test_same_day_completion_does_not_increment(self, streaks, clock):
        asyncio.run(streaks.on_workout_completed("user-1"))
        clock.advance(hours=2)
        report = asyncio.run(streaks.on_workout_completed("user-1"))

        assert report.current_streak == 1
        assert report.last_workout_date == clock.now

    def test_consecutive_days(self, streaks, clock):
        for _ in range(7):
            report = asyncio.run(streaks.on_workout_completed("user-1"))
            clock.advance(days=1)

        assert report.current_streak == 7
        assert report.streak_status == StreakStatus.ON_FIRE

    def test_read_resets_broken_streak(self, db_path, streaks, clock):
        asyncio.run(streaks.on_workout_completed("user-1"))
        clock.advance(days=1)
        asyncio.run(streaks.on_workout_completed("user-1"))
        clock.advance(hours=50)

        report = asyncio.run(streaks.get_streak("user-1"))

        assert report.streak_status == StreakStatus.BROKEN
        assert report.current_streak == 0
        assert report.longest_streak == 2
        stored = asyncio.run(StreakRepository(db_path).get("user-1"))
        assert stored.current_streak == 0
        assert stored.longest_streak == 2

    def test_workout_after_break_restarts(self, streaks, clock):
        asyncio.run(streaks.on_workout_completed("user-1"))
        clock.advance(days=3)
        report = asyncio.run(streaks.on_workout_completed("user-1"))

        assert report.current_streak == 1
        assert report.longest_streak == 1

    def test_concurrent_completions_count_once(self, db_path, clock):
        service = StreakService(db_path, clock=clock, tz=timezone.utc)

        async def race():
            return await asyncio.gather(
                *(service.on_workout_completed("user-1") for _ in range(5))
            )

        reports = asyncio.run(race())

        assert all(r.current_streak == 1 for r in reports)
        assert asyncio.run(StreakRepository(db_path).get("user-1")).current_streak == 1

    def test_concurrent_completions_across_services(self, db_path):
        """Separate service instances share nothing but the database lock."""
        clock = FakeClock()
        first = StreakService(db_path, clock=clock, tz=timezone.utc)
        asyncio.run(first.on_workout_completed("user-1"))
        clock.advance(days=1)

        async def race():
            services = [StreakService(db_path, clock=clock, tz=timezone.utc) for _ in range(4)]
            return await asyncio.gather(*(s.on_workout_completed("user-1") for s in services))

        asyncio.run(race())

        stored = asyncio.run(StreakRepository(db_path).get("user-1"))
        assert stored.current_streak == 2
        assert stored.longest_streak == 2

    def test_users_are_independent(self, streaks, clock):
        asyncio.run(streaks.on_workout_completed("user-1"))
        clock.advance(days=1)
        asyncio.run(streaks.on_workout_completed("user-1"))

        other = asyncio.run(streaks.on_workout_completed("user-2"))
        assert other.current_streak == 1

    def test_stats(self, streaks, clock):
        asyncio.run(streaks.on_workout_completed("user-1"))
        clock.advance(days=1)
        asyncio.run(streaks.on_workout_completed("user-1"))
        asyncio.run(streaks.on_workout_completed("user-1"))
        clock.advance(days=10)
        asyncio.run(streaks.on_workout_completed("user-1"))

        stats = asyncio.run(streaks.get_streak_stats("user-1"))

        assert stats.current == 1
        assert stats.longest == 2
        assert stats.total_workouts == 4
        assert stats.workouts_this_week == 1
        assert stats.workouts_this_month == 4

    def test_service_keeps_no_per_user_state(self, streaks):
        before = dict(vars(streaks))

        async def touch_many():
            for i in range(200):
                await streaks.get_streak(f"user-{i}")

        asyncio.run(touch_many())

        assert vars(streaks) == before

    def test_stats_reuse_given_report(self, streaks, monkeypatch):
        asyncio.run(streaks.on_workout_completed("user-1"))
        report = asyncio.run(streaks.get_streak("user-1"))

        calls = []
        apply = streaks.repository.apply

        async def counting_apply(*args, **kwargs):
            calls.append(args)
            return await apply(*args, **kwargs)

        monkeypatch.setattr(streaks.repository, "apply", counting_apply)
        stats = asyncio.run(streaks.get_streak_stats("user-1", report=report))

        assert calls == []
        assert stats.current == 1
        assert stats.total_workouts == 1
