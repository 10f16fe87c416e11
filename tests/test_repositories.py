"""Tests for the SQLite repositories."""

import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from conftest import NOW, make_goal, make_measurements
from fit_journey.db.repositories import GoalRepository, MeasurementRepository, StreakRepository
from fit_journey.errors import ActiveGoalExistsError, InvalidInputError, NotFoundError
from fit_journey.models.goal import GoalStatus, Measurement


class TestGoalRepository:
    def test_create_and_get(self, db_path):
        repo = GoalRepository(db_path)
        goal = make_goal()

        goal_id = asyncio.run(repo.create(goal))
        loaded = asyncio.run(repo.get(goal_id))

        assert goal.id == goal_id
        assert loaded.user_id == "user-1"
        assert loaded.goal_type == goal.goal_type
        assert loaded.status == GoalStatus.ACTIVE
        assert loaded.start_date == goal.start_date
        assert loaded.target_date == goal.target_date
        assert loaded.starting_weight == 80.0
        assert loaded.target_weight == 75.0

    def test_get_missing(self, db_path):
        assert asyncio.run(GoalRepository(db_path).get(999)) is None

    def test_create_rejects_invalid_goal(self, db_path):
        with pytest.raises(InvalidInputError):
            asyncio.run(GoalRepository(db_path).create(make_goal(target_weight=0)))

    def test_one_active_goal_per_user(self, db_path):
        repo = GoalRepository(db_path)
        asyncio.run(repo.create(make_goal()))

        with pytest.raises(ActiveGoalExistsError):
            asyncio.run(repo.create(make_goal()))

        # Other users are unaffected
        asyncio.run(repo.create(make_goal(user_id="user-2")))

    def test_get_active(self, db_path):
        repo = GoalRepository(db_path)
        goal_id = asyncio.run(repo.create(make_goal()))

        active = asyncio.run(repo.get_active("user-1"))
        assert active.id == goal_id
        assert asyncio.run(repo.get_active("nobody")) is None

    def test_update_keeps_start_fields(self, db_path):
        repo = GoalRepository(db_path)
        goal_id = asyncio.run(repo.create(make_goal()))

        goal = asyncio.run(repo.get(goal_id))
        goal.pause()
        goal.target_weight = 74.0
        goal.starting_weight = 90.0
        asyncio.run(repo.update(goal))

        loaded = asyncio.run(repo.get(goal_id))
        assert loaded.status == GoalStatus.PAUSED
        assert loaded.target_weight == 74.0
        assert loaded.starting_weight == 80.0

    def test_paused_goal_frees_active_slot(self, db_path):
        repo = GoalRepository(db_path)
        first_id = asyncio.run(repo.create(make_goal()))
        first = asyncio.run(repo.get(first_id))
        first.pause()
        asyncio.run(repo.update(first))

        asyncio.run(repo.create(make_goal()))

        first.resume()
        with pytest.raises(ActiveGoalExistsError):
            asyncio.run(repo.update(first))

    def test_goals_are_archived_not_deleted(self):
        assert not hasattr(GoalRepository, "delete")

    def test_update_missing_goal(self, db_path):
        goal = make_goal(id=404)
        with pytest.raises(NotFoundError):
            asyncio.run(GoalRepository(db_path).update(goal))

    def test_list_by_user(self, db_path):
        repo = GoalRepository(db_path)
        older = make_goal(status=GoalStatus.ARCHIVED)
        newer = make_goal(start_date=datetime(2026, 2, 1, tzinfo=timezone.utc))
        asyncio.run(repo.create(older))
        asyncio.run(repo.create(newer))

        goals = asyncio.run(repo.list_by_user("user-1"))
        assert [g.id for g in goals] == [newer.id, older.id]


class TestMeasurementRepository:
    def test_newest_first_with_limit(self, db_path):
        repo = MeasurementRepository(db_path)
        # Insert oldest first so ordering comes from the date column
        for measurement in reversed(make_measurements([77.0, 77.5, 78.0, 78.5])):
            asyncio.run(repo.create(measurement))

        result = asyncio.run(repo.list_by_user("user-1", limit=3))

        assert [m.weight for m in result] == [77.0, 77.5, 78.0]
        assert result[0].date == NOW

    def test_default_limit_is_thirty(self, db_path):
        repo = MeasurementRepository(db_path)
        for measurement in make_measurements([80.0] * 35):
            asyncio.run(repo.create(measurement))

        assert len(asyncio.run(repo.list_by_user("user-1"))) == 30

    def test_rejects_non_positive_weight(self, db_path):
        with pytest.raises(InvalidInputError):
            asyncio.run(
                MeasurementRepository(db_path).create(Measurement(user_id="u", weight=-2))
            )

    def test_mixed_offsets_sort_chronologically(self, db_path):
        repo = MeasurementRepository(db_path)
        plus_two = timezone(timedelta(hours=2))
        # 09:00+02:00 is 07:00 UTC, earlier than 08:00 UTC
        asyncio.run(repo.create(Measurement(
            user_id="u", weight=80.0, date=datetime(2026, 1, 1, 9, tzinfo=plus_two)
        )))
        asyncio.run(repo.create(Measurement(
            user_id="u", weight=79.0, date=datetime(2026, 1, 1, 8, tzinfo=timezone.utc)
        )))

        result = asyncio.run(repo.list_by_user("u"))
        assert [m.weight for m in result] == [79.0, 80.0]

    def test_append_only(self):
        assert not hasattr(MeasurementRepository, "delete")
        assert not hasattr(MeasurementRepository, "update")


class TestStreakRepository:
    def test_apply_creates_initial_record(self, db_path):
        repo = StreakRepository(db_path)

        before, after = asyncio.run(repo.apply("user-1", lambda s: s))

        assert before.current_streak == 0
        assert before.last_workout_date is None
        stored = asyncio.run(repo.get("user-1"))
        assert stored is not None
        assert stored.longest_streak == 0

    def test_apply_persists_transition(self, db_path):
        repo = StreakRepository(db_path)

        def bump(streak):
            return streak.copy(current_streak=4, longest_streak=4, last_workout_date=NOW)

        asyncio.run(repo.apply("user-1", bump))
        stored = asyncio.run(repo.get("user-1"))

        assert stored.current_streak == 4
        assert stored.last_workout_date == NOW

    def test_failed_transition_rolls_back(self, db_path):
        repo = StreakRepository(db_path)

        def fail(streak):
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            asyncio.run(repo.apply("user-1", fail, log_workout_at=NOW))

        assert asyncio.run(repo.get("user-1")) is None
        assert asyncio.run(repo.count_workouts("user-1")) == 0

    def test_count_workouts(self, db_path):
        repo = StreakRepository(db_path)
        for days_ago in (0, 3, 10, 40):
            asyncio.run(repo.apply("user-1", lambda s: s, log_workout_at=NOW - timedelta(days=days_ago)))

        assert asyncio.run(repo.count_workouts("user-1")) == 4
        assert asyncio.run(repo.count_workouts("user-1", since=NOW - timedelta(days=7))) == 2
        assert asyncio.run(repo.count_workouts("someone-else")) == 0
