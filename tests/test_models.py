"""Tests for data models."""

from datetime import datetime, timezone

import pytest

from conftest import make_goal
from fit_journey.errors import InvalidInputError
from fit_journey.models.goal import Goal, GoalStatus, GoalType, Measurement
from fit_journey.models.progress import GoalProgress, ProgressStatus, Trend
from fit_journey.models.streak import Streak


class TestGoal:
    def test_to_dict(self):
        data = make_goal().to_dict()

        assert data["goal_type"] == "fat_loss"
        assert data["status"] == "active"
        assert data["start_date"] == "2026-01-01T00:00:00+00:00"
        assert data["starting_weight"] == 80.0

    def test_round_trip(self):
        goal = make_goal(goal_type=GoalType.RECOMP, target_weight=80.0, id=3)
        loaded = Goal.from_dict(goal.to_dict())

        assert loaded == goal
        assert loaded.is_recomp

    def test_naive_dates_become_utc(self):
        goal = make_goal(start_date=datetime(2026, 1, 1), target_date=datetime(2026, 2, 1))
        assert goal.start_date.tzinfo == timezone.utc

    def test_accepts_string_enums(self):
        goal = make_goal(goal_type="muscle_building", status="paused")
        assert goal.goal_type == GoalType.MUSCLE_BUILDING
        assert goal.status == GoalStatus.PAUSED

    def test_unknown_goal_type(self):
        with pytest.raises(ValueError):
            make_goal(goal_type="bulk")

    def test_validate_dates(self):
        goal = make_goal(
            start_date=datetime(2026, 3, 1, tzinfo=timezone.utc),
            target_date=datetime(2026, 2, 1, tzinfo=timezone.utc),
        )
        with pytest.raises(InvalidInputError):
            goal.validate()

    def test_lifecycle(self):
        goal = make_goal()
        goal.pause()
        assert goal.status == GoalStatus.PAUSED
        goal.resume()
        assert goal.status == GoalStatus.ACTIVE
        goal.complete()
        assert goal.get_status_display() == "Completed"

    def test_cannot_pause_completed(self):
        goal = make_goal(status=GoalStatus.COMPLETED)
        with pytest.raises(InvalidInputError):
            goal.pause()

    def test_transition_to_same_status_is_noop(self):
        goal = make_goal()
        goal.transition_to(GoalStatus.ACTIVE)
        assert goal.status == GoalStatus.ACTIVE


class TestMeasurement:
    def test_round_trip(self):
        measurement = Measurement(
            user_id="u",
            weight=79.4,
            date=datetime(2026, 2, 1, 7, 30, tzinfo=timezone.utc),
            notes="fasted",
            goal_id=2,
        )
        assert Measurement.from_dict(measurement.to_dict()) == measurement


class TestStreak:
    def test_defaults(self):
        streak = Streak(user_id="u")
        assert streak.current_streak == 0
        assert streak.longest_streak == 0
        assert streak.last_workout_date is None

    def test_from_dict(self):
        streak = Streak.from_dict(
            {
                "user_id": "u",
                "current_streak": 4,
                "longest_streak": 9,
                "last_workout_date": "2026-03-01T10:00:00+00:00",
            },
            id=5,
        )
        assert streak.id == 5
        assert streak.last_workout_date == datetime(2026, 3, 1, 10, tzinfo=timezone.utc)

    def test_same_state_ignores_ids(self):
        assert Streak(user_id="u", id=1).same_state(Streak(user_id="u", id=2))


class TestGoalProgress:
    def test_overdue(self):
        progress = GoalProgress(
            percent_complete=40.0,
            current_weight=78.0,
            target_weight=75.0,
            starting_weight=80.0,
            days_elapsed=100,
            days_remaining=-10,
            expected_weight=75.0,
            status=ProgressStatus.BEHIND,
            trend=Trend.STABLE,
        )
        data = progress.to_dict()

        assert progress.is_overdue
        assert data["is_overdue"] is True
        assert data["status"] == "behind"
