"""Goal progress calculation."""

import logging
import math
from collections.abc import Sequence
from datetime import datetime

from ..models.goal import Goal, GoalType, Measurement, validate_weight
from ..models.progress import GoalProgress, ProgressStatus, Trend
from ..utils.time import days_between, ensure_aware, utcnow
from .recommendations import generate_recommendations
from .trend import classify_trend

logger = logging.getLogger(__name__)

# Newest measurements considered for a report
MEASUREMENT_WINDOW = 30

# Kilograms (or the user's unit) either side of the plan still "on track"
WEIGHT_TOLERANCE = 0.5

# Percent lost per unit of deviation from a recomp target
RECOMP_PENALTY_PER_UNIT = 20

FIRST_MEASUREMENT_MESSAGE = "Log your first weight measurement to track progress"

# True when heavier-than-planned counts as ahead
_GAIN_IS_AHEAD = {
    GoalType.FAT_LOSS: False,
    GoalType.MUSCLE_BUILDING: True,
    GoalType.RECOMP: True,
}


def percent_complete(starting_weight: float, target_weight: float, current_weight: float) -> float:
    """Share of the distance to target covered, 0-100.

    When start and target are equal (recomp) completion is measured by
    how close the current weight stays to the target instead.
    """
    total_distance = abs(target_weight - starting_weight)
    current_distance = abs(current_weight - starting_weight)

    if total_distance == 0:
        deviation = abs(current_weight - target_weight)
        if deviation <= WEIGHT_TOLERANCE:
            return 100.0
        return max(0.0, 100 - deviation * RECOMP_PENALTY_PER_UNIT)

    return min(100.0, current_distance / total_distance * 100)


def expected_weight(goal: Goal, days_elapsed: int, total_days: int) -> float:
    """Linear interpolation between starting and target weight."""
    if total_days <= 0:
        expected_progress = 1.0
    else:
        expected_progress = days_elapsed / total_days
    return goal.starting_weight + (goal.target_weight - goal.starting_weight) * expected_progress


def classify_status(goal_type: GoalType, current_weight: float, expected: float) -> ProgressStatus:
    gain_is_ahead = _GAIN_IS_AHEAD[GoalType(goal_type)]

    if current_weight > expected + WEIGHT_TOLERANCE:
        return ProgressStatus.AHEAD if gain_is_ahead else ProgressStatus.BEHIND
    if current_weight < expected - WEIGHT_TOLERANCE:
        return ProgressStatus.BEHIND if gain_is_ahead else ProgressStatus.AHEAD
    return ProgressStatus.ON_TRACK


def compute_progress(
    goal: Goal,
    measurements: Sequence[Measurement],
    now: datetime | None = None,
) -> GoalProgress:
    """Build a progress report for ``goal``.

    Args:
        goal: The goal being tracked.
        measurements: Body-weight samples ordered newest first. Only the
            newest 30 are used.
        now: Reference time, defaults to the current UTC time.

    Returns:
        GoalProgress with status, trend and recommendations.

    Raises:
        InvalidInputError: If the goal has non-positive weights, ends
            before it starts, or a measurement weight is invalid.
    """
    goal.validate()
    now = ensure_aware(now) if now else utcnow()

    days_remaining = math.ceil(days_between(now, goal.target_date))

    if not measurements:
        return GoalProgress(
            goal_id=goal.id,
            percent_complete=0.0,
            current_weight=goal.starting_weight,
            target_weight=goal.target_weight,
            starting_weight=goal.starting_weight,
            days_elapsed=0,
            days_remaining=days_remaining,
            expected_weight=goal.starting_weight,
            status=ProgressStatus.ON_TRACK,
            trend=Trend.STABLE,
            recommendations=[FIRST_MEASUREMENT_MESSAGE],
        )

    window = list(measurements[:MEASUREMENT_WINDOW])
    for measurement in window:
        validate_weight(measurement.weight, "measurement weight")

    current_weight = float(window[0].weight)

    days_elapsed = math.floor(days_between(goal.start_date, now))
    total_days = math.ceil(days_between(goal.start_date, goal.target_date))

    expected = expected_weight(goal, days_elapsed, total_days)
    status = classify_status(goal.goal_type, current_weight, expected)
    trend = classify_trend(window, goal.goal_type)

    logger.debug(
        "Goal %s: current=%.2f expected=%.2f status=%s trend=%s",
        goal.id,
        current_weight,
        expected,
        status.value,
        trend.value,
    )

    recommendations = generate_recommendations(
        goal,
        current_weight,
        expected,
        status,
        trend,
        days_remaining,
    )

    return GoalProgress(
        goal_id=goal.id,
        percent_complete=percent_complete(goal.starting_weight, goal.target_weight, current_weight),
        current_weight=current_weight,
        target_weight=goal.target_weight,
        starting_weight=goal.starting_weight,
        days_elapsed=days_elapsed,
        days_remaining=days_remaining,
        expected_weight=expected,
        status=status,
        trend=trend,
        recommendations=recommendations,
    )
