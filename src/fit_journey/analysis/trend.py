"""Week-over-week weight trend detection."""

from collections.abc import Sequence

from ..models.goal import GoalType, Measurement
from ..models.progress import Trend

# Samples per comparison window
TREND_WINDOW = 7
TREND_MIN_SAMPLES = 2 * TREND_WINDOW

# Average change (same unit as weight) needed to leave "stable"
TREND_THRESHOLD = 0.3

# Sign of a weight change that counts as progress for each goal type
_GOOD_DIRECTION = {
    GoalType.FAT_LOSS: -1,
    GoalType.MUSCLE_BUILDING: 1,
    GoalType.RECOMP: 1,
}


def _average(window: Sequence[Measurement]) -> float:
    return sum(float(m.weight) for m in window) / len(window)


def classify_trend(measurements: Sequence[Measurement], goal_type: GoalType) -> Trend:
    """Compare the newest 7 samples against the 7 before them.

    ``measurements`` must be ordered newest first. Fewer than 14 samples
    is not enough history and is reported as stable.
    """
    direction = _GOOD_DIRECTION[GoalType(goal_type)]

    if len(measurements) < TREND_MIN_SAMPLES:
        return Trend.STABLE

    recent = measurements[:TREND_WINDOW]
    previous = measurements[TREND_WINDOW:TREND_MIN_SAMPLES]
    if not previous:
        return Trend.STABLE

    # Rounded so float noise cannot push a change across the band edge
    change = round(_average(recent) - _average(previous), 6) * direction

    if change >= TREND_THRESHOLD:
        return Trend.IMPROVING
    if change <= -TREND_THRESHOLD:
        return Trend.DECLINING
    return Trend.STABLE
