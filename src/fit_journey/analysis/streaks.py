"""Workout streak state machine.

A streak survives as long as the user works out at least once every 48
hours. Within 24 hours of the last workout the streak is active (on fire
from seven days up), between 24 and 48 hours it is at risk, and after 48
hours it is broken and the counter drops back to zero.

The functions here only compute; loading and saving the record is the
job of ``services.streaks``.
"""

import math
from datetime import datetime, timezone, tzinfo

from ..models.streak import Streak, StreakReport, StreakStatus
from ..utils.time import calendar_day, ensure_aware, hours_between

ACTIVE_WINDOW_HOURS = 24
BREAK_WINDOW_HOURS = 48
ON_FIRE_STREAK = 7

MILESTONE_MESSAGES = {
    1: "Great start! Keep it going tomorrow.",
    3: "3 days strong! You're building momentum.",
    7: "One week streak! You're officially on fire!",
    14: "Two weeks! Consistency is becoming a habit.",
    30: "30 days! You're unstoppable!",
    50: "50 days! Elite consistency.",
    100: "100 DAYS! Legendary dedication!",
}

BROKEN_MESSAGE = "Time to start a new streak! Every journey begins with a single workout."
NO_STREAK_MESSAGE = "Complete a workout to start your streak!"


def new_streak(user_id: str) -> Streak:
    """The record created the first time a user's streak is touched."""
    return Streak(user_id=user_id, current_streak=0, longest_streak=0, last_workout_date=None)


def streak_message(
    current_streak: int,
    status: StreakStatus,
    hours_until_break: float | None = None,
) -> str:
    """Motivational message for a streak length and status."""
    if status == StreakStatus.BROKEN:
        return BROKEN_MESSAGE

    if current_streak in MILESTONE_MESSAGES:
        message = MILESTONE_MESSAGES[current_streak]
    elif current_streak >= ON_FIRE_STREAK:
        message = f"{current_streak} day streak! Keep the fire burning!"
    elif current_streak >= 1:
        message = f"{current_streak} day streak! Building momentum."
    else:
        message = NO_STREAK_MESSAGE

    if status == StreakStatus.AT_RISK and hours_until_break is not None:
        hours = math.floor(hours_until_break)
        message += f" Your streak is at risk! {hours} hours left to keep it alive."

    return message


def evaluate_streak(streak: Streak, now: datetime) -> tuple[Streak, StreakReport]:
    """Classify a streak at ``now`` and apply passive decay.

    Returns the record as it should be stored (the counter is reset to
    zero once the streak is broken) and the report for the caller. The
    returned record is the same object when nothing changed.
    """
    now = ensure_aware(now)
    last_workout = streak.last_workout_date
    updated = streak
    hours_until_break = None

    if last_workout is None:
        status = StreakStatus.BROKEN
    else:
        hours_since = hours_between(last_workout, now)
        hours_until_break = max(0.0, BREAK_WINDOW_HOURS - hours_since)

        if hours_since <= ACTIVE_WINDOW_HOURS:
            if streak.current_streak >= ON_FIRE_STREAK:
                status = StreakStatus.ON_FIRE
            else:
                status = StreakStatus.ACTIVE
        elif hours_since <= BREAK_WINDOW_HOURS:
            status = StreakStatus.AT_RISK
        else:
            status = StreakStatus.BROKEN
            if streak.current_streak > 0:
                updated = streak.copy(current_streak=0)

    report = StreakReport(
        current_streak=updated.current_streak,
        longest_streak=updated.longest_streak,
        last_workout_date=last_workout,
        is_streak_active=status != StreakStatus.BROKEN,
        streak_status=status,
        hours_until_break=hours_until_break,
        message=streak_message(updated.current_streak, status, hours_until_break),
    )
    return updated, report


def record_workout(streak: Streak, now: datetime, tz: tzinfo = timezone.utc) -> Streak:
    """Apply a completed workout to ``streak`` and return the new record.

    Several workouts on one calendar day (in ``tz``) count once. A
    workout on a later day within 48 hours extends the streak; after
    that the streak restarts at one.
    """
    now = ensure_aware(now)
    last_workout = streak.last_workout_date
    current = streak.current_streak
    last_workout_date = now

    if last_workout is None:
        current = 1
    elif now < last_workout:
        # Out-of-order completion; keep the later timestamp
        current = max(current, 1)
        last_workout_date = last_workout
    elif calendar_day(last_workout, tz) == calendar_day(now, tz):
        current = max(current, 1)
    elif hours_between(last_workout, now) <= BREAK_WINDOW_HOURS:
        current += 1
    else:
        current = 1

    return streak.copy(
        current_streak=current,
        longest_streak=max(streak.longest_streak, current),
        last_workout_date=last_workout_date,
    )
