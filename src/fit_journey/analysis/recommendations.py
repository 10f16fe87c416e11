"""Rule-based coaching recommendations."""

from ..models.goal import GoalType
from ..models.progress import ProgressStatus, Trend

# Days left below which an urgency note is added
URGENCY_DAYS = 7

STATUS_MESSAGES = {
    ProgressStatus.AHEAD: "Great job! You're ahead of schedule.",
    ProgressStatus.ON_TRACK: "You're on track to reach your goal!",
    ProgressStatus.BEHIND: "You're behind schedule. Consider adjusting your plan.",
}

TREND_MESSAGES = {
    Trend.IMPROVING: "Your trend is improving - keep it up!",
    Trend.DECLINING: "Your trend is declining. Review your plan.",
}

BEHIND_MESSAGES = {
    GoalType.FAT_LOSS: "Consider increasing cardio or reviewing your nutrition.",
    GoalType.MUSCLE_BUILDING: "Consider increasing calorie intake or training volume.",
}


def generate_recommendations(
    goal,
    current_weight: float,
    expected_weight: float,
    status: ProgressStatus,
    trend: Trend,
    days_remaining: int,
) -> list[str]:
    """Build the ordered list of guidance strings for a progress report.

    Order is status, trend, urgency, goal type. The status line is
    always present; the others depend on the inputs.
    """
    status = ProgressStatus(status)
    trend = Trend(trend)

    recommendations = [STATUS_MESSAGES[status]]

    if trend in TREND_MESSAGES:
        recommendations.append(TREND_MESSAGES[trend])

    if days_remaining < 0:
        days_past = -days_remaining
        unit = "day" if days_past == 1 else "days"
        recommendations.append(
            f"Your target date passed {days_past} {unit} ago. "
            "Consider setting a new target date."
        )
    elif days_remaining < URGENCY_DAYS:
        recommendations.append(f"Only {days_remaining} days left!")

    if status == ProgressStatus.BEHIND:
        goal_type = GoalType(goal.goal_type)
        if goal_type in BEHIND_MESSAGES:
            recommendations.append(BEHIND_MESSAGES[goal_type])

    return recommendations
