"""Pure progress and streak calculations.

Nothing in this package performs I/O; every function is a deterministic
function of its arguments.
"""

from .progress import compute_progress
from .recommendations import generate_recommendations
from .streaks import evaluate_streak, record_workout, streak_message
from .trend import classify_trend

__all__ = [
    "classify_trend",
    "compute_progress",
    "evaluate_streak",
    "generate_recommendations",
    "record_workout",
    "streak_message",
]
