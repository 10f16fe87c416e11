"""Services that combine storage with the pure calculations."""

from .progress import ProgressService
from .streaks import StreakService

__all__ = ["ProgressService", "StreakService"]
