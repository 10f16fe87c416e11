"""CLI commands for fit-journey."""

from .goals import goals
from .init import init
from .serve import serve
from .streak import streak
from .weight import weight

__all__ = [
    "goals",
    "init",
    "serve",
    "streak",
    "weight",
]
