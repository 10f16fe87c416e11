"""fit-journey: goal progress and workout streak tracking."""

__version__ = "0.1.0"
