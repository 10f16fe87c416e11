"""Exception hierarchy for fit-journey."""


class FitJourneyError(Exception):
    """Base class for all fit-journey errors."""


class InvalidInputError(FitJourneyError, ValueError):
    """Input that cannot produce a meaningful result (bad dates, weights)."""


class ActiveGoalExistsError(InvalidInputError):
    """A user tried to create a second active goal."""

    def __init__(self, user_id: str):
        super().__init__(
            f"User {user_id} already has an active goal. Archive or complete it first."
        )
        self.user_id = user_id


class NotFoundError(FitJourneyError, LookupError):
    """A goal or other record identifier did not resolve."""


class ForbiddenError(FitJourneyError, PermissionError):
    """A user tried to reach a record that belongs to someone else."""
