"""Errors raised by the matching engine."""


class MatchingError(Exception):
    """Base class for matching engine errors."""


class SubjectNotFoundError(MatchingError):
    """The user a computation was requested for does not exist."""

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(f"User not found: {user_id}")
