from __future__ import annotations


class HabitsClientError(Exception):
    """Base class for failures talking to the remote habit service."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class NetworkError(HabitsClientError):
    """Raised when the day snapshot could not be fetched or parsed."""


class ToggleError(HabitsClientError):
    """Raised when the remote toggle mutation failed."""


class PastDayError(Exception):
    """Raised when a toggle is requested for a day that is already over."""


class ViewNotReadyError(Exception):
    """Raised when a toggle is requested before the day has loaded successfully."""


class UnknownHabitError(Exception):
    """Raised when a toggle names a habit that is not scheduled for the day."""
