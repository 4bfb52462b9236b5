"""
Domain-specific exception hierarchy for the weekly availability engine.
"""


class ScheduleError(Exception):
    """Base class for all application-level errors."""


class ParseError(ScheduleError, ValueError):
    """Raised when time-of-day text does not match the strict HH:mm:ss format."""


class ScheduleFormatError(ScheduleError, ValueError):
    """Raised when a schedule payload does not have the 7-day shape."""


class ScheduleAPIError(ScheduleError):
    """Raised when the schedule cannot be loaded from or saved to the backend."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
