"""Domain exceptions raised by the services layer.

Routers translate these into ``HTTPException`` responses.
"""


class AttendAIError(Exception):
    """Base exception for AttendAI errors."""


class ValidationError(AttendAIError, ValueError):
    """Raised when input data is invalid, before any network call is made."""


class ScheduleExtractionError(AttendAIError):
    """Raised when a timetable image could not be turned into a schedule."""

    def __init__(self, message: str, reason: str = "upstream"):
        super().__init__(message)
        self.message = message
        # One of "config", "empty", "upstream"
        self.reason = reason


class StorageError(AttendAIError):
    """Raised when schedule or attendance data could not be read or written."""
