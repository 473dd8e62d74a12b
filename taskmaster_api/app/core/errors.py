"""
Error kinds raised by the services.

Each error carries the HTTP status code it maps to and a message that
is safe to show to clients.  ``create_app`` registers a handler that
renders any of them as ``{"error": message}``.
"""

from fastapi import status


class TaskMasterError(Exception):
    """Base class for errors returned to API clients."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str = "") -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(TaskMasterError):
    """A required field is missing or empty."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class AuthError(TaskMasterError):
    """Credentials were rejected or are missing."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid credentials"


class NotFoundError(TaskMasterError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ConflictError(TaskMasterError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict"


class InternalError(TaskMasterError):
    """Unexpected fault; the message never includes details."""
