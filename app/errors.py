"""
Error taxonomy shared by the authorizer and the route handlers.

Handlers raise these; app.api.responses turns them into the failure envelope.
Anything that is not an AppError is reported as an unexpected 500.
"""

from fastapi import status


class AppError(Exception):
    """Base class for errors that map to a specific HTTP status."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "An unexpected error occurred"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthenticated(AppError):
    """Missing, malformed, expired or otherwise unverifiable credential."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "unauthorized"


class UserNotRegistered(AppError):
    """Valid credential, but no application user exists for its subject."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "unauthorized: user not registered"


class Forbidden(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "You do not have permission to perform this action"


class ValidationFailed(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "The requested resource was not found"


class Conflict(AppError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource already exists"
