# shopfront/core/errors.py
from fastapi import status


class AppError(Exception):
    """
    Base class for errors surfaced to HTTP clients.

    Every error carries:
      - status_code: HTTP status to respond with
      - error: short code shown as the "error" key
      - message: human readable explanation
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error: str = "Internal server error"

    def __init__(self, message: str = "", error: str | None = None):
        super().__init__(message or self.error)
        self.message = message
        if error is not None:
            self.error = error


class ValidationError(AppError):
    """Malformed or missing input."""

    status_code = status.HTTP_400_BAD_REQUEST
    error = "Invalid request"


class ConflictError(AppError):
    """Entity already exists (duplicate email on registration)."""

    status_code = status.HTTP_400_BAD_REQUEST
    error = "Already exists"


class AuthError(AppError):
    """Missing/invalid/expired token or bad credentials."""

    status_code = status.HTTP_401_UNAUTHORIZED
    error = "Unauthorized"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    error = "Not found"


class InternalError(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error = "Internal server error"


class StoreError(Exception):
    """Raised by a store when its backing data cannot be read or written."""
