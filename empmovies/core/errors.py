# Typed error conditions raised by services and dependencies
# empmovies/core/errors.py

from typing import Any, List, Optional

from fastapi import status


class AppError(Exception):
    """Base class for errors that map directly onto an HTTP status."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, details: Optional[List[Any]] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.details = details
        if status_code is not None:
            self.status_code = status_code


class ValidationFailed(AppError):
    """Raised when input is missing or malformed."""
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(AppError):
    """Raised when the targeted record does not exist."""
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, message: str = "Not found", details: Optional[List[Any]] = None):
        super().__init__(message, details)


class ServiceUnavailableError(AppError):
    """Raised when a backing store was never configured."""
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
