"""
Domain errors raised by the service layer.

Each error carries the HTTP status and ``error_type`` it is rendered with by
the handlers registered in ``dealership.main``.
"""
from fastapi import status


class DealershipError(Exception):
    """Base class for expected, user-facing errors."""

    status_code = status.HTTP_400_BAD_REQUEST
    error_type = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(DealershipError):
    """Missing or malformed input, rejected before any mutation."""

    status_code = status.HTTP_400_BAD_REQUEST
    error_type = "validation_error"


class AuthenticationError(DealershipError):
    """Missing, invalid or expired credential."""

    status_code = status.HTTP_401_UNAUTHORIZED
    error_type = "unauthorized"


class PermissionDenied(DealershipError):
    """Authenticated, but not allowed."""

    status_code = status.HTTP_403_FORBIDDEN
    error_type = "forbidden"


class NotFoundError(DealershipError):
    """Unknown resource, or one the caller does not own."""

    status_code = status.HTTP_404_NOT_FOUND
    error_type = "not_found"


class ConflictError(DealershipError):
    """The request clashes with the current state of a resource."""

    status_code = status.HTTP_409_CONFLICT
    error_type = "conflict"
