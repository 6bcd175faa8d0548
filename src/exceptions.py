"""Domain exceptions raised by the service layer.

Each exception carries a user-facing message and the HTTP status the API
layer answers with. The translation happens in a single exception handler
registered in ``src.main``.
"""

from fastapi import status


class DailyMateError(Exception):
    """Base class for all domain errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class BadRequestError(DailyMateError):
    """Validation failure, duplicate date, duplicate nickname and similar."""

    status_code = status.HTTP_400_BAD_REQUEST


class AuthenticationError(DailyMateError):
    """Wrong credentials on login."""

    status_code = status.HTTP_401_UNAUTHORIZED


class TokenError(DailyMateError):
    """Invalid, expired or mismatched JWT."""

    status_code = status.HTTP_401_UNAUTHORIZED


class ForbiddenError(DailyMateError):
    """Requester may not see or mutate the resource."""

    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(DailyMateError):
    """Missing diary, user, friend request or stored token."""

    status_code = status.HTTP_404_NOT_FOUND
