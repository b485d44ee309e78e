"""
SmartWiFi Portal - Error taxonomy

Domain errors are answered with HTTP 200 and ``{"error": code}``; callers
inspect the ``error`` field. Auth and permission errors carry a real status.
"""
from http import HTTPStatus

from smartwifi.schemas.response import ErrorCodes


class DomainError(Exception):
    """Recoverable failure reported to the caller as ``{"error": code}``."""

    code = ErrorCodes.INTERNAL

    def __init__(self, message: str = ""):
        super().__init__(message or self.code)
        self.message = message or self.code


class ValidationError(DomainError):
    """Malformed or out-of-range payload."""
    code = ErrorCodes.INVALID


class InvalidCredentialsError(DomainError):
    """Unknown user or wrong password; deliberately indistinguishable."""
    code = ErrorCodes.INVALID


class NotFoundError(DomainError):
    code = ErrorCodes.NOT_FOUND


class UnknownActionError(DomainError):
    code = ErrorCodes.UNKNOWN_ACTION


class IssuanceConflictError(DomainError):
    """Could not find free card codes within the retry budget."""
    code = ErrorCodes.CONFLICT


class AuthError(Exception):
    """Missing, malformed or expired session token."""

    code = ErrorCodes.UNAUTHORIZED
    status = HTTPStatus.UNAUTHORIZED


class ForbiddenError(AuthError):
    """Authenticated, but the role may not run this action."""

    code = ErrorCodes.FORBIDDEN
    status = HTTPStatus.FORBIDDEN
