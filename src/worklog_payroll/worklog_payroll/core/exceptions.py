from __future__ import annotations

from typing import Optional

from .enums import AuthFailure


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is missing, malformed or violates domain rules."""


class InvalidTimeRangeError(ValidationError):
    """Raised when a shift does not end after it starts."""


class MissingRateError(DomainError):
    """Raised when no hourly rate is available for a shift."""


class ConflictError(DomainError):
    """Raised when a shift overlaps an existing shift of the same employee and date."""


class ForbiddenError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when a referenced employee or work log does not exist."""


class AuthenticationError(DomainError):
    """Raised when login credentials or a bearer token are not accepted."""

    def __init__(self, message: str, *, reason: Optional[AuthFailure] = None):
        super().__init__(message)
        self.reason = reason
