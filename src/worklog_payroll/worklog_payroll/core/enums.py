from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Closed set of roles, parsed once when the caller's identity is resolved."""

    ADMIN = "admin"
    USER = "user"


class AuthFailure(str, Enum):
    """Why a bearer credential could not be turned into an identity."""

    MISSING = "missing"
    INVALID = "invalid"
    EXPIRED = "expired"
    UNKNOWN_SUBJECT = "unknown-subject"
