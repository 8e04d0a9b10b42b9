from __future__ import annotations

import re
from typing import Any, Optional

from ..core.exceptions import ValidationError

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: Optional[str], field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_email(value: Optional[str]) -> str:
    email = require_non_empty(value, "Email")
    if not _EMAIL_RE.match(email):
        raise ValidationError("Enter a valid email address")
    return email


def _whole_rate(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number")
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        raise ValidationError(f"{field_name} must be a number")


def optional_rate(value: Any, field_name: str = "Hourly rate") -> Optional[int]:
    """Coerce a rate to a whole currency unit; None stays None, fractions are floored."""
    if value is None:
        return None
    rate = _whole_rate(value, field_name)
    if rate < 0:
        raise ValidationError(f"{field_name} cannot be negative")
    return rate


def override_rate(value: Any, field_name: str = "Hourly rate") -> Optional[int]:
    """Per-shift rate override: zero or negative means "use the employee default"."""
    if value is None or value == "":
        return None
    rate = _whole_rate(value, field_name)
    return rate if rate > 0 else None
