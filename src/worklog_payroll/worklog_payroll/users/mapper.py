from __future__ import annotations

from typing import Any, Mapping

from ..core.enums import Role
from ..core.exceptions import ValidationError
from .model import User
from .service import UserChanges


def parse_role(value: Any) -> Role:
    try:
        return Role(str(value).strip().lower())
    except ValueError:
        raise ValidationError("Unknown role")


def user_to_dict(user: User) -> dict:
    # password_hash never leaves the server
    return {
        "id": user.user_id,
        "name": user.name,
        "email": user.email,
        "role": user.role.value,
        "hourly_rate": user.hourly_rate,
        "phone_number": user.phone_number,
        "created_at": user.created_at.isoformat() if user.created_at else None,
    }


def user_changes_from_payload(payload: Mapping[str, Any]) -> UserChanges:
    values: dict[str, Any] = {}
    for key in ("name", "email", "password", "hourly_rate", "phone_number"):
        if key in payload:
            values[key] = payload[key]
    if "role" in payload:
        values["role"] = parse_role(payload["role"])
    return UserChanges(**values)
