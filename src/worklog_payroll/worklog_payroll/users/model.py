from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: an employee account.

    Note: plain data object, no DB access.
    """

    user_id: int
    name: str
    email: str
    password_hash: str
    role: Role
    hourly_rate: Optional[int] = None
    phone_number: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


# Columns a caller may change through UserService.update_user
UPDATABLE_FIELDS = ("name", "email", "password_hash", "role", "hourly_rate", "phone_number")
