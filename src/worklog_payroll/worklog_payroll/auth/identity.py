from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import AuthFailure, Role
from ..core.exceptions import AuthenticationError
from ..core.logger import get_logger
from ..users.repository import UserRepository
from .tokens import TokenService

logger = get_logger("auth")


@dataclass(frozen=True)
class Identity:
    """Who is calling: resolved once per request, consumed by every service."""

    user_id: int
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def can_act_for(self, user_id: int) -> bool:
        return self.is_admin or self.user_id == int(user_id)


class IdentityResolver:
    """Turns an opaque bearer credential into an Identity.

    The role comes from the subject's current database row, not from the
    token claims, so a demoted admin loses access on the next request.
    """

    def __init__(self, tokens: TokenService, users: UserRepository):
        self._tokens = tokens
        self._users = users

    def resolve(self, token: Optional[str]) -> Identity:
        if not token:
            raise AuthenticationError("Authentication required", reason=AuthFailure.MISSING)

        claims = self._tokens.decode(token)
        try:
            user_id = int(claims.subject)
        except ValueError as exc:
            raise AuthenticationError("Invalid token", reason=AuthFailure.INVALID) from exc

        user = self._users.get_by_id(user_id)
        if not user:
            logger.warning("Token subject no longer exists", extra={"user_id": user_id})
            raise AuthenticationError("User not found", reason=AuthFailure.UNKNOWN_SUBJECT)

        return Identity(user_id=user.user_id, role=user.role)
