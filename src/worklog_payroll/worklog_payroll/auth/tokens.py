from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from ..core.constants import DEFAULT_TOKEN_TTL_DAYS, JWT_ALGORITHM
from ..core.enums import AuthFailure
from ..core.exceptions import AuthenticationError


@dataclass(frozen=True)
class TokenClaims:
    subject: str
    email: Optional[str]
    role: Optional[str]


class TokenService:
    """Issues and verifies HS256 access tokens."""

    def __init__(self, secret: str, *, ttl: timedelta = timedelta(days=DEFAULT_TOKEN_TTL_DAYS)):
        if not secret:
            raise ValueError("JWT secret must be configured")
        self._secret = secret
        self._ttl = ttl

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def issue(self, *, user_id: int, email: str, role: str, now: Optional[datetime] = None) -> str:
        now = now or datetime.now(timezone.utc)
        payload = {
            "sub": str(user_id),
            "email": email,
            "role": role,
            "iat": int(now.timestamp()),
            "exp": int((now + self._ttl).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=JWT_ALGORITHM)

    def decode(self, token: str) -> TokenClaims:
        try:
            payload = jwt.decode(token, self._secret, algorithms=[JWT_ALGORITHM], options={"require": ["sub", "exp"]})
        except jwt.ExpiredSignatureError as exc:
            raise AuthenticationError("Token expired", reason=AuthFailure.EXPIRED) from exc
        except jwt.InvalidTokenError as exc:
            raise AuthenticationError("Invalid token", reason=AuthFailure.INVALID) from exc

        return TokenClaims(subject=str(payload["sub"]), email=payload.get("email"), role=payload.get("role"))
