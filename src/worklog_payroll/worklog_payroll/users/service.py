from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..auth.identity import Identity
from ..auth.tokens import TokenService
from ..common.validators import optional_rate, require_email, require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, ForbiddenError, NotFoundError, ValidationError
from ..core.logger import get_logger
from .model import User
from .repository import UserRepository

logger = get_logger("users")

UNSET: Any = object()


@dataclass(frozen=True)
class LoginResult:
    user: User
    token: str


@dataclass(frozen=True)
class UserChanges:
    """Partial update; fields left as UNSET are not touched.

    ``hourly_rate=None`` clears the default rate.
    """

    name: Any = UNSET
    email: Any = UNSET
    password: Any = UNSET
    role: Any = UNSET
    hourly_rate: Any = UNSET
    phone_number: Any = UNSET

    def provided(self) -> dict[str, Any]:
        return {k: v for k, v in vars(self).items() if v is not UNSET}


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository, tokens: TokenService):
        self._users = users
        self._tokens = tokens

    def authenticate(self, email: str, password: str) -> LoginResult:
        if not email or not password:
            raise ValidationError("Email and password are required")

        user = self._users.get_by_email(email.strip())
        try:
            ok = bool(user) and check_password_hash(user.password_hash, password)
        except ValueError:
            # e.g. placeholder or corrupted hashes
            ok = False

        if not ok:
            logger.info("Login rejected", extra={"email": email.strip()})
            raise AuthenticationError("Email or password does not match")

        token = self._tokens.issue(user_id=user.user_id, email=user.email, role=user.role.value)
        logger.info("Login succeeded", extra={"user_id": user.user_id, "role": user.role.value})
        return LoginResult(user=user, token=token)


class UserService:
    """Use case: manage employees (signup, admin CRUD, self profile)."""

    def __init__(self, users: UserRepository, *, default_hourly_rate: Optional[int] = None):
        self._users = users
        self._default_hourly_rate = default_hourly_rate

    def _ensure_email_free(self, email: str, *, exclude_user_id: Optional[int] = None) -> None:
        existing = self._users.get_by_email(email)
        if existing and existing.user_id != exclude_user_id:
            raise ValidationError("Email is already in use")

    def signup(self, *, name: str, email: str, password: str) -> User:
        name = require_non_empty(name, "Name")
        email = require_email(email)
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
        self._ensure_email_free(email)

        user_id = self._users.create_user(
            name=name,
            email=email,
            password_hash=generate_password_hash(password),
            role=Role.USER,
            hourly_rate=self._default_hourly_rate,
        )
        logger.info("Signed up", extra={"user_id": user_id})
        return self._users.get_by_id(user_id)

    def create_account(
        self,
        *,
        actor: Identity,
        name: str,
        email: str,
        password: str,
        role: Role = Role.USER,
        hourly_rate: Any = None,
        phone_number: Optional[str] = None,
    ) -> User:
        if not actor.is_admin:
            raise ForbiddenError("Administrator privileges are required")

        name = require_non_empty(name, "Name")
        email = require_email(email)
        require_non_empty(password, "Password")
        rate = optional_rate(hourly_rate)
        self._ensure_email_free(email)

        user_id = self._users.create_user(
            name=name,
            email=email,
            password_hash=generate_password_hash(password),
            role=role,
            hourly_rate=rate,
            phone_number=(phone_number or "").strip() or None,
        )
        logger.info("Account created", extra={"user_id": user_id, "actor_id": actor.user_id, "role": role.value})
        return self._users.get_by_id(user_id)

    def list_users(self, *, actor: Identity) -> list[User]:
        if not actor.is_admin:
            raise ForbiddenError("Administrator privileges are required")
        return list(self._users.list_all())

    def get_user(self, *, actor: Identity, user_id: int) -> User:
        if not actor.can_act_for(user_id):
            raise ForbiddenError("You cannot view this account")
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError("User not found")
        return user

    def update_user(self, *, actor: Identity, user_id: int, changes: UserChanges) -> User:
        user_id = int(user_id)
        if not actor.can_act_for(user_id):
            raise ForbiddenError("You cannot modify this account")

        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")

        provided = changes.provided()
        updates: dict[str, Any] = {}

        if "name" in provided:
            updates["name"] = require_non_empty(provided["name"], "Name")
        if "email" in provided:
            email = require_email(provided["email"])
            self._ensure_email_free(email, exclude_user_id=user_id)
            updates["email"] = email
        if "hourly_rate" in provided:
            updates["hourly_rate"] = optional_rate(provided["hourly_rate"])
        if "phone_number" in provided:
            updates["phone_number"] = (provided["phone_number"] or "").strip() or None
        if "password" in provided:
            password = require_min_length(provided["password"], "Password", MIN_PASSWORD_LENGTH)
            updates["password_hash"] = generate_password_hash(password)

        if "role" in provided:
            role = provided["role"]
            if not isinstance(role, Role):
                raise ValidationError("Unknown role")
            if not actor.is_admin:
                raise ForbiddenError("Only administrators can change roles")
            if role != user.role:
                if actor.user_id == user_id:
                    raise ForbiddenError("Administrators cannot change their own role")
                updates["role"] = role

        if not updates:
            raise ValidationError("Nothing to update")

        if not self._users.update_user(user_id, changes=updates):
            raise NotFoundError("User not found")

        logger.info(
            "Account updated",
            extra={"user_id": user_id, "actor_id": actor.user_id, "fields": ",".join(sorted(updates))},
        )
        return self._users.get_by_id(user_id)

    def delete_user(self, *, actor: Identity, user_id: int) -> None:
        if not actor.is_admin:
            raise ForbiddenError("Administrator privileges are required")
        if actor.user_id == int(user_id):
            raise ForbiddenError("You cannot delete your own account")

        if not self._users.get_by_id(int(user_id)):
            raise NotFoundError("User not found")

        if not self._users.delete_by_id(int(user_id)):
            raise NotFoundError("User not found")

        logger.info("Account deleted", extra={"user_id": user_id, "actor_id": actor.user_id})
