from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import UPDATABLE_FIELDS, User
from .repository import UserRepository

_COLUMNS = "user_id, name, email, password_hash, role, hourly_rate, phone_number, created_at"


def _to_user(row: dict) -> User:
    rate = row.get("hourly_rate")
    return User(
        user_id=int(row["user_id"]),
        name=row["name"],
        email=row["email"],
        password_hash=row["password_hash"],
        role=Role(row["role"]),
        hourly_rate=int(rate) if rate is not None else None,
        phone_number=row.get("phone_number"),
        created_at=row.get("created_at"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE user_id=%s", (user_id,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE email=%s", (email,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def create_user(
        self,
        *,
        name: str,
        email: str,
        password_hash: str,
        role: Role,
        hourly_rate: Optional[int] = None,
        phone_number: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(name, email, password_hash, role, hourly_rate, phone_number)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (name, email, password_hash, role.value, hourly_rate, phone_number),
            )
            return int(cur.lastrowid)

    def update_user(self, user_id: int, *, changes: Mapping[str, Any]) -> bool:
        unknown = set(changes) - set(UPDATABLE_FIELDS)
        if unknown:
            raise ValueError(f"Unsupported user fields: {sorted(unknown)}")
        if not changes:
            return False

        assignments = ", ".join(f"{col}=%s" for col in changes)
        params = [v.value if isinstance(v, Role) else v for v in changes.values()]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE users SET {assignments} WHERE user_id=%s", (*params, user_id))
            # MySQL reports 0 affected rows when values are unchanged; re-check existence instead
            cur.execute("SELECT 1 AS found FROM users WHERE user_id=%s", (user_id,))
            return fetchone(cur) is not None

    def delete_by_id(self, user_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM users WHERE user_id=%s", (user_id,))
            return cur.rowcount > 0

    def list_all(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users ORDER BY created_at, user_id")
            return [_to_user(r) for r in fetchall(cur)]
