from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Optional

from .auth.identity import IdentityResolver
from .auth.tokens import TokenService
from .core.constants import DEFAULT_TOKEN_COOKIE, DEFAULT_TOKEN_TTL_DAYS
from .database.connection import DBConfig, DatabaseConnection
from .payroll.service import PayrollReportService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService
from .worklogs.mysql_worklog_repository import MySQLWorkLogRepository
from .worklogs.repository import WorkLogRepository
from .worklogs.service import WorkLogService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    work_logs_repo: WorkLogRepository

    token_service: TokenService
    identity_resolver: IdentityResolver
    auth_service: AuthService
    user_service: UserService
    work_log_service: WorkLogService
    payroll_report_service: PayrollReportService

    cookie_name: str = DEFAULT_TOKEN_COOKIE
    cookie_secure: bool = False
    conn: Optional[DatabaseConnection] = None

    def close(self) -> None:
        if self.conn is not None:
            self.conn.close()


def wire_services(
    *,
    users_repo: UserRepository,
    work_logs_repo: WorkLogRepository,
    jwt_secret: str,
    token_ttl_days: int = DEFAULT_TOKEN_TTL_DAYS,
    default_hourly_rate: Optional[int] = None,
    cookie_name: str = DEFAULT_TOKEN_COOKIE,
    cookie_secure: bool = False,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    token_service = TokenService(jwt_secret, ttl=timedelta(days=int(token_ttl_days)))

    return Container(
        users_repo=users_repo,
        work_logs_repo=work_logs_repo,
        token_service=token_service,
        identity_resolver=IdentityResolver(token_service, users_repo),
        auth_service=AuthService(users_repo, token_service),
        user_service=UserService(users_repo, default_hourly_rate=default_hourly_rate),
        work_log_service=WorkLogService(work_logs_repo, users_repo),
        payroll_report_service=PayrollReportService(work_logs_repo, users_repo),
        cookie_name=cookie_name,
        cookie_secure=cookie_secure,
        conn=conn,
    )


def build_container(settings: Any) -> Container:
    """MySQL-backed container from a settings module (see ``config/``)."""
    conn = DatabaseConnection(DBConfig.from_dict(settings.DB_CONFIG)).open()

    return wire_services(
        users_repo=MySQLUserRepository(conn),
        work_logs_repo=MySQLWorkLogRepository(conn),
        jwt_secret=settings.JWT_SECRET,
        token_ttl_days=getattr(settings, "TOKEN_TTL_DAYS", DEFAULT_TOKEN_TTL_DAYS),
        default_hourly_rate=getattr(settings, "DEFAULT_HOURLY_RATE", None),
        cookie_name=getattr(settings, "TOKEN_COOKIE_NAME", DEFAULT_TOKEN_COOKIE),
        cookie_secure=bool(getattr(settings, "TOKEN_COOKIE_SECURE", False)),
        conn=conn,
    )
