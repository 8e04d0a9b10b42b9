from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime

import pytest
from werkzeug.security import generate_password_hash

from src.worklog_payroll.worklog_payroll.auth.identity import Identity
from src.worklog_payroll.worklog_payroll.container import wire_services
from src.worklog_payroll.worklog_payroll.core.enums import Role
from src.worklog_payroll.worklog_payroll.core.exceptions import ConflictError, NotFoundError
from src.worklog_payroll.worklog_payroll.users.model import User
from src.worklog_payroll.worklog_payroll.worklogs.model import WorkLog, WorkLogRecord

TEST_JWT_SECRET = "test-jwt-secret"


class FakeUsersRepo:
    def __init__(self):
        self._next_id = 1
        self.rows: dict[int, User] = {}

    def get_by_id(self, user_id):
        return self.rows.get(int(user_id))

    def get_by_email(self, email):
        return next((u for u in self.rows.values() if u.email == email), None)

    def create_user(self, *, name, email, password_hash, role, hourly_rate=None, phone_number=None):
        uid = self._next_id
        self._next_id += 1
        self.rows[uid] = User(
            user_id=uid,
            name=name,
            email=email,
            password_hash=password_hash,
            role=role,
            hourly_rate=hourly_rate,
            phone_number=phone_number,
            created_at=datetime(2026, 1, 1, 9, 0),
        )
        return uid

    def update_user(self, user_id, *, changes):
        user = self.rows.get(int(user_id))
        if not user:
            return False
        self.rows[user.user_id] = replace(user, **dict(changes))
        return True

    def delete_by_id(self, user_id):
        return self.rows.pop(int(user_id), None) is not None

    def list_all(self):
        return sorted(self.rows.values(), key=lambda u: u.user_id)


class FakeWorkLogsRepo:
    """In-memory store that repeats the overlap guard on every write, like the SQL store."""

    def __init__(self, users: FakeUsersRepo):
        self._users = users
        self._next_id = 1
        self.rows: dict[int, WorkLog] = {}

    def _guard(self, record: WorkLogRecord, exclude_id=None):
        if not self._users.get_by_id(record.user_id):
            raise NotFoundError("Employee not found")
        for log in self.rows.values():
            if log.work_log_id == exclude_id:
                continue
            if log.user_id != record.user_id or log.work_date != record.work_date:
                continue
            if record.start_time < log.end_time and log.start_time < record.end_time:
                raise ConflictError("A shift already exists in that time range")

    def _store(self, work_log_id, record: WorkLogRecord):
        self.rows[work_log_id] = WorkLog(
            work_log_id=work_log_id,
            user_id=record.user_id,
            work_date=record.work_date,
            start_time=record.start_time,
            end_time=record.end_time,
            work_hours=record.work_hours,
            hourly_rate=record.hourly_rate,
            payment_amount=record.payment_amount,
            memo=record.memo,
        )

    def get_by_id(self, work_log_id):
        log = self.rows.get(int(work_log_id))
        if not log:
            return None
        return replace(log, user_name=self._users.get_by_id(log.user_id).name)

    def list_for_user_and_date(self, user_id, work_date):
        return [
            self.get_by_id(log.work_log_id)
            for log in sorted(self.rows.values(), key=lambda x: x.start_time)
            if log.user_id == user_id and log.work_date == work_date
        ]

    def insert(self, record):
        self._guard(record)
        wid = self._next_id
        self._next_id += 1
        self._store(wid, record)
        return wid

    def update(self, work_log_id, record):
        if int(work_log_id) not in self.rows:
            return False
        self._guard(record, exclude_id=int(work_log_id))
        self._store(int(work_log_id), record)
        return True

    def delete(self, work_log_id):
        return self.rows.pop(int(work_log_id), None) is not None

    def list_between(self, *, start_date, end_date, user_id=None):
        logs = [
            self.get_by_id(log.work_log_id)
            for log in self.rows.values()
            if start_date <= log.work_date <= end_date and (user_id is None or log.user_id == int(user_id))
        ]
        logs.sort(key=lambda x: (x.start_time, x.work_log_id))
        logs.sort(key=lambda x: x.work_date, reverse=True)
        return logs


@pytest.fixture
def users_repo():
    return FakeUsersRepo()


@pytest.fixture
def work_logs_repo(users_repo):
    return FakeWorkLogsRepo(users_repo)


@pytest.fixture
def admin_user(users_repo):
    uid = users_repo.create_user(
        name="Admin",
        email="admin@example.com",
        password_hash=generate_password_hash("admin-pass-1"),
        role=Role.ADMIN,
    )
    return users_repo.get_by_id(uid)


@pytest.fixture
def employee(users_repo):
    uid = users_repo.create_user(
        name="Kim",
        email="kim@example.com",
        password_hash=generate_password_hash("kim-pass-1"),
        role=Role.USER,
        hourly_rate=10000,
    )
    return users_repo.get_by_id(uid)


@pytest.fixture
def other_employee(users_repo):
    uid = users_repo.create_user(
        name="Lee",
        email="lee@example.com",
        password_hash=generate_password_hash("lee-pass-1"),
        role=Role.USER,
        hourly_rate=9500,
    )
    return users_repo.get_by_id(uid)


@pytest.fixture
def admin_identity(admin_user):
    return Identity(user_id=admin_user.user_id, role=Role.ADMIN)


@pytest.fixture
def employee_identity(employee):
    return Identity(user_id=employee.user_id, role=Role.USER)


@pytest.fixture
def fixed_today():
    return date(2026, 3, 16)


@pytest.fixture
def container(users_repo, work_logs_repo):
    return wire_services(
        users_repo=users_repo,
        work_logs_repo=work_logs_repo,
        jwt_secret=TEST_JWT_SECRET,
        default_hourly_rate=9000,
    )
