from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.exceptions import ConflictError, NotFoundError
from ..core.logger import get_logger
from ..database.connection import DatabaseConnection
from ..database.mysql_base import (
    db_cursor,
    fetchall,
    fetchone,
    normalize_mysql_decimal,
    normalize_mysql_time,
)
from .model import WorkLog, WorkLogRecord
from .repository import WorkLogRepository

logger = get_logger("worklogs.mysql")

_SELECT = """
    SELECT w.work_log_id, w.user_id, w.work_date, w.start_time, w.end_time,
           w.work_hours, w.hourly_rate, w.payment_amount, w.memo, w.created_at,
           u.name AS user_name
    FROM work_logs w
    JOIN users u ON u.user_id = w.user_id
"""


def _to_work_log(r: dict) -> WorkLog:
    return WorkLog(
        work_log_id=int(r["work_log_id"]),
        user_id=int(r["user_id"]),
        work_date=r["work_date"],
        start_time=normalize_mysql_time(r["start_time"]),
        end_time=normalize_mysql_time(r["end_time"]),
        work_hours=normalize_mysql_decimal(r["work_hours"]),
        hourly_rate=int(r["hourly_rate"]),
        payment_amount=int(r["payment_amount"]),
        memo=r.get("memo"),
        user_name=r.get("user_name") or "",
        created_at=r.get("created_at"),
    )


class MySQLWorkLogRepository(WorkLogRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _lock_employee(cur, user_id: int) -> None:
        # Row lock on the employee serializes concurrent shift writes for them
        cur.execute("SELECT user_id FROM users WHERE user_id=%s FOR UPDATE", (user_id,))
        if not fetchone(cur):
            raise NotFoundError("Employee not found")

    @staticmethod
    def _guard_overlap(cur, record: WorkLogRecord, *, exclude_id: Optional[int] = None) -> None:
        sql = """
            SELECT work_log_id FROM work_logs
            WHERE user_id=%s AND work_date=%s AND start_time < %s AND end_time > %s
        """
        params: list = [record.user_id, record.work_date, record.end_time, record.start_time]
        if exclude_id is not None:
            sql += " AND work_log_id <> %s"
            params.append(exclude_id)
        cur.execute(sql + " LIMIT 1", tuple(params))
        clash = fetchone(cur)
        if clash:
            logger.warning(
                "Overlap rejected inside transaction",
                extra={"user_id": record.user_id, "work_date": record.work_date, "clash_id": clash["work_log_id"]},
            )
            raise ConflictError("A shift already exists in that time range")

    def get_by_id(self, work_log_id: int) -> Optional[WorkLog]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE w.work_log_id=%s", (work_log_id,))
            r = fetchone(cur)
            return _to_work_log(r) if r else None

    def list_for_user_and_date(self, user_id: int, work_date: date) -> Sequence[WorkLog]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + " WHERE w.user_id=%s AND w.work_date=%s ORDER BY w.start_time",
                (user_id, work_date),
            )
            return [_to_work_log(r) for r in fetchall(cur)]

    def insert(self, record: WorkLogRecord) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            self._lock_employee(cur, record.user_id)
            self._guard_overlap(cur, record)
            cur.execute(
                """
                INSERT INTO work_logs(user_id, work_date, start_time, end_time,
                                      work_hours, hourly_rate, payment_amount, memo)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    record.user_id,
                    record.work_date,
                    record.start_time,
                    record.end_time,
                    record.work_hours,
                    record.hourly_rate,
                    record.payment_amount,
                    record.memo,
                ),
            )
            return int(cur.lastrowid)

    def update(self, work_log_id: int, record: WorkLogRecord) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            self._lock_employee(cur, record.user_id)
            cur.execute("SELECT work_log_id FROM work_logs WHERE work_log_id=%s FOR UPDATE", (work_log_id,))
            if not fetchone(cur):
                return False
            self._guard_overlap(cur, record, exclude_id=work_log_id)
            cur.execute(
                """
                UPDATE work_logs
                SET work_date=%s, start_time=%s, end_time=%s, work_hours=%s,
                    hourly_rate=%s, payment_amount=%s, memo=%s
                WHERE work_log_id=%s
                """,
                (
                    record.work_date,
                    record.start_time,
                    record.end_time,
                    record.work_hours,
                    record.hourly_rate,
                    record.payment_amount,
                    record.memo,
                    work_log_id,
                ),
            )
            return True

    def delete(self, work_log_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM work_logs WHERE work_log_id=%s", (work_log_id,))
            return cur.rowcount > 0

    def list_between(
        self,
        *,
        start_date: date,
        end_date: date,
        user_id: Optional[int] = None,
    ) -> Sequence[WorkLog]:
        sql = _SELECT + " WHERE w.work_date BETWEEN %s AND %s"
        params: list = [start_date, end_date]
        if user_id is not None:
            sql += " AND w.user_id=%s"
            params.append(int(user_id))
        sql += " ORDER BY w.work_date DESC, w.start_time ASC, w.work_log_id ASC"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_to_work_log(r) for r in fetchall(cur)]
