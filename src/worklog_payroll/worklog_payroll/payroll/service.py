from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from ..auth.identity import Identity
from ..common.datetime_utils import month_bounds
from ..core.exceptions import ForbiddenError, NotFoundError
from ..core.logger import get_logger
from ..users.repository import UserRepository
from ..worklogs.mapper import work_log_to_dict
from ..worklogs.model import WorkLog
from ..worklogs.repository import WorkLogRepository

logger = get_logger("payroll")


@dataclass(frozen=True)
class ReportData:
    month: str
    rows: list[dict]
    summary: dict


@dataclass(frozen=True)
class SalarySlip:
    month: str
    employee: dict
    work_logs: list[dict]
    summary: dict


def _summarize(logs: list[WorkLog]) -> dict:
    total_hours = sum((log.work_hours for log in logs), Decimal("0"))
    return {
        "work_days": len({log.work_date for log in logs}),
        "total_hours": float(total_hours),
        "total_payment": sum(log.payment_amount for log in logs),
    }


class PayrollReportService:
    """Monthly sums per employee, built from the stored shift snapshots."""

    def __init__(self, work_logs: WorkLogRepository, users: UserRepository):
        self._work_logs = work_logs
        self._users = users

    def monthly_report(self, *, actor: Identity, month: str) -> ReportData:
        if not actor.is_admin:
            raise ForbiddenError("Administrator privileges are required")

        first, last = month_bounds(month)
        logs = self._work_logs.list_between(start_date=first, end_date=last)

        by_user: dict[int, list[WorkLog]] = {}
        for log in logs:
            by_user.setdefault(log.user_id, []).append(log)

        rates = {u.user_id: u.hourly_rate for u in self._users.list_all()}

        rows = []
        for user_id, user_logs in by_user.items():
            row = {
                "user_id": user_id,
                "user_name": user_logs[0].user_name,
                "hourly_rate": rates.get(user_id),
            }
            row.update(_summarize(user_logs))
            rows.append(row)
        rows.sort(key=lambda r: (r["user_name"], r["user_id"]))

        summary = {"employees": len(rows)}
        summary.update(_summarize(list(logs)))

        logger.info("Monthly report built", extra={"month": month, "actor_id": actor.user_id, "employees": len(rows)})
        return ReportData(month=first.strftime("%Y-%m"), rows=rows, summary=summary)

    def salary_slip(self, *, actor: Identity, month: str, user_id: Optional[int] = None) -> SalarySlip:
        target_id = int(user_id) if (actor.is_admin and user_id is not None) else actor.user_id

        employee = self._users.get_by_id(target_id)
        if not employee:
            raise NotFoundError("Employee not found")

        first, last = month_bounds(month)
        logs = list(self._work_logs.list_between(start_date=first, end_date=last, user_id=target_id))
        logs.sort(key=lambda log: (log.work_date, log.start_time))

        return SalarySlip(
            month=first.strftime("%Y-%m"),
            employee={
                "id": employee.user_id,
                "name": employee.name,
                "email": employee.email,
                "phone_number": employee.phone_number,
                "hourly_rate": employee.hourly_rate,
            },
            work_logs=[work_log_to_dict(log) for log in logs],
            summary=_summarize(logs),
        )
