from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Callable, Optional

from ..auth.identity import Identity
from ..common.datetime_utils import today_local
from ..core.exceptions import ConflictError, ForbiddenError, MissingRateError, NotFoundError, ValidationError
from ..core.logger import get_logger
from ..payroll.calculator.base import PayCalculator
from ..payroll.calculator.standard_calculator import StandardPayCalculator
from ..users.repository import UserRepository
from .model import ShiftChanges, ShiftInput, WorkLog, WorkLogRecord
from .overlap import find_overlap
from .repository import WorkLogRepository

logger = get_logger("worklogs")


class WorkLogService:
    """Use case: record, edit, copy and list shifts.

    Every write goes through the same pipeline: authorize, validate the time
    range, resolve the rate, check overlap, compute hours and payment, persist.
    The repository repeats the overlap check inside its transaction.
    """

    def __init__(
        self,
        work_logs: WorkLogRepository,
        users: UserRepository,
        *,
        calculator: Optional[PayCalculator] = None,
        today: Callable[[], date] = today_local,
    ):
        self._work_logs = work_logs
        self._users = users
        self._calculator = calculator or StandardPayCalculator()
        self._today = today

    def _authorize(self, actor: Identity, user_id: int, action: str) -> None:
        if not actor.can_act_for(user_id):
            logger.warning(
                "Shift access denied",
                extra={"actor_id": actor.user_id, "user_id": user_id, "action": action},
            )
            raise ForbiddenError("You cannot access another employee's shifts")

    def _load(self, work_log_id: int) -> WorkLog:
        log = self._work_logs.get_by_id(int(work_log_id))
        if not log:
            raise NotFoundError("Work log not found")
        return log

    def _reject_overlap(self, record: WorkLogRecord, *, exclude_id: Optional[int] = None) -> None:
        existing = self._work_logs.list_for_user_and_date(record.user_id, record.work_date)
        clash = find_overlap(existing, record.start_time, record.end_time, exclude_id=exclude_id)
        if clash:
            logger.warning(
                "Overlapping shift rejected",
                extra={"user_id": record.user_id, "work_date": record.work_date, "clash_id": clash.work_log_id},
            )
            raise ConflictError("A shift already exists in that time range")

    def _build(
        self,
        *,
        user_id: int,
        work_date: date,
        start,
        end,
        hourly_rate: int,
        memo: Optional[str],
        hours: Optional[Decimal] = None,
    ) -> WorkLogRecord:
        if hours is None:
            hours = self._calculator.work_hours(start, end)
        return WorkLogRecord(
            user_id=user_id,
            work_date=work_date,
            start_time=start,
            end_time=end,
            work_hours=hours,
            hourly_rate=hourly_rate,
            payment_amount=self._calculator.payment_amount(hours, hourly_rate),
            memo=memo,
        )

    def record_shift(self, *, actor: Identity, shift: ShiftInput) -> WorkLog:
        if shift.user_id is None or shift.work_date is None or shift.start_time is None or shift.end_time is None:
            raise ValidationError("user_id, work_date, start_time and end_time are required")

        self._authorize(actor, shift.user_id, "record")
        hours = self._calculator.work_hours(shift.start_time, shift.end_time)

        employee = self._users.get_by_id(int(shift.user_id))
        if not employee:
            raise NotFoundError("Employee not found")

        if shift.hourly_rate is not None and int(shift.hourly_rate) > 0:
            rate = int(shift.hourly_rate)
        elif employee.hourly_rate:
            rate = int(employee.hourly_rate)
        else:
            raise MissingRateError("No hourly rate given and the employee has no default rate")

        record = self._build(
            user_id=employee.user_id,
            work_date=shift.work_date,
            start=shift.start_time,
            end=shift.end_time,
            hourly_rate=rate,
            memo=shift.memo,
            hours=hours,
        )
        self._reject_overlap(record)

        work_log_id = self._work_logs.insert(record)
        logger.info(
            "Shift recorded",
            extra={"work_log_id": work_log_id, "user_id": record.user_id, "actor_id": actor.user_id},
        )
        return self._load(work_log_id)

    def update_shift(self, *, actor: Identity, work_log_id: int, changes: ShiftChanges) -> WorkLog:
        current = self._load(work_log_id)
        self._authorize(actor, current.user_id, "update")

        if changes.is_empty():
            raise ValidationError("Nothing to update")

        work_date = changes.work_date if changes.has("work_date") else current.work_date
        start = changes.start_time if changes.has("start_time") else current.start_time
        end = changes.end_time if changes.has("end_time") else current.end_time
        if work_date is None or start is None or end is None:
            raise ValidationError("work_date, start_time and end_time cannot be empty")

        if changes.has("hourly_rate") and changes.hourly_rate is not None:
            if int(changes.hourly_rate) <= 0:
                raise ValidationError("hourly_rate must be greater than zero")
            rate = int(changes.hourly_rate)
        else:
            rate = current.hourly_rate

        times_changed = start != current.start_time or end != current.end_time
        record = self._build(
            user_id=current.user_id,
            work_date=work_date,
            start=start,
            end=end,
            hourly_rate=rate,
            memo=changes.memo if changes.has("memo") else current.memo,
            hours=None if times_changed else current.work_hours,
        )
        self._reject_overlap(record, exclude_id=current.work_log_id)

        if not self._work_logs.update(current.work_log_id, record):
            raise NotFoundError("Work log not found")

        logger.info(
            "Shift updated",
            extra={"work_log_id": current.work_log_id, "user_id": current.user_id, "actor_id": actor.user_id},
        )
        return self._load(current.work_log_id)

    def delete_shift(self, *, actor: Identity, work_log_id: int) -> None:
        current = self._load(work_log_id)
        self._authorize(actor, current.user_id, "delete")

        if not self._work_logs.delete(current.work_log_id):
            raise NotFoundError("Work log not found")
        logger.info(
            "Shift deleted",
            extra={"work_log_id": current.work_log_id, "user_id": current.user_id, "actor_id": actor.user_id},
        )

    def get_shift(self, *, actor: Identity, work_log_id: int) -> WorkLog:
        log = self._load(work_log_id)
        self._authorize(actor, log.user_id, "view")
        return log

    def list_shifts(
        self,
        *,
        actor: Identity,
        start_date: date,
        end_date: date,
        user_id: Optional[int] = None,
    ) -> list[WorkLog]:
        if start_date is None or end_date is None:
            raise ValidationError("start_date and end_date are required")
        if start_date > end_date:
            raise ValidationError("start_date must not be after end_date")

        # Non-admins only ever see their own shifts; a filter they send is ignored
        if not actor.is_admin:
            user_id = actor.user_id

        return list(self._work_logs.list_between(start_date=start_date, end_date=end_date, user_id=user_id))

    def copy_shift(self, *, actor: Identity, work_log_id: int, target_date: Optional[date] = None) -> WorkLog:
        source = self._load(work_log_id)
        self._authorize(actor, source.user_id, "copy")

        target_date = target_date or self._today()
        if target_date == source.work_date:
            raise ValidationError("The shift is already on that date")

        record = WorkLogRecord(
            user_id=source.user_id,
            work_date=target_date,
            start_time=source.start_time,
            end_time=source.end_time,
            work_hours=source.work_hours,
            hourly_rate=source.hourly_rate,
            payment_amount=source.payment_amount,
            memo=source.memo,
        )
        self._reject_overlap(record)

        new_id = self._work_logs.insert(record)
        logger.info(
            "Shift copied",
            extra={"work_log_id": new_id, "source_id": source.work_log_id, "actor_id": actor.user_id},
        )
        return self._load(new_id)
