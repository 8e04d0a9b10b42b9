from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import WorkLog, WorkLogRecord


class WorkLogRepository(Protocol):
    """Persistence for shifts.

    ``insert`` and ``update`` must re-check the overlap policy atomically with
    the write and raise ``ConflictError`` when another shift of the same
    employee and date overlaps.
    """

    def get_by_id(self, work_log_id: int) -> Optional[WorkLog]:
        raise NotImplementedError

    def list_for_user_and_date(self, user_id: int, work_date: date) -> Sequence[WorkLog]:
        raise NotImplementedError

    def insert(self, record: WorkLogRecord) -> int:
        raise NotImplementedError

    def update(self, work_log_id: int, record: WorkLogRecord) -> bool:
        raise NotImplementedError

    def delete(self, work_log_id: int) -> bool:
        raise NotImplementedError

    def list_between(
        self,
        *,
        start_date: date,
        end_date: date,
        user_id: Optional[int] = None,
    ) -> Sequence[WorkLog]:
        """Shifts in [start_date, end_date], newest day first, earliest start first within a day."""
        raise NotImplementedError
