from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Optional


@dataclass(frozen=True)
class WorkLog:
    """Domain entity: one recorded shift.

    ``hourly_rate`` is a snapshot taken when the shift was recorded;
    ``user_name`` is denormalized from the employee row for display.
    """

    work_log_id: int
    user_id: int
    work_date: date
    start_time: time
    end_time: time
    work_hours: Decimal
    hourly_rate: int
    payment_amount: int
    memo: Optional[str] = None
    user_name: str = ""
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class WorkLogRecord:
    """Row values written by insert/update (everything but the id)."""

    user_id: int
    work_date: date
    start_time: time
    end_time: time
    work_hours: Decimal
    hourly_rate: int
    payment_amount: int
    memo: Optional[str] = None


@dataclass(frozen=True)
class ShiftInput:
    """Caller-supplied fields for a new shift. None means "not provided"."""

    user_id: Optional[int]
    work_date: Optional[date]
    start_time: Optional[time]
    end_time: Optional[time]
    hourly_rate: Optional[int] = None
    memo: Optional[str] = None


UNSET: Any = object()


@dataclass(frozen=True)
class ShiftChanges:
    """Partial update of a shift; fields left as UNSET keep their stored value."""

    work_date: Any = UNSET
    start_time: Any = UNSET
    end_time: Any = UNSET
    hourly_rate: Any = UNSET
    memo: Any = UNSET

    def has(self, name: str) -> bool:
        return getattr(self, name) is not UNSET

    def is_empty(self) -> bool:
        return not any(self.has(f) for f in ("work_date", "start_time", "end_time", "hourly_rate", "memo"))
