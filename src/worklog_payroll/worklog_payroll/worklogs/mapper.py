"""JSON payload <-> domain conversion for shifts.

Wire format is snake_case; dates are ``YYYY-MM-DD``, times ``HH:MM`` or
``HH:MM:SS``. Derived fields (``work_hours``, ``payment_amount``) sent by a
client are ignored; the service always recomputes them.
"""
from __future__ import annotations

from datetime import date, time
from typing import Any, Mapping, Optional

from ..common.datetime_utils import parse_clock_time, parse_iso_date
from ..common.validators import optional_rate, override_rate
from ..core.constants import DATE_FORMAT
from ..core.exceptions import ValidationError
from .model import ShiftChanges, ShiftInput, WorkLog

_CHANGEABLE = ("work_date", "start_time", "end_time", "hourly_rate", "memo")


def parse_date(value: Any, field_name: str = "work_date") -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    try:
        return parse_iso_date(str(value))
    except ValueError:
        raise ValidationError(f"{field_name} must be a date in YYYY-MM-DD format")


def parse_time(value: Any, field_name: str) -> Optional[time]:
    if value is None or value == "":
        return None
    if isinstance(value, time):
        return value
    try:
        return parse_clock_time(str(value))
    except ValueError:
        raise ValidationError(f"{field_name} must be a time in HH:MM format")


def parse_user_id(value: Any, field_name: str = "user_id") -> Optional[int]:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")


def _memo(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def shift_input_from_payload(payload: Mapping[str, Any], *, default_user_id: Optional[int] = None) -> ShiftInput:
    user_id = parse_user_id(payload.get("user_id"))
    return ShiftInput(
        user_id=user_id if user_id is not None else default_user_id,
        work_date=parse_date(payload.get("work_date")),
        start_time=parse_time(payload.get("start_time"), "start_time"),
        end_time=parse_time(payload.get("end_time"), "end_time"),
        hourly_rate=override_rate(payload.get("hourly_rate"), "hourly_rate"),
        memo=_memo(payload.get("memo")),
    )


def shift_changes_from_payload(payload: Mapping[str, Any]) -> ShiftChanges:
    values: dict[str, Any] = {}
    for key in _CHANGEABLE:
        if key not in payload:
            continue
        raw = payload[key]
        if key == "work_date":
            values[key] = parse_date(raw)
        elif key in ("start_time", "end_time"):
            values[key] = parse_time(raw, key)
        elif key == "hourly_rate":
            # null means "keep the shift's snapshot"
            if raw is not None and raw != "":
                values[key] = optional_rate(raw, "hourly_rate")
        else:
            values[key] = _memo(raw)
    return ShiftChanges(**values)


def work_log_to_dict(log: WorkLog) -> dict:
    return {
        "id": log.work_log_id,
        "user_id": log.user_id,
        "user_name": log.user_name,
        "work_date": log.work_date.strftime(DATE_FORMAT),
        "start_time": log.start_time.strftime("%H:%M"),
        "end_time": log.end_time.strftime("%H:%M"),
        "work_hours": float(log.work_hours),
        "hourly_rate": log.hourly_rate,
        "payment_amount": log.payment_amount,
        "memo": log.memo,
        "created_at": log.created_at.isoformat() if log.created_at else None,
    }
