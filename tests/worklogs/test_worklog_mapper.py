from datetime import date, datetime, time
from decimal import Decimal

import pytest

from src.worklog_payroll.worklog_payroll.core.exceptions import ValidationError
from src.worklog_payroll.worklog_payroll.worklogs.mapper import (
    shift_changes_from_payload,
    shift_input_from_payload,
    work_log_to_dict,
)
from src.worklog_payroll.worklog_payroll.worklogs.model import WorkLog


def test_shift_input_accepts_both_time_formats_and_default_user():
    shift = shift_input_from_payload(
        {"work_date": "2026-03-02", "start_time": "09:00", "end_time": "17:30:00", "memo": "  "},
        default_user_id=7,
    )
    assert shift.user_id == 7
    assert shift.work_date == date(2026, 3, 2)
    assert shift.start_time == time(9, 0)
    assert shift.end_time == time(17, 30)
    assert shift.hourly_rate is None
    assert shift.memo is None


@pytest.mark.parametrize(
    "payload",
    [
        {"work_date": "03/02/2026"},
        {"start_time": "9am"},
        {"user_id": "abc"},
        {"hourly_rate": "lots"},
    ],
)
def test_malformed_fields_raise_validation_error(payload):
    with pytest.raises(ValidationError):
        shift_input_from_payload(payload)


def test_changes_only_carry_present_keys():
    changes = shift_changes_from_payload({"end_time": "18:00", "hourly_rate": None})
    assert changes.has("end_time")
    assert not changes.has("start_time")
    # null rate keeps the stored snapshot
    assert not changes.has("hourly_rate")
    assert shift_changes_from_payload({}).is_empty()


def test_work_log_to_dict_uses_snake_case_wire_format():
    log = WorkLog(
        work_log_id=3,
        user_id=1,
        work_date=date(2026, 3, 2),
        start_time=time(9, 0),
        end_time=time(17, 30),
        work_hours=Decimal("8.50"),
        hourly_rate=10000,
        payment_amount=85000,
        memo="inventory",
        user_name="Kim",
        created_at=datetime(2026, 3, 2, 18, 0),
    )
    assert work_log_to_dict(log) == {
        "id": 3,
        "user_id": 1,
        "user_name": "Kim",
        "work_date": "2026-03-02",
        "start_time": "09:00",
        "end_time": "17:30",
        "work_hours": 8.5,
        "hourly_rate": 10000,
        "payment_amount": 85000,
        "memo": "inventory",
        "created_at": "2026-03-02T18:00:00",
    }


@pytest.mark.parametrize("raw", [0, -5, "-100", "0.4"])
def test_non_positive_override_rate_means_not_given(raw):
    shift = shift_input_from_payload({"hourly_rate": raw}, default_user_id=1)
    assert shift.hourly_rate is None


def test_negative_rate_on_update_is_still_rejected():
    with pytest.raises(ValidationError):
        shift_changes_from_payload({"hourly_rate": -5})
