from __future__ import annotations

from datetime import date, datetime, time
from decimal import ROUND_HALF_UP, Decimal

from ...core.constants import HOURS_QUANTUM
from ...core.exceptions import InvalidTimeRangeError
from .base import PayCalculator

_SECONDS_PER_HOUR = Decimal(3600)


def compute_hours(start: time, end: time) -> Decimal:
    """Wall-clock hours between two times of the same day, 2 decimals, half-up.

    Shifts never cross midnight, so ``end`` must be after ``start`` and the
    rounded result must stay positive.
    """
    if end <= start:
        raise InvalidTimeRangeError("End time must be after start time")

    delta = datetime.combine(date.min, end) - datetime.combine(date.min, start)
    hours = (Decimal(int(delta.total_seconds())) / _SECONDS_PER_HOUR).quantize(
        Decimal(HOURS_QUANTUM), rounding=ROUND_HALF_UP
    )
    if hours <= 0:
        raise InvalidTimeRangeError("Shift is too short to record")
    return hours


def compute_payment(hours: Decimal, hourly_rate: int) -> int:
    """round(hours * rate) to a whole currency unit, half-up."""
    amount = Decimal(str(hours)) * Decimal(int(hourly_rate))
    return int(amount.quantize(Decimal(1), rounding=ROUND_HALF_UP))


class StandardPayCalculator(PayCalculator):
    """Standard rule: plain hourly pay, no breaks or overtime multipliers."""

    def work_hours(self, start: time, end: time) -> Decimal:
        return compute_hours(start, end)

    def payment_amount(self, hours: Decimal, hourly_rate: int) -> int:
        return compute_payment(hours, hourly_rate)
