from __future__ import annotations

import calendar
from datetime import date, datetime, time

from ..core.constants import DATE_FORMAT, MONTH_FORMAT
from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, DATE_FORMAT).date()


def parse_clock_time(value: str) -> time:
    """Parse HH:MM or HH:MM:SS (HTML time inputs send either)."""
    v = value.strip()
    fmt = "%H:%M:%S" if v.count(":") == 2 else "%H:%M"
    return datetime.strptime(v, fmt).time()


def month_bounds(month: str) -> tuple[date, date]:
    """First and last day of a YYYY-MM month."""
    try:
        first = datetime.strptime(month.strip(), MONTH_FORMAT).date()
    except (AttributeError, ValueError):
        raise ValidationError("Month must be in YYYY-MM format")
    last_day = calendar.monthrange(first.year, first.month)[1]
    return first, first.replace(day=last_day)


def today_local() -> date:
    """Current local date.

    Note: Wrapped so tests can patch it.
    """
    return datetime.now().date()
