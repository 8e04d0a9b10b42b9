"""Overlap policy for shifts of one employee on one date.

Intervals are half-open ``[start, end)``: a shift ending at 12:00 and another
starting at 12:00 do not overlap. The SQL guard in
``mysql_worklog_repository`` uses the same predicate.
"""
from __future__ import annotations

from datetime import time
from typing import Iterable, Optional

from .model import WorkLog


def overlaps(start_a: time, end_a: time, start_b: time, end_b: time) -> bool:
    return start_a < end_b and start_b < end_a


def find_overlap(
    existing: Iterable[WorkLog],
    start: time,
    end: time,
    *,
    exclude_id: Optional[int] = None,
) -> Optional[WorkLog]:
    for log in existing:
        if exclude_id is not None and log.work_log_id == exclude_id:
            continue
        if overlaps(start, end, log.start_time, log.end_time):
            return log
    return None
