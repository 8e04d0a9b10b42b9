from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import time
from decimal import Decimal


class PayCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def work_hours(self, start: time, end: time) -> Decimal:
        raise NotImplementedError

    @abstractmethod
    def payment_amount(self, hours: Decimal, hourly_rate: int) -> int:
        raise NotImplementedError
