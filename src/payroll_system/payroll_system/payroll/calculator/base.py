from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from ...attendance.model import AttendanceRecord


@dataclass(frozen=True)
class GrossPay:
    worked_days: int
    regular_hours: Decimal
    overtime_hours: Decimal
    daily_rate: Decimal
    hourly_rate: Decimal
    base_pay: Decimal
    overtime_pay: Decimal
    gross_pay: Decimal


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def gross_pay(
        self,
        *,
        monthly_salary: Decimal,
        attendance: Iterable[AttendanceRecord],
        overtime_rate: Decimal,
    ) -> GrossPay:
        raise NotImplementedError
