from __future__ import annotations

from decimal import Decimal
from typing import Iterable

from ...attendance.model import AttendanceRecord
from ...common.decimals import quantize_hours, quantize_money
from ...core.constants import DAYS_PER_MONTH, STANDARD_WORKDAY_HOURS
from .base import GrossPay, PayrollCalculator


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: salary / 30 per present day, plus overtime at (daily rate / 8) * multiplier.

    The 30-day month and 8-hour day are fixed policies; they do not follow the
    real length of the pay period.
    """

    def __init__(self, *, days_per_month: int = DAYS_PER_MONTH, hours_per_day: int = STANDARD_WORKDAY_HOURS):
        if days_per_month <= 0 or hours_per_day <= 0:
            raise ValueError("days_per_month and hours_per_day must be positive")
        self._days_per_month = Decimal(days_per_month)
        self._hours_per_day = Decimal(hours_per_day)

    def gross_pay(
        self,
        *,
        monthly_salary: Decimal,
        attendance: Iterable[AttendanceRecord],
        overtime_rate: Decimal,
    ) -> GrossPay:
        daily_rate = monthly_salary / self._days_per_month
        hourly_rate = daily_rate / self._hours_per_day

        worked_days = 0
        regular_hours = Decimal("0")
        overtime_hours = Decimal("0")
        for record in attendance:
            if not record.is_present:
                continue
            worked_days += 1
            regular_hours += record.hours_worked
            overtime_hours += record.overtime_hours

        base_pay = daily_rate * worked_days
        overtime_pay = overtime_hours * hourly_rate * overtime_rate

        return GrossPay(
            worked_days=worked_days,
            regular_hours=quantize_hours(regular_hours),
            overtime_hours=quantize_hours(overtime_hours),
            daily_rate=daily_rate,
            hourly_rate=hourly_rate,
            base_pay=base_pay,
            overtime_pay=overtime_pay,
            gross_pay=quantize_money(base_pay + overtime_pay),
        )
