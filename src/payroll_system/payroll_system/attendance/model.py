from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's attendance for one day.

    Absent days may still carry hours; payroll ignores them.
    """

    attendance_id: int
    employee_id: int
    work_date: date
    is_present: bool
    hours_worked: Decimal = Decimal("0")
    overtime_hours: Decimal = Decimal("0")
    notes: Optional[str] = None
