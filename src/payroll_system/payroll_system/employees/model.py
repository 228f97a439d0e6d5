from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class Employee:
    """Domain entity: Employee.

    Note: Plain data object; payroll only reads ``monthly_salary`` and ``is_active``.
    """

    employee_id: int
    code: str
    first_name: str
    last_name: str
    email: str
    department: str
    position: str
    monthly_salary: Decimal
    hire_date: date
    phone: Optional[str] = None
    is_active: bool = True
