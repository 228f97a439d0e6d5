from __future__ import annotations

from datetime import date
from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""

    code = "DOMAIN_ERROR"


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    code = "VALIDATION_ERROR"


class PayslipError(DomainError):
    """Base for payslip failures.

    Every instance carries the request it failed on so callers can rebuild it,
    and a class-level ``code`` to switch on instead of parsing the message.
    """

    code = "PAYSLIP_ERROR"

    def __init__(
        self,
        message: str,
        *,
        employee_id: Optional[int] = None,
        period_start: Optional[date] = None,
        period_end: Optional[date] = None,
    ):
        super().__init__(message)
        self.employee_id = employee_id
        self.period_start = period_start
        self.period_end = period_end

    def context(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "period_start": self.period_start.isoformat() if self.period_start else None,
            "period_end": self.period_end.isoformat() if self.period_end else None,
        }


class InvalidPeriod(PayslipError):
    """pay_period_start is later than pay_period_end."""

    code = "INVALID_PERIOD"


class InvalidOvertimeRate(PayslipError):
    """Overtime multiplier is zero, negative or not a number."""

    code = "INVALID_OVERTIME_RATE"


class EmployeeNotFound(PayslipError):
    code = "EMPLOYEE_NOT_FOUND"


class EmployeeInactive(PayslipError):
    code = "EMPLOYEE_INACTIVE"


class PersistenceFailure(PayslipError):
    """The payslip store rejected the write; no payslip exists."""

    code = "PERSISTENCE_FAILURE"


class PayslipNotFound(DomainError):
    code = "PAYSLIP_NOT_FOUND"

    def __init__(self, payslip_id: int):
        super().__init__(f"Payslip {payslip_id} not found")
        self.payslip_id = payslip_id
