from __future__ import annotations

import logging
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Callable, Optional, Sequence

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import months_before, now_local
from ..common.decimals import quantize_rate, to_decimal
from ..core.constants import DEFAULT_OVERTIME_RATE, DEFAULT_PAYSLIP_LOOKBACK_MONTHS
from ..core.exceptions import (
    EmployeeInactive,
    EmployeeNotFound,
    InvalidOvertimeRate,
    InvalidPeriod,
    PayslipNotFound,
    PersistenceFailure,
)
from ..deductions.repository import DeductionRuleRepository
from ..employees.repository import EmployeeRepository
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .deductions import apply_deductions, total_of
from .model import NewPayslip, Payslip
from .repository import PayslipRepository

logger = logging.getLogger(__name__)


class PayslipService:
    """Use case: generate payslips from salary, attendance and active deduction rules.

    Collaborators are injected; the service keeps no state between calls, so
    concurrent calls are independent. Repeating a call stores another payslip.
    """

    def __init__(
        self,
        employees: EmployeeRepository,
        attendance: AttendanceRepository,
        deductions: DeductionRuleRepository,
        payslips: PayslipRepository,
        *,
        calculator: Optional[PayrollCalculator] = None,
        clock: Optional[Callable[[], datetime]] = None,
        default_overtime_rate: Decimal = DEFAULT_OVERTIME_RATE,
    ):
        self._employees = employees
        self._attendance = attendance
        self._deductions = deductions
        self._payslips = payslips
        self._calculator = calculator or StandardPayrollCalculator()
        self._clock = clock or now_local
        self._default_overtime_rate = to_decimal(default_overtime_rate)

    def generate(
        self,
        employee_id: int,
        period_start: date,
        period_end: date,
        overtime_rate=None,
    ) -> Payslip:
        ctx = dict(employee_id=employee_id, period_start=period_start, period_end=period_end)
        logger.debug("Generating payslip for employee %s (%s..%s)", employee_id, period_start, period_end)

        if period_start > period_end:
            logger.warning("Rejected payslip for employee %s: period %s..%s", employee_id, period_start, period_end)
            raise InvalidPeriod("Pay period start date cannot be after end date", **ctx)

        employee = self._employees.get_by_id(employee_id)
        if not employee:
            logger.warning("Rejected payslip: employee %s not found", employee_id)
            raise EmployeeNotFound(f"Employee {employee_id} not found", **ctx)
        if not employee.is_active:
            logger.warning("Rejected payslip: employee %s is not active", employee_id)
            raise EmployeeInactive(f"Employee {employee_id} is not active", **ctx)

        rate = self._overtime_rate(overtime_rate, ctx)

        records = self._attendance.list_for_employee(employee_id, start_date=period_start, end_date=period_end)
        pay = self._calculator.gross_pay(
            monthly_salary=employee.monthly_salary,
            attendance=records,
            overtime_rate=rate,
        )

        lines = apply_deductions(pay.gross_pay, self._deductions.list_active())
        total_deductions = total_of(lines)

        new = NewPayslip(
            employee_id=employee_id,
            pay_period_start=period_start,
            pay_period_end=period_end,
            gross_pay=pay.gross_pay,
            total_deductions=total_deductions,
            net_pay=pay.gross_pay - total_deductions,
            regular_hours=pay.regular_hours,
            overtime_hours=pay.overtime_hours,
            overtime_rate=rate,
            deductions=lines,
            # DATETIME column keeps whole seconds
            generated_at=self._clock().replace(microsecond=0),
        )

        try:
            payslip = self._payslips.save(new)
        except PersistenceFailure:
            logger.error("Payslip store rejected payslip for employee %s (%s..%s)", employee_id, period_start, period_end)
            raise

        if payslip.net_pay < 0:
            logger.warning("Payslip %s has negative net pay %s", payslip.payslip_id, payslip.net_pay)
        logger.info(
            "Payslip %s generated for employee %s (%s..%s): gross=%s deductions=%s net=%s",
            payslip.payslip_id,
            employee_id,
            period_start,
            period_end,
            payslip.gross_pay,
            payslip.total_deductions,
            payslip.net_pay,
        )
        return payslip

    def _overtime_rate(self, value, ctx: dict) -> Decimal:
        """Positive rate rounded to 0.01; positive values that round to 0.00 are refused."""
        if value is None:
            return quantize_rate(self._default_overtime_rate)
        try:
            rate = to_decimal(value)
        except (TypeError, ValueError):
            raise InvalidOvertimeRate(f"Overtime rate must be a number, got {value!r}", **ctx)
        if not rate.is_finite():
            raise InvalidOvertimeRate(f"Overtime rate must be a number, got {value!r}", **ctx)
        # Stored with 2 decimals; compute with the same value the payslip records.
        try:
            rate = quantize_rate(rate)
        except InvalidOperation:
            raise InvalidOvertimeRate(f"Overtime rate out of range: {value!r}", **ctx)
        if rate <= 0:
            raise InvalidOvertimeRate(f"Overtime rate must be positive, got {value!r}", **ctx)
        return rate

    def get_payslip(self, payslip_id: int) -> Payslip:
        payslip = self._payslips.get_by_id(payslip_id)
        if not payslip:
            raise PayslipNotFound(payslip_id)
        return payslip

    def list_payslips(
        self,
        *,
        employee_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        today: Optional[date] = None,
    ) -> Sequence[Payslip]:
        if employee_id is None and start_date is None and end_date is None:
            today = today or self._clock().date()
            start_date = months_before(today, DEFAULT_PAYSLIP_LOOKBACK_MONTHS)
        return self._payslips.list(employee_id=employee_id, start_date=start_date, end_date=end_date)
