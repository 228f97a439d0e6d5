from __future__ import annotations

from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Optional

import pytest

from src.payroll_system.payroll_system.attendance.model import AttendanceRecord
from src.payroll_system.payroll_system.core.enums import DeductionKind
from src.payroll_system.payroll_system.core.exceptions import (
    EmployeeInactive,
    EmployeeNotFound,
    InvalidOvertimeRate,
    InvalidPeriod,
    PayslipNotFound,
    PersistenceFailure,
)
from src.payroll_system.payroll_system.deductions.model import DeductionRule
from src.payroll_system.payroll_system.employees.model import Employee
from src.payroll_system.payroll_system.payroll.model import NewPayslip, Payslip
from src.payroll_system.payroll_system.payroll.service import PayslipService


def make_employee(employee_id=1, *, salary="5000", active=True) -> Employee:
    return Employee(
        employee_id=employee_id,
        code=f"EMP{employee_id:03d}",
        first_name="Alice",
        last_name="Nguyen",
        email=f"e{employee_id}@example.com",
        department="Engineering",
        position="Developer",
        monthly_salary=Decimal(salary),
        hire_date=date(2023, 3, 1),
        is_active=active,
    )


def make_day(work_date: date, *, present=True, hours="8", overtime="0", employee_id=1) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=work_date.toordinal(),
        employee_id=employee_id,
        work_date=work_date,
        is_present=present,
        hours_worked=Decimal(hours),
        overtime_hours=Decimal(overtime),
    )


class InMemoryEmployees:
    def __init__(self, *employees: Employee):
        self._by_id = {e.employee_id: e for e in employees}

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self._by_id.get(employee_id)


class InMemoryAttendance:
    def __init__(self, records):
        self._records = list(records)
        self.last_args = None

    def list_for_employee(self, employee_id, *, start_date, end_date):
        self.last_args = {"employee_id": employee_id, "start_date": start_date, "end_date": end_date}
        return [
            r for r in self._records
            if r.employee_id == employee_id and start_date <= r.work_date <= end_date
        ]


class InMemoryDeductions:
    def __init__(self, rules):
        self.rules = list(rules)

    def list_active(self):
        return [r for r in self.rules if r.is_active]


class InMemoryPayslips:
    def __init__(self):
        self._next_id = 1
        self.saved: list[Payslip] = []
        self.last_list_args = None

    def save(self, payslip: NewPayslip) -> Payslip:
        stored = Payslip.from_new(self._next_id, payslip)
        self._next_id += 1
        self.saved.append(stored)
        return stored

    def get_by_id(self, payslip_id):
        return next((p for p in self.saved if p.payslip_id == payslip_id), None)

    def list(self, *, employee_id=None, start_date=None, end_date=None):
        self.last_list_args = {"employee_id": employee_id, "start_date": start_date, "end_date": end_date}
        return list(reversed(self.saved))


class FailingPayslips(InMemoryPayslips):
    def save(self, payslip: NewPayslip) -> Payslip:
        raise PersistenceFailure(
            "storage unavailable",
            employee_id=payslip.employee_id,
            period_start=payslip.pay_period_start,
            period_end=payslip.pay_period_end,
        )


class TickingClock:
    def __init__(self, start: datetime):
        self._now = start

    def __call__(self) -> datetime:
        now = self._now
        self._now += timedelta(seconds=1)
        return now


TAX = DeductionRule(rule_id=1, name="Income Tax", kind=DeductionKind.PERCENTAGE, value=Decimal("0.15"))
HEALTH = DeductionRule(rule_id=2, name="Health Insurance", kind=DeductionKind.FIXED, value=Decimal("100"))

JAN_5 = date(2026, 1, 5)
JAN_6 = date(2026, 1, 6)
JAN_7 = date(2026, 1, 7)
JAN_8 = date(2026, 1, 8)


def build_service(*, employees=None, records=(), rules=(), payslips=None):
    payslips = payslips if payslips is not None else InMemoryPayslips()
    svc = PayslipService(
        employees or InMemoryEmployees(make_employee()),
        InMemoryAttendance(records),
        InMemoryDeductions(rules),
        payslips,
        clock=TickingClock(datetime(2026, 2, 1, 9, 0, 0)),
    )
    return svc, payslips


def test_generates_reference_payslip():
    records = [
        make_day(JAN_5, overtime="1"),
        make_day(JAN_6, overtime="2"),
        make_day(JAN_7),
    ]
    svc, store = build_service(records=records, rules=[TAX, HEALTH])

    p = svc.generate(1, date(2026, 1, 1), date(2026, 1, 31), overtime_rate=Decimal("1.5"))

    assert p.payslip_id == 1
    assert p.gross_pay == Decimal("593.75")
    assert p.regular_hours == Decimal("24.00")
    assert p.overtime_hours == Decimal("3.00")
    assert p.overtime_rate == Decimal("1.50")
    assert [(l.name, l.amount) for l in p.deductions] == [
        ("Income Tax", Decimal("89.06")),
        ("Health Insurance", Decimal("100.00")),
    ]
    assert p.total_deductions == Decimal("189.06")
    assert p.net_pay == Decimal("404.69")
    assert p.generated_at == datetime(2026, 2, 1, 9, 0, 0)
    assert store.saved == [p]


def test_invariants_hold_exactly():
    records = [make_day(JAN_5, hours="7.25", overtime="1.75"), make_day(JAN_6, hours="8", overtime="0.5")]
    rules = [
        TAX,
        DeductionRule(rule_id=3, name="Pension", kind=DeductionKind.PERCENTAGE, value=Decimal("0.0333")),
        HEALTH,
    ]
    svc, _ = build_service(employees=InMemoryEmployees(make_employee(salary="4321.09")), records=records, rules=rules)

    p = svc.generate(1, JAN_5, JAN_6, overtime_rate="1.75")

    assert p.net_pay == p.gross_pay - p.total_deductions
    assert p.total_deductions == sum(l.amount for l in p.deductions)


def test_zero_attendance_with_fixed_rule_gives_negative_net():
    svc, store = build_service(rules=[HEALTH])

    p = svc.generate(1, date(2026, 1, 1), date(2026, 1, 31))

    assert p.gross_pay == Decimal("0.00")
    assert p.regular_hours == Decimal("0.00")
    assert p.overtime_hours == Decimal("0.00")
    assert p.total_deductions == Decimal("100.00")
    assert p.net_pay == Decimal("-100.00")
    assert len(store.saved) == 1


def test_no_active_rules_means_net_equals_gross():
    inactive = DeductionRule(
        rule_id=5, name="Old Tax", kind=DeductionKind.PERCENTAGE, value=Decimal("0.3"), is_active=False
    )
    svc, _ = build_service(records=[make_day(JAN_5)], rules=[inactive])

    p = svc.generate(1, JAN_5, JAN_5)

    assert p.deductions == ()
    assert p.total_deductions == Decimal("0.00")
    assert p.net_pay == p.gross_pay


def test_absent_days_do_not_count():
    records = [make_day(JAN_5), make_day(JAN_6, present=False, hours="8", overtime="3")]
    svc, _ = build_service(records=records)

    p = svc.generate(1, JAN_5, JAN_6)

    assert p.regular_hours == Decimal("8.00")
    assert p.overtime_hours == Decimal("0.00")
    assert p.gross_pay == Decimal("166.67")


def test_single_day_period_is_accepted():
    svc, _ = build_service(records=[make_day(JAN_7, overtime="1"), make_day(JAN_8)])

    p = svc.generate(1, JAN_7, JAN_7)

    assert p.pay_period_start == p.pay_period_end == JAN_7
    assert p.regular_hours == Decimal("8.00")
    assert p.overtime_hours == Decimal("1.00")


def test_attendance_query_uses_inclusive_period():
    attendance = InMemoryAttendance([make_day(JAN_5), make_day(JAN_6), make_day(JAN_7)])
    svc = PayslipService(InMemoryEmployees(make_employee()), attendance, InMemoryDeductions([]), InMemoryPayslips())

    p = svc.generate(1, JAN_5, JAN_7)

    assert attendance.last_args == {"employee_id": 1, "start_date": JAN_5, "end_date": JAN_7}
    assert p.regular_hours == Decimal("24.00")


def test_default_overtime_rate_is_one_and_a_half():
    svc, _ = build_service(records=[make_day(JAN_5, overtime="2")])

    p = svc.generate(1, JAN_5, JAN_5)

    assert p.overtime_rate == Decimal("1.50")


def test_repeated_generation_stores_independent_payslips():
    svc, store = build_service(records=[make_day(JAN_5, overtime="1")], rules=[TAX, HEALTH])

    first = svc.generate(1, JAN_5, JAN_5)
    second = svc.generate(1, JAN_5, JAN_5)

    assert first.payslip_id != second.payslip_id
    assert first.generated_at != second.generated_at
    assert (first.gross_pay, first.total_deductions, first.net_pay) == (
        second.gross_pay,
        second.total_deductions,
        second.net_pay,
    )
    assert first.deductions == second.deductions
    assert len(store.saved) == 2


def test_deduction_lines_survive_rule_changes():
    deductions = InMemoryDeductions([TAX])
    store = InMemoryPayslips()
    svc = PayslipService(
        InMemoryEmployees(make_employee()),
        InMemoryAttendance([make_day(JAN_5)]),
        deductions,
        store,
    )
    p = svc.generate(1, JAN_5, JAN_5)

    deductions.rules = [
        DeductionRule(rule_id=1, name="Income Tax", kind=DeductionKind.PERCENTAGE, value=Decimal("0.5"), is_active=False)
    ]

    stored = svc.get_payslip(p.payslip_id)
    assert stored.deductions[0].value == Decimal("0.15")
    assert stored.deductions[0].amount == Decimal("25.00")


def test_invalid_period_is_checked_first():
    svc, store = build_service(employees=InMemoryEmployees())

    with pytest.raises(InvalidPeriod) as exc:
        svc.generate(1, JAN_7, JAN_5)

    assert exc.value.employee_id == 1
    assert exc.value.period_start == JAN_7
    assert exc.value.period_end == JAN_5
    assert store.saved == []


def test_unknown_employee_is_not_written():
    svc, store = build_service()

    with pytest.raises(EmployeeNotFound) as exc:
        svc.generate(9999, JAN_5, JAN_7)

    assert exc.value.code == "EMPLOYEE_NOT_FOUND"
    assert exc.value.context() == {"employee_id": 9999, "period_start": "2026-01-05", "period_end": "2026-01-07"}
    assert store.saved == []


def test_inactive_employee_is_refused():
    svc, store = build_service(employees=InMemoryEmployees(make_employee(active=False)))

    with pytest.raises(EmployeeInactive):
        svc.generate(1, JAN_5, JAN_7, overtime_rate=0)

    assert store.saved == []


@pytest.mark.parametrize("rate", [0, -1, "abc", "0.001", "NaN"])
def test_rejects_non_positive_overtime_rate(rate):
    svc, store = build_service()

    with pytest.raises(InvalidOvertimeRate):
        svc.generate(1, JAN_5, JAN_7, overtime_rate=rate)

    assert store.saved == []


def test_persistence_failure_propagates():
    svc, _ = build_service(records=[make_day(JAN_5)], payslips=FailingPayslips())

    with pytest.raises(PersistenceFailure) as exc:
        svc.generate(1, JAN_5, JAN_5)

    assert exc.value.employee_id == 1


def test_get_payslip_missing_raises():
    svc, _ = build_service()

    with pytest.raises(PayslipNotFound):
        svc.get_payslip(42)


def test_list_without_filters_defaults_to_six_months():
    svc, store = build_service()

    svc.list_payslips(today=date(2026, 8, 31))

    assert store.last_list_args == {"employee_id": None, "start_date": date(2026, 2, 28), "end_date": None}


def test_list_forwards_filters():
    svc, store = build_service()

    svc.list_payslips(employee_id=3, end_date=JAN_7)

    assert store.last_list_args == {"employee_id": 3, "start_date": None, "end_date": JAN_7}


def test_generated_at_is_truncated_to_whole_seconds():
    svc = PayslipService(
        InMemoryEmployees(make_employee()),
        InMemoryAttendance([make_day(JAN_5)]),
        InMemoryDeductions([]),
        InMemoryPayslips(),
        clock=lambda: datetime(2026, 2, 1, 9, 0, 0, 654321),
    )

    p = svc.generate(1, JAN_5, JAN_5)

    assert p.generated_at == datetime(2026, 2, 1, 9, 0, 0)


def test_positive_rate_that_rounds_to_zero_is_refused():
    svc, _ = build_service()

    with pytest.raises(InvalidOvertimeRate):
        svc.generate(1, JAN_5, JAN_7, overtime_rate="0.004")

    assert svc.generate(1, JAN_5, JAN_7, overtime_rate="0.005").overtime_rate == Decimal("0.01")
