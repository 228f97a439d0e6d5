from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Tuple

from ..core.enums import DeductionKind


@dataclass(frozen=True)
class DeductionLine:
    """Point-in-time copy of one applied rule.

    Holds the rule's name/kind/value as they were at generation time so the
    payslip stays auditable after the rule is edited or deactivated.
    """

    name: str
    kind: DeductionKind
    value: Decimal
    amount: Decimal

    def as_dict(self) -> dict:
        return {
            "name": self.name,
            "kind": self.kind.value,
            "value": str(self.value),
            "amount": str(self.amount),
        }


@dataclass(frozen=True)
class NewPayslip:
    """A computed payslip that has not been written yet."""

    employee_id: int
    pay_period_start: date
    pay_period_end: date
    gross_pay: Decimal
    total_deductions: Decimal
    net_pay: Decimal
    regular_hours: Decimal
    overtime_hours: Decimal
    overtime_rate: Decimal
    deductions: Tuple[DeductionLine, ...]
    generated_at: datetime


@dataclass(frozen=True)
class Payslip:
    """Domain entity: a generated payslip. Never updated once stored."""

    payslip_id: int
    employee_id: int
    pay_period_start: date
    pay_period_end: date
    gross_pay: Decimal
    total_deductions: Decimal
    net_pay: Decimal
    regular_hours: Decimal
    overtime_hours: Decimal
    overtime_rate: Decimal
    deductions: Tuple[DeductionLine, ...]
    generated_at: datetime

    @classmethod
    def from_new(cls, payslip_id: int, new: NewPayslip) -> "Payslip":
        return cls(
            payslip_id=int(payslip_id),
            employee_id=new.employee_id,
            pay_period_start=new.pay_period_start,
            pay_period_end=new.pay_period_end,
            gross_pay=new.gross_pay,
            total_deductions=new.total_deductions,
            net_pay=new.net_pay,
            regular_hours=new.regular_hours,
            overtime_hours=new.overtime_hours,
            overtime_rate=new.overtime_rate,
            deductions=tuple(new.deductions),
            generated_at=new.generated_at,
        )

    def as_dict(self) -> dict:
        return {
            "id": self.payslip_id,
            "employee_id": self.employee_id,
            "pay_period_start": self.pay_period_start.isoformat(),
            "pay_period_end": self.pay_period_end.isoformat(),
            "gross_pay": str(self.gross_pay),
            "total_deductions": str(self.total_deductions),
            "net_pay": str(self.net_pay),
            "regular_hours": str(self.regular_hours),
            "overtime_hours": str(self.overtime_hours),
            "overtime_rate": str(self.overtime_rate),
            "deductions": [line.as_dict() for line in self.deductions],
            "generated_at": self.generated_at.isoformat(),
        }
