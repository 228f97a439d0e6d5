from __future__ import annotations

import json
from datetime import date
from typing import Any, Optional, Sequence, Tuple

import mysql.connector

from ..common.decimals import to_decimal
from ..core.enums import DeductionKind
from ..core.exceptions import PersistenceFailure
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import DeductionLine, NewPayslip, Payslip
from .repository import PayslipRepository


_COLUMNS = """
    payslip_id, employee_id, pay_period_start, pay_period_end,
    gross_pay, total_deductions, net_pay, regular_hours, overtime_hours, overtime_rate,
    deductions, generated_at
"""


def encode_deductions(lines: Sequence[DeductionLine]) -> str:
    """Serialize deduction lines for the JSON column; amounts kept as strings to stay exact."""
    return json.dumps([line.as_dict() for line in lines])


def decode_deductions(raw: Any) -> Tuple[DeductionLine, ...]:
    if raw is None:
        return ()
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8")
    items = json.loads(raw) if isinstance(raw, str) else raw
    return tuple(
        DeductionLine(
            name=str(item["name"]),
            kind=DeductionKind(item["kind"]),
            value=to_decimal(item["value"]),
            amount=to_decimal(item["amount"]),
        )
        for item in items
    )


def row_to_payslip(r: dict) -> Payslip:
    return Payslip(
        payslip_id=int(r["payslip_id"]),
        employee_id=int(r["employee_id"]),
        pay_period_start=r["pay_period_start"],
        pay_period_end=r["pay_period_end"],
        gross_pay=to_decimal(r["gross_pay"]),
        total_deductions=to_decimal(r["total_deductions"]),
        net_pay=to_decimal(r["net_pay"]),
        regular_hours=to_decimal(r["regular_hours"]),
        overtime_hours=to_decimal(r["overtime_hours"]),
        overtime_rate=to_decimal(r["overtime_rate"]),
        deductions=decode_deductions(r.get("deductions")),
        generated_at=r["generated_at"],
    )


class MySQLPayslipRepository(PayslipRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def save(self, payslip: NewPayslip) -> Payslip:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO payslips(
                        employee_id, pay_period_start, pay_period_end,
                        gross_pay, total_deductions, net_pay,
                        regular_hours, overtime_hours, overtime_rate,
                        deductions, generated_at
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        payslip.employee_id,
                        payslip.pay_period_start,
                        payslip.pay_period_end,
                        payslip.gross_pay,
                        payslip.total_deductions,
                        payslip.net_pay,
                        payslip.regular_hours,
                        payslip.overtime_hours,
                        payslip.overtime_rate,
                        encode_deductions(payslip.deductions),
                        payslip.generated_at,
                    ),
                )
                payslip_id = cur.lastrowid
        except mysql.connector.Error as e:
            raise PersistenceFailure(
                f"Could not store payslip: {e}",
                employee_id=payslip.employee_id,
                period_start=payslip.pay_period_start,
                period_end=payslip.pay_period_end,
            ) from e

        if not payslip_id:
            raise PersistenceFailure(
                "Payslip store did not return an id",
                employee_id=payslip.employee_id,
                period_start=payslip.pay_period_start,
                period_end=payslip.pay_period_end,
            )
        return Payslip.from_new(payslip_id, payslip)

    def get_by_id(self, payslip_id: int) -> Optional[Payslip]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM payslips WHERE payslip_id=%s", (int(payslip_id),))
            r = fetchone(cur)
            return row_to_payslip(r) if r else None

    def list(
        self,
        *,
        employee_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[Payslip]:
        clauses: list[str] = []
        params: list[object] = []

        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(int(employee_id))
        if start_date is not None:
            clauses.append("pay_period_start >= %s")
            params.append(start_date)
        if end_date is not None:
            clauses.append("pay_period_end <= %s")
            params.append(end_date)

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM payslips
                {where}
                ORDER BY generated_at DESC, payslip_id DESC
                """,
                tuple(params),
            )
            return [row_to_payslip(r) for r in fetchall(cur)]
