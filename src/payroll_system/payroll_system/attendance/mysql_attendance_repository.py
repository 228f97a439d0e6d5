from __future__ import annotations

from datetime import date
from typing import Sequence

from ..common.decimals import to_decimal
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import AttendanceRecord
from .repository import AttendanceRepository


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_employee(self, employee_id: int, *, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT attendance_id, employee_id, work_date, is_present, hours_worked, overtime_hours, notes
                FROM attendance_records
                WHERE employee_id=%s AND work_date BETWEEN %s AND %s
                ORDER BY work_date ASC
                """,
                (int(employee_id), start_date, end_date),
            )
            rows = fetchall(cur)
            return [
                AttendanceRecord(
                    attendance_id=int(r["attendance_id"]),
                    employee_id=int(r["employee_id"]),
                    work_date=r["work_date"],
                    is_present=bool(r["is_present"]),
                    hours_worked=to_decimal(r["hours_worked"]),
                    overtime_hours=to_decimal(r["overtime_hours"]),
                    notes=r.get("notes"),
                )
                for r in rows
            ]
