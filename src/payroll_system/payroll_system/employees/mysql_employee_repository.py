from __future__ import annotations

from typing import Optional

from ..common.decimals import to_decimal
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Employee
from .repository import EmployeeRepository


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, code, first_name, last_name, email, phone,
                       department, position, monthly_salary, hire_date, is_active
                FROM employees
                WHERE employee_id=%s
                """,
                (int(employee_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Employee(
                employee_id=int(r["employee_id"]),
                code=r["code"],
                first_name=r["first_name"],
                last_name=r["last_name"],
                email=r["email"],
                phone=r.get("phone"),
                department=r["department"],
                position=r["position"],
                monthly_salary=to_decimal(r["monthly_salary"]),
                hire_date=r["hire_date"],
                is_active=bool(r["is_active"]),
            )
