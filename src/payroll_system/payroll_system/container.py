from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .core.constants import DEFAULT_OVERTIME_RATE
from .database.connection import DBConfig, DatabaseConnection
from .deductions.mysql_deduction_repository import MySQLDeductionRuleRepository
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .payroll.mysql_payslip_repository import MySQLPayslipRepository
from .payroll.service import PayslipService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    employees_repo: MySQLEmployeeRepository
    attendance_repo: MySQLAttendanceRepository
    deductions_repo: MySQLDeductionRuleRepository
    payslips_repo: MySQLPayslipRepository

    payslip_service: PayslipService


def build_container(*, db_config: dict, default_overtime_rate: Decimal = DEFAULT_OVERTIME_RATE) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    employees_repo = MySQLEmployeeRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    deductions_repo = MySQLDeductionRuleRepository(conn)
    payslips_repo = MySQLPayslipRepository(conn)

    payslip_service = PayslipService(
        employees_repo,
        attendance_repo,
        deductions_repo,
        payslips_repo,
        default_overtime_rate=default_overtime_rate,
    )

    return Container(
        conn=conn,
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        deductions_repo=deductions_repo,
        payslips_repo=payslips_repo,
        payslip_service=payslip_service,
    )
