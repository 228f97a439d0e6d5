from __future__ import annotations

from typing import Optional, Protocol

from .model import Employee


class EmployeeRepository(Protocol):
    """Employee directory as seen by payroll.

    Note (DIP): the payslip service depends on this interface. Inactive
    employees are returned too; the caller decides what inactive means.
    """

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError
