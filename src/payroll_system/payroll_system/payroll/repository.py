from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import NewPayslip, Payslip


class PayslipRepository(Protocol):
    """Append-only payslip store."""

    def save(self, payslip: NewPayslip) -> Payslip:
        """Persist and return the stored payslip with its id.

        Raises PersistenceFailure when the write is rejected.
        """

        raise NotImplementedError

    def get_by_id(self, payslip_id: int) -> Optional[Payslip]:
        raise NotImplementedError

    def list(
        self,
        *,
        employee_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[Payslip]:
        """Filter on pay_period_start >= start_date and pay_period_end <= end_date, newest first."""

        raise NotImplementedError
