"""Example: generate a payslip through the service layer (no Flask).

Controllers stay thin; the payroll rules live in PayslipService.
"""

import importlib
from datetime import date

from config import get_settings_module

from src.payroll_system.payroll_system.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)
    payslip = container.payslip_service.generate(1, date(2026, 1, 1), date(2026, 1, 31))
    print(payslip.as_dict())


if __name__ == "__main__":
    main()
