"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

# Salary pro-rating policy: every month counts as 30 days of 8 hours.
DAYS_PER_MONTH = 30
STANDARD_WORKDAY_HOURS = 8

DEFAULT_OVERTIME_RATE = Decimal("1.5")

MONEY_PLACES = Decimal("0.01")
HOURS_PLACES = Decimal("0.01")
RATE_PLACES = Decimal("0.01")

DEFAULT_PAYSLIP_LOOKBACK_MONTHS = 6
