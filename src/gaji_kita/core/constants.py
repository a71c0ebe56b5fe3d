"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time
from decimal import Decimal

DEFAULT_SESSION_DAYS = 7

# Standard working hours, used when punch times are synthesized from a status.
WORK_START = time(8, 0)
LATE_CHECK_IN = time(9, 15)
WORK_END = time(17, 0)
LATE_AFTER = time(9, 0)

# BPJS (fraction of base salary)
BPJS_KES_EMPLOYEE_RATE = Decimal("0.01")
BPJS_KES_COMPANY_RATE = Decimal("0.04")
BPJS_JHT_EMPLOYEE_RATE = Decimal("0.02")
BPJS_JHT_COMPANY_RATE = Decimal("0.037")
BPJS_JP_EMPLOYEE_RATE = Decimal("0.01")
BPJS_JP_COMPANY_RATE = Decimal("0.02")
BPJS_JKK_RATE = Decimal("0.0024")
BPJS_JKM_RATE = Decimal("0.003")

# PPh21 flat rate above the annual income threshold
PPH21_ANNUAL_THRESHOLD = Decimal("60000000")
PPH21_FLAT_RATE = Decimal("0.05")
MONTHS_PER_YEAR = 12

MONEY_PLACES = Decimal("0.01")

PAYROLL_EVENT_START = time(9, 0)
PAYROLL_EVENT_END = time(10, 0)
MANUAL_EVENT_START = time(9, 0)
MANUAL_EVENT_END = time(10, 0)
