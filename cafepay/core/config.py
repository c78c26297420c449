# cafepay/core/config.py

from decimal import Decimal
from typing import Final


# ==========================
# Night differential
# ==========================

#: Start of the night-differential window as "HH:MM" (10 PM).
#: Hours from this clock time up to NIGHT_DIFF_END earn the premium.
NIGHT_DIFF_START: Final[str] = "22:00"

#: End of the night-differential window as "HH:MM" (6 AM, exclusive).
#: The window wraps across midnight when END is earlier than START.
NIGHT_DIFF_END: Final[str] = "06:00"

#: Premium layered on top of the day's multiplier (10%).
NIGHT_DIFF_RATE: Final[Decimal] = Decimal("0.10")


# ==========================
# Time and calendar
# ==========================

#: IANA zone used for calendar-day boundaries.
#: Naive datetimes are interpreted in this zone.
REFERENCE_TIMEZONE: Final[str] = "Asia/Manila"

#: Default weekly rest day, 0 = Sunday ... 6 = Saturday.
DEFAULT_REST_DAY: Final[int] = 0

#: Longest shift the validator accepts, in hours.
MAX_SHIFT_HOURS: Final[int] = 24

#: Format for clock times in pay rules (for example "22:00").
TIME_FORMAT_HM: Final[str] = "%H:%M"


# ==========================
# Salary conversion
# ==========================

#: Average weeks per month when converting period pay to a monthly salary.
WEEKS_PER_MONTH: Final[Decimal] = Decimal("4.33")

#: Months per year for annualizing the withholding tax base.
MONTHS_PER_YEAR: Final[int] = 12

#: Maximum Pag-IBIG employee share per month (PHP).
PAGIBIG_MAX_CONTRIBUTION: Final[Decimal] = Decimal("100")

#: Rounding quantum for all money values (centavos).
MONEY_QUANTUM: Final[Decimal] = Decimal("0.01")
