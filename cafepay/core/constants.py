# cafepay/core/constants.py
from typing import Final

# ==========================
# Holiday tiers
# ==========================

#: Regular holiday (200% if worked, paid if not worked).
HOLIDAY_REGULAR: Final[str] = "regular"

#: Special non-working day (130% if worked, no work no pay).
HOLIDAY_SPECIAL_NON_WORKING: Final[str] = "special_non_working"

#: Special working day (paid as a normal day unless it is a rest day).
HOLIDAY_SPECIAL_WORKING: Final[str] = "special_working"

#: Tier for a date with no holiday record.
HOLIDAY_NORMAL: Final[str] = "normal"


# ==========================
# Deduction types
# ==========================

DEDUCTION_SSS: Final[str] = "sss"
DEDUCTION_PHILHEALTH: Final[str] = "philhealth"
DEDUCTION_PAGIBIG: Final[str] = "pagibig"
DEDUCTION_TAX: Final[str] = "tax"


# ==========================
# Week structure
# ==========================

#: Number of days per week. Used when converting a period to weeks.
DAYS_PER_WEEK: Final[int] = 7

#: Seconds per hour, for converting a timedelta to hours.
SECONDS_PER_HOUR: Final[int] = 3600
