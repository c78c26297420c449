# cafepay/core/utils.py
import datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from cafepay.core.config import MONEY_QUANTUM


def to_decimal(value: Any) -> Decimal:
    """
    Converts an amount to Decimal without binary float noise.

    Raises ValueError for values that are not numbers.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Not an amount: {value!r}")
    try:
        return Decimal(str(value))
    except InvalidOperation as e:
        raise ValueError(f"Not an amount: {value!r}") from e


def round_money(value: Decimal) -> Decimal:
    """Rounds half up to centavos (0.005 -> 0.01)."""
    return to_decimal(value).quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)


def round_hours(value: Decimal) -> Decimal:
    """Hours as stored on a payroll entry, to two decimals."""
    return round_money(value)


def period_days(start_date: datetime.date, end_date: datetime.date) -> int:
    """Days between two dates (end - start), never negative."""
    return max((end_date - start_date).days, 0)
