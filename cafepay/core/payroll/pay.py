"""Holiday, rest-day and night-differential pay (DOLE rules)."""

import logging
from collections.abc import Iterable
from decimal import Decimal
from typing import Any, NamedTuple

from cafepay.core.config import DEFAULT_REST_DAY
from cafepay.core.models import DailySegment, Holiday, HolidayTier, PayCalculationResult, PayRules, RejectedShift
from cafepay.core.storage import get_default_pay_rules
from cafepay.core.utils import round_money, to_decimal

from .aggregate import ShiftInput, aggregate_daily_segments

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


class DayPay(NamedTuple):
    """Unrounded pay components of a single day."""

    basic_pay: Decimal
    holiday_pay: Decimal
    rest_day_pay: Decimal
    night_diff_pay: Decimal


def get_day_multiplier(day: DailySegment, rules: PayRules) -> Decimal:
    """The worked-day multiplier for the day's tier, or the rest-day one."""
    rates = rules.rates_for(day.holiday_type)
    return rates.rest_day if day.is_rest_day else rates.worked


def calculate_day_pay(day: DailySegment, hourly_rate: Any, rules: PayRules | None = None) -> DayPay:
    """
    Splits one day's pay into basic, holiday, rest-day and night components.

    - Holiday (any tier but normal): straight pay is basic, the excess is holiday pay
    - Rest day on a normal date: straight pay is basic, the excess is rest-day pay
    - Otherwise everything is basic pay

    The night premium is a share of the multiplied rate, so night hours on a
    regular holiday earn 10% of 200%.
    """
    rules = rules or get_default_pay_rules()
    rate = to_decimal(hourly_rate)
    multiplier = get_day_multiplier(day, rules)

    straight_pay = day.regular_hours * rate
    regular_pay = straight_pay * multiplier
    night_diff_pay = day.night_diff_hours * rate * multiplier * rules.night_diff_rate

    if day.holiday_type != HolidayTier.NORMAL:
        return DayPay(straight_pay, regular_pay - straight_pay, ZERO, night_diff_pay)

    if day.is_rest_day:
        return DayPay(straight_pay, ZERO, regular_pay - straight_pay, night_diff_pay)

    return DayPay(regular_pay, ZERO, ZERO, night_diff_pay)


def calculate_period_pay(
    shifts: Iterable[ShiftInput],
    hourly_rate: Any,
    holidays: Iterable[Holiday],
    rest_day: int = DEFAULT_REST_DAY,
    rules: PayRules | None = None,
) -> PayCalculationResult:
    """
    Calculates pay for all shifts of one employee in a period.

    Args:
        shifts: The employee's shifts (models, mappings or ORM rows)
        hourly_rate: Hourly rate in PHP
        holidays: Holidays for the period
        rest_day: Weekly rest day, 0 = Sunday
        rules: Pay rules (defaults to the packaged rules)

    Returns:
        PayCalculationResult with totals rounded to centavos. The gross is
        the rounded sum of the unrounded components.
    """
    rules = rules or get_default_pay_rules()
    rate = to_decimal(hourly_rate)
    rejected: list[RejectedShift] = []
    breakdown = aggregate_daily_segments(shifts, holidays, rest_day, rules, rejected=rejected)

    basic_pay = ZERO
    holiday_pay = ZERO
    rest_day_pay = ZERO
    night_diff_pay = ZERO

    for day in breakdown:
        day_pay = calculate_day_pay(day, rate, rules)
        basic_pay += day_pay.basic_pay
        holiday_pay += day_pay.holiday_pay
        rest_day_pay += day_pay.rest_day_pay
        night_diff_pay += day_pay.night_diff_pay

    if rejected:
        logger.warning("%d of the period's shifts were skipped", len(rejected))

    return PayCalculationResult(
        basic_pay=round_money(basic_pay),
        holiday_pay=round_money(holiday_pay),
        night_diff_pay=round_money(night_diff_pay),
        rest_day_pay=round_money(rest_day_pay),
        total_gross_pay=round_money(basic_pay + holiday_pay + night_diff_pay + rest_day_pay),
        breakdown=breakdown,
        rejected_shifts=rejected,
    )
