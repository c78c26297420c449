"""
Statutory deductions: SSS, PhilHealth, Pag-IBIG and withholding tax.

Every function takes the monthly basic salary, the bracket table and a toggle.
A disabled deduction is always 0. A salary that no active bracket covers is a
configuration gap: it is logged and the deduction is 0.
"""

import logging
from collections.abc import Iterable
from decimal import Decimal
from typing import Any

from cafepay.core.constants import DEDUCTION_PAGIBIG, DEDUCTION_PHILHEALTH, DEDUCTION_SSS, DEDUCTION_TAX
from cafepay.core.models import DeductionBracket, DeductionBreakdown, DeductionRules, DeductionToggles
from cafepay.core.utils import round_money, to_decimal

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def get_active_brackets(brackets: Iterable[DeductionBracket], deduction_type: str) -> list[DeductionBracket]:
    """Active brackets of one type, sorted ascending by min_salary."""
    return sorted(
        (b for b in brackets if b.type == deduction_type and b.is_active),
        key=lambda b: b.min_salary,
    )


def find_bracket(salary: Decimal, brackets: Iterable[DeductionBracket]) -> DeductionBracket | None:
    for bracket in brackets:
        if bracket.covers(salary):
            return bracket
    return None


def calculate_sss(
    monthly_basic_salary: Any,
    brackets: Iterable[DeductionBracket],
    enabled: bool = True,
) -> Decimal:
    """SSS employee share: the fixed contribution of the matching bracket."""
    if not enabled:
        return ZERO

    salary = to_decimal(monthly_basic_salary)
    bracket = find_bracket(salary, get_active_brackets(brackets, DEDUCTION_SSS))
    if bracket is None:
        logger.warning("No active SSS bracket covers monthly salary %s", salary)
        return ZERO

    return round_money(bracket.employee_contribution or ZERO)


def calculate_philhealth(
    monthly_basic_salary: Any,
    brackets: Iterable[DeductionBracket],
    enabled: bool = True,
) -> Decimal:
    """
    PhilHealth employee share.

    The single active bracket gives a salary floor (min), ceiling (max) and a
    percentage rate. The salary is clamped to [floor, ceiling] before the rate
    is applied.
    """
    if not enabled:
        return ZERO

    salary = to_decimal(monthly_basic_salary)
    active = get_active_brackets(brackets, DEDUCTION_PHILHEALTH)
    if not active:
        logger.warning("No active PhilHealth rate configured")
        return ZERO
    if len(active) > 1:
        logger.warning("%d active PhilHealth rates; using the lowest", len(active))

    bracket = active[0]
    base = max(salary, bracket.min_salary)
    if bracket.max_salary is not None:
        base = min(base, bracket.max_salary)

    return round_money(base * bracket.rate_fraction)


def calculate_pagibig(
    monthly_basic_salary: Any,
    brackets: Iterable[DeductionBracket],
    enabled: bool = True,
    rules: DeductionRules | None = None,
) -> Decimal:
    """Pag-IBIG employee share: salary x bracket rate, capped (PHP 100 by default)."""
    if not enabled:
        return ZERO

    rules = rules or DeductionRules()
    salary = to_decimal(monthly_basic_salary)
    bracket = find_bracket(salary, get_active_brackets(brackets, DEDUCTION_PAGIBIG))
    if bracket is None:
        logger.warning("No active Pag-IBIG bracket covers monthly salary %s", salary)
        return ZERO

    contribution = salary * bracket.rate_fraction
    return round_money(min(contribution, rules.pagibig_max_contribution))


def calculate_withholding_tax(
    monthly_basic_salary: Any,
    brackets: Iterable[DeductionBracket],
    enabled: bool = True,
    rules: DeductionRules | None = None,
) -> Decimal:
    """
    Monthly withholding tax from annual progressive brackets.

    The monthly salary is annualized, the annual tax is found by walking the
    brackets (see calculate_progressive_tax) and divided back to a month.
    """
    if not enabled:
        return ZERO

    rules = rules or DeductionRules()
    salary = to_decimal(monthly_basic_salary)
    annual_salary = salary * rules.months_per_year

    active = get_active_brackets(brackets, DEDUCTION_TAX)
    if not active:
        logger.warning("No active tax brackets configured")
        return ZERO

    annual_tax = calculate_progressive_tax(annual_salary, active)
    if annual_tax is None:
        logger.warning("No tax bracket covers annual salary %s", annual_salary)
        return ZERO

    return round_money(annual_tax / rules.months_per_year)


def calculate_progressive_tax(annual_salary: Decimal, brackets: list[DeductionBracket]) -> Decimal | None:
    """
    Cumulative bracket walk over brackets sorted by min_salary.

    Each bracket taxes income above its threshold: the previous bracket's max,
    or its own min for the first one. Every bracket below the salary adds
    ``width x rate``; the bracket holding the salary adds
    ``(salary - threshold) x rate``. For the TRAIN table this gives
    22,500 + 20% over 400,000 and so on.

    Returns None when the salary is below the first bracket.
    """
    accumulated = ZERO
    previous_max: Decimal | None = None

    for bracket in brackets:
        threshold = previous_max if previous_max is not None else bracket.min_salary
        above_floor = salary_above(annual_salary, bracket, previous_max)
        within_ceiling = bracket.max_salary is None or annual_salary <= bracket.max_salary

        if above_floor and within_ceiling:
            return accumulated + (annual_salary - threshold) * bracket.rate_fraction

        if not above_floor:
            return None

        accumulated += (bracket.max_salary - threshold) * bracket.rate_fraction
        previous_max = bracket.max_salary

    return None


def salary_above(salary: Decimal, bracket: DeductionBracket, previous_max: Decimal | None) -> bool:
    """
    True if the salary reaches this bracket.

    Tables list the next bracket from ``max + 0.01``; amounts in that gap
    belong to the upper bracket.
    """
    if salary >= bracket.min_salary:
        return True
    return previous_max is not None and salary > previous_max


def calculate_all_deductions(
    monthly_basic_salary: Any,
    brackets: Iterable[DeductionBracket],
    toggles: DeductionToggles | None = None,
    rules: DeductionRules | None = None,
) -> DeductionBreakdown:
    """All four statutory deductions, each zero when its toggle is off."""
    toggles = toggles or DeductionToggles()
    brackets = list(brackets)

    return DeductionBreakdown(
        sss_contribution=calculate_sss(monthly_basic_salary, brackets, toggles.deduct_sss),
        philhealth_contribution=calculate_philhealth(monthly_basic_salary, brackets, toggles.deduct_philhealth),
        pagibig_contribution=calculate_pagibig(monthly_basic_salary, brackets, toggles.deduct_pagibig, rules),
        withholding_tax=calculate_withholding_tax(
            monthly_basic_salary, brackets, toggles.deduct_withholding_tax, rules
        ),
    )
