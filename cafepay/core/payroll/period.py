"""Payroll for a whole period: monthly salary estimate, entries and batch run."""

import datetime
import logging
import math
from collections.abc import Iterable, Mapping, Sequence
from decimal import Decimal
from typing import Any

from sqlalchemy.orm import Session

from cafepay.core.config import WEEKS_PER_MONTH
from cafepay.core.constants import DAYS_PER_WEEK
from cafepay.core.exceptions import PayrollRunError
from cafepay.core.models import (
    DeductionBracket,
    DeductionRules,
    DeductionToggles,
    Employee,
    Holiday,
    PayRules,
    PayrollEntry,
    PayrollPeriod,
)
from cafepay.core.utils import period_days, round_hours, round_money, to_decimal
from cafepay.database.database import PayrollEntryRecord

from .aggregate import ShiftInput
from .deductions import calculate_all_deductions
from .pay import calculate_period_pay

logger = logging.getLogger(__name__)


def estimate_monthly_basic_salary(
    basic_pay: Any,
    period_start: datetime.date,
    period_end: datetime.date,
) -> Decimal:
    """
    Scales a period's basic pay to a month for the deduction tables.

    Formula: basic_pay / weeks_in_period x 4.33, where weeks_in_period is
    the period length in weeks rounded up (at least 1).

    Returns the estimate rounded to centavos, the precision the bracket
    tables are written in.
    """
    weeks = max(math.ceil(period_days(period_start, period_end) / DAYS_PER_WEEK), 1)
    return round_money(to_decimal(basic_pay) / weeks * WEEKS_PER_MONTH)


def build_payroll_entry(
    employee: Employee,
    shifts: Iterable[ShiftInput],
    holidays: Iterable[Holiday],
    brackets: Iterable[DeductionBracket],
    toggles: DeductionToggles,
    period: PayrollPeriod,
    rules: PayRules | None = None,
    deduction_rules: DeductionRules | None = None,
) -> PayrollEntry:
    """
    Computes one employee's payroll entry for a period.

    Gross pay comes from the shifts; statutory deductions are computed on the
    estimated monthly basic salary; recurring deductions (loans, advances)
    come from the employee record.

    Returns:
        PayrollEntry with net_pay = gross_pay - total_deductions
    """
    pay = calculate_period_pay(shifts, employee.hourly_rate, holidays, employee.rest_day, rules)
    monthly_basic_salary = estimate_monthly_basic_salary(pay.basic_pay, period.start_date, period.end_date)
    statutory = calculate_all_deductions(monthly_basic_salary, brackets, toggles, deduction_rules)

    recurring = employee.sss_loan + employee.pagibig_loan + employee.cash_advance + employee.other_deductions
    total_deductions = round_money(statutory.total + recurring)
    total_hours = round_hours(pay.total_hours)

    return PayrollEntry(
        employee_id=employee.id,
        period_id=period.id,
        total_hours=total_hours,
        regular_hours=total_hours,
        night_diff_hours=round_hours(pay.night_diff_hours),
        basic_pay=pay.basic_pay,
        holiday_pay=pay.holiday_pay,
        night_diff_pay=pay.night_diff_pay,
        rest_day_pay=pay.rest_day_pay,
        gross_pay=pay.total_gross_pay,
        monthly_basic_salary=monthly_basic_salary,
        sss_contribution=statutory.sss_contribution,
        sss_loan=round_money(employee.sss_loan),
        philhealth_contribution=statutory.philhealth_contribution,
        pagibig_contribution=statutory.pagibig_contribution,
        pagibig_loan=round_money(employee.pagibig_loan),
        withholding_tax=statutory.withholding_tax,
        advances=round_money(employee.cash_advance),
        other_deductions=round_money(employee.other_deductions),
        total_deductions=total_deductions,
        net_pay=round_money(pay.total_gross_pay - total_deductions),
    )


def run_payroll_period(
    session: Session,
    period: PayrollPeriod,
    employees: Sequence[Employee],
    shifts_by_employee: Mapping[Any, Sequence[ShiftInput]],
    holidays: Sequence[Holiday],
    brackets: Sequence[DeductionBracket],
    toggles: DeductionToggles,
    rules: PayRules | None = None,
    deduction_rules: DeductionRules | None = None,
) -> list[PayrollEntry]:
    """
    Processes a payroll period for a branch as one unit of work.

    Inactive employees and employees without shifts are skipped. One
    PayrollEntryRecord per processed employee is added to ``session`` and
    the session is committed once at the end. If any entry fails to compute
    or persist, the session is rolled back so none of the run's entries are
    kept, and PayrollRunError is raised.

    Args:
        session: SQLAlchemy session owned by the caller
        period: Period being processed
        employees: Employees of the branch
        shifts_by_employee: Employee id -> shifts within the period
        holidays: Holidays within the period
        brackets: Deduction bracket table
        toggles: Branch deduction settings

    Returns:
        The computed entries, in employee order
    """
    entries: list[PayrollEntry] = []
    current_employee = None

    try:
        for employee in employees:
            if not employee.is_active:
                logger.debug("Skipping inactive employee %s", employee.id)
                continue

            shifts = shifts_by_employee.get(employee.id) or []
            if not shifts:
                continue

            current_employee = employee.id
            entry = build_payroll_entry(
                employee, shifts, holidays, brackets, toggles, period, rules, deduction_rules
            )
            session.add(PayrollEntryRecord.from_entry(entry))
            session.flush()
            entries.append(entry)

        session.commit()
    except Exception as e:
        session.rollback()
        logger.exception(
            "Payroll run for period %s failed; rolled back %d entries",
            period.id,
            len(entries),
        )
        raise PayrollRunError(period.id, current_employee, e) from e

    logger.info(
        "Payroll period %s processed",
        period.id,
        extra={
            "extra_fields": {
                "period_id": str(period.id),
                "entries": len(entries),
                "total_gross": str(sum((e.gross_pay for e in entries), Decimal("0"))),
            }
        },
    )
    return entries
