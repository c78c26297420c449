"""
Payroll module - Philippine pay and statutory deduction calculations.

Exports the public functions of the engine.
"""

from .aggregate import aggregate_daily_segments
from .classifiers import build_holiday_index, get_holiday_type, is_rest_day
from .deductions import (
    calculate_all_deductions,
    calculate_pagibig,
    calculate_philhealth,
    calculate_progressive_tax,
    calculate_sss,
    calculate_withholding_tax,
    get_active_brackets,
)
from .night_diff import calculate_night_diff_hours, night_windows_for_day
from .pay import DayPay, calculate_day_pay, calculate_period_pay, get_day_multiplier
from .period import build_payroll_entry, estimate_monthly_basic_salary, run_payroll_period
from .segments import split_shift_into_segments

__all__ = [
    # segments / night differential
    "split_shift_into_segments",
    "calculate_night_diff_hours",
    "night_windows_for_day",
    # classifiers
    "get_holiday_type",
    "build_holiday_index",
    "is_rest_day",
    # aggregation and pay
    "aggregate_daily_segments",
    "DayPay",
    "calculate_day_pay",
    "calculate_period_pay",
    "get_day_multiplier",
    # deductions
    "calculate_sss",
    "calculate_philhealth",
    "calculate_pagibig",
    "calculate_withholding_tax",
    "calculate_progressive_tax",
    "calculate_all_deductions",
    "get_active_brackets",
    # period
    "estimate_monthly_basic_salary",
    "build_payroll_entry",
    "run_payroll_period",
]
