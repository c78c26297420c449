import datetime
import enum
from decimal import Decimal
from typing import Annotated, Any, Literal, NamedTuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator, model_validator

from cafepay.core.config import (
    DEFAULT_REST_DAY,
    MONTHS_PER_YEAR,
    NIGHT_DIFF_END,
    NIGHT_DIFF_RATE,
    NIGHT_DIFF_START,
    PAGIBIG_MAX_CONTRIBUTION,
    REFERENCE_TIMEZONE,
    TIME_FORMAT_HM,
)
from cafepay.core.constants import (
    HOLIDAY_NORMAL,
    HOLIDAY_REGULAR,
    HOLIDAY_SPECIAL_NON_WORKING,
    HOLIDAY_SPECIAL_WORKING,
)


def _coerce_decimal(value: Any) -> Any:
    """Floats go through str() so 0.1 becomes Decimal("0.1"), not its binary expansion."""
    if isinstance(value, float):
        return Decimal(str(value))
    return value


Amount = Annotated[Decimal, BeforeValidator(_coerce_decimal)]

ZERO = Decimal("0")


class HolidayTier(str, enum.Enum):
    """Holiday classification of a calendar date."""

    REGULAR = HOLIDAY_REGULAR
    SPECIAL_NON_WORKING = HOLIDAY_SPECIAL_NON_WORKING
    SPECIAL_WORKING = HOLIDAY_SPECIAL_WORKING
    NORMAL = HOLIDAY_NORMAL


DeductionType = Literal["sss", "philhealth", "pagibig", "tax"]


class Holiday(BaseModel):
    """A dated holiday and its pay tier."""
    date: datetime.date
    type: HolidayTier
    year: int | None = None
    name: str | None = None

    @field_validator("type")
    @classmethod
    def _check_real_tier(cls, value: HolidayTier) -> HolidayTier:
        if value == HolidayTier.NORMAL:
            raise ValueError("A holiday must be regular, special_non_working or special_working")
        return value

    @model_validator(mode="after")
    def _default_year(self) -> "Holiday":
        if self.year is None:
            self.year = self.date.year
        return self


class Shift(BaseModel):
    """
    Scheduled shift with optional clocked (actual) times.

    Validates from dicts and from attribute-style records such as ORM rows.
    """
    model_config = ConfigDict(from_attributes=True)

    id: int | str | None = None
    start_time: datetime.datetime
    end_time: datetime.datetime
    actual_start_time: datetime.datetime | None = None
    actual_end_time: datetime.datetime | None = None

    def resolved_interval(self) -> tuple[datetime.datetime, datetime.datetime]:
        """Actual times when both are recorded, otherwise the scheduled pair."""
        if self.actual_start_time is not None and self.actual_end_time is not None:
            return self.actual_start_time, self.actual_end_time
        return self.start_time, self.end_time


class ShiftSegment(NamedTuple):
    """Part of a shift that lies within one calendar day."""
    start: datetime.datetime
    end: datetime.datetime
    date: datetime.date


class DailySegment(BaseModel):
    """All worked time of one employee on one calendar date."""
    date: datetime.date
    regular_hours: Decimal = ZERO
    night_diff_hours: Decimal = ZERO  # subset of regular_hours
    holiday_type: HolidayTier = HolidayTier.NORMAL
    is_rest_day: bool = False


class RejectedShift(BaseModel):
    """A shift record left out of a computation, and why."""
    index: int
    shift_id: int | str | None = None
    reason: str


class PayCalculationResult(BaseModel):
    basic_pay: Decimal
    holiday_pay: Decimal
    night_diff_pay: Decimal
    rest_day_pay: Decimal
    total_gross_pay: Decimal
    breakdown: list[DailySegment] = Field(default_factory=list)
    rejected_shifts: list[RejectedShift] = Field(default_factory=list)

    @property
    def total_hours(self) -> Decimal:
        return sum((day.regular_hours for day in self.breakdown), ZERO)

    @property
    def night_diff_hours(self) -> Decimal:
        return sum((day.night_diff_hours for day in self.breakdown), ZERO)


class HolidayRates(BaseModel):
    """Multipliers of the hourly rate for one holiday tier."""
    model_config = ConfigDict(frozen=True)

    not_worked: Amount
    worked: Amount
    rest_day: Amount


def default_holiday_rates() -> dict[HolidayTier, HolidayRates]:
    return {
        HolidayTier.REGULAR: HolidayRates(not_worked="1.0", worked="2.0", rest_day="2.6"),
        HolidayTier.SPECIAL_NON_WORKING: HolidayRates(not_worked="0", worked="1.3", rest_day="1.5"),
        HolidayTier.SPECIAL_WORKING: HolidayRates(not_worked="1.0", worked="1.0", rest_day="1.3"),
        HolidayTier.NORMAL: HolidayRates(not_worked="0", worked="1.0", rest_day="1.3"),
    }


class PayRules(BaseModel):
    """
    Rate configuration for the pay calculator.

    Holds the holiday/rest-day rate matrix, the night-differential window and
    premium, and the zone whose midnights split shifts into days.
    """

    model_config = ConfigDict(frozen=True)

    holiday_rates: dict[HolidayTier, HolidayRates] = Field(default_factory=default_holiday_rates)
    night_diff_start: str = NIGHT_DIFF_START
    night_diff_end: str = NIGHT_DIFF_END
    night_diff_rate: Amount = NIGHT_DIFF_RATE
    reference_timezone: str = REFERENCE_TIMEZONE

    @field_validator("night_diff_start", "night_diff_end")
    @classmethod
    def _check_clock_time(cls, value: str) -> str:
        datetime.datetime.strptime(value, TIME_FORMAT_HM)
        return value

    @field_validator("reference_timezone")
    @classmethod
    def _check_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone {value!r}") from e
        return value

    @field_validator("holiday_rates")
    @classmethod
    def _check_all_tiers(cls, value: dict[HolidayTier, HolidayRates]) -> dict[HolidayTier, HolidayRates]:
        missing = [tier.value for tier in HolidayTier if tier not in value]
        if missing:
            raise ValueError(f"Missing holiday rates for: {', '.join(missing)}")
        return value

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.reference_timezone)

    def rates_for(self, tier: HolidayTier) -> HolidayRates:
        return self.holiday_rates[tier]


class DeductionBracket(BaseModel):
    """One row of a statutory contribution or tax table."""
    model_config = ConfigDict(frozen=True)

    type: DeductionType
    min_salary: Amount
    max_salary: Amount | None = None
    employee_rate: Amount | None = None  # percent, 2.5 means 2.5%
    employee_contribution: Amount | None = None
    is_active: bool = True
    description: str | None = None

    @model_validator(mode="after")
    def _check_range(self) -> "DeductionBracket":
        if self.max_salary is not None and self.max_salary < self.min_salary:
            raise ValueError(f"max_salary {self.max_salary} is below min_salary {self.min_salary}")
        return self

    def covers(self, salary: Decimal) -> bool:
        """Inclusive min/max match; no max means unbounded."""
        if salary < self.min_salary:
            return False
        return self.max_salary is None or salary <= self.max_salary

    @property
    def rate_fraction(self) -> Decimal:
        return (self.employee_rate or ZERO) / 100


class DeductionToggles(BaseModel):
    """Per-branch switches for each statutory deduction."""
    deduct_sss: bool = True
    deduct_philhealth: bool = False
    deduct_pagibig: bool = False
    deduct_withholding_tax: bool = False


class DeductionRules(BaseModel):
    model_config = ConfigDict(frozen=True)

    pagibig_max_contribution: Amount = PAGIBIG_MAX_CONTRIBUTION
    months_per_year: int = MONTHS_PER_YEAR


class DeductionBreakdown(BaseModel):
    sss_contribution: Decimal = ZERO
    philhealth_contribution: Decimal = ZERO
    pagibig_contribution: Decimal = ZERO
    withholding_tax: Decimal = ZERO

    @property
    def total(self) -> Decimal:
        return (
            self.sss_contribution
            + self.philhealth_contribution
            + self.pagibig_contribution
            + self.withholding_tax
        )


class Employee(BaseModel):
    """Employee data the payroll run reads. Recurring deductions are per period."""
    id: int | str
    name: str
    hourly_rate: Amount
    rest_day: int = Field(default=DEFAULT_REST_DAY, ge=0, le=6)
    is_active: bool = True
    sss_loan: Amount = ZERO
    pagibig_loan: Amount = ZERO
    cash_advance: Amount = ZERO
    other_deductions: Amount = ZERO


class PayrollPeriod(BaseModel):
    id: int | str
    start_date: datetime.date
    end_date: datetime.date

    @model_validator(mode="after")
    def _check_order(self) -> "PayrollPeriod":
        if self.end_date < self.start_date:
            raise ValueError("Payroll period ends before it starts")
        return self


class PayrollEntry(BaseModel):
    """Computed payroll line for one employee and period, ready to persist."""
    employee_id: int | str
    period_id: int | str
    total_hours: Decimal
    regular_hours: Decimal
    overtime_hours: Decimal = ZERO
    night_diff_hours: Decimal
    basic_pay: Decimal
    holiday_pay: Decimal
    overtime_pay: Decimal = ZERO
    night_diff_pay: Decimal
    rest_day_pay: Decimal
    gross_pay: Decimal
    monthly_basic_salary: Decimal
    sss_contribution: Decimal
    sss_loan: Decimal
    philhealth_contribution: Decimal
    pagibig_contribution: Decimal
    pagibig_loan: Decimal
    withholding_tax: Decimal
    advances: Decimal
    other_deductions: Decimal
    total_deductions: Decimal
    net_pay: Decimal
