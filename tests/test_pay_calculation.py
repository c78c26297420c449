"""
Unit tests for period pay calculation.

Covers the DOLE rate matrix (holiday tiers x rest day), night differential
premiums, actual vs scheduled times and the handling of bad shift records.
All tests use an hourly rate of PHP 100.
"""

import datetime
import sys
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# ruff: noqa: E402
from cafepay.core.models import DailySegment, Holiday, HolidayTier, PayRules
from cafepay.core.payroll.aggregate import aggregate_daily_segments
from cafepay.core.payroll.pay import calculate_day_pay, calculate_period_pay


@dataclass
class ShiftRow:
    """Attribute-style shift record, shaped like a database row."""

    id: int
    start_time: datetime.datetime
    end_time: datetime.datetime
    actual_start_time: datetime.datetime | None = None
    actual_end_time: datetime.datetime | None = None


RATE = Decimal("100")
MONDAY = datetime.date(2025, 1, 6)
SUNDAY = datetime.date(2025, 1, 5)
NEW_YEAR = datetime.date(2025, 1, 1)  # Wednesday


def holiday(day: datetime.date, tier: HolidayTier) -> Holiday:
    return Holiday(date=day, type=tier)


class TestRateMatrix:
    def test_normal_weekday(self, make_shift):
        result = calculate_period_pay([make_shift(MONDAY, "09:00", "17:00")], RATE, [])

        assert result.basic_pay == Decimal("800.00")
        assert result.holiday_pay == Decimal("0.00")
        assert result.rest_day_pay == Decimal("0.00")
        assert result.night_diff_pay == Decimal("0.00")
        assert result.total_gross_pay == Decimal("800.00")

    def test_regular_holiday_pays_double(self, make_shift):
        result = calculate_period_pay(
            [make_shift(NEW_YEAR, "09:00", "17:00")], RATE, [holiday(NEW_YEAR, HolidayTier.REGULAR)]
        )

        assert result.basic_pay == Decimal("800.00")
        assert result.holiday_pay == Decimal("800.00")
        assert result.total_gross_pay == Decimal("1600.00")

    def test_regular_holiday_on_rest_day(self, make_shift):
        """260%: the premium over straight pay goes to holiday pay."""
        result = calculate_period_pay(
            [make_shift(SUNDAY, "09:00", "17:00")], RATE, [holiday(SUNDAY, HolidayTier.REGULAR)]
        )

        assert result.basic_pay == Decimal("800.00")
        assert result.holiday_pay == Decimal("1280.00")
        assert result.rest_day_pay == Decimal("0.00")
        assert result.total_gross_pay == Decimal("2080.00")

    def test_rest_day_on_normal_date(self, make_shift):
        result = calculate_period_pay([make_shift(SUNDAY, "09:00", "17:00")], RATE, [])

        assert result.basic_pay == Decimal("800.00")
        assert result.rest_day_pay == Decimal("240.00")
        assert result.total_gross_pay == Decimal("1040.00")

    def test_special_non_working_day(self, make_shift):
        result = calculate_period_pay(
            [make_shift(MONDAY, "09:00", "17:00")], RATE, [holiday(MONDAY, HolidayTier.SPECIAL_NON_WORKING)]
        )

        assert result.holiday_pay == Decimal("240.00")
        assert result.total_gross_pay == Decimal("1040.00")

    def test_special_non_working_on_rest_day(self, make_shift):
        result = calculate_period_pay(
            [make_shift(SUNDAY, "09:00", "17:00")], RATE, [holiday(SUNDAY, HolidayTier.SPECIAL_NON_WORKING)]
        )

        assert result.holiday_pay == Decimal("400.00")
        assert result.total_gross_pay == Decimal("1200.00")

    def test_special_working_day_is_ordinary_pay(self, make_shift):
        result = calculate_period_pay(
            [make_shift(MONDAY, "09:00", "17:00")], RATE, [holiday(MONDAY, HolidayTier.SPECIAL_WORKING)]
        )

        assert result.holiday_pay == Decimal("0.00")
        assert result.total_gross_pay == Decimal("800.00")

    def test_custom_rest_day(self, make_shift):
        """With Monday as rest day, Sunday is an ordinary day."""
        shifts = [make_shift(SUNDAY, "09:00", "17:00"), make_shift(MONDAY, "09:00", "17:00")]

        result = calculate_period_pay(shifts, RATE, [], rest_day=1)

        assert result.rest_day_pay == Decimal("240.00")
        assert result.total_gross_pay == Decimal("1840.00")


class TestNightDifferential:
    def test_overnight_shift_on_normal_days(self, make_shift):
        result = calculate_period_pay([make_shift(MONDAY, "22:00", "02:00")], RATE, [])

        assert result.basic_pay == Decimal("400.00")
        assert result.night_diff_pay == Decimal("40.00")
        assert result.total_gross_pay == Decimal("440.00")
        assert result.night_diff_hours == Decimal("4")
        assert len(result.breakdown) == 2

    def test_night_premium_uses_holiday_multiplier(self, make_shift):
        result = calculate_period_pay(
            [make_shift(NEW_YEAR, "22:00", "23:00")], RATE, [holiday(NEW_YEAR, HolidayTier.REGULAR)]
        )

        assert result.basic_pay == Decimal("100.00")
        assert result.holiday_pay == Decimal("100.00")
        assert result.night_diff_pay == Decimal("20.00")

    def test_overnight_into_holiday_splits_by_date(self, make_shift):
        """New Year's Eve 22:00 -> 02:00: only the hours after midnight are holiday hours."""
        new_years_eve = NEW_YEAR - datetime.timedelta(days=1)

        result = calculate_period_pay(
            [make_shift(new_years_eve, "22:00", "02:00")], RATE, [holiday(NEW_YEAR, HolidayTier.REGULAR)]
        )

        assert result.basic_pay == Decimal("400.00")
        assert result.holiday_pay == Decimal("200.00")
        assert result.night_diff_pay == Decimal("60.00")

    def test_custom_night_rate(self, make_shift):
        rules = PayRules(night_diff_rate="0.20")

        result = calculate_period_pay([make_shift(MONDAY, "22:00", "02:00")], RATE, [], rules=rules)

        assert result.night_diff_pay == Decimal("80.00")


class TestShiftInputs:
    def test_actual_times_override_schedule(self, make_shift):
        shift = make_shift(
            MONDAY,
            "09:00",
            "17:00",
            actual_start_time=datetime.datetime(2025, 1, 6, 9, 30),
            actual_end_time=datetime.datetime(2025, 1, 6, 17, 0),
        )

        result = calculate_period_pay([shift], RATE, [])

        assert result.basic_pay == Decimal("750.00")

    def test_single_actual_time_is_ignored(self, make_shift):
        shift = make_shift(MONDAY, "09:00", "17:00", actual_start_time=datetime.datetime(2025, 1, 6, 10, 0))

        result = calculate_period_pay([shift], RATE, [])

        assert result.basic_pay == Decimal("800.00")

    def test_attribute_records_are_accepted(self):
        row = ShiftRow(1, datetime.datetime(2025, 1, 6, 9, 0), datetime.datetime(2025, 1, 6, 17, 0))

        result = calculate_period_pay([row], RATE, [])

        assert result.total_gross_pay == Decimal("800.00")
        assert result.rejected_shifts == []

    def test_attribute_records_use_actual_times(self):
        row = ShiftRow(
            2,
            datetime.datetime(2025, 1, 6, 9, 0),
            datetime.datetime(2025, 1, 6, 17, 0),
            actual_start_time=datetime.datetime(2025, 1, 6, 9, 30),
            actual_end_time=datetime.datetime(2025, 1, 6, 17, 0),
        )

        result = calculate_period_pay([row], RATE, [])

        assert result.basic_pay == Decimal("750.00")

    def test_attribute_record_with_bad_times_is_rejected_by_id(self):
        row = ShiftRow(3, datetime.datetime(2025, 1, 6, 17, 0), datetime.datetime(2025, 1, 6, 9, 0))

        result = calculate_period_pay([row], RATE, [])

        assert result.total_gross_pay == Decimal("0.00")
        assert result.rejected_shifts[0].shift_id == 3

    def test_raw_mappings_are_accepted(self):
        shifts = [{"id": 7, "start_time": "2025-01-06T09:00:00", "end_time": "2025-01-06T13:00:00"}]

        result = calculate_period_pay(shifts, "100", [])

        assert result.total_gross_pay == Decimal("400.00")

    def test_malformed_shift_is_skipped(self, make_shift, caplog):
        shifts = [
            {"id": "bad", "start_time": "not-a-time", "end_time": "2025-01-06T17:00:00"},
            make_shift(MONDAY, "09:00", "17:00", id=2),
        ]

        result = calculate_period_pay(shifts, RATE, [])

        assert result.total_gross_pay == Decimal("800.00")
        assert len(result.rejected_shifts) == 1
        assert result.rejected_shifts[0].index == 0
        assert result.rejected_shifts[0].shift_id == "bad"
        assert "Skipping shift" in caplog.text

    def test_reversed_and_overlong_shifts_are_rejected(self, make_shift):
        shifts = [
            {"start_time": "2025-01-06T17:00:00", "end_time": "2025-01-06T09:00:00"},
            {"start_time": "2025-01-06T00:00:00", "end_time": "2025-01-07T01:00:00"},
            make_shift(MONDAY, "09:00", "10:00"),
        ]

        result = calculate_period_pay(shifts, RATE, [])

        assert [r.index for r in result.rejected_shifts] == [0, 1]
        assert result.total_gross_pay == Decimal("100.00")

    def test_no_shifts(self):
        result = calculate_period_pay([], RATE, [])

        assert result.total_gross_pay == Decimal("0.00")
        assert result.breakdown == []


class TestRoundingAndAggregation:
    def test_partial_hour_rounds_half_up(self, make_shift):
        result = calculate_period_pay([make_shift(MONDAY, "09:00", "09:20")], RATE, [])

        assert result.basic_pay == Decimal("33.33")

    def test_two_shifts_same_day_are_summed(self, make_shift):
        shifts = [make_shift(MONDAY, "06:00", "10:00"), make_shift(MONDAY, "14:00", "18:00")]

        breakdown = aggregate_daily_segments(shifts, [])

        assert len(breakdown) == 1
        assert breakdown[0].regular_hours == Decimal("8")

    def test_breakdown_is_sorted_by_date(self, make_shift):
        tuesday = MONDAY + datetime.timedelta(days=1)
        shifts = [make_shift(tuesday, "09:00", "10:00"), make_shift(MONDAY, "09:00", "10:00")]

        breakdown = aggregate_daily_segments(shifts, [])

        assert [d.date for d in breakdown] == [MONDAY, tuesday]

    def test_same_inputs_same_result(self, make_shift):
        shifts = [make_shift(MONDAY, "22:00", "02:00"), make_shift(SUNDAY, "09:00", "17:00")]

        first = calculate_period_pay(shifts, RATE, [])
        second = calculate_period_pay(shifts, RATE, [])

        assert first == second

    def test_float_rate_is_not_binary_noise(self, make_shift):
        result = calculate_period_pay([make_shift(MONDAY, "09:00", "10:00")], 0.1, [])

        assert result.basic_pay == Decimal("0.10")

    def test_day_pay_components(self, pay_rules):
        day = DailySegment(
            date=SUNDAY,
            regular_hours=Decimal("2"),
            night_diff_hours=Decimal("1"),
            holiday_type=HolidayTier.NORMAL,
            is_rest_day=True,
        )

        pay = calculate_day_pay(day, RATE, pay_rules)

        assert pay.basic_pay == Decimal("200")
        assert pay.rest_day_pay == Decimal("60")
        assert pay.night_diff_pay == Decimal("13")
