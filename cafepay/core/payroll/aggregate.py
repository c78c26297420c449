"""Per-day aggregation of shift segments."""

import datetime
import logging
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError

from cafepay.core.config import DEFAULT_REST_DAY
from cafepay.core.exceptions import ShiftValidationError
from cafepay.core.models import DailySegment, Holiday, HolidayTier, PayRules, RejectedShift, Shift
from cafepay.core.storage import get_default_pay_rules
from cafepay.core.time_utils import hours_between
from cafepay.core.validators import validate_shift_times

from .classifiers import build_holiday_index, is_rest_day
from .night_diff import calculate_night_diff_hours
from .segments import split_shift_into_segments

logger = logging.getLogger(__name__)

# Shift model, mapping, or attribute-style record (ORM row, dataclass)
ShiftInput = Shift | Mapping[str, Any] | Any


def aggregate_daily_segments(
    shifts: Iterable[ShiftInput],
    holidays: Iterable[Holiday],
    rest_day: int = DEFAULT_REST_DAY,
    rules: PayRules | None = None,
    rejected: list[RejectedShift] | None = None,
) -> list[DailySegment]:
    """
    Groups all segments of all shifts by calendar date.

    Regular and night hours are summed per date; the holiday tier and rest-day
    flag are decided once per date. A shift with malformed or invalid times
    is skipped with a warning (and appended to ``rejected`` if given) so the
    remaining shifts are still counted.

    Args:
        shifts: Shift models, mappings or objects with the same fields
        holidays: Holidays for the period
        rest_day: Weekly rest day, 0 = Sunday
        rules: Pay rules (defaults to the packaged rules)
        rejected: Optional list collecting skipped shifts

    Returns:
        DailySegments ordered by date
    """
    rules = rules or get_default_pay_rules()
    tz = rules.tzinfo
    holiday_index = build_holiday_index(holidays)
    daily: dict[datetime.date, DailySegment] = {}

    for index, raw in enumerate(shifts):
        try:
            shift = _coerce_shift(raw)
            start_dt, end_dt = validate_shift_times(*shift.resolved_interval())
        except (ShiftValidationError, ValidationError) as e:
            shift_id = _raw_shift_id(raw)
            logger.warning("Skipping shift #%d (id=%s): %s", index, shift_id, e)
            if rejected is not None:
                rejected.append(RejectedShift(index=index, shift_id=shift_id, reason=str(e)))
            continue

        for segment in split_shift_into_segments(start_dt, end_dt, tz):
            day = daily.get(segment.date)
            if day is None:
                day = DailySegment(
                    date=segment.date,
                    holiday_type=holiday_index.get(segment.date, HolidayTier.NORMAL),
                    is_rest_day=is_rest_day(segment.date, rest_day),
                )
                daily[segment.date] = day

            # All worked hours are regular hours (no overtime)
            day.regular_hours += hours_between(segment.start, segment.end)
            day.night_diff_hours += calculate_night_diff_hours(segment.start, segment.end, rules)

    return [daily[d] for d in sorted(daily)]


def _coerce_shift(raw: ShiftInput) -> Shift:
    if isinstance(raw, Shift):
        return raw
    return Shift.model_validate(raw)


def _raw_shift_id(raw: Any) -> int | str | None:
    if isinstance(raw, Shift):
        return raw.id
    if isinstance(raw, Mapping):
        shift_id = raw.get("id")
    else:
        shift_id = getattr(raw, "id", None)
    return shift_id if isinstance(shift_id, int | str) else None
