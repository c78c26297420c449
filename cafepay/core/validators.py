import datetime
from typing import Any

from cafepay.core.config import MAX_SHIFT_HOURS
from cafepay.core.constants import SECONDS_PER_HOUR
from cafepay.core.exceptions import InvalidTimeError, ShiftDurationError, ShiftOrderError
from cafepay.core.time_utils import elapsed, parse_instant

_MAX_SHIFT = datetime.timedelta(hours=MAX_SHIFT_HOURS)


def validate_shift_times(start: Any, end: Any) -> tuple[datetime.datetime, datetime.datetime]:
    """
    Validate a shift's start/end pair before any pay computation.

    - start/end must be datetimes or ISO-8601 strings (InvalidTimeError)
    - end must be strictly after start (ShiftOrderError)
    - the shift may last at most 24 hours; exactly 24 is allowed (ShiftDurationError)

    Returns the parsed (start, end) pair. Has no side effects.
    """
    start_dt = parse_instant(start, "start_time")
    end_dt = parse_instant(end, "end_time")

    # naive and aware instants cannot be ordered
    if (start_dt.tzinfo is None) != (end_dt.tzinfo is None):
        raise InvalidTimeError("end_time", end)

    duration = elapsed(start_dt, end_dt)
    if duration <= datetime.timedelta(0):
        raise ShiftOrderError(start_dt, end_dt)

    if duration > _MAX_SHIFT:
        raise ShiftDurationError(duration.total_seconds() / SECONDS_PER_HOUR, MAX_SHIFT_HOURS)

    return start_dt, end_dt
