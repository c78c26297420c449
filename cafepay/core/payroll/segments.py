"""Cross-midnight shift splitting."""

import datetime

from cafepay.core.models import ShiftSegment
from cafepay.core.time_utils import local_midnight, to_zone


def split_shift_into_segments(
    start_dt: datetime.datetime,
    end_dt: datetime.datetime,
    tz: datetime.tzinfo,
) -> list[ShiftSegment]:
    """
    Splits [start_dt, end_dt) at every local midnight of ``tz``.

    Each segment lies within one calendar day and is dated by its start.
    A shift that never crosses midnight comes back as a single segment equal
    to the input interval. Returned instants are aware, in ``tz``.

    Args:
        start_dt: Shift start (naive = wall clock in tz)
        end_dt: Shift end
        tz: Zone whose midnights bound the days

    Returns:
        Ordered list of ShiftSegment(start, end, date)
    """
    start = to_zone(start_dt, tz)
    end = to_zone(end_dt, tz)

    segments: list[ShiftSegment] = []
    current = start
    while current < end:
        next_midnight = local_midnight(current.date() + datetime.timedelta(days=1), tz)
        segment_end = min(end, next_midnight)
        segments.append(ShiftSegment(start=current, end=segment_end, date=current.date()))
        current = segment_end

    return segments
