"""Night differential hours (22:00-06:00)."""

import datetime
from decimal import Decimal

from cafepay.core.models import PayRules
from cafepay.core.time_utils import hours_between, to_zone

ZERO = Decimal("0")


def calculate_night_diff_hours(
    segment_start: datetime.datetime,
    segment_end: datetime.datetime,
    rules: PayRules,
) -> Decimal:
    """
    Hours of a day-bounded segment that fall inside the night window.

    The window wraps midnight, so two windows can touch a calendar day: the
    one that began the evening before and the one that begins this evening.
    Overlap is computed on half-open intervals, so partial hours at either
    edge are counted exactly.

    Args:
        segment_start: Segment start (already within one calendar day)
        segment_end: Segment end
        rules: Pay rules holding the window and reference zone

    Returns:
        Night hours, always within [0, segment duration]
    """
    tz = rules.tzinfo
    start = to_zone(segment_start, tz)
    end = to_zone(segment_end, tz)

    if end <= start:
        return ZERO

    total = ZERO
    for window_start, window_end in night_windows_for_day(start.date(), rules):
        overlap_start = max(start, window_start)
        overlap_end = min(end, window_end)
        if overlap_end <= overlap_start:
            continue
        total += hours_between(overlap_start, overlap_end)

    return min(total, hours_between(start, end))


def night_windows_for_day(
    day: datetime.date,
    rules: PayRules,
) -> list[tuple[datetime.datetime, datetime.datetime]]:
    """Night windows that start on the previous day and on ``day``."""
    tz = rules.tzinfo
    start_h, start_m = map(int, rules.night_diff_start.split(":"))
    end_h, end_m = map(int, rules.night_diff_end.split(":"))
    wraps = (end_h, end_m) <= (start_h, start_m)

    windows = []
    for offset in (-1, 0):
        base = day + datetime.timedelta(days=offset)
        window_start = datetime.datetime.combine(base, datetime.time(start_h, start_m), tzinfo=tz)
        end_base = base + datetime.timedelta(days=1) if wraps else base
        window_end = datetime.datetime.combine(end_base, datetime.time(end_h, end_m), tzinfo=tz)
        windows.append((window_start, window_end))

    return windows
