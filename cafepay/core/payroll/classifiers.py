"""Holiday and rest-day classification of calendar dates."""

import datetime
from collections.abc import Iterable

from cafepay.core.config import DEFAULT_REST_DAY
from cafepay.core.models import Holiday, HolidayTier


def get_holiday_type(day: datetime.date, holidays: Iterable[Holiday]) -> HolidayTier:
    """Returns the tier of the holiday falling on ``day``, or NORMAL."""
    if isinstance(day, datetime.datetime):
        day = day.date()

    for holiday in holidays:
        if holiday.date == day:
            return holiday.type

    return HolidayTier.NORMAL


def build_holiday_index(holidays: Iterable[Holiday]) -> dict[datetime.date, HolidayTier]:
    """
    Date -> tier lookup for many dates at once.

    The first holiday listed for a date wins, matching get_holiday_type().
    """
    index: dict[datetime.date, HolidayTier] = {}
    for holiday in holidays:
        index.setdefault(holiday.date, holiday.type)
    return index


def is_rest_day(day: datetime.date, rest_day: int = DEFAULT_REST_DAY) -> bool:
    """
    True if ``day`` is the configured weekly rest day.

    ``rest_day`` counts from Sunday (0 = Sunday ... 6 = Saturday), not from
    Monday as datetime.weekday() does.
    """
    return day.isoweekday() % 7 == rest_day
