"""Philippine holiday calendar."""

import datetime
import logging

from cafepay.core.exceptions import StorageError
from cafepay.core.models import Holiday, HolidayTier
from cafepay.core.storage import holidays_file_for_year, load_holidays

logger = logging.getLogger(__name__)


def easter_sunday(year: int) -> datetime.date:
    """Anonymous Gregorian algorithm."""
    a = year % 19
    b = year // 100
    c = year % 100
    d = b // 4
    e = b % 4
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i = c // 4
    k = c % 4
    l = (32 + 2 * e + 2 * i - h - k) % 7  # noqa: E741
    m = (a + 11 * h + 22 * l) // 451
    month = (h + l - 7 * m + 114) // 31
    day = ((h + l - 7 * m + 114) % 31) + 1
    return datetime.date(year, month, day)


def maundy_thursday(year: int) -> datetime.date:
    """Thursday before Easter Sunday."""
    return easter_sunday(year) - datetime.timedelta(days=3)


def good_friday(year: int) -> datetime.date:
    """Friday before Easter Sunday."""
    return easter_sunday(year) - datetime.timedelta(days=2)


def black_saturday(year: int) -> datetime.date:
    """Saturday before Easter Sunday."""
    return easter_sunday(year) - datetime.timedelta(days=1)


def national_heroes_day(year: int) -> datetime.date:
    """Last Monday of August."""
    d = datetime.date(year, 8, 31)
    while d.weekday() != 0:  # 0 = Monday
        d -= datetime.timedelta(days=1)
    return d


def build_fixed_holidays(year: int) -> list[Holiday]:
    """
    Holidays that follow a fixed rule: set dates and the Holy Week days.

    Islamic and lunar holidays (Eid ul-Fitr, Eid ul-Adha, Chinese New Year)
    are proclaimed each year and only come from a calendar file.
    """
    regular = [
        ("New Year's Day", datetime.date(year, 1, 1)),
        ("Araw ng Kagitingan", datetime.date(year, 4, 9)),
        ("Maundy Thursday", maundy_thursday(year)),
        ("Good Friday", good_friday(year)),
        ("Labor Day", datetime.date(year, 5, 1)),
        ("Independence Day", datetime.date(year, 6, 12)),
        ("National Heroes Day", national_heroes_day(year)),
        ("Bonifacio Day", datetime.date(year, 11, 30)),
        ("Christmas Day", datetime.date(year, 12, 25)),
        ("Rizal Day", datetime.date(year, 12, 30)),
    ]
    special_non_working = [
        ("Black Saturday", black_saturday(year)),
        ("Ninoy Aquino Day", datetime.date(year, 8, 21)),
        ("All Saints' Day Eve", datetime.date(year, 10, 31)),
        ("All Saints' Day", datetime.date(year, 11, 1)),
        ("Feast of the Immaculate Conception", datetime.date(year, 12, 8)),
        ("Christmas Eve", datetime.date(year, 12, 24)),
        ("Last Day of the Year", datetime.date(year, 12, 31)),
    ]

    holidays = [Holiday(name=name, date=d, type=HolidayTier.REGULAR, year=year) for name, d in regular]
    holidays.extend(
        Holiday(name=name, date=d, type=HolidayTier.SPECIAL_NON_WORKING, year=year)
        for name, d in special_non_working
    )
    return sorted(holidays, key=lambda h: h.date)


def philippine_holidays(year: int) -> list[Holiday]:
    """
    Holidays for a year.

    Uses the packaged calendar file (cafepay/data/holidays_<year>.json) when
    there is one, since it carries the proclaimed movable holidays. Otherwise
    falls back to build_fixed_holidays().
    """
    file_path = holidays_file_for_year(year)
    if not file_path.exists():
        logger.warning("No holiday calendar for %d; using fixed-rule holidays only", year)
        return build_fixed_holidays(year)

    holidays = load_holidays(file_path)
    wrong_year = [h for h in holidays if h.date.year != year]
    if wrong_year:
        raise StorageError(f"Holiday calendar {file_path} has dates outside {year}: {wrong_year[0].date}")
    return sorted(holidays, key=lambda h: h.date)
