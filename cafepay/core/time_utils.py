import datetime
import logging
from decimal import Decimal
from typing import Any

from cafepay.core.constants import SECONDS_PER_HOUR
from cafepay.core.exceptions import InvalidTimeError

logger = logging.getLogger(__name__)

_MICROSECONDS_PER_HOUR = Decimal(SECONDS_PER_HOUR * 1_000_000)


def parse_instant(value: Any, field_name: str) -> datetime.datetime:
    """Parse a shift instant and return a datetime.

    Handles:
    1) datetime objects (returned unchanged)
    2) ISO-8601 strings, "YYYY-MM-DDTHH:MM[:SS][+HH:MM]"
    3) error handling via logging + InvalidTimeError (no bare except)
    """
    if isinstance(value, datetime.datetime):
        return value

    if isinstance(value, str):
        s = value.strip()
        if not s:
            logger.error("Shift %s is empty string", field_name)
            raise InvalidTimeError(field_name, value)

        try:
            return datetime.datetime.fromisoformat(s)
        except ValueError as e:
            logger.warning("Failed parsing shift %s as ISO datetime. value=%r", field_name, value)
            raise InvalidTimeError(field_name, value) from e

    logger.warning(
        "Unsupported shift %s type. type=%s value=%r",
        field_name,
        type(value).__name__,
        value,
    )
    raise InvalidTimeError(field_name, value)


def to_zone(dt: datetime.datetime, tz: datetime.tzinfo) -> datetime.datetime:
    """Naive datetimes are wall-clock times in ``tz``; aware ones are converted."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=tz)
    return dt.astimezone(tz)


def elapsed(start: datetime.datetime, end: datetime.datetime) -> datetime.timedelta:
    """Absolute time between two instants, independent of their tzinfo objects."""
    if start.tzinfo is None or end.tzinfo is None:
        return end - start
    return end.astimezone(datetime.timezone.utc) - start.astimezone(datetime.timezone.utc)


def timedelta_to_hours(delta: datetime.timedelta) -> Decimal:
    """Exact fractional hours of a timedelta."""
    return Decimal(delta // datetime.timedelta(microseconds=1)) / _MICROSECONDS_PER_HOUR


def hours_between(start: datetime.datetime, end: datetime.datetime) -> Decimal:
    return timedelta_to_hours(elapsed(start, end))


def local_midnight(day: datetime.date, tz: datetime.tzinfo) -> datetime.datetime:
    return datetime.datetime.combine(day, datetime.time(0, 0), tzinfo=tz)
