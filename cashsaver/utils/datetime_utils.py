"""DateTime utilities for calendar-day arithmetic.

Savings pacing and the calendar markers work on whole calendar days in the
user's local zone (``settings.TIMEZONE``), never on elapsed 24-hour windows.
A deposit recorded at 23:30 and one at 00:15 the next morning land on two
different days even though they are 45 minutes apart.

Naive datetimes are interpreted as local wall-clock time. Aware datetimes are
converted into the local zone before their day is taken.
"""

from datetime import date, datetime, timezone
from typing import Optional, Union
from zoneinfo import ZoneInfo

from cashsaver.config import settings

DateLike = Union[date, datetime]


def local_zone(tz_name: Optional[str] = None) -> ZoneInfo:
    """Return the configured local zone (or ``tz_name`` when given)."""
    return ZoneInfo(tz_name or settings.TIMEZONE)


def utc_now() -> datetime:
    """
    Get current UTC datetime without timezone info (offset-naive).

    Used for bookkeeping columns (``created_at``/``updated_at``) that are
    stored as TIMESTAMP WITHOUT TIME ZONE.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def local_now(tz: Optional[ZoneInfo] = None) -> datetime:
    """Current moment as an aware datetime in the local zone."""
    return datetime.now(tz or local_zone())


def to_local(moment: datetime, tz: Optional[ZoneInfo] = None) -> datetime:
    """Normalize ``moment`` to an aware datetime in the local zone."""
    tz = tz or local_zone()
    if moment.tzinfo is None:
        return moment.replace(tzinfo=tz)
    return moment.astimezone(tz)


def calendar_day(value: DateLike, tz: Optional[ZoneInfo] = None) -> date:
    """
    Calendar day of ``value`` in the local zone.

    ``datetime`` is a subclass of ``date``, so it has to be checked first.
    """
    if isinstance(value, datetime):
        return to_local(value, tz).date()
    return value


def days_between(start: DateLike, end: DateLike, tz: Optional[ZoneInfo] = None) -> int:
    """
    Whole calendar days from ``start`` to ``end``.

    Negative when ``end`` falls on an earlier day. Time of day is ignored:

        >>> days_between(date(2024, 1, 1), date(2024, 1, 31))
        30
    """
    return (calendar_day(end, tz) - calendar_day(start, tz)).days


def is_same_day(first: DateLike, second: DateLike, tz: Optional[ZoneInfo] = None) -> bool:
    """True when both values fall on the same local calendar day."""
    return calendar_day(first, tz) == calendar_day(second, tz)
