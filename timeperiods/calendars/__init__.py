"""
Calendar services used by periods for date-component arithmetic.

A calendar knows how to add a number of calendar units to an instant and how
to count whole units between two instants. Periods and period groups never
do calendar math themselves, they ask the calendar they were built with.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from dateutil.tz import gettz
from tzlocal import get_localzone

SECONDS_IN_MINUTE = 60
SECONDS_IN_HOUR = 3600


class CalendarUnit(Enum):
    """Granularity used for period arithmetic and duration counting."""
    SECOND = "SECOND"
    MINUTE = "MINUTE"
    HOUR = "HOUR"
    DAY = "DAY"
    WEEK = "WEEK"
    MONTH = "MONTH"
    YEAR = "YEAR"


class CalendarOverflowError(OverflowError):
    """Raised when calendar arithmetic leaves the representable instant range."""


def is_leap_year(year: int) -> bool:
    return (year % 400 == 0) or (year % 4 == 0 and year % 100 != 0)


def timezone_from_setting(tz_string: Optional[str]):
    """Resolve a ``TIMEZONE`` setting value to a tzinfo (or None for naive)."""
    if tz_string is None:
        return None
    if tz_string.lower() == "local":
        return get_localzone()

    tz = gettz(tz_string)
    if tz is None:
        raise ValueError(f"Unknown timezone: {tz_string!r}")
    return tz


class CalendarBase(ABC):
    """
    Base class for calendar services.

    Subclasses implement unit addition and whole-unit counting. Everything
    else (elapsed seconds, the leap-year rule, distant instants) is shared.
    """

    def __init__(self, timezone=None):
        self.timezone = timezone

    @abstractmethod
    def add_units(self, instant: datetime, unit: CalendarUnit, amount: int) -> datetime:
        """
        Add ``amount`` units to ``instant``. Negative amounts go back in time.

        Raises:
            CalendarOverflowError: If the result is not representable.
        """

    @abstractmethod
    def units_between(self, earlier: datetime, later: datetime, unit: CalendarUnit) -> int:
        """
        Count whole units from ``earlier`` to ``later``.

        The count is negative when ``later`` precedes ``earlier``.
        """

    def seconds_between(self, earlier: datetime, later: datetime) -> float:
        if earlier.tzinfo is not None and later.tzinfo is not None:
            earlier = earlier.astimezone(timezone.utc)
            later = later.astimezone(timezone.utc)
        return (later - earlier).total_seconds()

    def is_leap_year(self, year: int) -> bool:
        return is_leap_year(year)

    def date(self, year=1970, month=1, day=1, hour=0, minute=0, second=0) -> datetime:
        return datetime(year, month, day, hour, minute, second, tzinfo=self.timezone)

    @property
    def distant_past(self) -> datetime:
        if self.timezone is None:
            return datetime.min
        return datetime.min.replace(tzinfo=timezone.utc)

    @property
    def distant_future(self) -> datetime:
        if self.timezone is None:
            return datetime.max
        return datetime.max.replace(tzinfo=timezone.utc)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(timezone={self.timezone!r})"


from .gregorian import GregorianCalendar, default_calendar  # noqa: E402

__all__ = [
    "CalendarBase",
    "CalendarOverflowError",
    "CalendarUnit",
    "GregorianCalendar",
    "SECONDS_IN_HOUR",
    "SECONDS_IN_MINUTE",
    "default_calendar",
    "is_leap_year",
    "timezone_from_setting",
]
