"""
Behavior shared by ordered groups of periods.

Both PeriodCollection and PeriodChain hold a list of Period objects and a
calendar. They differ in how the aggregate start/end are derived and in how
members are inserted and removed; everything else lives here.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Iterator, List, Optional

from timeperiods.calendars import CalendarBase, CalendarUnit, default_calendar
from timeperiods.period import Period


class PeriodGroup(ABC):
    """
    Base class for ordered sequences of periods.

    Indexing returns the stored Period itself, so mutating it mutates the
    group. Copy the period first when isolation is needed.
    """

    def __init__(self, calendar: Optional[CalendarBase] = None):
        self.calendar = calendar or default_calendar()
        self.periods: List[Period] = []

    @property
    @abstractmethod
    def start(self) -> Optional[datetime]:
        """Start of the group, None when it is empty."""

    @property
    @abstractmethod
    def end(self) -> Optional[datetime]:
        """End of the group, None when it is empty."""

    @property
    def count(self) -> int:
        return len(self.periods)

    def __len__(self) -> int:
        return len(self.periods)

    def __iter__(self) -> Iterator[Period]:
        return iter(self.periods)

    def __getitem__(self, index: int) -> Period:
        return self.periods[index]

    def __setitem__(self, index: int, period: Period) -> None:
        self.periods[index] = period

    # -------------------------------------------------------------------------
    # Aggregate durations
    # -------------------------------------------------------------------------

    def duration_in(self, unit: CalendarUnit) -> int:
        """Whole ``unit``s between the group's start and end, 0 when empty."""
        start, end = self.start, self.end
        if start is None or end is None:
            return 0
        if unit in (CalendarUnit.SECOND, CalendarUnit.MINUTE, CalendarUnit.HOUR):
            return Period(start, end, self.calendar).duration_in(unit)
        return abs(self.calendar.units_between(start, end, unit))

    @property
    def duration_in_years(self) -> int:
        return self.duration_in(CalendarUnit.YEAR)

    @property
    def duration_in_months(self) -> int:
        return self.duration_in(CalendarUnit.MONTH)

    @property
    def duration_in_weeks(self) -> int:
        return self.duration_in(CalendarUnit.WEEK)

    @property
    def duration_in_days(self) -> int:
        return self.duration_in(CalendarUnit.DAY)

    @property
    def duration_in_hours(self) -> int:
        return self.duration_in(CalendarUnit.HOUR)

    @property
    def duration_in_minutes(self) -> int:
        return self.duration_in(CalendarUnit.MINUTE)

    @property
    def duration_in_seconds(self) -> int:
        return self.duration_in(CalendarUnit.SECOND)

    # -------------------------------------------------------------------------
    # Bulk operations
    # -------------------------------------------------------------------------

    def shift_earlier(self, unit: CalendarUnit, amount: int = 1) -> None:
        for period in self.periods:
            period.shift_earlier(unit, amount)

    def shift_later(self, unit: CalendarUnit, amount: int = 1) -> None:
        for period in self.periods:
            period.shift_later(unit, amount)

    def has_same_characteristics_as(self, other: PeriodGroup) -> bool:
        """True when ``other`` has the same member count, start and end."""
        if len(other) != len(self):
            return False
        elif len(other) == 0:
            return True
        return other.start == self.start and other.end == self.end

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(periods={self.periods!r})"
