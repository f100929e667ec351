"""
Periods - closed time spans between two instants.

A Period holds a start and an end instant plus the calendar used to do
date-component arithmetic on them. Periods are mutable: shifting,
lengthening and shortening rewrite the bounds in place.

Relations between two periods follow a fixed taxonomy of fourteen mutually
exclusive outcomes (see PeriodRelation). Relations are direction-sensitive
(a reversed period is INDETERMINATE), durations are not (a reversed period
has the same positive duration as its straightened copy).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Optional

from timeperiods.calendars import (
    SECONDS_IN_HOUR,
    SECONDS_IN_MINUTE,
    CalendarBase,
    CalendarUnit,
    default_calendar,
)
from timeperiods.formatting import format_interval


# =============================================================================
# Enums
# =============================================================================

class PeriodRelation(Enum):
    """How another period's boundaries sit relative to a reference period."""
    AFTER = "AFTER"
    START_TOUCHING = "START_TOUCHING"
    START_INSIDE = "START_INSIDE"
    INSIDE_START_TOUCHING = "INSIDE_START_TOUCHING"
    ENCLOSING_START_TOUCHING = "ENCLOSING_START_TOUCHING"
    ENCLOSING = "ENCLOSING"
    ENCLOSING_END_TOUCHING = "ENCLOSING_END_TOUCHING"
    EXACT_MATCH = "EXACT_MATCH"
    INSIDE = "INSIDE"
    INSIDE_END_TOUCHING = "INSIDE_END_TOUCHING"
    END_INSIDE = "END_INSIDE"
    END_TOUCHING = "END_TOUCHING"
    BEFORE = "BEFORE"
    INDETERMINATE = "INDETERMINATE"  # one of the periods is malformed


class IntervalBoundary(Enum):
    """Whether a period's own bounds count as inside it."""
    OPEN = "OPEN"
    CLOSED = "CLOSED"


class AnchorPoint(Enum):
    """The part of a period held fixed when lengthening or shortening it."""
    START = "START"
    CENTER = "CENTER"
    END = "END"


# =============================================================================
# Period
# =============================================================================

@dataclass(eq=False)
class Period:
    """
    A span of time between ``start`` and ``end``.

    ``start <= end`` is the convention but is not enforced; derived
    operations degrade gracefully on reversed bounds.

    Examples:
        Period(datetime(2010, 1, 1), datetime(2010, 2, 1))
        Period.starting_at(datetime(2000, 1, 1), CalendarUnit.MONTH)
        Period.ending_at(datetime(2000, 2, 1), CalendarUnit.WEEK, amount=2)
    """
    start: datetime
    end: datetime
    calendar: CalendarBase = field(default_factory=default_calendar)

    def __post_init__(self):
        # Explicit None means "use the default calendar" as well.
        if self.calendar is None:
            self.calendar = default_calendar()

    @classmethod
    def starting_at(
        cls,
        start: datetime,
        unit: CalendarUnit,
        amount: int = 1,
        calendar: Optional[CalendarBase] = None,
    ) -> Period:
        """Period of ``amount`` units beginning at ``start``."""
        calendar = calendar or default_calendar()
        return cls(start, calendar.add_units(start, unit, amount), calendar)

    @classmethod
    def ending_at(
        cls,
        end: datetime,
        unit: CalendarUnit,
        amount: int = 1,
        calendar: Optional[CalendarBase] = None,
    ) -> Period:
        """Period of ``amount`` units finishing at ``end``."""
        calendar = calendar or default_calendar()
        return cls(calendar.add_units(end, unit, -amount), end, calendar)

    @classmethod
    def all_time(cls, calendar: Optional[CalendarBase] = None) -> Period:
        """The largest representable period, from the distant past to the distant future."""
        calendar = calendar or default_calendar()
        return cls(calendar.distant_past, calendar.distant_future, calendar)

    # -------------------------------------------------------------------------
    # Durations
    # -------------------------------------------------------------------------

    def _ordered_bounds(self):
        if self.end < self.start:
            return self.end, self.start
        return self.start, self.end

    def _units(self, unit: CalendarUnit) -> int:
        earlier, later = self._ordered_bounds()
        return self.calendar.units_between(earlier, later, unit)

    @property
    def duration_in_years(self) -> int:
        return self._units(CalendarUnit.YEAR)

    @property
    def duration_in_months(self) -> int:
        return self._units(CalendarUnit.MONTH)

    @property
    def duration_in_weeks(self) -> int:
        return self._units(CalendarUnit.WEEK)

    @property
    def duration_in_days(self) -> int:
        return self._units(CalendarUnit.DAY)

    @property
    def duration_in_hours(self) -> float:
        return self.duration_in_seconds / SECONDS_IN_HOUR

    @property
    def duration_in_minutes(self) -> float:
        return self.duration_in_seconds / SECONDS_IN_MINUTE

    @property
    def duration_in_seconds(self) -> float:
        earlier, later = self._ordered_bounds()
        return self.calendar.seconds_between(earlier, later)

    def duration_in(self, unit: CalendarUnit) -> int:
        """Whole ``unit``s between the bounds, regardless of their order."""
        if unit == CalendarUnit.SECOND:
            return int(self.duration_in_seconds)
        if unit == CalendarUnit.MINUTE:
            return int(self.duration_in_minutes)
        if unit == CalendarUnit.HOUR:
            return int(self.duration_in_hours)
        return self._units(unit)

    # -------------------------------------------------------------------------
    # Comparisons
    # -------------------------------------------------------------------------

    def is_moment(self) -> bool:
        return self.start == self.end

    def is_equal_to(self, other: Period) -> bool:
        return self.start == other.start and self.end == other.end

    def __eq__(self, other):
        if not isinstance(other, Period):
            return NotImplemented
        return self.is_equal_to(other)

    def is_inside(self, other: Period) -> bool:
        """True when this period lies within ``other`` (bounds may coincide)."""
        return other.start <= self.start and self.end <= other.end

    def contains(self, other: Period) -> bool:
        """True when ``other`` lies within this period (bounds may coincide)."""
        return self.start <= other.start and other.end <= self.end

    def overlaps_with(self, other: Period) -> bool:
        """
        True when the periods share some span of time.

        Touching at a single instant (one's start equal to the other's end)
        does not count as overlapping.
        """
        return (
            (other.start < self.start and other.end > self.start)
            or (other.start >= self.start and other.end <= self.end)
            or (other.start < self.end and other.end > self.end)
        )

    def intersects(self, other: Period) -> bool:
        """Like overlaps_with, but touching at a single instant counts."""
        return (
            (other.start < self.start and other.end >= self.start)
            or (other.start >= self.start and other.end <= self.end)
            or (other.start <= self.end and other.end > self.end)
        )

    def relation_to(self, other: Period) -> PeriodRelation:
        """
        Classify how ``other`` sits relative to this period.

        Touching and exact cases are tested before the general ones, so the
        order of the checks below matters.

        Returns:
            PeriodRelation.INDETERMINATE if either period has start >= end,
            otherwise exactly one of the thirteen concrete relations.
        """
        if not (self.start < self.end and other.start < other.end):
            return PeriodRelation.INDETERMINATE

        if other.end < self.start:
            return PeriodRelation.AFTER
        elif other.end == self.start:
            return PeriodRelation.START_TOUCHING
        elif other.start < self.start and other.end < self.end:
            return PeriodRelation.START_INSIDE
        elif other.start == self.start and other.end > self.end:
            return PeriodRelation.INSIDE_START_TOUCHING
        elif other.start == self.start and other.end < self.end:
            return PeriodRelation.ENCLOSING_START_TOUCHING
        elif other.start > self.start and other.end < self.end:
            return PeriodRelation.ENCLOSING
        elif other.start > self.start and other.end == self.end:
            return PeriodRelation.ENCLOSING_END_TOUCHING
        elif other.start == self.start and other.end == self.end:
            return PeriodRelation.EXACT_MATCH
        elif other.start < self.start and other.end > self.end:
            return PeriodRelation.INSIDE
        elif other.start < self.start and other.end == self.end:
            return PeriodRelation.INSIDE_END_TOUCHING
        elif other.start < self.end and other.end > self.end:
            return PeriodRelation.END_INSIDE
        elif other.start == self.end and other.end > self.end:
            return PeriodRelation.END_TOUCHING
        elif other.start > self.end:
            return PeriodRelation.BEFORE
        return PeriodRelation.INDETERMINATE

    def gap_between(self, other: Period) -> timedelta:
        """Time between the two periods, zero if they touch or intersect."""
        if self.end < other.start:
            seconds = self.calendar.seconds_between(self.end, other.start)
        elif other.end < self.start:
            seconds = self.calendar.seconds_between(other.end, self.start)
        else:
            return timedelta(0)
        return timedelta(seconds=abs(seconds))

    def contains_date(
        self, instant: datetime, boundary: IntervalBoundary = IntervalBoundary.CLOSED
    ) -> bool:
        if boundary == IntervalBoundary.OPEN:
            return self.start < instant < self.end
        return self.start <= instant <= self.end

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def _add(self, instant: datetime, unit: CalendarUnit, amount: int) -> datetime:
        return self.calendar.add_units(instant, unit, amount)

    def shift_earlier(self, unit: CalendarUnit, amount: int = 1) -> None:
        """Move both bounds ``amount`` units back. Negative amounts move forward."""
        self.start = self._add(self.start, unit, -amount)
        self.end = self._add(self.end, unit, -amount)

    def shift_later(self, unit: CalendarUnit, amount: int = 1) -> None:
        """Move both bounds ``amount`` units forward. Negative amounts move back."""
        self.start = self._add(self.start, unit, amount)
        self.end = self._add(self.end, unit, amount)

    def lengthen(self, anchor: AnchorPoint, unit: CalendarUnit, amount: int = 1) -> None:
        """
        Grow the period by ``amount`` units, keeping ``anchor`` in place.

        With a CENTER anchor each bound moves by half the amount, truncated
        toward zero, so odd amounts lose one unit.
        """
        if anchor == AnchorPoint.START:
            self.end = self._add(self.end, unit, amount)
        elif anchor == AnchorPoint.CENTER:
            half = int(amount / 2)
            self.start = self._add(self.start, unit, -half)
            self.end = self._add(self.end, unit, half)
        elif anchor == AnchorPoint.END:
            self.start = self._add(self.start, unit, -amount)

    def shorten(self, anchor: AnchorPoint, unit: CalendarUnit, amount: int = 1) -> None:
        """Shrink the period by ``amount`` units, keeping ``anchor`` in place."""
        if anchor == AnchorPoint.START:
            self.end = self._add(self.end, unit, -amount)
        elif anchor == AnchorPoint.CENTER:
            half = int(amount / 2)
            self.start = self._add(self.start, unit, half)
            self.end = self._add(self.end, unit, -half)
        elif anchor == AnchorPoint.END:
            self.start = self._add(self.start, unit, amount)

    def copy(self) -> Period:
        """Independent period with the same bounds, sharing the calendar."""
        return Period(self.start, self.end, self.calendar)

    __copy__ = copy

    def __repr__(self) -> str:
        return f"Period(start={self.start.isoformat()}, end={self.end.isoformat()})"

    def __str__(self) -> str:
        return format_interval(self.start, self.end)
