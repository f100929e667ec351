import logging
from datetime import datetime
from typing import Optional

from timeperiods.calendars import CalendarUnit
from timeperiods.group import PeriodGroup
from timeperiods.period import Period

logger = logging.getLogger(__name__)


class PeriodChain(PeriodGroup):
    """
    Periods laid end to end: each member's end is the next member's start.

    Members keep their duration when they join or when neighbours leave;
    only their position on the timeline moves. A period added or inserted
    into a non-empty chain is rebuilt as a new Period of the same length in
    seconds, so the object stored is not the one passed in.
    """

    @property
    def start(self) -> Optional[datetime]:
        if not self.periods:
            return None
        return self.periods[0].start

    @property
    def end(self) -> Optional[datetime]:
        if not self.periods:
            return None
        return self.periods[-1].end

    @property
    def first(self) -> Optional[Period]:
        return self.periods[0] if self.periods else None

    @property
    def last(self) -> Optional[Period]:
        return self.periods[-1] if self.periods else None

    @staticmethod
    def _seconds(period: Period) -> int:
        return int(period.duration_in_seconds)

    def add(self, period: Period) -> None:
        """Append ``period``, moving it to start where the chain ends."""
        if not self.periods:
            self.periods.append(period)
            return

        linked = Period.starting_at(
            self.periods[-1].end, CalendarUnit.SECOND, self._seconds(period), self.calendar
        )
        self.periods.append(linked)

    def insert(self, period: Period, index: int) -> None:
        """
        Insert ``period`` at ``index`` keeping the chain contiguous.

        At index 0 the period is prepended so that it ends where the chain
        used to start. Further in, every member from ``index`` on is shifted
        later by the period's duration to make room. Out-of-range indexes are
        ignored.
        """
        if index == 0 and not self.periods:
            self.add(period)
            return

        seconds = self._seconds(period)
        if index == 0:
            linked = Period.ending_at(
                self.periods[0].start, CalendarUnit.SECOND, seconds, self.calendar
            )
            self.periods.insert(0, linked)
        elif 0 < index <= len(self.periods):
            for member in self.periods[index:]:
                member.shift_later(CalendarUnit.SECOND, seconds)
            logger.debug(f"Shifted {len(self.periods) - index} chain members later by {seconds}s")

            linked = Period.starting_at(
                self.periods[index - 1].end, CalendarUnit.SECOND, seconds, self.calendar
            )
            self.periods.insert(index, linked)
        else:
            logger.debug(f"Ignoring insert at index {index} into chain of {len(self.periods)}")

    def remove_at(self, index: int) -> Optional[Period]:
        """
        Remove and return the period at ``index``.

        Members after it are shifted earlier by its duration to close the gap.
        Returns None without touching the chain if ``index`` is out of range.
        """
        if not 0 <= index < len(self.periods):
            logger.debug(f"Nothing to remove at index {index} in chain of {len(self.periods)}")
            return None

        period = self.periods.pop(index)
        seconds = self._seconds(period)
        for member in self.periods[index:]:
            member.shift_earlier(CalendarUnit.SECOND, seconds)
        return period

    def remove_latest(self) -> Optional[Period]:
        if not self.periods:
            return None
        return self.periods.pop()

    def remove_earliest(self) -> Optional[Period]:
        """
        Remove and return the first period.

        Every remaining member is shifted earlier by the removed period's
        duration, so the chain keeps its start and loses that much at the end.
        The returned period is not shifted and keeps the bounds it had in
        the chain.
        """
        if not self.periods:
            return None

        period = self.periods.pop(0)
        seconds = self._seconds(period)
        for member in self.periods:
            member.shift_earlier(CalendarUnit.SECOND, seconds)
        return period

    def is_equal_to(self, other: "PeriodChain") -> bool:
        if not self.has_same_characteristics_as(other):
            return False
        return all(period == other[index] for index, period in enumerate(self.periods))

    def __eq__(self, other):
        if not isinstance(other, PeriodChain):
            return NotImplemented
        return self.is_equal_to(other)

    def copy(self) -> "PeriodChain":
        """New chain rebuilt by adding each member in order."""
        chain = PeriodChain(calendar=self.calendar)
        for period in self.periods:
            chain.add(period)
        return chain
