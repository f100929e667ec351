import logging
from datetime import datetime
from typing import Callable, Optional

from timeperiods.group import PeriodGroup
from timeperiods.period import IntervalBoundary, Period

logger = logging.getLogger(__name__)


class PeriodCollection(PeriodGroup):
    """
    An ordered collection of independent periods.

    Adding, inserting and removing never touches the bounds of any member.
    The collection spans from the earliest member start to the latest
    member end.
    """

    @property
    def start(self) -> Optional[datetime]:
        if not self.periods:
            return None
        return min(period.start for period in self.periods)

    @property
    def end(self) -> Optional[datetime]:
        if not self.periods:
            return None
        return max(period.end for period in self.periods)

    def add(self, period: Period) -> None:
        self.periods.append(period)

    def insert(self, period: Period, index: int) -> None:
        """Insert ``period`` at ``index``; out-of-range indexes are ignored."""
        if not 0 <= index <= len(self.periods):
            logger.debug(f"Ignoring insert at index {index} into collection of {len(self.periods)}")
            return
        self.periods.insert(index, period)

    def remove_at(self, index: int) -> Optional[Period]:
        """Remove and return the period at ``index``, or None if there is none."""
        if not 0 <= index < len(self.periods):
            logger.debug(f"Nothing to remove at index {index} in collection of {len(self.periods)}")
            return None
        return self.periods.pop(index)

    # -------------------------------------------------------------------------
    # Sorting
    # -------------------------------------------------------------------------

    def sort_by_start_ascending(self) -> None:
        self.periods.sort(key=lambda period: period.start)

    def sort_by_start_descending(self) -> None:
        self.periods.sort(key=lambda period: period.start, reverse=True)

    def sort_by_end_ascending(self) -> None:
        self.periods.sort(key=lambda period: period.end)

    def sort_by_end_descending(self) -> None:
        self.periods.sort(key=lambda period: period.end, reverse=True)

    def sort_by_duration_ascending(self) -> None:
        self.periods.sort(key=lambda period: period.duration_in_seconds)

    def sort_by_duration_descending(self) -> None:
        self.periods.sort(key=lambda period: period.duration_in_seconds, reverse=True)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def _filtered(self, predicate: Callable[[Period], bool]) -> "PeriodCollection":
        collection = PeriodCollection(calendar=self.calendar)
        for period in self.periods:
            if predicate(period):
                collection.add(period)
        return collection

    def periods_inside(self, period: Period) -> "PeriodCollection":
        """Members lying within ``period``."""
        return self._filtered(lambda member: member.is_inside(period))

    def periods_intersected_by_date(self, instant: datetime) -> "PeriodCollection":
        """Members containing ``instant``, bounds included."""
        return self._filtered(
            lambda member: member.contains_date(instant, IntervalBoundary.CLOSED)
        )

    def periods_intersected_by_period(self, period: Period) -> "PeriodCollection":
        """Members intersecting ``period``, touching included."""
        return self._filtered(lambda member: member.intersects(period))

    def periods_overlapped_by_period(self, period: Period) -> "PeriodCollection":
        """Members sharing more than a single instant with ``period``."""
        return self._filtered(lambda member: member.overlaps_with(period))

    # -------------------------------------------------------------------------
    # Equality
    # -------------------------------------------------------------------------

    def is_equal_to(self, other: "PeriodCollection", consider_order: bool = False) -> bool:
        """
        Compare member by member.

        With ``consider_order`` members must match at the same index,
        otherwise every member of this collection only needs an equal
        counterpart somewhere in ``other``.
        """
        if not self.has_same_characteristics_as(other):
            return False

        if consider_order:
            return all(
                period == other[index] for index, period in enumerate(self.periods)
            )
        return all(period in other.periods for period in self.periods)

    def __eq__(self, other):
        if not isinstance(other, PeriodCollection):
            return NotImplemented
        return self.is_equal_to(other)

    def copy(self) -> "PeriodCollection":
        """New collection holding the same period objects."""
        collection = PeriodCollection(calendar=self.calendar)
        for period in self.periods:
            collection.add(period)
        return collection
