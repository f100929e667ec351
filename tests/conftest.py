from datetime import timezone
from types import SimpleNamespace

import pytest

from timeperiods import CalendarUnit, GregorianCalendar, Period


@pytest.fixture
def calendar():
    """Gregorian calendar pinned to UTC so results do not depend on the host zone."""
    return GregorianCalendar(timezone=timezone.utc)


@pytest.fixture
def samples(calendar):
    """Month-sized periods around the start of 2010 shared by the group tests."""
    start = calendar.date(2010, 1, 1)

    def months(amount, starting_at):
        return Period.starting_at(starting_at, CalendarUnit.MONTH, amount, calendar)

    return SimpleNamespace(
        start=start,
        month=months(1, start),
        two_months=months(2, start),
        month_after_month=months(1, calendar.add_units(start, CalendarUnit.MONTH, 1)),
        two_months_after_two_weeks=months(2, calendar.add_units(start, CalendarUnit.WEEK, 2)),
        four_months=months(4, start),
    )
