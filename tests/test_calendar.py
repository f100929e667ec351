"""
Tests for the Gregorian calendar service: unit arithmetic, whole-unit
counting, the leap-year rule and the default calendar.
"""

import pytest
from datetime import datetime, timezone

from dateutil.tz import gettz

from timeperiods import (
    CalendarOverflowError,
    CalendarUnit,
    GregorianCalendar,
    default_calendar,
    is_leap_year,
)
from timeperiods.calendars import timezone_from_setting


class TestAddUnits:
    """Tests for adding calendar units to an instant."""

    def test_month_end_is_clamped_in_leap_year(self, calendar):
        """Test January 31st plus one month lands on February 29th in a leap year."""
        result = calendar.add_units(calendar.date(2000, 1, 31), CalendarUnit.MONTH, 1)
        assert result == calendar.date(2000, 2, 29)

    def test_month_end_is_clamped_in_common_year(self, calendar):
        """Test January 31st plus one month lands on February 28th otherwise."""
        result = calendar.add_units(calendar.date(2001, 1, 31), CalendarUnit.MONTH, 1)
        assert result == calendar.date(2001, 2, 28)

    def test_negative_amount_goes_back(self, calendar):
        """Test negative amounts subtract units."""
        result = calendar.add_units(calendar.date(2000, 3, 1), CalendarUnit.DAY, -1)
        assert result == calendar.date(2000, 2, 29)

    def test_zero_amount_returns_same_instant(self, calendar):
        """Test adding nothing returns the instant unchanged."""
        instant = calendar.date(2010, 5, 17, 13, 45)
        assert calendar.add_units(instant, CalendarUnit.YEAR, 0) is instant

    @pytest.mark.parametrize("unit,expected", [
        (CalendarUnit.SECOND, datetime(2000, 1, 1, 0, 0, 1, tzinfo=timezone.utc)),
        (CalendarUnit.MINUTE, datetime(2000, 1, 1, 0, 1, tzinfo=timezone.utc)),
        (CalendarUnit.HOUR, datetime(2000, 1, 1, 1, tzinfo=timezone.utc)),
        (CalendarUnit.DAY, datetime(2000, 1, 2, tzinfo=timezone.utc)),
        (CalendarUnit.WEEK, datetime(2000, 1, 8, tzinfo=timezone.utc)),
        (CalendarUnit.MONTH, datetime(2000, 2, 1, tzinfo=timezone.utc)),
        (CalendarUnit.YEAR, datetime(2001, 1, 1, tzinfo=timezone.utc)),
    ])
    def test_every_unit(self, calendar, unit, expected):
        """Test one of each unit added to the start of 2000."""
        assert calendar.add_units(calendar.date(2000), unit, 1) == expected

    def test_hours_follow_absolute_time_across_dst(self):
        """Test fixed-length units are added on the UTC timeline."""
        new_york = GregorianCalendar(timezone=gettz("America/New_York"))
        result = new_york.add_units(new_york.date(2021, 3, 14, 1), CalendarUnit.HOUR, 1)
        assert result.hour == 3
        assert result.utcoffset().total_seconds() == -4 * 3600

    def test_days_follow_wall_clock_across_dst(self):
        """Test calendar units keep the wall-clock time."""
        new_york = GregorianCalendar(timezone=gettz("America/New_York"))
        result = new_york.add_units(new_york.date(2021, 3, 13, 12), CalendarUnit.DAY, 1)
        assert (result.day, result.hour) == (14, 12)

    def test_overflow_raises_calendar_overflow(self):
        """Test leaving the representable range raises CalendarOverflowError."""
        naive = GregorianCalendar()
        with pytest.raises(CalendarOverflowError):
            naive.add_units(datetime.max, CalendarUnit.DAY, 1)

    def test_year_overflow_is_an_overflow_error(self):
        """Test year overflow is reported as an OverflowError subclass."""
        naive = GregorianCalendar()
        with pytest.raises(OverflowError):
            naive.add_units(datetime(9999, 6, 1), CalendarUnit.YEAR, 1)


class TestUnitsBetween:
    """Tests for counting whole units between two instants."""

    @pytest.fixture
    def bounds(self, calendar):
        return calendar.date(1900, 6, 15), calendar.date(2000, 1, 1)

    @pytest.mark.parametrize("unit,expected", [
        (CalendarUnit.YEAR, 99),
        (CalendarUnit.MONTH, 1194),
        (CalendarUnit.WEEK, 5194),
        (CalendarUnit.DAY, 36359),
    ])
    def test_calendar_units(self, calendar, bounds, unit, expected):
        """Test calendar-unit counts over a century-long span."""
        assert calendar.units_between(*bounds, unit) == expected

    def test_months_include_years(self, calendar):
        """Test month counts include the year contribution."""
        count = calendar.units_between(
            calendar.date(2010, 1, 1), calendar.date(2012, 3, 1), CalendarUnit.MONTH
        )
        assert count == 26

    def test_reversed_instants_give_negative_count(self, calendar, bounds):
        """Test the count is signed."""
        earlier, later = bounds
        assert calendar.units_between(later, earlier, CalendarUnit.MONTH) == -1194

    def test_fixed_length_units(self, calendar):
        """Test hours, minutes and seconds are whole units of elapsed time."""
        earlier = calendar.date(2000, 1, 1)
        later = calendar.date(2000, 1, 2, 12, 20, 30)
        assert calendar.units_between(earlier, later, CalendarUnit.HOUR) == 36
        assert calendar.units_between(earlier, later, CalendarUnit.MINUTE) == 2180
        assert calendar.units_between(earlier, later, CalendarUnit.SECOND) == 130830

    def test_seconds_between_uses_utc_timeline(self):
        """Test a day across the spring DST change lasts 23 hours."""
        new_york = GregorianCalendar(timezone=gettz("America/New_York"))
        seconds = new_york.seconds_between(
            new_york.date(2021, 3, 13, 12), new_york.date(2021, 3, 14, 12)
        )
        assert seconds == 23 * 3600


class TestLeapYear:
    """Tests for the leap-year predicate."""

    @pytest.mark.parametrize("year,expected", [
        (2000, True),
        (2001, False),
        (2100, False),
        (2004, True),
    ])
    def test_is_leap_year(self, year, expected):
        """Test the Gregorian leap-year rule."""
        assert is_leap_year(year) is expected
        assert GregorianCalendar().is_leap_year(year) is expected


class TestCalendarHelpers:
    """Tests for instant construction and calendar defaults."""

    def test_date_uses_calendar_timezone(self, calendar):
        """Test date() builds instants in the calendar's zone."""
        assert calendar.date(2010, 1, 1) == datetime(2010, 1, 1, tzinfo=timezone.utc)

    def test_naive_calendar_builds_naive_dates(self):
        """Test a calendar without timezone builds naive instants."""
        assert GregorianCalendar().date(2010).tzinfo is None

    def test_distant_bounds_of_aware_calendar(self, calendar):
        """Test distant past/future are aware for aware calendars."""
        assert calendar.distant_past == datetime.min.replace(tzinfo=timezone.utc)
        assert calendar.distant_future == datetime.max.replace(tzinfo=timezone.utc)

    def test_local_calendar_has_timezone(self):
        """Test the local calendar carries the machine's zone."""
        assert GregorianCalendar.local().timezone is not None

    def test_default_calendar_is_naive(self):
        """Test the default calendar works with naive datetimes."""
        assert default_calendar().timezone is None

    def test_default_calendar_is_shared(self):
        """Test the default calendar is one shared object."""
        assert default_calendar() is default_calendar()

    def test_default_calendar_follows_timezone_setting(self):
        """Test the TIMEZONE setting picks the default calendar's zone."""
        calendar = default_calendar(settings={"TIMEZONE": "UTC"})
        assert calendar.timezone is not None
        assert calendar is not default_calendar()

    @pytest.mark.parametrize("name", ["local", "Local", "LOCAL"])
    def test_local_timezone_setting(self, name):
        """Test "local" resolves to the machine's zone whatever its case."""
        assert timezone_from_setting(name) is not None

    def test_named_timezone_setting(self):
        """Test zone names resolve through the tz database."""
        assert timezone_from_setting("UTC").utcoffset(datetime(2010, 1, 1)).total_seconds() == 0
        assert timezone_from_setting(None) is None

    def test_unknown_timezone_setting(self):
        """Test unknown zone names raise ValueError."""
        with pytest.raises(ValueError):
            timezone_from_setting("Nowhere/Special")

    def test_timezone_containing_local_is_not_local(self):
        """Test only the exact word "local" means the machine's zone."""
        with pytest.raises(ValueError):
            timezone_from_setting("notlocal")
