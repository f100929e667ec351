import logging
from datetime import datetime, timedelta, timezone

from dateutil.relativedelta import relativedelta
from tzlocal import get_localzone

from timeperiods.calendars import (
    SECONDS_IN_HOUR,
    SECONDS_IN_MINUTE,
    CalendarBase,
    CalendarOverflowError,
    CalendarUnit,
    timezone_from_setting,
)
from timeperiods.conf import apply_settings

logger = logging.getLogger(__name__)

# Units with a fixed length in seconds are added on the absolute timeline.
FIXED_LENGTH_UNITS = {
    CalendarUnit.SECOND: 1,
    CalendarUnit.MINUTE: SECONDS_IN_MINUTE,
    CalendarUnit.HOUR: SECONDS_IN_HOUR,
}

# Units whose length depends on the date are added on wall-clock time.
RELATIVEDELTA_FIELDS = {
    CalendarUnit.DAY: "days",
    CalendarUnit.WEEK: "weeks",
    CalendarUnit.MONTH: "months",
    CalendarUnit.YEAR: "years",
}


class GregorianCalendar(CalendarBase):
    """
    Proleptic Gregorian calendar backed by ``dateutil.relativedelta``.

    Month and year arithmetic clamps to the end of shorter months, so
    January 31st plus one month is the last day of February.

    Args:
        timezone: tzinfo the calendar builds instants in, or None to work
            with naive datetimes.
    """

    @classmethod
    def local(cls):
        """Calendar in the machine's local timezone."""
        return cls(timezone=get_localzone())

    def add_units(self, instant: datetime, unit: CalendarUnit, amount: int) -> datetime:
        if amount == 0:
            return instant

        try:
            if unit in FIXED_LENGTH_UNITS:
                delta = timedelta(seconds=amount * FIXED_LENGTH_UNITS[unit])
                if instant.tzinfo is None:
                    return instant + delta
                shifted = instant.astimezone(timezone.utc) + delta
                return shifted.astimezone(instant.tzinfo)

            return instant + relativedelta(**{RELATIVEDELTA_FIELDS[unit]: amount})
        except (OverflowError, ValueError) as e:
            logger.debug(f"Adding {amount} {unit.value} to {instant!r} overflowed: {e}")
            raise CalendarOverflowError(
                f"Cannot add {amount} {unit.value} to {instant.isoformat()}: {e}"
            ) from e

    def units_between(self, earlier: datetime, later: datetime, unit: CalendarUnit) -> int:
        if later < earlier:
            return -self.units_between(later, earlier, unit)

        if unit in FIXED_LENGTH_UNITS:
            return int(self.seconds_between(earlier, later) // FIXED_LENGTH_UNITS[unit])
        if unit == CalendarUnit.DAY:
            return (later - earlier).days
        if unit == CalendarUnit.WEEK:
            return (later - earlier).days // 7

        delta = relativedelta(later, earlier)
        if unit == CalendarUnit.MONTH:
            return delta.months + 12 * delta.years
        return delta.years


_default_calendars = {}


@apply_settings
def default_calendar(settings=None):
    """
    Calendar used by periods and groups created without an explicit one.

    The calendar's timezone follows the ``TIMEZONE`` setting; one calendar
    is shared per distinct setting value.
    """
    key = settings.TIMEZONE
    calendar = _default_calendars.get(key)
    if calendar is None:
        calendar = GregorianCalendar(timezone=timezone_from_setting(key))
        _default_calendars[key] = calendar
    return calendar
