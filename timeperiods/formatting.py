"""
Text forms of instants, durations and periods.

Periods are written as ISO 8601 intervals ("start / end"). Parsing accepts
the ISO 8601 interval forms start/end, start/duration and duration/end,
where a duration is either an ISO 8601 duration ("P1Y2M", "PT36H") or a
plain phrase ("2 months 3 days").
"""

from datetime import datetime
from typing import List, Optional, Tuple

import regex as re
from dateutil import parser as date_parser

from timeperiods.calendars import CalendarUnit, default_calendar, timezone_from_setting
from timeperiods.conf import apply_settings

ISO_DURATION_PATTERN = re.compile(
    r"^P(?!$)(?:(?P<years>\d+)Y)?(?:(?P<months>\d+)M)?(?:(?P<weeks>\d+)W)?(?:(?P<days>\d+)D)?"
    r"(?:T(?=\d)(?:(?P<hours>\d+)H)?(?:(?P<minutes>\d+)M)?(?:(?P<seconds>\d+)S)?)?$",
    re.I,
)

_UNITS = r"year|month|week|day|hour|minute|second"
PHRASE_PATTERN = re.compile(r"(\d+)\s*(%s)s?\b" % _UNITS, re.I | re.U)
PHRASE_FILLER_PATTERN = re.compile(r"^[\s,]*(?:and[\s,]*)*$", re.I)

ISO_DURATION_UNITS = [
    ("years", CalendarUnit.YEAR),
    ("months", CalendarUnit.MONTH),
    ("weeks", CalendarUnit.WEEK),
    ("days", CalendarUnit.DAY),
    ("hours", CalendarUnit.HOUR),
    ("minutes", CalendarUnit.MINUTE),
    ("seconds", CalendarUnit.SECOND),
]


def format_interval(start: Optional[datetime], end: Optional[datetime]) -> str:
    """Format an interval as ISO 8601 strings."""
    start_str = start.isoformat() if start else "..."
    end_str = end.isoformat() if end else "..."
    return f"{start_str} / {end_str}"


@apply_settings
def parse_instant(date_string: str, settings=None) -> datetime:
    """
    Parse a single date/time string.

    Naive results are put in the ``TIMEZONE`` setting's zone when one is set.

    Raises:
        ValueError: If the string is not a recognizable date.
    """
    try:
        date_obj = date_parser.parse(date_string.strip(), dayfirst=settings.DAYFIRST)
    except OverflowError as e:
        raise ValueError(f"Date out of range: {date_string!r}") from e

    if date_obj.tzinfo is None and settings.TIMEZONE:
        date_obj = date_obj.replace(tzinfo=timezone_from_setting(settings.TIMEZONE))
    return date_obj


def parse_duration(text: str) -> List[Tuple[CalendarUnit, int]]:
    """
    Parse a duration into (unit, amount) pairs, largest unit first.

    Examples:
        parse_duration("P1Y2M")           -> [(YEAR, 1), (MONTH, 2)]
        parse_duration("2 weeks, 3 days") -> [(WEEK, 2), (DAY, 3)]

    Raises:
        ValueError: If ``text`` is not a duration.
    """
    text = text.strip()

    match = ISO_DURATION_PATTERN.match(text)
    if match:
        return [
            (unit, int(match.group(name)))
            for name, unit in ISO_DURATION_UNITS
            if match.group(name) is not None
        ]

    found = PHRASE_PATTERN.findall(text)
    if not found or not PHRASE_FILLER_PATTERN.match(PHRASE_PATTERN.sub("", text)):
        raise ValueError(f"Not a duration: {text!r}")

    amounts = {}
    for amount, unit_name in found:
        unit = CalendarUnit(unit_name.upper())
        amounts[unit] = amounts.get(unit, 0) + int(amount)
    return [(unit, amounts[unit]) for _, unit in ISO_DURATION_UNITS if unit in amounts]


def _try_parse_duration(text: str) -> Optional[List[Tuple[CalendarUnit, int]]]:
    try:
        return parse_duration(text)
    except ValueError:
        return None


@apply_settings
def parse_period(text: str, calendar=None, settings=None):
    """
    Parse an ISO 8601 style interval into a Period.

    Supported forms (separator "/" or "--", surrounding spaces allowed):
        2010-01-01/2010-02-01
        2010-01-01/P2M
        P2M/2010-03-01

    Durations are applied through ``calendar`` (the default calendar when
    omitted), so "2010-01-31/P1M" ends on the last day of February.

    Raises:
        ValueError: If ``text`` is not one of the forms above.
    """
    # Imported here, period itself formats through this module.
    from timeperiods.period import Period

    calendar = calendar or default_calendar(settings=settings)

    for separator in settings.PERIOD_SEPARATORS:
        parts = text.split(separator)
        if len(parts) != 2:
            continue

        first, second = (part.strip() for part in parts)
        first_duration = _try_parse_duration(first)
        second_duration = _try_parse_duration(second)

        if first_duration and second_duration:
            raise ValueError(f"Period needs at least one date: {text!r}")

        if second_duration:
            start = end = parse_instant(first, settings=settings)
            for unit, amount in second_duration:
                end = calendar.add_units(end, unit, amount)
        elif first_duration:
            start = end = parse_instant(second, settings=settings)
            for unit, amount in reversed(first_duration):
                start = calendar.add_units(start, unit, -amount)
        else:
            start = parse_instant(first, settings=settings)
            end = parse_instant(second, settings=settings)

        return Period(start, end, calendar)

    raise ValueError(f"Not a period: {text!r}")
