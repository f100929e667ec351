__version__ = "1.0.0"

from .conf import Settings, SettingValidationError, apply_settings, settings

from .calendars import (
    CalendarBase,
    CalendarOverflowError,
    CalendarUnit,
    GregorianCalendar,
    default_calendar,
    is_leap_year,
)

from .period import (
    Period,
    # Enums
    PeriodRelation, IntervalBoundary, AnchorPoint,
)

# Groups of periods
from .group import PeriodGroup
from .collection import PeriodCollection
from .chain import PeriodChain

# Text forms
from .formatting import format_interval, parse_instant, parse_duration, parse_period
