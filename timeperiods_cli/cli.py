import argparse
import logging

from timeperiods import CalendarUnit, SettingValidationError, default_calendar, parse_period
from timeperiods.conf import settings

logger = logging.getLogger(__name__)


def _period_arg(parser, args, text):
    try:
        return parse_period(
            text,
            calendar=default_calendar(settings=args.settings),
            settings=args.settings,
        )
    except ValueError as e:
        parser.error(f"timeperiods: {e}")


def entrance(argv=None):
    timeperiods_argparse = argparse.ArgumentParser(
        description="Compare and measure time periods written as ISO 8601 intervals "
        '(e.g. "2010-01-01/2010-02-01" or "2010-01-01/P2M").'
    )
    timeperiods_argparse.add_argument(
        "--timezone",
        type=str,
        help='Timezone for dates without an offset, a zone name or "local"',
    )
    timeperiods_argparse.add_argument(
        "-v",
        "--verbose",
        help="Log debug output",
        action="store_true",
    )
    commands = timeperiods_argparse.add_subparsers(dest="command")

    relation = commands.add_parser("relation", help="Relation of the second period to the first")
    relation.add_argument("period")
    relation.add_argument("other")

    gap = commands.add_parser("gap", help="Seconds between two periods")
    gap.add_argument("period")
    gap.add_argument("other")

    duration = commands.add_parser("duration", help="Duration of a period in whole units")
    duration.add_argument("period")
    duration.add_argument(
        "--unit",
        type=str.upper,
        default=CalendarUnit.DAY.value,
        choices=[unit.value for unit in CalendarUnit],
    )

    args = timeperiods_argparse.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    if not args.command:
        timeperiods_argparse.error(
            "timeperiods: You need to specify the command (i.e.: relation, gap or duration)"
        )

    try:
        args.settings = settings.replace(mod_settings={"TIMEZONE": args.timezone})
    except SettingValidationError as e:
        timeperiods_argparse.error(f"timeperiods: {e}")

    period = _period_arg(timeperiods_argparse, args, args.period)
    logger.debug(f"timeperiods: parsed {period!r}")

    if args.command == "duration":
        print(period.duration_in(CalendarUnit(args.unit)))
        return

    other = _period_arg(timeperiods_argparse, args, args.other)
    logger.debug(f"timeperiods: parsed {other!r}")

    if args.command == "relation":
        print(period.relation_to(other).value)
    elif args.command == "gap":
        print(int(period.gap_between(other).total_seconds()))
