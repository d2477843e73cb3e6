#!/usr/bin/env python3
"""
Command line front end for the AIRAC converter.
Used by workflows to look up the current cycle, upcoming cycles and
to convert between dates and cycle identifiers.
"""

import argparse

from airac_utils import AIRAC_CYCLE_DAYS, CycleConverter

COMMANDS = ["airac", "airac_current_only", "is_start", "future", "to_cycle", "to_date"]


def build_parser():
    parser = argparse.ArgumentParser(description="AIRAC cycle utilities")
    parser.add_argument("command", choices=COMMANDS, help="Command to run")
    parser.add_argument("value", nargs="?", help="Date (YYYY-MM-DD) for to_cycle, identifier (YYNN) for to_date")
    parser.add_argument("--weeks", type=int, default=AIRAC_CYCLE_DAYS // 7, help="Cycle length in weeks")
    parser.add_argument("--date", dest="day", help="Reference date instead of today (YYYY-MM-DD)")
    parser.add_argument("--count", type=int, default=13, help="Number of cycles listed by 'future'")
    parser.add_argument("--debug", action="store_true", help="Enable debug output")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command in ("to_cycle", "to_date") and args.value is None:
        parser.error(f"{args.command} requires a value")

    try:
        converter = CycleConverter.from_weeks(args.weeks)
    except ValueError as e:
        parser.error(str(e))

    try:
        if args.command.startswith("airac"):
            current = converter.current_cycle(args.day, debug=args.debug)
            if args.command == "airac":
                following = converter.next_cycle(args.day)
                print(f"Current AIRAC: {current.identifier}")
                print(f"Next cycle starts on: {following.effective_date}")
            else:
                print(current.identifier)

        elif args.command == "is_start":
            print("1" if converter.is_cycle_start(args.day, debug=args.debug) else "0")

        elif args.command == "future":
            for record in converter.upcoming_cycles(args.day, count=args.count, debug=args.debug):
                print(f"{record.identifier} - starts on {record.effective_date}")

        elif args.command == "to_cycle":
            record = converter.date_to_cycle(args.value, debug=args.debug)
            print(f"{record.identifier} {record.effective_date}")

        elif args.command == "to_date":
            record = converter.cycle_to_date(args.value, debug=args.debug)
            print(f"{record.effective_date} {record.identifier}")

    except ValueError as e:
        # ParseError, InvalidIdentifier, negative --count
        parser.error(str(e))

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
