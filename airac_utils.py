#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Conversion between calendar dates and AIRAC cycle identifiers (YYNN format).

Cycle boundaries lie on a fixed grid of `cycle_length_days` days anchored to
the AIRAC epoch. Cycle numbers reset each calendar year.
"""

import re
from datetime import date, datetime, timedelta, timezone
from typing import NamedTuple, Optional, Tuple, Union

# ---------------------------------------------------------------------
#  Constants
# ---------------------------------------------------------------------
AIRAC_EPOCH = date(1901, 1, 10)
AIRAC_CYCLE_DAYS = 28
# Two-digit years whose 19xx reading is <= this value belong to the 2000s.
CENTURY_CUTOFF_YEAR = 1963
DATE_FORMAT = "%Y-%m-%d"

_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
_IDENTIFIER_RE = re.compile(r"[0-9]{4}")

DateLike = Union[str, date, datetime]
IdentifierLike = Union[str, int, Tuple[int, int]]


# ---------------------------------------------------------------------
#  Errors
# ---------------------------------------------------------------------
class AiracError(ValueError):
    """Base class for conversion failures. Keeps the offending input."""

    def __init__(self, message: str, value=None):
        super().__init__(message)
        self.value = value


class ParseError(AiracError):
    """Date text is malformed or names a date that does not exist."""


class InvalidIdentifier(AiracError):
    """Identifier is not two 2-digit fragments (YYNN)."""


# ---------------------------------------------------------------------
#  Records
# ---------------------------------------------------------------------
class CycleRecord(NamedTuple):
    """One cycle: its effective date, year, ordinal and YYNN identifier."""

    effective_date: date
    year: int
    ordinal: int
    identifier: str

    @property
    def number(self) -> int:
        """Identifier as an integer (loses the leading zero, e.g. 301)."""
        return int(self.identifier)

    def __str__(self) -> str:
        return f"{self.identifier} ({self.effective_date.strftime(DATE_FORMAT)})"


def parse_date(value: DateLike) -> date:
    """Return `value` as a date. Text must be YYYY-MM-DD.

    Raises:
        ParseError: if the text is malformed or the date does not exist.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not _DATE_RE.fullmatch(value):
        raise ParseError(f"Invalid date format: {value!r}. Expected YYYY-MM-DD", value)
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except ValueError as e:
        raise ParseError(f"Invalid date: {value!r} ({e})", value) from e


def split_identifier(identifier: IdentifierLike) -> Tuple[int, int]:
    """Split an identifier into (year_fragment, ordinal).

    Accepts "YYNN" text, an integer 0..9999 or an already split pair.

    Raises:
        InvalidIdentifier: if the input is not exactly two 2-digit fragments.
    """
    if isinstance(identifier, bool):
        raise InvalidIdentifier(f"Invalid AIRAC identifier: {identifier!r}", identifier)

    if isinstance(identifier, int):
        if not 0 <= identifier <= 9999:
            raise InvalidIdentifier(
                f"Invalid AIRAC identifier: {identifier}. Expected 0..9999", identifier
            )
        return divmod(identifier, 100)

    if isinstance(identifier, str):
        if not _IDENTIFIER_RE.fullmatch(identifier):
            raise InvalidIdentifier(
                f"Invalid AIRAC identifier: {identifier!r}. Expected 4 digits (e.g. 2001)",
                identifier,
            )
        return int(identifier[:2]), int(identifier[2:])

    if isinstance(identifier, tuple) and len(identifier) == 2:
        year_fragment, ordinal = identifier
        if all(isinstance(x, int) and not isinstance(x, bool) and 0 <= x <= 99 for x in identifier):
            return year_fragment, ordinal

    raise InvalidIdentifier(f"Invalid AIRAC identifier: {identifier!r}", identifier)


def resolve_year(year_fragment: int) -> int:
    """Map a two-digit year onto its century (63 -> 2063, 64 -> 1964)."""
    year = year_fragment + 1900
    if year <= CENTURY_CUTOFF_YEAR:
        year += 100
    return year


# ---------------------------------------------------------------------
#  Converter
# ---------------------------------------------------------------------
class CycleConverter:
    """
    Converts dates to AIRAC cycles and back.

    Holds no mutable state: one instance can be shared freely.

    Example:
        >>> converter = CycleConverter()
        >>> converter.date_to_cycle("2020-01-02").identifier
        '2001'
        >>> converter.cycle_to_date("1913").effective_date
        datetime.date(2019, 12, 5)
    """

    def __init__(self, cycle_length_days: int = AIRAC_CYCLE_DAYS, epoch: date = AIRAC_EPOCH):
        if isinstance(cycle_length_days, bool) or not isinstance(cycle_length_days, int):
            raise ValueError(f"Cycle length must be an integer number of days, got {cycle_length_days!r}")
        if cycle_length_days <= 0:
            raise ValueError(f"Cycle length must be positive, got {cycle_length_days}")
        if -(-366 // cycle_length_days) > 99:
            # ordinals must fit in two digits
            raise ValueError(f"Cycle length must be at least 4 days, got {cycle_length_days}")
        self._cycle_length_days = cycle_length_days
        self._epoch = parse_date(epoch)

    @classmethod
    def from_weeks(cls, weeks: int, epoch: date = AIRAC_EPOCH) -> "CycleConverter":
        if isinstance(weeks, bool) or not isinstance(weeks, int):
            raise ValueError(f"Cycle length must be a whole number of weeks, got {weeks!r}")
        return cls(weeks * 7, epoch)

    @property
    def cycle_length_days(self) -> int:
        return self._cycle_length_days

    @property
    def epoch(self) -> date:
        return self._epoch

    def __repr__(self) -> str:
        return f"CycleConverter(cycle_length_days={self._cycle_length_days}, epoch={self._epoch!r})"

    def _cycle_index(self, day: date) -> int:
        return (day - self._epoch).days // self._cycle_length_days

    def _boundary(self, index: int) -> date:
        return self._epoch + timedelta(days=index * self._cycle_length_days)

    def effective_date_to_record(self, effective_date: date) -> CycleRecord:
        """Build the record of the cycle starting on `effective_date`.

        The ordinal counts cycle lengths from January 1 of the effective
        date's year, not grid cycles.
        """
        year = effective_date.year
        day_of_year = effective_date.timetuple().tm_yday
        ordinal = (day_of_year - 1) // self._cycle_length_days + 1
        return CycleRecord(effective_date, year, ordinal, f"{year % 100:02d}{ordinal:02d}")

    def date_to_cycle(self, value: DateLike, debug: bool = False) -> CycleRecord:
        """Return the cycle containing a date.

        Args:
            value (str | date): Date as YYYY-MM-DD text or a date value
            debug (bool): Print intermediate values

        Returns:
            CycleRecord: Cycle whose [effective_date, next boundary) range holds the date

        Raises:
            ParseError: if the date is malformed or precedes the epoch
        """
        day = parse_date(value)
        if day < self._epoch:
            raise ParseError(
                f"Date {day.strftime(DATE_FORMAT)} precedes the cycle epoch "
                f"{self._epoch.strftime(DATE_FORMAT)}",
                value,
            )

        index = self._cycle_index(day)
        record = self.effective_date_to_record(self._boundary(index))

        if debug:
            print(f"[DEBUG] Date: {day.strftime(DATE_FORMAT)}")
            print(f"[DEBUG] Cycles since epoch {self._epoch}: {index}")
            print(f"[DEBUG] Effective date: {record.effective_date}")
            print(f"[DEBUG] AIRAC: {record.identifier} (year {record.year}, ordinal {record.ordinal})")

        return record

    def cycle_to_date(self, identifier: IdentifierLike, debug: bool = False) -> CycleRecord:
        """Return the cycle named by an identifier.

        Args:
            identifier (str | int | tuple): "YYNN", 0..9999 or (year_fragment, ordinal)
            debug (bool): Print intermediate values

        Returns:
            CycleRecord: The cycle, re-derived from its effective date

        Raises:
            InvalidIdentifier: if the identifier is malformed or precedes the epoch
        """
        year_fragment, ordinal = split_identifier(identifier)
        year = resolve_year(year_fragment)

        # Last boundary of the previous year, then count forward
        previous_index = self._cycle_index(date(year - 1, 12, 31))
        index = previous_index + ordinal
        if index < 0:
            raise InvalidIdentifier(
                f"AIRAC identifier {identifier!r} names a cycle before the epoch "
                f"{self._epoch.strftime(DATE_FORMAT)}",
                identifier,
            )
        record = self.effective_date_to_record(self._boundary(index))

        if debug:
            print(f"[DEBUG] Identifier: {identifier!r} -> year {year}, ordinal {ordinal}")
            print(f"[DEBUG] Last boundary of {year - 1}: {self._boundary(previous_index)}")
            print(f"[DEBUG] Effective date: {record.effective_date}")

        return record

    # -----------------------------------------------------------------
    #  Calendar helpers
    # -----------------------------------------------------------------
    def current_cycle(self, today: Optional[DateLike] = None, debug: bool = False) -> CycleRecord:
        """Return the cycle in effect today (UTC) or on `today`."""
        if today is None:
            today = datetime.now(timezone.utc).date()
        return self.date_to_cycle(today, debug=debug)

    def next_cycle(self, day: Optional[DateLike] = None, debug: bool = False) -> CycleRecord:
        """Return the cycle following the one in effect on `day`."""
        current = self.current_cycle(day, debug=debug)
        return self.effective_date_to_record(
            current.effective_date + timedelta(days=self._cycle_length_days)
        )

    def upcoming_cycles(self, start: Optional[DateLike] = None, count: int = 13,
                        debug: bool = False) -> list[CycleRecord]:
        """Return `count` consecutive cycles, starting with the one in effect on `start`."""
        if count < 0:
            raise ValueError(f"Count must not be negative, got {count}")

        current = self.current_cycle(start)
        result = [
            self.effective_date_to_record(
                current.effective_date + timedelta(days=i * self._cycle_length_days)
            )
            for i in range(count)
        ]
        if debug:
            print("[DEBUG] Upcoming AIRAC cycles:")
            for record in result:
                print(f"  - {record.identifier} → {record.effective_date}")
        return result

    def is_cycle_start(self, day: Optional[DateLike] = None, debug: bool = False) -> bool:
        """Return True if `day` (default: today, UTC) is a cycle boundary."""
        if day is None:
            day = datetime.now(timezone.utc).date()
        day = parse_date(day)
        delta_days = (day - self._epoch).days
        match = delta_days >= 0 and delta_days % self._cycle_length_days == 0
        if debug:
            print(f"[DEBUG] Day: {day}")
            print(f"[DEBUG] Days since epoch: {delta_days}")
            print(f"[DEBUG] Is AIRAC boundary: {match}")
        return match


# Convenience functions with the classic epoch
def date_to_cycle(value: DateLike, weeks: int = AIRAC_CYCLE_DAYS // 7) -> CycleRecord:
    """Return the cycle containing `value`, for cycles of `weeks` weeks."""
    return CycleConverter.from_weeks(weeks).date_to_cycle(value)


def cycle_to_date(identifier: IdentifierLike, weeks: int = AIRAC_CYCLE_DAYS // 7) -> CycleRecord:
    """Return the cycle named by `identifier`, for cycles of `weeks` weeks."""
    return CycleConverter.from_weeks(weeks).cycle_to_date(identifier)
