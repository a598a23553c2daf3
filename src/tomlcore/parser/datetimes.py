"""RFC 3339 date-time rules.

TOML date-times are returned as ``DateTimeRecord`` objects rather than
``datetime`` instances because ``datetime`` cannot hold a time without a
date or a leap second.  The record populates only the fields of the
shape that was parsed:

* offset date-times have every field
* local date-times have every field but ``offset``
* local dates have ``year``, ``month`` and ``day``
* local times have ``hours``, ``minutes``, ``seconds`` and ``fraction``

The four shapes are tried in that order, each wrapped in ``attempt`` so
a shape that matches a prefix and then fails leaves no input consumed.
Field ranges are checked as soon as each field is read; a field out of
range is a semantic error and is not retried as another shape.
"""
from __future__ import annotations

from typing import Final

from tomlcore.ast.nodes import DateTimeRecord, DateTimeValue
from tomlcore.grammar.chars import is_digit
from tomlcore.parser.scanner import Scanner, attempt, choice, optional

_THIRTY_DAY_MONTHS: Final[frozenset[int]] = frozenset({4, 6, 9, 11})
_TIME_DELIMITERS: Final[str] = "Tt "


def is_leap_year(year: int) -> bool:
    """Gregorian leap-year rule."""
    return year % 4 == 0 and year % 100 != 0 or year % 400 == 0


def days_in_month(year: int, month: int) -> int:
    if month == 2:
        return 29 if is_leap_year(year) else 28
    if month in _THIRTY_DAY_MONTHS:
        return 30
    return 31


# ---------------------------------------------------------------------------
# Fields
# ---------------------------------------------------------------------------


def _check_range(scanner: Scanner, value: int, low: int, high: int, start: int) -> int:
    if not low <= value <= high:
        raise scanner.range_error(
            f"Expected two digits between '{low:02d}' and '{high:02d}'", start
        )
    return value


def _two_digits(scanner: Scanner, low: int, high: int) -> int:
    """Read exactly two digits and check them against ``[low, high]``."""
    start = scanner.pos
    value = int(scanner.expect_count(is_digit, 2, "a digit"))
    return _check_range(scanner, value, low, high, start)


def _full_date(scanner: Scanner) -> DateTimeRecord:
    year = int(scanner.expect_count(is_digit, 4, "a digit"))
    scanner.expect_literal("-", "'-'")
    month = _two_digits(scanner, 1, 12)
    scanner.expect_literal("-", "'-'")
    # The day's upper bound depends on the month and year read above.
    day = _two_digits(scanner, 1, days_in_month(year, month))
    return DateTimeRecord(year=year, month=month, day=day)


def _partial_time(scanner: Scanner) -> DateTimeRecord:
    # Two bare digits may still be an integer or float; the hour is only
    # range-checked once the colon shows this is a time.
    start = scanner.pos
    hours = int(scanner.expect_count(is_digit, 2, "a digit"))
    scanner.expect_literal(":", "':'")
    _check_range(scanner, hours, 0, 23, start)
    minutes = _two_digits(scanner, 0, 59)
    scanner.expect_literal(":", "':'")
    # 60 allows for a leap second; which minutes may hold one is not checked.
    seconds = _two_digits(scanner, 0, 60)
    fraction = optional(scanner, _secfrac, "") or ""
    return DateTimeRecord(
        hours=hours,
        minutes=minutes,
        seconds=seconds,
        fraction=float(f"0{fraction}") if fraction else 0.0,
    )


def _secfrac(scanner: Scanner) -> str:
    scanner.expect_literal(".", "'.'")
    digits = scanner.expect_char(is_digit, "a digit") + scanner.take_while(is_digit)
    return "." + digits


def _numeric_offset(scanner: Scanner) -> int:
    sign = scanner.expect_one_of("+-", "'+' or '-'")
    hours = _two_digits(scanner, 0, 23)
    scanner.expect_literal(":", "':'")
    minutes = _two_digits(scanner, 0, 59)
    return (hours * 60 + minutes) * (-1 if sign == "-" else 1)


def _time_offset(scanner: Scanner) -> int:
    def zulu(s: Scanner) -> int:
        s.expect_one_of("Zz", "'Z'")
        return 0

    return choice(scanner, zulu, _numeric_offset, expected="a UTC offset")


def _merge(date: DateTimeRecord, time: DateTimeRecord, offset: int | None = None) -> DateTimeRecord:
    return DateTimeRecord(
        year=date.year,
        month=date.month,
        day=date.day,
        hours=time.hours,
        minutes=time.minutes,
        seconds=time.seconds,
        fraction=time.fraction,
        offset=offset,
    )


# ---------------------------------------------------------------------------
# Shapes
# ---------------------------------------------------------------------------


def _offset_date_time(scanner: Scanner) -> DateTimeRecord:
    date = _full_date(scanner)
    scanner.expect_one_of(_TIME_DELIMITERS, "'T' or a space")
    time = _partial_time(scanner)
    offset = _time_offset(scanner)
    return _merge(date, time, offset)


def _local_date_time(scanner: Scanner) -> DateTimeRecord:
    date = _full_date(scanner)
    scanner.expect_one_of(_TIME_DELIMITERS, "'T' or a space")
    time = _partial_time(scanner)
    return _merge(date, time)


def parse_datetime(scanner: Scanner) -> DateTimeValue:
    """Parse an offset date-time, local date-time, local date or local time."""
    start = scanner.pos
    record = choice(
        scanner,
        lambda s: attempt(s, _offset_date_time),
        lambda s: attempt(s, _local_date_time),
        lambda s: attempt(s, _full_date),
        lambda s: attempt(s, _partial_time),
        expected="a date or time",
    )
    return DateTimeValue(record, scanner.span_from(start))
