"""Unit tests for tomlcore.parser.datetimes: the four RFC 3339 shapes."""
from __future__ import annotations

import datetime

import pytest

from tomlcore.ast.nodes import DateTimeRecord, DateTimeShape
from tomlcore.parser import ErrorCategory, ParseError, Rule, parse
from tomlcore.parser.datetimes import days_in_month, is_leap_year


def _record(text: str) -> DateTimeRecord:
    return parse(Rule.DATETIME, text).value


def _fails_with(text: str, message: str) -> None:
    with pytest.raises(ParseError) as exc_info:
        parse(Rule.DATETIME, text)
    assert exc_info.value.category is ErrorCategory.RANGE
    assert message in exc_info.value.message


# ---------------------------------------------------------------------------
# Calendar helpers
# ---------------------------------------------------------------------------


class TestCalendar:
    @pytest.mark.parametrize(
        "year, leap",
        [(2000, True), (2004, True), (1900, False), (2001, False), (2400, True), (2100, False)],
    )
    def test_is_leap_year(self, year: int, leap: bool) -> None:
        assert is_leap_year(year) is leap

    @pytest.mark.parametrize(
        "year, month, days",
        [(2001, 1, 31), (2001, 2, 28), (2000, 2, 29), (2001, 4, 30), (2001, 6, 30), (2001, 12, 31)],
    )
    def test_days_in_month(self, year: int, month: int, days: int) -> None:
        assert days_in_month(year, month) == days


# ---------------------------------------------------------------------------
# Local time
# ---------------------------------------------------------------------------


class TestLocalTime:
    def test_without_fraction(self) -> None:
        assert _record("12:00:00") == DateTimeRecord(hours=12, minutes=0, seconds=0, fraction=0.0)
        assert _record("23:45:09") == DateTimeRecord(hours=23, minutes=45, seconds=9, fraction=0.0)

    def test_with_fraction(self) -> None:
        assert _record("12:00:00.729").fraction == pytest.approx(0.729)
        assert _record("23:45:09.1").fraction == pytest.approx(0.1)
        assert _record("13:57:46.654321").fraction == pytest.approx(0.654321)

    def test_shape(self) -> None:
        assert _record("07:32:00").shape is DateTimeShape.LOCAL_TIME

    def test_leap_second_accepted(self) -> None:
        assert _record("23:59:60").seconds == 60

    @pytest.mark.parametrize("text", ["1:57:46", "12:0:0", "12:00", "12:00:00."])
    def test_rejects_malformed(self, text: str) -> None:
        with pytest.raises(ParseError):
            parse(Rule.DATETIME, text)

    def test_rejects_out_of_range_hour(self) -> None:
        _fails_with("24:00:00", "two digits between '00' and '23'")

    def test_rejects_out_of_range_minute(self) -> None:
        _fails_with("23:60:00", "two digits between '00' and '59'")

    def test_rejects_out_of_range_second(self) -> None:
        _fails_with("23:59:61", "two digits between '00' and '60'")


# ---------------------------------------------------------------------------
# Local date
# ---------------------------------------------------------------------------


class TestLocalDate:
    def test_value(self) -> None:
        record = _record("1979-05-27")
        assert record == DateTimeRecord(year=1979, month=5, day=27)
        assert record.shape is DateTimeShape.LOCAL_DATE

    @pytest.mark.parametrize("text", ["2000-02-29", "2004-02-29", "2001-04-30", "2001-12-31"])
    def test_accepts_valid_days(self, text: str) -> None:
        assert _record(text).has_date

    @pytest.mark.parametrize(
        "text, message",
        [
            ("2000-00-01", "'01' and '12'"),
            ("2000-13-01", "'01' and '12'"),
            ("2000-01-00", "'01' and '31'"),
            ("2000-01-32", "'01' and '31'"),
            ("2000-04-31", "'01' and '30'"),
            ("2000-06-31", "'01' and '30'"),
            ("2000-09-31", "'01' and '30'"),
            ("2000-11-31", "'01' and '30'"),
            ("2000-02-30", "'01' and '29'"),
            ("1900-02-29", "'01' and '28'"),
            ("2001-02-29", "'01' and '28'"),
        ],
    )
    def test_rejects_out_of_range(self, text: str, message: str) -> None:
        _fails_with(text, message)

    @pytest.mark.parametrize("text", ["979-05-27", "1979-5-27", "1979-05-7", "1979/05/27"])
    def test_rejects_malformed(self, text: str) -> None:
        with pytest.raises(ParseError):
            parse(Rule.DATETIME, text)


# ---------------------------------------------------------------------------
# Local date-time
# ---------------------------------------------------------------------------


class TestLocalDateTime:
    def test_value(self) -> None:
        record = _record("1979-05-27T07:32:00")
        assert record == DateTimeRecord(
            year=1979, month=5, day=27, hours=7, minutes=32, seconds=0, fraction=0.0
        )
        assert record.shape is DateTimeShape.LOCAL_DATE_TIME

    @pytest.mark.parametrize("delim", ["T", "t", " "])
    def test_delimiters(self, delim: str) -> None:
        assert _record(f"1979-05-27{delim}07:32:00").hours == 7

    def test_fraction(self) -> None:
        assert _record("1979-05-27T00:32:00.999999").fraction == pytest.approx(0.999999)

    def test_rejects_bad_day_before_time(self) -> None:
        _fails_with("1979-02-30T07:32:00", "'01' and '28'")


# ---------------------------------------------------------------------------
# Offset date-time
# ---------------------------------------------------------------------------


class TestOffsetDateTime:
    def test_zulu(self) -> None:
        record = _record("1979-05-27T07:32:00Z")
        assert record.offset == 0
        assert record.shape is DateTimeShape.OFFSET_DATE_TIME

    def test_lowercase_zulu(self) -> None:
        assert _record("1979-05-27t07:32:00z").offset == 0

    def test_negative_offset(self) -> None:
        assert _record("1979-05-27T00:32:00-07:00").offset == -420

    def test_positive_offset(self) -> None:
        assert _record("1979-05-27T00:32:00+05:30").offset == 330

    def test_fraction_and_offset(self) -> None:
        record = _record("1979-05-27T00:32:00.999999-07:00")
        assert record.fraction == pytest.approx(0.999999)
        assert record.offset == -420

    def test_space_delimiter(self) -> None:
        assert _record("1979-05-27 07:32:00Z").offset == 0

    def test_rejects_out_of_range_offset_hour(self) -> None:
        _fails_with("1979-05-27T07:32:00+24:00", "'00' and '23'")

    def test_rejects_out_of_range_offset_minute(self) -> None:
        _fails_with("1979-05-27T07:32:00+01:60", "'00' and '59'")


# ---------------------------------------------------------------------------
# Conversion to datetime
# ---------------------------------------------------------------------------


class TestToPython:
    def test_offset_date_time(self) -> None:
        value = parse(Rule.DATETIME, "1979-05-27T00:32:00-07:00").to_python()
        assert value == datetime.datetime(
            1979, 5, 27, 0, 32, tzinfo=datetime.timezone(datetime.timedelta(hours=-7))
        )

    def test_local_date_time_is_naive(self) -> None:
        value = parse(Rule.DATETIME, "1979-05-27T07:32:00.5").to_python()
        assert value == datetime.datetime(1979, 5, 27, 7, 32, 0, 500000)
        assert value.tzinfo is None

    def test_local_date(self) -> None:
        assert parse(Rule.DATETIME, "1979-05-27").to_python() == datetime.date(1979, 5, 27)

    def test_local_time(self) -> None:
        assert parse(Rule.DATETIME, "07:32:00").to_python() == datetime.time(7, 32)

    def test_leap_second_record_cannot_convert(self) -> None:
        with pytest.raises(ValueError, match="Leap seconds"):
            parse(Rule.DATETIME, "23:59:60").value.to_python()

    def test_leap_second_value_keeps_record(self) -> None:
        node = parse(Rule.DATETIME, "1990-12-31T23:59:60Z")
        assert node.to_python() is node.value
        assert node.to_python().seconds == 60
