"""Unit tests for tomlcore.ast.nodes."""
from __future__ import annotations

import dataclasses
import datetime

import pytest

from tomlcore.ast.nodes import (
    MAX_SAFE_INTEGER,
    ArrayValue,
    BooleanValue,
    CommentValue,
    DateTimeRecord,
    DateTimeShape,
    DateTimeValue,
    Document,
    FloatValue,
    IntegerValue,
    KeyValue,
    Span,
    StringValue,
    ValueKind,
    format_key,
)


# ---------------------------------------------------------------------------
# Span
# ---------------------------------------------------------------------------


class TestSpan:
    def test_unknown(self) -> None:
        assert Span.unknown() == Span(start=0, end=0, line=0, col=0)

    def test_repr(self) -> None:
        assert repr(Span(start=5, end=9, line=2, col=3)) == "Span(2:3)"

    def test_frozen(self) -> None:
        span = Span.unknown()
        with pytest.raises(dataclasses.FrozenInstanceError):
            span.line = 4  # type: ignore[misc]


# ---------------------------------------------------------------------------
# Values
# ---------------------------------------------------------------------------


class TestValues:
    def test_equality_ignores_span(self) -> None:
        a = IntegerValue(1, Span(start=0, end=1, line=1, col=1))
        b = IntegerValue(1, Span(start=9, end=10, line=3, col=4))
        assert a == b

    def test_different_kinds_are_unequal(self) -> None:
        assert StringValue("1") != IntegerValue(1)

    @pytest.mark.parametrize(
        "node, kind",
        [
            (StringValue("s"), ValueKind.STRING),
            (IntegerValue(1), ValueKind.INTEGER),
            (FloatValue(1.0), ValueKind.FLOAT),
            (BooleanValue(True), ValueKind.BOOLEAN),
            (DateTimeValue(DateTimeRecord(year=2000, month=1, day=1)), ValueKind.DATETIME),
            (ArrayValue(()), ValueKind.ARRAY),
            (CommentValue("c"), ValueKind.COMMENT),
        ],
    )
    def test_kind_tag(self, node, kind: ValueKind) -> None:
        assert node.kind is kind

    def test_hashable(self) -> None:
        assert len({StringValue("a"), StringValue("a"), StringValue("b")}) == 2

    def test_is_safe_boundary(self) -> None:
        assert IntegerValue(MAX_SAFE_INTEGER).is_safe
        assert IntegerValue(-MAX_SAFE_INTEGER).is_safe
        assert not IntegerValue(MAX_SAFE_INTEGER + 1).is_safe
        assert not IntegerValue(-MAX_SAFE_INTEGER - 1).is_safe

    def test_array_to_python_recurses(self) -> None:
        array = ArrayValue((IntegerValue(1), ArrayValue((StringValue("x"),))))
        assert array.to_python() == [1, ["x"]]


# ---------------------------------------------------------------------------
# DateTimeRecord
# ---------------------------------------------------------------------------


class TestDateTimeRecord:
    def test_shapes(self) -> None:
        assert DateTimeRecord(year=1, month=1, day=1).shape is DateTimeShape.LOCAL_DATE
        assert DateTimeRecord(hours=1, minutes=0, seconds=0).shape is DateTimeShape.LOCAL_TIME
        full = dict(year=1, month=1, day=1, hours=1, minutes=0, seconds=0)
        assert DateTimeRecord(**full).shape is DateTimeShape.LOCAL_DATE_TIME
        assert DateTimeRecord(**full, offset=0).shape is DateTimeShape.OFFSET_DATE_TIME

    def test_offset_requires_time(self) -> None:
        with pytest.raises(ValueError, match="requires time fields"):
            DateTimeRecord(year=2000, month=1, day=1, offset=0)

    def test_fraction_rounds_to_microseconds(self) -> None:
        record = DateTimeRecord(hours=1, minutes=2, seconds=3, fraction=0.1234567)
        assert record.to_python() == datetime.time(1, 2, 3, 123457)

    def test_utc_offset(self) -> None:
        record = DateTimeRecord(
            year=2000, month=1, day=1, hours=0, minutes=0, seconds=0, fraction=0.0, offset=90
        )
        value = record.to_python()
        assert value.utcoffset() == datetime.timedelta(minutes=90)


# ---------------------------------------------------------------------------
# Keys and documents
# ---------------------------------------------------------------------------


class TestFormatKey:
    @pytest.mark.parametrize(
        "key, expected",
        [
            (("a",), "a"),
            (("fruit", "apple"), "fruit.apple"),
            (("site", "google.com"), 'site."google.com"'),
            (("",), '""'),
            (("a b", "c"), '"a b".c'),
            (("bare-key_1",), "bare-key_1"),
        ],
    )
    def test_format(self, key: tuple[str, ...], expected: str) -> None:
        assert format_key(key) == expected

    def test_keyvalue_dotted(self) -> None:
        assert KeyValue(("a", "b.c"), BooleanValue(True)).dotted == 'a."b.c"'


class TestDocument:
    def test_partitions_items(self) -> None:
        kv = KeyValue(("a",), IntegerValue(1))
        comment = CommentValue(" note")
        doc = Document((comment, kv))
        assert doc.keyvals == (kv,)
        assert doc.comments == (comment,)

    def test_to_dict_nests_dotted_keys(self) -> None:
        doc = Document(
            (
                KeyValue(("a", "b"), IntegerValue(1)),
                KeyValue(("a", "c", "d"), StringValue("x")),
                KeyValue(("e",), BooleanValue(False)),
            )
        )
        assert doc.to_dict() == {"a": {"b": 1, "c": {"d": "x"}}, "e": False}

    def test_empty(self) -> None:
        assert Document().to_dict() == {}
