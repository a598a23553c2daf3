"""Unit tests for tomlcore.ast.serializer: tree dumps to dict, JSON, and YAML."""
from __future__ import annotations

import json
import math

import pytest
import yaml

from tomlcore.ast.nodes import (
    ArrayValue,
    BooleanValue,
    CommentValue,
    DateTimeRecord,
    DateTimeValue,
    Document,
    FloatValue,
    IntegerValue,
    KeyValue,
    Span,
    StringValue,
)
from tomlcore.ast.serializer import AstSerializer
from tomlcore.parser import parse_document

SOURCE = """\
# settings
name = "Tom" # who
big = 9007199254740993
ratio = 0.5
flags = [ true, false ]
when.date = 1979-05-27
when.at = 1979-05-27T07:32:00.25-07:00
"""


# ---------------------------------------------------------------------------
# to_dict
# ---------------------------------------------------------------------------


class TestToDict:
    def test_string(self, serializer: AstSerializer) -> None:
        span = Span(start=1, end=4, line=1, col=2)
        assert serializer.to_dict(StringValue("hi", span)) == {
            "kind": "String",
            "value": "hi",
            "span": {"start": 1, "end": 4, "line": 1, "col": 2},
        }

    def test_integer_beyond_safe_range(self, serializer: AstSerializer) -> None:
        assert serializer.to_dict(IntegerValue(2**64))["value"] == 2**64

    @pytest.mark.parametrize(
        "value, expected",
        [(math.nan, "nan"), (math.inf, "inf"), (-math.inf, "-inf"), (1.5, 1.5)],
    )
    def test_float(self, serializer: AstSerializer, value: float, expected: object) -> None:
        assert serializer.to_dict(FloatValue(value))["value"] == expected

    def test_datetime_only_populated_fields(self, serializer: AstSerializer) -> None:
        d = serializer.to_dict(DateTimeValue(DateTimeRecord(year=1979, month=5, day=27)))
        assert d["shape"] == "LOCAL_DATE"
        assert d["value"] == {"year": 1979, "month": 5, "day": 27}

    def test_array(self, serializer: AstSerializer) -> None:
        d = serializer.to_dict(ArrayValue((IntegerValue(1), BooleanValue(True))))
        assert [v["kind"] for v in d["values"]] == ["Integer", "Boolean"]

    def test_keyvalue(self, serializer: AstSerializer) -> None:
        d = serializer.to_dict(KeyValue(("a", "b"), CommentValue("x")))
        assert d["kind"] == "KeyValue"
        assert d["key"] == ["a", "b"]
        assert d["value"]["kind"] == "Comment"

    def test_document(self, serializer: AstSerializer) -> None:
        d = serializer.to_dict(parse_document(SOURCE))
        assert d["kind"] == "Document"
        assert [i["kind"] for i in d["items"]][:3] == ["Comment", "KeyValue", "Comment"]

    def test_unknown_node(self, serializer: AstSerializer) -> None:
        with pytest.raises(TypeError, match="Unknown value type"):
            serializer.to_dict(object())  # type: ignore[arg-type]

    def test_unknown_array_element(self, serializer: AstSerializer) -> None:
        with pytest.raises(TypeError, match="Unknown value type"):
            serializer.to_dict(ArrayValue(("raw",)))  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# from_dict
# ---------------------------------------------------------------------------


class TestFromDict:
    def test_round_trip_document(self, serializer: AstSerializer) -> None:
        doc = parse_document(SOURCE)
        restored = serializer.from_dict(serializer.to_dict(doc))
        assert restored == doc
        assert restored.items[1].span == doc.items[1].span

    def test_special_float(self, serializer: AstSerializer) -> None:
        restored = serializer.from_dict(serializer.to_dict(FloatValue(-math.inf)))
        assert restored.value == -math.inf

    def test_unknown_float_literal(self, serializer: AstSerializer) -> None:
        data = {"kind": "Float", "value": "infinity", "span": serializer.to_dict(Document())["span"]}
        with pytest.raises(ValueError, match="Unknown float literal"):
            serializer.from_dict(data)

    def test_unknown_kind(self, serializer: AstSerializer) -> None:
        data = {"kind": "Table", "span": {"start": 0, "end": 0, "line": 0, "col": 0}}
        with pytest.raises(ValueError, match="Unknown node kind"):
            serializer.from_dict(data)


# ---------------------------------------------------------------------------
# JSON / YAML
# ---------------------------------------------------------------------------


class TestJsonYaml:
    def test_json_is_valid(self, serializer: AstSerializer) -> None:
        data = json.loads(serializer.to_json(parse_document(SOURCE)))
        assert data["items"][3]["value"]["value"] == 9007199254740993

    def test_json_round_trip(self, serializer: AstSerializer) -> None:
        doc = parse_document(SOURCE)
        assert serializer.from_json(serializer.to_json(doc)) == doc

    def test_json_nan_round_trip(self, serializer: AstSerializer) -> None:
        text = serializer.to_json(FloatValue(math.nan))
        assert '"nan"' in text
        assert math.isnan(serializer.from_json(text).value)

    def test_json_keeps_non_ascii(self, serializer: AstSerializer) -> None:
        assert "café" in serializer.to_json(StringValue("café"))

    def test_yaml_is_valid(self, serializer: AstSerializer) -> None:
        data = yaml.safe_load(serializer.to_yaml(parse_document(SOURCE)))
        assert data["kind"] == "Document"

    def test_yaml_round_trip(self, serializer: AstSerializer) -> None:
        doc = parse_document(SOURCE)
        assert serializer.from_yaml(serializer.to_yaml(doc)) == doc
