"""Value tree serializer: converts parsed trees to/from dict, JSON, and YAML.

The output is a tree dump meant for tooling and debugging: every node
becomes a dict tagged with a ``"kind"`` discriminator and carries its
source span.  It is not a TOML writer.

Usage
-----
::

    from tomlcore.ast.serializer import AstSerializer
    from tomlcore.parser import parse_document

    doc = parse_document('name = "Tom"')
    serializer = AstSerializer()
    d = serializer.to_dict(doc)
    json_str = serializer.to_json(doc)
    yaml_str = serializer.to_yaml(doc)
    doc2 = serializer.from_dict(d)
"""
from __future__ import annotations

import json
import math
from typing import Final, Union

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
    Value,
)

Node = Union[Value, KeyValue, Document]

_RECORD_FIELDS: Final[tuple[str, ...]] = (
    "year",
    "month",
    "day",
    "hours",
    "minutes",
    "seconds",
    "fraction",
    "offset",
)

_VALUE_TYPES: Final[tuple[type, ...]] = (
    StringValue,
    IntegerValue,
    FloatValue,
    BooleanValue,
    DateTimeValue,
    ArrayValue,
    CommentValue,
)

_SPECIAL_FLOAT_NAMES: Final[dict[str, float]] = {
    "nan": float("nan"),
    "inf": float("inf"),
    "-inf": float("-inf"),
}


class AstSerializer:
    """Convert value trees to and from plain Python dicts, JSON, and YAML.

    Spans are included in every serialized node so a tree survives a
    round trip with its source locations intact.
    """

    # ------------------------------------------------------------------
    # Serialization (tree → dict)
    # ------------------------------------------------------------------

    def to_dict(self, node: Node) -> dict[str, object]:
        """Serialize a value, key-value pair, or document to a plain dict."""
        if isinstance(node, Document):
            return {
                "kind": "Document",
                "items": [self.to_dict(item) for item in node.items],
                "span": self._span_to_dict(node.span),
            }
        if isinstance(node, KeyValue):
            return {
                "kind": "KeyValue",
                "key": list(node.key),
                "value": self.to_dict(node.value),
                "span": self._span_to_dict(node.span),
            }
        return self._value_to_dict(node)

    def _span_to_dict(self, span: Span) -> dict[str, int]:
        return {"start": span.start, "end": span.end, "line": span.line, "col": span.col}

    def _value_to_dict(self, value: Value) -> dict[str, object]:
        if not isinstance(value, _VALUE_TYPES):
            raise TypeError(f"Unknown value type: {type(value)}")
        span = self._span_to_dict(value.span)
        if isinstance(value, StringValue):
            return {"kind": "String", "value": value.value, "span": span}
        if isinstance(value, IntegerValue):
            return {"kind": "Integer", "value": value.value, "span": span}
        if isinstance(value, FloatValue):
            return {"kind": "Float", "value": self._float_to_plain(value.value), "span": span}
        if isinstance(value, BooleanValue):
            return {"kind": "Boolean", "value": value.value, "span": span}
        if isinstance(value, DateTimeValue):
            return {
                "kind": "DateTime",
                "shape": value.value.shape.name,
                "value": self._record_to_dict(value.value),
                "span": span,
            }
        if isinstance(value, ArrayValue):
            return {
                "kind": "Array",
                "values": [self._value_to_dict(v) for v in value.values],
                "span": span,
            }
        return {"kind": "Comment", "value": value.value, "span": span}

    @staticmethod
    def _float_to_plain(value: float) -> float | str:
        # JSON has no literal for these.
        if math.isnan(value):
            return "nan"
        if math.isinf(value):
            return "inf" if value > 0 else "-inf"
        return value

    @staticmethod
    def _record_to_dict(record: DateTimeRecord) -> dict[str, object]:
        return {
            name: getattr(record, name)
            for name in _RECORD_FIELDS
            if getattr(record, name) is not None
        }

    # ------------------------------------------------------------------
    # Deserialization (dict → tree)
    # ------------------------------------------------------------------

    def from_dict(self, data: dict[str, object]) -> Node:
        """Deserialize a node from a dict produced by ``to_dict``."""
        kind = data["kind"]
        if kind == "Document":
            return Document(
                items=tuple(self.from_dict(i) for i in data.get("items", [])),  # type: ignore[misc]
                span=self._span_from_dict(data["span"]),
            )
        if kind == "KeyValue":
            return KeyValue(
                key=tuple(data["key"]),
                value=self._value_from_dict(data["value"]),
                span=self._span_from_dict(data["span"]),
            )
        return self._value_from_dict(data)

    def _span_from_dict(self, d: dict[str, int]) -> Span:
        return Span(start=d["start"], end=d["end"], line=d["line"], col=d["col"])

    def _value_from_dict(self, d: dict[str, object]) -> Value:
        kind = d["kind"]
        span = self._span_from_dict(d["span"])
        if kind == "String":
            return StringValue(value=str(d["value"]), span=span)
        if kind == "Integer":
            return IntegerValue(value=int(d["value"]), span=span)
        if kind == "Float":
            raw = d["value"]
            if isinstance(raw, str):
                if raw not in _SPECIAL_FLOAT_NAMES:
                    raise ValueError(f"Unknown float literal: {raw!r}")
                return FloatValue(value=_SPECIAL_FLOAT_NAMES[raw], span=span)
            return FloatValue(value=float(raw), span=span)
        if kind == "Boolean":
            return BooleanValue(value=bool(d["value"]), span=span)
        if kind == "DateTime":
            fields = d["value"]
            return DateTimeValue(
                value=DateTimeRecord(**{k: fields[k] for k in _RECORD_FIELDS if k in fields}),
                span=span,
            )
        if kind == "Array":
            return ArrayValue(
                values=tuple(self._value_from_dict(v) for v in d.get("values", [])),
                span=span,
            )
        if kind == "Comment":
            return CommentValue(value=str(d["value"]), span=span)
        raise ValueError(f"Unknown node kind: {kind!r}")

    # ------------------------------------------------------------------
    # JSON helpers
    # ------------------------------------------------------------------

    def to_json(self, node: Node, indent: int = 2) -> str:
        """Serialize ``node`` to a JSON string."""
        return json.dumps(self.to_dict(node), indent=indent, ensure_ascii=False)

    def from_json(self, json_str: str) -> Node:
        """Deserialize a node from a JSON string."""
        return self.from_dict(json.loads(json_str))

    # ------------------------------------------------------------------
    # YAML helpers
    # ------------------------------------------------------------------

    def to_yaml(self, node: Node) -> str:
        """Serialize ``node`` to a YAML string."""
        return yaml.dump(self.to_dict(node), default_flow_style=False, allow_unicode=True)

    def from_yaml(self, yaml_str: str) -> Node:
        """Deserialize a node from a YAML string."""
        return self.from_dict(yaml.safe_load(yaml_str))
