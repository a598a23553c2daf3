"""TOML value tree module.

Exports every node type and the serializer for dumping trees to and
from JSON/YAML.
"""
from __future__ import annotations

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
    Key,
    KeyValue,
    Span,
    StringValue,
    Value,
    ValueKind,
    format_key,
)
from tomlcore.ast.serializer import AstSerializer

__all__ = [
    # Location
    "Span",
    # Enums
    "ValueKind",
    "DateTimeShape",
    # Value variants
    "Value",
    "StringValue",
    "IntegerValue",
    "FloatValue",
    "BooleanValue",
    "DateTimeValue",
    "DateTimeRecord",
    "ArrayValue",
    "CommentValue",
    # Keys and documents
    "Key",
    "KeyValue",
    "Document",
    "format_key",
    "MAX_SAFE_INTEGER",
    # Serializer
    "AstSerializer",
]
