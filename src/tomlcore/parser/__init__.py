"""TOML parser module.

Exports the ``Session`` class, the ``Rule`` entry points, the
``parse``/``parse_document``/``loads`` convenience functions, the key
registry, and parse error types.
"""
from __future__ import annotations

from tomlcore.parser.errors import ErrorCategory, ParseError
from tomlcore.parser.keys import KeyRegistry
from tomlcore.parser.parser import Rule, Session, loads, parse, parse_document
from tomlcore.parser.scanner import Scanner

__all__ = [
    "Session",
    "Rule",
    "parse",
    "parse_document",
    "loads",
    "KeyRegistry",
    "Scanner",
    "ParseError",
    "ErrorCategory",
]
