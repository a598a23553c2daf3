"""Arrays, the value dispatcher, and key-value pairs.

``parse_value`` and ``parse_array`` are mutually recursive: an array
holds values and a value may be an array.  Both are module-level
functions looked up when called, so the recursion only unfolds as deep
as the input nests.  The dispatch table is built once both exist.
"""
from __future__ import annotations

from typing import Callable, Final

from tomlcore.ast.nodes import ArrayValue, CommentValue, KeyValue, Value
from tomlcore.grammar.chars import is_wschar
from tomlcore.grammar.grammar import VALUE_ALTERNATIVE_ORDER
from tomlcore.parser.common import at_newline, newline, ws
from tomlcore.parser.datetimes import parse_datetime
from tomlcore.parser.errors import ErrorCategory
from tomlcore.parser.keys import KeyRegistry, parse_key
from tomlcore.parser.scalars import (
    parse_boolean,
    parse_comment,
    parse_float,
    parse_integer,
)
from tomlcore.parser.scanner import Scanner, attempt, choice
from tomlcore.parser.strings import parse_string


def ws_comment_newline(scanner: Scanner) -> list[CommentValue]:
    """Consume blanks, newlines, and comments that end in a newline.

    Returns the comments passed over.
    """
    comments: list[CommentValue] = []
    while True:
        ch = scanner.current()
        if is_wschar(ch):
            scanner.advance()
        elif ch == "#":
            comments.append(parse_comment(scanner))
            newline(scanner)
        elif at_newline(scanner):
            newline(scanner)
        else:
            return comments


def parse_array(scanner: Scanner) -> ArrayValue:
    """Parse ``[ value, value, ... ]``.

    Blanks, newlines and comments may appear around every value and
    separator; a trailing comma is allowed.
    """
    start = scanner.pos
    scanner.expect_literal("[", "'['")
    values: list[Value] = []
    while True:
        ws_comment_newline(scanner)
        if scanner.current() == "]" or scanner.at_end():
            break
        values.append(parse_value(scanner))
        ws_comment_newline(scanner)
        if scanner.current() != ",":
            break
        scanner.advance()
    if scanner.at_end():
        line, col = scanner.location(start)
        raise scanner.error(
            ("',' or ']'",),
            message=f"Unterminated array starting at {line}:{col}",
            category=ErrorCategory.GRAMMATICAL,
        )
    scanner.expect_literal("]", "',' or ']'")
    return ArrayValue(tuple(values), scanner.span_from(start))


_VALUE_RULES: Final[dict[str, Callable[[Scanner], Value]]] = {
    "string": parse_string,
    "boolean": parse_boolean,
    "date-time": parse_datetime,
    # Float and integer share the decimal prefix; a plain digit run must
    # fall back to integer with nothing consumed.
    "float": lambda s: attempt(s, parse_float),
    "integer": parse_integer,
    "array": parse_array,
}


def parse_value(scanner: Scanner) -> Value:
    """Parse any value, trying each kind in a fixed order."""
    return choice(
        scanner,
        *(_VALUE_RULES[name] for name in VALUE_ALTERNATIVE_ORDER),
        expected="a value",
    )


def _keyval_sep(scanner: Scanner) -> None:
    ws(scanner)
    if scanner.current() != "=":
        raise scanner.error("'='", category=ErrorCategory.GRAMMATICAL)
    scanner.advance()
    ws(scanner)


def parse_keyval(scanner: Scanner, registry: KeyRegistry) -> KeyValue:
    """Parse ``key = value``.

    The key is registered before the value is read.
    """
    start = scanner.pos
    key = parse_key(scanner, registry)
    _keyval_sep(scanner)
    value = parse_value(scanner)
    return KeyValue(key, value, scanner.span_from(start))
