"""String rules: basic, literal, and their multiline variants.

Basic strings decode backslash escapes; literal strings take every
character as written.  The multiline forms drop a newline that
immediately follows the opening delimiter, and allow one or two
delimiter characters inside the body as long as they are not the start
of the closing triple.  A run of four or five delimiter characters
therefore ends the string with one or two of them kept as content.
"""
from __future__ import annotations

from typing import Callable, Final

from tomlcore.ast.nodes import StringValue
from tomlcore.grammar.chars import (
    ESCAPE_REPLACEMENTS,
    is_basic_unescaped,
    is_hexdig,
    is_literal_char,
    is_wschar,
)
from tomlcore.grammar.grammar import STRING_ALTERNATIVE_ORDER
from tomlcore.parser.common import at_newline, newline, ws
from tomlcore.parser.errors import ErrorCategory, ParseError
from tomlcore.parser.scanner import Scanner, choice

_UNICODE_ESCAPE_LENGTHS: Final[dict[str, int]] = {"u": 4, "U": 8}


def _unterminated(scanner: Scanner, delimiter: str, start: int) -> ParseError:
    line, col = scanner.location(start)
    return scanner.error(
        repr(delimiter),
        message=f"Unterminated string starting at {line}:{col}; expected {delimiter!r}",
        category=ErrorCategory.GRAMMATICAL,
    )


def _quote_run(scanner: Scanner, quote: str) -> int:
    """Count consecutive ``quote`` characters at the cursor."""
    count = 0
    while scanner.peek(count) == quote:
        count += 1
    return count


# ---------------------------------------------------------------------------
# Escapes
# ---------------------------------------------------------------------------


def escaped(scanner: Scanner) -> str:
    """Parse a backslash escape and return the character it stands for."""
    scanner.expect_literal("\\", "'\\'")
    start = scanner.pos
    ch = scanner.current()
    if ch in ESCAPE_REPLACEMENTS:
        scanner.advance()
        return ESCAPE_REPLACEMENTS[ch]
    if ch in _UNICODE_ESCAPE_LENGTHS:
        scanner.advance()
        digits = scanner.expect_count(
            is_hexdig, _UNICODE_ESCAPE_LENGTHS[ch], "a hexadecimal digit"
        )
        code_point = int(digits, 16)
        if code_point > 0x10FFFF or 0xD800 <= code_point <= 0xDFFF:
            raise scanner.range_error(
                f"Escape \\{ch}{digits} is not a Unicode scalar value", start
            )
        return chr(code_point)
    raise scanner.error(
        "an escape sequence",
        message=f"Invalid escape sequence \\{ch}" if ch else "Expected an escape sequence",
    )


def _escaped_newline(scanner: Scanner) -> str:
    """Parse a line-ending backslash and every blank that follows it.

    Contributes nothing to the string value.
    """
    scanner.expect_literal("\\", "'\\'")
    ws(scanner)
    newline(scanner)
    while is_wschar(scanner.current()) or at_newline(scanner):
        scanner.advance()
    return ""


# ---------------------------------------------------------------------------
# Single-line strings
# ---------------------------------------------------------------------------


def basic_string(scanner: Scanner) -> str:
    """Parse ``"..."`` and return the decoded text."""
    start = scanner.pos
    scanner.expect_literal('"', "'\"'")
    buf: list[str] = []
    while True:
        ch = scanner.current()
        if ch == '"':
            scanner.advance()
            return "".join(buf)
        if ch == "\\":
            buf.append(escaped(scanner))
        elif is_basic_unescaped(ch):
            buf.append(scanner.advance())
        elif not ch or at_newline(scanner):
            raise _unterminated(scanner, '"', start)
        else:
            raise scanner.error(("a string character", "'\"'"))


def literal_string(scanner: Scanner) -> str:
    """Parse ``'...'``; backslashes are kept as written."""
    start = scanner.pos
    scanner.expect_literal("'", '"\'"')
    text = scanner.take_while(is_literal_char)
    if scanner.current() == "'":
        scanner.advance()
        return text
    if scanner.at_end() or at_newline(scanner):
        raise _unterminated(scanner, "'", start)
    raise scanner.error(("a literal character", '"\'"'))


# ---------------------------------------------------------------------------
# Multiline strings
# ---------------------------------------------------------------------------


def _multiline(
    scanner: Scanner,
    quote: str,
    content: Callable[[Scanner, list[str]], None],
) -> str:
    delimiter = quote * 3
    start = scanner.pos
    scanner.expect_literal(delimiter, repr(delimiter))
    if at_newline(scanner):
        newline(scanner)
    buf: list[str] = []
    while True:
        run = _quote_run(scanner, quote)
        if run >= 3:
            # Up to two quotes may sit right before the closing delimiter.
            kept = min(run - 3, 2)
            buf.append(quote * kept)
            scanner.reset(scanner.pos + kept + 3)
            return "".join(buf)
        if run:
            buf.append(quote * run)
            scanner.reset(scanner.pos + run)
        elif at_newline(scanner):
            buf.append(newline(scanner))
        elif scanner.at_end():
            raise _unterminated(scanner, delimiter, start)
        else:
            content(scanner, buf)


def _mlb_content(scanner: Scanner, buf: list[str]) -> None:
    ch = scanner.current()
    if ch == "\\":
        following = scanner.peek()
        if is_wschar(following) or following in ("\n", "\r"):
            buf.append(_escaped_newline(scanner))
        else:
            buf.append(escaped(scanner))
    elif is_basic_unescaped(ch):
        buf.append(scanner.advance())
    else:
        raise scanner.error(("a string character", "'\"\"\"'"))


def _mll_content(scanner: Scanner, buf: list[str]) -> None:
    if not is_literal_char(scanner.current()):
        raise scanner.error(("a literal character", '"\'\'\'"'))
    buf.append(scanner.advance())


def ml_basic_string(scanner: Scanner) -> str:
    """Parse a triple-double-quoted string, decoding escapes and line continuations."""
    return _multiline(scanner, '"', _mlb_content)


def ml_literal_string(scanner: Scanner) -> str:
    """Parse a triple-single-quoted string; only raw newlines split lines."""
    return _multiline(scanner, "'", _mll_content)


# ---------------------------------------------------------------------------
# String
# ---------------------------------------------------------------------------

_STRING_RULES: Final[dict[str, Callable[[Scanner], str]]] = {
    "ml-basic-string": ml_basic_string,
    "basic-string": basic_string,
    "ml-literal-string": ml_literal_string,
    "literal-string": literal_string,
}


def parse_string(scanner: Scanner) -> StringValue:
    """Parse any of the four string forms."""
    start = scanner.pos
    text = choice(
        scanner,
        *(_STRING_RULES[name] for name in STRING_ALTERNATIVE_ORDER),
        expected="a string",
    )
    return StringValue(text, scanner.span_from(start))
