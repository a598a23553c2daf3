"""Scalar rules: boolean, comment, integer and float.

Integers are tried as hexadecimal, octal, binary and finally decimal.
In every radix a single ``_`` may separate two digits; an underscore
anywhere else is a range error that aborts the parse rather than a
soft failure, so it is never silently reinterpreted.
"""
from __future__ import annotations

from typing import Final

from tomlcore.ast.nodes import BooleanValue, CommentValue, FloatValue, IntegerValue
from tomlcore.grammar.chars import (
    CharPredicate,
    is_binary,
    is_digit,
    is_digit19,
    is_hexdig,
    is_non_eol,
    is_octal,
)
from tomlcore.parser.scanner import Scanner, attempt, choice, optional

_SPECIAL_FLOATS: Final[dict[str, float]] = {
    "inf": float("inf"),
    "nan": float("nan"),
}


# ---------------------------------------------------------------------------
# Boolean
# ---------------------------------------------------------------------------


def parse_boolean(scanner: Scanner) -> BooleanValue:
    """Parse ``true`` or ``false`` (case-sensitive)."""
    start = scanner.pos
    word = choice(
        scanner,
        lambda s: s.expect_literal("true"),
        lambda s: s.expect_literal("false"),
        expected="'true' or 'false'",
    )
    return BooleanValue(word == "true", scanner.span_from(start))


# ---------------------------------------------------------------------------
# Comment
# ---------------------------------------------------------------------------


def parse_comment(scanner: Scanner) -> CommentValue:
    """Parse ``#`` and the rest of the line, stopping before the newline."""
    start = scanner.pos
    scanner.expect_literal("#", "'#'")
    text = scanner.take_while(is_non_eol)
    return CommentValue(text, scanner.span_from(start))


# ---------------------------------------------------------------------------
# Digit runs
# ---------------------------------------------------------------------------


def digit_run(
    scanner: Scanner,
    predicate: CharPredicate,
    expected: str,
    *,
    leading: bool = True,
) -> str:
    """Consume digits separated by single underscores; return them without ``_``.

    When ``leading`` is False the first digit has already been consumed
    by the caller and the run may be empty.
    """
    digits: list[str] = []
    if leading:
        if scanner.current() == "_":
            raise scanner.range_error(
                f"Expected {expected} before '_'; "
                "underscores must be surrounded by digits",
                scanner.pos,
            )
        digits.append(scanner.expect_char(predicate, expected))
    while True:
        ch = scanner.current()
        if predicate(ch):
            digits.append(scanner.advance())
        elif ch == "_":
            underscore = scanner.pos
            scanner.advance()
            if not predicate(scanner.current()):
                raise scanner.range_error(
                    f"Expected {expected} after '_'; "
                    "underscores must be surrounded by digits",
                    underscore,
                )
            digits.append(scanner.advance())
        else:
            return "".join(digits)


def _prefixed_int(scanner: Scanner, prefix: str, predicate: CharPredicate, expected: str) -> str:
    scanner.expect_literal(prefix)
    return digit_run(scanner, predicate, expected)


def decimal_digits(scanner: Scanner) -> str:
    """Parse ``dec-int`` and return it as sign plus digits, without ``_``.

    Either a single ``0`` or a nonzero digit followed by more digits.
    A ``0`` followed by another digit is a range error.
    """
    sign = optional(scanner, lambda s: s.expect_one_of("+-"), "") or ""
    start = scanner.pos
    if scanner.current() == "0":
        scanner.advance()
        if is_digit(scanner.current()) or scanner.current() == "_":
            raise scanner.range_error(
                "Leading zeros are not allowed in decimal numbers", start
            )
        return f"{sign}0"
    first = scanner.expect_char(is_digit19, "a digit")
    rest = digit_run(scanner, is_digit, "a digit", leading=False)
    return f"{sign}{first}{rest}"


# ---------------------------------------------------------------------------
# Integer
# ---------------------------------------------------------------------------


def parse_integer(scanner: Scanner) -> IntegerValue:
    """Parse an integer in radix 16, 8, 2 or 10.

    Python's ``int`` has arbitrary precision so magnitudes past the
    exact-double boundary convert without loss.
    """
    start = scanner.pos

    def hex_int(s: Scanner) -> int:
        return int(_prefixed_int(s, "0x", is_hexdig, "a hexadecimal digit"), 16)

    def oct_int(s: Scanner) -> int:
        return int(_prefixed_int(s, "0o", is_octal, "an octal digit"), 8)

    def bin_int(s: Scanner) -> int:
        return int(_prefixed_int(s, "0b", is_binary, "a binary digit"), 2)

    def dec_int(s: Scanner) -> int:
        return int(decimal_digits(s), 10)

    value = choice(scanner, hex_int, oct_int, bin_int, dec_int, expected="an integer")
    return IntegerValue(value, scanner.span_from(start))


# ---------------------------------------------------------------------------
# Float
# ---------------------------------------------------------------------------


def _exponent(scanner: Scanner) -> str:
    scanner.expect_one_of("eE", "an exponent")
    sign = optional(scanner, lambda s: s.expect_one_of("+-"), "") or ""
    return "e" + sign + digit_run(scanner, is_digit, "a digit")


def _fraction(scanner: Scanner) -> str:
    scanner.expect_literal(".", "'.'")
    return "." + digit_run(scanner, is_digit, "a digit")


def _special_float(scanner: Scanner) -> float:
    sign = optional(scanner, lambda s: s.expect_one_of("+-"), "") or ""
    word = choice(
        scanner,
        lambda s: s.expect_literal("inf"),
        lambda s: s.expect_literal("nan"),
        expected="'inf' or 'nan'",
    )
    value = _SPECIAL_FLOATS[word]
    # NaN keeps no sign.
    return -value if sign == "-" and word == "inf" else value


def _decimal_float(scanner: Scanner) -> float:
    int_part = decimal_digits(scanner)
    if scanner.current() in ("e", "E"):
        text = int_part + _exponent(scanner)
    else:
        frac = choice(scanner, _fraction, expected="'.' or an exponent")
        exp = optional(scanner, _exponent, "") or ""
        text = int_part + frac + exp
    return float(text)


def parse_float(scanner: Scanner) -> FloatValue:
    """Parse a float: an integer part with a fraction and/or exponent, or inf/nan.

    The fraction needs digits on both sides of the point, so ``.7``,
    ``7.`` and ``3.e+20`` are all rejected.
    """
    start = scanner.pos
    value = choice(
        scanner,
        lambda s: attempt(s, _special_float),
        _decimal_float,
        expected="a float",
    )
    return FloatValue(value, scanner.span_from(start))
