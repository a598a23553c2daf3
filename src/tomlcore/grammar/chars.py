"""Primitive character classes shared by every TOML grammar rule.

Each class is a predicate ``str -> bool`` over a single character so
that the scanner can match it directly.  The empty string (what the
scanner returns at end of input) never matches.
"""
from __future__ import annotations

from typing import Callable, Final

CharPredicate = Callable[[str], bool]

WS_CHARS: Final[frozenset[str]] = frozenset(" \t")
DIGIT_CHARS: Final[frozenset[str]] = frozenset("0123456789")
HEX_CHARS: Final[frozenset[str]] = frozenset("0123456789abcdefABCDEF")
OCTAL_CHARS: Final[frozenset[str]] = frozenset("01234567")
BINARY_CHARS: Final[frozenset[str]] = frozenset("01")
ALPHA_CHARS: Final[frozenset[str]] = frozenset(
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"
)
BARE_KEY_CHARS: Final[frozenset[str]] = ALPHA_CHARS | DIGIT_CHARS | frozenset("-_")

ESCAPE_REPLACEMENTS: Final[dict[str, str]] = {
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    '"': '"',
    "\\": "\\",
}


def is_wschar(ch: str) -> bool:
    """Space or horizontal tab."""
    return ch in WS_CHARS


def is_digit(ch: str) -> bool:
    return ch in DIGIT_CHARS


def is_digit19(ch: str) -> bool:
    return ch != "0" and ch in DIGIT_CHARS


def is_hexdig(ch: str) -> bool:
    return ch in HEX_CHARS


def is_octal(ch: str) -> bool:
    return ch in OCTAL_CHARS


def is_binary(ch: str) -> bool:
    return ch in BINARY_CHARS


def is_bare_key_char(ch: str) -> bool:
    """Letter, digit, ``-`` or ``_``."""
    return ch in BARE_KEY_CHARS


def is_non_ascii(ch: str) -> bool:
    """``%x80-D7FF / %xE000-10FFFF``; surrogates are excluded."""
    if not ch:
        return False
    cp = ord(ch)
    return 0x80 <= cp <= 0xD7FF or 0xE000 <= cp <= 0x10FFFF


def is_non_eol(ch: str) -> bool:
    """Any character allowed in a comment: tab, ``%x20-7E`` or non-ASCII."""
    if not ch:
        return False
    return ch == "\t" or 0x20 <= ord(ch) <= 0x7E or is_non_ascii(ch)


def is_basic_unescaped(ch: str) -> bool:
    """Characters a basic string may hold without escaping.

    Whitespace, ``!``, ``#`` through ``[``, ``]`` through ``~`` and any
    non-ASCII character; i.e. everything printable except ``"`` and ``\\``.
    """
    if not ch:
        return False
    cp = ord(ch)
    return (
        ch in WS_CHARS
        or cp == 0x21
        or 0x23 <= cp <= 0x5B
        or 0x5D <= cp <= 0x7E
        or is_non_ascii(ch)
    )


def is_literal_char(ch: str) -> bool:
    """Tab, ``%x20-26``, ``%x28-7E`` or non-ASCII; everything but ``'``."""
    if not ch:
        return False
    cp = ord(ch)
    return ch == "\t" or 0x20 <= cp <= 0x26 or 0x28 <= cp <= 0x7E or is_non_ascii(ch)
