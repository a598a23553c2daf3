"""Whitespace and newline rules shared by the string, array and key rules."""
from __future__ import annotations

from tomlcore.grammar.chars import is_wschar
from tomlcore.parser.scanner import Scanner


def ws(scanner: Scanner) -> str:
    """Consume any run of spaces and tabs (possibly empty)."""
    return scanner.take_while(is_wschar)


def at_newline(scanner: Scanner) -> bool:
    """Return True if the cursor sits on ``\\n`` or ``\\r\\n``."""
    return scanner.current() == "\n" or scanner.startswith("\r\n")


def newline(scanner: Scanner) -> str:
    """Consume ``\\n`` or ``\\r\\n`` and return it unchanged."""
    if scanner.current() == "\n":
        return scanner.advance()
    return scanner.expect_literal("\r\n", "a newline")
