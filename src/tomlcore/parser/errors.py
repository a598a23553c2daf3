"""Parse error types for the TOML value parser.

All parse errors carry source-location information so that the CLI and
editor integrations can display precise, actionable error messages.
There is no error recovery: the first error aborts the current parse.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from tomlcore.ast.nodes import Span


class ErrorCategory(Enum):
    """What kind of rule the input violated.

    LEXICAL
        The character at the current position does not belong to any
        class the grammar expects there.
    GRAMMATICAL
        A required sequence is incomplete: an unterminated string or
        array, a missing ``=``, trailing input after a complete value.
    RANGE
        A syntactically valid token violates a value constraint: a day
        past the end of its month, an hour of 24, a misplaced
        underscore.
    REGISTRY
        A key path conflicts with a path assigned earlier in the same
        session.
    """

    LEXICAL = auto()
    GRAMMATICAL = auto()
    RANGE = auto()
    REGISTRY = auto()

    @property
    def is_semantic(self) -> bool:
        """Return True for categories that ordered alternation never retries."""
        return self in (ErrorCategory.RANGE, ErrorCategory.REGISTRY)


@dataclass(frozen=True)
class ParseError(Exception):
    """A single parse error with location and expectation.

    Parameters
    ----------
    message:
        Human-readable description of the error.
    span:
        Source location where the error was detected.
    expected:
        Descriptions of what the grammar would have accepted here,
        e.g. ``("a digit", "'_'")``.  Empty for semantic errors.
    category:
        Which class of rule was violated.
    """

    message: str
    span: Span
    expected: tuple[str, ...] = ()
    category: ErrorCategory = ErrorCategory.LEXICAL

    def __str__(self) -> str:
        return f"ParseError at {self.span.line}:{self.span.col}: {self.message}"

    # dataclass(frozen=True) doesn't call Exception.__init__ automatically
    def __post_init__(self) -> None:
        object.__setattr__(self, "args", (str(self),))

    @property
    def offset(self) -> int:
        """0-based offset of the error in the source text."""
        return self.span.start

    @property
    def is_semantic(self) -> bool:
        return self.category.is_semantic


def describe_expected(expected: tuple[str, ...]) -> str:
    """Join expectation descriptions into an English list.

    Example
    -------
    ::

        >>> describe_expected(("a letter", "a digit", "'-'"))
        "a letter, a digit, or '-'"
    """
    unique = tuple(dict.fromkeys(expected))
    if not unique:
        return "nothing"
    if len(unique) == 1:
        return unique[0]
    if len(unique) == 2:
        return f"{unique[0]} or {unique[1]}"
    return ", ".join(unique[:-1]) + f", or {unique[-1]}"
