"""Character scanner and backtracking primitives for the TOML parser.

The scanner is a cursor over an immutable source string.  Grammar rules
are plain callables that take a ``Scanner``, consume characters from
the current position and either return a value or raise ``ParseError``.

Backtracking model
------------------
A rule that fails *without* consuming input is a soft failure: ordered
alternation (``choice``) moves on to the next alternative.  A rule that
fails *after* consuming input is committed and the failure propagates
through the alternation.  ``attempt`` turns a committed failure into a
soft one by restoring the cursor to where the rule started.

Semantic failures (out-of-range fields, registry conflicts) are never
softened: they abort the parse no matter how many alternatives remain.
"""
from __future__ import annotations

from typing import Callable, TypeVar

from tomlcore.ast.nodes import Span
from tomlcore.grammar.chars import CharPredicate
from tomlcore.parser.errors import ErrorCategory, ParseError, describe_expected

T = TypeVar("T")
RuleFn = Callable[["Scanner"], T]


class Scanner:
    """Cursor over a TOML source string.

    Parameters
    ----------
    source:
        The complete text to scan.
    """

    __slots__ = ("_source", "_pos")

    def __init__(self, source: str) -> None:
        self._source: str = source
        self._pos: int = 0

    # ------------------------------------------------------------------
    # Position
    # ------------------------------------------------------------------

    @property
    def source(self) -> str:
        return self._source

    @property
    def pos(self) -> int:
        """0-based offset of the next unread character."""
        return self._pos

    def reset(self, pos: int) -> None:
        """Move the cursor back to ``pos`` (a previously recorded offset)."""
        self._pos = pos

    def at_end(self) -> bool:
        return self._pos >= len(self._source)

    def location(self, pos: int | None = None) -> tuple[int, int]:
        """Return the 1-based ``(line, col)`` of ``pos`` (default: cursor)."""
        if pos is None:
            pos = self._pos
        line = self._source.count("\n", 0, pos) + 1
        col = pos - (self._source.rfind("\n", 0, pos) + 1) + 1
        return line, col

    def span_from(self, start: int) -> Span:
        """Build a ``Span`` covering ``[start, pos)``."""
        line, col = self.location(start)
        return Span(start=start, end=self._pos, line=line, col=col)

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    def current(self) -> str:
        """Return the character at the cursor, or ``""`` at end of input."""
        return self._source[self._pos] if self._pos < len(self._source) else ""

    def peek(self, offset: int = 1) -> str:
        """Return the character at ``pos + offset`` without advancing."""
        idx = self._pos + offset
        return self._source[idx] if idx < len(self._source) else ""

    def advance(self) -> str:
        """Consume and return the current character."""
        ch = self.current()
        if ch:
            self._pos += 1
        return ch

    def startswith(self, text: str) -> bool:
        return self._source.startswith(text, self._pos)

    # ------------------------------------------------------------------
    # Errors
    # ------------------------------------------------------------------

    def error(
        self,
        expected: str | tuple[str, ...] = (),
        *,
        message: str | None = None,
        category: ErrorCategory = ErrorCategory.LEXICAL,
        pos: int | None = None,
    ) -> ParseError:
        """Create (but do not raise) a ``ParseError`` at ``pos``.

        When ``message`` is omitted it is built from ``expected`` and the
        character actually found, e.g. ``Expected a digit but found 'x'``.
        """
        if pos is None:
            pos = self._pos
        if isinstance(expected, str):
            expected = (expected,)
        if message is None:
            found = self._source[pos] if pos < len(self._source) else ""
            found_text = repr(found) if found else "end of input"
            message = f"Expected {describe_expected(expected)} but found {found_text}"
        line, col = self.location(pos)
        return ParseError(
            message=message,
            span=Span(start=pos, end=pos, line=line, col=col),
            expected=expected,
            category=category,
        )

    def range_error(self, message: str, pos: int) -> ParseError:
        """Create a semantic error for a token that violates a value constraint."""
        return self.error(message=message, category=ErrorCategory.RANGE, pos=pos)

    # ------------------------------------------------------------------
    # Matchers
    # ------------------------------------------------------------------

    def expect_char(self, predicate: CharPredicate, expected: str) -> str:
        """Consume one character matching ``predicate``."""
        ch = self.current()
        if not predicate(ch):
            raise self.error(expected)
        self._pos += 1
        return ch

    def expect_literal(self, text: str, expected: str | None = None) -> str:
        """Consume ``text`` exactly, or fail without consuming anything."""
        if not self.startswith(text):
            raise self.error(expected or repr(text))
        self._pos += len(text)
        return text

    def expect_one_of(self, chars: str, expected: str | None = None) -> str:
        """Consume one character from ``chars``."""
        ch = self.current()
        if not ch or ch not in chars:
            raise self.error(expected or " or ".join(repr(c) for c in chars))
        self._pos += 1
        return ch

    def expect_count(self, predicate: CharPredicate, count: int, expected: str) -> str:
        """Consume exactly ``count`` characters matching ``predicate``."""
        start = self._pos
        for _ in range(count):
            self.expect_char(predicate, expected)
        return self._source[start : self._pos]

    def take_while(self, predicate: CharPredicate) -> str:
        """Consume the longest (possibly empty) run matching ``predicate``."""
        start = self._pos
        while predicate(self.current()):
            self._pos += 1
        return self._source[start : self._pos]

    def expect_end(self) -> None:
        """Fail unless every character has been consumed."""
        if not self.at_end():
            raise self.error(
                "end of input",
                message=f"Expected end of input but found {self.current()!r}",
                category=ErrorCategory.GRAMMATICAL,
            )


# ---------------------------------------------------------------------------
# Combinators
# ---------------------------------------------------------------------------


def attempt(scanner: Scanner, rule: RuleFn[T]) -> T:
    """Run ``rule``; on failure restore the cursor so the failure is soft."""
    start = scanner.pos
    try:
        return rule(scanner)
    except ParseError as exc:
        if not exc.is_semantic:
            scanner.reset(start)
        raise


def choice(scanner: Scanner, *rules: RuleFn[T], expected: str | None = None) -> T:
    """Return the result of the first rule that succeeds.

    A rule that fails after consuming input, or with a semantic error,
    ends the search.  If every rule fails softly the error reports the
    merged expectations (or ``expected`` when given), unless one of the
    failures happened deeper in the input, in which case that one is
    re-raised since it says more about what went wrong.
    """
    start = scanner.pos
    furthest: ParseError | None = None
    merged: list[str] = []
    for rule in rules:
        try:
            return rule(scanner)
        except ParseError as exc:
            if exc.is_semantic or scanner.pos != start:
                raise
            merged.extend(exc.expected)
            if furthest is None or exc.offset > furthest.offset:
                furthest = exc
    if furthest is not None and furthest.offset > start:
        raise furthest
    raise scanner.error(expected or tuple(merged))


def optional(scanner: Scanner, rule: RuleFn[T], default: T | None = None) -> T | None:
    """Run ``rule``, returning ``default`` if it fails softly."""
    start = scanner.pos
    try:
        return rule(scanner)
    except ParseError as exc:
        if exc.is_semantic or scanner.pos != start:
            raise
        return default


def many(scanner: Scanner, rule: RuleFn[T]) -> list[T]:
    """Run ``rule`` repeatedly until it fails softly; collect the results."""
    results: list[T] = []
    while True:
        start = scanner.pos
        try:
            results.append(rule(scanner))
        except ParseError as exc:
            if exc.is_semantic or scanner.pos != start:
                raise
            return results
        if scanner.pos == start:
            # A rule that matches nothing would loop forever.
            return results


def many1(scanner: Scanner, rule: RuleFn[T]) -> list[T]:
    """Like ``many`` but the first repetition is required."""
    return [rule(scanner), *many(scanner, rule)]


def lookahead(scanner: Scanner, rule: RuleFn[T]) -> T:
    """Run ``rule`` and restore the cursor whether or not it matched."""
    start = scanner.pos
    try:
        return rule(scanner)
    finally:
        scanner.reset(start)


def not_followed_by(scanner: Scanner, rule: RuleFn[object], expected: str) -> None:
    """Succeed, consuming nothing, only if ``rule`` does not match here."""
    start = scanner.pos
    try:
        rule(scanner)
    except ParseError:
        scanner.reset(start)
        return
    scanner.reset(start)
    raise scanner.error(f"not {expected}")
