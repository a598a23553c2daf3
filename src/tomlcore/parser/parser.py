"""Parse sessions and entry points.

A ``Session`` owns the key registry for one document (or one series of
related ``parse`` calls).  Every entry rule runs over a fresh
``Scanner``; only the registry carries state from one call to the next.

Usage
-----
::

    from tomlcore.parser import Rule, Session

    session = Session()
    session.parse(Rule.KEYVAL, 'name = "Tom"')
    session.parse(Rule.KEYVAL, 'name = "Thomas"')  # ParseError: already assigned
    session.reset()
    session.parse(Rule.KEYVAL, 'name = "Thomas"')  # fine again
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Union

from tomlcore.ast.nodes import CommentValue, Document, Key, KeyValue, Value
from tomlcore.parser.collection import parse_array, parse_keyval, parse_value
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
from tomlcore.parser.scanner import Scanner
from tomlcore.parser.strings import parse_string

logger = logging.getLogger(__name__)

ParseResult = Union[Value, KeyValue, Key]


class Rule(Enum):
    """Grammar rules that can be used as a parse entry point."""

    VALUE = "value"
    ARRAY = "array"
    KEYVAL = "keyval"
    KEY = "key"
    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    DATETIME = "datetime"
    COMMENT = "comment"


_REGISTRY_FREE_RULES: dict[Rule, Callable[[Scanner], Value]] = {
    Rule.VALUE: parse_value,
    Rule.ARRAY: parse_array,
    Rule.STRING: parse_string,
    Rule.INTEGER: parse_integer,
    Rule.FLOAT: parse_float,
    Rule.BOOLEAN: parse_boolean,
    Rule.DATETIME: parse_datetime,
    Rule.COMMENT: parse_comment,
}


class Session:
    """A parse session owning one ``KeyRegistry``.

    The registry persists across ``parse`` calls and is only emptied by
    ``reset``.  Use one session per document; sessions are not meant to
    be shared between threads.

    Parameters
    ----------
    registry:
        Registry to start from.  A new empty one is created if omitted.
    """

    __slots__ = ("_registry",)

    def __init__(self, registry: KeyRegistry | None = None) -> None:
        self._registry: KeyRegistry = registry if registry is not None else KeyRegistry()

    @property
    def registry(self) -> KeyRegistry:
        return self._registry

    def reset(self) -> None:
        """Forget every key assigned so far."""
        logger.debug("Resetting key registry (%d paths)", len(self._registry))
        self._registry.clear()

    def _rule_fn(self, rule: Rule) -> Callable[[Scanner], ParseResult]:
        if rule is Rule.KEYVAL:
            return lambda s: parse_keyval(s, self._registry)
        if rule is Rule.KEY:
            return lambda s: parse_key(s, self._registry)
        return _REGISTRY_FREE_RULES[rule]

    def parse(self, rule: Rule | str, text: str, *, partial: bool = False) -> ParseResult:
        """Parse ``text`` with a single grammar rule.

        Parameters
        ----------
        rule:
            The entry rule, as a ``Rule`` or its string value.
        text:
            Source text.
        partial:
            When ``False`` (the default) the rule must consume all of
            ``text``.  When ``True`` the result for the longest matching
            prefix is returned and the rest is ignored.

        Returns
        -------
        Value | KeyValue | tuple[str, ...]
            A value node, a ``KeyValue`` for ``Rule.KEYVAL``, or the key
            path for ``Rule.KEY``.

        Raises
        ------
        ParseError
            On the first lexical, grammatical, range or registry error.
        """
        rule = Rule(rule)
        scanner = Scanner(text)
        result = self._rule_fn(rule)(scanner)
        if not partial:
            scanner.expect_end()
        return result

    def parse_document(self, text: str) -> Document:
        """Parse a document made of key-value lines, comments and blank lines.

        Each line is optional whitespace, an optional ``key = value``,
        optional whitespace and an optional comment.  Table headers are
        not supported.

        Raises
        ------
        ParseError
            On the first error; keys read before it stay registered.
        """
        logger.debug("Parsing document (%d characters)", len(text))
        scanner = Scanner(text)
        items: list[KeyValue | CommentValue] = []
        while True:
            ws(scanner)
            ch = scanner.current()
            if ch == "[":
                raise scanner.error(
                    "a key",
                    message="Table headers are not supported",
                    category=ErrorCategory.GRAMMATICAL,
                )
            if ch and ch != "#" and not at_newline(scanner):
                items.append(parse_keyval(scanner, self._registry))
                ws(scanner)
            if scanner.current() == "#":
                items.append(parse_comment(scanner))
            if scanner.at_end():
                break
            if not at_newline(scanner):
                raise scanner.error(
                    ("a comment", "a newline", "end of input"),
                    category=ErrorCategory.GRAMMATICAL,
                )
            newline(scanner)
        document = Document(tuple(items), scanner.span_from(0))
        logger.debug(
            "Parsed document: %d key-value pairs, %d comments",
            len(document.keyvals),
            len(document.comments),
        )
        return document


# ---------------------------------------------------------------------------
# Module-level convenience functions
# ---------------------------------------------------------------------------


def parse(
    rule: Rule | str,
    text: str,
    *,
    session: Session | None = None,
    partial: bool = False,
) -> ParseResult:
    """Parse ``text`` with ``rule`` in ``session`` (a fresh one if omitted).

    Example
    -------
    ::

        from tomlcore.parser import Rule, parse
        parse(Rule.INTEGER, "0xDEAD_BEEF").value  # 3735928559
    """
    return (session or Session()).parse(rule, text, partial=partial)


def parse_document(text: str, *, session: Session | None = None) -> Document:
    """Parse a whole document in ``session`` (a fresh one if omitted)."""
    return (session or Session()).parse_document(text)


def loads(text: str) -> dict[str, object]:
    """Parse a document and fold it into nested dicts of plain Python values."""
    return parse_document(text).to_dict()
