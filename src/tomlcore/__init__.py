"""toml-core: a TOML value parser with a session-scoped key registry.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
::

    import tomlcore

    # Parse a whole document into a value tree
    doc = tomlcore.parse_document('''
        title = "TOML Example"  # inline comment
        owner.name = "Tom"
        owner.dob = 1979-05-27T07:32:00-08:00
        ports = [ 8000, 8001, 8002 ]
    ''')

    # Or straight into plain Python values
    data = tomlcore.loads('answer = 0x2A')
    data["answer"]
    42

    # Parse a single rule; keys persist across calls in a session
    session = tomlcore.Session()
    session.parse(tomlcore.Rule.KEYVAL, 'fruit.apple = 1')
    session.parse(tomlcore.Rule.KEYVAL, 'fruit.apple.smooth = true')
    # ParseError: Key <fruit.apple> is already assigned

    tomlcore.__version__
    '0.1.0'
"""
from __future__ import annotations

from typing import TYPE_CHECKING

__version__: str = "0.1.0"

from tomlcore.parser.errors import ErrorCategory, ParseError
from tomlcore.parser.parser import Rule, Session

if TYPE_CHECKING:
    from tomlcore.ast.nodes import Document
    from tomlcore.parser.parser import ParseResult


def parse(
    rule: "Rule | str",
    text: str,
    *,
    session: "Session | None" = None,
    partial: bool = False,
) -> "ParseResult":
    """Parse ``text`` with a single grammar rule.

    Parameters
    ----------
    rule:
        Entry rule, as a ``Rule`` or its string value (``"value"``,
        ``"keyval"``, ``"integer"`` and so on).
    text:
        Source text.
    session:
        Session whose key registry is used.  A fresh one if omitted.
    partial:
        Accept a match of a prefix of ``text`` instead of requiring the
        whole text to be consumed.

    Raises
    ------
    tomlcore.ParseError
        On the first error.
    """
    from tomlcore.parser.parser import parse as _parse

    return _parse(rule, text, session=session, partial=partial)


def parse_document(text: str, *, session: "Session | None" = None) -> "Document":
    """Parse a document of key-value lines, comments, and blank lines.

    Returns
    -------
    Document
        Every key-value pair and comment in source order.
    """
    from tomlcore.parser.parser import parse_document as _parse_document

    return _parse_document(text, session=session)


def loads(text: str) -> dict[str, object]:
    """Parse a document into nested dicts of plain Python values."""
    from tomlcore.parser.parser import loads as _loads

    return _loads(text)


__all__ = [
    "__version__",
    "parse",
    "parse_document",
    "loads",
    "Session",
    "Rule",
    "ParseError",
    "ErrorCategory",
]
