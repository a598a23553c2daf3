"""Key rules and the key-path registry.

None of the rules governing key reuse can be expressed in ABNF.  They
are enforced by ``KeyRegistry``, which remembers every key path
accepted during a session.  A new path conflicts with an earlier one
when either is a prefix of the other (comparing segment by segment up
to the shorter length).  That single check rejects:

* assigning the same key twice (``name`` then ``name``)
* assigning below a key that already holds a value
  (``fruit.apple = 1`` then ``fruit.apple.smooth = true``)
* assigning a value to a key that is already a parent
  (``fruit.apple.smooth = true`` then ``fruit.apple = 1``)

while still allowing siblings (``fruit.apple.smooth`` then
``fruit.orange``).

A key is registered as soon as it has been read, before its value is
parsed, so a key whose value turns out to be malformed stays
registered.
"""
from __future__ import annotations

import logging
from collections.abc import Iterator

from tomlcore.ast.nodes import Key, format_key
from tomlcore.grammar.chars import is_bare_key_char
from tomlcore.parser.common import ws
from tomlcore.parser.errors import ErrorCategory
from tomlcore.parser.scanner import Scanner, attempt, choice, many
from tomlcore.parser.strings import basic_string, literal_string

logger = logging.getLogger(__name__)

_BARE_KEY_EXPECTED = ("a letter", "a digit", "'-'", "'_'")


class KeyRegistry:
    """Ordered collection of the key paths accepted in one session.

    A registry is owned by exactly one ``Session``; independent
    documents must use separate registries, or ``clear`` one in between.
    """

    __slots__ = ("_paths",)

    def __init__(self, paths: tuple[Key, ...] = ()) -> None:
        self._paths: list[Key] = list(paths)

    def __len__(self) -> int:
        return len(self._paths)

    def __iter__(self) -> Iterator[Key]:
        return iter(self._paths)

    def __repr__(self) -> str:
        return f"KeyRegistry({[format_key(p) for p in self._paths]!r})"

    @property
    def paths(self) -> tuple[Key, ...]:
        """Every registered path, in registration order."""
        return tuple(self._paths)

    def find_conflict(self, key: Key) -> Key | None:
        """Return the first registered path that ``key`` collides with, if any."""
        for used in self._paths:
            shorter = min(len(used), len(key))
            if used[:shorter] == key[:shorter]:
                return used
        return None

    def register(self, key: Key) -> None:
        """Record ``key`` as assigned.  Does not check for conflicts."""
        self._paths.append(key)

    def clear(self) -> None:
        """Forget every registered path."""
        self._paths.clear()

    def copy(self) -> "KeyRegistry":
        """Return an independent registry holding the same paths."""
        return KeyRegistry(tuple(self._paths))


# ---------------------------------------------------------------------------
# Key rules
# ---------------------------------------------------------------------------


def unquoted_key(scanner: Scanner) -> str:
    """Parse one or more letters, digits, ``-`` or ``_``."""
    if not is_bare_key_char(scanner.current()):
        raise scanner.error(_BARE_KEY_EXPECTED)
    return scanner.take_while(is_bare_key_char)


def simple_key(scanner: Scanner) -> str:
    """Parse a bare key or a quoted key.

    A quoted key is always one segment, even if it contains dots.
    """
    return choice(scanner, unquoted_key, basic_string, literal_string)


def _dot_sep(scanner: Scanner) -> None:
    ws(scanner)
    scanner.expect_literal(".", "'.'")
    ws(scanner)


def _dotted_segment(scanner: Scanner) -> str:
    attempt(scanner, _dot_sep)
    return simple_key(scanner)


def key_path(scanner: Scanner) -> Key:
    """Parse a simple or dotted key into its segments."""
    first = simple_key(scanner)
    return (first, *many(scanner, _dotted_segment))


def parse_key(scanner: Scanner, registry: KeyRegistry) -> Key:
    """Parse a key and register it, failing if it conflicts with an earlier key."""
    start = scanner.pos
    key = key_path(scanner)
    used = registry.find_conflict(key)
    if used is not None:
        logger.debug(
            "Key %s conflicts with registered key %s", format_key(key), format_key(used)
        )
        raise scanner.error(
            message=f"Key <{format_key(used)}> is already assigned",
            category=ErrorCategory.REGISTRY,
            pos=start,
        )
    registry.register(key)
    logger.debug("Registered key %s", format_key(key))
    return key
