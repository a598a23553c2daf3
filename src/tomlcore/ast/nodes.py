"""Value tree node definitions for TOML.

Every node produced by the parser is a frozen dataclass so that value
trees are immutable and hashable.  The ``Value`` union type covers all
seven variants; downstream code should use ``isinstance`` checks or the
``kind`` attribute to dispatch.

All nodes carry a ``Span`` that records their source location.  Spans
are excluded from equality so two trees holding the same values compare
equal regardless of where in the text they were parsed from.
"""
from __future__ import annotations

import datetime
import re
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Final, Union

# Largest magnitude a double can hold without losing integer precision.
MAX_SAFE_INTEGER: Final[int] = 2**53 - 1

_BARE_SEGMENT: Final[re.Pattern[str]] = re.compile(r"[A-Za-z0-9_-]+")


# ---------------------------------------------------------------------------
# Source location
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Span:
    """Half-open character range ``[start, end)`` within the source text.

    Parameters
    ----------
    start:
        0-based offset of the first character.
    end:
        0-based offset *past* the last character.
    line:
        1-based line number of the first character.
    col:
        1-based column number of the first character.
    """

    start: int
    end: int
    line: int
    col: int

    def __repr__(self) -> str:
        return f"Span({self.line}:{self.col})"

    @classmethod
    def unknown(cls) -> "Span":
        """Return a sentinel span used when position info is unavailable."""
        return cls(start=0, end=0, line=0, col=0)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class ValueKind(Enum):
    """Variant tag of a parsed value."""

    STRING = auto()
    INTEGER = auto()
    FLOAT = auto()
    BOOLEAN = auto()
    DATETIME = auto()
    ARRAY = auto()
    COMMENT = auto()


class DateTimeShape(Enum):
    """Which of the four RFC 3339 shapes a ``DateTimeRecord`` holds."""

    OFFSET_DATE_TIME = auto()
    LOCAL_DATE_TIME = auto()
    LOCAL_DATE = auto()
    LOCAL_TIME = auto()


# ---------------------------------------------------------------------------
# Date-time record
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class DateTimeRecord:
    """Calendar fields of a TOML date-time.

    Only the fields belonging to the parsed shape are populated:

    * offset date-times have every field
    * local date-times have every field but ``offset``
    * local dates have ``year``, ``month`` and ``day``
    * local times have ``hours``, ``minutes``, ``seconds`` and ``fraction``

    ``offset`` is the UTC offset in signed minutes (``Z`` is ``0``) and
    ``fraction`` is the fractional part of the seconds in ``[0, 1)``.
    """

    year: int | None = None
    month: int | None = None
    day: int | None = None
    hours: int | None = None
    minutes: int | None = None
    seconds: int | None = None
    fraction: float | None = None
    offset: int | None = None

    def __post_init__(self) -> None:
        if self.offset is not None and self.hours is None:
            raise ValueError("A UTC offset requires time fields")

    @property
    def has_date(self) -> bool:
        return self.year is not None

    @property
    def has_time(self) -> bool:
        return self.hours is not None

    @property
    def shape(self) -> DateTimeShape:
        """Return the RFC 3339 shape this record was parsed as."""
        if self.has_date and self.has_time:
            if self.offset is not None:
                return DateTimeShape.OFFSET_DATE_TIME
            return DateTimeShape.LOCAL_DATE_TIME
        if self.has_date:
            return DateTimeShape.LOCAL_DATE
        return DateTimeShape.LOCAL_TIME

    def to_python(self) -> datetime.datetime | datetime.date | datetime.time:
        """Convert to the matching ``datetime`` object.

        Raises
        ------
        ValueError
            If the record holds a leap second, which ``datetime`` cannot
            represent.
        """
        if not self.has_time:
            return datetime.date(self.year, self.month, self.day)  # type: ignore[arg-type]
        if self.seconds == 60:
            raise ValueError("Leap seconds cannot be represented by datetime")
        micro = min(int((self.fraction or 0.0) * 1_000_000 + 0.5), 999_999)
        tzinfo = None
        if self.offset is not None:
            tzinfo = datetime.timezone(datetime.timedelta(minutes=self.offset))
        if not self.has_date:
            return datetime.time(self.hours, self.minutes, self.seconds, micro)  # type: ignore[arg-type]
        return datetime.datetime(
            self.year,  # type: ignore[arg-type]
            self.month,  # type: ignore[arg-type]
            self.day,  # type: ignore[arg-type]
            self.hours,  # type: ignore[arg-type]
            self.minutes,  # type: ignore[arg-type]
            self.seconds,  # type: ignore[arg-type]
            micro,
            tzinfo=tzinfo,
        )


# ---------------------------------------------------------------------------
# Value variants
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class StringValue:
    """A basic, literal, or multiline string after escape decoding."""

    value: str
    span: Span = field(default_factory=Span.unknown, compare=False)
    kind: ValueKind = field(default=ValueKind.STRING, init=False, repr=False)

    def to_python(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class IntegerValue:
    """An integer in any radix.

    Python's ``int`` is already arbitrary precision, so magnitudes beyond
    the exact-double range need no separate type; ``is_safe`` reports
    which side of that boundary the value falls on.
    """

    value: int
    span: Span = field(default_factory=Span.unknown, compare=False)
    kind: ValueKind = field(default=ValueKind.INTEGER, init=False, repr=False)

    @property
    def is_safe(self) -> bool:
        """Return True if the value is exactly representable as a double."""
        return -MAX_SAFE_INTEGER <= self.value <= MAX_SAFE_INTEGER

    def to_python(self) -> int:
        return self.value


@dataclass(frozen=True, slots=True)
class FloatValue:
    """An IEEE-754 double, including ``inf``, ``-inf`` and ``nan``."""

    value: float
    span: Span = field(default_factory=Span.unknown, compare=False)
    kind: ValueKind = field(default=ValueKind.FLOAT, init=False, repr=False)

    def to_python(self) -> float:
        return self.value


@dataclass(frozen=True, slots=True)
class BooleanValue:
    """A ``true`` or ``false`` literal."""

    value: bool
    span: Span = field(default_factory=Span.unknown, compare=False)
    kind: ValueKind = field(default=ValueKind.BOOLEAN, init=False, repr=False)

    def to_python(self) -> bool:
        return self.value


@dataclass(frozen=True, slots=True)
class DateTimeValue:
    """One of the four RFC 3339 date-time shapes."""

    value: DateTimeRecord
    span: Span = field(default_factory=Span.unknown, compare=False)
    kind: ValueKind = field(default=ValueKind.DATETIME, init=False, repr=False)

    def to_python(self) -> datetime.datetime | datetime.date | datetime.time | DateTimeRecord:
        """Return the ``datetime`` object, or the record itself for a leap second."""
        if self.value.seconds == 60:
            return self.value
        return self.value.to_python()


@dataclass(frozen=True, slots=True)
class ArrayValue:
    """An ordered, possibly nested, sequence of values."""

    values: tuple["Value", ...] = ()
    span: Span = field(default_factory=Span.unknown, compare=False)
    kind: ValueKind = field(default=ValueKind.ARRAY, init=False, repr=False)

    def __len__(self) -> int:
        return len(self.values)

    def __getitem__(self, index: int) -> "Value":
        return self.values[index]

    def to_python(self) -> list[object]:
        return [v.to_python() for v in self.values]


@dataclass(frozen=True, slots=True)
class CommentValue:
    """The text of a ``#`` comment, without the ``#``."""

    value: str
    span: Span = field(default_factory=Span.unknown, compare=False)
    kind: ValueKind = field(default=ValueKind.COMMENT, init=False, repr=False)

    def to_python(self) -> str:
        return self.value


Value = Union[
    StringValue,
    IntegerValue,
    FloatValue,
    BooleanValue,
    DateTimeValue,
    ArrayValue,
    CommentValue,
]

# A key path: one segment for a bare or quoted key, two or more for a
# dotted key.
Key = tuple[str, ...]


def format_key(key: Key) -> str:
    """Render a key path with ``.`` separators.

    Segments that are not made up purely of letters, digits, ``-`` and
    ``_`` (including the empty segment) are wrapped in double quotes.

    Example
    -------
    ::

        >>> format_key(("site", "google.com"))
        'site."google.com"'
    """
    return ".".join(
        segment if _BARE_SEGMENT.fullmatch(segment) else f'"{segment}"'
        for segment in key
    )


# ---------------------------------------------------------------------------
# Key-value pairs and documents
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class KeyValue:
    """A ``key = value`` assignment."""

    key: Key
    value: Value
    span: Span = field(default_factory=Span.unknown, compare=False)

    @property
    def dotted(self) -> str:
        """Return the key rendered the way error messages show it."""
        return format_key(self.key)


@dataclass(frozen=True, slots=True)
class Document:
    """Every key-value pair and comment of a document, in source order."""

    items: tuple[KeyValue | CommentValue, ...] = ()
    span: Span = field(default_factory=Span.unknown, compare=False)

    @property
    def keyvals(self) -> tuple[KeyValue, ...]:
        return tuple(i for i in self.items if isinstance(i, KeyValue))

    @property
    def comments(self) -> tuple[CommentValue, ...]:
        return tuple(i for i in self.items if isinstance(i, CommentValue))

    def to_dict(self) -> dict[str, object]:
        """Fold the key-value pairs into nested dicts of plain values.

        Dotted keys create intermediate dicts.  The key registry has
        already rejected every path that would collide with another, so
        each leaf is written exactly once.
        """
        result: dict[str, object] = {}
        for kv in self.keyvals:
            table = result
            for segment in kv.key[:-1]:
                table = table.setdefault(segment, {})  # type: ignore[assignment]
            table[kv.key[-1]] = kv.value.to_python()
        return result
