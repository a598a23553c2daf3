"""TOML grammar module.

Exports the ABNF reference grammar, the alternative orderings the parser
follows, and the character classes the rules are built from.
"""
from __future__ import annotations

from tomlcore.grammar.chars import (
    ESCAPE_REPLACEMENTS,
    CharPredicate,
    is_bare_key_char,
    is_basic_unescaped,
    is_binary,
    is_digit,
    is_digit19,
    is_hexdig,
    is_literal_char,
    is_non_ascii,
    is_non_eol,
    is_octal,
    is_wschar,
)
from tomlcore.grammar.grammar import (
    FULL_GRAMMAR,
    GRAMMAR_ARRAY,
    GRAMMAR_BOOLEAN,
    GRAMMAR_COMMON,
    GRAMMAR_DATETIME,
    GRAMMAR_DOCUMENT,
    GRAMMAR_KEYVAL,
    GRAMMAR_NUMBER,
    GRAMMAR_STRING,
    STRING_ALTERNATIVE_ORDER,
    VALUE_ALTERNATIVE_ORDER,
)

__all__ = [
    # Grammar constants
    "FULL_GRAMMAR",
    "GRAMMAR_COMMON",
    "GRAMMAR_KEYVAL",
    "GRAMMAR_STRING",
    "GRAMMAR_NUMBER",
    "GRAMMAR_BOOLEAN",
    "GRAMMAR_DATETIME",
    "GRAMMAR_ARRAY",
    "GRAMMAR_DOCUMENT",
    "VALUE_ALTERNATIVE_ORDER",
    "STRING_ALTERNATIVE_ORDER",
    # Character classes
    "CharPredicate",
    "ESCAPE_REPLACEMENTS",
    "is_wschar",
    "is_digit",
    "is_digit19",
    "is_hexdig",
    "is_octal",
    "is_binary",
    "is_bare_key_char",
    "is_non_ascii",
    "is_non_eol",
    "is_basic_unescaped",
    "is_literal_char",
]
