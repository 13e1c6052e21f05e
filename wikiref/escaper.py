# Simultaneous multi-pattern literal replacement used for escaping and
# unescaping the parts of resource references
#
# Copyright (c) 2020-2022 Tatu Ylonen.  See file LICENSE and https://ylonen.org

import re
from collections.abc import Iterable, Iterator
from functools import lru_cache
from typing import Optional, overload

from .common import (
    ESCAPE_CHAR,
    SEPARATOR_ANCHOR,
    SEPARATOR_INTERWIKI,
    SEPARATOR_QUERYSTRING,
)

EscapeRule = tuple[str, str]


class EscapeTableError(ValueError):
    """Raised when an escape table is ambiguous or contains an empty
    pattern.  Tables are built at import time, so this is a programming
    error rather than a runtime condition."""


class EscapeTable:
    """Immutable ordered sequence of (search, replacement) literal string
    pairs.  When several patterns match at the same position, the one
    listed first wins.  A pattern that is a prefix of another pattern must
    therefore come after it, otherwise the longer one could never match."""

    __slots__ = ("rules", "_lookup", "_re")

    def __init__(self, rules: Iterable[EscapeRule]) -> None:
        rules = tuple((search, repl) for search, repl in rules)
        for search, repl in rules:
            if not isinstance(search, str) or not isinstance(repl, str):
                raise EscapeTableError(
                    "escape rule must be a pair of strings: {!r}".format(
                        (search, repl)
                    )
                )
            if not search:
                raise EscapeTableError(
                    "empty search pattern in escape rule {!r}".format(
                        (search, repl)
                    )
                )
        for i, (first, _) in enumerate(rules):
            for later, _ in rules[i + 1 :]:
                if later.startswith(first):
                    raise EscapeTableError(
                        "pattern {!r} shadows later pattern {!r}".format(
                            first, later
                        )
                    )
        self.rules: tuple[EscapeRule, ...] = rules
        self._lookup: dict[str, str] = dict(rules)
        # Python regexp alternation tries the alternatives in order at
        # each position, which gives the first-listed-wins semantics.
        self._re: Optional[re.Pattern[str]] = (
            re.compile("|".join(re.escape(search) for search, _ in rules))
            if rules
            else None
        )

    def __iter__(self) -> Iterator[EscapeRule]:
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self.rules)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EscapeTable):
            return NotImplemented
        return self.rules == other.rules

    def __hash__(self) -> int:
        return hash(self.rules)

    def __repr__(self) -> str:
        return "EscapeTable({!r})".format(self.rules)

    def reversed(self) -> "EscapeTable":
        """Returns the table with search and replacement swapped in every
        rule, used for removing the escapes this table adds."""
        return EscapeTable((repl, search) for search, repl in self.rules)

    def apply(self, text: str) -> str:
        if not text or self._re is None:
            return text

        def _repl(m: re.Match[str]) -> str:
            return self._lookup[m.group(0)]

        return self._re.sub(_repl, text)


def escaping_table(chars: Iterable[str]) -> EscapeTable:
    """Builds a table mapping each of ``chars`` to the escape character
    followed by the character itself."""
    return EscapeTable((c, ESCAPE_CHAR + c) for c in chars)


# Escapes added to the target part of a document reference.  The escape
# character itself is left alone here.
TARGET_ESCAPES: EscapeTable = escaping_table(
    (SEPARATOR_QUERYSTRING, SEPARATOR_INTERWIKI, SEPARATOR_ANCHOR)
)
TARGET_UNESCAPES: EscapeTable = TARGET_ESCAPES.reversed()

# Escapes added to the anchor, query string and interwiki parts.
EXTRA_ESCAPES: EscapeTable = escaping_table(
    (SEPARATOR_QUERYSTRING, SEPARATOR_INTERWIKI, SEPARATOR_ANCHOR, ESCAPE_CHAR)
)
EXTRA_UNESCAPES: EscapeTable = EXTRA_ESCAPES.reversed()


@overload
def replace_each(text: str, table: EscapeTable) -> str: ...


@overload
def replace_each(text: None, table: EscapeTable) -> None: ...


def replace_each(text: Optional[str], table: EscapeTable) -> Optional[str]:
    """Replaces all occurrences of the search patterns of ``table`` in
    ``text`` in a single left-to-right pass.  Replacement text is never
    rescanned, so a freshly inserted escape sequence cannot be escaped
    again.  None (an absent part) is returned unchanged."""
    if text is None:
        return None
    assert isinstance(text, str)
    assert isinstance(table, EscapeTable)
    return table.apply(text)


def escape(text: str, table: EscapeTable = EXTRA_ESCAPES) -> str:
    return replace_each(text, table)


@lru_cache(maxsize=32)
def _reversed(table: EscapeTable) -> EscapeTable:
    return table.reversed()


def unescape(text: str, table: EscapeTable = EXTRA_ESCAPES) -> str:
    """Removes the escapes that ``escape(text, table)`` adds.  ``table`` is
    the escaping table, not its reverse."""
    return replace_each(text, _reversed(table))
