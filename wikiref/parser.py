# Parsing the resource reference strings embedded in link markup
#
# Copyright (c) 2020-2022 Tatu Ylonen.  See file LICENSE and https://ylonen.org

from functools import lru_cache
from typing import Union

from .common import (
    ANCHOR,
    ESCAPE_CHAR,
    INTERWIKI_ALIAS,
    QUERY_STRING,
    SEPARATOR_ANCHOR,
    SEPARATOR_INTERWIKI,
    SEPARATOR_QUERYSTRING,
)
from .escaper import EXTRA_UNESCAPES, TARGET_UNESCAPES, replace_each
from .logging_utils import logger
from .reference import ResourceReference, ResourceType

# Parameter stored for the text following each document separator
_SEPARATOR_PARAMS: dict[str, str] = {
    SEPARATOR_ANCHOR: ANCHOR,
    SEPARATOR_QUERYSTRING: QUERY_STRING,
}


def find_unescaped(
    text: str, separators: Union[str, tuple[str, ...]], start: int = 0
) -> int:
    """Returns the index of the leftmost character of ``text`` at or after
    ``start`` that is one of ``separators`` and is not escaped, or -1.  A
    separator is escaped when it is preceded by an odd number of
    consecutive escape characters; an escape character always consumes
    the character following it."""
    assert isinstance(text, str)
    i = start
    n = len(text)
    while i < n:
        c = text[i]
        if c == ESCAPE_CHAR:
            i += 2
            continue
        if c in separators:
            return i
        i += 1
    return -1


def rfind_unescaped(text: str, separator: str) -> int:
    """Returns the index of the rightmost unescaped ``separator`` in
    ``text``, or -1."""
    found = -1
    i = find_unescaped(text, separator)
    while i >= 0:
        found = i
        i = find_unescaped(text, separator, i + 1)
    return found


def has_trailing_escape(text: str) -> bool:
    """Returns True if ``text`` ends in an escape character that has
    nothing to escape."""
    count = len(text) - len(text.rstrip(ESCAPE_CHAR))
    return count % 2 == 1


@lru_cache(maxsize=1000)
def parse_document_reference(text: str) -> ResourceReference:
    """Parses a reference to a document in the format
    ``(document)(#anchor)(?query string)``.  The leftmost unescaped anchor
    or query string separator ends the document part, and the rest is
    scanned for the other separator, so a query string given before the
    anchor is accepted too.  This never fails: an escape character at the
    end of the text is taken literally."""
    assert isinstance(text, str)
    if has_trailing_escape(text):
        logger.debug(
            "trailing escape character taken literally in reference "
            "{!r}".format(text)
        )

    params: dict[str, str] = {}
    idx = find_unescaped(text, (SEPARATOR_ANCHOR, SEPARATOR_QUERYSTRING))
    if idx < 0:
        target = text
    else:
        target = text[:idx]
        first = text[idx]
        other = (
            SEPARATOR_QUERYSTRING
            if first == SEPARATOR_ANCHOR
            else SEPARATOR_ANCHOR
        )
        rest = text[idx + 1 :]
        j = find_unescaped(rest, other)
        if j < 0:
            parts = {first: rest}
        else:
            parts = {first: rest[:j], other: rest[j + 1 :]}
        if first == SEPARATOR_QUERYSTRING and j >= 0:
            logger.debug(
                "query string before anchor in reference {!r}".format(text)
            )
        # Anchor first, matching the order of serialization
        for sep in (SEPARATOR_ANCHOR, SEPARATOR_QUERYSTRING):
            if sep in parts:
                params[_SEPARATOR_PARAMS[sep]] = replace_each(
                    parts[sep], EXTRA_UNESCAPES
                )

    return ResourceReference(
        ResourceType.DOCUMENT,
        replace_each(target, TARGET_UNESCAPES),
        params,
    )


def parse_interwiki_reference(text: str) -> ResourceReference:
    """Parses ``target@wiki``.  The last unescaped separator starts the
    wiki alias; without one the whole text is the target."""
    assert isinstance(text, str)
    params: dict[str, str] = {}
    idx = rfind_unescaped(text, SEPARATOR_INTERWIKI)
    if idx < 0:
        target = text
    else:
        target = text[:idx]
        params[INTERWIKI_ALIAS] = replace_each(
            text[idx + 1 :], EXTRA_UNESCAPES
        )
    return ResourceReference(
        ResourceType.INTERWIKI,
        replace_each(target, EXTRA_UNESCAPES),
        params,
    )


def parse_uri_reference(
    text: str, resource_type: ResourceType = ResourceType.URL
) -> ResourceReference:
    """URL, mailto, UNC and path references keep the whole text as the
    target; their parts are not split."""
    assert isinstance(text, str)
    assert isinstance(resource_type, ResourceType)
    return ResourceReference(resource_type, text)
