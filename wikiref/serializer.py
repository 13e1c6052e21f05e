# Serializing resource references to the strings embedded in link markup
#
# Copyright (c) 2020-2022 Tatu Ylonen.  See file LICENSE and https://ylonen.org

from .common import (
    ANCHOR,
    INTERWIKI_ALIAS,
    QUERY_STRING,
    SEPARATOR_ANCHOR,
    SEPARATOR_INTERWIKI,
    SEPARATOR_QUERYSTRING,
)
from .escaper import EXTRA_ESCAPES, TARGET_ESCAPES, replace_each
from .reference import ResourceReference


def serialize_document_reference(reference: ResourceReference) -> str:
    """Serializes a reference to a document using the format
    ``(document)(#anchor)(?query string)``.  The anchor always comes
    before the query string so that each reference has exactly one
    serialization."""
    assert isinstance(reference, ResourceReference)
    parts: list[str] = []
    if reference.reference:
        parts.append(replace_each(reference.reference, TARGET_ESCAPES))

    anchor = reference.get_parameter(ANCHOR)
    if anchor is not None:
        parts.append(SEPARATOR_ANCHOR)
        parts.append(replace_each(anchor, EXTRA_ESCAPES))

    query_string = reference.get_parameter(QUERY_STRING)
    if query_string is not None:
        parts.append(SEPARATOR_QUERYSTRING)
        parts.append(replace_each(query_string, EXTRA_ESCAPES))

    return "".join(parts)


def serialize_interwiki_reference(reference: ResourceReference) -> str:
    """Serializes an interwiki reference as ``target@wiki``.  Both parts
    escape the escape character, so the last unescaped separator is
    always the one written here."""
    assert isinstance(reference, ResourceReference)
    text = replace_each(reference.reference, EXTRA_ESCAPES)
    alias = reference.get_parameter(INTERWIKI_ALIAS)
    if alias is not None:
        text += SEPARATOR_INTERWIKI + replace_each(alias, EXTRA_ESCAPES)
    return text


def serialize_uri_reference(reference: ResourceReference) -> str:
    """URL, mailto, UNC and path references are written verbatim."""
    assert isinstance(reference, ResourceReference)
    return reference.reference
