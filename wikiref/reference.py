# Structured resource references: a type, a target and named parameters
#
# Copyright (c) 2020-2022 Tatu Ylonen.  See file LICENSE and https://ylonen.org

import enum
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Optional, Union

from .common import ANCHOR, INTERWIKI_ALIAS, QUERY_STRING


@enum.unique
class ResourceType(enum.Enum):
    """Kinds of resources a link can point to.  The value is the short tag
    used as the type prefix in typed references and as the registration
    token of the corresponding codec."""

    # Wiki document, with optional anchor and query string
    DOCUMENT = "doc"

    # Attachment of a wiki document
    ATTACHMENT = "attach"

    # Any absolute URI
    URL = "url"

    # E-mail address
    MAILTO = "mailto"

    # Universal Naming Convention path, e.g. \\server\share\file
    UNC = "unc"

    # Path relative to the wiki web application
    PATH = "path"

    # Document on another wiki, TARGET@WIKI
    INTERWIKI = "interwiki"

    # Inline data URI
    DATA = "data"

    # Reference whose type could not be determined
    UNKNOWN = "unknown"

    @classmethod
    def from_tag(cls, tag: str) -> Optional["ResourceType"]:
        """Returns the type whose tag is ``tag``, or None."""
        try:
            return cls(tag)
        except ValueError:
            return None


ParametersArg = Union[Mapping[str, str], Iterable[tuple[str, str]], None]


class ResourceReference:
    """Immutable reference to a resource.  ``reference`` is the target
    (possibly empty, never None).  ``parameters`` is an ordered read-only
    mapping; a missing key means the part is absent, which is different
    from an empty value."""

    __slots__ = ("type", "reference", "parameters")

    def __init__(
        self,
        type: ResourceType,
        reference: str = "",
        parameters: ParametersArg = None,
    ) -> None:
        assert isinstance(type, ResourceType)
        assert isinstance(reference, str)
        params: dict[str, str] = dict(parameters or ())
        for k, v in params.items():
            assert isinstance(k, str)
            assert isinstance(v, str)
        object.__setattr__(self, "type", type)
        object.__setattr__(self, "reference", reference)
        object.__setattr__(self, "parameters", MappingProxyType(params))

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(
            "ResourceReference is immutable, cannot set {}".format(name)
        )

    def __delattr__(self, name: str) -> None:
        raise AttributeError(
            "ResourceReference is immutable, cannot delete {}".format(name)
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ResourceReference):
            return NotImplemented
        return (
            self.type == other.type
            and self.reference == other.reference
            and dict(self.parameters) == dict(other.parameters)
        )

    def __hash__(self) -> int:
        return hash(
            (self.type, self.reference, frozenset(self.parameters.items()))
        )

    def __str__(self) -> str:
        return "<{}({!r}){}>".format(
            self.type.name, self.reference, dict(self.parameters)
        )

    def __repr__(self) -> str:
        return "ResourceReference({}, {!r}, {!r})".format(
            self.type, self.reference, dict(self.parameters)
        )

    def get_parameter(self, name: str) -> Optional[str]:
        return self.parameters.get(name)

    def with_parameter(self, name: str, value: str) -> "ResourceReference":
        """Returns a copy with parameter ``name`` set to ``value``."""
        params = dict(self.parameters)
        params[name] = value
        return ResourceReference(self.type, self.reference, params)

    def without_parameter(self, name: str) -> "ResourceReference":
        params = dict(self.parameters)
        params.pop(name, None)
        return ResourceReference(self.type, self.reference, params)

    @property
    def anchor(self) -> Optional[str]:
        return self.parameters.get(ANCHOR)

    @property
    def query_string(self) -> Optional[str]:
        return self.parameters.get(QUERY_STRING)

    @property
    def interwiki_alias(self) -> Optional[str]:
        return self.parameters.get(INTERWIKI_ALIAS)


def document_reference(
    reference: str = "",
    anchor: Optional[str] = None,
    query_string: Optional[str] = None,
) -> ResourceReference:
    """Creates a document reference.  None for ``anchor`` or
    ``query_string`` leaves that part out."""
    params: dict[str, str] = {}
    if anchor is not None:
        params[ANCHOR] = anchor
    if query_string is not None:
        params[QUERY_STRING] = query_string
    return ResourceReference(ResourceType.DOCUMENT, reference, params)
