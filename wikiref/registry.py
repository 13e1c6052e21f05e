# Mapping from short type tokens to reference serializers and parsers
#
# Copyright (c) 2020-2022 Tatu Ylonen.  See file LICENSE and https://ylonen.org

import logging
from collections.abc import Callable, Iterator, Mapping
from functools import partial
from types import MappingProxyType
from typing import NamedTuple, Optional

from .common import TYPE_SEPARATOR, XWIKI20_DOC_TOKEN
from .logging_utils import logger
from .parser import (
    parse_document_reference,
    parse_interwiki_reference,
    parse_uri_reference,
)
from .reference import ResourceReference, ResourceType
from .serializer import (
    serialize_document_reference,
    serialize_interwiki_reference,
    serialize_uri_reference,
)


class UnknownResourceTypeError(KeyError):
    """Raised when no codec is registered under a token."""


class ReferenceCodec(NamedTuple):
    type: ResourceType
    serialize: Callable[[ResourceReference], str]
    parse: Callable[[str], ResourceReference]


def uri_codec(resource_type: ResourceType) -> ReferenceCodec:
    """Codec for references whose whole text is the target."""
    return ReferenceCodec(
        resource_type,
        serialize_uri_reference,
        partial(parse_uri_reference, resource_type=resource_type),
    )


DOCUMENT_CODEC = ReferenceCodec(
    ResourceType.DOCUMENT,
    serialize_document_reference,
    parse_document_reference,
)

INTERWIKI_CODEC = ReferenceCodec(
    ResourceType.INTERWIKI,
    serialize_interwiki_reference,
    parse_interwiki_reference,
)

# Codecs available in every registry, by registration token
DEFAULT_CODECS: Mapping[str, ReferenceCodec] = MappingProxyType(
    {
        XWIKI20_DOC_TOKEN: DOCUMENT_CODEC,
        ResourceType.DOCUMENT.value: DOCUMENT_CODEC,
        ResourceType.INTERWIKI.value: INTERWIKI_CODEC,
        ResourceType.ATTACHMENT.value: uri_codec(ResourceType.ATTACHMENT),
        ResourceType.URL.value: uri_codec(ResourceType.URL),
        ResourceType.MAILTO.value: uri_codec(ResourceType.MAILTO),
        ResourceType.UNC.value: uri_codec(ResourceType.UNC),
        ResourceType.PATH.value: uri_codec(ResourceType.PATH),
        ResourceType.DATA.value: uri_codec(ResourceType.DATA),
    }
)


class ReferenceTypeRegistry:
    """Read-only mapping from type tokens to reference codecs.  The mapping
    is fixed when the registry is created, so one registry can be shared
    between threads.

    ``codecs`` are added to (or override) the default codecs.
    ``default_type`` is the token used for references without an explicit
    type prefix.  Unless ``quiet`` is set, the package logger is set to
    the DEBUG level."""

    __slots__ = ("codecs", "default_type", "quiet")

    def __init__(
        self,
        codecs: Optional[Mapping[str, ReferenceCodec]] = None,
        default_type: str = ResourceType.DOCUMENT.value,
        quiet: bool = False,
    ) -> None:
        merged = dict(DEFAULT_CODECS)
        if codecs is not None:
            for token, codec in codecs.items():
                assert isinstance(token, str) and token
                assert isinstance(codec, ReferenceCodec)
                merged[token] = codec
        self.codecs: Mapping[str, ReferenceCodec] = MappingProxyType(merged)
        if default_type not in self.codecs:
            raise UnknownResourceTypeError(default_type)
        self.default_type = default_type
        self.quiet = quiet
        if not quiet:
            logger.setLevel(logging.DEBUG)
        logger.debug(
            "reference codecs registered for: {}".format(
                ", ".join(sorted(self.codecs))
            )
        )

    def __contains__(self, token: object) -> bool:
        return token in self.codecs

    def tokens(self) -> Iterator[str]:
        return iter(self.codecs)

    def get_codec(self, token: str) -> ReferenceCodec:
        try:
            return self.codecs[token]
        except KeyError:
            raise UnknownResourceTypeError(token) from None

    def parse(self, token: str, text: str) -> ResourceReference:
        """Parses ``text`` with the codec registered under ``token``."""
        return self.get_codec(token).parse(text)

    def serialize(
        self, reference: ResourceReference, token: Optional[str] = None
    ) -> str:
        """Serializes ``reference`` with the codec registered under
        ``token``, or under the tag of the reference type."""
        return self.get_codec(token or reference.type.value).serialize(
            reference
        )

    def split_type_prefix(self, text: str) -> tuple[Optional[str], str]:
        """Splits a ``type:`` prefix naming a registered codec off
        ``text``.  Returns (None, text) if there is no such prefix."""
        assert isinstance(text, str)
        idx = text.find(TYPE_SEPARATOR)
        if idx <= 0:
            return None, text
        prefix = text[:idx]
        if prefix not in self.codecs:
            if prefix.isalnum():
                logger.debug(
                    "no codec for prefix {!r}, parsing {!r} as {}".format(
                        prefix, text, self.default_type
                    )
                )
            return None, text
        return prefix, text[idx + 1 :]

    def parse_reference(self, text: str) -> ResourceReference:
        """Parses a possibly typed reference, such as
        ``unc:\\\\server\\share`` or ``Space.Page#anchor``.  Text without a
        known type prefix is parsed with the default codec."""
        token, body = self.split_type_prefix(text)
        return self.parse(token or self.default_type, body)

    def serialize_reference(
        self, reference: ResourceReference, typed: bool = False
    ) -> str:
        """Serializes ``reference`` so that ``parse_reference()`` gives it
        back.  The type prefix is left out for the default type unless
        ``typed`` is set or the serialized text would look typed."""
        assert isinstance(reference, ResourceReference)
        token = reference.type.value
        body = self.serialize(reference, token)
        default = self.get_codec(self.default_type)
        if (
            typed
            or reference.type != default.type
            or self.split_type_prefix(body)[0] is not None
        ):
            return token + TYPE_SEPARATOR + body
        return body


DEFAULT_REGISTRY = ReferenceTypeRegistry(quiet=True)
