from .escaper import (
    EXTRA_ESCAPES,
    TARGET_ESCAPES,
    EscapeTable,
    EscapeTableError,
    escape,
    replace_each,
    unescape,
)
from .parser import (
    parse_document_reference,
    parse_interwiki_reference,
    parse_uri_reference,
)
from .reference import ResourceReference, ResourceType, document_reference
from .registry import (
    DEFAULT_REGISTRY,
    ReferenceCodec,
    ReferenceTypeRegistry,
    UnknownResourceTypeError,
)
from .serializer import (
    serialize_document_reference,
    serialize_interwiki_reference,
    serialize_uri_reference,
)

__all__ = (
    "EscapeTable",
    "EscapeTableError",
    "EXTRA_ESCAPES",
    "TARGET_ESCAPES",
    "escape",
    "unescape",
    "replace_each",
    "ResourceReference",
    "ResourceType",
    "document_reference",
    "parse_document_reference",
    "parse_interwiki_reference",
    "parse_uri_reference",
    "serialize_document_reference",
    "serialize_interwiki_reference",
    "serialize_uri_reference",
    "ReferenceCodec",
    "ReferenceTypeRegistry",
    "UnknownResourceTypeError",
    "DEFAULT_REGISTRY",
)
