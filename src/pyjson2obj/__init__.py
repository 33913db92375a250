"""pyjson2obj - Map JSON documents onto typed Python objects."""

from __future__ import annotations

import logging
from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyjson2obj")
except PackageNotFoundError:  # running from a source tree without install
    __version__ = "0.0.0.dev0"

from dataclasses import dataclass, field
from typing import Any, TypeVar, overload

from pyjson2obj._dates import DateFormat, parse_json_date
from pyjson2obj._errors import (
    ERR_MSG_MISSING_ROOT,
    InvalidTargetTypeError,
    MappingError,
    MissingRootError,
    ParseError,
    TypeCoercionError,
    UnmatchedMemberError,
    UnsupportedShapeError,
)
from pyjson2obj._mapper import _SKIP, Mapper
from pyjson2obj._parser import parse
from pyjson2obj._policy import LENIENT_MAPPING, STRICT_MAPPING, MappingPolicy
from pyjson2obj._registry import SchemaRegistry, default_registry, register
from pyjson2obj.introspect import resolve_type_ref
from pyjson2obj.node import JsonArray, JsonNode, JsonObject, JsonScalar
from pyjson2obj.schema import Kind, MemberDescriptor, TypeRef, TypeSchema

__all__ = [
    "deserialize",
    "parse",
    "register",
    "JsonDeserializer",
    "DateFormat",
    "Mapper",
    "MappingPolicy",
    "LENIENT_MAPPING",
    "STRICT_MAPPING",
    "SchemaRegistry",
    "TypeSchema",
    "MemberDescriptor",
    "TypeRef",
    "Kind",
    "JsonNode",
    "JsonObject",
    "JsonArray",
    "JsonScalar",
    "MappingError",
    "ParseError",
    "MissingRootError",
    "TypeCoercionError",
    "UnmatchedMemberError",
    "UnsupportedShapeError",
    "InvalidTargetTypeError",
    "parse_json_date",
]

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

T = TypeVar("T")


def _select_root(document: JsonNode, root_element: str | None) -> JsonNode:
    if not root_element:
        return document
    root = document.child(root_element)
    if root is None:
        raise MissingRootError(
            ERR_MSG_MISSING_ROOT,
            f"root element {root_element!r} not found in document",
        )
    logger.debug("using root element %r", root_element)
    return root


@dataclass
class JsonDeserializer:
    """Reusable deserializer configuration.

    Attributes:
        root_element: Name of the child node used as the mapping root. When
            set and absent from the document, deserialization fails with
            MissingRootError.
        namespace: Accepted for callers that share configuration with other
            deserializers; not consulted by the mapping.
        date_format: Hint forwarded to date parsing. A DateFormat member or
            a ``strptime`` pattern.
        policy: What to do with unmatched members and unsupported shapes.
        registry: Schema registry. Defaults to the process-wide registry.
    """

    root_element: str | None = None
    namespace: str | None = None
    date_format: DateFormat | str | None = None
    policy: MappingPolicy = LENIENT_MAPPING
    registry: SchemaRegistry = field(default_factory=lambda: default_registry)

    @overload
    def deserialize(self, content: str | bytes, target_type: type[T]) -> T: ...

    @overload
    def deserialize(self, content: str | bytes, target_type: Any) -> Any: ...

    def deserialize(self, content: str | bytes, target_type: Any) -> Any:
        """Parse ``content`` and map it onto a new instance of ``target_type``.

        ``target_type`` is usually a class; generic aliases such as
        ``list[Item]`` or ``dict[str, Item]`` are converted directly from
        the root node.

        Raises:
            ParseError: If ``content`` is not well-formed JSON.
            MissingRootError: If ``root_element`` is set and absent.
            TypeCoercionError: If a scalar cannot be converted.
            UnmatchedMemberError: Under a strict policy.
            UnsupportedShapeError: Under a strict policy.
            InvalidTargetTypeError: If a target type cannot be introspected
                or default-constructed.
        """
        root = _select_root(parse(content), self.root_element)
        mapper = Mapper(self.registry, self.date_format, self.policy)

        type_ref = resolve_type_ref(target_type)
        if type_ref.kind is Kind.OBJECT:
            return mapper.create_and_map(target_type, root)

        value = mapper.convert(type_ref, root)
        if value is _SKIP:
            # Skipped root of a generic target: an empty container or None.
            return type_ref.type() if type_ref.kind in (Kind.LIST, Kind.DICT) else None
        return value


def deserialize(
    content: str | bytes,
    target_type: Any,
    *,
    root_element: str | None = None,
    namespace: str | None = None,
    date_format: DateFormat | str | None = None,
    policy: MappingPolicy = LENIENT_MAPPING,
    registry: SchemaRegistry | None = None,
) -> Any:
    """Deserialize a JSON document into a new instance of ``target_type``.

    Args:
        content: JSON document text (``str`` or UTF-8 ``bytes``).
        target_type: Class to instantiate and populate.
        root_element: Optional name of the child node used as mapping root.
        namespace: Reserved; accepted and ignored by the mapping.
        date_format: Date parsing hint. Defaults to ISO-8601.
        policy: Defaults to LENIENT_MAPPING (unmatched members and
            unsupported shapes are skipped silently).
        registry: Schema registry. Defaults to the process-wide registry.

    Returns:
        The populated instance.

    Raises:
        MappingError: If deserialization fails.
    """
    deserializer = JsonDeserializer(
        root_element=root_element,
        namespace=namespace,
        date_format=date_format,
        policy=policy,
        registry=registry or default_registry,
    )
    return deserializer.deserialize(content, target_type)
