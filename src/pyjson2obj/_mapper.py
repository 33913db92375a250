"""Core Mapper - populates target instances from a JSON node tree."""

from __future__ import annotations

import logging
from typing import Any

from pyjson2obj._coercion import coerce_scalar
from pyjson2obj._constants import ZERO_DATE, ZERO_DATETIME
from pyjson2obj._dates import DateFormat
from pyjson2obj._errors import (
    ERR_MSG_UNMATCHED_MEMBER,
    ERR_MSG_UNSUPPORTED_SHAPE,
    TypeCoercionError,
    UnmatchedMemberError,
    UnsupportedShapeError,
)
from pyjson2obj._naming import candidate_names
from pyjson2obj._policy import LENIENT_MAPPING, MappingPolicy
from pyjson2obj._registry import SchemaRegistry, default_registry
from pyjson2obj.node import JsonArray, JsonNode, JsonObject, JsonScalar
from pyjson2obj.schema import Kind, MemberDescriptor, TypeRef

logger = logging.getLogger(__name__)

_SKIP = object()
"""Returned by Mapper.convert when the policy leaves a value unassigned."""


def _join(path: str, name: str) -> str:
    return f"{path}.{name}" if path else name


class Mapper:
    """Recursively populates target instances from JSON nodes.

    Each member of the target type is bound to at most one child node, found
    by trying the member's candidate names in precedence order. The bound
    node is converted according to the member's kind and assigned through
    the member's setter.
    """

    def __init__(
        self,
        registry: SchemaRegistry | None = None,
        date_format: DateFormat | str | None = None,
        policy: MappingPolicy = LENIENT_MAPPING,
    ) -> None:
        self._registry = registry or default_registry
        self._date_format = date_format
        self._policy = policy

    def map(self, instance: Any, node: JsonNode, path: str = "") -> None:
        """Populate every member of ``instance`` that has a match in ``node``.

        Raises:
            TypeCoercionError: If a matched scalar cannot be converted.
            UnmatchedMemberError: If the policy does not skip unmatched members.
            UnsupportedShapeError: If the policy does not skip unsupported shapes.
        """
        schema = self._registry.get(type(instance))
        if not isinstance(node, JsonObject):
            self._unsupported(path or schema.target_type.__name__, "expected a JSON object")
            return

        for member in schema.members:
            member_path = _join(path, member.name)
            binding = self._resolve(member, node)
            if binding is None:
                if not self._policy.skip_unmatched:
                    raise UnmatchedMemberError(
                        ERR_MSG_UNMATCHED_MEMBER,
                        f"no JSON key matches member {member_path!r}",
                    )
                logger.debug("no JSON key for %s, keeping default", member_path)
                continue

            key, child = binding
            if key != member.json_name:
                logger.debug("bound %s to JSON key %r", member_path, key)
            value = self.convert(member.type_ref, child, member_path)
            if value is _SKIP:
                continue
            member.setter(instance, value)

    def create_and_map(self, cls: type, node: JsonNode, path: str = "") -> Any:
        """Construct a default instance of ``cls`` and populate it from ``node``."""
        instance = self._registry.get(cls).create()
        self.map(instance, node, path)
        return instance

    def convert(self, type_ref: TypeRef, node: JsonNode, path: str = "") -> Any:
        """Convert ``node`` to a value of the type described by ``type_ref``.

        Returns the module-level skip sentinel when the policy leaves the
        value unassigned.
        """
        if node.is_null:
            if type_ref.optional:
                return None
            if type_ref.kind is Kind.DATETIME:
                return ZERO_DATETIME
            if type_ref.kind is Kind.DATE:
                return ZERO_DATE
            return self._unsupported(path, f"null for non-optional {type_ref.kind}")

        if type_ref.is_scalar:
            if not isinstance(node, JsonScalar):
                return self._unsupported(path, f"composite value for {type_ref.kind}")
            try:
                return coerce_scalar(node, type_ref, self._date_format)
            except TypeCoercionError as e:
                raise TypeCoercionError(
                    e.user_message,
                    f"{path}: {e.internal()}",
                    wrapped=e.wrapped or e,
                ) from e

        if type_ref.kind is Kind.LIST:
            if not isinstance(node, JsonArray):
                return self._unsupported(path, "expected a JSON array")
            return self._convert_list(type_ref, node, path)

        if type_ref.kind is Kind.DICT:
            key_ref, _ = type_ref.args
            if key_ref.kind is not Kind.STRING:
                return self._unsupported(path, f"mapping keys of kind {key_ref.kind}")
            if not isinstance(node, JsonObject):
                return self._unsupported(path, "expected a JSON object")
            return self._convert_dict(type_ref, node, path)

        if type_ref.kind is Kind.OBJECT:
            if not isinstance(node, JsonObject):
                return self._unsupported(path, "expected a JSON object")
            return self.create_and_map(type_ref.type, node, path)

        return self._unsupported(path, f"unsupported member type {type_ref.type!r}")

    @staticmethod
    def _resolve(
        member: MemberDescriptor, node: JsonObject
    ) -> tuple[str, JsonNode] | None:
        for name in candidate_names(member.json_name):
            child = node.child(name)
            if child is not None:
                return name, child
        return None

    def _convert_list(self, type_ref: TypeRef, node: JsonArray, path: str) -> list[Any]:
        element_ref = type_ref.args[0]
        items: list[Any] = []
        for index, child in enumerate(node.children()):
            value = self.convert(element_ref, child, f"{path}[{index}]")
            if value is not _SKIP:
                items.append(value)
        return items

    def _convert_dict(self, type_ref: TypeRef, node: JsonObject, path: str) -> Any:
        _, value_ref = type_ref.args
        result = type_ref.type()
        for name, child in node.items():
            value = self.convert(value_ref, child, f"{path}[{name!r}]")
            if value is not _SKIP:
                result[name] = value
        return result

    def _unsupported(self, path: str, reason: str) -> Any:
        if not self._policy.skip_unsupported:
            raise UnsupportedShapeError(
                ERR_MSG_UNSUPPORTED_SHAPE,
                f"{path}: {reason}",
            )
        logger.debug("skipping %s: %s", path, reason)
        return _SKIP
