"""Per-type schema registration and cache."""

from __future__ import annotations

import inspect
import logging
import threading
from collections.abc import Callable
from typing import Any

from pyjson2obj._errors import ERR_MSG_INVALID_TARGET, InvalidTargetTypeError
from pyjson2obj.introspect import introspect
from pyjson2obj.schema import MemberDescriptor, TypeSchema

logger = logging.getLogger(__name__)


def _check_default_constructible(cls: type) -> None:
    try:
        signature = inspect.signature(cls)
    except (TypeError, ValueError):
        # No introspectable signature; construction errors surface at create().
        return
    required = [
        p.name
        for p in signature.parameters.values()
        if p.default is inspect.Parameter.empty
        and p.kind not in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
    ]
    if required:
        raise InvalidTargetTypeError(
            ERR_MSG_INVALID_TARGET,
            f"{cls.__qualname__} requires constructor arguments {required}; "
            f"register it with a factory",
        )


class SchemaRegistry:
    """Cache of target type schemas.

    Schemas are built once per type, on registration or on first use, and
    never change afterwards. The cache is safe to share between threads.
    """

    def __init__(self) -> None:
        self._schemas: dict[type, TypeSchema] = {}
        self._lock = threading.Lock()

    def register(
        self,
        cls: type,
        *,
        factory: Callable[[], Any] | None = None,
        members: list[MemberDescriptor] | None = None,
    ) -> TypeSchema:
        """Register a target type, replacing any cached schema.

        Args:
            cls: The target type.
            factory: Zero-argument constructor. Required when ``cls`` cannot
                be called without arguments.
            members: Explicit member table. Introspected from ``cls`` when
                omitted.

        Returns:
            The registered :class:`~pyjson2obj.schema.TypeSchema`.

        Raises:
            InvalidTargetTypeError: If no factory is given and ``cls`` needs
                constructor arguments, or its annotations cannot be resolved.
        """
        if factory is None:
            _check_default_constructible(cls)
        if members is None:
            schema = introspect(cls, factory=factory)
        else:
            schema = TypeSchema(cls, members, factory)
        with self._lock:
            self._schemas[cls] = schema
        logger.debug("registered %r", schema)
        return schema

    def get(self, cls: type) -> TypeSchema:
        """Return the schema of ``cls``, introspecting it on first use.

        Raises:
            InvalidTargetTypeError: If ``cls`` cannot be introspected or
                default-constructed.
        """
        schema = self._schemas.get(cls)
        if schema is not None:
            return schema
        _check_default_constructible(cls)
        schema = introspect(cls)
        with self._lock:
            schema = self._schemas.setdefault(cls, schema)
        logger.debug("introspected %r", schema)
        return schema

    def __contains__(self, cls: object) -> bool:
        return cls in self._schemas

    def clear(self) -> None:
        with self._lock:
            self._schemas.clear()


default_registry = SchemaRegistry()


def register(
    cls: type,
    *,
    factory: Callable[[], Any] | None = None,
    members: list[MemberDescriptor] | None = None,
) -> TypeSchema:
    """Register a target type in the default registry.

    See :meth:`SchemaRegistry.register`.
    """
    return default_registry.register(cls, factory=factory, members=members)
