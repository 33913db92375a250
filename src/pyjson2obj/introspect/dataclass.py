"""Dataclass introspection."""

from __future__ import annotations

import dataclasses
from collections.abc import Callable
from typing import Any

from pyjson2obj._constants import ALIAS_METADATA_KEY
from pyjson2obj.introspect._typing import resolve_hints, resolve_type_ref
from pyjson2obj.schema import MemberDescriptor, TypeSchema


def introspect_dataclass(
    cls: type,
    *,
    factory: Callable[[], Any] | None = None,
) -> TypeSchema:
    """Build the schema of a dataclass.

    Every public field is a member. Frozen dataclasses reject assignment,
    so they have no members. A field's JSON key can be overridden with
    ``field(metadata={"json": "key"})``.

    Args:
        cls: The dataclass.
        factory: Optional zero-argument constructor. Defaults to ``cls``.

    Returns:
        The :class:`~pyjson2obj.schema.TypeSchema` of ``cls``.

    Raises:
        InvalidTargetTypeError: If a field annotation cannot be resolved.
    """
    if cls.__dataclass_params__.frozen:  # type: ignore[attr-defined]
        return TypeSchema(cls, [], factory)

    hints = resolve_hints(cls)
    members: list[MemberDescriptor] = []
    for f in dataclasses.fields(cls):
        if f.name.startswith("_"):
            continue
        members.append(
            MemberDescriptor(
                name=f.name,
                type_ref=resolve_type_ref(hints[f.name]),
                alias=f.metadata.get(ALIAS_METADATA_KEY, ""),
            )
        )
    return TypeSchema(cls, members, factory)
