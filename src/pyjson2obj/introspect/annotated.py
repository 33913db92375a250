"""Introspection of plain classes through annotations and properties."""

from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import Any

from pyjson2obj.introspect._typing import is_class_var, resolve_hints, resolve_type_ref
from pyjson2obj.schema import MemberDescriptor, TypeSchema


def _settable_properties(cls: type) -> dict[str, property]:
    found: dict[str, property] = {}
    for klass in reversed(cls.__mro__):
        for name, attr in vars(klass).items():
            if isinstance(attr, property):
                found[name] = attr
            elif name in found:
                del found[name]
    return {name: prop for name, prop in found.items() if prop.fset is not None}


def introspect_annotated(
    cls: type,
    *,
    factory: Callable[[], Any] | None = None,
) -> TypeSchema:
    """Build the schema of a plain class.

    Members are the public class annotations (``ClassVar`` excluded) in
    declaration order, base classes first, followed by the public
    properties that have a setter and an annotated getter.

    Args:
        cls: The class.
        factory: Optional zero-argument constructor. Defaults to ``cls``.

    Returns:
        The :class:`~pyjson2obj.schema.TypeSchema` of ``cls``.

    Raises:
        InvalidTargetTypeError: If an annotation cannot be resolved.
    """
    hints = resolve_hints(cls)
    members: list[MemberDescriptor] = []

    for name, annotation in hints.items():
        if name.startswith("_") or is_class_var(annotation):
            continue
        if isinstance(inspect.getattr_static(cls, name, None), property):
            continue
        members.append(MemberDescriptor(name=name, type_ref=resolve_type_ref(annotation)))

    for name, prop in _settable_properties(cls).items():
        if name.startswith("_"):
            continue
        returns = resolve_hints(prop.fget).get("return")
        if returns is None:
            continue
        members.append(MemberDescriptor(name=name, type_ref=resolve_type_ref(returns)))

    return TypeSchema(cls, members, factory)
