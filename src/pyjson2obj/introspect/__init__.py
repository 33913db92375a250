"""Type introspection for JSON-to-object mapping.

Derive member tables from dataclasses and annotated classes.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from pyjson2obj.introspect._typing import resolve_type_ref

if TYPE_CHECKING:
    from pyjson2obj.schema import TypeSchema

__all__ = [
    "introspect",
    "introspect_annotated",
    "introspect_dataclass",
    "resolve_type_ref",
]


def introspect(
    cls: type,
    *,
    factory: Callable[[], Any] | None = None,
) -> TypeSchema:
    """Build the schema of a target class.

    Dispatches to the dataclass or annotated-class introspection based on
    ``cls``.

    Args:
        cls: The target class.
        factory: Optional zero-argument constructor. Defaults to ``cls``.

    Returns:
        The :class:`~pyjson2obj.schema.TypeSchema` of ``cls``.

    Raises:
        InvalidTargetTypeError: If an annotation cannot be resolved.
    """
    if dataclasses.is_dataclass(cls):
        from pyjson2obj.introspect.dataclass import introspect_dataclass

        return introspect_dataclass(cls, factory=factory)

    from pyjson2obj.introspect.annotated import introspect_annotated

    return introspect_annotated(cls, factory=factory)


def __getattr__(name: str) -> Any:
    """Lazy re-exports of the per-style introspection functions."""
    if name == "introspect_dataclass":
        from pyjson2obj.introspect.dataclass import introspect_dataclass

        return introspect_dataclass
    if name == "introspect_annotated":
        from pyjson2obj.introspect.annotated import introspect_annotated

        return introspect_annotated
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
