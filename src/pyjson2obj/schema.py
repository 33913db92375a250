"""Schema types describing how a target type is populated."""

from __future__ import annotations

import enum
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from pyjson2obj._errors import ERR_MSG_INVALID_TARGET, InvalidTargetTypeError


class Kind(enum.StrEnum):
    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    STRING = "str"
    DATETIME = "datetime"
    DATE = "date"
    DECIMAL = "decimal"
    UUID = "uuid"
    ENUM = "enum"
    LIST = "list"
    DICT = "dict"
    OBJECT = "object"
    UNSUPPORTED = "unsupported"


SCALAR_KINDS = frozenset({
    Kind.BOOL,
    Kind.INT,
    Kind.FLOAT,
    Kind.STRING,
    Kind.DATETIME,
    Kind.DATE,
    Kind.DECIMAL,
    Kind.UUID,
    Kind.ENUM,
})

Setter = Callable[[Any, Any], None]
"""Assigns a value to a member of an instance."""


@dataclass(frozen=True)
class TypeRef:
    """A declared type reduced to its kind and type arguments.

    ``type`` is the concrete Python type: the element class for scalars and
    objects, the container class for lists and dicts. ``args`` holds the
    element ``TypeRef`` of a list or the key/value ``TypeRef`` pair of a dict.
    """

    kind: Kind
    type: Any = None
    args: tuple[TypeRef, ...] = ()
    optional: bool = False

    @property
    def is_scalar(self) -> bool:
        return self.kind in SCALAR_KINDS


def attribute_setter(name: str) -> Setter:
    """Setter closure assigning ``name`` with plain attribute assignment."""

    def _set(instance: Any, value: Any) -> None:
        setattr(instance, name, value)

    return _set


@dataclass(frozen=True)
class MemberDescriptor:
    """Schema for a single settable member."""

    name: str
    type_ref: TypeRef
    setter: Setter | None = field(default=None, compare=False, repr=False)
    alias: str = ""

    def __post_init__(self) -> None:
        if self.setter is None:
            object.__setattr__(self, "setter", attribute_setter(self.name))

    @property
    def json_name(self) -> str:
        return self.alias or self.name


class TypeSchema:
    """Member table and factory for one target type, with O(1) member lookup."""

    def __init__(
        self,
        target_type: type,
        members: list[MemberDescriptor],
        factory: Callable[[], Any] | None = None,
    ) -> None:
        self._target_type = target_type
        self._members = tuple(members)
        self._index: dict[str, MemberDescriptor] = {m.name: m for m in members}
        self._factory = factory or target_type

    @property
    def target_type(self) -> type:
        return self._target_type

    @property
    def members(self) -> list[MemberDescriptor]:
        return list(self._members)

    def find_member(self, name: str) -> MemberDescriptor | None:
        return self._index.get(name)

    def create(self) -> Any:
        """Construct a default instance of the target type.

        Raises:
            InvalidTargetTypeError: If the factory fails.
        """
        try:
            return self._factory()
        except (TypeError, ValueError) as e:
            raise InvalidTargetTypeError(
                ERR_MSG_INVALID_TARGET,
                f"cannot construct {self._target_type!r}: {e}",
                wrapped=e,
            ) from e

    def __len__(self) -> int:
        return len(self._members)

    def __repr__(self) -> str:
        return f"TypeSchema({self._target_type.__name__}, {len(self._members)} members)"
