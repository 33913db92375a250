"""Immutable JSON node tree consumed by the mapper."""

from __future__ import annotations

import enum
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Union


class ScalarKind(enum.StrEnum):
    STRING = "string"
    NUMBER = "number"
    BOOL = "bool"
    NULL = "null"


@dataclass(frozen=True)
class JsonScalar:
    """A string, number, bool or null value.

    ``text`` is the decoded value of a string, the exact source lexeme of a
    number, ``true``/``false`` for a bool and the empty string for null.
    """

    kind: ScalarKind
    text: str = ""

    @property
    def is_null(self) -> bool:
        return self.kind is ScalarKind.NULL

    def child(self, name: str) -> JsonNode | None:
        return None

    def children(self) -> tuple[JsonNode, ...]:
        return ()


@dataclass(frozen=True)
class JsonArray:
    """An ordered sequence of nodes."""

    items: tuple[JsonNode, ...] = ()

    @property
    def is_null(self) -> bool:
        return False

    @property
    def text(self) -> str:
        return "[" + ",".join(_render(item) for item in self.items) + "]"

    def child(self, name: str) -> JsonNode | None:
        return None

    def children(self) -> tuple[JsonNode, ...]:
        return self.items

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[JsonNode]:
        return iter(self.items)


@dataclass(frozen=True)
class JsonObject:
    """An ordered set of named nodes with O(1) lookup by name.

    Duplicate names are kept in ``members``; lookup returns the last one.
    """

    members: tuple[tuple[str, JsonNode], ...] = ()
    _index: dict[str, JsonNode] = field(
        init=False, repr=False, compare=False, hash=False
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "_index", dict(self.members))

    @property
    def is_null(self) -> bool:
        return False

    @property
    def text(self) -> str:
        return "{" + ",".join(
            f"{_quote(name)}:{_render(value)}" for name, value in self.members
        ) + "}"

    def child(self, name: str) -> JsonNode | None:
        return self._index.get(name)

    def children(self) -> tuple[JsonNode, ...]:
        return tuple(value for _, value in self.members)

    def items(self) -> tuple[tuple[str, JsonNode], ...]:
        return self.members

    def keys(self) -> list[str]:
        return [name for name, _ in self.members]

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def __len__(self) -> int:
        return len(self.members)


JsonNode = Union[JsonObject, JsonArray, JsonScalar]


def _quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _render(node: JsonNode) -> str:
    if isinstance(node, JsonScalar):
        if node.kind is ScalarKind.STRING:
            return _quote(node.text)
        if node.kind is ScalarKind.NULL:
            return "null"
    return node.text
