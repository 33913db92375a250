"""Scalar coercion from JSON node text to member values."""

from __future__ import annotations

import decimal
import enum
import re
import uuid
from collections.abc import Callable
from typing import Any

from pyjson2obj._dates import DateFormat, parse_json_date
from pyjson2obj._errors import ERR_MSG_COERCION_FAILED, TypeCoercionError
from pyjson2obj.node import JsonScalar
from pyjson2obj.schema import Kind, TypeRef

_INT_RE = re.compile(r"^[+-]?\d+$")
_FLOAT_RE = re.compile(
    r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$"
    r"|^[+-]?(?:nan|inf|infinity)$",
    re.IGNORECASE,
)
_DECIMAL_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$")


def _coercion_error(text: str, type_ref: TypeRef, cause: Exception | None = None) -> TypeCoercionError:
    return TypeCoercionError(
        ERR_MSG_COERCION_FAILED,
        f"cannot convert {text!r} to {type_ref.kind}",
        wrapped=cause,
    )


def _to_bool(text: str, type_ref: TypeRef) -> bool:
    lowered = text.strip().lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    raise _coercion_error(text, type_ref)


def _to_int(text: str, type_ref: TypeRef) -> int:
    stripped = text.strip()
    if not _INT_RE.match(stripped):
        raise _coercion_error(text, type_ref)
    return int(stripped)


def _to_float(text: str, type_ref: TypeRef) -> float:
    stripped = text.strip()
    if not _FLOAT_RE.match(stripped):
        raise _coercion_error(text, type_ref)
    return float(stripped)


def _to_decimal(text: str, type_ref: TypeRef) -> decimal.Decimal:
    stripped = text.strip()
    if not _DECIMAL_RE.match(stripped):
        raise _coercion_error(text, type_ref)
    return decimal.Decimal(stripped)


def _to_uuid(text: str, type_ref: TypeRef) -> uuid.UUID:
    try:
        return uuid.UUID(text.strip())
    except ValueError as e:
        raise _coercion_error(text, type_ref, e) from e


def _to_enum(text: str, type_ref: TypeRef) -> enum.Enum:
    enum_type: type[enum.Enum] = type_ref.type
    for candidate in enum_type:
        value = candidate.value
        if isinstance(value, str) and value == text:
            return candidate
        if isinstance(value, int) and not isinstance(value, bool) and _INT_RE.match(text.strip()):
            if value == int(text):
                return candidate
    if text in enum_type.__members__:
        return enum_type[text]
    lowered = text.lower()
    for name, candidate in enum_type.__members__.items():
        if name.lower() == lowered:
            return candidate
    raise _coercion_error(text, type_ref)


_SIMPLE_COERCIONS: dict[Kind, Callable[[str, TypeRef], Any]] = {
    Kind.BOOL: _to_bool,
    Kind.INT: _to_int,
    Kind.FLOAT: _to_float,
    Kind.DECIMAL: _to_decimal,
    Kind.UUID: _to_uuid,
    Kind.ENUM: _to_enum,
}


def coerce_scalar(
    node: JsonScalar,
    type_ref: TypeRef,
    date_format: DateFormat | str | None = None,
) -> Any:
    """Convert a non-null scalar node to the value of a scalar kind.

    Strings take the node's decoded text; every other kind parses the
    node's textual representation, so ``"42"`` and ``42`` both fill an
    ``int`` member.

    Raises:
        TypeCoercionError: If the text is not valid for the kind.
    """
    text = node.text
    if type_ref.kind is Kind.STRING:
        return text
    if type_ref.kind is Kind.DATETIME:
        return parse_json_date(text, date_format)
    if type_ref.kind is Kind.DATE:
        return parse_json_date(text, date_format).date()
    return _SIMPLE_COERCIONS[type_ref.kind](text, type_ref)
