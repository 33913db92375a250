"""Reduction of type annotations to TypeRefs."""

from __future__ import annotations

import collections
import collections.abc
import dataclasses
import datetime
import decimal
import enum
import types
import uuid
from typing import Annotated, Any, ClassVar, Union, get_args, get_origin, get_type_hints

from pyjson2obj._errors import ERR_MSG_INVALID_TARGET, InvalidTargetTypeError
from pyjson2obj.schema import Kind, TypeRef

_SCALAR_TYPES: dict[Any, Kind] = {
    bool: Kind.BOOL,
    int: Kind.INT,
    float: Kind.FLOAT,
    str: Kind.STRING,
    datetime.datetime: Kind.DATETIME,
    datetime.date: Kind.DATE,
    decimal.Decimal: Kind.DECIMAL,
    uuid.UUID: Kind.UUID,
}

_LIST_ORIGINS = {
    list,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
}

_DICT_ORIGINS = {
    dict,
    collections.OrderedDict,
    collections.abc.Mapping,
    collections.abc.MutableMapping,
}

_UNSUPPORTED = TypeRef(Kind.UNSUPPORTED)


def resolve_type_ref(annotation: Any) -> TypeRef:
    """Reduce a resolved annotation to a TypeRef."""
    origin = get_origin(annotation)

    if origin is Annotated:
        return resolve_type_ref(get_args(annotation)[0])

    if origin is Union or origin is types.UnionType:
        args = get_args(annotation)
        non_none = [a for a in args if a is not type(None)]
        if len(non_none) == 1 and len(non_none) < len(args):
            return dataclasses.replace(resolve_type_ref(non_none[0]), optional=True)
        return TypeRef(Kind.UNSUPPORTED, annotation)

    if origin in _LIST_ORIGINS or annotation is list:
        args = get_args(annotation)
        element = resolve_type_ref(args[0]) if args else _UNSUPPORTED
        return TypeRef(Kind.LIST, list, (element,))

    if origin in _DICT_ORIGINS or annotation in (dict, collections.OrderedDict):
        args = get_args(annotation)
        if len(args) == 2:
            key, value = resolve_type_ref(args[0]), resolve_type_ref(args[1])
        else:
            key, value = _UNSUPPORTED, _UNSUPPORTED
        container = collections.OrderedDict if collections.OrderedDict in (origin, annotation) else dict
        return TypeRef(Kind.DICT, container, (key, value))

    if origin is not None:
        # tuple[...], set[...], Literal[...] and other generic forms
        return TypeRef(Kind.UNSUPPORTED, annotation)

    kind = _SCALAR_TYPES.get(annotation)
    if kind is not None:
        return TypeRef(kind, annotation)

    if annotation is Any or annotation is object:
        return TypeRef(Kind.UNSUPPORTED, annotation)

    if isinstance(annotation, type):
        if issubclass(annotation, enum.Enum):
            return TypeRef(Kind.ENUM, annotation)
        return TypeRef(Kind.OBJECT, annotation)

    return TypeRef(Kind.UNSUPPORTED, annotation)


def resolve_hints(obj: Any) -> dict[str, Any]:
    """Resolve the annotations of a class or function.

    Raises:
        InvalidTargetTypeError: If an annotation cannot be evaluated.
    """
    try:
        return get_type_hints(obj, include_extras=True)
    except (NameError, TypeError) as e:
        raise InvalidTargetTypeError(
            ERR_MSG_INVALID_TARGET,
            f"cannot resolve annotations of {obj!r}: {e}",
            wrapped=e,
        ) from e


def is_class_var(annotation: Any) -> bool:
    return annotation is ClassVar or get_origin(annotation) is ClassVar
