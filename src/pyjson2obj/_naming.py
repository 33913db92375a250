"""Naming-convention transforms used to match member names against JSON keys."""

from __future__ import annotations

import re

_PASCAL_RE = re.compile(r"(?:^|_)(.)")
_ACRONYM_BOUNDARY_RE = re.compile(r"([A-Z]+)([A-Z][a-z])")
_WORD_BOUNDARY_RE = re.compile(r"([a-z\d])([A-Z])")
_SEPARATOR_RE = re.compile(r"[-\s]")


def to_pascal_case(name: str) -> str:
    """``foo_bar`` -> ``FooBar``; already-pascal names are unchanged."""
    return _PASCAL_RE.sub(lambda m: m.group(1).upper(), name)


def to_camel_case(name: str) -> str:
    """``FooBar`` -> ``fooBar``, ``foo_bar`` -> ``fooBar``."""
    pascal = to_pascal_case(name)
    return pascal[:1].lower() + pascal[1:]


def to_lower_case(name: str) -> str:
    return name.lower()


def add_underscores(name: str) -> str:
    """Insert ``_`` at case transitions, preserving case.

    ``FooBar`` -> ``Foo_Bar``, ``HTMLParser`` -> ``HTML_Parser``,
    dashes and whitespace become underscores.
    """
    result = _ACRONYM_BOUNDARY_RE.sub(r"\1_\2", name)
    result = _WORD_BOUNDARY_RE.sub(r"\1_\2", result)
    return _SEPARATOR_RE.sub("_", result)


def candidate_names(name: str) -> list[str]:
    """JSON keys tried for a member, in precedence order, without repeats.

    Order: exact, camel-cased, lower-cased, underscored, underscored
    lower-cased, then pascal-cased.
    """
    underscored = add_underscores(name)
    ordered = [
        name,
        to_camel_case(name),
        to_lower_case(name),
        underscored,
        to_lower_case(underscored),
        to_pascal_case(name),
    ]
    return list(dict.fromkeys(ordered))
