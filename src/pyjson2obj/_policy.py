"""Policies for members the mapper cannot fill."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class MappingPolicy:
    """What the mapper does when a member cannot be filled.

    Attributes:
        skip_unmatched: Leave a member with no matching JSON key at its
            default value. When False, raise UnmatchedMemberError.
        skip_unsupported: Leave a member at its default value when the
            matched node cannot fill its shape (array onto an object member,
            non-string mapping keys, JSON null onto a non-optional member).
            When False, raise UnsupportedShapeError.
    """

    skip_unmatched: bool = True
    skip_unsupported: bool = True


LENIENT_MAPPING = MappingPolicy()
STRICT_MAPPING = MappingPolicy(skip_unmatched=False, skip_unsupported=False)
