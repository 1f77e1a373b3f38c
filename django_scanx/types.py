"""Type aliases and value types for django-scanx.

Compatible with redis-py and valkey-py type systems, defined locally
to avoid a runtime dependency on either library for type annotations.
"""

from __future__ import annotations

import functools
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Protocol, TypeAlias, runtime_checkable

# Key types - matches redis.typing.KeyT and valkey.typing.KeyT
KeyT: TypeAlias = bytes | str | memoryview

# Cursor token as returned by SCAN / SSCAN / ZSCAN / HSCAN
CursorT: TypeAlias = int


class EntryType(StrEnum):
    """Redis entry data types, valued with the names ``TYPE`` reports.

    ``NONE`` stands for "no type filter" and is never sent to the server.
    """

    STRING = "string"
    LIST = "list"
    SET = "set"
    ZSET = "zset"
    HASH = "hash"
    STREAM = "stream"
    NONE = "none"


class Axis(StrEnum):
    """Dimension along which a pattern is matched and a codec is bound."""

    KEY = "key"
    VALUE = "value"
    FIELD = "field"


class ScanKind(StrEnum):
    """The scan-family command driving a cursor."""

    KEYS = "scan"
    SET = "sscan"
    ZSET = "zscan"
    HASH = "hscan"


@runtime_checkable
class Codec(Protocol):
    """Axis codec: turns domain values into the store's bytes and back."""

    def dumps(self, obj: Any) -> bytes: ...

    def loads(self, data: bytes) -> Any: ...

    def can_render(self, type_: type) -> bool: ...


@functools.total_ordering
@dataclass(frozen=True, eq=True)
class ScoredMember:
    """A sorted-set member with its score.

    Ordered by ascending score; equal scores fall back to the member's own
    ordering, or to its ``repr`` when members don't compare.
    """

    member: Any
    score: float

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, ScoredMember):
            return NotImplemented
        if self.score != other.score:
            return self.score < other.score
        try:
            return bool(self.member < other.member)
        except TypeError:
            return repr(self.member) < repr(other.member)
