"""Drive cursors to exhaustion and materialize their pages.

Each collector owns the cursor for the duration of the sweep and releases
it on the way out, whether the sweep finished, the store raised, or the
calling task was cancelled. Results are built in full; there is no
partial result on failure.
"""

from __future__ import annotations

from contextlib import aclosing, closing
from typing import TYPE_CHECKING, Any

from django_scanx.exceptions import CodecError
from django_scanx.types import ScoredMember

if TYPE_CHECKING:
    from collections.abc import Callable

    from django_scanx.cursor import AsyncScanCursor, ScanCursor

# Alias builtin set type to avoid shadowing in annotations
_Set = set


def _unhashable(value: Any, e: TypeError) -> CodecError:
    return CodecError(f"Decoded {type(value).__name__} {value!r} cannot be collected: {e}")


def _add(result: _Set[Any], value: Any) -> None:
    try:
        result.add(value)
    except TypeError as e:
        raise _unhashable(value, e) from e


def _put(result: dict[Any, Any], field: Any, value: Any) -> None:
    try:
        result[field] = value
    except TypeError as e:
        raise _unhashable(field, e) from e


def collect_set(cursor: ScanCursor, decode: Callable[[Any], Any]) -> _Set[Any]:
    """Keys or set members; repeats across pages collapse."""
    result: _Set[Any] = _Set()
    with cursor, closing(cursor.pages()) as pages:
        for page in pages:
            for item in page:
                _add(result, decode(item))
    return result


def collect_sorted(cursor: ScanCursor, decode: Callable[[Any], Any]) -> list[ScoredMember]:
    """Sorted-set members ordered by score, then member."""
    members: dict[Any, ScoredMember] = {}
    with cursor, closing(cursor.pages()) as pages:
        for page in pages:
            for raw, score in page:
                members[raw] = ScoredMember(decode(raw), float(score))
    return sorted(members.values())


def collect_map(
    cursor: ScanCursor,
    decode_field: Callable[[Any], Any],
    decode_value: Callable[[Any], Any],
) -> dict[Any, Any]:
    """Hash fields; a field seen again overwrites the earlier value."""
    result: dict[Any, Any] = {}
    with cursor, closing(cursor.pages()) as pages:
        for page in pages:
            for field, value in page:
                _put(result, decode_field(field), decode_value(value))
    return result


async def acollect_set(cursor: AsyncScanCursor, decode: Callable[[Any], Any]) -> _Set[Any]:
    result: _Set[Any] = _Set()
    async with cursor, aclosing(cursor.pages()) as pages:
        async for page in pages:
            for item in page:
                _add(result, decode(item))
    return result


async def acollect_sorted(cursor: AsyncScanCursor, decode: Callable[[Any], Any]) -> list[ScoredMember]:
    members: dict[Any, ScoredMember] = {}
    async with cursor, aclosing(cursor.pages()) as pages:
        async for page in pages:
            for raw, score in page:
                members[raw] = ScoredMember(decode(raw), float(score))
    return sorted(members.values())


async def acollect_map(
    cursor: AsyncScanCursor,
    decode_field: Callable[[Any], Any],
    decode_value: Callable[[Any], Any],
) -> dict[Any, Any]:
    result: dict[Any, Any] = {}
    async with cursor, aclosing(cursor.pages()) as pages:
        async for page in pages:
            for field, value in page:
                _put(result, decode_field(field), decode_value(value))
    return result
