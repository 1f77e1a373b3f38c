"""In-memory stand-in for a Redis server's scan family.

Pages entries the way the server does: the cursor walks a fixed ordering of
the collection, ``COUNT`` sets how many entries are examined per page, and
``MATCH`` / ``TYPE`` filter the examined entries after the page is picked,
so a page can come back empty while the cursor is still non-zero.
"""

from __future__ import annotations

from fnmatch import fnmatchcase
from typing import Any

import redis

DEFAULT_PAGE_SIZE = 2


def _b(value: str | bytes) -> bytes:
    return value.encode() if isinstance(value, str) else value


def _matches(item: bytes, match: str | None) -> bool:
    return match is None or fnmatchcase(item.decode(errors="replace"), match)


class FakeStore:
    """Scan-family commands over dicts, with call recording.

    Attributes:
        calls: ``(command, key, kwargs)`` for every page request.
        closed: How many times a client handed out for this store was closed.
        fail_on_page: Raise ``redis.ConnectionError`` on this page number (1-based).
        revisit: Repeat the last entry of the previous page at the start of
            the next one, like a rehash during a sweep.
    """

    def __init__(self, page_size: int = DEFAULT_PAGE_SIZE) -> None:
        self.page_size = page_size
        self.strings: dict[bytes, bytes] = {}
        self.sets: dict[bytes, set[bytes]] = {}
        self.zsets: dict[bytes, dict[bytes, float]] = {}
        self.hashes: dict[bytes, dict[bytes, bytes]] = {}
        self.calls: list[tuple[str, Any, dict[str, Any]]] = []
        self.closed = 0
        self.fail_on_page: int | None = None
        self.revisit = False

    # -------------------------------------------------------------------------
    # Data setup
    # -------------------------------------------------------------------------

    def set(self, key: str | bytes, value: str | bytes) -> None:
        self.strings[_b(key)] = _b(value)

    def sadd(self, key: str | bytes, *members: str | bytes) -> None:
        self.sets.setdefault(_b(key), set()).update(_b(m) for m in members)

    def zadd(self, key: str | bytes, mapping: dict[str | bytes, float]) -> None:
        self.zsets.setdefault(_b(key), {}).update({_b(m): float(s) for m, s in mapping.items()})

    def hset(self, key: str | bytes, mapping: dict[str | bytes, str | bytes]) -> None:
        self.hashes.setdefault(_b(key), {}).update({_b(f): _b(v) for f, v in mapping.items()})

    def type_of(self, key: bytes) -> str:
        if key in self.strings:
            return "string"
        if key in self.sets:
            return "set"
        if key in self.zsets:
            return "zset"
        if key in self.hashes:
            return "hash"
        return "none"

    # -------------------------------------------------------------------------
    # Paging
    # -------------------------------------------------------------------------

    def _record(self, command: str, key: Any, **kwargs: Any) -> None:
        self.calls.append((command, key, kwargs))
        if self.fail_on_page is not None and len(self.calls) >= self.fail_on_page:
            raise redis.ConnectionError(f"connection lost during {command}")

    def _page(self, entries: list[Any], cursor: int, count: int | None) -> tuple[int, list[Any]]:
        size = count or self.page_size
        start = int(cursor)
        page = entries[start : start + size]
        if self.revisit and start > 0:
            page = [entries[start - 1], *page]
        next_cursor = start + size
        return (next_cursor if next_cursor < len(entries) else 0), page

    def scan(self, cursor: int = 0, match: str | None = None, count: int | None = None, _type: str | None = None):
        self._record("scan", None, cursor=cursor, match=match, count=count, _type=_type)
        keys = sorted([*self.strings, *self.sets, *self.zsets, *self.hashes])
        next_cursor, page = self._page(keys, cursor, count)
        return next_cursor, [
            k for k in page if _matches(k, match) and (_type is None or self.type_of(k) == _type)
        ]

    def sscan(self, name: bytes, cursor: int = 0, match: str | None = None, count: int | None = None):
        self._record("sscan", name, cursor=cursor, match=match, count=count)
        members = sorted(self.sets.get(_b(name), set()))
        next_cursor, page = self._page(members, cursor, count)
        return next_cursor, [m for m in page if _matches(m, match)]

    def zscan(self, name: bytes, cursor: int = 0, match: str | None = None, count: int | None = None):
        self._record("zscan", name, cursor=cursor, match=match, count=count)
        items = sorted(self.zsets.get(_b(name), {}).items())
        next_cursor, page = self._page(items, cursor, count)
        return next_cursor, [(m, s) for m, s in page if _matches(m, match)]

    def hscan(self, name: bytes, cursor: int = 0, match: str | None = None, count: int | None = None):
        self._record("hscan", name, cursor=cursor, match=match, count=count)
        items = sorted(self.hashes.get(_b(name), {}).items())
        next_cursor, page = self._page(items, cursor, count)
        return next_cursor, {f: v for f, v in page if _matches(f, match)}

    def close(self) -> None:
        self.closed += 1

    @property
    def commands(self) -> list[str]:
        return [command for command, _, _ in self.calls]


class AsyncFakeStore:
    """Awaitable view over a FakeStore, shaped like ``redis.asyncio.Redis``."""

    def __init__(self, store: FakeStore) -> None:
        self._store = store

    async def scan(self, *args: Any, **kwargs: Any):
        return self._store.scan(*args, **kwargs)

    async def sscan(self, *args: Any, **kwargs: Any):
        return self._store.sscan(*args, **kwargs)

    async def zscan(self, *args: Any, **kwargs: Any):
        return self._store.zscan(*args, **kwargs)

    async def hscan(self, *args: Any, **kwargs: Any):
        return self._store.hscan(*args, **kwargs)

    async def aclose(self) -> None:
        self._store.close()
