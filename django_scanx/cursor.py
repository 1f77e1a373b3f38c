"""Cursor resources for the scan command family.

A cursor wraps one full sweep of ``SCAN``, ``SSCAN``, ``ZSCAN`` or ``HSCAN``.
It acquires its client on the first page request and gives it back in
``close()``. Use it as a context manager so the release happens on every
exit path, including transport errors and task cancellation.

The sweep carries the store's guarantees and nothing stronger: an entry
present for the whole sweep is returned at least once, entries added or
removed meanwhile may or may not show up, and the same entry may appear on
several pages.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from django_scanx.exceptions import _main_exceptions
from django_scanx.types import ScanKind

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Callable, Iterator

    from django_scanx.options import ScanOptions
    from django_scanx.types import CursorT, KeyT

logger = logging.getLogger(__name__)

# Cursor token that starts a sweep and signals its end
CURSOR_START: CursorT = 0


def _normalize_page(kind: ScanKind, items: Any) -> list:
    """Turn a raw page into a list; hash pages become (field, value) pairs."""
    if kind is ScanKind.HASH:
        return list(items.items()) if hasattr(items, "items") else list(items)
    return list(items)


class _BaseCursor:
    def __init__(
        self,
        client_factory: Callable[[], Any],
        kind: ScanKind,
        options: ScanOptions,
        key: KeyT | None = None,
        itersize: int | None = None,
    ) -> None:
        self._client_factory = client_factory
        self._client: Any = None
        self.kind = ScanKind(kind)
        self.key = key
        self.options = options
        self.count = options.count if options.count is not None else itersize
        self.opened = False
        self.released = False
        self.pages_fetched = 0

    def _command_args(self, cursor: CursorT) -> tuple[tuple, dict[str, Any]]:
        kwargs: dict[str, Any] = {"cursor": cursor, "match": self.options.pattern, "count": self.count}
        if self.kind is ScanKind.KEYS:
            # TYPE is a SCAN-only argument
            kwargs["_type"] = self.options.type_filter
            return (), kwargs
        return (self.key,), kwargs

    def _acquire(self) -> Any:
        self._client = self._client_factory()
        self.opened = True
        logger.debug("Opened %s cursor (key=%r, match=%r)", self.kind, self.key, self.options.pattern)
        return self._client

    def _log_release(self, exc: BaseException | None) -> None:
        if isinstance(exc, _main_exceptions):
            logger.warning(
                "%s sweep interrupted after %d pages, releasing cursor: %s",
                self.kind,
                self.pages_fetched,
                exc,
            )
        else:
            logger.debug("Released %s cursor after %d pages", self.kind, self.pages_fetched)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.kind} key={self.key!r} match={self.options.pattern!r}>"


class ScanCursor(_BaseCursor):
    """Blocking cursor over one scan-family sweep."""

    def pages(self) -> Iterator[list]:
        """Yield pages until the server hands back the start cursor."""
        client = self._client if self.opened else self._acquire()
        command = getattr(client, str(self.kind))
        cursor = CURSOR_START
        while True:
            args, kwargs = self._command_args(cursor)
            cursor, items = command(*args, **kwargs)
            self.pages_fetched += 1
            yield _normalize_page(self.kind, items)
            if int(cursor) == CURSOR_START:
                return

    def close(self, exc: BaseException | None = None) -> None:
        if not self.opened or self.released:
            return
        self.released = True
        self._log_release(exc)
        client, self._client = self._client, None
        client.close()

    def __enter__(self) -> ScanCursor:
        return self

    def __exit__(self, exc_type: Any, exc: BaseException | None, tb: Any) -> None:
        self.close(exc)


class AsyncScanCursor(_BaseCursor):
    """Awaitable cursor over one scan-family sweep."""

    async def pages(self) -> AsyncIterator[list]:
        """Yield pages until the server hands back the start cursor."""
        client = self._client if self.opened else self._acquire()
        command = getattr(client, str(self.kind))
        cursor = CURSOR_START
        while True:
            args, kwargs = self._command_args(cursor)
            cursor, items = await command(*args, **kwargs)
            self.pages_fetched += 1
            yield _normalize_page(self.kind, items)
            if int(cursor) == CURSOR_START:
                return

    async def aclose(self, exc: BaseException | None = None) -> None:
        if not self.opened or self.released:
            return
        self.released = True
        self._log_release(exc)
        client, self._client = self._client, None
        await client.aclose()

    async def __aenter__(self) -> AsyncScanCursor:
        return self

    async def __aexit__(self, exc_type: Any, exc: BaseException | None, tb: Any) -> None:
        await self.aclose(exc)
