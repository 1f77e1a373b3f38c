"""Transport clients for Redis-compatible backends.

Architecture:
- KeyValueScanClient: Base class with all logic, library-agnostic
- RedisScanClient: Sets class attributes for redis-py
- ValkeyScanClient: Sets class attributes for valkey-py

The transport owns server URLs and connection pools. Pools are shared by
every scan issued through the client; cursor state is never shared and
lives in the ScanCursor opened for a single call.

Internal attributes:
- _lib: The library module (redis or valkey)
- _servers: List of server URLs (first is the write server)
- _pools: Dict of connection pools by server index
- _async_pools: Per event loop dict of async pools by server index
- _client_class / _pool_class: Sync client and pool classes
- _async_client_class / _async_pool_class: Async client and pool classes
"""

from __future__ import annotations

import asyncio
import logging
import random
import weakref
from typing import TYPE_CHECKING, Any

from django.utils.module_loading import import_string

from django_scanx.cursor import AsyncScanCursor, ScanCursor

if TYPE_CHECKING:
    from django_scanx.options import ScanOptions
    from django_scanx.types import KeyT, ScanKind

# Try to import redis-py and/or valkey-py
_REDIS_AVAILABLE = False
_VALKEY_AVAILABLE = False

try:
    import redis

    _REDIS_AVAILABLE = True
except ImportError:
    redis = None  # type: ignore[assignment]

try:
    import valkey

    _VALKEY_AVAILABLE = True
except ImportError:
    valkey = None  # type: ignore[assignment]

logger = logging.getLogger(__name__)


# =============================================================================
# KeyValueScanClient - base class (library-agnostic)
# =============================================================================


class KeyValueScanClient:
    """Base transport with configurable library.

    Subclasses must set:
    - _lib: The library module (e.g., valkey or redis)
    - _client_class: The client class (e.g., valkey.Valkey)
    - _pool_class: The connection pool class
    """

    # Class attributes - subclasses override these
    _lib: Any = None
    _client_class: type | None = None
    _pool_class: type | None = None
    _async_client_class: type | None = None
    _async_pool_class: type | None = None

    # Default COUNT hint when ScanOptions carry none
    _default_scan_itersize: int = 100

    # Options that shouldn't be passed to the connection pool
    _CLIENT_ONLY_OPTIONS = frozenset(
        {
            "key_codec",
            "value_codec",
            "field_codec",
            "field_value_codec",
            "itersize",
            "close_connection",
        }
    )

    def __init__(
        self,
        servers: list[str],
        pool_class: str | type | None = None,
        parser_class: str | type | None = None,
        async_pool_class: str | type | None = None,
        **options: Any,
    ) -> None:
        """Initialize the transport.

        Args:
            servers: List of server URLs
            pool_class: Connection pool class or import path
            parser_class: Parser class or import path
            async_pool_class: Async connection pool class or import path
            **options: Additional options passed to connection pool
        """
        self._servers = servers
        self._pools: dict[int, Any] = {}

        # WeakKeyDictionary drops pools of event loops that were garbage collected
        self._async_pools: weakref.WeakKeyDictionary[asyncio.AbstractEventLoop, dict[int, Any]] = (
            weakref.WeakKeyDictionary()
        )

        if isinstance(pool_class, str):
            pool_class = import_string(pool_class)
        self._pool_class = pool_class or self.__class__._pool_class  # type: ignore[assignment]

        if isinstance(async_pool_class, str):
            async_pool_class = import_string(async_pool_class)
        self._async_pool_class = async_pool_class or self.__class__._async_pool_class  # type: ignore[assignment]

        if isinstance(parser_class, str):
            parser_class = import_string(parser_class)
        if parser_class is None and self._lib is not None:
            parser_class = self._lib.connection.DefaultParser

        self._pool_options: dict[str, Any] = {}
        if parser_class is not None:
            self._pool_options["parser_class"] = parser_class
        for key, value in options.items():
            if key not in self._CLIENT_ONLY_OPTIONS:
                self._pool_options[key] = value

        self._options = options
        self._itersize = options.get("itersize") or self._default_scan_itersize

    @property
    def itersize(self) -> int:
        return self._itersize

    # =========================================================================
    # Connection Pool Management
    # =========================================================================

    def _get_connection_pool_index(self, *, write: bool) -> int:
        """Get the pool index for read/write operations."""
        # Write to first server, read from any replica
        if write or len(self._servers) == 1:
            return 0
        return random.randint(1, len(self._servers) - 1)  # noqa: S311

    def _get_connection_pool(self, *, write: bool) -> Any:
        index = self._get_connection_pool_index(write=write)
        if index not in self._pools:
            assert self._pool_class is not None, "Subclasses must set _pool_class"  # noqa: S101
            self._pools[index] = self._pool_class.from_url(  # type: ignore[attr-defined]
                self._servers[index],
                **self._pool_options,
            )
        return self._pools[index]

    def get_client(self, key: KeyT | None = None, *, write: bool = False) -> Any:
        """Get a client bound to the shared pool.

        Args:
            key: Optional key (for sharding implementations)
            write: Whether this is a write operation
        """
        pool = self._get_connection_pool(write=write)
        assert self._client_class is not None, "Subclasses must set _client_class"  # noqa: S101
        return self._client_class(connection_pool=pool)

    def _get_async_connection_pool(self, *, write: bool) -> Any:
        """Get an async connection pool for the running event loop.

        Raises:
            RuntimeError: If no event loop is running or async pool class is not set
        """
        loop = asyncio.get_running_loop()
        index = self._get_connection_pool_index(write=write)

        if loop in self._async_pools and index in self._async_pools[loop]:
            return self._async_pools[loop][index]

        if self._async_pool_class is None:
            msg = "Async scans require _async_pool_class to be set. Use RedisScanClient or ValkeyScanClient."
            raise RuntimeError(msg)

        # parser_class is sync-specific
        async_pool_options = {k: v for k, v in self._pool_options.items() if k != "parser_class"}
        pool = self._async_pool_class.from_url(  # type: ignore[attr-defined]
            self._servers[index],
            **async_pool_options,
        )
        self._async_pools.setdefault(loop, {})[index] = pool
        return pool

    def get_async_client(self, key: KeyT | None = None, *, write: bool = False) -> Any:
        """Get an async client for the running event loop.

        Raises:
            RuntimeError: If no event loop is running or async client class is not set
        """
        pool = self._get_async_connection_pool(write=write)
        if self._async_client_class is None:
            msg = "Async scans require _async_client_class to be set. Use RedisScanClient or ValkeyScanClient."
            raise RuntimeError(msg)
        return self._async_client_class(connection_pool=pool)

    # =========================================================================
    # Cursors
    # =========================================================================

    def open_cursor(self, kind: ScanKind, options: ScanOptions, key: KeyT | None = None) -> ScanCursor:
        """Create a cursor for one sweep; the client is acquired on the first page."""
        return ScanCursor(
            lambda: self.get_client(key, write=False),
            kind,
            options,
            key=key,
            itersize=self._itersize,
        )

    def aopen_cursor(self, kind: ScanKind, options: ScanOptions, key: KeyT | None = None) -> AsyncScanCursor:
        return AsyncScanCursor(
            lambda: self.get_async_client(key, write=False),
            kind,
            options,
            key=key,
            itersize=self._itersize,
        )

    def close(self, **kwargs: Any) -> None:
        """Disconnect pools if configured."""
        if self._options.get("close_connection", False):
            for pool in self._pools.values():
                pool.disconnect()
            self._pools.clear()
            self._async_pools.clear()

    async def aclose(self, **kwargs: Any) -> None:
        """Disconnect async pools for the running event loop."""
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return

        pool_dict = self._async_pools.pop(loop, None)
        if pool_dict is not None:
            for pool in pool_dict.values():
                await pool.disconnect()


# =============================================================================
# RedisScanClient - concrete implementation for redis-py
# =============================================================================

if _REDIS_AVAILABLE:
    from redis.asyncio import ConnectionPool as RedisAsyncConnectionPool
    from redis.asyncio import Redis as RedisAsyncClient

    class RedisScanClient(KeyValueScanClient):
        """Scan transport using redis-py."""

        _lib = redis
        _client_class = redis.Redis
        _pool_class = redis.ConnectionPool
        _async_client_class = RedisAsyncClient
        _async_pool_class = RedisAsyncConnectionPool

else:

    class RedisScanClient(KeyValueScanClient):  # type: ignore[no-redef]
        """Scan transport (requires redis-py)."""

        def __init__(self, *args: Any, **kwargs: Any) -> None:
            msg = "RedisScanClient requires redis-py. Install with: pip install redis"
            raise ImportError(msg)


# =============================================================================
# ValkeyScanClient - concrete implementation for valkey-py
# =============================================================================

if _VALKEY_AVAILABLE:
    from valkey.asyncio import ConnectionPool as ValkeyAsyncConnectionPool
    from valkey.asyncio import Valkey as ValkeyAsyncClient

    class ValkeyScanClient(KeyValueScanClient):
        """Scan transport using valkey-py."""

        _lib = valkey
        _client_class = valkey.Valkey
        _pool_class = valkey.ConnectionPool
        _async_client_class = ValkeyAsyncClient
        _async_pool_class = ValkeyAsyncConnectionPool

else:

    class ValkeyScanClient(KeyValueScanClient):  # type: ignore[no-redef]
        """Scan transport (requires valkey-py)."""

        def __init__(self, *args: Any, **kwargs: Any) -> None:
            raise ImportError("ValkeyScanClient requires valkey-py. Install with: pip install valkey")


__all__ = [
    "_REDIS_AVAILABLE",
    "_VALKEY_AVAILABLE",
    "KeyValueScanClient",
    "RedisScanClient",
    "ValkeyScanClient",
]
