"""Scan service: the public facade over the scan command family.

Every call is a self-contained sweep: options are built, checked against
the codec bound to the scanned axis, a cursor is opened, driven to the end
and released, and the materialized result is returned. Nothing is cached
between calls except the transport's connection pools.

Each entry kind comes in three call shapes::

    scanner.scan_keys()                          # everything
    scanner.scan_keys_by_prefix("user:")         # pattern from an intent
    scanner.scan_keys_by_options(ScanOptions(pattern="user:*", count=500))

Set, sorted-set and hash scans take the container key first. Every method
has an async twin prefixed with ``a`` (``ascan_keys``, ``ascan_hash``...).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from django_scanx import aggregator, patterns
from django_scanx.compat import create_codec
from django_scanx.exceptions import ScanValidationError
from django_scanx.guard import ensure_pattern_renderable
from django_scanx.options import ScanOptions
from django_scanx.patterns import PatternKind
from django_scanx.types import Axis, ScanKind

if TYPE_CHECKING:
    from django_scanx.client.default import KeyValueScanClient
    from django_scanx.types import EntryType, KeyT, ScoredMember

logger = logging.getLogger(__name__)

# Alias builtin set type to avoid shadowing in annotations
_Set = set

_AXES = {
    ScanKind.KEYS: Axis.KEY,
    ScanKind.SET: Axis.VALUE,
    ScanKind.ZSET: Axis.VALUE,
    ScanKind.HASH: Axis.FIELD,
}

# Sentinel for "this scan has no container key"
_NO_KEY: Any = object()


def _empty(kind: ScanKind) -> Any:
    if kind is ScanKind.ZSET:
        return []
    if kind is ScanKind.HASH:
        return {}
    return _Set()


class ScanService:
    """Progressive scans over keys, set members, sorted-set members and hash fields.

    Codecs are bound per axis and may be rebound at any time; the next call
    uses whatever is bound then.

    Attributes:
        transport: The KeyValueScanClient that owns the connection pools.
        key_codec: Decodes top-level keys and renders key patterns.
        value_codec: Decodes set and sorted-set members and renders member patterns.
        field_codec: Decodes hash fields and renders field patterns.
        field_value_codec: Decodes hash values.
    """

    def __init__(
        self,
        transport: KeyValueScanClient,
        key_codec: Any = None,
        value_codec: Any = None,
        field_codec: Any = None,
        field_value_codec: Any = None,
    ) -> None:
        self.transport = transport
        self.key_codec = create_codec(key_codec)
        self.value_codec = create_codec(value_codec)
        self.field_codec = create_codec(field_codec)
        self.field_value_codec = create_codec(field_value_codec)

    def codec_for(self, axis: Axis) -> Any:
        """The codec currently bound to ``axis``."""
        if axis is Axis.KEY:
            return self.key_codec
        if axis is Axis.VALUE:
            return self.value_codec
        return self.field_codec

    # =========================================================================
    # Shared plumbing
    # =========================================================================

    def _check_key(self, kind: ScanKind, key: Any) -> None:
        if kind is ScanKind.KEYS:
            return
        if key is None or (isinstance(key, (str, bytes)) and not key.strip()):
            raise ScanValidationError(f"{kind} requires a non-blank key, got {key!r}")

    def _prepare(self, kind: ScanKind, options: ScanOptions | None, key: Any = _NO_KEY) -> ScanOptions | None:
        """Validate and normalize options; None means "return empty without a round trip"."""
        self._check_key(kind, key)
        if options is None:
            raise ScanValidationError("options must not be None")
        if options.is_empty_page:
            logger.debug("Skipping %s: count hint %r is not positive", kind, options.count)
            return None
        if kind is not ScanKind.KEYS and options.entry_type is not None:
            logger.debug("Dropping entry type filter %r from %s", options.entry_type, kind)
            options = options.without_entry_type()
        ensure_pattern_renderable(self.codec_for(_AXES[kind]), options, _AXES[kind])
        return options

    def _intent_options(
        self,
        kind: ScanKind,
        pattern_kind: PatternKind,
        text: str | None,
        key: Any = _NO_KEY,
        entry_type: EntryType | None = None,
    ) -> ScanOptions | None:
        self._check_key(kind, key)
        pattern = patterns.build_pattern(pattern_kind, text)
        if pattern is None:
            logger.debug("Skipping %s: blank %s", kind, pattern_kind)
            return None
        return ScanOptions(pattern=pattern, entry_type=entry_type)

    def _collect(self, kind: ScanKind, options: ScanOptions, key: Any) -> Any:
        cursor = self.transport.open_cursor(kind, options, key=None if key is _NO_KEY else key)
        if kind is ScanKind.KEYS:
            return aggregator.collect_set(cursor, self.key_codec.loads)
        if kind is ScanKind.SET:
            return aggregator.collect_set(cursor, self.value_codec.loads)
        if kind is ScanKind.ZSET:
            return aggregator.collect_sorted(cursor, self.value_codec.loads)
        return aggregator.collect_map(cursor, self.field_codec.loads, self.field_value_codec.loads)

    async def _acollect(self, kind: ScanKind, options: ScanOptions, key: Any) -> Any:
        cursor = self.transport.aopen_cursor(kind, options, key=None if key is _NO_KEY else key)
        if kind is ScanKind.KEYS:
            return await aggregator.acollect_set(cursor, self.key_codec.loads)
        if kind is ScanKind.SET:
            return await aggregator.acollect_set(cursor, self.value_codec.loads)
        if kind is ScanKind.ZSET:
            return await aggregator.acollect_sorted(cursor, self.value_codec.loads)
        return await aggregator.acollect_map(cursor, self.field_codec.loads, self.field_value_codec.loads)

    def _scan(self, kind: ScanKind, options: ScanOptions | None, key: Any = _NO_KEY) -> Any:
        prepared = self._prepare(kind, options, key)
        if prepared is None:
            return _empty(kind)
        return self._collect(kind, prepared, key)

    async def _ascan(self, kind: ScanKind, options: ScanOptions | None, key: Any = _NO_KEY) -> Any:
        prepared = self._prepare(kind, options, key)
        if prepared is None:
            return _empty(kind)
        return await self._acollect(kind, prepared, key)

    def _scan_by(
        self,
        kind: ScanKind,
        pattern_kind: PatternKind,
        text: str | None,
        key: Any = _NO_KEY,
        entry_type: EntryType | None = None,
    ) -> Any:
        options = self._intent_options(kind, pattern_kind, text, key, entry_type)
        if options is None:
            return _empty(kind)
        return self._scan(kind, options, key)

    async def _ascan_by(
        self,
        kind: ScanKind,
        pattern_kind: PatternKind,
        text: str | None,
        key: Any = _NO_KEY,
        entry_type: EntryType | None = None,
    ) -> Any:
        options = self._intent_options(kind, pattern_kind, text, key, entry_type)
        if options is None:
            return _empty(kind)
        return await self._ascan(kind, options, key)

    # =========================================================================
    # Top-level keys
    # =========================================================================

    def scan_keys(self, entry_type: EntryType | None = None) -> _Set[Any]:
        """All keys, optionally only those of ``entry_type``."""
        return self._scan(ScanKind.KEYS, ScanOptions(entry_type=entry_type))

    def scan_keys_by_type(self, entry_type: EntryType | None) -> _Set[Any]:
        """Keys of ``entry_type``; empty when no type is given."""
        if entry_type is None:
            return _Set()
        return self.scan_keys(entry_type)

    def scan_keys_by_prefix(self, prefix: str | None, entry_type: EntryType | None = None) -> _Set[Any]:
        return self._scan_by(ScanKind.KEYS, PatternKind.PREFIX, prefix, entry_type=entry_type)

    def scan_keys_by_suffix(self, suffix: str | None, entry_type: EntryType | None = None) -> _Set[Any]:
        return self._scan_by(ScanKind.KEYS, PatternKind.SUFFIX, suffix, entry_type=entry_type)

    def scan_keys_by_keyword(self, keyword: str | None, entry_type: EntryType | None = None) -> _Set[Any]:
        return self._scan_by(ScanKind.KEYS, PatternKind.KEYWORD, keyword, entry_type=entry_type)

    def scan_keys_by_options(self, options: ScanOptions) -> _Set[Any]:
        return self._scan(ScanKind.KEYS, options)

    async def ascan_keys(self, entry_type: EntryType | None = None) -> _Set[Any]:
        return await self._ascan(ScanKind.KEYS, ScanOptions(entry_type=entry_type))

    async def ascan_keys_by_type(self, entry_type: EntryType | None) -> _Set[Any]:
        if entry_type is None:
            return _Set()
        return await self.ascan_keys(entry_type)

    async def ascan_keys_by_prefix(self, prefix: str | None, entry_type: EntryType | None = None) -> _Set[Any]:
        return await self._ascan_by(ScanKind.KEYS, PatternKind.PREFIX, prefix, entry_type=entry_type)

    async def ascan_keys_by_suffix(self, suffix: str | None, entry_type: EntryType | None = None) -> _Set[Any]:
        return await self._ascan_by(ScanKind.KEYS, PatternKind.SUFFIX, suffix, entry_type=entry_type)

    async def ascan_keys_by_keyword(self, keyword: str | None, entry_type: EntryType | None = None) -> _Set[Any]:
        return await self._ascan_by(ScanKind.KEYS, PatternKind.KEYWORD, keyword, entry_type=entry_type)

    async def ascan_keys_by_options(self, options: ScanOptions) -> _Set[Any]:
        return await self._ascan(ScanKind.KEYS, options)

    # =========================================================================
    # Set members
    # =========================================================================

    def scan_set(self, key: KeyT) -> _Set[Any]:
        """All members of the set at ``key``."""
        return self._scan(ScanKind.SET, ScanOptions.NONE, key)

    def scan_set_by_prefix(self, key: KeyT, prefix: str | None) -> _Set[Any]:
        return self._scan_by(ScanKind.SET, PatternKind.PREFIX, prefix, key)

    def scan_set_by_suffix(self, key: KeyT, suffix: str | None) -> _Set[Any]:
        return self._scan_by(ScanKind.SET, PatternKind.SUFFIX, suffix, key)

    def scan_set_by_keyword(self, key: KeyT, keyword: str | None) -> _Set[Any]:
        return self._scan_by(ScanKind.SET, PatternKind.KEYWORD, keyword, key)

    def scan_set_by_options(self, key: KeyT, options: ScanOptions) -> _Set[Any]:
        return self._scan(ScanKind.SET, options, key)

    async def ascan_set(self, key: KeyT) -> _Set[Any]:
        return await self._ascan(ScanKind.SET, ScanOptions.NONE, key)

    async def ascan_set_by_prefix(self, key: KeyT, prefix: str | None) -> _Set[Any]:
        return await self._ascan_by(ScanKind.SET, PatternKind.PREFIX, prefix, key)

    async def ascan_set_by_suffix(self, key: KeyT, suffix: str | None) -> _Set[Any]:
        return await self._ascan_by(ScanKind.SET, PatternKind.SUFFIX, suffix, key)

    async def ascan_set_by_keyword(self, key: KeyT, keyword: str | None) -> _Set[Any]:
        return await self._ascan_by(ScanKind.SET, PatternKind.KEYWORD, keyword, key)

    async def ascan_set_by_options(self, key: KeyT, options: ScanOptions) -> _Set[Any]:
        return await self._ascan(ScanKind.SET, options, key)

    # =========================================================================
    # Sorted-set members
    # =========================================================================

    def scan_zset(self, key: KeyT) -> list[ScoredMember]:
        """All members of the sorted set at ``key``, ascending by score then member."""
        return self._scan(ScanKind.ZSET, ScanOptions.NONE, key)

    def scan_zset_by_prefix(self, key: KeyT, prefix: str | None) -> list[ScoredMember]:
        return self._scan_by(ScanKind.ZSET, PatternKind.PREFIX, prefix, key)

    def scan_zset_by_suffix(self, key: KeyT, suffix: str | None) -> list[ScoredMember]:
        return self._scan_by(ScanKind.ZSET, PatternKind.SUFFIX, suffix, key)

    def scan_zset_by_keyword(self, key: KeyT, keyword: str | None) -> list[ScoredMember]:
        return self._scan_by(ScanKind.ZSET, PatternKind.KEYWORD, keyword, key)

    def scan_zset_by_options(self, key: KeyT, options: ScanOptions) -> list[ScoredMember]:
        return self._scan(ScanKind.ZSET, options, key)

    async def ascan_zset(self, key: KeyT) -> list[ScoredMember]:
        return await self._ascan(ScanKind.ZSET, ScanOptions.NONE, key)

    async def ascan_zset_by_prefix(self, key: KeyT, prefix: str | None) -> list[ScoredMember]:
        return await self._ascan_by(ScanKind.ZSET, PatternKind.PREFIX, prefix, key)

    async def ascan_zset_by_suffix(self, key: KeyT, suffix: str | None) -> list[ScoredMember]:
        return await self._ascan_by(ScanKind.ZSET, PatternKind.SUFFIX, suffix, key)

    async def ascan_zset_by_keyword(self, key: KeyT, keyword: str | None) -> list[ScoredMember]:
        return await self._ascan_by(ScanKind.ZSET, PatternKind.KEYWORD, keyword, key)

    async def ascan_zset_by_options(self, key: KeyT, options: ScanOptions) -> list[ScoredMember]:
        return await self._ascan(ScanKind.ZSET, options, key)

    # =========================================================================
    # Hash fields
    # =========================================================================

    def scan_hash(self, key: KeyT) -> dict[Any, Any]:
        """All fields of the hash at ``key`` with their values."""
        return self._scan(ScanKind.HASH, ScanOptions.NONE, key)

    def scan_hash_by_prefix(self, key: KeyT, prefix: str | None) -> dict[Any, Any]:
        return self._scan_by(ScanKind.HASH, PatternKind.PREFIX, prefix, key)

    def scan_hash_by_suffix(self, key: KeyT, suffix: str | None) -> dict[Any, Any]:
        return self._scan_by(ScanKind.HASH, PatternKind.SUFFIX, suffix, key)

    def scan_hash_by_keyword(self, key: KeyT, keyword: str | None) -> dict[Any, Any]:
        return self._scan_by(ScanKind.HASH, PatternKind.KEYWORD, keyword, key)

    def scan_hash_by_options(self, key: KeyT, options: ScanOptions) -> dict[Any, Any]:
        return self._scan(ScanKind.HASH, options, key)

    async def ascan_hash(self, key: KeyT) -> dict[Any, Any]:
        return await self._ascan(ScanKind.HASH, ScanOptions.NONE, key)

    async def ascan_hash_by_prefix(self, key: KeyT, prefix: str | None) -> dict[Any, Any]:
        return await self._ascan_by(ScanKind.HASH, PatternKind.PREFIX, prefix, key)

    async def ascan_hash_by_suffix(self, key: KeyT, suffix: str | None) -> dict[Any, Any]:
        return await self._ascan_by(ScanKind.HASH, PatternKind.SUFFIX, suffix, key)

    async def ascan_hash_by_keyword(self, key: KeyT, keyword: str | None) -> dict[Any, Any]:
        return await self._ascan_by(ScanKind.HASH, PatternKind.KEYWORD, keyword, key)

    async def ascan_hash_by_options(self, key: KeyT, options: ScanOptions) -> dict[Any, Any]:
        return await self._ascan(ScanKind.HASH, options, key)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def close(self, **kwargs: Any) -> None:
        self.transport.close(**kwargs)

    async def aclose(self, **kwargs: Any) -> None:
        await self.transport.aclose(**kwargs)
