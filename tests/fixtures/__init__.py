"""Test fixtures for django-scanx."""

from tests.fixtures.containers import redis_container, redis_images
from tests.fixtures.scanner import FakeScanClient, collections, keyspace, scanner, store, transport
from tests.fixtures.store import AsyncFakeStore, FakeStore

__all__ = [
    "AsyncFakeStore",
    "FakeScanClient",
    "FakeStore",
    "collections",
    "keyspace",
    "redis_container",
    "redis_images",
    "scanner",
    "store",
    "transport",
]
