"""Pytest configuration for django-scanx tests."""

from tests.fixtures import (
    collections,
    keyspace,
    redis_container,
    redis_images,
    scanner,
    store,
    transport,
)

# Re-export fixtures so pytest can discover them
__all__ = [
    "collections",
    "keyspace",
    "redis_container",
    "redis_images",
    "scanner",
    "store",
    "transport",
]
