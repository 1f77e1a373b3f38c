"""Exceptions for django-scanx.

This module defines exceptions that may be raised during scan operations.
Users can catch these to handle specific error conditions.

Errors coming from the store itself (redis-py / valkey-py connection,
timeout and response errors) are never wrapped: they propagate as-is so
callers can apply their own retry policy.
"""

import socket

from django.core.exceptions import ImproperlyConfigured

# Build exception tuples from available libraries (redis-py / valkey-py).
# These are used by the cursor layer to log interrupted sweeps.
_exception_list: list[type[Exception]] = [socket.timeout]

try:
    from redis.exceptions import ConnectionError as RedisConnectionError
    from redis.exceptions import ResponseError as RedisResponseError
    from redis.exceptions import TimeoutError as RedisTimeoutError

    _exception_list.extend([RedisConnectionError, RedisTimeoutError, RedisResponseError])
except ImportError:
    pass

try:
    from valkey.exceptions import ConnectionError as ValkeyConnectionError
    from valkey.exceptions import ResponseError as ValkeyResponseError
    from valkey.exceptions import TimeoutError as ValkeyTimeoutError

    _exception_list.extend([ValkeyConnectionError, ValkeyTimeoutError, ValkeyResponseError])
except ImportError:
    pass

_main_exceptions = tuple(_exception_list)


class CodecError(Exception):
    """Raised when a codec fails to encode or decode a value.

    This can occur when:
    - The stored bytes don't match the codec's format
    - The data is corrupted
    - The codec is handed a type it cannot encode
    - A decoded set member or hash field is unhashable (a JSON array, say)
    """


class ScanValidationError(ValueError):
    """Raised when a scan call receives an invalid argument.

    Covers a missing or blank target key for set, sorted-set and hash scans, a
    missing ``ScanOptions`` on the explicit-options call shape, and a blank
    intent handed directly to one of the pattern option builders.

    The check runs before any round trip to the store, so the caller can
    correct the input and retry.
    """


class NotSupportedError(Exception):
    """Raised when an operation is not supported by the current configuration.

    Attributes:
        operation: The operation that is not supported.
        backend: Optional name of the component that doesn't support it.
    """

    def __init__(self, operation: str, backend: str | None = None) -> None:
        self.operation = operation
        self.backend = backend
        super().__init__(self._message())

    def _message(self) -> str:
        msg = f"Operation '{self.operation}' is not supported"
        if self.backend:
            msg += f" by {self.backend}"
        return msg

    def __str__(self) -> str:
        return self._message()


class CodecCapabilityError(NotSupportedError):
    """Raised when a pattern scan targets an axis whose codec cannot render strings.

    Match patterns are applied server-side to the stored bytes, so they only
    make sense when the codec bound to the scanned axis writes a ``str`` as
    its plain text. This signals a configuration mismatch, not a transient
    condition, and is raised before the store is contacted.

    Attributes:
        axis: The scan axis ("key", "value" or "field").
        codec: The codec instance that refused the capability query.

    Example:
        Handling a misconfigured value codec::

            from django_scanx import get_scanner
            from django_scanx.exceptions import CodecCapabilityError

            try:
                get_scanner().scan_set_by_prefix("tags", "py")
            except CodecCapabilityError as e:
                logger.warning("cannot filter %s axis with %r", e.axis, e.codec)
    """

    def __init__(self, axis: str, codec: object) -> None:
        self.axis = axis
        self.codec = codec
        super().__init__("pattern scan", backend=f"{type(codec).__name__} on the {axis} axis")


class InvalidScannerError(ImproperlyConfigured):
    """Raised when a ``SCANX`` alias is missing or its BACKEND can't be imported."""
