"""Utilities for codec instantiation."""

from __future__ import annotations

from typing import Any

from django.utils.module_loading import import_string

from django_scanx.codecs import CodecType
from django_scanx.types import Codec

DEFAULT_CODEC = CodecType.STRING


def is_codec_instance(obj: Any) -> bool:
    """Check if an object is a codec instance (has dumps/loads/can_render methods)."""
    return not isinstance(obj, type) and isinstance(obj, Codec)


def create_codec(config: str | type | Any | None, **kwargs: Any) -> Any:
    """Create a codec instance from config.

    Args:
        config: A ``CodecType`` name, a dotted path string, a class, an
            instance, or None for the string codec
        **kwargs: Keyword arguments to pass to the codec constructor
    """
    if config is None:
        config = DEFAULT_CODEC

    # Already an instance
    if is_codec_instance(config):
        return config

    # A class (not a string path)
    if isinstance(config, type):
        return config(**kwargs)

    # Short name ("string", "json", ...) or dotted path string
    try:
        config = CodecType(config).path
    except ValueError:
        pass
    cls = import_string(config)
    return cls(**kwargs)
