"""Codec capability checks for pattern scans."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from django_scanx.exceptions import CodecCapabilityError

if TYPE_CHECKING:
    from django_scanx.options import ScanOptions
    from django_scanx.types import Axis

logger = logging.getLogger(__name__)


def can_render_pattern(codec: Any) -> bool:
    """Whether ``codec`` writes ``str`` values as text a glob can match.

    Queried on the codec object at call time, so rebinding an axis codec
    takes effect on the next scan.
    """
    can_render = getattr(codec, "can_render", None)
    if can_render is None:
        return False
    return bool(can_render(str))


def ensure_pattern_renderable(codec: Any, options: ScanOptions, axis: Axis) -> None:
    """Raise CodecCapabilityError if ``options`` carries a pattern ``codec`` can't render."""
    if options.pattern is None:
        return
    if not can_render_pattern(codec):
        logger.debug("Refusing pattern %r on %s axis bound to %r", options.pattern, axis, codec)
        raise CodecCapabilityError(str(axis), codec)
