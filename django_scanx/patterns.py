"""Match pattern helpers.

Turns a prefix, suffix or keyword intent into a single glob string for the
``MATCH`` argument of the scan family. A blank intent yields ``None``,
which callers treat as "nothing to scan for" rather than "match all".
"""

from __future__ import annotations

from enum import StrEnum

from django_scanx.exceptions import ScanValidationError

PATTERN_WILDCARD = "*"
KEY_DELIMITER = ":"


class PatternKind(StrEnum):
    PREFIX = "prefix"
    SUFFIX = "suffix"
    KEYWORD = "keyword"


def is_blank(text: str | None) -> bool:
    """True for ``None``, the empty string, or whitespace only."""
    return text is None or not text.strip()


def prefix(text: str | None) -> str | None:
    if is_blank(text):
        return None
    return f"{text}{PATTERN_WILDCARD}"


def suffix(text: str | None) -> str | None:
    if is_blank(text):
        return None
    return f"{PATTERN_WILDCARD}{text}"


def substring(text: str | None) -> str | None:
    if is_blank(text):
        return None
    return f"{PATTERN_WILDCARD}{text}{PATTERN_WILDCARD}"


_BUILDERS = {
    PatternKind.PREFIX: prefix,
    PatternKind.SUFFIX: suffix,
    PatternKind.KEYWORD: substring,
}


def build_pattern(kind: PatternKind | str, text: str | None) -> str | None:
    """Build the glob for ``text`` according to ``kind``.

    Args:
        kind: One of ``prefix``, ``suffix`` or ``keyword``
        text: The intent string

    Returns:
        The glob pattern, or None when ``text`` is blank
    """
    return _BUILDERS[PatternKind(kind)](text)


def compute_key(*parts: object) -> str:
    """Join key segments with the ``:`` path delimiter.

    Each segment is converted with ``str()`` and stripped.

    >>> compute_key("user", "1", "name")
    'user:1:name'
    """
    if not parts:
        raise ScanValidationError("compute_key needs at least one segment")
    return KEY_DELIMITER.join(str(part).strip() for part in parts)
