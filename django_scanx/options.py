"""Scan options passed to the transport with each cursor."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from django_scanx import patterns
from django_scanx.exceptions import ScanValidationError
from django_scanx.types import EntryType


@dataclass(frozen=True)
class ScanOptions:
    """Immutable ``MATCH`` / ``TYPE`` / ``COUNT`` bundle for one scan.

    Attributes:
        pattern: Glob applied server-side. Blank means "match everything"
            and is stored as None.
        entry_type: Top-level entry type filter. Only honoured by key scans;
            ``EntryType.NONE`` is the same as no filter.
        count: Page size hint. A non-positive hint makes the scan return an
            empty result without contacting the store.
    """

    NONE: ClassVar[ScanOptions]

    pattern: str | None = None
    entry_type: EntryType | None = None
    count: int | None = None

    def __post_init__(self) -> None:
        if self.pattern is not None and not isinstance(self.pattern, str):
            raise ScanValidationError(f"pattern must be a str, got {type(self.pattern).__name__}")
        if patterns.is_blank(self.pattern):
            object.__setattr__(self, "pattern", None)
        if self.entry_type is not None:
            object.__setattr__(self, "entry_type", EntryType(self.entry_type))
        if self.count is not None and (isinstance(self.count, bool) or not isinstance(self.count, int)):
            raise ScanValidationError(f"count must be an int, got {type(self.count).__name__}")

    @property
    def type_filter(self) -> str | None:
        """The ``TYPE`` argument to send, or None when unfiltered."""
        if self.entry_type is None or self.entry_type is EntryType.NONE:
            return None
        return self.entry_type.value

    @property
    def is_empty_page(self) -> bool:
        return self.count is not None and self.count <= 0

    def without_entry_type(self) -> ScanOptions:
        if self.entry_type is None:
            return self
        return ScanOptions(pattern=self.pattern, count=self.count)


ScanOptions.NONE = ScanOptions()


def scan_options(
    pattern: str | None = None,
    entry_type: EntryType | None = None,
    count: int | None = None,
) -> ScanOptions:
    return ScanOptions(pattern=pattern, entry_type=entry_type, count=count)


def _require_text(name: str, text: str | None) -> str:
    if patterns.is_blank(text):
        raise ScanValidationError(f"{name} must not be blank")
    return text  # type: ignore[return-value]


def scan_options_by_prefix(
    prefix: str,
    entry_type: EntryType | None = None,
    count: int | None = None,
) -> ScanOptions:
    return scan_options(patterns.prefix(_require_text("prefix", prefix)), entry_type, count)


def scan_options_by_suffix(
    suffix: str,
    entry_type: EntryType | None = None,
    count: int | None = None,
) -> ScanOptions:
    return scan_options(patterns.suffix(_require_text("suffix", suffix)), entry_type, count)


def scan_options_by_keyword(
    keyword: str,
    entry_type: EntryType | None = None,
    count: int | None = None,
) -> ScanOptions:
    return scan_options(patterns.substring(_require_text("keyword", keyword)), entry_type, count)
