"""Module: column.py

Date: 2026-10-19

Column descriptors produced by the classifier and the caller-supplied
override hints that can bypass heuristic detection.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class MediaKind(str, Enum):
    """File category of a media column, drives icon and preview behaviour."""

    IMAGE = "image"
    DOCUMENT = "document"
    VIDEO = "video"
    AUDIO = "audio"
    GENERIC = "generic"
    NONE = "none"

    @classmethod
    def coerce(cls, value: MediaKind | str | None) -> MediaKind:
        """Map a kind name (or None) to a MediaKind, unknown names -> GENERIC."""
        if isinstance(value, MediaKind):
            return value
        if value is None:
            return cls.NONE
        try:
            return cls(str(value).lower())
        except ValueError:
            return cls.GENERIC


@dataclass(frozen=True)
class ColumnDescriptor:
    """Classification result for one column."""

    key: str
    header: str
    sortable: bool = True
    is_media_column: bool = False
    media_kind: MediaKind = MediaKind.NONE


@dataclass(frozen=True)
class ColumnOverride:
    """Caller hints for one column. None fields fall through to detection."""

    header: str | None = None
    sortable: bool | None = None
    is_media_column: bool | None = None
    media_kind: MediaKind | str | None = None


@dataclass(frozen=True)
class MediaColumnSummary:
    """Number of rows holding a file reference in one media column."""

    key: str
    media_kind: MediaKind
    count: int
