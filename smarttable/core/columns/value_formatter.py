"""Module: value_formatter.py

Date: 2026-10-19

Display coercion for table cells.

Text cells:
    None            -> "null"           (style "null")
    bool            -> "true"/"false"   (style "badge")
    dict/list/tuple -> compact JSON     (style "code")
    long strings    -> 47 chars + "..." with the full text as tooltip

Media cells are described by MediaCellView: file name, optional size
annotation and which actions (preview, download, select) apply.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import unquote, urlsplit

from smarttable.config import (
    DEFAULT_FILE_NAME,
    FILE_SIZE_FIELDS,
    NO_FILE_TEXT,
    NULL_TEXT,
    PREVIEWABLE_KINDS,
    TEXT_ELLIPSIS,
    TEXT_TRUNCATE_KEEP,
    TEXT_TRUNCATE_LENGTH,
)
from smarttable.core.classification.media_detection import is_file_value, media_kind_from_url
from smarttable.models.column import MediaKind
from smarttable.utils.file_size_formatter import format_file_size


@dataclass(frozen=True)
class DisplayValue:
    text: str
    tooltip: str | None = None
    style: str = "text"  # text | null | badge | code


@dataclass(frozen=True)
class MediaCellView:
    """Presentation of one media cell."""

    url: str | None
    has_file: bool
    file_name: str
    size_text: str | None
    media_kind: MediaKind
    icon_kind: MediaKind
    can_preview: bool

    @property
    def text(self) -> str:
        if not self.has_file:
            return NO_FILE_TEXT
        if self.size_text:
            return f"{self.file_name} ({self.size_text})"
        return self.file_name


def to_display_text(value: Any) -> str:
    """Plain string form of any cell value; never raises."""
    if value is None:
        return NULL_TEXT
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list, tuple)):
        try:
            return json.dumps(value, separators=(",", ":"), default=str, ensure_ascii=False)
        except (TypeError, ValueError):
            return str(value)
    try:
        return str(value)
    except Exception:
        return repr(value)


def format_cell_value(value: Any) -> DisplayValue:
    """Format a text-column value for display."""
    if value is None:
        return DisplayValue(NULL_TEXT, style="null")
    if isinstance(value, bool):
        return DisplayValue(to_display_text(value), style="badge")
    if isinstance(value, (dict, list, tuple)):
        text = to_display_text(value)
        return DisplayValue(text, tooltip=text, style="code")

    text = to_display_text(value)
    if len(text) > TEXT_TRUNCATE_LENGTH:
        return DisplayValue(text[:TEXT_TRUNCATE_KEEP] + TEXT_ELLIPSIS, tooltip=text)
    return DisplayValue(text)


def file_name_from_url(url: Any) -> str:
    """Trailing path segment of url, "file" when there is none."""
    if not isinstance(url, str):
        return DEFAULT_FILE_NAME
    try:
        path = urlsplit(url.strip()).path if "://" in url else url.strip()
    except ValueError:
        path = url.strip()
    name = unquote(path.split("?", 1)[0].rsplit("/", 1)[-1])
    return name or DEFAULT_FILE_NAME


def file_size_from_row(row: Any) -> str | None:
    """Formatted size from the first recognised positive size field, if any."""
    if not isinstance(row, Mapping):
        return None
    for field in FILE_SIZE_FIELDS:
        raw = row.get(field)
        if raw is None or raw == "" or isinstance(raw, bool):
            continue
        try:
            size = int(float(raw))
        except (TypeError, ValueError, OverflowError):
            continue
        if size > 0:
            return format_file_size(size)
    return None


def describe_media_cell(value: Any, row: Any, media_kind: MediaKind) -> MediaCellView:
    """Describe a media cell; non-string or blank values become "No file"."""
    kind = MediaKind.coerce(media_kind)
    if not is_file_value(value):
        return MediaCellView(
            url=None,
            has_file=False,
            file_name=NO_FILE_TEXT,
            size_text=None,
            media_kind=kind,
            icon_kind=kind,
            can_preview=False,
        )

    url = value
    icon_kind = kind if kind not in (MediaKind.GENERIC, MediaKind.NONE) else media_kind_from_url(url)
    return MediaCellView(
        url=url,
        has_file=True,
        file_name=file_name_from_url(url),
        size_text=file_size_from_row(row),
        media_kind=kind,
        icon_kind=icon_kind,
        can_preview=kind.value in PREVIEWABLE_KINDS,
    )
