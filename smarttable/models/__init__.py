"""Data models.

The Qt table model lives in smarttable.models.media_table_model and is not
imported here so the plain dataclasses stay usable without PyQt5.
"""

from smarttable.models.column import (
    ColumnDescriptor,
    ColumnOverride,
    MediaColumnSummary,
    MediaKind,
)
from smarttable.models.download_result import DownloadOutcome, DownloadResult
from smarttable.models.sort_spec import SortDirection, SortSpec

__all__ = [
    "ColumnDescriptor",
    "ColumnOverride",
    "DownloadOutcome",
    "DownloadResult",
    "MediaColumnSummary",
    "MediaKind",
    "SortDirection",
    "SortSpec",
]
