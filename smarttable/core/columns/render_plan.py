"""Module: render_plan.py

Date: 2026-10-19

Presentation plan for classified columns.

ColumnRenderPlan turns ColumnDescriptors into ColumnPlans (label, sortability,
cell strategy) and renders individual cells with the matching strategy.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from smarttable.core.columns.value_formatter import (
    DisplayValue,
    MediaCellView,
    describe_media_cell,
    format_cell_value,
)
from smarttable.models.column import ColumnDescriptor, MediaKind
from smarttable.utils.logging.logger_factory import get_cached_logger

logger = get_cached_logger(__name__)


class CellStrategy(str, Enum):
    TEXT = "text"
    MEDIA = "media"


@dataclass(frozen=True)
class ColumnPlan:
    key: str
    header: str
    sortable: bool
    strategy: CellStrategy
    media_kind: MediaKind = MediaKind.NONE

    @property
    def is_media(self) -> bool:
        return self.strategy is CellStrategy.MEDIA


class ColumnRenderPlan:
    """Ordered column plans plus per-cell rendering."""

    def __init__(self, columns: Sequence[ColumnPlan] = ()) -> None:
        self.columns: list[ColumnPlan] = list(columns)
        self._by_key = {column.key: column for column in self.columns}

    @classmethod
    def build(cls, descriptors: Sequence[ColumnDescriptor]) -> ColumnRenderPlan:
        columns = [
            ColumnPlan(
                key=d.key,
                header=d.header,
                sortable=d.sortable,
                strategy=CellStrategy.MEDIA if d.is_media_column else CellStrategy.TEXT,
                media_kind=d.media_kind if d.is_media_column else MediaKind.NONE,
            )
            for d in descriptors
        ]
        logger.debug(
            "[ColumnRenderPlan] Built plan for %d columns",
            len(columns),
            extra={"dev_only": True},
        )
        return cls(columns)

    def __len__(self) -> int:
        return len(self.columns)

    def __iter__(self):
        return iter(self.columns)

    @property
    def keys(self) -> list[str]:
        return [column.key for column in self.columns]

    @property
    def media_columns(self) -> list[ColumnPlan]:
        return [column for column in self.columns if column.is_media]

    def column(self, key: str) -> ColumnPlan | None:
        return self._by_key.get(key)

    def column_at(self, index: int) -> ColumnPlan | None:
        if 0 <= index < len(self.columns):
            return self.columns[index]
        return None

    def is_sortable(self, key: str) -> bool:
        column = self._by_key.get(key)
        return bool(column and column.sortable)

    def render_cell(self, row: Any, key: str) -> DisplayValue | MediaCellView:
        """Render row[key] with its column's strategy (unknown keys render as text)."""
        value = row.get(key) if isinstance(row, Mapping) else None
        column = self._by_key.get(key)
        if column is not None and column.is_media:
            return describe_media_cell(value, row, column.media_kind)
        return format_cell_value(value)
