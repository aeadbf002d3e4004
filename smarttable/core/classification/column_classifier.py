"""Module: column_classifier.py

Date: 2026-10-19

Column classification for the smart table.

ColumnClassifier inspects a homogeneous list of records and decides, per
column key, whether the column holds file references (a "media" column)
and which media kind it is. Classification is a pure function of its inputs:
records are never mutated and malformed values never raise.

A column is media only if BOTH hold:
    - its key matches the name predicate (vocabulary substring match)
    - at least one non-empty string among the first CLASSIFIER_SAMPLE_SIZE
      rows looks like a URL or path
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from smarttable.config import CLASSIFIER_SAMPLE_SIZE
from smarttable.core.classification.media_detection import (
    MediaColumnPredicate,
    VocabularyMediaPredicate,
    is_file_value,
    looks_like_file_reference,
)
from smarttable.core.columns.headers import format_column_header
from smarttable.models.column import (
    ColumnDescriptor,
    ColumnOverride,
    MediaColumnSummary,
    MediaKind,
)
from smarttable.utils.logging.logger_factory import get_cached_logger

logger = get_cached_logger(__name__)

Record = Mapping[str, Any]


def column_keys_of(records: Sequence[Record]) -> list[str]:
    """Column keys in first-record order (records share one key set)."""
    if not records or not isinstance(records[0], Mapping):
        return []
    return [str(key) for key in records[0]]


def cell_value(record: Any, column_key: str) -> Any:
    """Read record[column_key], treating anything unreadable as absent."""
    if not isinstance(record, Mapping):
        return None
    return record.get(column_key)


class ColumnClassifier:
    """Builds ColumnDescriptors from records.

    Args:
        predicate: Column-name strategy (defaults to the built-in vocabulary)
        sample_size: Rows inspected to confirm a media candidate

    """

    def __init__(
        self,
        predicate: MediaColumnPredicate | None = None,
        sample_size: int = CLASSIFIER_SAMPLE_SIZE,
    ) -> None:
        self.predicate: MediaColumnPredicate = predicate or VocabularyMediaPredicate()
        self.sample_size = max(0, int(sample_size))

    def classify(
        self,
        records: Sequence[Record],
        column_keys: Sequence[str] | None = None,
        overrides: Mapping[str, ColumnOverride] | None = None,
    ) -> list[ColumnDescriptor]:
        """Classify every column.

        Args:
            records: Rows sharing one key set
            column_keys: Keys to classify, in display order (default: first record's keys)
            overrides: Per-key caller hints; an explicit is_media_column skips detection

        Returns:
            One ColumnDescriptor per key, in the given order

        """
        records = list(records or [])
        keys = list(column_keys) if column_keys is not None else column_keys_of(records)
        overrides = overrides or {}
        sample = records[: self.sample_size]

        descriptors = [
            self._classify_column(str(key), sample, overrides.get(key)) for key in keys
        ]

        media = [d.key for d in descriptors if d.is_media_column]
        logger.debug(
            "[ColumnClassifier] %d columns, %d media: %s",
            len(descriptors),
            len(media),
            media,
            extra={"dev_only": True},
        )
        return descriptors

    def is_media_column(self, records: Sequence[Record], column_key: str) -> bool:
        """Heuristic check for a single key (ignores overrides)."""
        return self._detect(list(records or [])[: self.sample_size], column_key)

    def _classify_column(
        self,
        key: str,
        sample: list[Record],
        override: ColumnOverride | None,
    ) -> ColumnDescriptor:
        if override is not None and override.is_media_column is not None:
            is_media = override.is_media_column
        else:
            is_media = self._detect(sample, key)

        if is_media:
            if override is not None and override.media_kind is not None:
                kind = MediaKind.coerce(override.media_kind)
                if kind is MediaKind.NONE:
                    kind = MediaKind.GENERIC
            else:
                kind = self.predicate.media_kind_for(key)
        else:
            kind = MediaKind.NONE

        header = format_column_header(key)
        sortable = not is_media
        if override is not None:
            if override.header is not None:
                header = override.header
            if override.sortable is not None:
                sortable = override.sortable

        return ColumnDescriptor(
            key=key,
            header=header,
            sortable=sortable,
            is_media_column=is_media,
            media_kind=kind,
        )

    def _detect(self, sample: list[Record], key: str) -> bool:
        if not self.predicate.matches_name(key):
            return False

        if not any(looks_like_file_reference(cell_value(row, key)) for row in sample):
            # Media-looking name without qualifying values: plain text column
            logger.debug(
                "[ColumnClassifier] '%s' matches media vocabulary but has no file values",
                key,
                extra={"dev_only": True},
            )
            return False
        return True


def summarize_media(
    records: Sequence[Record], descriptors: Sequence[ColumnDescriptor]
) -> list[MediaColumnSummary]:
    """Count rows with a file reference in each media column."""
    summaries = []
    for descriptor in descriptors:
        if not descriptor.is_media_column:
            continue
        count = sum(1 for row in records if is_file_value(cell_value(row, descriptor.key)))
        summaries.append(MediaColumnSummary(descriptor.key, descriptor.media_kind, count))
    return summaries


def total_media_files(summaries: Sequence[MediaColumnSummary]) -> int:
    return sum(summary.count for summary in summaries)
