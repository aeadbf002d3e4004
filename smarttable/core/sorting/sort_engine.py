"""Module: sort_engine.py

Date: 2026-10-19

Sorting logic for the smart table.

SortEngine orders records by one field. Rules:
    - missing/None values always sort last, in both directions
    - numeric columns compare numerically ("9" before "10")
    - date columns compare as instants, naive timestamps taken as UTC
    - everything else compares case-insensitively as display text
    - descending is the exact reverse of ascending
    - comparing mixed or malformed values never raises
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping, Sequence
from datetime import date, datetime, time, timezone
from decimal import Decimal
from enum import Enum
from typing import Any

from smarttable.config import DATE_SORT_FIELDS, NUMERIC_SORT_FIELDS
from smarttable.core.columns.value_formatter import to_display_text
from smarttable.models.sort_spec import SortDirection, SortSpec
from smarttable.utils.logging.logger_factory import get_cached_logger

logger = get_cached_logger(__name__)


class SortMode(str, Enum):
    NUMERIC = "numeric"
    DATE = "date"
    TEXT = "text"


def _field_value(record: Any, field: str) -> Any:
    if not isinstance(record, Mapping):
        return None
    return record.get(field)


def to_number(value: Any) -> float | None:
    """Numeric value of int/float/Decimal/bool or a numeric string, else None."""
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    elif not isinstance(value, (int, float, Decimal)):
        return None
    try:
        number = float(value)
    except (ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


def to_timestamp(value: Any) -> float | None:
    """POSIX timestamp of a datetime/date or an ISO-8601 string, else None."""
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, date):
        moment = datetime.combine(value, time.min)
    elif isinstance(value, str):
        text = value.strip()
        if len(text) < 8 or not text[:4].isdigit():
            return None
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            moment = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    try:
        return moment.timestamp()
    except (OverflowError, OSError, ValueError):
        return None


class SortEngine:
    """Orders records by a SortSpec.

    Args:
        numeric_fields: Fields always compared numerically
        date_fields: Fields always compared as instants

    """

    def __init__(
        self,
        numeric_fields: Iterable[str] = NUMERIC_SORT_FIELDS,
        date_fields: Iterable[str] = DATE_SORT_FIELDS,
    ) -> None:
        self.numeric_fields = frozenset(numeric_fields)
        self.date_fields = frozenset(date_fields)

    def sort(self, records: Sequence[Any], spec: SortSpec | None) -> list[Any]:
        """Return a new list ordered by spec (input order when spec is None)."""
        rows = list(records or [])
        if spec is None or not rows:
            return rows

        present: list[Any] = []
        absent: list[Any] = []
        for row in rows:
            (absent if _field_value(row, spec.field) is None else present).append(row)

        mode = self.detect_mode(spec.field, [_field_value(row, spec.field) for row in present])
        key_func = self._key_function(mode)

        # sorted() is stable; ties keep input order under ASC
        ordered = sorted(present, key=lambda row: key_func(_field_value(row, spec.field)))
        if spec.direction is SortDirection.DESC:
            ordered.reverse()

        logger.debug(
            "[SortEngine] Sorted %d rows by %s %s (%s, %d nulls last)",
            len(rows),
            spec.field,
            spec.direction.value,
            mode.value,
            len(absent),
            extra={"dev_only": True},
        )
        return ordered + absent

    def detect_mode(self, field: str, values: Sequence[Any]) -> SortMode:
        """Pick the comparison mode for a field from hints, then from values."""
        if field in self.numeric_fields:
            return SortMode.NUMERIC
        if field in self.date_fields:
            return SortMode.DATE
        if not values:
            return SortMode.TEXT
        if all(to_number(value) is not None for value in values):
            return SortMode.NUMERIC
        if all(to_timestamp(value) is not None for value in values):
            return SortMode.DATE
        return SortMode.TEXT

    @staticmethod
    def _key_function(mode: SortMode):
        # Keys are (rank, comparable) so mixed values never compare across types
        def text_key(value: Any) -> tuple[int, Any]:
            return (1, to_display_text(value).casefold())

        if mode is SortMode.NUMERIC:

            def numeric_key(value: Any) -> tuple[int, Any]:
                number = to_number(value)
                return (0, number) if number is not None else text_key(value)

            return numeric_key

        if mode is SortMode.DATE:

            def date_key(value: Any) -> tuple[int, Any]:
                stamp = to_timestamp(value)
                return (0, stamp) if stamp is not None else text_key(value)

            return date_key

        return text_key

    @staticmethod
    def next_spec(current: SortSpec | None, field: str) -> SortSpec:
        """Header activation: same field flips direction, a new field starts ascending."""
        if current is not None and current.field == field:
            return current.toggled()
        return SortSpec(field, SortDirection.ASC)
