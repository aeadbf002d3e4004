"""Load tabular records from exported query results.

Date: 2026-10-19

Accepts JSON (a list of objects, or an object with a "data"/"rows"/"records"
list) and CSV files with a header row. Records keep the column order of the
source file.
"""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Any

from smarttable.utils.logging.logger_factory import get_cached_logger

logger = get_cached_logger(__name__)

_JSON_LIST_KEYS = ("data", "rows", "records", "results")


class RecordLoadError(ValueError):
    """Raised when a file cannot be turned into a list of records."""


def load_records(path: str | Path) -> list[dict[str, Any]]:
    """Load records from a .json or .csv file.

    Args:
        path: File to read

    Returns:
        List of dict records

    Raises:
        RecordLoadError: Unsupported extension or malformed content

    """
    file_path = Path(path)
    suffix = file_path.suffix.lower()

    try:
        if suffix == ".json":
            records = _load_json(file_path)
        elif suffix == ".csv":
            records = _load_csv(file_path)
        else:
            raise RecordLoadError(f"Unsupported records file: {file_path.name}")
    except OSError as e:
        raise RecordLoadError(f"Cannot read {file_path}: {e}") from e

    logger.info("[RecordLoader] Loaded %d records from %s", len(records), file_path.name)
    return records


def _load_json(file_path: Path) -> list[dict[str, Any]]:
    try:
        payload = json.loads(file_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise RecordLoadError(f"Invalid JSON in {file_path.name}: {e}") from e

    if isinstance(payload, dict):
        for key in _JSON_LIST_KEYS:
            if isinstance(payload.get(key), list):
                payload = payload[key]
                break

    if not isinstance(payload, list):
        raise RecordLoadError(f"{file_path.name} does not contain a list of records")

    records = [row for row in payload if isinstance(row, dict)]
    skipped = len(payload) - len(records)
    if skipped:
        logger.warning("[RecordLoader] Skipped %d non-object rows in %s", skipped, file_path.name)
    return records


def _load_csv(file_path: Path) -> list[dict[str, Any]]:
    with file_path.open(newline="", encoding="utf-8-sig") as handle:
        reader = csv.DictReader(handle)
        # Empty CSV cells mean "no value"
        return [
            {key: (value if value != "" else None) for key, value in row.items() if key is not None}
            for row in reader
        ]
