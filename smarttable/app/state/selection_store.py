"""Module: selection_store.py

Date: 2026-10-19

Selection Store - per-column file selection state.

Each media column owns an independent set of selected file references.
The URL string itself is the selection identity, so two rows holding the
same URL in one column are selected together.

Features:
- Toggle one, toggle all (all-or-nothing), clear one column, clear everything
- Event-driven updates via Observable signals
- Lock-protected so a bulk export can reset a column from a worker thread
"""

from __future__ import annotations

import threading
from collections.abc import Iterable, Mapping, Sequence
from enum import Enum
from typing import Any

from smarttable.core.classification.media_detection import is_file_value
from smarttable.utils.events import Observable, Signal
from smarttable.utils.logging.logger_factory import get_cached_logger

logger = get_cached_logger(__name__)


class SelectionState(str, Enum):
    IDLE = "idle"
    PARTIAL = "partial"
    FULL = "full"


def valid_urls(records: Sequence[Any], column_key: str) -> list[str]:
    """Selectable file references of a column in view order, de-duplicated."""
    urls: dict[str, None] = {}
    for row in records or []:
        if not isinstance(row, Mapping):
            continue
        value = row.get(column_key)
        if is_file_value(value):
            urls.setdefault(value, None)
    return list(urls)


class SelectionStore(Observable):
    """Per-column selected file references.

    Signals:
        selection_changed(column_key, urls): Emitted after any change to a
            column, with the column's new selection as a sorted list.
    """

    selection_changed = Signal(str, list)

    def __init__(self) -> None:
        super().__init__()
        self._selected: dict[str, set[str]] = {}
        self._lock = threading.RLock()
        logger.debug("SelectionStore initialized", extra={"dev_only": True})

    # =====================================
    # Queries
    # =====================================

    def is_selected(self, column_key: str, url: Any) -> bool:
        if not isinstance(url, str):
            return False
        with self._lock:
            return url in self._selected.get(column_key, ())

    def selected_count(self, column_key: str) -> int:
        with self._lock:
            return len(self._selected.get(column_key, ()))

    def selected_urls(self, column_key: str) -> set[str]:
        """Copy of the column's selection."""
        with self._lock:
            return set(self._selected.get(column_key, ()))

    def selected_columns(self) -> list[str]:
        with self._lock:
            return [key for key, urls in self._selected.items() if urls]

    def selection_state(self, column_key: str, all_urls: Iterable[Any]) -> SelectionState:
        """Idle / partially / fully selected relative to the column's valid URLs."""
        valid = {url for url in all_urls if is_file_value(url)}
        with self._lock:
            current = self._selected.get(column_key, set())
            if not current:
                return SelectionState.IDLE
            if valid and current == valid:
                return SelectionState.FULL
            return SelectionState.PARTIAL

    # =====================================
    # Mutations
    # =====================================

    def toggle(self, column_key: str, url: Any) -> bool:
        """Flip one URL. Non-string or blank URLs are ignored.

        Returns:
            True if the URL is selected afterwards

        """
        if not is_file_value(url):
            logger.debug(
                "[SelectionStore] Ignoring toggle of non-file value in '%s': %r",
                column_key,
                url,
                extra={"dev_only": True},
            )
            return False

        with self._lock:
            selected = self._selected.setdefault(column_key, set())
            if url in selected:
                selected.discard(url)
                now_selected = False
            else:
                selected.add(url)
                now_selected = True
            snapshot = sorted(selected)

        self.selection_changed.emit(column_key, snapshot)
        return now_selected

    def toggle_all(self, column_key: str, all_urls: Iterable[Any]) -> set[str]:
        """All-or-nothing: clear if the selection already equals every valid URL,
        otherwise select them all.

        Args:
            column_key: Column to act on
            all_urls: The column's values in the current view

        Returns:
            The column's selection afterwards

        """
        valid = {url for url in all_urls if is_file_value(url)}

        with self._lock:
            current = self._selected.get(column_key, set())
            if current == valid:
                self._selected[column_key] = set()
                action = "cleared"
            else:
                self._selected[column_key] = set(valid)
                action = "selected"
            result = set(self._selected[column_key])

        logger.debug(
            "[SelectionStore] toggle_all '%s': %s (%d valid)",
            column_key,
            action,
            len(valid),
            extra={"dev_only": True},
        )
        self.selection_changed.emit(column_key, sorted(result))
        return result

    def clear(self, column_key: str) -> None:
        with self._lock:
            had_selection = bool(self._selected.get(column_key))
            self._selected[column_key] = set()

        if had_selection:
            self.selection_changed.emit(column_key, [])

    def clear_all(self) -> None:
        with self._lock:
            cleared = [key for key, urls in self._selected.items() if urls]
            self._selected.clear()

        for column_key in cleared:
            self.selection_changed.emit(column_key, [])

    def retain(self, column_key: str, all_urls: Iterable[Any]) -> None:
        """Drop selected URLs that are no longer present in the column."""
        valid = {url for url in all_urls if is_file_value(url)}
        with self._lock:
            current = self._selected.get(column_key)
            if not current or current <= valid:
                return
            current &= valid
            snapshot = sorted(current)

        self.selection_changed.emit(column_key, snapshot)
