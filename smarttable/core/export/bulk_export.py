"""Module: bulk_export.py

Date: 2026-10-19

Bulk Export Orchestrator - best-effort download of a column's selection.

Every selected URL is downloaded independently on a bounded thread pool.
A failing item is recorded (and opened externally as a fallback) without
cancelling the others; the call returns only after every item settled, with
exactly one DownloadResult per URL in submission order. Afterwards the
column's selection is cleared, whatever the outcomes were. There is no
retry: a failed item has to be re-selected and exported again.
"""

from __future__ import annotations

import time
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor

from smarttable.app.state.selection_store import SelectionStore
from smarttable.config import DOWNLOAD_MAX_WORKERS
from smarttable.core.classification.media_detection import is_file_value
from smarttable.core.export.download_service import DownloadService
from smarttable.models.download_result import DownloadResult
from smarttable.utils.events import Observable, Signal
from smarttable.utils.logging.logger_factory import get_cached_logger

logger = get_cached_logger(__name__)


def submission_order(urls: Iterable[str]) -> list[str]:
    """Deterministic order for a selection: sets are sorted, sequences kept as given."""
    if isinstance(urls, (set, frozenset)):
        return sorted(urls, key=str)
    return list(urls)


class BulkExportOrchestrator(Observable):
    """Concurrent, all-settled export of selected files.

    Signals (emitted from the calling thread, item_finished from pool threads):
        export_started(column_key, count)
        item_finished(result)
        export_finished(column_key, results)
    """

    export_started = Signal(str, int)
    item_finished = Signal(object)
    export_finished = Signal(str, list)

    def __init__(
        self,
        download_service: DownloadService,
        selection_store: SelectionStore,
        max_workers: int = DOWNLOAD_MAX_WORKERS,
    ) -> None:
        super().__init__()
        if max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {max_workers}")
        self.download_service = download_service
        self.selection_store = selection_store
        self.max_workers = max_workers
        self.stats = {"exports": 0, "succeeded": 0, "failed": 0, "total_time": 0.0}

    def export_selected(
        self,
        column_key: str,
        selected_urls: Iterable[str] | None = None,
    ) -> list[DownloadResult]:
        """Download every selected URL of a column.

        Args:
            column_key: Column whose selection is exported and then cleared
            selected_urls: URLs to export (defaults to the store's current selection)

        Returns:
            One DownloadResult per URL, in submission order

        """
        if selected_urls is None:
            selected_urls = self.selection_store.selected_urls(column_key)
        urls = submission_order(selected_urls)

        start_time = time.time()
        self.export_started.emit(column_key, len(urls))
        logger.info(
            "[BulkExport] Exporting %d files from '%s' (max %d concurrent)",
            len(urls),
            column_key,
            self.max_workers,
        )

        results: list[DownloadResult] = []
        try:
            if urls:
                results = self._run_all(urls)
        finally:
            # Unconditional reset, even if the pool itself blew up
            self.selection_store.clear(column_key)

        succeeded = sum(1 for result in results if result.succeeded)
        self.stats["exports"] += 1
        self.stats["succeeded"] += succeeded
        self.stats["failed"] += len(results) - succeeded
        self.stats["total_time"] += time.time() - start_time

        logger.info(
            "[BulkExport] '%s' done: %d succeeded, %d failed",
            column_key,
            succeeded,
            len(results) - succeeded,
        )
        self.export_finished.emit(column_key, results)
        return results

    def _run_all(self, urls: list[str]) -> list[DownloadResult]:
        workers = min(self.max_workers, len(urls))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="bulk-export") as executor:
            futures = [executor.submit(self._download_one, url) for url in urls]
            # Collect in submission order; each future settles on its own
            return [self._settle(url, future) for url, future in zip(urls, futures)]

    def _download_one(self, url: str) -> DownloadResult:
        if not is_file_value(url):
            result = DownloadResult.failure(str(url), "Invalid URL")
        else:
            result = self.download_service.download(url)
        self.item_finished.emit(result)
        return result

    @staticmethod
    def _settle(url: str, future) -> DownloadResult:
        try:
            return future.result()
        except Exception as e:
            logger.exception("[BulkExport] Unexpected failure for %s", url)
            return DownloadResult.failure(url, str(e) or e.__class__.__name__)
