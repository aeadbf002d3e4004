"""Background workers for downloads.

Date: 2026-10-19

DownloadWorker runs one DownloadService.download and BulkExportWorker runs
BulkExportOrchestrator.export_selected, both off the UI thread, reporting
through the WorkerBase signals.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable

from smarttable.core.export.bulk_export import BulkExportOrchestrator
from smarttable.core.export.download_service import DownloadService
from smarttable.models.download_result import DownloadResult
from smarttable.utils.events import Signal
from smarttable.utils.logging.logger_factory import get_cached_logger
from smarttable.utils.threading import WorkerBase

logger = get_cached_logger(__name__)


class BulkExportWorker(WorkerBase):
    """Export one column's selection in a background thread.

    finished_processing(True) is emitted once every item settled, regardless
    of individual failures; results are available via .results afterwards.
    """

    def __init__(
        self,
        orchestrator: BulkExportOrchestrator,
        column_key: str,
        selected_urls: Iterable[str] | None = None,
    ) -> None:
        super().__init__(name=f"bulk-export-{column_key}")
        self.orchestrator = orchestrator
        self.column_key = column_key
        self.selected_urls = set(selected_urls) if selected_urls is not None else None
        self.results: list[DownloadResult] = []
        self._done = 0
        self._total = 0
        self._progress_lock = threading.Lock()

    def run(self) -> None:
        self.orchestrator.export_started.connect(self._on_started)
        self.orchestrator.item_finished.connect(self._on_item_finished)
        success = True
        try:
            self.results = self.orchestrator.export_selected(self.column_key, self.selected_urls)
        except Exception:
            logger.exception("[BulkExportWorker] Export of '%s' crashed", self.column_key)
            success = False
        finally:
            self.orchestrator.export_started.disconnect(self._on_started)
            self.orchestrator.item_finished.disconnect(self._on_item_finished)

        self.status_updated.emit(
            f"Downloaded {sum(1 for r in self.results if r.succeeded)} of {len(self.results)} files"
        )
        self.finished_processing.emit(success)

    def _on_started(self, column_key: str, count: int) -> None:
        self._total = count
        self.status_updated.emit(f"Downloading {count} files from {column_key}...")

    def _on_item_finished(self, result: DownloadResult) -> None:
        # Called from pool threads
        with self._progress_lock:
            self._done += 1
            done = self._done
        self.progress_updated.emit(done, self._total, result.url)


class DownloadWorker(WorkerBase):
    """Download a single file in a background thread.

    Signals:
        download_finished(result): The DownloadResult, emitted before finished_processing
    """

    download_finished = Signal(object)

    def __init__(self, service: DownloadService, url: str, file_name: str | None = None) -> None:
        super().__init__(name="download")
        self.service = service
        self.url = url
        self.file_name = file_name
        self.result: DownloadResult | None = None

    def run(self) -> None:
        try:
            result = self.service.download(self.url, self.file_name)
        except Exception as e:
            logger.exception("[DownloadWorker] Download of %s crashed", self.url)
            result = DownloadResult.failure(self.url, str(e) or e.__class__.__name__)

        self.result = result
        self.download_finished.emit(result)
        self.finished_processing.emit(result.succeeded)
