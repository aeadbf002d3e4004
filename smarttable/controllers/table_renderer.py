"""Module: table_renderer.py

Date: 2026-10-19

UI-agnostic composition root for the smart table.

TableRenderer owns the records currently shown and wires together the
column classifier, render plan, sort engine, selection store and download
pipeline. Views (Qt or tests) read a RenderedGrid snapshot from render() and
forward user input through activate_header() and click_cell().

Event containment: only clicks on a cell's BODY region emit row_clicked.
Clicks on embedded controls (checkbox, preview, download) perform their
action and stop there.
"""

from __future__ import annotations

import threading
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from smarttable.app.state.selection_store import SelectionState, SelectionStore, valid_urls
from smarttable.config import EMPTY_TABLE_TEXT, LOADING_TABLE_TEXT, PREVIEWABLE_KINDS
from smarttable.core.classification import ColumnClassifier, summarize_media, total_media_files
from smarttable.core.classification.media_detection import is_file_value
from smarttable.core.columns.render_plan import ColumnPlan, ColumnRenderPlan
from smarttable.core.columns.value_formatter import DisplayValue, MediaCellView
from smarttable.core.export.bulk_export import BulkExportOrchestrator
from smarttable.core.export.download_service import DownloadService
from smarttable.core.export.export_worker import DownloadWorker
from smarttable.core.export.file_fetcher import RequestsFileFetcher
from smarttable.core.export.file_saver import DirectoryFileSaver
from smarttable.core.export.protocols import ExternalViewer
from smarttable.core.sorting import SortEngine
from smarttable.models.column import ColumnDescriptor, ColumnOverride, MediaColumnSummary, MediaKind
from smarttable.models.download_result import DownloadResult
from smarttable.models.sort_spec import SortSpec
from smarttable.utils.events import Observable, Signal
from smarttable.utils.external_viewer import ExternalViewer as DesktopViewer
from smarttable.utils.logging.logger_factory import get_cached_logger

logger = get_cached_logger(__name__)


class CellRegion(str, Enum):
    """Clickable areas of a cell."""

    BODY = "body"
    CHECKBOX = "checkbox"
    PREVIEW = "preview"
    DOWNLOAD = "download"


@dataclass(frozen=True)
class HeaderView:
    key: str
    label: str
    sortable: bool
    sort_indicator: str | None = None  # "asc" | "desc" | None
    is_media: bool = False
    media_kind: MediaKind = MediaKind.NONE
    file_count: int = 0
    selected_count: int = 0
    selection_state: SelectionState = SelectionState.IDLE
    can_bulk_download: bool = False

    @property
    def text(self) -> str:
        """Header label with sort arrow and file badge."""
        text = self.label
        if self.sort_indicator == "asc":
            text += " ▲"
        elif self.sort_indicator == "desc":
            text += " ▼"
        if self.is_media:
            text += f" ({self.file_count} files)"
        return text


@dataclass(frozen=True)
class RenderedCell:
    key: str
    display: DisplayValue | MediaCellView
    selected: bool = False
    downloading: bool = False

    @property
    def text(self) -> str:
        return self.display.text

    @property
    def is_media(self) -> bool:
        return isinstance(self.display, MediaCellView)


@dataclass(frozen=True)
class RenderedGrid:
    headers: list[HeaderView] = field(default_factory=list)
    rows: list[list[RenderedCell]] = field(default_factory=list)
    empty_text: str | None = None
    summary: str = ""

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def column_count(self) -> int:
        return len(self.headers)


class TableRenderer(Observable):
    """Presents records as a sortable grid with file selection and downloads.

    Signals:
        row_clicked(record): A row body was clicked
        sort_changed(field, direction): Active sort changed
        view_changed(): Anything visible changed; re-read render()
        download_state_changed(url, in_flight): A single download started/finished
        download_finished(result): A single download settled (DownloadResult)

    Args:
        classifier: Column classifier (default heuristics)
        sort_engine: Sort engine (default config hints)
        selection_store: Per-column file selection
        download_service: Single-file downloads (default: requests + Downloads dir)
        orchestrator: Bulk export (built from download_service if omitted)
        viewer: Opens previews and download fallbacks
        external_sort: Caller sorts the records itself; only sort_changed is emitted

    """

    row_clicked = Signal(object)
    sort_changed = Signal(str, str)
    view_changed = Signal()
    download_state_changed = Signal(str, bool)
    download_finished = Signal(object)

    def __init__(
        self,
        classifier: ColumnClassifier | None = None,
        sort_engine: SortEngine | None = None,
        selection_store: SelectionStore | None = None,
        download_service: DownloadService | None = None,
        orchestrator: BulkExportOrchestrator | None = None,
        viewer: ExternalViewer | None = None,
        external_sort: bool = False,
    ) -> None:
        super().__init__()
        self.classifier = classifier or ColumnClassifier()
        self.sort_engine = sort_engine or SortEngine()
        self.selection_store = selection_store or SelectionStore()
        self.viewer = viewer or DesktopViewer()
        self.download_service = download_service or DownloadService(
            RequestsFileFetcher(), DirectoryFileSaver(), self.viewer
        )
        self.orchestrator = orchestrator or BulkExportOrchestrator(
            self.download_service, self.selection_store
        )
        self.external_sort = external_sort

        self._records: list[Any] = []
        self._view: list[Any] = []
        self._descriptors: list[ColumnDescriptor] = []
        self._plan = ColumnRenderPlan()
        self._summaries: list[MediaColumnSummary] = []
        self._sort_spec: SortSpec | None = None
        self._loading = False

        self._downloading: set[str] = set()
        self._download_workers: list[DownloadWorker] = []
        self._download_lock = threading.Lock()

        self.selection_store.selection_changed.connect(self._on_selection_changed)

    # =====================================
    # Data
    # =====================================

    def set_records(
        self,
        records: Sequence[Any] | None,
        column_keys: Sequence[str] | None = None,
        overrides: Mapping[str, ColumnOverride] | None = None,
    ) -> None:
        """Replace the records and rebuild classification, plan and view order."""
        self._records = list(records or [])
        self._descriptors = self.classifier.classify(self._records, column_keys, overrides)
        self._plan = ColumnRenderPlan.build(self._descriptors)
        self._summaries = summarize_media(self._records, self._descriptors)
        self._loading = False

        if self._sort_spec is not None and not self._plan.is_sortable(self._sort_spec.field):
            logger.debug(
                "[TableRenderer] Dropping sort on '%s' (column gone or not sortable)",
                self._sort_spec.field,
                extra={"dev_only": True},
            )
            self._sort_spec = None

        self._sync_selection()
        self._apply_sort()
        logger.info(
            "[TableRenderer] Loaded %d records, %d columns (%d media)",
            len(self._records),
            len(self._plan),
            len(self._plan.media_columns),
        )
        self.view_changed.emit()

    def set_loading(self, loading: bool) -> None:
        if self._loading == bool(loading):
            return
        self._loading = bool(loading)
        self.view_changed.emit()

    @property
    def is_loading(self) -> bool:
        return self._loading

    @property
    def records(self) -> list[Any]:
        """Records in display order."""
        return list(self._view)

    @property
    def descriptors(self) -> list[ColumnDescriptor]:
        return list(self._descriptors)

    @property
    def plan(self) -> ColumnRenderPlan:
        return self._plan

    @property
    def media_summaries(self) -> list[MediaColumnSummary]:
        return list(self._summaries)

    @property
    def sort_spec(self) -> SortSpec | None:
        return self._sort_spec

    def record_at(self, row: int) -> Any | None:
        """Record at a display row, None (with a warning) when out of range."""
        if isinstance(row, bool) or not isinstance(row, int) or not 0 <= row < len(self._view):
            logger.warning(
                "[TableRenderer] Row %r out of range (0..%d)", row, len(self._view) - 1
            )
            return None
        return self._view[row]

    # =====================================
    # Rendering
    # =====================================

    def render(self) -> RenderedGrid:
        """Snapshot of headers, cells, empty-state text and summary line."""
        headers = [self.header_view(column) for column in self._plan]
        rows = [
            [self._render_cell(record, column) for column in self._plan] for record in self._view
        ]

        if self._loading:
            empty_text = LOADING_TABLE_TEXT
        elif not rows:
            empty_text = EMPTY_TABLE_TEXT
        else:
            empty_text = None

        return RenderedGrid(headers=headers, rows=rows, empty_text=empty_text, summary=self.summary_text())

    def header_view(self, column: ColumnPlan) -> HeaderView:
        indicator = None
        if self._sort_spec is not None and self._sort_spec.field == column.key:
            indicator = self._sort_spec.direction.value

        if not column.is_media:
            return HeaderView(
                key=column.key,
                label=column.header,
                sortable=column.sortable,
                sort_indicator=indicator,
            )

        selected = self.selection_store.selected_count(column.key)
        return HeaderView(
            key=column.key,
            label=column.header,
            sortable=column.sortable,
            sort_indicator=indicator,
            is_media=True,
            media_kind=column.media_kind,
            file_count=self._file_count(column.key),
            selected_count=selected,
            selection_state=self.selection_state(column.key),
            can_bulk_download=selected > 0,
        )

    def render_cell(self, row: int, key: str) -> RenderedCell | None:
        record = self.record_at(row)
        column = self._plan.column(key)
        if record is None or column is None:
            return None
        return self._render_cell(record, column)

    def summary_text(self) -> str:
        text = f"Showing {len(self._view)} records • {len(self._plan)} columns"
        total = total_media_files(self._summaries)
        if self._summaries:
            text += f" • {total} files"
        return text

    def _render_cell(self, record: Any, column: ColumnPlan) -> RenderedCell:
        display = self._plan.render_cell(record, column.key)
        if isinstance(display, MediaCellView) and display.has_file:
            return RenderedCell(
                key=column.key,
                display=display,
                selected=self.selection_store.is_selected(column.key, display.url),
                downloading=self.is_downloading(display.url),
            )
        return RenderedCell(key=column.key, display=display)

    def _file_count(self, key: str) -> int:
        for summary in self._summaries:
            if summary.key == key:
                return summary.count
        return 0

    # =====================================
    # Sorting
    # =====================================

    def activate_header(self, key: str) -> SortSpec | None:
        """Header click: toggle the active field or start a new one ascending.

        Returns:
            The new sort spec, or None if the column is not sortable

        """
        if not self._plan.is_sortable(key):
            logger.debug(
                "[TableRenderer] Ignoring header click on non-sortable '%s'",
                key,
                extra={"dev_only": True},
            )
            return None

        spec = SortEngine.next_spec(self._sort_spec, key)
        self.set_sort(spec)
        return spec

    def set_sort(self, spec: SortSpec | None) -> None:
        if spec is not None and not self._plan.is_sortable(spec.field):
            logger.warning("[TableRenderer] Cannot sort by '%s'", spec.field)
            return
        if spec == self._sort_spec:
            return

        self._sort_spec = spec
        self._apply_sort()
        if spec is not None:
            logger.info("[TableRenderer] Sort by %s %s", spec.field, spec.direction.value)
            self.sort_changed.emit(spec.field, spec.direction.value)
        self.view_changed.emit()

    def _apply_sort(self) -> None:
        if self.external_sort or self._sort_spec is None:
            self._view = list(self._records)
        else:
            self._view = self.sort_engine.sort(self._records, self._sort_spec)

    # =====================================
    # Interaction
    # =====================================

    def click_cell(self, row: int, key: str, region: CellRegion | str = CellRegion.BODY) -> None:
        """Route a click on a cell region.

        BODY emits row_clicked; embedded controls act on the cell's file only.
        """
        try:
            region = CellRegion(region)
        except ValueError:
            logger.warning("[TableRenderer] Unknown cell region %r", region)
            return

        record = self.record_at(row)
        if record is None:
            return

        if region is CellRegion.BODY:
            logger.debug(
                "[TableRenderer] Row %d clicked", row, extra={"dev_only": True}
            )
            self.row_clicked.emit(record)
            return

        column = self._plan.column(key)
        if column is None or not column.is_media:
            logger.debug(
                "[TableRenderer] %s click on non-media column '%s' ignored",
                region.value,
                key,
                extra={"dev_only": True},
            )
            return

        url = record.get(key) if isinstance(record, Mapping) else None
        if region is CellRegion.CHECKBOX:
            self.toggle_file(key, url)
        elif region is CellRegion.PREVIEW:
            self.preview(key, url)
        elif region is CellRegion.DOWNLOAD:
            self.start_download(url)

    # =====================================
    # Selection
    # =====================================

    def toggle_file(self, key: str, url: Any) -> bool:
        if not self._is_media_key(key):
            return False
        return self.selection_store.toggle(key, url)

    def toggle_all_files(self, key: str) -> set[str]:
        """Select every file of the column in view, or clear if all are selected."""
        if not self._is_media_key(key):
            return set()
        return self.selection_store.toggle_all(key, valid_urls(self._view, key))

    def clear_selection(self, key: str | None = None) -> None:
        if key is None:
            self.selection_store.clear_all()
        else:
            self.selection_store.clear(key)

    def selection_state(self, key: str) -> SelectionState:
        return self.selection_store.selection_state(key, valid_urls(self._view, key))

    def _sync_selection(self) -> None:
        media_keys = {column.key for column in self._plan.media_columns}
        for key in self.selection_store.selected_columns():
            if key in media_keys:
                self.selection_store.retain(key, valid_urls(self._records, key))
            else:
                self.selection_store.clear(key)

    def _is_media_key(self, key: str) -> bool:
        column = self._plan.column(key)
        return column is not None and column.is_media

    def _on_selection_changed(self, _column_key: str, _urls: list) -> None:
        self.view_changed.emit()

    # =====================================
    # Files
    # =====================================

    def preview(self, key: str, url: Any) -> bool:
        """Open an image or document externally."""
        column = self._plan.column(key)
        if column is None or column.media_kind.value not in PREVIEWABLE_KINDS:
            logger.debug(
                "[TableRenderer] Preview not available for column '%s'",
                key,
                extra={"dev_only": True},
            )
            return False
        if not is_file_value(url):
            return False
        return bool(self.viewer.open(url))

    def download(self, url: Any, file_name: str | None = None) -> DownloadResult | None:
        """Download one file on the calling thread, falling back to opening it externally.

        Returns:
            The result, or None when the same URL is already downloading

        """
        if not is_file_value(url):
            logger.warning("[TableRenderer] Nothing to download: %r", url)
            return DownloadResult.failure(str(url), "Invalid URL")
        if not self._claim_download(url):
            return None

        result = None
        try:
            result = self.download_service.download(url, file_name)
            return result
        finally:
            self._release_download(url, result)

    def start_download(self, url: Any, file_name: str | None = None) -> DownloadWorker | None:
        """Download one file on a DownloadWorker thread.

        The URL stays in the in-flight set (is_downloading) until the worker
        finishes; download_finished(result) is then emitted from that thread.

        Returns:
            The started worker, or None for an invalid or already downloading URL

        """
        if not is_file_value(url):
            logger.warning("[TableRenderer] Nothing to download: %r", url)
            return None
        if not self._claim_download(url):
            return None

        worker = DownloadWorker(self.download_service, url, file_name)
        worker.download_finished.connect(lambda result: self._release_download(url, result))
        with self._download_lock:
            self._download_workers = [w for w in self._download_workers if w.is_alive()]
            self._download_workers.append(worker)
        worker.start()
        return worker

    def wait_for_downloads(self, timeout: float | None = None) -> bool:
        """Join background single-file downloads; True if none is left running."""
        with self._download_lock:
            workers = list(self._download_workers)
        finished = all([worker.wait(timeout) for worker in workers])
        with self._download_lock:
            self._download_workers = [w for w in self._download_workers if w.is_alive()]
        return finished

    def is_downloading(self, url: Any) -> bool:
        with self._download_lock:
            return url in self._downloading

    def _claim_download(self, url: str) -> bool:
        with self._download_lock:
            if url in self._downloading:
                logger.debug(
                    "[TableRenderer] Download already in flight: %s",
                    url,
                    extra={"dev_only": True},
                )
                return False
            self._downloading.add(url)

        self.download_state_changed.emit(url, True)
        self.view_changed.emit()
        return True

    def _release_download(self, url: str, result: DownloadResult | None) -> None:
        with self._download_lock:
            self._downloading.discard(url)

        self.download_state_changed.emit(url, False)
        self.view_changed.emit()
        if result is not None:
            self.download_finished.emit(result)

    def can_bulk_download(self, key: str) -> bool:
        return self._is_media_key(key) and self.selection_store.selected_count(key) > 0

    def bulk_download(self, key: str) -> list[DownloadResult]:
        """Export the column's selection synchronously (see BulkExportWorker for async)."""
        if not self.can_bulk_download(key):
            logger.debug(
                "[TableRenderer] No files selected in '%s'", key, extra={"dev_only": True}
            )
            return []
        return self.orchestrator.export_selected(key)
