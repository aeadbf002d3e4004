"""Module: smart_table_widget.py

Date: 2026-10-19

SmartTableWidget - complete query-results panel.

Layout:
    title + summary line + refresh button
    one toolbar row per media column (selection count, select all, download selected)
    progress bar (visible during bulk downloads)
    table view, or the empty-state placeholder when there is nothing to show

Bulk downloads run on a BulkExportWorker thread and single downloads on a
DownloadWorker; their Observable signals are relayed through Qt signals so
every widget update happens on the GUI thread.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from smarttable.app.state import SelectionState
from smarttable.config import WINDOW_TITLE
from smarttable.controllers.table_renderer import HeaderView, TableRenderer
from smarttable.core.export.export_worker import BulkExportWorker
from smarttable.core.pyqt_imports import (
    QHBoxLayout,
    QLabel,
    QProgressBar,
    QPushButton,
    Qt,
    QVBoxLayout,
    QWidget,
    pyqtSignal,
)
from smarttable.models.column import ColumnOverride
from smarttable.ui.widgets.media_table.view import MediaTableView
from smarttable.utils.logging.logger_factory import get_cached_logger

logger = get_cached_logger(__name__)


class MediaColumnToolbar(QWidget):
    """Selection count, select all / deselect all and download selected for one column."""

    def __init__(self, renderer: TableRenderer, key: str, parent: Any = None) -> None:
        super().__init__(parent)
        self.renderer = renderer
        self.key = key

        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self.label = QLabel(self)
        self.select_button = QPushButton(self)
        self.download_button = QPushButton(self)

        layout.addWidget(self.label)
        layout.addStretch(1)
        layout.addWidget(self.select_button)
        layout.addWidget(self.download_button)

        self.select_button.clicked.connect(lambda: self.renderer.toggle_all_files(self.key))

    def update_from(self, header: HeaderView, busy: bool) -> None:
        self.label.setText(
            f"{header.label}: {header.selected_count} of {header.file_count} files selected"
        )
        all_selected = header.selection_state is SelectionState.FULL
        self.select_button.setText("Deselect all" if all_selected else "Select all")
        self.select_button.setEnabled(header.file_count > 0 and not busy)
        self.download_button.setText(f"Download selected ({header.selected_count})")
        self.download_button.setEnabled(header.can_bulk_download and not busy)


class SmartTableWidget(QWidget):
    """Query results table with file selection and downloads.

    Signals:
        row_clicked(record): A row body was clicked
        refresh_requested(): The refresh button was pressed
        export_finished(column_key, results): A bulk download completed
    """

    row_clicked = pyqtSignal(object)
    refresh_requested = pyqtSignal()
    export_finished = pyqtSignal(str, list)

    # Relays from non-GUI threads
    _view_changed = pyqtSignal()
    _export_progress = pyqtSignal(int, int, str)
    _export_done = pyqtSignal(str, list)
    _download_done = pyqtSignal(object)

    def __init__(
        self,
        renderer: TableRenderer | None = None,
        title: str = WINDOW_TITLE,
        parent: Any = None,
    ) -> None:
        super().__init__(parent)
        self.renderer = renderer or TableRenderer()
        self._toolbars: dict[str, MediaColumnToolbar] = {}
        self._worker: BulkExportWorker | None = None

        self._setup_ui(title)

        self._view_changed.connect(self._update_chrome)
        self._export_progress.connect(self._on_export_progress)
        self._export_done.connect(self._on_export_done)
        self._download_done.connect(self._on_download_done)
        self.renderer.view_changed.connect(self._view_changed.emit)
        self.renderer.download_finished.connect(self._download_done.emit)
        self.renderer.row_clicked.connect(self.row_clicked.emit)

        self._update_chrome()

    def _setup_ui(self, title: str) -> None:
        layout = QVBoxLayout(self)

        top = QHBoxLayout()
        self.title_label = QLabel(title, self)
        font = self.title_label.font()
        font.setBold(True)
        font.setPointSize(font.pointSize() + 2)
        self.title_label.setFont(font)
        self.summary_label = QLabel(self)
        self.refresh_button = QPushButton("Refresh", self)
        self.refresh_button.clicked.connect(self.refresh_requested.emit)
        top.addWidget(self.title_label)
        top.addSpacing(12)
        top.addWidget(self.summary_label)
        top.addStretch(1)
        top.addWidget(self.refresh_button)
        layout.addLayout(top)

        self.toolbar_layout = QVBoxLayout()
        layout.addLayout(self.toolbar_layout)

        self.progress_bar = QProgressBar(self)
        self.progress_bar.setVisible(False)
        self.status_label = QLabel(self)
        layout.addWidget(self.progress_bar)
        layout.addWidget(self.status_label)

        self.table_view = MediaTableView(self.renderer, self)
        self.placeholder = QLabel(self)
        self.placeholder.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.table_view, 1)
        layout.addWidget(self.placeholder, 1)

    # =====================================
    # Public API
    # =====================================

    def set_records(
        self,
        records: Sequence[Any] | None,
        column_keys: Sequence[str] | None = None,
        overrides: Mapping[str, ColumnOverride] | None = None,
    ) -> None:
        self.renderer.set_records(records, column_keys, overrides)

    def set_loading(self, loading: bool) -> None:
        self.renderer.set_loading(loading)

    def is_exporting(self) -> bool:
        return self._worker is not None and self._worker.isRunning()

    def start_bulk_download(self, key: str) -> bool:
        """Download the column's selected files in the background."""
        if self.is_exporting():
            logger.warning("[SmartTableWidget] A bulk download is already running")
            return False
        if not self.renderer.can_bulk_download(key):
            return False

        selected = self.renderer.selection_store.selected_urls(key)
        worker = BulkExportWorker(self.renderer.orchestrator, key, selected)
        worker.progress_updated.connect(self._export_progress.emit)
        worker.finished_processing.connect(lambda _ok: self._export_done.emit(key, worker.results))
        self._worker = worker

        self.progress_bar.setRange(0, len(selected))
        self.progress_bar.setValue(0)
        self.progress_bar.setVisible(True)
        self.status_label.setText(f"Downloading {len(selected)} files...")
        logger.info("[SmartTableWidget] Starting bulk download of %d files from '%s'", len(selected), key)

        worker.start()
        self._update_chrome()
        return True

    # =====================================
    # Updates
    # =====================================

    def _update_chrome(self) -> None:
        grid = self.renderer.render()
        self.summary_label.setText(grid.summary)

        show_placeholder = grid.empty_text is not None
        self.placeholder.setText(grid.empty_text or "")
        self.placeholder.setVisible(show_placeholder)
        self.table_view.setVisible(not show_placeholder)

        media_headers = [header for header in grid.headers if header.is_media]
        self._sync_toolbars([header.key for header in media_headers])
        busy = self.is_exporting()
        for header in media_headers:
            self._toolbars[header.key].update_from(header, busy)

    def _sync_toolbars(self, keys: list[str]) -> None:
        if list(self._toolbars) == keys:
            return

        for toolbar in self._toolbars.values():
            self.toolbar_layout.removeWidget(toolbar)
            toolbar.deleteLater()
        self._toolbars = {}

        for key in keys:
            toolbar = MediaColumnToolbar(self.renderer, key, self)
            toolbar.download_button.clicked.connect(lambda _checked=False, k=key: self.start_bulk_download(k))
            self.toolbar_layout.addWidget(toolbar)
            self._toolbars[key] = toolbar

    def _on_export_progress(self, current: int, total: int, url: str) -> None:
        self.progress_bar.setMaximum(max(total, 1))
        self.progress_bar.setValue(current)
        self.status_label.setText(f"Downloaded {current} of {total}: {url}")

    def _on_export_done(self, key: str, results: list) -> None:
        if self._worker is not None:
            self._worker.wait(1.0)
        self._worker = None
        self.progress_bar.setVisible(False)

        failed = [result for result in results if not result.succeeded]
        self.status_label.setText(
            f"Downloaded {len(results) - len(failed)} of {len(results)} files"
            + (f" ({len(failed)} failed)" if failed else "")
        )
        self.status_label.setToolTip("\n".join(f"{r.url}: {r.error}" for r in failed))
        if failed:
            logger.warning("[SmartTableWidget] %d downloads failed in '%s'", len(failed), key)

        self._update_chrome()
        self.export_finished.emit(key, results)

    def _on_download_done(self, result) -> None:
        if result.succeeded:
            name = result.saved_path.name if result.saved_path else result.url
            self.status_label.setText(f"Saved {name}")
            self.status_label.setToolTip(str(result.saved_path or ""))
        else:
            suffix = " (opened externally)" if result.fallback_opened else ""
            self.status_label.setText(f"Download failed: {result.error}{suffix}")
            self.status_label.setToolTip(result.url)
        self._update_chrome()
