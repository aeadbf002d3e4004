"""Module: media_table_model.py

Date: 2026-10-19

QAbstractTableModel over a TableRenderer.

The model holds the last RenderedGrid and re-reads it whenever the renderer
reports view_changed. That notification may arrive from a download worker
thread (post-export selection reset), so it is relayed through a Qt signal
and the reset always happens on the model's own thread.

Features:
- Display/ToolTip/CheckState roles for text and media cells
- Header labels with sort arrows and file counts
- sort() routes to the renderer's sort engine
"""

from typing import Any

from smarttable.controllers.table_renderer import RenderedCell, RenderedGrid, TableRenderer
from smarttable.core.columns.value_formatter import DisplayValue
from smarttable.core.pyqt_imports import QAbstractTableModel, QColor, QFont, QModelIndex, Qt, pyqtSignal
from smarttable.models.sort_spec import SortDirection, SortSpec
from smarttable.utils.logging.logger_factory import get_cached_logger

logger = get_cached_logger(__name__)

# Custom roles
CELL_ROLE = Qt.UserRole + 1
RECORD_ROLE = Qt.UserRole + 2

NULL_COLOR = QColor("#8a8a8a")


class MediaTableModel(QAbstractTableModel):
    """Table model presenting a TableRenderer's grid."""

    # Relay for renderer.view_changed (may be emitted from a worker thread)
    _refresh_requested = pyqtSignal()

    def __init__(self, renderer: TableRenderer, parent: Any = None) -> None:
        super().__init__(parent)
        self.renderer = renderer
        self._grid: RenderedGrid = renderer.render()

        self._refresh_requested.connect(self.refresh)
        renderer.view_changed.connect(self._refresh_requested.emit)

    # =====================================
    # Accessors
    # =====================================

    @property
    def grid(self) -> RenderedGrid:
        return self._grid

    def column_key(self, column: int) -> str | None:
        if 0 <= column < len(self._grid.headers):
            return self._grid.headers[column].key
        return None

    def cell_at(self, index: QModelIndex) -> RenderedCell | None:
        if not index.isValid():
            return None
        row, column = index.row(), index.column()
        if row >= len(self._grid.rows) or column >= len(self._grid.headers):
            return None
        return self._grid.rows[row][column]

    def refresh(self) -> None:
        """Re-read the renderer and reset views."""
        self.beginResetModel()
        self._grid = self.renderer.render()
        self.endResetModel()
        logger.debug(
            "[MediaTableModel] Refreshed: %d rows x %d columns",
            self._grid.row_count,
            self._grid.column_count,
            extra={"dev_only": True},
        )

    # =====================================
    # Qt model interface
    # =====================================

    def rowCount(self, parent: QModelIndex = QModelIndex()) -> int:
        if parent.isValid():
            return 0
        return self._grid.row_count

    def columnCount(self, parent: QModelIndex = QModelIndex()) -> int:
        if parent.isValid():
            return 0
        return self._grid.column_count

    def data(self, index: QModelIndex, role: int = Qt.DisplayRole) -> Any:
        cell = self.cell_at(index)
        if cell is None:
            return None

        if role == Qt.DisplayRole:
            return cell.text

        if role == Qt.ToolTipRole:
            if cell.is_media:
                return cell.display.url
            return cell.display.tooltip

        if role == Qt.CheckStateRole and cell.is_media and cell.display.has_file:
            return Qt.Checked if cell.selected else Qt.Unchecked

        if role == Qt.ForegroundRole and isinstance(cell.display, DisplayValue):
            if cell.display.style == "null":
                return NULL_COLOR
            return None

        if role == Qt.FontRole and isinstance(cell.display, DisplayValue):
            if cell.display.style == "code":
                font = QFont("monospace")
                font.setStyleHint(QFont.Monospace)
                return font
            if cell.display.style == "null":
                font = QFont()
                font.setItalic(True)
                return font
            return None

        if role == CELL_ROLE:
            return cell

        if role == RECORD_ROLE:
            return self.renderer.record_at(index.row())

        return None

    def setData(self, index: QModelIndex, value: Any, role: int = Qt.EditRole) -> bool:
        """CheckState changes toggle the file's selection."""
        cell = self.cell_at(index)
        if role != Qt.CheckStateRole or cell is None or not cell.is_media or not cell.display.has_file:
            return False

        wanted = value == Qt.Checked or value is True
        if wanted != cell.selected:
            self.renderer.toggle_file(cell.key, cell.display.url)
        return True

    def flags(self, index: QModelIndex) -> Qt.ItemFlags:
        if not index.isValid():
            return Qt.NoItemFlags
        flags = Qt.ItemIsEnabled | Qt.ItemIsSelectable
        cell = self.cell_at(index)
        if cell is not None and cell.is_media and cell.display.has_file:
            flags |= Qt.ItemIsUserCheckable
        return flags

    def headerData(self, section: int, orientation: Qt.Orientation, role: int = Qt.DisplayRole) -> Any:
        if orientation == Qt.Vertical:
            return str(section + 1) if role == Qt.DisplayRole else None

        if not 0 <= section < len(self._grid.headers):
            return None
        header = self._grid.headers[section]

        if role == Qt.DisplayRole:
            return header.text
        if role == Qt.ToolTipRole:
            if header.is_media:
                return f"{header.label}: {header.selected_count} of {header.file_count} files selected"
            return header.label if header.sortable else f"{header.label} (not sortable)"
        if role == Qt.TextAlignmentRole:
            return Qt.AlignLeft | Qt.AlignVCenter
        return None

    def sort(self, column: int, order: Qt.SortOrder = Qt.AscendingOrder) -> None:
        key = self.column_key(column)
        if key is None:
            return
        direction = SortDirection.ASC if order == Qt.AscendingOrder else SortDirection.DESC
        self.renderer.set_sort(SortSpec(key, direction))
