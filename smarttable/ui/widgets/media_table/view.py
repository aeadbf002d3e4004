"""Module: view.py

Date: 2026-10-19

MediaTableView - QTableView wired to a TableRenderer.

Header clicks go to TableRenderer.activate_header; body clicks become
click_cell(row, key, BODY) unless the cell delegate already consumed the
click on an embedded control.
"""

from smarttable.controllers.table_renderer import CellRegion, TableRenderer
from smarttable.core.pyqt_imports import QAbstractItemView, QHeaderView, QTableView
from smarttable.models.media_table_model import MediaTableModel
from smarttable.ui.delegates.media_cell_delegate import MediaCellDelegate
from smarttable.utils.logging.logger_factory import get_cached_logger

logger = get_cached_logger(__name__)


class MediaTableView(QTableView):
    """Table view for smart table records."""

    def __init__(self, renderer: TableRenderer, parent=None) -> None:
        super().__init__(parent)
        self.renderer = renderer

        self.table_model = MediaTableModel(renderer, self)
        self.setModel(self.table_model)

        self.cell_delegate = MediaCellDelegate(renderer, self)
        self.setItemDelegate(self.cell_delegate)

        self.setSelectionBehavior(QAbstractItemView.SelectRows)
        self.setSelectionMode(QAbstractItemView.SingleSelection)
        self.setEditTriggers(QAbstractItemView.NoEditTriggers)
        self.setAlternatingRowColors(True)
        self.setWordWrap(False)
        # Sorting is driven by header clicks through the renderer
        self.setSortingEnabled(False)

        header = self.horizontalHeader()
        header.setSectionsClickable(True)
        header.setSectionResizeMode(QHeaderView.Interactive)
        header.setStretchLastSection(True)
        header.setHighlightSections(False)
        header.sectionClicked.connect(self._on_header_clicked)

        self.verticalHeader().setDefaultSectionSize(28)
        self.clicked.connect(self._on_cell_clicked)

    def _on_header_clicked(self, section: int) -> None:
        key = self.table_model.column_key(section)
        if key is None:
            return
        logger.debug(
            "[MediaTableView] Header clicked: %s", key, extra={"dev_only": True}
        )
        self.renderer.activate_header(key)

    def _on_cell_clicked(self, index) -> None:
        if self.cell_delegate.take_consumed(index):
            return
        key = self.table_model.column_key(index.column())
        if key is None:
            return
        self.renderer.click_cell(index.row(), key, CellRegion.BODY)
