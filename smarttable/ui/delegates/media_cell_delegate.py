"""Module: media_cell_delegate.py

Date: 2026-10-19

Custom delegate for media (file reference) cells.

Handles:
- Painting checkbox, file name with size, preview and download glyphs
- Clicks on the embedded controls, which are consumed here so they never
  reach the row-click path
- Falls back to the default delegate for text cells
"""

from smarttable.controllers.table_renderer import CellRegion, RenderedCell, TableRenderer
from smarttable.core.pyqt_imports import (
    QColor,
    QEvent,
    QRect,
    QStyle,
    QStyledItemDelegate,
    QStyleOptionButton,
    Qt,
    QTimer,
)
from smarttable.models.media_table_model import CELL_ROLE
from smarttable.utils.logging.logger_factory import get_cached_logger

logger = get_cached_logger(__name__)

CHECKBOX_SIZE = 16
GLYPH_WIDTH = 22
CELL_PADDING = 4

PREVIEW_GLYPH = "👁"
DOWNLOAD_GLYPH = "⬇"
DOWNLOADING_GLYPH = "…"

NO_FILE_COLOR = QColor("#8a8a8a")


def control_rects(rect: QRect, cell: RenderedCell) -> dict:
    """Geometry of the embedded controls of a media cell.

    Layout (left to right): checkbox, text, preview glyph, download glyph.
    Cells without a file have no controls.
    """
    if not cell.is_media or not cell.display.has_file:
        return {}

    top = rect.top() + (rect.height() - CHECKBOX_SIZE) // 2
    rects = {
        CellRegion.CHECKBOX: QRect(rect.left() + CELL_PADDING, top, CHECKBOX_SIZE, CHECKBOX_SIZE),
        CellRegion.DOWNLOAD: QRect(rect.right() - GLYPH_WIDTH + 1, rect.top(), GLYPH_WIDTH, rect.height()),
    }
    if cell.display.can_preview:
        rects[CellRegion.PREVIEW] = QRect(
            rect.right() - 2 * GLYPH_WIDTH + 1, rect.top(), GLYPH_WIDTH, rect.height()
        )
    return rects


def region_at(rect: QRect, pos, cell: RenderedCell) -> CellRegion:
    """Which part of the cell a point falls in (BODY unless on a control)."""
    for region, control in control_rects(rect, cell).items():
        if control.contains(pos):
            return region
    return CellRegion.BODY


class MediaCellDelegate(QStyledItemDelegate):
    """Delegate for media cells.

    Control clicks are routed to TableRenderer.click_cell with their region
    on the next event loop turn; the view asks take_consumed() before
    treating a click as a row click.
    """

    def __init__(self, renderer: TableRenderer, parent=None):
        super().__init__(parent)
        self.renderer = renderer
        self._consumed = None
        logger.debug("[MediaCellDelegate] Initialized", extra={"dev_only": True})

    def take_consumed(self, index) -> bool:
        """True (once) if the last release on index was consumed by a control."""
        consumed = self._consumed == (index.row(), index.column())
        self._consumed = None
        return consumed

    def paint(self, painter, option, index):
        cell = index.data(CELL_ROLE)
        if not isinstance(cell, RenderedCell) or not cell.is_media:
            super().paint(painter, option, index)
            return

        # Background and selection highlight only
        self.initStyleOption(option, index)
        style = option.widget.style() if option.widget else None
        if style is not None:
            style.drawPrimitive(QStyle.PE_PanelItemViewItem, option, painter, option.widget)

        painter.save()
        rect = option.rect
        if option.state & QStyle.State_Selected:
            painter.setPen(option.palette.highlightedText().color())
        else:
            painter.setPen(option.palette.text().color())

        if not cell.display.has_file:
            painter.setPen(NO_FILE_COLOR)
            text_rect = rect.adjusted(CELL_PADDING, 0, -CELL_PADDING, 0)
            painter.drawText(text_rect, Qt.AlignLeft | Qt.AlignVCenter, cell.text)
            painter.restore()
            return

        rects = control_rects(rect, cell)

        checkbox = QStyleOptionButton()
        checkbox.rect = rects[CellRegion.CHECKBOX]
        checkbox.state = QStyle.State_Enabled | (QStyle.State_On if cell.selected else QStyle.State_Off)
        if style is not None:
            style.drawPrimitive(QStyle.PE_IndicatorCheckBox, checkbox, painter, option.widget)

        left = rects[CellRegion.CHECKBOX].right() + CELL_PADDING
        right = rects.get(CellRegion.PREVIEW, rects[CellRegion.DOWNLOAD]).left() - CELL_PADDING
        text_rect = QRect(left, rect.top(), max(0, right - left), rect.height())
        elided = option.fontMetrics.elidedText(cell.text, Qt.ElideMiddle, text_rect.width())
        painter.drawText(text_rect, Qt.AlignLeft | Qt.AlignVCenter, elided)

        if CellRegion.PREVIEW in rects:
            painter.drawText(rects[CellRegion.PREVIEW], Qt.AlignCenter, PREVIEW_GLYPH)
        glyph = DOWNLOADING_GLYPH if cell.downloading else DOWNLOAD_GLYPH
        painter.drawText(rects[CellRegion.DOWNLOAD], Qt.AlignCenter, glyph)
        painter.restore()

    def editorEvent(self, event, model, option, index):
        """Consume mouse events on embedded controls; act on left-button release.

        Returns:
            True if event was handled, False otherwise
        """
        cell = index.data(CELL_ROLE)
        if not isinstance(cell, RenderedCell) or not cell.is_media:
            return super().editorEvent(event, model, option, index)

        if event.type() not in (
            QEvent.MouseButtonPress,
            QEvent.MouseButtonRelease,
            QEvent.MouseButtonDblClick,
        ):
            return super().editorEvent(event, model, option, index)

        region = region_at(option.rect, event.pos(), cell)
        if region is CellRegion.BODY:
            # Left to the view's row-click handling
            return False

        if event.type() == QEvent.MouseButtonRelease and event.button() == Qt.LeftButton:
            key = model.column_key(index.column())
            logger.debug(
                "[MediaCellDelegate] %s clicked at row %d, column '%s'",
                region.value,
                index.row(),
                key,
                extra={"dev_only": True},
            )
            self._consumed = (index.row(), index.column())
            row = index.row()
            # Acting resets the model; never do that inside editorEvent
            QTimer.singleShot(0, lambda: self.renderer.click_cell(row, key, region))
        return True
