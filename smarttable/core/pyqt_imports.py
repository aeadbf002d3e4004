"""Module: pyqt_imports.py

Date: 2026-10-19

Centralized PyQt5 imports to reduce import clutter in UI modules.
Groups related Qt classes together for better organization.
"""

# Core Qt classes
from PyQt5.QtCore import (
    QAbstractTableModel,
    QEvent,
    QModelIndex,
    QObject,
    QPoint,
    QRect,
    QSize,
    Qt,
    QTimer,
    QUrl,
    pyqtSignal,
    pyqtSlot,
)

# GUI classes for drawing, events, and visual elements
from PyQt5.QtGui import (
    QColor,
    QDesktopServices,
    QFont,
    QFontMetrics,
    QPainter,
)

# Widget classes for UI components
from PyQt5.QtWidgets import (
    QAbstractItemView,
    QApplication,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QMainWindow,
    QProgressBar,
    QPushButton,
    QStyle,
    QStyledItemDelegate,
    QStyleOptionButton,
    QStyleOptionViewItem,
    QTableView,
    QVBoxLayout,
    QWidget,
)

__all__ = [
    # Core
    "QAbstractTableModel", "QEvent", "QModelIndex", "QObject", "QPoint", "QRect", "QSize", "Qt",
    "QTimer", "QUrl", "pyqtSignal", "pyqtSlot",
    # GUI
    "QColor", "QDesktopServices", "QFont", "QFontMetrics", "QPainter",
    # Widgets
    "QAbstractItemView", "QApplication", "QHBoxLayout", "QHeaderView", "QLabel", "QMainWindow",
    "QProgressBar", "QPushButton", "QStyle", "QStyledItemDelegate", "QStyleOptionButton",
    "QStyleOptionViewItem", "QTableView", "QVBoxLayout", "QWidget",
]
