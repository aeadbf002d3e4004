"""Media table view package."""

from smarttable.ui.widgets.media_table.view import MediaTableView

__all__ = ["MediaTableView"]
