"""UI-agnostic controllers."""

from smarttable.controllers.table_renderer import (
    CellRegion,
    HeaderView,
    RenderedCell,
    RenderedGrid,
    TableRenderer,
)

__all__ = ["CellRegion", "HeaderView", "RenderedCell", "RenderedGrid", "TableRenderer"]
