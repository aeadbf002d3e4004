"""Application state holders."""

from smarttable.app.state.selection_store import SelectionState, SelectionStore, valid_urls

__all__ = ["SelectionState", "SelectionStore", "valid_urls"]
