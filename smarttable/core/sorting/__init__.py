"""Record sorting."""

from smarttable.core.sorting.sort_engine import SortEngine, SortMode

__all__ = ["SortEngine", "SortMode"]
