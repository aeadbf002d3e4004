"""Event system.

Pure Python event/signal implementation for decoupling observers from state changes.
"""

from smarttable.utils.events.observable import Observable, Signal

__all__ = ["Observable", "Signal"]
