"""Threading helpers."""

from smarttable.utils.threading.worker_base import WorkerBase

__all__ = ["WorkerBase"]
