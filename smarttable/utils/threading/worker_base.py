"""Qt-free worker base class for background operations.

Date: 2026-10-19

Provides a QThread-compatible interface using standard threading.Thread.
This allows core modules to run background operations without Qt dependency.
"""

import threading
from abc import abstractmethod

from smarttable.utils.events import Observable, Signal


class WorkerBase(threading.Thread, Observable):
    """Base class for background workers.

    Signals (emitted from the worker thread):
    - finished_processing: Emitted when worker completes (args: success)
    - status_updated: Emitted for status messages (args: message)
    - progress_updated: Emitted for progress updates (args: current, total, info)

    Usage:
        class MyWorker(WorkerBase):
            def run(self):
                self.status_updated.emit("Working...")
                self.finished_processing.emit(True)

        worker = MyWorker()
        worker.finished_processing.connect(on_finished)
        worker.start()
    """

    finished_processing = Signal(bool)
    status_updated = Signal(str)
    progress_updated = Signal(int, int, str)

    def __init__(self, name: str | None = None, daemon: bool = True) -> None:
        """Initialize worker.

        Args:
            name: Thread name (default: Thread-N)
            daemon: Whether thread should be daemon (default True)

        """
        threading.Thread.__init__(self, name=name, daemon=daemon)
        Observable.__init__(self)

    @abstractmethod
    def run(self) -> None:
        """Main worker execution method, implemented by subclasses."""
        ...

    def isRunning(self) -> bool:
        """Check if worker thread is running (QThread compatibility)."""
        return self.is_alive()

    def wait(self, timeout: float | None = None) -> bool:
        """Wait for worker to finish (QThread compatibility).

        Args:
            timeout: Maximum time to wait in seconds (None = wait forever)

        Returns:
            True if thread finished, False if timeout occurred

        """
        self.join(timeout=timeout)
        return not self.is_alive()
