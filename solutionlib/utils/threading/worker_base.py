"""Qt-free worker base class for background operations.

Author: Michael Economou
Date: 2026-03-03

Provides a QThread-compatible interface using standard threading.Thread,
so the persistence layer can run file I/O off the UI thread without a Qt
dependency. There is no cancellation: a started worker runs to completion
or failure.
"""

import threading
from abc import abstractmethod
from typing import Any

from solutionlib.utils.events import Observable, Signal
from solutionlib.utils.logging.logger_factory import get_cached_logger

logger = get_cached_logger(__name__)


class WorkerBase(threading.Thread, Observable):
    """Base class for background workers.

    Signals (Observable descriptors):
    - finished_processing: Emitted when worker completes (args: result)
    - status_updated: Emitted for status messages (args: message)

    Usage:
        class MyWorker(WorkerBase):
            def run(self):
                self.status_updated.emit("Working...")
                self.finished_processing.emit(result)

        worker = MyWorker()
        worker.finished_processing.connect(on_finished)
        worker.start()
    """

    finished_processing = Signal(object)
    status_updated = Signal(str)

    def __init__(self, name: str | None = None, daemon: bool = True) -> None:
        """Initialize worker.

        Args:
            name: Thread name (defaults to the class name)
            daemon: Whether thread should be daemon (default True)

        """
        threading.Thread.__init__(self, name=name or self.__class__.__name__, daemon=daemon)
        Observable.__init__(self)

    @abstractmethod
    def run(self) -> None:
        """Main worker execution method. Must be implemented by subclasses."""
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
