"""Module: solution_io_worker.py.

Author: Michael Economou
Date: 2026-03-08

Background thread that runs one solution file read or write.

The job is a callable returning an OperationResult; the worker emits that
result through finished_processing. An unexpected exception is logged and
turned into an IO_FAILURE result so the completion signal always fires.
"""

from collections.abc import Callable

from solutionlib.domain.errors import FailureKind
from solutionlib.domain.results import OperationResult
from solutionlib.utils.logging.logger_factory import get_cached_logger
from solutionlib.utils.threading import WorkerBase

logger = get_cached_logger(__name__)


class SolutionIOWorker(WorkerBase):
    """Runs a save or load job off the caller's thread.

    Signals:
    - finished_processing(OperationResult)
    - status_updated(str)
    """

    def __init__(
        self,
        job: Callable[[], OperationResult],
        description: str = "Processing solution file",
        name: str | None = None,
    ) -> None:
        super().__init__(name=name)
        self._job = job
        self._description = description
        self.result: OperationResult | None = None

    def run(self) -> None:
        logger.debug("[SolutionIOWorker] %s started", self.name, extra={"dev_only": True})
        self.status_updated.emit(self._description)
        try:
            result = self._job()
        except Exception as e:
            logger.exception("[SolutionIOWorker] %s failed", self.name)
            result = OperationResult.failure(FailureKind.IO_FAILURE, str(e))

        self.result = result
        logger.debug(
            "[SolutionIOWorker] %s finished (%s)",
            self.name,
            result.status.value,
            extra={"dev_only": True},
        )
        self.finished_processing.emit(result)
