"""Module: solution_persistence.py.

Author: Michael Economou
Date: 2026-03-08

Save/Load orchestration for the solution tree.

Handles:
- Asking the host UI for a destination/source file (FileDialogPort)
- Converting between the view-model tree and SolutionModel
- Running the file I/O, blocking or on a SolutionIOWorker thread
- Reporting record counts and failures (ReportPort)
- The is_processing busy flag

Storage errors are caught here, logged, reported and returned as failure
results; they never reach the caller as exceptions.
"""

import sqlite3
import threading
from collections.abc import Callable
from functools import partial
from pathlib import Path

from solutionlib.app.ports import FileDialogPort, ReportPort
from solutionlib.app.services.solution_io_worker import SolutionIOWorker
from solutionlib.config import DEFAULT_SOLUTION_NAME
from solutionlib.core.solution_storage import load_model, save_model
from solutionlib.core.view_model_converter import ViewModelModelConverter
from solutionlib.domain.errors import FailureKind, SolutionStoreError, UnknownItemTypeError
from solutionlib.domain.results import OperationResult, StoreRecordCounts
from solutionlib.domain.solution_model import SolutionModel
from solutionlib.models.solution_view_model import SolutionViewModel
from solutionlib.utils.events import Observable, Signal
from solutionlib.utils.logging.logger_factory import get_cached_logger
from solutionlib.utils.paths import AppPaths

logger = get_cached_logger(__name__)

# prepare step result: either the final outcome or the I/O job still to run
_Prepared = OperationResult | Callable[[], OperationResult]
_Finisher = Callable[[OperationResult, SolutionViewModel], None]


class LoggingReporter:
    """ReportPort that writes to the log; used when the host supplies none."""

    def records_written(self, counts: StoreRecordCounts) -> None:
        logger.info("[SolutionPersistence] %s written", counts)

    def records_read(self, counts: StoreRecordCounts) -> None:
        logger.info("[SolutionPersistence] %s read", counts)

    def error(self, kind: FailureKind, message: str) -> None:
        logger.error("[SolutionPersistence] %s: %s", kind.value, message)


class SolutionPersistenceService(Observable):
    """Saves and loads the solution shown by the UI.

    Only one save or load runs at a time; a second request while one is in
    flight returns a BUSY failure without touching any file.

    Usage:
        service = SolutionPersistenceService(dialogs=my_dialogs)
        result = service.save_solution(solution)
        if result.failed:
            ...
    """

    processing_changed = Signal(bool)

    def __init__(
        self,
        dialogs: FileDialogPort,
        reporter: ReportPort | None = None,
        converter: ViewModelModelConverter | None = None,
        default_dir: str | Path | None = None,
        dispatch: Callable[[Callable[[], None]], None] | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            dialogs: File pickers of the host UI
            reporter: Sink for counts and errors (defaults to the log)
            converter: View-model/model converter
            default_dir: Directory the dialogs open in (defaults to the desktop)
            dispatch: Runs worker completions on the host's UI thread; by
                default they run on the worker thread

        """
        super().__init__()
        self._dialogs = dialogs
        self._reporter: ReportPort = reporter or LoggingReporter()
        self._converter = converter or ViewModelModelConverter()
        self._default_dir = Path(default_dir) if default_dir else AppPaths.get_default_solution_dir()
        self._dispatch = dispatch or _call_now
        self._lock = threading.Lock()
        self._is_processing = False
        self._worker: SolutionIOWorker | None = None
        self.last_path: str | None = None

    @property
    def is_processing(self) -> bool:
        with self._lock:
            return self._is_processing

    @property
    def default_dir(self) -> Path:
        return self._default_dir

    # ====================================================================
    # Public API
    # ====================================================================

    def save_solution(self, solution: SolutionViewModel) -> OperationResult:
        """Ask for a destination and save the solution, blocking until done."""
        return self._run_blocking(self._prepare_save, self._finish_save, solution)

    def load_solution(self, solution: SolutionViewModel) -> OperationResult:
        """Ask for a file and load it into ``solution``, blocking until done."""
        return self._run_blocking(self._prepare_load, self._finish_load, solution)

    def save_solution_async(
        self,
        solution: SolutionViewModel,
        on_finished: Callable[[OperationResult], None] | None = None,
    ) -> SolutionIOWorker | None:
        """Save with the file write on a background worker.

        The dialog and the conversion run on the calling thread. Returns the
        started worker, or None when the operation ended without file I/O
        (cancelled, busy or not convertible); ``on_finished`` is called in
        every case.
        """
        return self._run_async(
            self._prepare_save, self._finish_save, solution, on_finished, "SolutionSaveWorker"
        )

    def load_solution_async(
        self,
        solution: SolutionViewModel,
        on_finished: Callable[[OperationResult], None] | None = None,
    ) -> SolutionIOWorker | None:
        """Load with the file read on a background worker.

        ``solution`` is repopulated on completion, and only if the load
        succeeded.
        """
        return self._run_async(
            self._prepare_load, self._finish_load, solution, on_finished, "SolutionLoadWorker"
        )

    # ====================================================================
    # Operation steps
    # ====================================================================

    def _prepare_save(self, solution: SolutionViewModel) -> _Prepared:
        path = self._dialogs.pick_save_destination(
            self._default_path(), str(self._default_dir), True, solution.solution_file_filter
        )
        if not path:
            logger.info("[SolutionPersistence] Save cancelled by user")
            return OperationResult.no_op()

        try:
            model = self._converter.to_model(solution)
        except UnknownItemTypeError as e:
            return self._failure(e, path, "convert solution for")
        return partial(self._write_job, path, model)

    def _prepare_load(self, solution: SolutionViewModel) -> _Prepared:
        path = self._dialogs.pick_open_source(
            solution.solution_file_filter, self._default_path(), str(self._default_dir)
        )
        if not path:
            logger.info("[SolutionPersistence] Load cancelled by user")
            return OperationResult.no_op()
        return partial(self._read_job, path)

    def _write_job(self, path: str, model: SolutionModel) -> OperationResult:
        try:
            counts = save_model(path, model)
        except (SolutionStoreError, OSError, sqlite3.Error) as e:
            return self._failure(e, path, "save")
        return OperationResult.success(path, counts, model)

    def _read_job(self, path: str) -> OperationResult:
        try:
            model, counts = load_model(path)
        except (SolutionStoreError, OSError, sqlite3.Error) as e:
            return self._failure(e, path, "load")
        return OperationResult.success(path, counts, model)

    def _finish_save(self, result: OperationResult, _solution: SolutionViewModel) -> None:
        if result.succeeded:
            self.last_path = result.path
            self._reporter.records_written(result.counts)
        elif result.failed:
            self._reporter.error(result.kind, result.message)

    def _finish_load(self, result: OperationResult, solution: SolutionViewModel) -> None:
        if result.succeeded:
            self._converter.to_view_model(result.model, solution)
            root = solution.get_root_item()
            if root is not None:
                root.is_item_expanded = True
            self.last_path = result.path
            self._reporter.records_read(result.counts)
        elif result.failed:
            self._reporter.error(result.kind, result.message)

    # ====================================================================
    # Execution
    # ====================================================================

    def _run_blocking(
        self,
        prepare: Callable[[SolutionViewModel], _Prepared],
        finish: _Finisher,
        solution: SolutionViewModel,
    ) -> OperationResult:
        if not self._try_begin():
            return self._busy_result()
        try:
            prepared = prepare(solution)
            result = prepared if isinstance(prepared, OperationResult) else prepared()
            finish(result, solution)
            return result
        finally:
            self._end()

    def _run_async(
        self,
        prepare: Callable[[SolutionViewModel], _Prepared],
        finish: _Finisher,
        solution: SolutionViewModel,
        on_finished: Callable[[OperationResult], None] | None,
        worker_name: str,
    ) -> SolutionIOWorker | None:
        if not self._try_begin():
            result = self._busy_result()
            if on_finished is not None:
                on_finished(result)
            return None

        try:
            prepared = prepare(solution)
        except BaseException:
            self._end()
            raise

        if isinstance(prepared, OperationResult):
            self._complete(finish, solution, on_finished, prepared)
            return None

        worker = SolutionIOWorker(prepared, f"{worker_name} running", name=worker_name)
        worker.finished_processing.connect(
            lambda result: self._dispatch(
                partial(self._complete, finish, solution, on_finished, result)
            )
        )
        self._worker = worker
        try:
            worker.start()
        except RuntimeError:
            self._worker = None
            self._end()
            raise
        logger.debug("[SolutionPersistence] %s started", worker_name, extra={"dev_only": True})
        return worker

    def _complete(
        self,
        finish: _Finisher,
        solution: SolutionViewModel,
        on_finished: Callable[[OperationResult], None] | None,
        result: OperationResult,
    ) -> None:
        try:
            finish(result, solution)
        finally:
            self._worker = None
            self._end()
        if on_finished is not None:
            on_finished(result)

    def _try_begin(self) -> bool:
        with self._lock:
            if self._is_processing:
                return False
            self._is_processing = True
        self.processing_changed.emit(True)
        return True

    def _end(self) -> None:
        with self._lock:
            self._is_processing = False
        self.processing_changed.emit(False)

    def _busy_result(self) -> OperationResult:
        message = "Another save or load operation is still running"
        logger.warning("[SolutionPersistence] %s", message)
        self._reporter.error(FailureKind.BUSY, message)
        return OperationResult.failure(FailureKind.BUSY, message)

    def _failure(self, error: Exception, path: str, action: str) -> OperationResult:
        """Log and map an error raised by the current operation."""
        logger.exception("[SolutionPersistence] Failed to %s '%s'", action, path)
        if isinstance(error, SolutionStoreError):
            return OperationResult.from_error(error, path)
        return OperationResult.failure(FailureKind.IO_FAILURE, str(error), path)

    def _default_path(self) -> str:
        if self.last_path:
            return self.last_path
        return str(self._default_dir / DEFAULT_SOLUTION_NAME)


def _call_now(callback: Callable[[], None]) -> None:
    callback()
