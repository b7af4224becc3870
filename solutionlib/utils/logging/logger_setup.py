"""Module: logger_setup.py.

Author: Michael Economou
Date: 2026-03-02

Provides the ConfigureLogger class for setting up logging in the application.
The logger is configured to log INFO and higher to the console, ERROR and
higher to <log_name>.log, and DEBUG and higher to <log_name>_debug.log
(optional). Levels and rotation sizes come from solutionlib.config.
"""

import contextlib
import logging
import os
import sys
from datetime import datetime

from solutionlib.config import (
    LOG_CONSOLE_LEVEL,
    LOG_DEBUG_FILE_BACKUP_COUNT,
    LOG_DEBUG_FILE_ENABLED,
    LOG_DEBUG_FILE_MAX_BYTES,
    LOG_FILE_BACKUP_COUNT,
    LOG_FILE_LEVEL,
    LOG_FILE_MAX_BYTES,
    LOG_TO_CONSOLE,
    LOG_TO_FILE,
)
from solutionlib.utils.logging.logger_file_helper import add_file_handler
from solutionlib.utils.logging.logger_helper import DevOnlyFilter, SafeConsoleFormatter

CONSOLE_LOG_FORMAT = "[%(levelname)s] %(message)s"


class ConfigureLogger:
    """Configures application-wide logging.

    Handlers are installed once per target logger; constructing a second
    ConfigureLogger for the same logger only adjusts the console level.
    """

    _MARKER = "_solutionlib_configured"

    def __init__(
        self,
        log_name: str = "solutionlib",
        log_dir: str | os.PathLike[str] | None = None,
        console_level: int | None = None,
        logger_name: str = "",
        to_console: bool = LOG_TO_CONSOLE,
        to_file: bool = LOG_TO_FILE,
        debug_file: bool = LOG_DEBUG_FILE_ENABLED,
    ) -> None:
        """Initializes and configures the logger.

        Args:
            log_name: Base name for the log files.
            log_dir: Directory to store log files (defaults to AppPaths logs dir).
            console_level: Logging level for the console (defaults to config).
            logger_name: Logger to configure ("" is the root logger).
            to_console: Whether to install the console handler.
            to_file: Whether to install the error file handler.
            debug_file: Whether to install the debug file handler.

        """
        if console_level is None:
            console_level = getattr(logging, LOG_CONSOLE_LEVEL, logging.INFO)

        self.logger = logging.getLogger(logger_name)
        self.logger.setLevel(logging.DEBUG)  # Accept everything; handlers filter levels
        self.console_handler: logging.Handler | None = None

        if getattr(self.logger, self._MARKER, False):
            for handler in self.logger.handlers:
                if getattr(handler, self._MARKER, False):
                    handler.setLevel(console_level)
            return

        if to_console:
            self._setup_console_handler(console_level)

        if to_file or debug_file:
            if log_dir is None:
                from solutionlib.utils.paths import AppPaths

                log_dir = AppPaths.get_logs_dir()
            os.makedirs(log_dir, exist_ok=True)
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

            if to_file:
                add_file_handler(
                    logger=self.logger,
                    log_path=os.path.join(log_dir, f"{log_name}_{timestamp}.log"),
                    level=getattr(logging, LOG_FILE_LEVEL, logging.ERROR),
                    max_bytes=LOG_FILE_MAX_BYTES,
                    backup_count=LOG_FILE_BACKUP_COUNT,
                )
            if debug_file:
                add_file_handler(
                    logger=self.logger,
                    log_path=os.path.join(log_dir, f"{log_name}_debug_{timestamp}.log"),
                    level=logging.DEBUG,
                    max_bytes=LOG_DEBUG_FILE_MAX_BYTES,
                    backup_count=LOG_DEBUG_FILE_BACKUP_COUNT,
                )

        setattr(self.logger, self._MARKER, True)

    def _setup_console_handler(self, level: int) -> None:
        """Sets up console handler with UTF-8-safe output and DevOnlyFilter."""
        console_handler = logging.StreamHandler(sys.stdout)

        with contextlib.suppress(AttributeError, ValueError):
            console_handler.stream.reconfigure(encoding="utf-8")

        console_handler.setLevel(level)
        console_handler.addFilter(DevOnlyFilter())
        console_handler.setFormatter(SafeConsoleFormatter(CONSOLE_LOG_FORMAT))
        setattr(console_handler, self._MARKER, True)

        self.logger.addHandler(console_handler)
        self.console_handler = console_handler
