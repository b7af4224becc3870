"""Module: logger_factory.py.

Author: Michael Economou
Date: 2026-03-02

Logger factory with caching.
Keeps a single logger instance per module name behind a lock so that the
storage engine and the background workers can request loggers from any
thread.
"""

import inspect
import logging
import threading


class LoggerFactory:
    """Thread-safe logger factory with caching.

    Maintains a single logger instance per module name and applies an
    optional global level to every logger it hands out.
    """

    _loggers: dict[str, logging.Logger] = {}
    _lock = threading.Lock()
    _global_level: int | None = None

    @classmethod
    def get_logger(cls, name: str | None = None) -> logging.Logger:
        """Get or create a cached logger for the given name.

        Args:
            name: Logger name, typically __name__ from the calling module

        Returns:
            Cached logger instance

        """
        if name is None:
            frame = inspect.currentframe()
            caller = frame.f_back if frame is not None else None
            name = caller.f_globals.get("__name__", "unknown") if caller else "unknown"

        with cls._lock:
            if name not in cls._loggers:
                logger = logging.getLogger(name)
                if cls._global_level is not None:
                    logger.setLevel(cls._global_level)
                cls._loggers[name] = logger

            return cls._loggers[name]

    @classmethod
    def set_global_level(cls, level: int) -> None:
        """Set logging level for all cached loggers (and future ones)."""
        with cls._lock:
            cls._global_level = level
            for logger in cls._loggers.values():
                logger.setLevel(level)

    @classmethod
    def get_logger_count(cls) -> int:
        """Number of cached loggers."""
        return len(cls._loggers)

    @classmethod
    def get_cached_names(cls) -> list[str]:
        """Names of all cached loggers."""
        with cls._lock:
            return list(cls._loggers.keys())

    @classmethod
    def clear_cache(cls) -> None:
        """Forget all cached loggers and the global level."""
        with cls._lock:
            cls._loggers.clear()
            cls._global_level = None


def get_cached_logger(name: str | None = None) -> logging.Logger:
    """Convenience function for getting a cached logger."""
    return LoggerFactory.get_logger(name)
