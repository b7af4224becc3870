"""Module: observable.py.

Author: Michael Economou
Date: 2026-03-03

Observable - Pure Python Observer pattern implementation.

Provides Qt signal-like functionality without Qt dependency:
- Signal descriptor for defining events
- Observable base class for view-models and services
- Connect/disconnect/emit interface
- Thread-safe signal emission (workers emit from their own thread)
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Any

from solutionlib.utils.logging.logger_factory import get_cached_logger

logger = get_cached_logger(__name__)

__all__ = ["Observable", "Signal", "SignalInstance"]


def _callback_name(callback: Callable[..., Any]) -> str:
    return getattr(callback, "__qualname__", None) or getattr(callback, "__name__", repr(callback))


class Signal:
    """Descriptor for defining observable signals.

    Usage:
        class MyClass(Observable):
            value_changed = Signal(int)  # Signal with int argument
            done = Signal()  # Signal with no arguments

        obj = MyClass()
        obj.value_changed.connect(callback)
        obj.value_changed.emit(42)
    """

    def __init__(self, *arg_types: type):
        """Initialize signal with expected argument types (documentation only)."""
        self.arg_types = arg_types
        self.name = ""

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def __get__(self, obj: Any, _objtype: type | None = None) -> Any:
        if obj is None:
            return self

        attr_name = f"_signal_{self.name}"
        instance = obj.__dict__.get(attr_name)
        if instance is None:
            instance = obj.__dict__.setdefault(attr_name, SignalInstance(self.name, self.arg_types))
        return instance


class SignalInstance:
    """Instance of a signal for a specific object."""

    def __init__(self, name: str, arg_types: tuple[type, ...]):
        self.name = name
        self.arg_types = arg_types
        self._callbacks: list[Callable[..., Any]] = []
        self._lock = threading.Lock()

    def connect(self, callback: Callable[..., Any]) -> None:
        """Connect callback to signal (connecting twice is a no-op)."""
        with self._lock:
            if callback not in self._callbacks:
                self._callbacks.append(callback)
                logger.debug(
                    "Signal connected: %s -> %s",
                    self.name,
                    _callback_name(callback),
                    extra={"dev_only": True},
                )

    def disconnect(self, callback: Callable[..., Any] | None = None) -> None:
        """Disconnect callback from signal. If None, removes all callbacks."""
        with self._lock:
            if callback is None:
                self._callbacks.clear()
            elif callback in self._callbacks:
                self._callbacks.remove(callback)

    def receivers(self) -> int:
        """Number of connected callbacks."""
        with self._lock:
            return len(self._callbacks)

    def emit(self, *args: Any) -> None:
        """Emit signal with arguments.

        A failing callback is logged and does not stop the remaining ones.
        """
        with self._lock:
            callbacks = self._callbacks.copy()

        # Call outside lock to avoid deadlocks
        for callback in callbacks:
            try:
                callback(*args)
            except Exception:
                logger.exception(
                    "Error in signal callback: %s -> %s", self.name, _callback_name(callback)
                )


class Observable:
    """Base class for objects with observable signals.

        class Counter(Observable):
            value_changed = Signal(int)

            def increment(self):
                self._value += 1
                self.value_changed.emit(self._value)
    """

    def __init__(self) -> None:
        super().__init__()
