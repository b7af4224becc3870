"""Module: logger_helper.py.

Author: Michael Economou
Date: 2026-03-02

Helpers shared by the logging setup.
Functions:
safe_text(text): Replaces problematic Unicode characters with ASCII equivalents.
SafeConsoleFormatter:
A formatter that applies safe_text to every console line.
DevOnlyFilter:
A logging filter that hides dev-only debug messages from the console,
while still allowing them to be stored in file logs.
"""

import logging
import re

from solutionlib.config import SHOW_DEV_ONLY_IN_CONSOLE

_REPLACEMENTS = {
    "→": "->",  # right arrow
    "—": "--",  # em dash
    "–": "-",  # en dash
    "…": "...",  # ellipsis
}
_PATTERN = re.compile("|".join(map(re.escape, _REPLACEMENTS.keys())))


def safe_text(text: str) -> str:
    """Replaces unsupported Unicode characters with ASCII-safe alternatives."""
    return _PATTERN.sub(lambda m: _REPLACEMENTS[m.group(0)], text)


class SafeConsoleFormatter(logging.Formatter):
    """Formatter for consoles whose encoding lacks arrows and dashes."""

    def format(self, record: logging.LogRecord) -> str:
        return safe_text(super().format(record))


class DevOnlyFilter(logging.Filter):
    """Drops records logged with extra={"dev_only": True} unless enabled in config."""

    def __init__(self, show_dev_only: bool = SHOW_DEV_ONLY_IN_CONSOLE) -> None:
        super().__init__()
        self.show_dev_only = show_dev_only

    def filter(self, record: logging.LogRecord) -> bool:
        if self.show_dev_only:
            return True
        return not getattr(record, "dev_only", False)
