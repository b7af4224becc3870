"""Ports - Protocol interfaces the host UI implements.

- FileDialogPort: save/open file pickers
- ReportPort: record counts and error messages

Author: Michael Economou
Date: 2026-03-08
"""

from solutionlib.app.ports.file_dialogs import FileDialogPort
from solutionlib.app.ports.reporting import ReportPort

__all__ = ["FileDialogPort", "ReportPort"]
