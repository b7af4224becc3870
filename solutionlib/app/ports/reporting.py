"""Reporting port for save/load outcomes.

Author: Michael Economou
Date: 2026-03-08
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from solutionlib.domain.errors import FailureKind
    from solutionlib.domain.results import StoreRecordCounts


@runtime_checkable
class ReportPort(Protocol):
    """Protocol for the diagnostic/status sink of the host UI."""

    def records_written(self, counts: StoreRecordCounts) -> None:
        """Report the rows written by a successful save."""
        ...

    def records_read(self, counts: StoreRecordCounts) -> None:
        """Report the rows read by a successful load."""
        ...

    def error(self, kind: FailureKind, message: str) -> None:
        """Report a failed save or load."""
        ...
