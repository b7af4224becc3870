"""Module: results.py.

Author: Michael Economou
Date: 2026-03-04

Result types returned by save/load operations.

An operation ends in exactly one of three ways: success, no-op (the user
cancelled the dialog) or failure with a kind and a human-readable message.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from solutionlib.domain.errors import FailureKind, SolutionStoreError

if TYPE_CHECKING:
    from solutionlib.domain.solution_model import SolutionModel


@dataclass(frozen=True, slots=True)
class StoreRecordCounts:
    """Rows processed by a write or read, for diagnostic reporting."""

    item_type_count: int = 0
    item_count: int = 0

    def __str__(self) -> str:
        return f"{self.item_type_count:03d} item types, {self.item_count:03d} items"


class OperationStatus(str, Enum):
    SUCCESS = "success"
    NO_OP = "no_op"
    FAILURE = "failure"


@dataclass(frozen=True, slots=True)
class OperationResult:
    """Outcome of a save or load operation."""

    status: OperationStatus
    path: str | None = None
    counts: StoreRecordCounts | None = None
    model: SolutionModel | None = None
    kind: FailureKind | None = None
    message: str = ""

    @classmethod
    def success(
        cls,
        path: str,
        counts: StoreRecordCounts,
        model: SolutionModel | None = None,
    ) -> OperationResult:
        return cls(OperationStatus.SUCCESS, path=path, counts=counts, model=model)

    @classmethod
    def no_op(cls) -> OperationResult:
        return cls(OperationStatus.NO_OP)

    @classmethod
    def failure(cls, kind: FailureKind, message: str, path: str | None = None) -> OperationResult:
        return cls(OperationStatus.FAILURE, path=path, kind=kind, message=message)

    @classmethod
    def from_error(cls, error: SolutionStoreError, path: str | None = None) -> OperationResult:
        return cls.failure(error.kind, str(error), path)

    @property
    def succeeded(self) -> bool:
        return self.status is OperationStatus.SUCCESS

    @property
    def cancelled(self) -> bool:
        return self.status is OperationStatus.NO_OP

    @property
    def failed(self) -> bool:
        return self.status is OperationStatus.FAILURE
