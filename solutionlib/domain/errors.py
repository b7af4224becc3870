"""Module: errors.py.

Author: Michael Economou
Date: 2026-03-04

Error taxonomy of the persistence engine.

Storage and conversion code raise these exceptions; the persistence
service catches them at its boundary and turns them into failure results.
A user cancelling a dialog is not an error and has no exception here
(see OperationStatus.NO_OP in results.py).
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from solutionlib.domain.item_types import SnapshotCheck


class FailureKind(str, Enum):
    """Kinds of failure reported to the caller."""

    CONNECTION_FAILURE = "connection_failure"
    INCOMPATIBLE_SCHEMA = "incompatible_schema"
    UNKNOWN_ITEM_TYPE = "unknown_item_type"
    IO_FAILURE = "io_failure"
    BUSY = "busy"


class SolutionStoreError(Exception):
    """Base class for all persistence engine errors."""

    kind: FailureKind = FailureKind.IO_FAILURE


class ConnectionFailureError(SolutionStoreError):
    """The store file cannot be opened or created."""

    kind = FailureKind.CONNECTION_FAILURE


class IncompatibleSchemaError(SolutionStoreError):
    """The stored item-type snapshot or schema does not match this runtime."""

    kind = FailureKind.INCOMPATIBLE_SCHEMA

    def __init__(self, message: str, check: SnapshotCheck | None = None):
        super().__init__(message)
        self.check = check


class UnknownItemTypeError(SolutionStoreError):
    """An item carries a type code or name that is not registered."""

    kind = FailureKind.UNKNOWN_ITEM_TYPE

    def __init__(self, item_type: object, item_name: str | None = None):
        if item_name is None:
            message = f"Unknown item type: {item_type!r}"
        else:
            message = f"Unknown item type {item_type!r} on item '{item_name}'"
        super().__init__(message)
        self.item_type = item_type
        self.item_name = item_name


class StorageIOError(SolutionStoreError):
    """Generic read/write fault, including corrupt or inconsistent content."""

    kind = FailureKind.IO_FAILURE
