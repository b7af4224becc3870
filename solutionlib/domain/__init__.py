"""solutionlib.domain - item types, errors, results and the solution tree model.

Nothing in here imports from the infra, core or app layers.
"""

from solutionlib.domain.errors import (
    ConnectionFailureError,
    FailureKind,
    IncompatibleSchemaError,
    SolutionStoreError,
    StorageIOError,
    UnknownItemTypeError,
)
from solutionlib.domain.item_types import (
    ITEM_TYPE_NAMES,
    ITEM_TYPE_TABLE,
    ITEM_TYPE_VALUES,
    SolutionItemType,
)
from solutionlib.domain.results import OperationResult, OperationStatus, StoreRecordCounts
from solutionlib.domain.solution_model import SolutionItemModel, SolutionModel

__all__ = [
    "ITEM_TYPE_NAMES",
    "ITEM_TYPE_TABLE",
    "ITEM_TYPE_VALUES",
    "ConnectionFailureError",
    "FailureKind",
    "IncompatibleSchemaError",
    "OperationResult",
    "OperationStatus",
    "SolutionItemModel",
    "SolutionItemType",
    "SolutionModel",
    "SolutionStoreError",
    "StorageIOError",
    "StoreRecordCounts",
    "UnknownItemTypeError",
]
