"""Module: item_types.py.

Author: Michael Economou
Date: 2026-03-04

Item-type registry.

SolutionItemType is the closed set of legal node kinds. Codes are written
into every solution file and must never be reused or renumbered.

ITEM_TYPE_TABLE is the explicit code -> name table built once at import
time; it is read-only and shared by every thread. Stored files carry a
copy of it (the item-type snapshot), which is checked against this table
before any hierarchy row is trusted.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import IntEnum
from types import MappingProxyType

from solutionlib.domain.errors import IncompatibleSchemaError, UnknownItemTypeError
from solutionlib.utils.logging.logger_factory import get_cached_logger

logger = get_cached_logger(__name__)


class SolutionItemType(IntEnum):
    """Kinds of items in a solution tree."""

    SOLUTION_ROOT = 0
    FILE = 1
    FOLDER = 2
    PROJECT = 3
    DOCUMENT = 4


ITEM_TYPE_TABLE: Mapping[int, str] = MappingProxyType(
    {member.value: member.name for member in SolutionItemType}
)
ITEM_TYPE_NAMES: tuple[str, ...] = tuple(ITEM_TYPE_TABLE.values())
ITEM_TYPE_VALUES: tuple[int, ...] = tuple(ITEM_TYPE_TABLE.keys())


def item_type_from_code(code: object) -> SolutionItemType:
    """Resolve a stored or view-model type value to a registered SolutionItemType.

    Accepts SolutionItemType members and plain ints. bool is rejected even
    though it is an int subclass.

    Raises:
        UnknownItemTypeError: if the value is not a registered code

    """
    if isinstance(code, SolutionItemType):
        return code
    if isinstance(code, bool) or not isinstance(code, int):
        raise UnknownItemTypeError(code)
    try:
        return SolutionItemType(code)
    except ValueError:
        raise UnknownItemTypeError(code) from None


def item_type_from_name(name: str) -> SolutionItemType:
    """Resolve a registered type name (case-sensitive)."""
    try:
        return SolutionItemType[name]
    except KeyError:
        raise UnknownItemTypeError(name) from None


@dataclass(frozen=True)
class SnapshotCheck:
    """Outcome of comparing a stored snapshot with the registry.

    missing: registry codes absent from the snapshot
    renamed: codes present in both with different names (code -> (stored, registry))
    extra: snapshot codes unknown to the registry (tolerated)
    """

    missing: tuple[int, ...] = ()
    renamed: dict[int, tuple[str, str]] = field(default_factory=dict)
    extra: tuple[int, ...] = ()

    @property
    def is_compatible(self) -> bool:
        return not self.missing and not self.renamed

    def describe(self) -> str:
        parts = []
        if self.missing:
            parts.append("missing codes " + ", ".join(str(c) for c in self.missing))
        if self.renamed:
            parts.append(
                "renamed codes "
                + ", ".join(
                    f"{code} ('{stored}' != '{current}')"
                    for code, (stored, current) in sorted(self.renamed.items())
                )
            )
        if self.extra:
            parts.append("unknown codes " + ", ".join(str(c) for c in self.extra))
        return "; ".join(parts) if parts else "identical"


def check_item_type_snapshot(
    snapshot: Mapping[int, str], registry: Mapping[int, str] = ITEM_TYPE_TABLE
) -> SnapshotCheck:
    """Compare a stored item-type snapshot with the registry.

    Every registry (code, name) pair must be present in the snapshot with
    exactly that name. Snapshot codes the registry does not know are
    reported in ``extra`` but do not make the snapshot incompatible.
    """
    missing = []
    renamed = {}
    for code, name in registry.items():
        stored = snapshot.get(code)
        if stored is None:
            missing.append(code)
        elif stored != name:
            renamed[code] = (stored, name)

    extra = tuple(sorted(code for code in snapshot if code not in registry))
    return SnapshotCheck(missing=tuple(missing), renamed=renamed, extra=extra)


def validate_item_type_snapshot(
    snapshot: Mapping[int, str], registry: Mapping[int, str] = ITEM_TYPE_TABLE
) -> SnapshotCheck:
    """Check a snapshot and raise if it is not compatible with the registry.

    Raises:
        IncompatibleSchemaError: with the SnapshotCheck attached

    """
    check = check_item_type_snapshot(snapshot, registry)
    if not check.is_compatible:
        raise IncompatibleSchemaError(
            f"Item type enumeration is not consistent: {check.describe()}", check
        )
    if check.extra:
        logger.warning(
            "[ItemTypes] Snapshot contains codes unknown to this version: %s",
            ", ".join(str(code) for code in check.extra),
        )
    return check
