"""Module: solution_db.py.

Author: Michael Economou
Date: 2026-03-06

SQLite storage engine for solution files.

SolutionDB owns one connection to one solution file and exposes the
individual steps of a save (create_or_replace -> write_item_type_snapshot
-> write_hierarchy -> commit) and of a load (open_for_read ->
read_item_type_snapshot -> validate_item_type_snapshot -> read_hierarchy).
close() releases the connection on every path and is idempotent.

Saves never touch the target file until commit(): all rows go to a
staging file next to it inside one transaction, and the staging file
replaces the target atomically once the transaction is committed. A save
that fails half way leaves the previous file (if any) untouched.

write_solution_db() and read_solution_db() run the full sequences.
"""

import json
import os
import sqlite3
from collections import deque
from collections.abc import Mapping, Sequence
from pathlib import Path

from solutionlib.config import SQLITE_TIMEOUT, STAGING_SUFFIX
from solutionlib.domain.errors import (
    ConnectionFailureError,
    IncompatibleSchemaError,
    StorageIOError,
    UnknownItemTypeError,
)
from solutionlib.domain.item_types import (
    ITEM_TYPE_NAMES,
    ITEM_TYPE_TABLE,
    ITEM_TYPE_VALUES,
    SnapshotCheck,
    item_type_from_code,
    validate_item_type_snapshot,
)
from solutionlib.domain.results import StoreRecordCounts
from solutionlib.domain.solution_model import SolutionItemModel, SolutionModel
from solutionlib.infra.db.schema import (
    REQUIRED_TABLES,
    SCHEMA_VERSION,
    create_schema,
    drop_schema,
    existing_tables,
    read_schema_version,
)
from solutionlib.utils.logging.logger_factory import get_cached_logger

logger = get_cached_logger(__name__)

_WRITE = "write"
_READ = "read"


class SolutionDB:
    """One solution file opened for writing or for reading.

    Usage:
        with SolutionDB() as db:
            db.open_for_read(path)
            db.read_item_type_snapshot()
            db.validate_item_type_snapshot()
            model, count = db.read_hierarchy()
    """

    def __init__(self) -> None:
        self._conn: sqlite3.Connection | None = None
        self._mode: str | None = None
        self._db_path: Path | None = None
        self._staging_path: Path | None = None
        self._snapshot: dict[int, str] | None = None
        self._snapshot_written = False
        self._hierarchy_written = False
        self._snapshot_validated = False
        self.status = "Closed"

    def __enter__(self) -> "SolutionDB":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def db_path(self) -> Path | None:
        """Target file of the current (or last) operation."""
        return self._db_path

    @property
    def connection_state(self) -> bool:
        """True while a connection is open."""
        return self._conn is not None

    # ====================================================================
    # Write side
    # ====================================================================

    def create_or_replace(self, path: str | os.PathLike[str]) -> None:
        """Open a fresh store for ``path`` and (re)create the schema.

        The rows are written to ``<path>.tmp``; ``path`` itself is only
        replaced by commit().

        Raises:
            ConnectionFailureError: if the staging file cannot be created

        """
        self._require_closed()
        target = Path(path)
        staging = target.with_name(target.name + STAGING_SUFFIX)
        self._reset_state(target)
        self._staging_path = staging

        try:
            self._remove_file(staging)
            conn = sqlite3.connect(str(staging), timeout=SQLITE_TIMEOUT, isolation_level=None)
        except (sqlite3.Error, OSError) as e:
            self._staging_path = None
            self.status = f"Cannot create database file: {e}"
            raise ConnectionFailureError(f"Cannot create solution file '{target}': {e}") from e

        self._conn = conn
        self._mode = _WRITE
        try:
            conn.row_factory = sqlite3.Row
            conn.execute("PRAGMA foreign_keys = ON")
            conn.execute("BEGIN")
            cursor = conn.cursor()
            drop_schema(cursor)
            create_schema(cursor)
        except sqlite3.Error as e:
            self.close()
            raise ConnectionFailureError(f"Cannot create schema in '{target}': {e}") from e

        self.status = "Open for writing"
        logger.debug("[SolutionDB] Writing solution to staging file: %s", staging)

    def write_item_type_snapshot(self, names: Sequence[str], values: Sequence[int]) -> int:
        """Insert one item_type row per (name, value) pair.

        Must be called before write_hierarchy().

        Returns:
            Number of rows written

        """
        conn = self._require_mode(_WRITE)
        if self._hierarchy_written:
            raise StorageIOError("Item type snapshot must be written before the hierarchy")
        if len(names) != len(values):
            raise ValueError(
                f"Item type names and values differ in length ({len(names)} != {len(values)})"
            )

        rows = [(int(value), str(name)) for name, value in zip(names, values, strict=True)]
        try:
            conn.executemany("INSERT INTO item_type (code, name) VALUES (?, ?)", rows)
        except (sqlite3.Error, UnicodeError) as e:
            raise StorageIOError(f"Failed to write item type snapshot: {e}") from e

        self._snapshot_written = True
        logger.debug("[SolutionDB] %d item type rows written", len(rows), extra={"dev_only": True})
        return len(rows)

    def write_hierarchy(self, model: SolutionModel) -> int:
        """Flatten the tree into solution_item rows.

        Rows get ids 1..N in breadth-first order, so a parent row always
        precedes its children; sibling order is kept in sort_order.

        Returns:
            Number of rows written (the node count of the model)

        """
        conn = self._require_mode(_WRITE)
        if not self._snapshot_written:
            raise StorageIOError("Item type snapshot must be written before the hierarchy")

        rows = _flatten(model)
        try:
            conn.executemany(
                """
                INSERT INTO solution_item
                (id, parent_id, sort_order, level, item_type, display_name, is_expanded,
                 metadata_json)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            """,
                rows,
            )
        except (sqlite3.Error, UnicodeError) as e:
            raise StorageIOError(f"Failed to write solution items: {e}") from e

        self._hierarchy_written = True
        logger.debug("[SolutionDB] %d solution rows written", len(rows), extra={"dev_only": True})
        return len(rows)

    def commit(self) -> None:
        """Commit the save and replace the target file with the staging file.

        Raises:
            StorageIOError: if a step of the save is missing or the commit fails

        """
        conn = self._require_mode(_WRITE)
        if not (self._snapshot_written and self._hierarchy_written):
            raise StorageIOError("Cannot commit a solution file without snapshot and hierarchy")

        try:
            conn.execute("COMMIT")
        except sqlite3.Error as e:
            raise StorageIOError(f"Failed to commit solution file: {e}") from e

        conn.close()
        self._conn = None
        self._mode = None

        staging, target = self._staging_path, self._db_path
        try:
            os.replace(staging, target)
        except OSError as e:
            self._remove_file(staging)
            self.status = f"Cannot replace target file: {e}"
            raise StorageIOError(f"Failed to replace '{target}': {e}") from e
        finally:
            self._staging_path = None

        self.status = "Saved"
        logger.debug("[SolutionDB] Solution file committed: %s", target)

    # ====================================================================
    # Read side
    # ====================================================================

    def open_for_read(self, path: str | os.PathLike[str]) -> None:
        """Open an existing solution file read-only and check its layout.

        Raises:
            ConnectionFailureError: if the file is missing or not a SQLite database
            IncompatibleSchemaError: if tables are missing or the layout version differs

        """
        self._require_closed()
        target = Path(path)
        self._reset_state(target)

        if not target.is_file():
            self.status = "File not found"
            raise ConnectionFailureError(f"Solution file not found: '{target}'")

        try:
            conn = sqlite3.connect(
                f"{target.resolve().as_uri()}?mode=ro", uri=True, timeout=SQLITE_TIMEOUT
            )
        except sqlite3.Error as e:
            self.status = f"Cannot open database file: {e}"
            raise ConnectionFailureError(f"Cannot open solution file '{target}': {e}") from e

        conn.row_factory = sqlite3.Row
        self._conn = conn
        self._mode = _READ

        try:
            cursor = conn.cursor()
            tables = existing_tables(cursor)
            missing = REQUIRED_TABLES - tables
            if missing:
                raise IncompatibleSchemaError(
                    f"'{target.name}' is not a solution file (missing tables: "
                    f"{', '.join(sorted(missing))})"
                )
            version = read_schema_version(cursor)
        except IncompatibleSchemaError:
            self.close()
            raise
        except sqlite3.DatabaseError as e:
            self.close()
            raise ConnectionFailureError(f"Cannot read solution file '{target}': {e}") from e

        if version != SCHEMA_VERSION:
            self.close()
            raise IncompatibleSchemaError(
                f"Solution file layout v{version} is not supported (expected v{SCHEMA_VERSION})"
            )

        self.status = "Open for reading"
        logger.debug("[SolutionDB] Opened solution file for reading: %s", target)

    def read_item_type_snapshot(self) -> dict[int, str]:
        """Read the stored item-type snapshot as {code: name}."""
        conn = self._require_mode(_READ)
        try:
            rows = conn.execute("SELECT code, name FROM item_type ORDER BY code").fetchall()
        except sqlite3.Error as e:
            raise StorageIOError(f"Failed to read item type snapshot: {e}") from e

        self._snapshot = {int(row["code"]): str(row["name"]) for row in rows}
        return dict(self._snapshot)

    def validate_item_type_snapshot(
        self, registry: Mapping[int, str] = ITEM_TYPE_TABLE
    ) -> SnapshotCheck:
        """Check the stored snapshot against the registry.

        Reads the snapshot first if read_item_type_snapshot() was not called.
        read_hierarchy() is only allowed after this succeeded.

        Raises:
            IncompatibleSchemaError: if the snapshot does not cover the registry

        """
        if self._snapshot is None:
            self.read_item_type_snapshot()
        check = validate_item_type_snapshot(self._snapshot, registry)
        self._snapshot_validated = True
        return check

    def read_hierarchy(self) -> tuple[SolutionModel, int]:
        """Rebuild the solution tree from the solution_item rows.

        Returns:
            (model, number of rows read)

        Raises:
            StorageIOError: if the snapshot was not validated or the rows do not form one tree
            IncompatibleSchemaError: if a row uses an item type code this version does not know

        """
        conn = self._require_mode(_READ)
        if not self._snapshot_validated:
            raise StorageIOError(
                "Item type snapshot must be validated before reading the hierarchy"
            )

        try:
            rows = conn.execute(
                """
                SELECT id, parent_id, sort_order, item_type, display_name, is_expanded,
                       metadata_json
                FROM solution_item
                ORDER BY parent_id, sort_order, id
            """
            ).fetchall()
        except sqlite3.Error as e:
            raise StorageIOError(f"Failed to read solution items: {e}") from e

        model = _build_model(rows)
        logger.debug("[SolutionDB] %d solution rows read", len(rows), extra={"dev_only": True})
        return model, len(rows)

    # ====================================================================
    # Lifetime
    # ====================================================================

    def close(self) -> None:
        """Release the connection. Safe to call at any time, any number of times.

        An uncommitted save is rolled back and its staging file removed.
        """
        conn, self._conn = self._conn, None
        mode, self._mode = self._mode, None

        if conn is not None:
            if mode == _WRITE and conn.in_transaction:
                try:
                    conn.execute("ROLLBACK")
                except sqlite3.Error as e:
                    logger.warning("[SolutionDB] Rollback failed: %s", e)
            conn.close()
            logger.debug("[SolutionDB] Connection closed", extra={"dev_only": True})

        if self._staging_path is not None:
            self._remove_file(self._staging_path)
            self._staging_path = None

        if self.status.startswith("Open"):
            self.status = "Closed"

    # ====================================================================
    # Helpers
    # ====================================================================

    def _reset_state(self, target: Path) -> None:
        self._db_path = target
        self._snapshot = None
        self._snapshot_written = False
        self._hierarchy_written = False
        self._snapshot_validated = False

    def _require_closed(self) -> None:
        if self._conn is not None:
            raise StorageIOError(f"SolutionDB is already open ({self._db_path})")

    def _require_mode(self, mode: str) -> sqlite3.Connection:
        if self._conn is None or self._mode != mode:
            raise StorageIOError(f"SolutionDB is not open in {mode} mode")
        return self._conn

    @staticmethod
    def _remove_file(path: Path) -> None:
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning("[SolutionDB] Could not remove %s: %s", path, e)


def _flatten(model: SolutionModel) -> list[tuple]:
    """solution_item rows for the model, breadth-first."""
    rows: list[tuple] = []
    if model.root is None:
        return rows

    seen: set[int] = set()
    queue: deque[tuple[SolutionItemModel, int | None, int, int]] = deque([(model.root, None, 0, 0)])
    while queue:
        item, parent_row_id, sort_order, level = queue.popleft()
        if id(item) in seen:
            raise StorageIOError(f"Solution tree contains a cycle at item {item.item_id}")
        seen.add(id(item))

        row_id = len(rows) + 1
        rows.append(
            (
                row_id,
                parent_row_id,
                sort_order,
                level,
                int(item.item_type),
                item.display_name,
                bool(item.is_expanded),
                json.dumps(item.metadata, sort_keys=True) if item.metadata else None,
            )
        )
        for index, child in enumerate(item.children):
            queue.append((child, row_id, index, level + 1))
    return rows


def _build_model(rows: Sequence[sqlite3.Row]) -> SolutionModel:
    """Rebuild the tree from rows sorted by (parent_id, sort_order, id)."""
    model = SolutionModel()
    if not rows:
        return model

    children_of: dict[int | None, list[sqlite3.Row]] = {}
    for row in rows:
        children_of.setdefault(row["parent_id"], []).append(row)

    roots = children_of.get(None, [])
    if len(roots) != 1:
        raise StorageIOError(f"Solution file must contain exactly one root item, found {len(roots)}")

    root = model.set_root(_row_to_item(model, roots[0]))
    queue: deque[SolutionItemModel] = deque([root])
    reached = 1
    while queue:
        item = queue.popleft()
        for row in children_of.get(item.item_id, ()):
            child = item.add_child(_row_to_item(model, row))
            queue.append(child)
            reached += 1

    if reached != len(rows):
        raise StorageIOError(
            f"Solution file contains {len(rows) - reached} item(s) not connected to the root"
        )
    return model


def _row_to_item(model: SolutionModel, row: sqlite3.Row) -> SolutionItemModel:
    try:
        item_type = item_type_from_code(row["item_type"])
    except UnknownItemTypeError:
        raise IncompatibleSchemaError(
            f"Item {row['id']} uses item type code {row['item_type']!r} "
            "unknown to this version"
        ) from None

    metadata: dict[str, str] = {}
    if row["metadata_json"]:
        try:
            decoded = json.loads(row["metadata_json"])
        except json.JSONDecodeError as e:
            raise StorageIOError(f"Corrupt metadata on item {row['id']}: {e}") from e
        if not isinstance(decoded, dict):
            raise StorageIOError(f"Corrupt metadata on item {row['id']}: not an object")
        metadata = {str(key): str(value) for key, value in decoded.items()}

    return model.create_item(
        item_type,
        row["display_name"],
        is_expanded=bool(row["is_expanded"]),
        metadata=metadata,
        item_id=row["id"],
    )


def write_solution_db(
    path: str | os.PathLike[str],
    model: SolutionModel,
    item_type_names: Sequence[str] = ITEM_TYPE_NAMES,
    item_type_values: Sequence[int] = ITEM_TYPE_VALUES,
) -> StoreRecordCounts:
    """Save ``model`` to a SQLite solution file as one unit.

    Either the complete file replaces ``path`` or an exception is raised
    and ``path`` is left as it was.
    """
    with SolutionDB() as db:
        logger.info("[SolutionDB] Writing data into SQLite file: '%s'", path)
        db.create_or_replace(path)
        item_type_count = db.write_item_type_snapshot(item_type_names, item_type_values)
        item_count = db.write_hierarchy(model)
        db.commit()

    counts = StoreRecordCounts(item_type_count, item_count)
    logger.info("[SolutionDB] %s written to '%s'", counts, path)
    return counts


def read_solution_db(
    path: str | os.PathLike[str], registry: Mapping[int, str] = ITEM_TYPE_TABLE
) -> tuple[SolutionModel, StoreRecordCounts]:
    """Load a SQLite solution file.

    The item-type snapshot is validated before any hierarchy row is read;
    an incompatible file raises IncompatibleSchemaError and yields nothing.
    """
    with SolutionDB() as db:
        db.open_for_read(path)
        snapshot = db.read_item_type_snapshot()
        db.validate_item_type_snapshot(registry)
        model, item_count = db.read_hierarchy()

    counts = StoreRecordCounts(len(snapshot), item_count)
    logger.info("[SolutionDB] %s read from '%s'", counts, path)
    return model, counts
