"""Tests for the SQLite solution store.

Author: Michael Economou
Date: 2026-03-09
"""

import sqlite3
from unittest.mock import patch

import pytest

from solutionlib.domain.errors import (
    ConnectionFailureError,
    IncompatibleSchemaError,
    StorageIOError,
)
from solutionlib.domain.item_types import (
    ITEM_TYPE_NAMES,
    ITEM_TYPE_TABLE,
    ITEM_TYPE_VALUES,
    SolutionItemType,
)
from solutionlib.domain.solution_model import SolutionModel
from solutionlib.infra.db.schema import SCHEMA_VERSION
from solutionlib.infra.db.solution_db import SolutionDB, read_solution_db, write_solution_db


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "demo.solsqlt"


def _rows(path, query):
    conn = sqlite3.connect(path)
    try:
        return conn.execute(query).fetchall()
    finally:
        conn.close()


@pytest.mark.integration
class TestRoundTrip:
    def test_round_trip_is_isomorphic(self, db_path, sample_model):
        write_solution_db(db_path, sample_model)

        model, _counts = read_solution_db(db_path)

        assert model.structure() == sample_model.structure()

    def test_record_counts(self, db_path, sample_model):
        written = write_solution_db(db_path, sample_model)
        _model, read = read_solution_db(db_path)

        assert written.item_type_count == len(ITEM_TYPE_TABLE)
        assert written.item_count == sample_model.item_count() == 7
        assert read == written

    def test_empty_model(self, db_path):
        counts = write_solution_db(db_path, SolutionModel())
        model, read = read_solution_db(db_path)

        assert counts.item_count == 0
        assert model.is_empty
        assert read.item_count == 0

    def test_folder_with_two_documents(self, db_path, folder_document_model):
        write_solution_db(db_path, folder_document_model)

        item_types = _rows(db_path, "SELECT code, name FROM item_type ORDER BY code")
        items = _rows(
            db_path, "SELECT id, parent_id, item_type, is_expanded FROM solution_item ORDER BY id"
        )
        assert dict(item_types) == dict(ITEM_TYPE_TABLE)
        assert len(items) == 3
        assert sum(1 for row in items if row[3]) == 1
        assert items[0] == (1, None, int(SolutionItemType.FOLDER), 1)

        model, counts = read_solution_db(db_path)
        assert counts.item_count == 3
        assert model.structure() == folder_document_model.structure()
        assert model.root.is_expanded
        assert [c.is_expanded for c in model.root.children] == [False, False]

    def test_parents_precede_children(self, db_path, sample_model):
        write_solution_db(db_path, sample_model)

        for row_id, parent_id in _rows(db_path, "SELECT id, parent_id FROM solution_item"):
            assert parent_id is None or parent_id < row_id

    def test_overwrite_is_idempotent(self, db_path, sample_model, folder_document_model):
        write_solution_db(db_path, folder_document_model)
        write_solution_db(db_path, sample_model)
        write_solution_db(db_path, sample_model)

        model, counts = read_solution_db(db_path)

        assert counts.item_count == 7
        assert model.structure() == sample_model.structure()
        assert not db_path.with_name(db_path.name + ".tmp").exists()

    def test_unicode_names_and_metadata(self, db_path):
        model = SolutionModel()
        root = model.add_item(None, SolutionItemType.SOLUTION_ROOT, "Λύση 🚀", is_expanded=True)
        model.add_item(root, SolutionItemType.FILE, "a'b\"c", metadata={"κλειδί": "τιμή"})

        write_solution_db(db_path, model)
        loaded, _counts = read_solution_db(db_path)

        assert loaded.structure() == model.structure()


@pytest.mark.integration
class TestCompatibilityGate:
    def test_missing_registry_code_blocks_hierarchy_read(self, db_path, sample_model):
        # File written by a version without DOCUMENT
        names = [n for n in ITEM_TYPE_NAMES if n != "DOCUMENT"]
        values = [v for v in ITEM_TYPE_VALUES if v != SolutionItemType.DOCUMENT]
        model = SolutionModel()
        model.add_item(None, SolutionItemType.FOLDER, "only folder")
        write_solution_db(db_path, model, names, values)

        with patch.object(SolutionDB, "read_hierarchy") as read_hierarchy:
            with pytest.raises(IncompatibleSchemaError) as exc_info:
                read_solution_db(db_path)

        read_hierarchy.assert_not_called()
        assert exc_info.value.check.missing == (int(SolutionItemType.DOCUMENT),)

    def test_renamed_code_is_incompatible(self, db_path, folder_document_model):
        names = ["DIRECTORY" if n == "FOLDER" else n for n in ITEM_TYPE_NAMES]
        write_solution_db(db_path, folder_document_model, names, ITEM_TYPE_VALUES)

        with pytest.raises(IncompatibleSchemaError):
            read_solution_db(db_path)

    def test_extra_code_is_tolerated(self, db_path, folder_document_model):
        names = list(ITEM_TYPE_NAMES) + ["LINK"]
        values = list(ITEM_TYPE_VALUES) + [9]
        write_solution_db(db_path, folder_document_model, names, values)

        model, counts = read_solution_db(db_path)

        assert counts.item_type_count == len(ITEM_TYPE_TABLE) + 1
        assert model.structure() == folder_document_model.structure()

    def test_row_with_unknown_code_is_incompatible(self, db_path, folder_document_model):
        names = list(ITEM_TYPE_NAMES) + ["LINK"]
        values = list(ITEM_TYPE_VALUES) + [9]
        write_solution_db(db_path, folder_document_model, names, values)
        conn = sqlite3.connect(db_path)
        conn.execute("UPDATE solution_item SET item_type = 9 WHERE id = 3")
        conn.commit()
        conn.close()

        with pytest.raises(IncompatibleSchemaError):
            read_solution_db(db_path)

    def test_hierarchy_requires_validated_snapshot(self, db_path, sample_model):
        write_solution_db(db_path, sample_model)

        with SolutionDB() as db:
            db.open_for_read(db_path)
            db.read_item_type_snapshot()
            with pytest.raises(StorageIOError):
                db.read_hierarchy()

    def test_validate_reads_snapshot_when_needed(self, db_path, sample_model):
        write_solution_db(db_path, sample_model)

        with SolutionDB() as db:
            db.open_for_read(db_path)
            assert db.validate_item_type_snapshot().is_compatible
            _model, count = db.read_hierarchy()

        assert count == 7


@pytest.mark.integration
class TestFailures:
    def test_hierarchy_write_fault_releases_everything(self, db_path, sample_model):
        write_solution_db(db_path, sample_model)
        before = db_path.read_bytes()
        opened = []
        original_init = SolutionDB.__init__

        def track_init(self):
            original_init(self)
            opened.append(self)

        with (
            patch.object(SolutionDB, "__init__", track_init),
            patch.object(
                SolutionDB, "write_hierarchy", side_effect=StorageIOError("simulated fault")
            ),
            pytest.raises(StorageIOError, match="simulated fault"),
        ):
            write_solution_db(db_path, SolutionModel())

        assert len(opened) == 1
        assert not opened[0].connection_state
        assert db_path.read_bytes() == before
        assert not db_path.with_name(db_path.name + ".tmp").exists()

    def test_failed_first_save_leaves_no_file(self, db_path, sample_model):
        with (
            patch.object(SolutionDB, "write_hierarchy", side_effect=StorageIOError("fault")),
            pytest.raises(StorageIOError),
        ):
            write_solution_db(db_path, sample_model)

        assert list(db_path.parent.iterdir()) == []

    def test_unencodable_name_is_storage_error(self, db_path):
        model = SolutionModel()
        model.add_item(None, SolutionItemType.FOLDER, "bad\ud800")

        with pytest.raises(StorageIOError, match="solution items"):
            write_solution_db(db_path, model)

        assert list(db_path.parent.iterdir()) == []

    def test_unencodable_item_type_name_is_storage_error(self, db_path, sample_model):
        names = [*ITEM_TYPE_NAMES[:-1], "bad\udc00"]

        with pytest.raises(StorageIOError, match="item type snapshot"):
            write_solution_db(db_path, sample_model, names, ITEM_TYPE_VALUES)

        assert list(db_path.parent.iterdir()) == []

    def test_missing_file(self, tmp_path):
        missing = tmp_path / "nope.solsqlt"

        with pytest.raises(ConnectionFailureError):
            read_solution_db(missing)

        assert not missing.exists()

    def test_not_a_database(self, db_path):
        db_path.write_text("this is not sqlite" * 100)

        with pytest.raises(ConnectionFailureError):
            read_solution_db(db_path)

    def test_foreign_database_is_incompatible(self, db_path):
        conn = sqlite3.connect(db_path)
        conn.execute("CREATE TABLE notes (id INTEGER PRIMARY KEY, text TEXT)")
        conn.commit()
        conn.close()

        with pytest.raises(IncompatibleSchemaError, match="missing tables"):
            read_solution_db(db_path)

    def test_schema_version_mismatch(self, db_path, sample_model):
        write_solution_db(db_path, sample_model)
        conn = sqlite3.connect(db_path)
        conn.execute("UPDATE schema_version SET version = ?", (SCHEMA_VERSION + 1,))
        conn.commit()
        conn.close()

        with pytest.raises(IncompatibleSchemaError):
            read_solution_db(db_path)

    def test_two_roots_are_rejected(self, db_path, folder_document_model):
        write_solution_db(db_path, folder_document_model)
        conn = sqlite3.connect(db_path)
        conn.execute("UPDATE solution_item SET parent_id = NULL WHERE id = 3")
        conn.commit()
        conn.close()

        with pytest.raises(StorageIOError, match="exactly one root"):
            read_solution_db(db_path)

    def test_orphaned_rows_are_rejected(self, db_path, folder_document_model):
        write_solution_db(db_path, folder_document_model)
        conn = sqlite3.connect(db_path)
        # Rows 2 and 3 point at each other: a cycle detached from the root
        conn.execute("UPDATE solution_item SET parent_id = 3 WHERE id = 2")
        conn.execute("UPDATE solution_item SET parent_id = 2 WHERE id = 3")
        conn.commit()
        conn.close()

        with pytest.raises(StorageIOError, match="not connected"):
            read_solution_db(db_path)

    def test_unwritable_destination(self, tmp_path, sample_model):
        with pytest.raises(ConnectionFailureError):
            write_solution_db(tmp_path / "missing_dir" / "x.solsqlt", sample_model)


@pytest.mark.unit
class TestCallOrder:
    def test_hierarchy_before_snapshot_is_rejected(self, db_path, sample_model):
        with SolutionDB() as db:
            db.create_or_replace(db_path)
            with pytest.raises(StorageIOError):
                db.write_hierarchy(sample_model)

        assert not db_path.exists()

    def test_snapshot_after_hierarchy_is_rejected(self, db_path, sample_model):
        with SolutionDB() as db:
            db.create_or_replace(db_path)
            db.write_item_type_snapshot(ITEM_TYPE_NAMES, ITEM_TYPE_VALUES)
            db.write_hierarchy(sample_model)
            with pytest.raises(StorageIOError):
                db.write_item_type_snapshot(ITEM_TYPE_NAMES, ITEM_TYPE_VALUES)

    def test_commit_requires_hierarchy(self, db_path):
        with SolutionDB() as db:
            db.create_or_replace(db_path)
            db.write_item_type_snapshot(ITEM_TYPE_NAMES, ITEM_TYPE_VALUES)
            with pytest.raises(StorageIOError):
                db.commit()

        assert not db_path.exists()

    def test_close_is_idempotent(self, db_path):
        db = SolutionDB()
        db.create_or_replace(db_path)
        assert db.connection_state

        db.close()
        db.close()

        assert not db.connection_state
        assert db.status == "Closed"

    def test_read_calls_need_read_mode(self):
        db = SolutionDB()

        with pytest.raises(StorageIOError):
            db.read_item_type_snapshot()
        with pytest.raises(StorageIOError):
            db.write_item_type_snapshot(ITEM_TYPE_NAMES, ITEM_TYPE_VALUES)

    def test_mismatched_snapshot_lengths(self, db_path):
        with SolutionDB() as db:
            db.create_or_replace(db_path)
            with pytest.raises(ValueError):
                db.write_item_type_snapshot(["FILE"], [1, 2])
