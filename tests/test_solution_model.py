"""Tests for the framework-independent solution tree model.

Author: Michael Economou
Date: 2026-03-09
"""

import pytest

from solutionlib.domain.errors import FailureKind, StorageIOError
from solutionlib.domain.item_types import SolutionItemType
from solutionlib.domain.results import OperationResult, OperationStatus, StoreRecordCounts
from solutionlib.domain.solution_model import SolutionModel


@pytest.mark.unit
class TestSolutionModel:
    def test_empty_model(self):
        model = SolutionModel()

        assert model.is_empty
        assert model.item_count() == 0
        assert list(model.iter_items()) == []
        assert model.structure() == ()

    def test_ids_are_assigned_in_creation_order(self, sample_model):
        ids = [item.item_id for item in sample_model.iter_items()]

        assert sorted(ids) == list(range(1, 8))
        assert sample_model.find(1) is sample_model.root

    def test_iter_items_is_breadth_first(self, sample_model):
        names = [item.display_name for item in sample_model.iter_items()]

        assert names == [
            "Demo Solution",
            "App",
            "setup.cfg",
            "main.py",
            "docs",
            "readme.md",
            "changes.md",
        ]

    def test_parent_links_and_levels(self, sample_model):
        readme = next(i for i in sample_model.iter_items() if i.display_name == "readme.md")

        assert readme.level == 3
        assert readme.parent.display_name == "docs"
        assert readme.parent.parent.parent is sample_model.root

    def test_second_root_is_rejected(self, sample_model):
        with pytest.raises(ValueError):
            sample_model.add_item(None, SolutionItemType.SOLUTION_ROOT, "Other")

    def test_child_cannot_have_two_parents(self):
        model = SolutionModel()
        root = model.add_item(None, SolutionItemType.FOLDER, "a")
        child = model.add_item(root, SolutionItemType.FILE, "b")
        other = model.create_item(SolutionItemType.FOLDER, "c")

        with pytest.raises(ValueError):
            other.add_child(child)

    def test_structure_ignores_ids(self, sample_model):
        copy = SolutionModel()
        root = copy.add_item(
            None, SolutionItemType.SOLUTION_ROOT, "Demo Solution", is_expanded=True
        )
        copy._next_id = 100
        project = copy.add_item(root, SolutionItemType.PROJECT, "App", is_expanded=True)
        copy.add_item(project, SolutionItemType.FILE, "main.py", metadata={"encoding": "utf-8"})
        docs = copy.add_item(project, SolutionItemType.FOLDER, "docs")
        copy.add_item(docs, SolutionItemType.DOCUMENT, "readme.md", metadata={"author": "me"})
        copy.add_item(docs, SolutionItemType.DOCUMENT, "changes.md")
        copy.add_item(root, SolutionItemType.FILE, "setup.cfg")

        assert copy.structure() == sample_model.structure()

    def test_structure_detects_sibling_order(self, folder_document_model):
        swapped = SolutionModel()
        root = swapped.add_item(None, SolutionItemType.FOLDER, "Folder", is_expanded=True)
        swapped.add_item(root, SolutionItemType.DOCUMENT, "Document 2")
        swapped.add_item(root, SolutionItemType.DOCUMENT, "Document 1")

        assert swapped.structure() != folder_document_model.structure()


@pytest.mark.unit
class TestResults:
    def test_counts_format(self):
        assert str(StoreRecordCounts(5, 12)) == "005 item types, 012 items"

    def test_no_op_is_not_a_failure(self):
        result = OperationResult.no_op()

        assert result.status is OperationStatus.NO_OP
        assert result.cancelled
        assert not result.failed
        assert not result.succeeded

    def test_from_error_keeps_kind_and_message(self):
        result = OperationResult.from_error(StorageIOError("disk full"), "/tmp/x.solsqlt")

        assert result.failed
        assert result.kind is FailureKind.IO_FAILURE
        assert result.message == "disk full"
        assert result.path == "/tmp/x.solsqlt"
