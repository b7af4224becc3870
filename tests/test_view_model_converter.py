"""Tests for ViewModelModelConverter.

Author: Michael Economou
Date: 2026-03-09
"""

import pytest

from solutionlib.core.view_model_converter import ViewModelModelConverter
from solutionlib.domain.errors import UnknownItemTypeError
from solutionlib.domain.item_types import SolutionItemType
from solutionlib.domain.solution_model import SolutionModel
from solutionlib.models.solution_view_model import SolutionViewModel


@pytest.fixture
def converter():
    return ViewModelModelConverter()


@pytest.mark.unit
class TestToModel:
    def test_ids_follow_breadth_first_order(self, converter, sample_solution):
        model = converter.to_model(sample_solution)

        assert [item.item_id for item in model.iter_items()] == list(range(1, 7))
        assert [item.display_name for item in model.iter_items()] == [
            view_model.display_name for view_model in sample_solution.iter_items()
        ]

    def test_one_to_one_mapping(self, converter, sample_solution):
        model = converter.to_model(sample_solution)

        for item, view_model in zip(model.iter_items(), sample_solution.iter_items()):
            assert converter.view_model_for(item.item_id) is view_model

    def test_flags_types_and_metadata_are_copied(self, converter, sample_solution):
        model = converter.to_model(sample_solution)
        project = model.find(2)
        main_py = next(i for i in model.iter_items() if i.display_name == "main.py")

        assert project.item_type is SolutionItemType.PROJECT
        assert project.is_expanded
        assert not model.root.is_expanded
        assert main_py.metadata == {"encoding": "utf-8"}

    def test_empty_solution(self, converter):
        model = converter.to_model(SolutionViewModel())

        assert model.is_empty

    def test_unknown_item_type_names_the_item(self, converter, sample_solution):
        sample_solution.get_root_item().add_child("mystery", 42)

        with pytest.raises(UnknownItemTypeError) as exc_info:
            converter.to_model(sample_solution)

        assert exc_info.value.item_type == 42
        assert exc_info.value.item_name == "mystery"

    def test_deep_tree_does_not_recurse(self, converter):
        solution = SolutionViewModel()
        item = solution.add_root_item("root", SolutionItemType.SOLUTION_ROOT)
        for depth in range(3000):
            item = item.add_child(f"level {depth}", SolutionItemType.FOLDER)

        model = converter.to_model(solution)

        assert model.item_count() == 3001


@pytest.mark.unit
class TestToViewModel:
    def test_round_trip_preserves_structure(self, converter, sample_model):
        solution = SolutionViewModel()

        converter.to_view_model(sample_model, solution)
        back = ViewModelModelConverter().to_model(solution)

        assert back.structure() == sample_model.structure()

    def test_existing_items_are_replaced(self, converter, sample_solution, folder_document_model):
        converter.to_view_model(folder_document_model, sample_solution)

        root = sample_solution.get_root_item()
        assert root.display_name == "Folder"
        assert [c.display_name for c in root.children] == ["Document 1", "Document 2"]
        assert all(c.parent is root for c in root.children)

    def test_expanded_flags_are_restored(self, converter, folder_document_model):
        solution = SolutionViewModel()

        converter.to_view_model(folder_document_model, solution)

        root = solution.get_root_item()
        assert root.is_item_expanded
        assert not any(c.is_item_expanded for c in root.children)

    def test_root_is_not_expanded_by_converter(self, converter):
        model = SolutionModel()
        model.add_item(None, SolutionItemType.SOLUTION_ROOT, "collapsed")
        solution = SolutionViewModel()

        converter.to_view_model(model, solution)

        assert not solution.get_root_item().is_item_expanded

    def test_empty_model_clears_solution(self, converter, sample_solution):
        converter.to_view_model(SolutionModel(), sample_solution)

        assert sample_solution.get_root_item() is None

    def test_mapping_refers_to_new_view_models(self, converter, sample_model):
        solution = SolutionViewModel()

        converter.to_view_model(sample_model, solution)

        for item in sample_model.iter_items():
            assert converter.view_model_for(item.item_id).display_name == item.display_name
