"""
Module: conftest.py

Author: Michael Economou
Date: 2026-03-09

Global pytest configuration and fixtures for the solutionlib test suite.
"""

import pytest

from solutionlib.domain.item_types import SolutionItemType
from solutionlib.domain.solution_model import SolutionModel
from solutionlib.models.solution_view_model import SolutionViewModel


def pytest_configure(config):
    """Configure pytest with custom settings."""
    # Add custom markers if not already added via pyproject.toml
    config.addinivalue_line("markers", "unit: fast tests without file I/O outside tmp_path")
    config.addinivalue_line("markers", "integration: tests that write and read real solution files")


@pytest.fixture
def sample_model():
    """Four-level solution with every item type, metadata and mixed flags."""
    model = SolutionModel()
    root = model.add_item(None, SolutionItemType.SOLUTION_ROOT, "Demo Solution", is_expanded=True)
    project = model.add_item(root, SolutionItemType.PROJECT, "App", is_expanded=True)
    model.add_item(project, SolutionItemType.FILE, "main.py", metadata={"encoding": "utf-8"})
    docs = model.add_item(project, SolutionItemType.FOLDER, "docs")
    model.add_item(docs, SolutionItemType.DOCUMENT, "readme.md", metadata={"author": "me"})
    model.add_item(docs, SolutionItemType.DOCUMENT, "changes.md")
    model.add_item(root, SolutionItemType.FILE, "setup.cfg")
    return model


@pytest.fixture
def folder_document_model():
    """Expanded Folder root with two collapsed Documents."""
    model = SolutionModel()
    root = model.add_item(None, SolutionItemType.FOLDER, "Folder", is_expanded=True)
    model.add_item(root, SolutionItemType.DOCUMENT, "Document 1")
    model.add_item(root, SolutionItemType.DOCUMENT, "Document 2")
    return model


@pytest.fixture
def sample_solution():
    """View-model tree as the UI would hold it."""
    solution = SolutionViewModel()
    root = solution.add_root_item("Demo Solution", SolutionItemType.SOLUTION_ROOT)
    project = root.add_child("App", SolutionItemType.PROJECT)
    project.is_item_expanded = True
    project.add_child("main.py", SolutionItemType.FILE, {"encoding": "utf-8"})
    docs = project.add_child("docs", SolutionItemType.FOLDER)
    docs.add_child("readme.md", SolutionItemType.DOCUMENT)
    root.add_child("setup.cfg", SolutionItemType.FILE)
    return solution
