"""Module: solution_storage.py.

Author: Michael Economou
Date: 2026-03-07

Picks the solution store for a path by its extension.

Paths ending in SOLUTION_XML_EXTENSION (case-insensitive) use the XML
format; every other path uses the SQLite store.
"""

import os
from pathlib import Path

from solutionlib.config import SOLUTION_XML_EXTENSION
from solutionlib.domain.results import StoreRecordCounts
from solutionlib.domain.solution_model import SolutionModel
from solutionlib.infra.db.solution_db import read_solution_db, write_solution_db
from solutionlib.infra.xml.xml_storage import read_xml_from_file, write_xml_to_file
from solutionlib.utils.logging.logger_factory import get_cached_logger

logger = get_cached_logger(__name__)


def is_xml_path(path: str | os.PathLike[str]) -> bool:
    return Path(path).suffix.lower() == SOLUTION_XML_EXTENSION.lower()


def save_model(path: str | os.PathLike[str], model: SolutionModel) -> StoreRecordCounts:
    """Write ``model`` to ``path`` in the format its extension selects."""
    if is_xml_path(path):
        return write_xml_to_file(path, model)
    return write_solution_db(path, model)


def load_model(path: str | os.PathLike[str]) -> tuple[SolutionModel, StoreRecordCounts]:
    """Read the solution at ``path`` in the format its extension selects."""
    if is_xml_path(path):
        return read_xml_from_file(path)
    return read_solution_db(path)
