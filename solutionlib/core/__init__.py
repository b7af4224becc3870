"""solutionlib.core - conversion and storage dispatch."""

from solutionlib.core.solution_storage import is_xml_path, load_model, save_model
from solutionlib.core.view_model_converter import ViewModelModelConverter

__all__ = ["ViewModelModelConverter", "is_xml_path", "load_model", "save_model"]
