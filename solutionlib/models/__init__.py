"""View-model tree bound to the tree control."""

from solutionlib.models.solution_view_model import SolutionItemViewModel, SolutionViewModel

__all__ = ["SolutionItemViewModel", "SolutionViewModel"]
