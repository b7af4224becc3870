"""Module: view_model_converter.py.

Author: Michael Economou
Date: 2026-03-05

Bidirectional conversion between the UI-bound view-model tree and the
framework-independent SolutionModel.

Both directions walk the tree breadth-first with a queue, so child order
is preserved and tree depth is not limited by the recursion limit.
"""

from collections import deque

from solutionlib.domain.errors import UnknownItemTypeError
from solutionlib.domain.item_types import item_type_from_code
from solutionlib.domain.solution_model import SolutionItemModel, SolutionModel
from solutionlib.models.solution_view_model import SolutionItemViewModel, SolutionViewModel
from solutionlib.utils.logging.logger_factory import get_cached_logger

logger = get_cached_logger(__name__)


class ViewModelModelConverter:
    """Converts solution trees between view-model and model form.

    After each conversion the converter keeps the one-to-one mapping between
    model ids and view-model items of that conversion, see view_model_for().
    """

    def __init__(self) -> None:
        self._view_models: dict[int, SolutionItemViewModel] = {}

    def view_model_for(self, item_id: int) -> SolutionItemViewModel | None:
        """View-model item that corresponds to a model id of the last conversion."""
        return self._view_models.get(item_id)

    def to_model(self, solution: SolutionViewModel) -> SolutionModel:
        """Convert the view-model tree into a new SolutionModel.

        Model ids are assigned in breadth-first order starting at 1.

        Raises:
            UnknownItemTypeError: if any view-model item has an unregistered type

        """
        self._view_models = {}
        model = SolutionModel()

        root_vm = solution.get_root_item()
        if root_vm is None:
            logger.debug("[Converter] Empty solution converted to empty model")
            return model

        root = model.set_root(self._new_model_item(model, root_vm))
        queue: deque[tuple[SolutionItemViewModel, SolutionItemModel]] = deque([(root_vm, root)])
        while queue:
            view_model, item = queue.popleft()
            for child_vm in view_model.children:
                child = item.add_child(self._new_model_item(model, child_vm))
                queue.append((child_vm, child))

        logger.debug(
            "[Converter] View-model converted to model (%d items)",
            len(self._view_models),
            extra={"dev_only": True},
        )
        return model

    def to_view_model(self, model: SolutionModel, solution: SolutionViewModel) -> None:
        """Populate ``solution`` in place from ``model``.

        The existing view-model tree is discarded first. Parent/child
        references and expanded flags are rebuilt; expanding the root for
        display is left to the caller.
        """
        self._view_models = {}
        solution.reset_to_defaults()

        root = model.root
        if root is None:
            return

        root_vm = solution.add_root_item(root.display_name, root.item_type, root.metadata)
        root_vm.is_item_expanded = root.is_expanded
        self._view_models[root.item_id] = root_vm

        queue: deque[tuple[SolutionItemModel, SolutionItemViewModel]] = deque([(root, root_vm)])
        while queue:
            item, view_model = queue.popleft()
            for child in item.children:
                child_vm = view_model.add_child(child.display_name, child.item_type, child.metadata)
                child_vm.is_item_expanded = child.is_expanded
                self._view_models[child.item_id] = child_vm
                queue.append((child, child_vm))

        logger.debug(
            "[Converter] Model converted to view-model (%d items)",
            len(self._view_models),
            extra={"dev_only": True},
        )

    def _new_model_item(
        self, model: SolutionModel, view_model: SolutionItemViewModel
    ) -> SolutionItemModel:
        try:
            item_type = item_type_from_code(view_model.item_type)
        except UnknownItemTypeError:
            raise UnknownItemTypeError(view_model.item_type, view_model.display_name) from None

        item = model.create_item(
            item_type,
            view_model.display_name,
            is_expanded=view_model.is_item_expanded,
            metadata=view_model.metadata,
        )
        self._view_models[item.item_id] = view_model
        return item
