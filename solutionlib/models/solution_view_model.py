"""Module: solution_view_model.py.

Author: Michael Economou
Date: 2026-03-05

UI-bound solution tree (Qt-free).

The tree view binds to these objects. They carry visual state
(selection, expansion) next to the persisted values; only the item type,
name, metadata and the expanded flag survive a save/load round trip.
Signals let the view react without a Qt dependency in this layer.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator
from typing import Any

from solutionlib.config import SOLUTION_FILE_FILTER
from solutionlib.utils.events import Observable, Signal
from solutionlib.utils.logging.logger_factory import get_cached_logger

logger = get_cached_logger(__name__)


class SolutionItemViewModel(Observable):
    """A node of the UI-bound tree.

    ``item_type`` is kept as given (a SolutionItemType or a raw int); the
    converter rejects values that are not registered.
    """

    expanded_changed = Signal(bool)
    selected_changed = Signal(bool)
    children_changed = Signal()

    def __init__(
        self,
        display_name: str,
        item_type: Any,
        parent: SolutionItemViewModel | None = None,
        metadata: dict[str, str] | None = None,
    ) -> None:
        super().__init__()
        self.display_name = display_name
        self.item_type = item_type
        self.parent = parent
        self.metadata: dict[str, str] = dict(metadata or {})
        self._children: list[SolutionItemViewModel] = []
        self._is_item_expanded = False
        self._is_selected = False

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}({self.display_name!r}, {self.item_type!r}, "
            f"children={len(self._children)})"
        )

    @property
    def children(self) -> tuple[SolutionItemViewModel, ...]:
        return tuple(self._children)

    @property
    def child_count(self) -> int:
        return len(self._children)

    @property
    def is_item_expanded(self) -> bool:
        return self._is_item_expanded

    @is_item_expanded.setter
    def is_item_expanded(self, value: bool) -> None:
        value = bool(value)
        if value != self._is_item_expanded:
            self._is_item_expanded = value
            self.expanded_changed.emit(value)

    @property
    def is_selected(self) -> bool:
        return self._is_selected

    @is_selected.setter
    def is_selected(self, value: bool) -> None:
        value = bool(value)
        if value != self._is_selected:
            self._is_selected = value
            self.selected_changed.emit(value)

    def add_child(
        self, display_name: str, item_type: Any, metadata: dict[str, str] | None = None
    ) -> SolutionItemViewModel:
        """Create a child item and append it after the existing children."""
        child = SolutionItemViewModel(display_name, item_type, parent=self, metadata=metadata)
        self._children.append(child)
        self.children_changed.emit()
        return child

    def remove_child(self, child: SolutionItemViewModel) -> bool:
        """Detach child; returns False if it is not a child of this item."""
        for index, existing in enumerate(self._children):
            if existing is child:
                del self._children[index]
                child.parent = None
                self.children_changed.emit()
                return True
        return False

    def find_child(self, display_name: str) -> SolutionItemViewModel | None:
        """First direct child with the given name."""
        return next((c for c in self._children if c.display_name == display_name), None)

    def iter_subtree(self) -> Iterator[SolutionItemViewModel]:
        """Breadth-first iteration over this item and its descendants."""
        queue: deque[SolutionItemViewModel] = deque([self])
        while queue:
            item = queue.popleft()
            yield item
            queue.extend(item._children)


class SolutionViewModel(Observable):
    """Root holder of the solution tree bound to the UI.

    A solution has at most one root item.
    """

    root_changed = Signal(object)

    def __init__(self) -> None:
        super().__init__()
        self._root: SolutionItemViewModel | None = None

    @property
    def solution_file_filter(self) -> str:
        """Filter string for the save/open dialogs."""
        return SOLUTION_FILE_FILTER

    def get_root_item(self) -> SolutionItemViewModel | None:
        return self._root

    def add_root_item(
        self, display_name: str, item_type: Any, metadata: dict[str, str] | None = None
    ) -> SolutionItemViewModel:
        """Create the root item.

        Raises:
            ValueError: if the solution already has a root item

        """
        if self._root is not None:
            raise ValueError("Solution already has a root item")
        self._root = SolutionItemViewModel(display_name, item_type, metadata=metadata)
        self.root_changed.emit(self._root)
        return self._root

    def reset_to_defaults(self) -> None:
        """Drop every item (the solution becomes empty)."""
        if self._root is None:
            return
        logger.debug("[SolutionViewModel] Resetting solution tree", extra={"dev_only": True})
        self._root = None
        self.root_changed.emit(None)

    def iter_items(self) -> Iterator[SolutionItemViewModel]:
        if self._root is None:
            return iter(())
        return self._root.iter_subtree()
