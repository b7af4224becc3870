"""Module: solution_model.py.

Author: Michael Economou
Date: 2026-03-04

Framework-independent solution tree.

This is the serializable form of a solution: the converter produces it
from the view-model tree, both storage backends consume and produce it.
Traversals are iterative so that deep trees do not hit the recursion
limit.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator
from dataclasses import dataclass, field

from solutionlib.domain.item_types import SolutionItemType


@dataclass(eq=False)
class SolutionItemModel:
    """A node of the solution tree.

    Child order is significant. ``parent`` is a back reference maintained
    by add_child() and is not part of the node's value.
    """

    item_id: int
    item_type: SolutionItemType
    display_name: str
    is_expanded: bool = False
    metadata: dict[str, str] = field(default_factory=dict)
    children: list[SolutionItemModel] = field(default_factory=list, repr=False)
    parent: SolutionItemModel | None = field(default=None, repr=False)

    def add_child(self, child: SolutionItemModel) -> SolutionItemModel:
        """Append child as the last child of this item."""
        if child.parent is not None:
            raise ValueError(f"Item {child.item_id} already has a parent")
        child.parent = self
        self.children.append(child)
        return child

    @property
    def level(self) -> int:
        """Depth below the root (root is level 0)."""
        depth = 0
        node = self.parent
        while node is not None:
            depth += 1
            node = node.parent
        return depth

    def iter_subtree(self) -> Iterator[SolutionItemModel]:
        """Breadth-first iteration over this item and its descendants."""
        queue: deque[SolutionItemModel] = deque([self])
        while queue:
            item = queue.popleft()
            yield item
            queue.extend(item.children)


@dataclass(eq=False)
class SolutionModel:
    """A whole solution: an optional root item plus all its descendants."""

    root: SolutionItemModel | None = None
    _next_id: int = field(default=1, repr=False)

    def create_item(
        self,
        item_type: SolutionItemType,
        display_name: str,
        is_expanded: bool = False,
        metadata: dict[str, str] | None = None,
        item_id: int | None = None,
    ) -> SolutionItemModel:
        """Create a detached item, assigning the next free id when none is given."""
        if item_id is None:
            item_id = self._next_id
        self._next_id = max(self._next_id, item_id + 1)
        return SolutionItemModel(
            item_id=item_id,
            item_type=item_type,
            display_name=display_name,
            is_expanded=is_expanded,
            metadata=dict(metadata or {}),
        )

    def set_root(self, item: SolutionItemModel) -> SolutionItemModel:
        if self.root is not None:
            raise ValueError("Solution already has a root item")
        if item.parent is not None:
            raise ValueError("Root item cannot have a parent")
        self.root = item
        return item

    def add_item(
        self,
        parent: SolutionItemModel | None,
        item_type: SolutionItemType,
        display_name: str,
        is_expanded: bool = False,
        metadata: dict[str, str] | None = None,
    ) -> SolutionItemModel:
        """Create an item and attach it under parent (or as root when parent is None)."""
        item = self.create_item(item_type, display_name, is_expanded, metadata)
        if parent is None:
            return self.set_root(item)
        return parent.add_child(item)

    @property
    def is_empty(self) -> bool:
        return self.root is None

    def iter_items(self) -> Iterator[SolutionItemModel]:
        """Breadth-first iteration; parents always precede their children."""
        if self.root is None:
            return iter(())
        return self.root.iter_subtree()

    def item_count(self) -> int:
        return sum(1 for _ in self.iter_items())

    def find(self, item_id: int) -> SolutionItemModel | None:
        for item in self.iter_items():
            if item.item_id == item_id:
                return item
        return None

    def structure(self) -> tuple[tuple, ...]:
        """Comparable outline of the tree, ignoring ids.

        Pre-order sequence of (level, type, name, expanded, metadata, child count).
        Two models with equal structures are isomorphic: same edges, same
        sibling order, same types, flags and payloads.
        """
        if self.root is None:
            return ()

        outline = []
        stack: list[tuple[SolutionItemModel, int]] = [(self.root, 0)]
        while stack:
            item, level = stack.pop()
            outline.append(
                (
                    level,
                    int(item.item_type),
                    item.display_name,
                    item.is_expanded,
                    tuple(sorted(item.metadata.items())),
                    len(item.children),
                )
            )
            stack.extend((child, level + 1) for child in reversed(item.children))
        return tuple(outline)
