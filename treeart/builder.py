# treeart/builder.py

from __future__ import annotations

from typing import Iterable, List, Tuple, Union

from .errors import TreeModelError
from .tree import Leaf, Node, Tree


class TreeBuilder:
    """
    Builds a static tree through a fluent, context-based API.

    Example:
        builder = TreeBuilder()
        builder.node("root").node("child").leaf("item").end().leaf("another")
        tree = builder.build()
    """

    def __init__(self) -> None:
        # Each open node is kept as (label, children-so-far) until end() closes it.
        self._stack: List[Tuple[str, List[Tree]]] = []

    def node(self, label: str) -> "TreeBuilder":
        """Opens a node under the current context and makes it the new context."""
        self._stack.append((label, []))
        return self

    def leaf(self, lines: Union[str, Iterable[str]]) -> "TreeBuilder":
        """
        Adds a leaf to the current node.

        Raises:
            TreeModelError: If no node is open.
            EmptyLeafError: If no lines are given.
        """
        if not self._stack:
            raise TreeModelError("TreeBuilder: cannot add a leaf without an open node.")
        self._stack[-1][1].append(Leaf(lines if isinstance(lines, str) else tuple(lines)))
        return self

    def end(self) -> "TreeBuilder":
        """Closes the current node and returns to its parent. The outermost node stays open."""
        if len(self._stack) > 1:
            label, children = self._stack.pop()
            self._stack[-1][1].append(Node(label, children))
        return self

    def build(self) -> Tree:
        """
        Closes every open node and returns the root.

        Raises:
            TreeModelError: If no node was ever added.
        """
        if not self._stack:
            raise TreeModelError("TreeBuilder: cannot build an empty tree.")
        while len(self._stack) > 1:
            self.end()
        label, children = self._stack[0]
        return Node(label, children)
