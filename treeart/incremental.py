# treeart/incremental.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, Iterable, Iterator, List, Optional, Tuple, Union

from .errors import EmptyLeafError, InvalidParentError, UnknownItemError
from .level import LevelPath
from .prefix import compute_continuation_prefix, compute_prefix
from .renderer import render_to_string
from .style import StyleConfig, TreeStyle
from .tree import Leaf, Node, Tree

logger = logging.getLogger(__name__)


class ItemKind(Enum):
    """Whether an item may hold children (NODE) or only text (LEAF)."""
    NODE = auto()
    LEAF = auto()


@dataclass(frozen=True)
class TreeItem:
    """
    The content of one item registered with an IncrementalTreeModel.

    Attributes:
        item_id (int): The identifier assigned by the model.
        kind (ItemKind): Fixed at creation.
        label (str | None): The node label; None for leaves.
        lines (tuple[str, ...]): The leaf text; empty for nodes.
    """
    item_id: int
    kind: ItemKind
    label: Optional[str] = None
    lines: Tuple[str, ...] = ()

    @property
    def is_node(self) -> bool:
        return self.kind is ItemKind.NODE


class IncrementalTreeModel:
    """
    A mutable tree that is built one item at a time and can be queried at any point.

    Items are referenced by integer ids handed out in creation order. For every
    item the model can answer where it sits in the depth-first display order and
    which tree prefix it should be drawn with. Prefixes are derived from the
    current topology on each query, so adding a sibling immediately changes the
    answer for the previous last sibling and all of its descendants.

    A parent id that does not exist or refers to a leaf is handled according to
    `strict`: in lenient mode (the default) the new item silently becomes a root,
    in strict mode InvalidParentError is raised and nothing is changed.

    The model performs no locking; callers that share it across threads must
    serialise access themselves (see TreeProgressManager).
    """

    def __init__(
        self,
        style: "Union[StyleConfig, TreeStyle, str, None]" = None,
        strict: bool = False,
    ) -> None:
        """
        Initialises an empty model.

        Args:
            style: The glyph set used for every prefix this model computes.
            strict: Raise on invalid parent references instead of falling back to a root.
        """
        self._style = StyleConfig.from_style(style)
        self._strict = strict
        self._next_id = 0
        self._items: Dict[int, TreeItem] = {}
        self._parent: Dict[int, Optional[int]] = {}
        self._children: Dict[int, List[int]] = {}
        self._roots: List[int] = []
        # Live depth-first order and subtree sizes, kept in step with every insert.
        self._order: List[int] = []
        self._subtree_size: Dict[int, int] = {}

    @property
    def style(self) -> StyleConfig:
        return self._style

    @property
    def strict(self) -> bool:
        return self._strict

    @property
    def roots(self) -> Tuple[int, ...]:
        """Ids of all root items, in the order they were added."""
        return tuple(self._roots)

    # --- Mutation -----------------------------------------------------------

    def add_node(self, label: str, parent: Optional[int] = None) -> int:
        """
        Adds a node that can later be used as a parent.

        Args:
            label: The text displayed for the node.
            parent: The id of the parent node, or None for a root.

        Returns:
            The id assigned to the new node.

        Raises:
            InvalidParentError: In strict mode, if `parent` is unknown or a leaf.
        """
        resolved = self._resolve_parent(parent)
        return self._register(ItemKind.NODE, str(label), (), resolved)

    def add_leaf(self, lines: Union[str, Iterable[str]], parent: Optional[int] = None) -> int:
        """
        Adds a leaf holding one or more lines of text.

        Args:
            lines: A single line, or a sequence of lines for a multi-line leaf.
            parent: The id of the parent node, or None for a root.

        Returns:
            The id assigned to the new leaf.

        Raises:
            EmptyLeafError: If no lines are given.
            InvalidParentError: In strict mode, if `parent` is unknown or a leaf.
        """
        content = (lines,) if isinstance(lines, str) else tuple(str(line) for line in lines)
        if not content:
            raise EmptyLeafError("A leaf requires at least one line of text.")
        resolved = self._resolve_parent(parent)
        return self._register(ItemKind.LEAF, None, content, resolved)

    def _resolve_parent(self, parent: Optional[int]) -> Optional[int]:
        """Returns the parent to attach to, or None when the item must become a root."""
        if parent is None:
            return None

        item = self._items.get(parent)
        if item is None:
            reason = "no such item"
        elif not item.is_node:
            reason = "item is a leaf"
        else:
            return parent

        if self._strict:
            raise InvalidParentError(parent, reason)
        logger.debug(f"Parent {parent} rejected ({reason}); placing new item at root level.")
        return None

    def _register(
        self,
        kind: ItemKind,
        label: Optional[str],
        lines: Tuple[str, ...],
        parent: Optional[int],
    ) -> int:
        position = self._prospective_position(parent)

        item_id = self._next_id
        self._next_id += 1

        self._items[item_id] = TreeItem(item_id=item_id, kind=kind, label=label, lines=lines)
        self._parent[item_id] = parent
        if kind is ItemKind.NODE:
            self._children[item_id] = []
        if parent is None:
            self._roots.append(item_id)
        else:
            self._children[parent].append(item_id)

        self._order.insert(position, item_id)
        self._subtree_size[item_id] = 1
        ancestor = parent
        while ancestor is not None:
            self._subtree_size[ancestor] += 1
            ancestor = self._parent[ancestor]

        return item_id

    # --- Position queries ---------------------------------------------------

    def insertion_position(self, item_id: int) -> int:
        """
        Returns the 0-based index an existing item occupies in depth-first display order.

        Raises:
            UnknownItemError: If the id was never assigned by this model.
        """
        if item_id not in self._items:
            raise UnknownItemError(item_id)

        position = 0
        current = item_id
        while True:
            parent = self._parent[current]
            siblings = self._roots if parent is None else self._children[parent]
            for sibling in siblings:
                if sibling == current:
                    break
                position += self._subtree_size[sibling]
            if parent is None:
                return position
            # The parent row itself precedes all of its children.
            position += 1
            current = parent

    def next_insertion_position(self, parent: Optional[int] = None) -> int:
        """
        Returns the index a new item under `parent` would take in display order.

        The new item goes after the complete subtree of the parent's current last
        child, or straight after the parent when it has no children yet. A root
        goes after every existing item.

        Raises:
            InvalidParentError: In strict mode, if `parent` is unknown or a leaf.
        """
        return self._prospective_position(self._resolve_parent(parent))

    def _prospective_position(self, parent: Optional[int]) -> int:
        if parent is None:
            return len(self._items)
        return self.insertion_position(parent) + self._subtree_size[parent]

    def display_order(self) -> List[int]:
        """Returns every item id in depth-first display order."""
        return list(self._order)

    # --- Prefix queries -----------------------------------------------------

    def level_path_of(self, item_id: int) -> Optional[LevelPath]:
        """Returns the current LevelPath of an item, or None if the id is unknown."""
        if item_id not in self._items:
            return None
        return LevelPath.from_parent_chain(item_id, self._parent.__getitem__, self._is_last_child)

    def prefix_of(self, item_id: int) -> Optional[str]:
        """
        Returns the tree prefix for an item's first line.

        Returns None for root items, which carry no prefix of their own, and
        for unknown ids.
        """
        if self._parent.get(item_id) is None:
            return None
        return compute_prefix(self.level_path_of(item_id), self._style)

    def continuation_prefix_of(self, item_id: int) -> Optional[str]:
        """Returns the prefix for the second and later lines of a multi-line leaf."""
        if self._parent.get(item_id) is None:
            return None
        return compute_continuation_prefix(self.level_path_of(item_id), self._style)

    def _is_last_child(self, item_id: int) -> bool:
        parent = self._parent[item_id]
        if parent is None:
            return self._roots[-1] == item_id
        return self._children[parent][-1] == item_id

    # --- Structure accessors ------------------------------------------------

    def get_item(self, item_id: int) -> Optional[TreeItem]:
        return self._items.get(item_id)

    def parent_of(self, item_id: int) -> Optional[int]:
        """
        Returns the parent id of an item, or None for a root.

        Raises:
            UnknownItemError: If the id was never assigned by this model.
        """
        if item_id not in self._parent:
            raise UnknownItemError(item_id)
        return self._parent[item_id]

    def children_of(self, item_id: int) -> Tuple[int, ...]:
        """
        Returns the child ids of an item in insertion order (empty for leaves).

        Raises:
            UnknownItemError: If the id was never assigned by this model.
        """
        if item_id not in self._items:
            raise UnknownItemError(item_id)
        return tuple(self._children.get(item_id, ()))

    def is_empty(self) -> bool:
        return not self._items

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._items

    def __iter__(self) -> Iterator[int]:
        return iter(list(self._order))

    # --- Materialization ----------------------------------------------------

    def materialize(self) -> Optional[Tree]:
        """
        Builds an immutable static tree from the current state.

        Returns:
            None for an empty model, the single root's subtree when there is one
            root, or a Node with an empty label wrapping all roots otherwise.
        """
        if not self._roots:
            return None
        if len(self._roots) == 1:
            return self._build_subtree(self._roots[0])
        return Node("", tuple(self._build_subtree(root) for root in self._roots))

    def _build_subtree(self, item_id: int) -> Tree:
        item = self._items[item_id]
        if not item.is_node:
            return Leaf(item.lines)
        return Node(item.label, tuple(self._build_subtree(child) for child in self._children[item_id]))

    def render(self, line_ending: str = "\n") -> str:
        """Materializes the model and renders it with the model's style."""
        tree = self.materialize()
        if tree is None:
            return ""
        return render_to_string(tree, self._style, line_ending)
