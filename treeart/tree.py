# treeart/tree.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple, Union

from .errors import EmptyLeafError


@dataclass(frozen=True)
class Leaf:
    """
    A tree item holding one or more lines of text and no children.

    Attributes:
        lines (tuple[str, ...]): The text lines, rendered one per output line.
    """
    lines: Tuple[str, ...]

    def __post_init__(self) -> None:
        lines = (self.lines,) if isinstance(self.lines, str) else tuple(self.lines)
        if not lines:
            raise EmptyLeafError("A leaf requires at least one line of text.")
        object.__setattr__(self, "lines", tuple(str(line) for line in lines))

    @property
    def label(self) -> Optional[str]:
        return None

    @property
    def children(self) -> Tuple["Tree", ...]:
        return ()

    def is_node(self) -> bool:
        return False

    def is_leaf(self) -> bool:
        return True

    def depth(self) -> int:
        return 1

    def node_count(self) -> int:
        return 0

    def leaf_count(self) -> int:
        return 1

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "leaf", "lines": list(self.lines)}


@dataclass(frozen=True)
class Node:
    """
    A tree item with a label and an ordered tuple of children.

    Instances are immutable: a materialized tree is a snapshot that later
    changes to the model it came from cannot affect.
    """
    label: str
    children: Tuple["Tree", ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "children", tuple(self.children))

    @property
    def lines(self) -> Optional[Tuple[str, ...]]:
        return None

    def is_node(self) -> bool:
        return True

    def is_leaf(self) -> bool:
        return False

    def child_count(self) -> int:
        return len(self.children)

    def depth(self) -> int:
        """Number of levels in this subtree, counting this node."""
        return 1 + max((child.depth() for child in self.children), default=0)

    def node_count(self) -> int:
        return 1 + sum(child.node_count() for child in self.children)

    def leaf_count(self) -> int:
        return sum(child.leaf_count() for child in self.children)

    def with_child(self, child: "Tree") -> "Node":
        """Returns a copy of this node with one more child appended."""
        return Node(self.label, self.children + (child,))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "node",
            "label": self.label,
            "children": [child.to_dict() for child in self.children],
        }


Tree = Union[Node, Leaf]
