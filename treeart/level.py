# treeart/level.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterator, Optional, Tuple, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class LevelPath:
    """
    The path from a root down to one item, recorded as one boolean per level.

    Element i is True when the item at depth i + 1 on that path (the deepest
    element being the item itself) is the last child of its parent. A root
    has an empty path.
    """
    levels: Tuple[bool, ...] = ()

    @classmethod
    def empty(cls) -> "LevelPath":
        return cls()

    @classmethod
    def from_parent_chain(
        cls,
        item: T,
        parent_of: Callable[[T], Optional[T]],
        is_last: Callable[[T], bool],
    ) -> "LevelPath":
        """
        Builds the path for an item by walking up its ancestor chain.

        Args:
            item: The item to build the path for.
            parent_of: Returns the parent of an item, or None for a root.
            is_last: Returns whether an item is the last child of its parent.

        Returns:
            The LevelPath in root-to-item order.
        """
        flags = []
        current = item
        parent = parent_of(current)
        while parent is not None:
            flags.append(is_last(current))
            current = parent
            parent = parent_of(current)
        flags.reverse()
        return cls(tuple(flags))

    def extend(self, is_last: bool) -> "LevelPath":
        """Returns a new path one level deeper; this path is left unchanged."""
        return LevelPath(self.levels + (bool(is_last),))

    def is_empty(self) -> bool:
        return not self.levels

    def __len__(self) -> int:
        return len(self.levels)

    def __iter__(self) -> Iterator[bool]:
        return iter(self.levels)

    def __getitem__(self, index: int) -> bool:
        return self.levels[index]
