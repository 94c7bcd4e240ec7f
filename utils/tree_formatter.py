# utils/tree_formatter.py

from __future__ import annotations

from typing import List, Optional

from treeart.level import LevelPath
from treeart.prefix import compute_continuation_prefix, compute_prefix
from treeart.style import StyleConfig

WARNING_PREFIX = "[!]"


class TreeFormatter:
    """
    Manages the state and generation of prefixes for printing a tree one line
    at a time, when the full tree is not known up front.

    The formatter keeps a stack of LevelPath values, one per entered level,
    so the prefix for the next line is always compute_prefix() of the
    current path.
    """
    def __init__(self, style: Optional[StyleConfig] = None) -> None:
        """
        Initialises the formatter at the root level.

        Args:
            style: The glyph set to draw with. Defaults to the Unicode set.
        """
        self.style = style or StyleConfig.unicode()
        self._path_stack: List[LevelPath] = [LevelPath.empty()]

    @property
    def depth(self) -> int:
        """The number of levels currently entered."""
        return len(self._path_stack) - 1

    @property
    def current_path(self) -> LevelPath:
        return self._path_stack[-1]

    def get_prefix(self, is_last_item: bool) -> str:
        """
        Generates the prefix string (e.g., " │  ├─ ") for an item on the current level.

        Args:
            is_last_item: Whether the item is the last child of its parent.
                          This overrides the flag the current level was entered with.

        Returns:
            The prefix for the item's line, or "" at the root level.
        """
        if self.depth == 0:
            return ""
        parent_path = LevelPath(self.current_path.levels[:-1])
        return compute_prefix(parent_path.extend(is_last_item), self.style) + " "

    def get_continuation_prefix(self) -> str:
        """Generates the prefix for lines that continue the current level without a connector."""
        if self.depth == 0:
            return ""
        return compute_continuation_prefix(self.current_path, self.style) + " "

    def push_level(self, is_last_item: bool) -> None:
        """
        Enters a new, deeper level in the tree structure.

        Args:
            is_last_item: Whether the new level being entered is the last
                          child of its current parent.
        """
        self._path_stack.append(self.current_path.extend(is_last_item))

    def pop_level(self) -> None:
        """Exits the current level, moving back up the tree."""
        if len(self._path_stack) > 1:
            self._path_stack.pop()
