# treeart/prefix.py

from __future__ import annotations

from typing import List

from .level import LevelPath
from .style import StyleConfig


def compute_prefix(path: LevelPath, style: StyleConfig) -> str:
    """
    Generates the prefix printed before the first line of an item (e.g. " │  ├─").

    Only the final element of the path is the item's own connector; every
    earlier element belongs to an ancestor and draws either a vertical line
    (the ancestor has later siblings) or blank space.

    Args:
        path: The item's LevelPath.
        style: The glyph set to draw with.

    Returns:
        The prefix string, empty for a root.
    """
    last_pos = len(path) - 1
    parts: List[str] = []
    for pos, is_last in enumerate(path):
        if pos == last_pos:
            parts.append(style.get_branch(is_last))
        else:
            parts.append(style.get_empty() if is_last else style.get_vertical())
    return "".join(parts)


def compute_continuation_prefix(path: LevelPath, style: StyleConfig) -> str:
    """Generates the prefix for the second and later lines of a multi-line leaf."""
    return "".join(style.get_empty() if is_last else style.get_vertical() for is_last in path)
