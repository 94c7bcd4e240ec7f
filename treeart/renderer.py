# treeart/renderer.py

from __future__ import annotations

from typing import Iterator, Union

from .level import LevelPath
from .prefix import compute_continuation_prefix, compute_prefix
from .style import StyleConfig, TreeStyle
from .tree import Node, Tree


def render_lines(
    tree: Tree,
    style: "Union[StyleConfig, TreeStyle, str, None]" = None,
) -> Iterator[str]:
    """
    Walks a static tree depth-first and yields one output line at a time.

    Example output (Unicode style):
        root
         ├─src
         │  └─main.py
         └─README.md

    Args:
        tree: The Node or Leaf to render.
        style: Any style specification accepted by StyleConfig.from_style.
    """
    yield from _render_element(tree, LevelPath.empty(), StyleConfig.from_style(style))


def _render_element(tree: Tree, level: LevelPath, style: StyleConfig) -> Iterator[str]:
    prefix = compute_prefix(level, style)
    if isinstance(tree, Node):
        yield f"{prefix}{tree.label}"
        remaining = len(tree.children)
        for child in tree.children:
            remaining -= 1
            yield from _render_element(child, level.extend(remaining == 0), style)
        return

    continuation = compute_continuation_prefix(level, style)
    for i, line in enumerate(tree.lines):
        yield f"{prefix if i == 0 else continuation}{line}"


def render_to_string(
    tree: Tree,
    style: "Union[StyleConfig, TreeStyle, str, None]" = None,
    line_ending: str = "\n",
) -> str:
    """Renders a static tree into a single string, one tree line per output line."""
    return line_ending.join(render_lines(tree, style))
