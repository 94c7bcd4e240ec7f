# treeart/__init__.py

from .builder import TreeBuilder
from .errors import EmptyLeafError, InvalidParentError, TreeModelError, UnknownItemError
from .filesystem import scan_into_model, tree_from_dir
from .incremental import IncrementalTreeModel
from .level import LevelPath
from .prefix import compute_continuation_prefix, compute_prefix
from .renderer import render_lines, render_to_string
from .style import StyleConfig, TreeStyle
from .tree import Leaf, Node, Tree

__all__ = [
    "EmptyLeafError",
    "IncrementalTreeModel",
    "InvalidParentError",
    "Leaf",
    "LevelPath",
    "Node",
    "StyleConfig",
    "Tree",
    "TreeBuilder",
    "TreeModelError",
    "TreeStyle",
    "UnknownItemError",
    "compute_continuation_prefix",
    "compute_prefix",
    "render_lines",
    "render_to_string",
    "scan_into_model",
    "tree_from_dir",
]
