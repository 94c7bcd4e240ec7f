# treeart/filesystem.py

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Callable, List, Optional, Tuple, Union

from .tree import Leaf, Node

if TYPE_CHECKING:
    from .incremental import IncrementalTreeModel

logger = logging.getLogger(__name__)


def _list_entries(directory: Path) -> Tuple[List[Path], List[Path]]:
    """Returns the (directories, files) directly inside `directory`, each sorted by name."""
    dirs: List[Path] = []
    files: List[Path] = []
    for entry in directory.iterdir():
        if entry.is_dir():
            dirs.append(entry)
        elif entry.is_file():
            files.append(entry)
    dirs.sort()
    files.sort()
    return dirs, files


def _check_directory(path: Union[str, Path]) -> Path:
    directory = Path(path)
    if not directory.exists():
        raise FileNotFoundError(f"Directory not found: {directory}")
    if not directory.is_dir():
        raise NotADirectoryError(f"Not a directory: {directory}")
    return directory


def _display_name(directory: Path) -> str:
    return directory.name or directory.resolve().name or "."


def tree_from_dir(path: Union[str, Path], max_depth: Optional[int] = None) -> Node:
    """
    Builds a static tree from a directory structure.

    Directories become nodes and files become leaves. Within a directory,
    subdirectories come first and files second, each group sorted by name.

    Args:
        path: The directory to walk.
        max_depth: How many directory levels below `path` to descend into.
                   None means unlimited; 0 yields only the root node.

    Returns:
        The root Node, labelled with the directory name.

    Raises:
        FileNotFoundError: If `path` does not exist.
        NotADirectoryError: If `path` is not a directory.
    """
    directory = _check_directory(path)
    return _build_dir_node(directory, max_depth)


def _build_dir_node(directory: Path, max_depth: Optional[int]) -> Node:
    label = _display_name(directory)
    if max_depth == 0:
        return Node(label)

    try:
        dirs, files = _list_entries(directory)
    except OSError as e:
        logger.warning(f"Skipping unreadable directory {directory}: {e}")
        return Node(label)

    next_depth = None if max_depth is None else max_depth - 1
    children = [_build_dir_node(d, next_depth) for d in dirs]
    children.extend(Leaf(f.name) for f in files)
    return Node(label, tuple(children))


def scan_into_model(
    path: Union[str, Path],
    model: "IncrementalTreeModel",
    parent: Optional[int] = None,
    max_depth: Optional[int] = None,
    on_item: Optional[Callable[[int], None]] = None,
) -> int:
    """
    Walks a directory and feeds every entry into an incremental model.

    The walk is breadth-first per directory: all entries of a directory are
    added before any of its subdirectories are scanned, so later insertions
    land in the middle of the display order, as they would for a live
    progress display.

    Args:
        path: The directory to walk.
        model: The model to add items to.
        parent: Optional parent id for the directory's own node.
        max_depth: How many directory levels below `path` to descend into.
        on_item: Called with each new item id right after it is added.

    Returns:
        The id of the node created for `path`.
    """
    directory = _check_directory(path)
    root_id = model.add_node(_display_name(directory), parent)
    if on_item:
        on_item(root_id)

    pending: List[Tuple[Path, int, Optional[int]]] = [(directory, root_id, max_depth)]
    while pending:
        current, node_id, depth = pending.pop(0)
        if depth == 0:
            continue
        try:
            dirs, files = _list_entries(current)
        except OSError as e:
            logger.warning(f"Skipping unreadable directory {current}: {e}")
            continue

        next_depth = None if depth is None else depth - 1
        for d in dirs:
            child_id = model.add_node(d.name, node_id)
            if on_item:
                on_item(child_id)
            pending.append((d, child_id, next_depth))
        for f in files:
            leaf_id = model.add_leaf(f.name, node_id)
            if on_item:
                on_item(leaf_id)

    logger.debug(f"Scanned {directory} into model ({len(model)} items).")
    return root_id
