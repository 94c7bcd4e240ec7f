# utils/progress_visualiser.py

from __future__ import annotations

import logging
import threading
from enum import Enum, auto
from typing import Dict, List, Optional, Tuple, Union

from tqdm.auto import tqdm

from treeart.errors import UnknownItemError
from treeart.incremental import IncrementalTreeModel
from treeart.style import StyleConfig, TreeStyle
from treeart.tree import Tree

logger = logging.getLogger(__name__)

class ProgressType(Enum):
    """Enumeration for the available types of progress visualisation."""
    TQDM = auto()   # Use the tqdm library for rich progress bars.
    SIMPLE = auto() # Use simple text-based percentage updates.
    NONE = auto()   # No progress output.

def _move_tqdm_bar(bar: tqdm, row: int) -> None:
    """
    Redraws a tqdm bar on another terminal row.

    tqdm has no public API for this. A bar created with `position=n` keeps
    `pos == -n` (negative marks an explicit, fixed row) and draws itself at
    `abs(pos)` on each refresh, so rewriting `pos` moves the bar.
    """
    if abs(bar.pos) != row:
        bar.pos = -row
        bar.refresh()

class ProgressBar:
    """A wrapper class for progress bars to standardise their usage."""

    def __init__(
        self,
        desc: str,
        total: Optional[int],
        prefix: str = "",
        progress_type: ProgressType = ProgressType.TQDM,
        position: Optional[int] = None,
    ) -> None:
        """
        Initialises a ProgressBar instance.

        Args:
            desc: The description of the task for the progress bar.
            total: The total number of iterations. Can be None for indeterminate progress.
            prefix: A string to prepend to the description (the tree prefix).
            progress_type: The type of progress visualisation to use.
            position: The terminal row for the bar, for stacked tqdm bars.
        """
        self.desc = desc
        self.total = total
        self.prefix = prefix
        self.progress_type = progress_type
        self.current = 0
        self.bar: Optional[tqdm] = None

        if self.progress_type == ProgressType.TQDM:
            try:
                self.bar = tqdm(
                    total=total,
                    desc=self.full_description,
                    position=position,
                    leave=True,
                    unit="it",
                    bar_format="{l_bar}{bar}| {n_fmt}/{total_fmt} [{elapsed}<{remaining}]"
                )
            except Exception as e:
                logger.error(f"Failed to initialise tqdm progress bar: {e}", exc_info=True)
                self.progress_type = ProgressType.SIMPLE # Fallback to simple

    @property
    def full_description(self) -> str:
        """The description as displayed, with the tree prefix in front."""
        return f"{self.prefix}{self.desc}"

    def update(self, amount: float = 1.0) -> None:
        """Updates the progress by a specified amount."""
        if self.total is not None:
            self.current = min(self.current + amount, self.total)
        else:
            self.current += amount

        if self.bar is not None:
            self.bar.update(amount)
        elif self.progress_type == ProgressType.SIMPLE and self.total is not None and self.total > 0:
            percentage = (self.current / self.total) * 100
            # Use carriage return to keep progress on one line
            print(f"\r{self.full_description}: {percentage:.1f}%", end="")

    def set_description(self, desc: str) -> None:
        """Updates the description of the progress bar."""
        self.desc = desc
        if self.bar is not None:
            self.bar.set_description(self.full_description)

    def set_prefix(self, prefix: str) -> None:
        """Replaces the tree prefix shown in front of the description."""
        if prefix == self.prefix:
            return
        self.prefix = prefix
        if self.bar is not None:
            self.bar.set_description(self.full_description)

    def set_position(self, position: int) -> None:
        """Moves a tqdm bar to another terminal row."""
        if self.bar is not None:
            _move_tqdm_bar(self.bar, position)

    def close(self) -> None:
        """Closes and cleans up the progress bar instance."""
        if self.bar is not None:
            self.bar.close()
        elif self.progress_type == ProgressType.SIMPLE:
            # Print a newline to move to the next line after progress is done
            print()

class ProgressFactory:
    """A factory class for creating and managing ProgressBar instances."""
    _default_type: ProgressType = ProgressType.TQDM

    @classmethod
    def set_progress_type(cls, progress_type: ProgressType) -> None:
        """
        Sets the default progress bar type for all subsequently created bars.

        Args:
            progress_type: The ProgressType to set as the default.
        """
        if not isinstance(progress_type, ProgressType):
            logger.warning(f"Invalid progress type '{progress_type}'. Defaulting to TQDM.")
            cls._default_type = ProgressType.TQDM
        else:
            cls._default_type = progress_type
            logger.debug(f"Default progress type set to {progress_type.name}")

    @classmethod
    def get_progress_type(cls) -> ProgressType:
        return cls._default_type

    @classmethod
    def create_bar(
        cls,
        desc: str,
        total: Optional[int],
        prefix: str = "",
        progress_type: Optional[ProgressType] = None,
        position: Optional[int] = None,
    ) -> ProgressBar:
        """
        Creates a new ProgressBar instance using the factory's default type.

        Args:
            desc: The description for the progress bar.
            total: The total number of items.
            prefix: The indentation prefix.
            progress_type: Override the factory's default type for this specific bar.
            position: The terminal row for the bar.

        Returns:
            An initialised ProgressBar instance.
        """
        effective_type = progress_type if progress_type is not None else cls._default_type
        return ProgressBar(desc, total, prefix, effective_type, position)


class TreeProgressManager:
    """
    Displays a set of progress bars as a tree whose shape can grow at any time.

    Each bar is registered as a node of an IncrementalTreeModel. The model
    decides where a new bar's row goes (after the full subtree of its parent's
    current last child) and which prefix every row carries. Because adding a
    sibling changes which earlier sibling is "last", every row is re-prefixed
    after each insertion.

    All operations run under a single lock, so bars may be added and updated
    from worker threads.
    """

    def __init__(
        self,
        style: "Union[StyleConfig, TreeStyle, str, None]" = None,
        progress_type: Optional[ProgressType] = None,
        strict: bool = False,
    ) -> None:
        """
        Initialises an empty manager.

        Args:
            style: The glyph set for tree prefixes.
            progress_type: The bar type; defaults to the ProgressFactory default.
            strict: Reject unknown parent ids instead of creating a new root row.
        """
        self._model = IncrementalTreeModel(style, strict=strict)
        self._lock = threading.Lock()
        self._bars: Dict[int, ProgressBar] = {}
        self._rows: List[int] = []
        self.progress_type = progress_type

    def __enter__(self) -> "TreeProgressManager":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def add_bar(self, desc: str, total: Optional[int] = None, parent: Optional[int] = None) -> int:
        """
        Adds a progress bar as a child of `parent` (or as a new root row).

        Args:
            desc: The message shown after the tree prefix.
            total: The total number of iterations, or None if unknown.
            parent: The id of the parent bar, or None for a root bar.

        Returns:
            The id of the new bar.
        """
        with self._lock:
            position = self._model.next_insertion_position(parent)
            item_id = self._model.add_node(desc, parent)
            bar = ProgressFactory.create_bar(
                desc,
                total,
                prefix=self._row_prefix(item_id),
                progress_type=self.progress_type,
                position=position,
            )
            self._bars[item_id] = bar
            self._rows.insert(position, item_id)
            self._refresh_rows()
            logger.debug(f"Added progress bar {item_id} ('{desc}') at row {position}.")
            return item_id

    def set_message(self, item_id: int, message: str) -> None:
        """Sets the base message of a bar; the tree prefix is kept in front of it."""
        with self._lock:
            self._get_bar(item_id).set_description(message)

    def update(self, item_id: int, amount: float = 1.0) -> None:
        with self._lock:
            self._get_bar(item_id).update(amount)

    def prefix_of(self, item_id: int) -> Optional[str]:
        with self._lock:
            return self._model.prefix_of(item_id)

    def position_of(self, item_id: int) -> int:
        with self._lock:
            return self._model.insertion_position(item_id)

    def rows(self) -> List[Tuple[int, str]]:
        """Returns (bar id, displayed description) for every row, top to bottom."""
        with self._lock:
            return [(item_id, self._bars[item_id].full_description) for item_id in self._rows]

    def render(self) -> str:
        """Returns a plain-text snapshot of all rows."""
        return "\n".join(text for _, text in self.rows())

    def materialize(self) -> Optional[Tree]:
        """Returns a static tree of the bar messages as they were registered."""
        with self._lock:
            return self._model.materialize()

    def close(self) -> None:
        """Closes every bar, top row first."""
        with self._lock:
            for item_id in self._rows:
                self._bars[item_id].close()

    def _get_bar(self, item_id: int) -> ProgressBar:
        bar = self._bars.get(item_id)
        if bar is None:
            raise UnknownItemError(item_id)
        return bar

    def _row_prefix(self, item_id: int) -> str:
        prefix = self._model.prefix_of(item_id)
        return f"{prefix} " if prefix else ""

    def _refresh_rows(self) -> None:
        for row, item_id in enumerate(self._rows):
            bar = self._bars[item_id]
            bar.set_prefix(self._row_prefix(item_id))
            bar.set_position(row)
