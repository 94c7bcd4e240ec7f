# utils/display_manager.py

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Dict, Iterator, List, Optional

from treeart.style import StyleConfig

from .tree_formatter import WARNING_PREFIX, TreeFormatter

# Use TYPE_CHECKING block for imports only needed for annotations.
if TYPE_CHECKING:
    from config.config_manager import ConfigManager
    from .progress_visualiser import TreeProgressManager

logger = logging.getLogger(__name__)

class DisplayManager:
    """
    Manages the hierarchical display of processing stages and information.

    This class uses a TreeFormatter to create structured, indented output in the console,
    so that the steps of a run read as a tree.
    """

    def __init__(self, config: "ConfigManager | None" = None, style: Optional[StyleConfig] = None) -> None:
        """
        Initialises the DisplayManager.

        Args:
            config: An optional ConfigManager instance; its 'display.style' picks the glyph set.
            style: An explicit glyph set, overriding the configuration.
        """
        if style is None and config is not None:
            style = StyleConfig.from_style(config.style)
        self.style = style or StyleConfig.unicode()
        self.tree = TreeFormatter(self.style)
        self.config = config
        self.warning_buffer: List[str] = []

    @contextmanager
    def section(self, name: str, number: int, total: int) -> Iterator[None]:
        """
        A context manager for creating a main, top-level numbered section.

        Example:
            --- [1/2] Scanning ---
        """
        start = time.monotonic()
        try:
            print(f"\n--- [{number}/{total}] {name} ---")
            yield
        finally:
            self._flush_warnings()
            duration = time.monotonic() - start
            # Only show timing for sections that take a noticeable amount of time
            if duration >= 1.0:
                print(f"{self.style.last} Completed in {self._format_time(duration)}")

    @contextmanager
    def level(self, text: str, is_last: bool = False) -> Iterator["DisplayManager"]:
        """
        A context manager for creating a nested level within a section.
        Lines printed inside the block are indented beneath `text`.
        """
        self.tree.push_level(is_last_item=is_last)
        print(f"{self.tree.get_prefix(is_last_item=is_last)}{text}")

        try:
            yield self
        finally:
            self._flush_warnings()
            self.tree.pop_level()

    def add_warning(self, message: str) -> None:
        """
        Buffers a warning message to be displayed at the end of the current level.
        This prevents warnings from interrupting a clean tree display.

        Args:
            message: The warning message string.
        """
        logger.warning(message) # Also log it immediately
        self.warning_buffer.append(message)

    def print_metrics(self, metrics: Dict[str, Any]) -> None:
        """
        Prints a dictionary of key-value metrics as children of the current level.

        Args:
            metrics: A dictionary where keys are metric names and values are the metric info.
        """
        remaining = len(metrics)
        for name, value in metrics.items():
            remaining -= 1
            self.tree.push_level(is_last_item=remaining == 0)
            print(f"{self.tree.get_prefix(is_last_item=remaining == 0)}{name}: {value}")
            self.tree.pop_level()

    def print_lines(self, lines: List[str]) -> None:
        """Prints pre-rendered lines (e.g. a rendered tree) indented under the current level."""
        self.tree.push_level(is_last_item=True)
        indent = self.tree.get_continuation_prefix()
        self.tree.pop_level()
        for line in lines:
            print(f"{indent}{line}")

    def create_progress_tree(self) -> "TreeProgressManager":
        """Creates a TreeProgressManager drawing with this display's glyph set."""
        from .progress_visualiser import ProgressType, TreeProgressManager

        progress_type = None
        if self.config is not None:
            progress_type = ProgressType[self.config.progress_type]
        return TreeProgressManager(style=self.style, progress_type=progress_type)

    def _flush_warnings(self) -> None:
        """Prints any buffered warnings with appropriate indentation."""
        if not self.warning_buffer:
            return

        remaining = len(self.warning_buffer)
        for warning in self.warning_buffer:
            remaining -= 1
            self.tree.push_level(is_last_item=remaining == 0)
            print(f"{self.tree.get_prefix(is_last_item=remaining == 0)}{WARNING_PREFIX} {warning}")
            self.tree.pop_level()

        self.warning_buffer.clear()

    @staticmethod
    def _format_time(seconds: float) -> str:
        """
        Formats a duration in seconds into a human-readable string (MM:SS or HH:MM:SS).
        """
        if seconds < 0:
            seconds = 0

        minutes, sec = divmod(int(seconds), 60)
        hours, minutes = divmod(minutes, 60)

        if hours > 0:
            return f"{hours:d}:{minutes:02d}:{sec:02d}"
        return f"{minutes:02d}:{sec:02d}"
