# utils/tree_writer.py

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from treeart.renderer import render_to_string
from treeart.style import StyleConfig
from treeart.tree import Tree

# Use TYPE_CHECKING to avoid a runtime import of the display layer.
if TYPE_CHECKING:
    from .display_manager import DisplayManager

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS = ("txt", "json")

class TreeWriter:
    """
    Handles saving a materialized tree to a file
    in various formats (e.g., TXT, JSON).
    """

    @classmethod
    def _save_txt(cls, tree: Tree, output_path: Path, style: Optional[StyleConfig]) -> None:
        """Saves the tree as rendered tree-art text."""
        logger.info(f"Saving tree to TXT file: {output_path}")
        try:
            with output_path.open('w', encoding='utf-8') as f:
                f.write(render_to_string(tree, style))
                f.write("\n")
        except IOError as e:
            logger.error(f"IOError while writing to {output_path}: {e}", exc_info=True)
            # Re-raise to let the caller handle the file writing failure
            raise

    @classmethod
    def _save_json(cls, tree: Tree, output_path: Path) -> None:
        """Saves the tree structure as nested JSON objects."""
        logger.info(f"Saving tree to JSON file: {output_path}")
        try:
            with output_path.open('w', encoding='utf-8') as f:
                json.dump(tree.to_dict(), f, indent=2, ensure_ascii=False)
        except (IOError, TypeError) as e:
            logger.error(f"Error while writing JSON to {output_path}: {e}", exc_info=True)
            raise

    @classmethod
    def save_tree(
        cls,
        tree: Tree,
        output_path: Path,
        format: str = "txt",
        style: Optional[StyleConfig] = None,
        display: "DisplayManager | None" = None
    ) -> None:
        """
        Main method to save a tree in the specified format.

        Args:
            tree: The static tree to save.
            output_path: The Path object for the output file.
            format: The desired output format ('txt' or 'json').
            style: The glyph set for TXT output. Defaults to the Unicode set.
            display: An optional DisplayManager instance for reporting metrics.

        Raises:
            ValueError: If an unsupported format is requested.
        """
        fmt = format.lower()
        if fmt not in SUPPORTED_FORMATS:
            error_msg = f"Unsupported tree format requested: '{format}'"
            logger.error(error_msg)
            raise ValueError(error_msg)

        logger.info(f"Attempting to save tree in '{fmt}' format to {output_path}")

        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"Could not create parent directory for {output_path}: {e}", exc_info=True)
            raise IOError(f"Failed to create directory for output file: {output_path.parent}") from e

        if fmt == "txt":
            cls._save_txt(tree, output_path, style)
        else:
            cls._save_json(tree, output_path)

        if display:
            try:
                # A display error should not turn a successful save into a failure.
                file_size_kb = output_path.stat().st_size / 1024
                display.print_metrics({
                    "Tree Saved": output_path.name,
                    "Format": fmt.upper(),
                    "Nodes": tree.node_count(),
                    "Leaves": tree.leaf_count(),
                    "File Size": f"{file_size_kb:.1f} KB"
                })
            except Exception as e:
                logger.warning(f"Failed to print display metrics after saving tree: {e}")
