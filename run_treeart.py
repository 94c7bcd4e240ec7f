# run_treeart.py

from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

# --- Core Utilities ---
from config.config_manager import ConfigManager, ConfigurationError
from utils.display_manager import DisplayManager
from utils.tree_writer import SUPPORTED_FORMATS, TreeWriter

# --- Tree Model ---
from treeart.filesystem import scan_into_model, tree_from_dir
from treeart.incremental import IncrementalTreeModel
from treeart.renderer import render_to_string
from treeart.style import StyleConfig, TreeStyle
from treeart.tree import Tree

# Setup basic logger in case manager fails early
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

class TreeArtManager:
    """
    Orchestrates a run: loads configuration, sets up logging and display,
    builds the tree for a directory and prints or saves it.
    """
    def __init__(self, config_path: Optional[str] = None):
        """Initialises configuration, logging and the display."""
        try:
            self.config = ConfigManager(config_path)
            self._setup_logging()
            self.display = DisplayManager(self.config)
            self.output_dir = self.config.get_path('output_dir')
            self.logger.info("TreeArt Manager initialised.")
        except ConfigurationError as e:
            logger.error(f"Fatal Initialisation Error: {e}", exc_info=True)
            print(f"\nFatal Initialisation Error: {e}\nPlease check the configuration file.", file=sys.stderr)
            sys.exit(1)

    def _setup_logging(self):
        """Configures logging using settings from ConfigManager."""
        self.logger = logging.getLogger(__name__)
        if self.logger.hasHandlers():
            self.logger.handlers.clear()

        log_level_str = self.config.get('logging', 'level', default='INFO')
        log_level = getattr(logging, str(log_level_str).upper(), logging.INFO)
        log_format = self.config.get('logging', 'format', default='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        log_file_prefix = self.config.get('logging', 'file_prefix', default='treeart')
        timestamp_format = self.config.get('output', 'timestamp_format', default='%Y%m%d_%H%M%S')
        log_file = self.config.get_path('logs_dir') / f"{log_file_prefix}_{datetime.now().strftime(timestamp_format)}.log"

        formatter = logging.Formatter(log_format)
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setFormatter(formatter)
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        console_handler.setLevel(logging.WARNING)

        # Library modules log under 'treeart' and 'utils'; route them to the same handlers.
        for name in (__name__, 'treeart', 'utils'):
            target = logging.getLogger(name)
            target.handlers.clear()
            target.addHandler(file_handler)
            target.addHandler(console_handler)
            target.setLevel(log_level)
            target.propagate = False
        self.logger.info(f"Logging configured. Level: {log_level_str}. File: {log_file}")

    def build_static(self, path: Path, max_depth: Optional[int]) -> Tree:
        """Walks the directory in one pass."""
        return tree_from_dir(path, max_depth)

    def build_with_progress(self, path: Path, max_depth: Optional[int], style: StyleConfig) -> Tree:
        """
        Walks the directory into an incremental model while showing one
        progress row per directory, counting the files found in it.
        """
        model = IncrementalTreeModel(style)
        bar_ids: Dict[int, int] = {}

        with self.display.create_progress_tree() as progress:
            def on_item(item_id: int) -> None:
                item = model.get_item(item_id)
                parent = model.parent_of(item_id)
                if item.is_node:
                    bar_ids[item_id] = progress.add_bar(item.label, parent=bar_ids.get(parent))
                elif parent is not None:
                    progress.update(bar_ids[parent])

            scan_into_model(path, model, max_depth=max_depth, on_item=on_item)

        self.logger.info(f"Incremental scan produced {len(model)} items.")
        return model.materialize()

    def run(self, args: argparse.Namespace) -> Optional[Path]:
        """Main execution flow. Returns the output file, if one was written."""
        path = Path(args.path)
        style = StyleConfig.from_style(args.style)
        self.display = DisplayManager(self.config, style)
        self.logger.info(f"Building tree for: {path}")

        with self.display.section("Scanning", 1, 2):
            if args.progress:
                tree = self.build_with_progress(path, args.max_depth, style)
            else:
                tree = self.build_static(path, args.max_depth)
            self.display.print_metrics({
                "Root": path.resolve().name or str(path),
                "Directories": tree.node_count(),
                "Files": tree.leaf_count(),
            })

        with self.display.section("Output", 2, 2):
            if args.output:
                output_path = Path(args.output)
                if not output_path.is_absolute():
                    output_path = self.output_dir / output_path
                TreeWriter.save_tree(tree, output_path, args.format, style, self.display)
                return output_path

            if args.format == "json":
                print(json.dumps(tree.to_dict(), indent=2, ensure_ascii=False))
            else:
                print(render_to_string(tree, style))
            return None

def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parses command-line arguments."""
    try:
        temp_config = ConfigManager()
        default_format = temp_config.default_format
        default_style = temp_config.style
        default_max_depth = temp_config.max_depth
    except Exception:
        default_format, default_style, default_max_depth = 'txt', 'unicode', None

    parser = argparse.ArgumentParser(description='Render a directory as tree-art text.', formatter_class=argparse.ArgumentDefaultsHelpFormatter)
    parser.add_argument('path', nargs='?', default='.', help='Directory to render.')
    parser.add_argument('--style', choices=[s.value for s in TreeStyle], default=default_style, help='Glyph set for the tree.')
    parser.add_argument('--max-depth', type=int, default=default_max_depth, help='Maximum directory depth to descend into.')
    parser.add_argument('--progress', action='store_true', help='Build the tree incrementally with a live progress tree.')
    parser.add_argument('--format', choices=list(SUPPORTED_FORMATS), default=default_format, help='Output format.')
    parser.add_argument('--output', '-o', type=str, help='Save to this file (relative paths go to the configured output directory).')
    return parser.parse_args(argv)

def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the script."""
    start_time = time.time()
    try:
        args = parse_args(argv)
        manager = TreeArtManager()
        output_path = manager.run(args)

        if output_path:
            with manager.display.section("Processing Complete", 1, 1):
                manager.display.print_metrics({
                    "Status": "✓ Success",
                    "Output File": output_path.name,
                    "Processing Time": manager.display._format_time(time.time() - start_time),
                })
    except (FileNotFoundError, NotADirectoryError) as e:
        logger.error(str(e))
        print(f"\nError: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"\nAn unexpected critical error occurred: {e}", file=sys.stderr)
        logging.getLogger(__name__).error("Fatal error in main execution:", exc_info=True)
        sys.exit(1)

if __name__ == "__main__":
    main()
