# config/config_manager.py

import logging
from pathlib import Path
from typing import Any, Optional

import yaml

from treeart.style import TreeStyle
from utils.tree_writer import SUPPORTED_FORMATS

DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.yaml"

# Names of utils.progress_visualiser.ProgressType members.
PROGRESS_TYPES = ("TQDM", "SIMPLE", "NONE")

class ConfigurationError(Exception):
    """Raised when config.yaml is missing, unparsable or holds an invalid value."""
    pass

class ConfigManager:
    """
    Singleton holding the treeart settings loaded from config.yaml.

    On first construction the file is parsed, the 'display', 'scan' and
    'output' values are validated, every entry under 'paths' is made absolute
    against 'paths.base_dir' and the directories are created. Later calls
    return the same instance; tests call reset() to start over.
    """
    _instance = None

    def __new__(cls, *args, **kwargs):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialised = False
        return cls._instance

    def __init__(self, config_path: Optional[str | Path] = None) -> None:
        """
        Args:
            config_path: Optional path to the config file. Defaults to the
                         'config.yaml' shipped next to this module.
        """
        if self._initialised:
            return

        self.logger = logging.getLogger(__name__)
        self.config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        self.config = {}

        try:
            self._load_config()
            self._validate()
            self._prepare_paths()
        except ConfigurationError:
            raise
        except OSError as e:
            raise ConfigurationError(f"Could not prepare configured directories: {e}") from e

        self._initialised = True
        self.logger.info(f"Configuration loaded from {self.config_path}")

    @classmethod
    def reset(cls) -> None:
        """Discards the singleton so the next ConfigManager() loads afresh."""
        cls._instance = None

    def _load_config(self) -> None:
        try:
            with self.config_path.open('r', encoding='utf-8') as f:
                # Use the faster C-based loader if available
                if hasattr(yaml, 'CSafeLoader'):
                    loaded = yaml.load(f, Loader=yaml.CSafeLoader)
                else:
                    loaded = yaml.safe_load(f)
        except FileNotFoundError:
            raise ConfigurationError(f"Configuration file not found: {self.config_path}")
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Error parsing YAML configuration file: {e}") from e

        if loaded is None:
            self.logger.warning(f"Configuration file is empty: {self.config_path}")
            loaded = {}
        elif not isinstance(loaded, dict):
            raise ConfigurationError(f"Configuration root must be a mapping: {self.config_path}")
        self.config = loaded

    def _validate(self) -> None:
        """Checks the values treeart reads, so bad settings fail at startup."""
        style = self.get('display', 'style', default='unicode')
        if str(style).strip().lower() not in {s.value for s in TreeStyle}:
            raise ConfigurationError(f"display.style must be one of {[s.value for s in TreeStyle]}, got '{style}'")

        progress_type = self.get('display', 'progress_type', default='TQDM')
        if str(progress_type).upper() not in PROGRESS_TYPES:
            raise ConfigurationError(f"display.progress_type must be one of {list(PROGRESS_TYPES)}, got '{progress_type}'")

        max_depth = self.get('scan', 'max_depth')
        if max_depth is not None and (isinstance(max_depth, bool) or not isinstance(max_depth, int) or max_depth < 0):
            raise ConfigurationError(f"scan.max_depth must be null or a non-negative integer, got '{max_depth}'")

        default_format = self.get('output', 'default_format', default='txt')
        if str(default_format).lower() not in SUPPORTED_FORMATS:
            raise ConfigurationError(f"output.default_format must be one of {list(SUPPORTED_FORMATS)}, got '{default_format}'")

    def _prepare_paths(self) -> None:
        """Makes every 'paths' entry absolute against 'base_dir' and creates the directories."""
        paths = self.config.get('paths')
        if paths is None:
            return
        if not isinstance(paths, dict):
            raise ConfigurationError("'paths' must be a mapping.")

        base_dir = Path(str(paths.get('base_dir', '.'))).expanduser().resolve()
        paths['base_dir'] = str(base_dir)
        for key, value in paths.items():
            if key == 'base_dir':
                continue
            directory = base_dir / str(value)
            directory.mkdir(parents=True, exist_ok=True)
            paths[key] = str(directory)

    def get(self, *keys: str, default: Any = None) -> Any:
        """
        Retrieves a nested value, e.g. config.get('logging', 'level', default='INFO').
        A missing key, or a non-mapping along the way, yields `default`.
        """
        value = self.config
        for key in keys:
            try:
                value = value[key]
            except (KeyError, TypeError):
                return default
        return value

    def get_path(self, key: str) -> Path:
        """
        Returns an absolute directory from the 'paths' section.

        Raises:
            ConfigurationError: If `key` is not configured.
        """
        path_str = self.get('paths', key)
        if not path_str:
            raise ConfigurationError(f"Path key '{key}' not found in 'paths' section of configuration.")
        return Path(path_str)

    @property
    def style(self) -> str:
        """The tree glyph set name ('unicode', 'ascii' or 'box')."""
        return str(self.get('display', 'style', default='unicode')).strip().lower()

    @property
    def progress_type(self) -> str:
        """The ProgressType member name used for progress trees."""
        return str(self.get('display', 'progress_type', default='TQDM')).upper()

    @property
    def max_depth(self) -> Optional[int]:
        return self.get('scan', 'max_depth')

    @property
    def default_format(self) -> str:
        return str(self.get('output', 'default_format', default='txt')).lower()
