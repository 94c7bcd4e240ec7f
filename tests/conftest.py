"""Shared fixtures for the treeart test suite."""

import logging
from pathlib import Path

import pytest

from config.config_manager import ConfigManager
from treeart.incremental import IncrementalTreeModel


@pytest.fixture(autouse=True)
def reset_config_singleton():
    """Every test starts (and ends) without a loaded ConfigManager."""
    ConfigManager.reset()
    yield
    ConfigManager.reset()


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Write a minimal configuration whose paths live under tmp_path."""
    path = tmp_path / "config.yaml"
    path.write_text(
        "paths:\n"
        f"  base_dir: {tmp_path.as_posix()}\n"
        "  logs_dir: logs\n"
        "  output_dir: output\n"
        "logging:\n"
        "  level: DEBUG\n"
        "  file_prefix: test\n"
        "display:\n"
        "  style: ascii\n"
        "  progress_type: NONE\n"
        "output:\n"
        "  default_format: txt\n"
        "  timestamp_format: '%Y%m%d_%H%M%S'\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def restore_loggers():
    """Undo handler changes the CLI makes to the library loggers."""
    names = ("run_treeart", "treeart", "utils")
    saved = {}
    for name in names:
        log = logging.getLogger(name)
        saved[name] = (list(log.handlers), log.level, log.propagate)
    yield
    for name, (handlers, level, propagate) in saved.items():
        log = logging.getLogger(name)
        for handler in log.handlers:
            if handler not in handlers:
                handler.close()
        log.handlers = handlers
        log.setLevel(level)
        log.propagate = propagate


@pytest.fixture
def sample_model():
    """
    root
     ├─c1
     │  └─gc1
     └─c2
    """
    model = IncrementalTreeModel()
    ids = {}
    ids["root"] = model.add_node("root")
    ids["c1"] = model.add_node("c1", ids["root"])
    ids["gc1"] = model.add_leaf("gc1", ids["c1"])
    ids["c2"] = model.add_leaf("c2", ids["root"])
    return model, ids
