"""Utility helpers shared across the cdn-catalog codebase."""

from .config import AppConfig, load_config
from .logging import configure_logging, get_logger
from .parallel import bounded_map
from .paths import join_repo_path, normalise_path, split_repo_path

__all__ = [
    "AppConfig",
    "load_config",
    "configure_logging",
    "get_logger",
    "bounded_map",
    "join_repo_path",
    "normalise_path",
    "split_repo_path",
]
