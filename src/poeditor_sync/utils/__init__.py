"""Utility modules for poeditor-sync."""

from .config_loader import load_yaml, find_config_file
from .logging import setup_logging, get_logger

__all__ = [
    "load_yaml",
    "find_config_file",
    "setup_logging",
    "get_logger",
]
