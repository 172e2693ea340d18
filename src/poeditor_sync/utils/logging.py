"""Logging configuration and utilities."""

import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

# Log records go to stderr so report lines on stdout stay clean
console = Console(stderr=True)

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
RICH_FORMAT = "%(message)s"

# Chatty at DEBUG, and never about our own requests
QUIET_LOGGERS = ("aiohttp", "asyncio")

# Handlers added by setup_logging, replaced on the next call
_installed: list[logging.Handler] = []


def setup_logging(level: str = "INFO", log_file: Optional[str | Path] = None) -> None:
    """Install a rich console handler, plus a file handler when requested.

    Calling it again replaces the handlers of the previous call.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path of a log file; parent directories are created
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    while _installed:
        handler = _installed.pop()
        root_logger.removeHandler(handler)
        handler.close()
    root_logger.setLevel(log_level)

    console_handler = RichHandler(
        console=console,
        show_time=False,
        show_path=False,
        rich_tracebacks=True,
    )
    console_handler.setFormatter(logging.Formatter(RICH_FORMAT))
    console_handler.setLevel(log_level)
    root_logger.addHandler(console_handler)
    _installed.append(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        file_handler.setLevel(log_level)
        root_logger.addHandler(file_handler)
        _installed.append(file_handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the given name (typically __name__)."""
    return logging.getLogger(name)
