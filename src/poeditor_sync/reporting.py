"""Structured progress reporting."""

from dataclasses import dataclass
from typing import Callable, Optional

from .utils.logging import get_logger

logger = get_logger(__name__)

INFO = "info"
SUCCESS = "success"
WARNING = "warning"
ERROR = "error"

_LOG_LEVELS = {
    INFO: 20,
    SUCCESS: 20,
    WARNING: 30,
    ERROR: 40,
}


@dataclass(frozen=True)
class ReportEvent:
    """One progress line emitted by a workflow."""

    level: str
    message: str
    language: Optional[str] = None
    detail: Optional[str] = None


Reporter = Callable[[ReportEvent], None]


def log_reporter(event: ReportEvent) -> None:
    """Default reporter: forward events to the module logger."""
    prefix = f"[{event.language}] " if event.language else ""
    text = f"{prefix}{event.message}"
    if event.detail:
        text = f"{text}\n{event.detail}"
    logger.log(_LOG_LEVELS.get(event.level, 20), text)
