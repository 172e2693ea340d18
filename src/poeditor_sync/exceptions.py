"""Errors raised by the export and sync pipeline."""

from pathlib import Path
from typing import Optional


class POEditorSyncError(Exception):
    """Base class for every error the pipeline raises.

    ``language`` is the configured language being processed when the error
    happened, or None when it is not tied to a language.
    """

    def __init__(self, message: str, language: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.language = language

    def _prefix(self) -> str:
        return f"[{self.language}] " if self.language else ""

    def __str__(self) -> str:
        return f"{self._prefix()}{self.message}"


class ConfigurationError(POEditorSyncError):
    """Missing or invalid configuration value."""


class RemoteAPIError(POEditorSyncError):
    """POEditor answered with a non-success status.

    ``message`` is the service's own text; ``str()`` adds the code.
    """

    def __init__(self, code: str, message: str, language: Optional[str] = None):
        super().__init__(message, language=language)
        self.code = code

    def __str__(self) -> str:
        return f"{self._prefix()}{self.message} ({self.code})"


class TransportError(POEditorSyncError):
    """The remote host could not be reached or sent an unusable response."""

    def __init__(self, message: str, url: str, language: Optional[str] = None):
        super().__init__(f"{message}: {url}", language=language)
        self.url = url


class PathNotFoundError(POEditorSyncError):
    """A destination file does not exist; files are never created."""

    def __init__(self, path: Path, language: Optional[str] = None):
        super().__init__(f"{path} doesn't exist", language=language)
        self.path = path


class WriteError(POEditorSyncError):
    """A destination file exists but could not be overwritten."""

    def __init__(self, path: Path, reason: str, language: Optional[str] = None):
        super().__init__(f"Could not write {path}: {reason}", language=language)
        self.path = path
        self.reason = reason
