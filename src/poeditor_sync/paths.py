"""Destination path resolution."""

from pathlib import Path
from typing import Optional

from .config import LANGUAGE_PLACEHOLDER, SyncConfig


class PathResolver:
    """Compute where each language's export is written.

    An exact entry in ``path_replace`` wins; otherwise the language is
    substituted into the ``path`` template. Relative results are anchored
    at ``base_dir``.
    """

    def __init__(self, config: SyncConfig, base_dir: Optional[Path] = None):
        self.config = config
        self.base_dir = Path(base_dir) if base_dir is not None else None

    def path_for(self, language: str) -> Path:
        """Get the destination path for a configured or alias language."""
        if language in self.config.path_replace:
            path = Path(self.config.path_replace[language])
        else:
            path = Path(self.config.path.replace(LANGUAGE_PLACEHOLDER, language, 1))

        if self.base_dir is not None and not path.is_absolute():
            path = self.base_dir / path
        return path


def path_for(language: str, config: SyncConfig) -> Path:
    """Resolve a path without a base directory."""
    return PathResolver(config).path_for(language)
