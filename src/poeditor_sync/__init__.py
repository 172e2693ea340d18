"""POEditor string-table synchronization.

This package provides tools for:
- Exporting translations from POEditor, one language at a time
- Rewriting placeholders for Apple and Android string tables
- Writing exports (and their alias languages) over existing files
- Auditing languages for untranslated terms before release
"""

__version__ = "1.0.0"

from .config import SyncConfig, load_config
from .exceptions import (
    ConfigurationError,
    PathNotFoundError,
    POEditorSyncError,
    RemoteAPIError,
    TransportError,
    WriteError,
)
from .sync import PullResult, SyncOrchestrator, UntranslatedResult

__all__ = [
    "SyncConfig",
    "load_config",
    "SyncOrchestrator",
    "PullResult",
    "UntranslatedResult",
    "POEditorSyncError",
    "ConfigurationError",
    "RemoteAPIError",
    "TransportError",
    "PathNotFoundError",
    "WriteError",
]
