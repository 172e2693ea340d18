"""POEditor export download module."""

from .client import HTTPClient
from .export_client import (
    API_BASE_URL,
    ExportFailure,
    ExportRequest,
    ExportResult,
    ExportSuccess,
    RemoteExportClient,
)

__all__ = [
    "HTTPClient",
    "API_BASE_URL",
    "RemoteExportClient",
    "ExportRequest",
    "ExportResult",
    "ExportSuccess",
    "ExportFailure",
]
