"""POEditor export API client.

An export takes two calls:

- ``POST {base_url}projects/export`` requests an export job and answers with
  a JSON status and a download URL
- ``GET {url}`` downloads the rendered file

API reference: https://poeditor.com/docs/api#projects_export
"""

import json
from dataclasses import dataclass
from typing import Union

from ..exceptions import RemoteAPIError, TransportError
from ..utils.logging import get_logger
from .client import HTTPClient

logger = get_logger(__name__)

API_BASE_URL = "https://api.poeditor.com/v2/"
EXPORT_ACTION = "projects/export"


@dataclass(frozen=True)
class ExportRequest:
    """Parameters of a single export job."""

    api_key: str
    project_id: str
    language: str
    type: str
    filters: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()

    def to_form(self) -> dict[str, str]:
        """Build the form body of the export call."""
        return {
            "api_token": self.api_key,
            "id": self.project_id,
            "language": self.language,
            "type": self.type,
            "filters": ",".join(self.filters),
            "tags": ",".join(self.tags),
        }


@dataclass(frozen=True)
class ExportSuccess:
    """Downloaded export content."""

    content: str

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> str:
        return self.content


@dataclass(frozen=True)
class ExportFailure:
    """Failure status reported by the API."""

    code: str
    message: str

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self) -> str:
        raise RemoteAPIError(self.code, self.message)


ExportResult = Union[ExportSuccess, ExportFailure]


class RemoteExportClient:
    """Requests export jobs and downloads their content."""

    def __init__(self, client: HTTPClient, base_url: str = API_BASE_URL):
        """Initialize the export client.

        Args:
            client: HTTP client owning the aiohttp session
            base_url: API root, ending with a slash
        """
        self.client = client
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"

    @property
    def export_url(self) -> str:
        return f"{self.base_url}{EXPORT_ACTION}"

    async def request_export(self, request: ExportRequest) -> ExportResult:
        """Run an export job and download its result.

        Args:
            request: Export parameters; ``language`` must be the remote code

        Returns:
            ExportSuccess with the raw content, or ExportFailure carrying the
            API's code and message

        Raises:
            TransportError: If either call fails or the API response is not
                the expected JSON document
        """
        url = self.export_url
        body = await self.client.post_form(url, request.to_form())

        try:
            data = json.loads(body)
            status = data["response"]
        except (json.JSONDecodeError, KeyError, TypeError) as e:
            raise TransportError(f"Unexpected export response ({e})", url) from e
        if not isinstance(status, dict):
            raise TransportError("Unexpected export response (no status object)", url)

        if status.get("status") != "success":
            code = str(status.get("code", ""))
            message = str(status.get("message", ""))
            logger.debug(f"Export of '{request.language}' failed: {message} ({code})")
            return ExportFailure(code=code, message=message)

        try:
            download_url = data["result"]["url"]
        except (KeyError, TypeError) as e:
            raise TransportError(f"Export response has no download URL ({e})", url) from e

        content = await self.client.get_text(download_url)
        logger.debug(f"Exported '{request.language}' ({len(content)} chars)")
        return ExportSuccess(content=content)

    async def export(self, request: ExportRequest) -> str:
        """Run an export job and return its content.

        Raises:
            RemoteAPIError: If the API reports a non-success status
            TransportError: If either call fails
        """
        result = await self.request_export(request)
        return result.unwrap()
