"""HTTP client for the POEditor API and export downloads."""

import asyncio
import time
from typing import Optional

import aiohttp

from ..exceptions import TransportError
from ..utils.logging import get_logger

logger = get_logger(__name__)


class HTTPClient:
    """aiohttp session wrapper with optional rate limiting.

    Requests are never retried: any client error or timeout is raised as a
    TransportError on the first failure.
    """

    def __init__(
        self,
        timeout: int = 30,
        requests_per_minute: Optional[int] = None,
        user_agent: str = "poeditor-sync/1.0",
    ):
        """Initialize the client.

        Args:
            timeout: Request timeout in seconds (default: 30)
            requests_per_minute: Maximum requests per minute (None: unlimited)
            user_agent: User-Agent header for requests
        """
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.requests_per_minute = requests_per_minute
        self.user_agent = user_agent

        self._min_interval = 60.0 / requests_per_minute if requests_per_minute else 0.0
        self._last_request_time: float = 0
        self._lock = asyncio.Lock()
        self._session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self) -> "HTTPClient":
        """Async context manager entry."""
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()

    async def _ensure_session(self) -> None:
        """Ensure HTTP session is created."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=self.timeout,
                headers={"User-Agent": self.user_agent},
            )

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None

    async def _apply_rate_limit(self) -> None:
        """Apply rate limiting by waiting if necessary."""
        if not self._min_interval:
            return
        async with self._lock:
            now = time.monotonic()
            elapsed = now - self._last_request_time
            if elapsed < self._min_interval:
                wait_time = self._min_interval - elapsed
                logger.debug(f"Rate limiting: waiting {wait_time:.2f}s")
                await asyncio.sleep(wait_time)
            self._last_request_time = time.monotonic()

    async def post_form(self, url: str, data: dict[str, str]) -> str:
        """POST a form-encoded body and return the response text.

        The status code is not checked here: the API reports failures in
        its JSON body.

        Raises:
            TransportError: If the request fails, times out or the body is
                not UTF-8
        """
        await self._ensure_session()
        await self._apply_rate_limit()

        logger.debug(f"POST {url}")

        try:
            async with self._session.post(url, data=data) as response:
                body = await response.read()
                logger.debug(f"HTTP {response.status} from {url} ({len(body)} bytes)")
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise TransportError(f"Request failed ({e.__class__.__name__}: {e})", url) from e

        try:
            return body.decode("utf-8")
        except UnicodeDecodeError as e:
            raise TransportError(f"Response is not valid UTF-8 ({e})", url) from e

    async def get_text(self, url: str) -> str:
        """Fetch URL content as UTF-8 text.

        Raises:
            TransportError: If the request fails, times out or returns an
                error status
        """
        await self._ensure_session()
        await self._apply_rate_limit()

        logger.debug(f"GET {url}")

        try:
            async with self._session.get(url) as response:
                response.raise_for_status()
                content = await response.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise TransportError(f"Download failed ({e.__class__.__name__}: {e})", url) from e

        logger.debug(f"Fetched {len(content)} bytes from {url}")
        try:
            return content.decode("utf-8")
        except UnicodeDecodeError as e:
            raise TransportError(f"Export is not valid UTF-8 ({e})", url) from e
