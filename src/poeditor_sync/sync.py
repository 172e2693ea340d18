"""Pull and untranslated-check workflows."""

import asyncio
from dataclasses import dataclass, field
from pathlib import Path
from typing import Awaitable, Callable, Optional, Protocol, TypeVar

import aiofiles

from . import reporting
from .config import SyncConfig
from .downloader.export_client import ExportRequest
from .exceptions import PathNotFoundError, POEditorSyncError, WriteError
from .languages import LanguageResolver
from .paths import PathResolver
from .reporting import ReportEvent, Reporter
from .transform import ContentTransformer
from .utils.logging import get_logger

logger = get_logger(__name__)

UNTRANSLATED_FILTER = "untranslated"
# An export with no untranslated terms comes back empty or as a lone newline
UNTRANSLATED_THRESHOLD = 2

T = TypeVar("T")


class ExportClient(Protocol):
    async def export(self, request: ExportRequest) -> str: ...


@dataclass
class PullResult:
    """Files written for one configured language."""

    language: str
    paths: list[Path] = field(default_factory=list)


@dataclass
class UntranslatedResult:
    """Untranslated-terms export for one configured language."""

    language: str
    content: str

    @property
    def clean(self) -> bool:
        return len(self.content) < UNTRANSLATED_THRESHOLD


class SyncOrchestrator:
    """Drive exports for every configured language.

    Languages are processed in declaration order, one at a time unless
    ``concurrency`` is raised. The first error aborts the run; files
    already written stay as they are.
    """

    def __init__(
        self,
        config: SyncConfig,
        export_client: ExportClient,
        base_dir: Optional[Path] = None,
        reporter: Optional[Reporter] = None,
        concurrency: int = 1,
    ):
        """Initialize the orchestrator.

        Args:
            config: Validated sync configuration
            export_client: Client performing the two-step export
            base_dir: Directory relative destination paths are resolved from
            reporter: Sink for progress events (default: log them)
            concurrency: Number of languages processed at once
        """
        self.config = config
        self.export_client = export_client
        self.reporter = reporter or reporting.log_reporter
        self.concurrency = max(1, concurrency)

        self.transformer = ContentTransformer()
        self.languages = LanguageResolver(config.language_alias)
        self.paths = PathResolver(config, base_dir)

    def _report(
        self,
        level: str,
        message: str,
        language: Optional[str] = None,
        detail: Optional[str] = None,
    ) -> None:
        self.reporter(ReportEvent(level=level, message=message, language=language, detail=detail))

    def _request(self, language: str, filters: tuple[str, ...]) -> ExportRequest:
        return ExportRequest(
            api_key=self.config.api_key,
            project_id=self.config.project_id,
            language=self.languages.to_remote_code(language),
            type=self.config.type,
            filters=filters,
            tags=self.config.tags,
        )

    async def pull(self) -> list[PullResult]:
        """Export every language and overwrite its files and alias files.

        Raises:
            RemoteAPIError: If the API rejects an export
            TransportError: If the API or the export URL can't be reached
            PathNotFoundError: If a destination is missing or not a regular file
            WriteError: If an existing destination can't be overwritten
        """
        self._report(reporting.INFO, "Export translations")
        logger.info(f"Pulling {len(self.config.languages)} languages ({self.config.type})")
        return await self._run(self._pull_language)

    async def check_untranslated(self) -> list[UntranslatedResult]:
        """Export untranslated terms for every language without writing files.

        Raises:
            RemoteAPIError: If the API rejects an export
            TransportError: If the API or the export URL can't be reached
        """
        self._report(reporting.INFO, "Export untranslated terms")
        logger.info(f"Checking {len(self.config.languages)} languages for untranslated terms")
        return await self._run(self._check_language)

    async def _pull_language(self, language: str) -> PullResult:
        self._report(reporting.INFO, f"Exporting '{language}'", language)

        content = await self.export_client.export(self._request(language, self.config.filters))
        content = self.transformer.normalize(content, self.config.type)

        result = PullResult(language=language)
        for target in self.languages.expand_aliases(language):
            path = await self._write(target, content)
            result.paths.append(path)
            self._report(reporting.SUCCESS, f"Saved at '{path}'", target)
        return result

    async def _check_language(self, language: str) -> UntranslatedResult:
        self._report(reporting.INFO, f"Checking '{language}'", language)

        content = await self.export_client.export(
            self._request(language, (UNTRANSLATED_FILTER,))
        )

        result = UntranslatedResult(language=language, content=content)
        if result.clean:
            self._report(reporting.SUCCESS, "OK!", language)
        else:
            self._report(reporting.ERROR, "Untranslated found!", language, detail=content)
        return result

    async def _write(self, language: str, content: str) -> Path:
        """Overwrite the existing destination file of ``language``."""
        path = self.paths.path_for(language)
        if not path.is_file():
            raise PathNotFoundError(path, language=language)

        try:
            async with aiofiles.open(path, "w", encoding="utf-8", newline="") as f:
                await f.write(content)
        except OSError as e:
            raise WriteError(path, e.strerror or str(e), language=language) from e

        logger.debug(f"Wrote {len(content)} chars to {path}")
        return path

    async def _run(self, worker: Callable[[str], Awaitable[T]]) -> list[T]:
        """Apply ``worker`` to every language, keeping declaration order."""

        async def guarded(language: str) -> T:
            try:
                return await worker(language)
            except POEditorSyncError as e:
                if e.language is None:
                    e.language = language
                raise

        if self.concurrency == 1:
            return [await guarded(language) for language in self.config.languages]

        semaphore = asyncio.Semaphore(self.concurrency)

        async def bounded(language: str) -> T:
            async with semaphore:
                return await guarded(language)

        tasks = [asyncio.ensure_future(bounded(language)) for language in self.config.languages]
        try:
            return list(await asyncio.gather(*tasks))
        except BaseException:
            for task in tasks:
                task.cancel()
            raise
