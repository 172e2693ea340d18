"""Pull command for writing exported translations to disk."""

from pathlib import Path
from typing import Optional

import typer

from poeditor_sync.downloader import API_BASE_URL

from ..console import console, run_workflow


def pull(
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to poeditor.yml (default: search from the working directory)",
    ),
    concurrency: int = typer.Option(
        1,
        "--concurrency",
        "-j",
        min=1,
        help="Languages exported at once",
    ),
    timeout: int = typer.Option(
        30,
        "--timeout",
        help="Request timeout in seconds",
    ),
    requests_per_minute: Optional[int] = typer.Option(
        None,
        "--requests-per-minute",
        min=1,
        help="Throttle API and download requests (default: unlimited)",
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Also write log records to this file",
    ),
    api_url: str = typer.Option(
        API_BASE_URL,
        "--api-url",
        envvar="POEDITOR_API_URL",
        hidden=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show debug logging",
    ),
):
    """Export every configured language and overwrite its string files.

    Alias languages receive a copy of their source language's export.
    Destination files must already exist.
    """
    results = run_workflow(
        "pull",
        config_path,
        concurrency=concurrency,
        timeout=timeout,
        api_url=api_url,
        requests_per_minute=requests_per_minute,
        log_file=log_file,
        verbose=verbose,
    )

    written = sum(len(result.paths) for result in results)
    console.print(f"\n[bold]Done![/bold] {len(results)} languages, {written} files written")
