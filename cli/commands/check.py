"""Check command for finding untranslated terms."""

from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from poeditor_sync.downloader import API_BASE_URL

from ..console import console, run_workflow


def check(
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to poeditor.yml (default: search from the working directory)",
    ),
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Exit with status 1 when untranslated terms are found",
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
    """Check every configured language for untranslated terms."""
    results = run_workflow(
        "check_untranslated",
        config_path,
        timeout=timeout,
        api_url=api_url,
        requests_per_minute=requests_per_minute,
        log_file=log_file,
        verbose=verbose,
    )

    table = Table(title="Untranslated Check")
    table.add_column("Language", style="cyan")
    table.add_column("Status")
    for result in results:
        status = "[green]OK[/green]" if result.clean else "[red]Untranslated[/red]"
        table.add_row(result.language, status)
    console.print()
    console.print(table)

    if strict and not all(result.clean for result in results):
        raise typer.Exit(1)
