"""Shared console rendering and workflow runner for CLI commands."""

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from poeditor_sync import reporting
from poeditor_sync.config import SyncConfig, load_config
from poeditor_sync.downloader import API_BASE_URL, HTTPClient, RemoteExportClient
from poeditor_sync.exceptions import ConfigurationError, POEditorSyncError
from poeditor_sync.reporting import ReportEvent
from poeditor_sync.sync import SyncOrchestrator
from poeditor_sync.utils.config_loader import find_config_file
from poeditor_sync.utils.logging import setup_logging

console = Console()


class ConsoleReporter:
    """Render report events as colored progress lines."""

    def __init__(self, console: Console):
        self.console = console

    def __call__(self, event: ReportEvent) -> None:
        message = escape(event.message)

        if event.language is None:
            self.console.print(f"\n[bold]{message}[/bold]")
        elif event.level == reporting.INFO:
            self.console.print(f"  - {message}")
        elif event.level == reporting.SUCCESS:
            indent = "      " if message.startswith("Saved") else "  "
            self.console.print(f"{indent}[green]✓[/green] {message}")
        elif event.level == reporting.WARNING:
            self.console.print(f"  [yellow]{message}[/yellow]")
        else:
            self.console.print(f"  [bold red]✘ {message}[/bold red]")

        if event.detail:
            self.console.print(f"[red]{escape(event.detail)}[/red]")


def load_sync_config(config_path: Optional[Path]) -> tuple[SyncConfig, Path]:
    """Load the configuration and return it with its directory.

    Raises:
        ConfigurationError: If no configuration file can be found or it
            fails validation
    """
    if config_path is None:
        config_path = find_config_file()
        if config_path is None:
            raise ConfigurationError(
                "No poeditor.yml found in this directory or its parents (use --config)"
            )

    config = load_config(config_path)
    return config, Path(config_path).resolve().parent


def run_workflow(
    workflow: str,
    config_path: Optional[Path],
    concurrency: int = 1,
    timeout: int = 30,
    api_url: str = API_BASE_URL,
    requests_per_minute: Optional[int] = None,
    log_file: Optional[Path] = None,
    verbose: bool = False,
):
    """Run ``pull`` or ``check_untranslated`` and exit 1 on any sync error."""
    setup_logging(level="DEBUG" if verbose else "WARNING", log_file=log_file)

    try:
        config, base_dir = load_sync_config(config_path)

        async def run():
            async with HTTPClient(timeout=timeout, requests_per_minute=requests_per_minute) as client:
                orchestrator = SyncOrchestrator(
                    config,
                    RemoteExportClient(client, base_url=api_url),
                    base_dir=base_dir,
                    reporter=ConsoleReporter(console),
                    concurrency=concurrency,
                )
                return await getattr(orchestrator, workflow)()

        return asyncio.run(run())

    except POEditorSyncError as e:
        console.print(f"\n[bold red]✘ {escape(str(e))}[/bold red]")
        raise typer.Exit(1)
