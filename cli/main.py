"""Main CLI entry point for poeditor-sync."""

import typer
from rich.console import Console

from cli.commands import check, pull

# Create main app
app = typer.Typer(
    name="poeditor-sync",
    help="Sync POEditor translations into local string files",
    add_completion=False,
)

console = Console()

app.command("pull", help="Export translations and write them to disk")(pull.pull)
app.command("check", help="Check languages for untranslated terms")(check.check)


@app.command()
def version():
    """Show version information."""
    from poeditor_sync import __version__

    console.print(f"poeditor-sync version {__version__}")


if __name__ == "__main__":
    app()
