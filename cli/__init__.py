"""Command-line interface for poeditor-sync."""
