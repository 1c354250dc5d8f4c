"""Command-line interface for bookdedupe."""

from bookdedupe.cli.main import cli

__all__ = ["cli"]
