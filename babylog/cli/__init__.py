"""CLI commands for babylog.

This package provides the command-line interface for babylog,
including import, migration, validation and stats commands.
"""

from babylog.cli.main import cli, main

__all__ = ["cli", "main"]
