"""CLI commands for TZ Journal.

This package provides the command-line interface: dashboard, calendar,
trade log, transfers, accounts and file import/backup.
"""

from tzjournal.cli.main import cli, main

__all__ = ["cli", "main"]
