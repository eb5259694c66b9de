"""Main CLI entry point for TZ Journal.

This module provides the main click group and lazy loading
of command modules to keep startup fast.
"""

import importlib
import logging

import click
from rich.console import Console
from rich.logging import RichHandler

class LazyGroup(click.Group):
    """A click Group that lazily loads commands.

    Command modules are only imported when one of their commands
    is actually invoked.
    """

    def __init__(self, *args, lazy_subcommands: dict[str, str] | None = None, **kwargs):
        """Initialize the lazy group.

        Args:
            lazy_subcommands: Mapping of command names to module paths.
        """
        super().__init__(*args, **kwargs)
        self._lazy_subcommands = lazy_subcommands or {}

    def list_commands(self, ctx: click.Context) -> list[str]:
        """List all available commands."""
        base = super().list_commands(ctx)
        lazy = list(self._lazy_subcommands.keys())
        return sorted(set(base + lazy))

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        """Get a command by name, lazily loading if needed."""
        if cmd_name in self.commands:
            return self.commands[cmd_name]

        if cmd_name in self._lazy_subcommands:
            return self._lazy_load(cmd_name)

        return None

    def _lazy_load(self, cmd_name: str) -> click.Command:
        """Lazily load a command from its module path."""
        module_path = self._lazy_subcommands[cmd_name]
        module = importlib.import_module(module_path)

        # Commands are found by their click name, not their function name
        cmd = None
        for attr_name in dir(module):
            attr = getattr(module, attr_name)
            if isinstance(attr, click.Command) and attr.name == cmd_name:
                cmd = attr
                break

        if cmd is None:
            raise click.ClickException(f"Could not find command '{cmd_name}' in {module_path}")

        self.add_command(cmd)
        return cmd


LAZY_SUBCOMMANDS = {
    # Views
    "dashboard": "tzjournal.cli.dashboard",
    "calendar": "tzjournal.cli.dashboard",
    "log": "tzjournal.cli.trades",
    "show": "tzjournal.cli.trades",
    # Trades
    "add": "tzjournal.cli.trades",
    "delete": "tzjournal.cli.trades",
    # Cash
    "deposit": "tzjournal.cli.transfers",
    "withdraw": "tzjournal.cli.transfers",
    "transfers": "tzjournal.cli.transfers",
    # Accounts
    "account": "tzjournal.cli.accounts",
    # Files
    "import": "tzjournal.cli.files",
    "backup": "tzjournal.cli.files",
    "restore": "tzjournal.cli.files",
    # Settings
    "theme": "tzjournal.cli.settings",
    "config": "tzjournal.cli.settings",
}


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@click.group(cls=LazyGroup, lazy_subcommands=LAZY_SUBCOMMANDS, context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="tzjournal")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Show debug logging.")
def cli(verbose: bool) -> None:
    """TZ Journal - a local trading journal.

    Record trades, deposits and withdrawals per account, then review
    them on a dashboard, a P&L calendar and a searchable log.

    \b
    Quick Start:
      tzjournal add EURUSD 120.5        # Log a winning trade
      tzjournal dashboard               # Equity, growth and win rate
      tzjournal calendar                # This month's P&L calendar
      tzjournal import history.csv      # Import a MetaTrader export
    """
    _setup_logging(verbose)


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
