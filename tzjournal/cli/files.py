"""File import, backup and restore commands for the TZ Journal CLI."""

from datetime import date
from pathlib import Path
from typing import Optional

import click
from rich.panel import Panel

from tzjournal.cli.common import console, fail, get_journal
from tzjournal.importers.backup import BackupError, export_backup, restore_backup
from tzjournal.importers.mt_csv import ImportFormatError, parse_trades


@click.command("import")
@click.argument("csv_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-a", "--account", "account_ref", default=None, help="Account id or name (default: current).")
def import_csv(csv_file: Path, account_ref: Optional[str]) -> None:
    """Import closed trades from a MetaTrader CSV history export.

    The file needs a header row with Profit, Commission, Swap, Type,
    Symbol, Close Time and Ticket ID columns. Tickets already in the
    journal are skipped.

    \b
    Examples:
      tzjournal import history.csv
      tzjournal import history.csv --account Demo
    """
    journal = get_journal()
    account = journal.current_account
    if account_ref:
        account = journal.find_account(account_ref)
        if account is None:
            fail(f"Unknown account: {account_ref}")

    try:
        trades = parse_trades(csv_file.read_text(encoding="utf-8-sig"), account.id)
    except (ImportFormatError, UnicodeDecodeError) as e:
        fail("Could not import file.", str(e))

    added = journal.import_trades(trades)
    journal.save()

    skipped = len(trades) - added
    message = f"[green]✓ Imported {added} trade(s) into '{account.name}'[/green]"
    if skipped:
        message += f"\n[dim]{skipped} already in the journal[/dim]"
    console.print(Panel(message, title="[bold]Import[/bold]", border_style="green"))


@click.command()
@click.argument("output", type=click.Path(dir_okay=False, path_type=Path), required=False)
def backup(output: Optional[Path]) -> None:
    """Write the whole journal to a JSON backup file.

    \b
    Examples:
      tzjournal backup
      tzjournal backup ~/journal-backup.json
    """
    journal = get_journal()
    output = output or Path(f"tz_journal_backup_{date.today().isoformat()}.json")
    output.write_text(export_backup(journal.state), encoding="utf-8")
    console.print(f"[green]✓ Backup written to {output}[/green]")


@click.command()
@click.argument("backup_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-y", "--yes", is_flag=True, default=False, help="Do not ask for confirmation.")
def restore(backup_file: Path, yes: bool) -> None:
    """Replace the whole journal with a backup file."""
    journal = get_journal()

    try:
        state = restore_backup(backup_file.read_text(encoding="utf-8"))
    except (BackupError, UnicodeDecodeError) as e:
        fail("Invalid backup file.", str(e))

    if not yes and not click.confirm(
        f"Replace {len(journal.state.trades)} trade(s) with "
        f"{len(state.trades)} trade(s) from {backup_file.name}?"
    ):
        console.print("[yellow]Restore cancelled[/yellow]")
        return

    journal.replace_state(state)
    journal.save()
    console.print(
        f"[green]✓ Restored {len(state.accounts)} account(s), "
        f"{len(state.trades)} trade(s), {len(state.transfers)} transfer(s)[/green]"
    )
