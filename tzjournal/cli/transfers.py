"""Deposit and withdrawal commands for the TZ Journal CLI."""

from datetime import datetime
from typing import Optional

import click
from rich.panel import Panel
from rich.table import Table

from tzjournal.analytics.dates import parse_timestamp
from tzjournal.analytics.financials import transfer_totals
from tzjournal.cli.common import console, fail, fmt_money, get_journal
from tzjournal.config import load_config
from tzjournal.models import Transfer


def _record(kind: str, amount: float, date_text: Optional[str]) -> None:
    if amount <= 0:
        fail("Amount must be greater than zero.")
    if date_text and parse_timestamp(date_text) is None:
        fail(f"Invalid date: {date_text}", "Use ISO format, e.g. 2024-03-15.")

    config = load_config()
    journal = get_journal(config)
    account = journal.current_account
    transfer = Transfer(
        id=journal.next_id(),
        account_id=account.id,
        type=kind,
        amount=amount,
        date=date_text or datetime.now().replace(microsecond=0).isoformat(),
    )
    journal.add_transfer(transfer)
    journal.save()

    console.print(
        f"[green]✓ {kind} of {fmt_money(amount, config['display']['currency'])} "
        f"recorded on {account.name}[/green] [dim](id {transfer.id})[/dim]"
    )


@click.command()
@click.argument("amount", type=float)
@click.option("-d", "--date", "date_text", default=None, help="Transfer date, ISO format. Defaults to now.")
def deposit(amount: float, date_text: Optional[str]) -> None:
    """Record a deposit into the current account."""
    _record("Deposit", amount, date_text)


@click.command()
@click.argument("amount", type=float)
@click.option("-d", "--date", "date_text", default=None, help="Transfer date, ISO format. Defaults to now.")
def withdraw(amount: float, date_text: Optional[str]) -> None:
    """Record a withdrawal from the current account."""
    _record("Withdrawal", amount, date_text)


@click.group(invoke_without_command=True)
@click.pass_context
def transfers(ctx: click.Context) -> None:
    """List or delete deposits and withdrawals.

    \b
    Examples:
      tzjournal transfers
      tzjournal transfers delete 1712345678901
    """
    if ctx.invoked_subcommand is not None:
        return

    config = load_config()
    currency = config["display"]["currency"]
    journal = get_journal(config)
    view = journal.account_view()

    if not view.transfers:
        console.print(Panel(
            "[dim]No deposits or withdrawals[/dim]",
            title=f"[bold]{view.account.name}[/bold]",
            border_style="dim",
        ))
        return

    table = Table(title=f"Transfers - {view.account.name}", show_header=True, header_style="bold cyan")
    table.add_column("Date")
    table.add_column("Type")
    table.add_column("Amount", justify="right")
    table.add_column("ID", style="dim")
    for transfer in sorted(view.transfers, key=lambda t: t.date, reverse=True):
        color = "green" if transfer.type == "Deposit" else "red"
        table.add_row(
            transfer.date[:10],
            f"[{color}]{transfer.type}[/{color}]",
            fmt_money(transfer.amount, currency),
            str(transfer.id),
        )
    console.print(table)

    deposits, withdrawals = transfer_totals(view.transfers)
    console.print(
        f"[bold]Net transfers:[/bold] {fmt_money(deposits - withdrawals, currency)}"
    )


@transfers.command("delete")
@click.argument("transfer_id")
def delete_transfer(transfer_id: str) -> None:
    """Delete a deposit or withdrawal by id."""
    journal = get_journal()
    if not any(str(t.id) == transfer_id for t in journal.state.transfers):
        fail(f"Transfer not found: {transfer_id}")

    journal.remove_transfer(transfer_id)
    journal.save()
    console.print(f"[green]✓ Deleted transfer {transfer_id}[/green]")
