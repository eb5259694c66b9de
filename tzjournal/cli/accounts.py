"""Account management commands for the TZ Journal CLI."""

import click
from rich.table import Table

from tzjournal.cli.common import console, fail, fmt_money, get_journal
from tzjournal.config import load_config


@click.group()
def account() -> None:
    """Manage accounts.

    \b
    Examples:
      tzjournal account list
      tzjournal account add "Prop 100k" --type Demo --initial 100000
      tzjournal account use "Prop 100k"
      tzjournal account remove acc_1
    """
    pass


@account.command("list")
def list_accounts() -> None:
    """List all accounts; the current one is marked."""
    config = load_config()
    journal = get_journal(config)

    table = Table(title="Accounts", show_header=True, header_style="bold cyan")
    table.add_column("")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="bold")
    table.add_column("Type")
    table.add_column("Initial", justify="right")

    for acc in journal.state.accounts:
        active = "[green]●[/green]" if acc.id == journal.current_account_id else ""
        table.add_row(
            active,
            acc.id,
            acc.name,
            acc.type,
            fmt_money(acc.initial, config["display"]["currency"]),
        )
    console.print(table)


@account.command("add")
@click.argument("name")
@click.option("-t", "--type", "acc_type", default="Real", help="Account type, e.g. Real or Demo.")
@click.option("-i", "--initial", type=float, default=0.0, help="Starting equity.")
@click.option("--use", "select", is_flag=True, default=False, help="Switch to the new account.")
def add_account(name: str, acc_type: str, initial: float, select: bool) -> None:
    """Create an account."""
    journal = get_journal()
    acc = journal.add_account(name, type=acc_type, initial=initial)
    if select:
        journal.set_current_account(acc.id)
    journal.save()
    console.print(f"[green]✓ Created account '{acc.name}'[/green] [dim]({acc.id})[/dim]")


@account.command("remove")
@click.argument("ref")
def remove_account(ref: str) -> None:
    """Delete an account by id or name.

    Trades and transfers of the account are kept but no longer shown.
    """
    journal = get_journal()
    acc = journal.find_account(ref)
    if acc is None:
        fail(f"Unknown account: {ref}")

    journal.remove_account(acc.id)
    journal.save()
    console.print(f"[green]✓ Removed account '{acc.name}'[/green]")
    console.print(f"[dim]Current account: {journal.current_account.name}[/dim]")


@account.command("use")
@click.argument("ref")
def use_account(ref: str) -> None:
    """Switch the current account (by id or name)."""
    journal = get_journal()
    acc = journal.find_account(ref)
    if acc is None:
        fail(f"Unknown account: {ref}")

    journal.set_current_account(acc.id)
    journal.save()
    console.print(f"[green]✓ Now using '{acc.name}'[/green]")
