"""Trade commands for the TZ Journal CLI.

Handles logging trades, deleting them, and the searchable trade log.
"""

from datetime import datetime
from typing import Optional

import click
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from tzjournal.analytics import search_trades
from tzjournal.analytics.dates import parse_timestamp
from tzjournal.cli.common import console, fail, fmt_money, get_journal, pnl_color
from tzjournal.config import load_config
from tzjournal.importers.attachments import AttachmentTooLargeError, load_attachment
from tzjournal.models import Trade


def _resolve_date(value: Optional[str]) -> str:
    if not value:
        return datetime.now().replace(microsecond=0).isoformat()
    if parse_timestamp(value) is None:
        fail(f"Invalid date: {value}", "Use ISO format, e.g. 2024-03-15 or 2024-03-15T14:30.")
    return value


@click.command()
@click.argument("symbol")
@click.argument("pnl", type=float)
@click.option(
    "-s", "--side",
    type=click.Choice(["Long", "Short"], case_sensitive=False),
    default="Long",
    help="Trade direction (default: Long).",
)
@click.option("-d", "--date", "date_text", default=None, help="Close time, ISO format. Defaults to now.")
@click.option("-n", "--notes", default="", help="Notes for this trade.")
@click.option("-i", "--image", default=None, help="Screenshot file or URL.")
@click.option("-a", "--account", "account_ref", default=None, help="Account id or name (default: current).")
def add(
    symbol: str,
    pnl: float,
    side: str,
    date_text: Optional[str],
    notes: str,
    image: Optional[str],
    account_ref: Optional[str],
) -> None:
    """Log a closed trade.

    SYMBOL is the instrument (e.g., EURUSD, XAUUSD).
    PNL is the realized profit or loss; use -- before negative values.

    \b
    Examples:
      tzjournal add EURUSD 120.5
      tzjournal add XAUUSD --side short -- -45
      tzjournal add GBPUSD 80 --notes "London breakout" --image shot.png
    """
    config = load_config()
    journal = get_journal(config)

    account = journal.current_account
    if account_ref:
        account = journal.find_account(account_ref)
        if account is None:
            fail(f"Unknown account: {account_ref}")

    img = None
    if image:
        try:
            img = load_attachment(image, config["attachments"]["max_image_bytes"])
        except (AttachmentTooLargeError, OSError) as e:
            console.print(f"[yellow]Image not attached: {e}[/yellow]")

    trade = Trade.create(
        id=journal.next_id(),
        account=account.id,
        date=_resolve_date(date_text),
        symbol=symbol.upper(),
        side=side.capitalize(),
        pnl=pnl,
        notes=notes,
        img=img,
    )
    journal.add_trade(trade)
    journal.save()

    currency = config["display"]["currency"]
    color = pnl_color(trade.pnl)
    console.print(
        f"[green]✓ Logged {trade.symbol} {trade.side}[/green] "
        f"[{color}]{fmt_money(trade.pnl, currency)}[/{color}] "
        f"[dim]({account.name}, id {trade.id})[/dim]"
    )


@click.command()
@click.argument("trade_id")
def delete(trade_id: str) -> None:
    """Delete a trade by id.

    \b
    Examples:
      tzjournal delete 1712345678901
    """
    journal = get_journal()
    trade = journal.get_trade(trade_id)
    if trade is None:
        fail(f"Trade not found: {trade_id}")

    journal.remove_trade(trade_id)
    journal.save()
    console.print(f"[green]✓ Deleted {trade.symbol} trade {trade_id}[/green]")


@click.command()
@click.option("-s", "--search", default="", help="Filter by symbol (substring, case-insensitive).")
@click.option("-l", "--limit", type=int, default=None, help="Show at most N trades.")
def log(search: str, limit: Optional[int]) -> None:
    """List the current account's trades, newest first.

    \b
    Examples:
      tzjournal log
      tzjournal log --search eur
    """
    config = load_config()
    currency = config["display"]["currency"]
    journal = get_journal(config)
    view = journal.account_view()
    trades = search_trades(view.trades, search)
    if limit is not None:
        trades = trades[:limit]

    if not trades:
        console.print(Panel(
            "[dim]No trades found[/dim]",
            title=f"[bold]{view.account.name}[/bold]",
            border_style="dim",
        ))
        return

    table = Table(title=f"Trade Log - {view.account.name}", show_header=True, header_style="bold cyan")
    table.add_column("Date")
    table.add_column("Symbol", style="bold")
    table.add_column("Side")
    table.add_column("P&L", justify="right")
    table.add_column("ID", style="dim")

    for trade in trades:
        stamp = parse_timestamp(trade.date)
        color = pnl_color(trade.pnl)
        table.add_row(
            stamp.strftime("%m/%d") if stamp else trade.date,
            trade.symbol,
            trade.side,
            f"[{color}]{fmt_money(trade.pnl, currency)}[/{color}]",
            str(trade.id),
        )
    console.print(table)


@click.command()
@click.argument("trade_id")
def show(trade_id: str) -> None:
    """Show the details of one trade."""
    config = load_config()
    journal = get_journal(config)
    trade = journal.get_trade(trade_id)
    if trade is None:
        fail(f"Trade not found: {trade_id}")

    stamp = parse_timestamp(trade.date)
    color = pnl_color(trade.pnl)
    body = (
        f"Date:    {stamp.strftime('%Y-%m-%d %H:%M') if stamp else trade.date}\n"
        f"P&L:     [{color}]{fmt_money(trade.pnl, config['display']['currency'])}[/{color}]\n"
        f"Status:  {trade.status}\n\n"
        f"{escape(trade.notes) if trade.notes else '[dim]No notes.[/dim]'}"
    )
    if trade.img:
        if trade.img.startswith("data:"):
            body += "\n\n[dim]Screenshot attached (embedded image)[/dim]"
        else:
            body += f"\n\nScreenshot: {trade.img}"

    console.print(Panel(body, title=f"[bold]{trade.symbol} ({trade.side})[/bold]", border_style=color))
