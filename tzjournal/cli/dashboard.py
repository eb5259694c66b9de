"""Dashboard and calendar views for the TZ Journal CLI."""

import calendar as calendar_names
from datetime import date
from typing import Optional

import click
from rich.panel import Panel
from rich.table import Table

from tzjournal.analytics import bucket_month, compute_financials, shift_month
from tzjournal.cli.common import (
    accent,
    console,
    fail,
    fmt_money,
    fmt_money_compact,
    get_journal,
    pnl_color,
    sparkline,
)
from tzjournal.config import load_config


@click.command()
@click.option("--curve", is_flag=True, default=False, help="List every equity curve point.")
def dashboard(curve: bool) -> None:
    """Show equity, growth, net P&L and win rate for the current account.

    \b
    Examples:
      tzjournal dashboard
      tzjournal dashboard --curve
    """
    config = load_config()
    currency = config["display"]["currency"]
    journal = get_journal(config)
    view = journal.account_view()
    data = compute_financials(view.trades, view.transfers, view.account)

    summary = Table.grid(padding=(0, 3))
    summary.add_column(style="dim")
    summary.add_column(justify="right")
    summary.add_row("Equity", f"[bold]{fmt_money(data.current_equity, currency)}[/bold]")
    summary.add_row(
        "Growth",
        f"[{pnl_color(data.growth_pct)}]{data.growth_pct:.2f}%[/{pnl_color(data.growth_pct)}]",
    )
    summary.add_row("Initial", fmt_money(data.initial, currency))
    summary.add_row("Type", data.account_type)
    summary.add_row(
        "Net P&L",
        f"[{pnl_color(data.net_pnl)}]{fmt_money(data.net_pnl, currency)}[/{pnl_color(data.net_pnl)}]",
    )
    summary.add_row("Win rate", f"{data.win_rate}%")
    summary.add_row("Trades", f"{data.trade_count} ({data.winning_trades}W / {data.losing_trades}L)")
    if data.total_deposits or data.total_withdrawals:
        summary.add_row("Deposits", fmt_money(data.total_deposits, currency))
        summary.add_row("Withdrawals", fmt_money(data.total_withdrawals, currency))

    console.print(Panel(
        summary,
        title=f"[bold]{view.account.name}[/bold]",
        border_style=accent(journal.prefs.dark_mode),
    ))

    if not data.equity_curve:
        console.print("[dim]No trades yet - equity curve is empty.[/dim]")
        return

    color = accent(journal.prefs.dark_mode)
    console.print(f"Equity curve  [{color}]{sparkline([p.value for p in data.equity_curve])}[/{color}]")

    if curve:
        table = Table(show_header=True, header_style=f"bold {color}")
        table.add_column("#", justify="right", style="dim")
        table.add_column("Date")
        table.add_column("Equity", justify="right")
        for i, point in enumerate(data.equity_curve):
            table.add_row(str(i), point.label, fmt_money(point.value, currency))
        console.print(table)


def _parse_month(value: Optional[str]) -> tuple[int, int]:
    if not value:
        today = date.today()
        return today.year, today.month
    try:
        year_text, month_text = value.split("-")
        year, month = int(year_text), int(month_text)
    except ValueError:
        fail(f"Invalid month: {value}", "Use the YYYY-MM format, e.g. 2024-03.")
    if not 1 <= month <= 12:
        fail(f"Invalid month: {value}", "Month must be between 01 and 12.")
    return year, month


@click.command("calendar")
@click.option("-m", "--month", "month_text", default=None, help="Month to show (YYYY-MM). Defaults to this month.")
@click.option("--prev", "back", type=int, default=0, help="Go back N months.")
@click.option("--next", "forward", type=int, default=0, help="Go forward N months.")
def calendar_view(month_text: Optional[str], back: int, forward: int) -> None:
    """Show a month of daily P&L grouped by instrument.

    \b
    Examples:
      tzjournal calendar
      tzjournal calendar --prev 1
      tzjournal calendar --month 2024-02
    """
    year, month = shift_month(*_parse_month(month_text), forward - back)
    config = load_config()
    currency = config["display"]["currency"]
    journal = get_journal(config)
    view = journal.account_view()
    result = bucket_month(view.trades, year, month)

    table = Table(
        title=f"{calendar_names.month_name[month]} {year}",
        show_header=True,
        header_style=f"bold {accent(journal.prefs.dark_mode)}",
        show_lines=True,
    )
    for name in ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]:
        table.add_column(name, min_width=10, vertical="top")

    cells = [""] * result.leading_blanks
    for day in result.days:
        lines = [f"[bold]{day.day}[/bold]"]
        for symbol, pnl in day.by_symbol.items():
            lines.append(f"{symbol} [{pnl_color(pnl)}]{fmt_money_compact(pnl, currency)}[/{pnl_color(pnl)}]")
        if day.classification == "profit":
            cells.append(f"[on dark_green]{lines[0]}[/on dark_green]\n" + "\n".join(lines[1:]))
        elif day.classification == "loss":
            cells.append(f"[on dark_red]{lines[0]}[/on dark_red]\n" + "\n".join(lines[1:]))
        else:
            cells.append(lines[0])

    while len(cells) % 7:
        cells.append("")
    for week in range(0, len(cells), 7):
        table.add_row(*cells[week:week + 7])

    console.print(table)
    color = pnl_color(result.pnl)
    console.print(
        f"[bold]Trades:[/bold] {result.trade_count}   "
        f"[bold]Month P&L:[/bold] [{color}]{fmt_money(result.pnl, currency)}[/{color}]"
    )
