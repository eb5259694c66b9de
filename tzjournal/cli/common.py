"""Helpers shared by the CLI command modules."""

from typing import Optional

from rich.console import Console
from rich.panel import Panel

from tzjournal.config import get_db_path, load_config
from tzjournal.db.store import DataStore
from tzjournal.journal import Journal

console = Console()

SPARK_BLOCKS = "▁▂▃▄▅▆▇█"


def get_journal(config: Optional[dict] = None) -> Journal:
    """Open and load the journal configured for this user."""
    config = config or load_config()
    journal = Journal(DataStore(get_db_path(config)))
    journal.load()
    if journal.recovery_key:
        console.print(
            "[yellow]Some stored journal data could not be read and was skipped. "
            f"The original is kept under '{journal.recovery_key}'.[/yellow]"
        )
    return journal


def fail(message: str, detail: Optional[str] = None) -> None:
    """Print an error panel and exit with status 1."""
    body = f"[red]{message}[/red]"
    if detail:
        body += f"\n\n{detail}"
    console.print(Panel(body, title="[bold red]Error[/bold red]", border_style="red"))
    raise SystemExit(1)


def fmt_money(value: float, currency: str = "$") -> str:
    sign = "-" if value < 0 else ""
    return f"{sign}{currency}{abs(value):,.2f}"


def fmt_money_compact(value: float, currency: str = "$") -> str:
    """Short money label for calendar cells (1.2k instead of 1,200.00)."""
    sign = "-" if value < 0 else ""
    amount = abs(value)
    if amount >= 1000:
        return f"{sign}{currency}{amount / 1000:.1f}k"
    return f"{sign}{currency}{amount:.0f}"


def pnl_color(value: float) -> str:
    return "green" if value >= 0 else "red"


def accent(dark_mode: bool) -> str:
    """Chart color for the current theme."""
    return "cyan" if dark_mode else "blue"


def sparkline(values: list[float]) -> str:
    """Render a series as a one-line block chart."""
    if not values:
        return ""
    low, high = min(values), max(values)
    span = high - low
    if span == 0:
        return SPARK_BLOCKS[len(SPARK_BLOCKS) // 2] * len(values)
    top = len(SPARK_BLOCKS) - 1
    return "".join(SPARK_BLOCKS[round((v - low) / span * top)] for v in values)
