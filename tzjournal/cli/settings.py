"""Theme and configuration commands for the TZ Journal CLI."""

import click
import toml
from rich.markup import escape
from rich.panel import Panel

from tzjournal.cli.common import console, get_journal
from tzjournal.config import create_template_config, get_config_path, get_db_path, load_config


@click.command()
@click.option("--dark/--light", default=None, help="Choose the color theme.")
def theme(dark: bool | None) -> None:
    """Show or switch the color theme.

    \b
    Examples:
      tzjournal theme
      tzjournal theme --light
    """
    journal = get_journal()
    if dark is None:
        console.print(f"Theme: [bold]{'dark' if journal.prefs.dark_mode else 'light'}[/bold]")
        return

    journal.set_dark_mode(dark)
    journal.save()
    console.print(f"[green]✓ Switched to the {'dark' if dark else 'light'} theme[/green]")


@click.group()
def config() -> None:
    """Show or create the configuration file."""
    pass


@config.command("show")
def show_config() -> None:
    """Print the effective configuration."""
    settings = load_config()
    path = get_config_path()
    source = str(path) if path.exists() else f"{path} [dim](not created, using defaults)[/dim]"
    console.print(Panel(
        f"[bold]File:[/bold] {source}\n"
        f"[bold]Database:[/bold] {get_db_path(settings)}\n\n"
        f"{escape(toml.dumps(settings))}",
        title="[bold cyan]Configuration[/bold cyan]",
        border_style="cyan",
    ))


@config.command("init")
@click.option("--force", is_flag=True, default=False, help="Overwrite an existing file.")
def init_config(force: bool) -> None:
    """Write a config file with the default settings."""
    path = get_config_path()
    if path.exists() and not force:
        console.print(f"[yellow]{path} already exists (use --force to overwrite)[/yellow]")
        return
    create_template_config(path)
    console.print(f"[green]✓ Wrote {path}[/green]")
