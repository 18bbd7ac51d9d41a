"""Main entry point for worship-log CLI.

Provides a Typer-based CLI for recording services, searching the song
catalog and reporting song usage.
"""

from pathlib import Path

import typer
from rich.panel import Panel

from worship_log import __version__
from worship_log.commands import backup as backup_commands
from worship_log.commands import catalog as catalog_commands
from worship_log.commands import service as service_commands
from worship_log.commands import stats as stats_commands
from worship_log.commands.common import console, load_config
from worship_log.config import get_config_path

app = typer.Typer(
    name="worship-log",
    help="Service song history and catalog statistics",
    rich_markup_mode="rich",
)

app.add_typer(catalog_commands.app, name="catalog", help="Catalog operations")
app.add_typer(service_commands.app, name="service", help="Service history operations")
app.add_typer(stats_commands.app, name="stats", help="Usage statistics")
app.add_typer(backup_commands.app, name="backup", help="Backup and restore")


def version_callback(value: bool) -> None:
    """Callback for --version flag."""
    if value:
        console.print(f"worship-log version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """worship-log: keep track of the songs sung at each service.

    ## Commands

    * [bold cyan]catalog[/bold cyan] - Catalog operations (list, search, add)
    * [bold cyan]service[/bold cyan] - Service history (add, list, show, edit, delete, clear, share)
    * [bold cyan]stats[/bold cyan] - Usage statistics (top, song, unplayed)
    * [bold cyan]backup[/bold cyan] - Backup and restore (export, import)

    ## Getting Started

    1. Record a service:
       [dim]$ worship-log service add "12 Santo, Santo, Santo" "45 Grandioso És Tu"[/dim]

    2. See what has never been sung:
       [dim]$ worship-log stats unplayed[/dim]
    """
    pass


@app.command()
def config(
    action: str = typer.Argument(
        ...,
        help="Action to perform (show, set, path)",
    ),
    key: str = typer.Argument(
        None,
        help="Configuration key (for set action)",
    ),
    value: str = typer.Argument(
        None,
        help="Configuration value (for set action)",
    ),
    config_path: Path = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
) -> None:
    """Manage configuration.

    Examples:
        worship-log config show
        worship-log config set recency_days 45
        worship-log config path
    """
    if action == "show":
        cfg = load_config(config_path)
        console.print(
            Panel.fit(
                f"[cyan]Database Path:[/cyan] {cfg.db_path}\n"
                f"[cyan]Base Catalog:[/cyan] {cfg.base_catalog_path or '(not set)'}\n"
                f"[cyan]Sections File:[/cyan] {cfg.sections_path or '(not set)'}\n"
                f"[cyan]Marker Prefix:[/cyan] {cfg.marker_prefix}\n"
                f"[cyan]Recency Days:[/cyan] {cfg.recency_days}\n"
                f"[cyan]Suggestion Limit:[/cyan] {cfg.suggestion_limit}\n"
                f"[cyan]Backup Context:[/cyan] {cfg.context}\n"
                f"[cyan]Title:[/cyan] {cfg.title or '(not set)'}\n"
                f"[cyan]Log Directory:[/cyan] {cfg.log_dir}",
                title="Configuration",
                border_style="green",
            ),
        )

    elif action == "set":
        if not key or value is None:
            console.print("[red]Usage: worship-log config set <key> <value>[/red]")
            raise typer.Exit(1)

        cfg = load_config(config_path)
        try:
            cfg.set(key, value)
        except ValueError as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(1)
        cfg.save(config_path)
        console.print(f"[green]Set {key} = {value}[/green]")

    elif action == "path":
        console.print(str(config_path or get_config_path()))

    else:
        console.print(f"[red]Unknown action: {action}[/red]")
        console.print("Valid actions: show, set, path")
        raise typer.Exit(1)


def cli_entry() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli_entry()
