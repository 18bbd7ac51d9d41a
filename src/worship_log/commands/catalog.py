"""Catalog commands for worship-log.

Provides CLI commands for listing, searching and registering songs in
the catalog.
"""

from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from worship_log.commands.common import console, load_config, open_state
from worship_log.core.catalog import is_marked
from worship_log.core.search import suggest

app = typer.Typer(help="Catalog operations")


@app.command("list")
def list_songs(
    marked: Optional[bool] = typer.Option(
        None,
        "--marked/--primary",
        help="Only list marked or only primary songs",
    ),
    limit: Optional[int] = typer.Option(
        None,
        "--limit",
        "-l",
        help="Maximum number of results",
    ),
    config_path: Path = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
) -> None:
    """List songs in catalog order."""
    config = load_config(config_path)
    state = open_state(config)

    songs = state.catalog
    if marked is not None:
        songs = [s for s in songs if is_marked(s, state.marker) == marked]
    if limit:
        songs = songs[:limit]

    if not songs:
        console.print("[yellow]No songs found.[/yellow]")
        return

    table = Table(title=f"Songs ({len(songs)} total)")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Song", style="cyan")
    table.add_column("Custom", justify="center")

    custom = set(state.custom_songs)
    for i, song in enumerate(songs, 1):
        table.add_row(str(i), song, "✓" if song in custom else "")

    console.print(table)


@app.command("search")
def search_songs(
    query: str = typer.Argument(
        "",
        help="Search text (blank lists the first catalog entries)",
    ),
    limit: Optional[int] = typer.Option(
        None,
        "--limit",
        "-l",
        help="Maximum number of suggestions",
    ),
    config_path: Path = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
) -> None:
    """Suggest catalog songs matching a query."""
    config = load_config(config_path)
    state = open_state(config)

    results = suggest(state.catalog, query, limit or config.suggestion_limit, state.marker)

    if not results:
        console.print(f"[yellow]No songs match '{query}'.[/yellow]")
        return

    stats = state.stats
    table = Table(title=f"Suggestions for '{query}'" if query.strip() else "Catalog")
    table.add_column("Song", style="cyan")
    table.add_column("Times", style="green", justify="right")
    table.add_column("Last sung", style="yellow")

    for song in results:
        stat = stats.get(song)
        table.add_row(
            song,
            str(stat.count) if stat else "0",
            stat.last_date if stat and stat.last_date else "-",
        )

    console.print(table)


@app.command("add")
def add_song(
    song: str = typer.Argument(
        ...,
        help="Song to register",
    ),
    config_path: Path = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
) -> None:
    """Register a new song in the catalog."""
    config = load_config(config_path)
    state = open_state(config)

    if not song.strip():
        console.print("[red]Song name cannot be empty.[/red]")
        raise typer.Exit(1)

    if state.register_song(song):
        console.print(f"[green]Registered: {song.strip()}[/green]")
    else:
        console.print(f"[yellow]Already in catalog: {song.strip()}[/yellow]")
