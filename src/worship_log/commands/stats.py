"""Statistics commands for worship-log.

Provides CLI commands for the most-sung ranking, a single song's history
and the never-sung songs per catalog section.
"""

from pathlib import Path
from typing import Optional

import typer
from rich.panel import Panel
from rich.table import Table

from worship_log.commands.common import console, get_sections, load_config, open_state
from worship_log.core.sections import CollectionSummary, categorize
from worship_log.core.stats import most_sung
from worship_log.db.models import format_display_date

app = typer.Typer(help="Usage statistics")


@app.command("top")
def top_songs(
    limit: int = typer.Option(
        10,
        "--limit",
        "-l",
        help="Maximum number of songs",
    ),
    config_path: Path = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
) -> None:
    """Rank the songs sung more than once."""
    config = load_config(config_path)
    state = open_state(config)

    ranking = most_sung(state.stats, limit)
    if not ranking:
        console.print("[yellow]No song has been sung more than once yet.[/yellow]")
        return

    table = Table(title="Most sung")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Song", style="cyan")
    table.add_column("Times", style="green", justify="right")
    table.add_column("Last sung", style="yellow")

    for i, stat in enumerate(ranking, 1):
        table.add_row(
            str(i),
            stat.song,
            str(stat.count),
            format_display_date(stat.last_date) if stat.last_date else "-",
        )

    console.print(table)


@app.command("song")
def song_stats(
    song: str = typer.Argument(..., help="Song name"),
    config_path: Path = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
) -> None:
    """Show how often and when a song was sung."""
    config = load_config(config_path)
    state = open_state(config)

    name = song.strip()
    stat = state.stats.get(name)
    if stat is None:
        console.print(f"[yellow]'{name}' has never been sung.[/yellow]")
        return

    recency = state.check_song(name)
    dates = "\n".join(format_display_date(d) for d in stat.history)
    warning = (
        f"\n\n[yellow]Sung {recency.days_since} days ago[/yellow]" if recency.blocked else ""
    )

    console.print(
        Panel.fit(
            f"[cyan]Times sung:[/cyan] {stat.count}\n"
            f"[cyan]Dates:[/cyan]\n{dates}{warning}",
            title=name,
            border_style="green",
        )
    )


def _print_summary(label: str, summary: CollectionSummary) -> None:
    console.print(
        f"[bold]{label}[/bold]: {summary.unplayed} of {summary.total} never sung "
        f"([green]{summary.percent_complete}% complete[/green])"
    )

    table = Table(show_header=True)
    table.add_column("Section", style="magenta")
    table.add_column("Unplayed", style="cyan")

    for group in summary.groups:
        if group.songs:
            table.add_row(f"{group.section.name} ({len(group.songs)})", "\n".join(group.songs))
    if summary.unsectioned:
        table.add_row(f"Other ({len(summary.unsectioned)})", "\n".join(summary.unsectioned))

    if table.row_count:
        console.print(table)
    else:
        console.print("[dim]No songs found[/dim]")


@app.command("unplayed")
def unplayed_songs(
    query: Optional[str] = typer.Option(
        None,
        "--query",
        "-q",
        help="Only list songs containing this text",
    ),
    config_path: Path = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
) -> None:
    """List never-sung songs grouped by catalog section."""
    config = load_config(config_path)
    sections = get_sections(config)
    state = open_state(config)

    result = categorize(state.catalog, state.records.all(), sections, query, state.marker)

    _print_summary("Primary", result.primary)
    _print_summary(state.marker or "Marked", result.marked)
