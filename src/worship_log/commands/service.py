"""Service history commands for worship-log.

Provides CLI commands for recording a service, browsing the history,
editing or deleting records and formatting a record for sharing.
"""

from datetime import date
from pathlib import Path
from typing import List, Optional

import typer
from rich.panel import Panel
from rich.table import Table

from worship_log.commands.common import console, load_config, open_state
from worship_log.core.draft import PERIODS, Draft, DraftError
from worship_log.core.recency import parse_date
from worship_log.core.share import format_share_text, share_url
from worship_log.db.models import ServiceRecord, format_display_date
from worship_log.state import AppState

app = typer.Typer(help="Service history operations")


def resolve_record(state: AppState, record_id: str) -> Optional[ServiceRecord]:
    """Find a record by full ID or unique ID prefix."""
    record = state.records.get(record_id)
    if record:
        return record

    matches = [r for r in state.records.all() if r.id.startswith(record_id)]
    if len(matches) == 1:
        return matches[0]
    return None


def _require_record(state: AppState, record_id: str) -> ServiceRecord:
    record = resolve_record(state, record_id)
    if record is None:
        console.print(f"[red]Service not found: {record_id}[/red]")
        raise typer.Exit(1)
    return record


def _print_record(record: ServiceRecord) -> None:
    lines = [f"{i}. {song}" for i, song in enumerate(record.songs, 1)]
    console.print(
        Panel.fit(
            f"[cyan]ID:[/cyan] {record.id}\n"
            f"[cyan]Date:[/cyan] {record.display_date}\n"
            f"[cyan]Period:[/cyan] {record.description or '-'}\n\n" + "\n".join(lines),
            title="Service",
            border_style="green",
        )
    )


@app.command("add")
def add_service(
    songs: List[str] = typer.Argument(
        ...,
        help="Songs in performance order",
    ),
    service_date: Optional[str] = typer.Option(
        None,
        "--date",
        "-d",
        help="Service date (YYYY-MM-DD, defaults to today)",
    ),
    period: str = typer.Option(
        PERIODS[0],
        "--period",
        "-p",
        help=f"Period label ({', '.join(PERIODS)} or free text)",
    ),
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Add recently sung songs without asking",
    ),
    share: bool = typer.Option(
        False,
        "--share",
        help="Print the share text and link after saving",
    ),
    config_path: Path = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
) -> None:
    """Record a service.

    Unknown songs are registered in the catalog. Songs sung within the
    recency window ask for confirmation unless --yes is given.
    """
    config = load_config(config_path)
    state = open_state(config)

    if service_date is not None:
        try:
            parse_date(service_date)
        except ValueError:
            console.print(f"[red]Invalid date: {service_date}[/red]")
            raise typer.Exit(1)

    draft = Draft(date=service_date or date.today().isoformat(), description=period)

    for song in songs:
        result = state.add_to_draft(draft, song)
        if not result.needs_confirmation:
            continue

        recency = result.recency
        message = (
            f"'{result.song}' was sung {recency.days_since} days ago "
            f"({format_display_date(recency.last_date)})"
        )
        if yes:
            console.print(f"[yellow]{message}; adding anyway[/yellow]")
            state.add_to_draft(draft, song, force=True)
        elif typer.confirm(f"{message}. Add anyway?", default=False):
            state.add_to_draft(draft, song, force=True)
        else:
            console.print(f"[dim]Skipped {result.song}[/dim]")

    try:
        record = state.add_record(draft.finalize())
    except DraftError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]Saved service with {len(record.songs)} songs[/green]")
    _print_record(record)

    if share:
        text = format_share_text(record.date, record.songs, record.description, config.title)
        console.print(text, markup=False)
        console.print(share_url(text), markup=False, soft_wrap=True)


@app.command("list")
def list_services(
    search: Optional[str] = typer.Option(
        None,
        "--search",
        "-s",
        help="Filter by date, period or song",
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
    """List services, most recent first."""
    config = load_config(config_path)
    state = open_state(config)

    records = state.records.search(search or "")
    if limit:
        records = records[:limit]

    if not records:
        console.print("[yellow]No services found.[/yellow]")
        return

    table = Table(title=f"Services ({len(records)} total)")
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Date", style="cyan")
    table.add_column("Period", style="green")
    table.add_column("Songs", style="yellow")

    for record in records:
        table.add_row(
            record.id[:8],
            record.display_date,
            record.description or "-",
            ", ".join(record.songs),
        )

    console.print(table)


@app.command("show")
def show_service(
    record_id: str = typer.Argument(..., help="Service ID (or unique prefix)"),
    config_path: Path = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
) -> None:
    """Show a service and its songs."""
    config = load_config(config_path)
    state = open_state(config)

    _print_record(_require_record(state, record_id))


@app.command("edit")
def edit_service(
    record_id: str = typer.Argument(..., help="Service ID (or unique prefix)"),
    service_date: Optional[str] = typer.Option(
        None,
        "--date",
        "-d",
        help="New service date (YYYY-MM-DD)",
    ),
    period: Optional[str] = typer.Option(
        None,
        "--period",
        "-p",
        help="New period label",
    ),
    songs: Optional[List[str]] = typer.Option(
        None,
        "--song",
        "-s",
        help="Replacement song list (repeat for each song)",
    ),
    config_path: Path = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
) -> None:
    """Edit a service's date, period or songs."""
    config = load_config(config_path)
    state = open_state(config)

    record = _require_record(state, record_id)

    if service_date is not None:
        try:
            parse_date(service_date)
        except ValueError:
            console.print(f"[red]Invalid date: {service_date}[/red]")
            raise typer.Exit(1)

    new_songs = [s.strip() for s in songs if s.strip()] if songs else record.songs
    for song in new_songs:
        state.register_song(song)

    updated = ServiceRecord(
        id=record.id,
        date=service_date or record.date,
        description=period if period is not None else record.description,
        songs=new_songs,
    )

    if not state.update_record(record.id, updated):
        console.print(f"[red]Service not found: {record_id}[/red]")
        raise typer.Exit(1)

    console.print("[green]Service updated[/green]")
    _print_record(updated)


@app.command("delete")
def delete_service(
    record_id: str = typer.Argument(..., help="Service ID (or unique prefix)"),
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Skip confirmation",
    ),
    config_path: Path = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
) -> None:
    """Delete a service from the history."""
    config = load_config(config_path)
    state = open_state(config)

    record = _require_record(state, record_id)

    if not yes and not typer.confirm(f"Delete service on {record.display_date}?", default=False):
        console.print("[yellow]Cancelled[/yellow]")
        return

    state.delete_record(record.id)
    console.print(f"[green]Deleted service {record.id}[/green]")


@app.command("clear")
def clear_services(
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Skip confirmation",
    ),
    config_path: Path = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
) -> None:
    """Delete the whole service history."""
    config = load_config(config_path)
    state = open_state(config)

    count = len(state.records)
    if not yes and not typer.confirm(f"Delete all {count} services?", default=False):
        console.print("[yellow]Cancelled[/yellow]")
        return

    state.clear_records()
    console.print(f"[green]Deleted {count} services[/green]")


@app.command("share")
def share_service(
    record_id: str = typer.Argument(..., help="Service ID (or unique prefix)"),
    config_path: Path = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
) -> None:
    """Print the share text and link for a service."""
    config = load_config(config_path)
    state = open_state(config)

    record = _require_record(state, record_id)
    text = format_share_text(record.date, record.songs, record.description, config.title)

    console.print(text, markup=False)
    console.print(share_url(text), markup=False, soft_wrap=True)
