"""Backup commands for worship-log.

Provides CLI commands to export the full state to a JSON file and to
restore it from one.
"""

from datetime import date
from pathlib import Path

import typer

from worship_log.commands.common import console, load_config, open_state
from worship_log.core.backup import BackupError, backup_filename, dumps_backup

app = typer.Typer(help="Backup and restore")


@app.command("export")
def export_data(
    output: Path = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file or directory (defaults to the current directory)",
    ),
    config_path: Path = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
) -> None:
    """Export services and custom songs to a JSON file."""
    config = load_config(config_path)
    state = open_state(config)

    if not len(state.records) and not state.custom_songs:
        console.print("[yellow]No data to export.[/yellow]")
        raise typer.Exit(1)

    filename = backup_filename(config.context, date.today())
    if output is None:
        output = Path.cwd() / filename
    elif output.is_dir():
        output = output / filename

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(dumps_backup(state.records.all(), state.custom_songs), encoding="utf-8")

    console.print(
        f"[green]Exported {len(state.records)} services and "
        f"{len(state.custom_songs)} custom songs to {output}[/green]"
    )


@app.command("import")
def import_data(
    path: Path = typer.Argument(..., help="Backup file to restore"),
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
    """Replace all current data with a backup file."""
    config = load_config(config_path)
    state = open_state(config)

    if not path.exists():
        console.print(f"[red]File not found: {path}[/red]")
        raise typer.Exit(1)

    if not yes and not typer.confirm("This will replace your current data. Continue?", default=False):
        console.print("[yellow]Cancelled[/yellow]")
        return

    try:
        data = state.restore(path.read_bytes())
    except BackupError as e:
        console.print(f"[red]Invalid backup file: {e}[/red]")
        raise typer.Exit(1)

    console.print(
        f"[green]Restored {len(data.records)} services and "
        f"{len(data.custom_songs)} custom songs[/green]"
    )
