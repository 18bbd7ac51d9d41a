"""Helpers shared by worship-log command groups."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from worship_log.config import AppConfig, ensure_config_exists
from worship_log.core.catalog import load_base_catalog
from worship_log.core.sections import DEFAULT_SECTIONS, SectionConfig, load_sections
from worship_log.db.store import DocumentStore
from worship_log.logging_config import setup_logging
from worship_log.state import AppState

console = Console()


def load_config(config_path: Optional[Path]) -> AppConfig:
    """Load config from an explicit path or the standard location.

    Exits with code 1 if an explicit path doesn't exist.
    """
    if config_path is None:
        return ensure_config_exists()

    try:
        return AppConfig.load(config_path)
    except FileNotFoundError:
        console.print(f"[red]Config file not found: {config_path}[/red]")
        raise typer.Exit(1)


def open_state(config: AppConfig) -> AppState:
    """Set up logging and load the application state described by config.

    Exits with code 1 if the configured base catalog can't be read.
    """
    setup_logging(config.log_dir)

    base_catalog: list[str] = []
    if config.base_catalog_path:
        try:
            base_catalog = load_base_catalog(config.base_catalog_path)
        except (FileNotFoundError, ValueError) as e:
            console.print(f"[red]Error loading base catalog: {e}[/red]")
            raise typer.Exit(1)

    state = AppState(
        store=DocumentStore(config.db_path),
        base_catalog=base_catalog,
        marker=config.marker_prefix,
        recency_days=config.recency_days,
    )
    state.load()
    return state


def get_sections(config: AppConfig) -> SectionConfig:
    """Get the section configuration, falling back to the defaults.

    Exits with code 1 if the configured sections file is invalid.
    """
    if not config.sections_path:
        return DEFAULT_SECTIONS

    try:
        return load_sections(config.sections_path)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error loading sections: {e}[/red]")
        raise typer.Exit(1)
