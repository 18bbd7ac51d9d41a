"""Song catalog for Worship Log.

The catalog is the union of a fixed base list and the songs registered
by the operator. Songs whose display string starts with the marker
prefix belong to the secondary ("marked") collection and always sort
after the primary collection.
"""

import json
import unicodedata
from pathlib import Path
from typing import Iterable

DEFAULT_MARKER = "(CIAS)"


def is_marked(song: str, marker: str = DEFAULT_MARKER) -> bool:
    """Check whether a song belongs to the marked collection.

    Args:
        song: Song display string
        marker: Marker prefix

    Returns:
        True if the song starts with the marker prefix
    """
    return bool(marker) and song.startswith(marker)


def collation_key(song: str) -> str:
    """Accent- and case-insensitive sort key for a song title."""
    normalized = unicodedata.normalize("NFKD", song)
    normalized = "".join(ch for ch in normalized if not unicodedata.combining(ch))
    return normalized.casefold()


def catalog_sort_key(song: str, marker: str = DEFAULT_MARKER) -> tuple[bool, str, str]:
    """Sort key placing unmarked songs first, then in collation order.

    The exact string is the final tie break so distinct songs never
    compare equal.
    """
    return (is_marked(song, marker), collation_key(song), song)


def build_catalog(
    base: Iterable[str],
    custom: Iterable[str],
    marker: str = DEFAULT_MARKER,
) -> list[str]:
    """Merge the base and custom song lists into the catalog view.

    Args:
        base: Fixed base song list
        custom: Songs registered by the operator
        marker: Marker prefix for the secondary collection

    Returns:
        New sorted list without duplicates
    """
    merged = set(base)
    merged.update(custom)
    return sorted(merged, key=lambda song: catalog_sort_key(song, marker))


def register_song(catalog: list[str], custom: list[str], song: str) -> list[str]:
    """Register a new song in the custom list.

    Args:
        catalog: Current merged catalog
        custom: Current custom song list
        song: Song to register (trimmed before use)

    Returns:
        New custom list; unchanged copy if the song is blank or known
    """
    name = song.strip()
    if not name or name in catalog or name in custom:
        return list(custom)
    return [*custom, name]


def load_base_catalog(path: Path) -> list[str]:
    """Load the fixed base song list from a file.

    Supports JSON (a list of strings, or an object with a "songs" list)
    and plain text with one song per line.

    Args:
        path: Path to the catalog file

    Returns:
        List of songs in file order

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If a JSON file has an unexpected shape
    """
    if not path.exists():
        raise FileNotFoundError(f"Base catalog not found: {path}")

    text = path.read_text(encoding="utf-8")

    if path.suffix.lower() == ".json":
        data = json.loads(text)
        if isinstance(data, dict):
            data = data.get("songs")
        if not isinstance(data, list) or not all(isinstance(s, str) for s in data):
            raise ValueError(f"Base catalog must be a list of strings: {path}")
        songs = data
    else:
        songs = text.splitlines()

    return [song.strip() for song in songs if song.strip()]
