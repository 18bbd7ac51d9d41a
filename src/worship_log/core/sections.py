"""Never-sung songs grouped into numbered catalog sections.

Sections are named inclusive ranges over the number a song title starts
with (after the marker prefix, for marked songs). Primary and marked
collections have their own section lists.
"""

import math
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional

import tomllib

from worship_log.core.catalog import DEFAULT_MARKER, is_marked
from worship_log.db.models import ServiceRecord

_LEADING_NUMBER = re.compile(r"^\s*(\d+)")


@dataclass(frozen=True)
class CatalogSection:
    """Named numeric range used to group catalog entries."""

    name: str
    min: int
    max: int

    def contains(self, number: int) -> bool:
        return self.min <= number <= self.max


@dataclass(frozen=True)
class SectionConfig:
    """Section lists for the primary and marked collections."""

    primary: tuple[CatalogSection, ...] = ()
    marked: tuple[CatalogSection, ...] = ()


DEFAULT_SECTIONS = SectionConfig(
    primary=(
        CatalogSection("1-100", 1, 100),
        CatalogSection("101-200", 101, 200),
        CatalogSection("201-300", 201, 300),
        CatalogSection("301-400", 301, 400),
        CatalogSection("401-500", 401, 500),
        CatalogSection("501-600", 501, 600),
    ),
    marked=(
        CatalogSection("CIAS 1-50", 1, 50),
        CatalogSection("CIAS 51-100", 51, 100),
        CatalogSection("CIAS 101-150", 101, 150),
    ),
)


@dataclass
class SectionGroup:
    """Unplayed songs that fall into one section."""

    section: CatalogSection
    songs: list[str] = field(default_factory=list)


@dataclass
class CollectionSummary:
    """Unplayed songs and completion figures for one collection.

    Attributes:
        total: Songs in the whole collection
        unplayed: Songs in the whole collection never sung
        percent_complete: Rounded share of the collection already sung
        groups: Filtered unplayed songs per section, in section order
        unsectioned: Filtered unplayed songs outside every section
    """

    total: int = 0
    unplayed: int = 0
    percent_complete: int = 0
    groups: list[SectionGroup] = field(default_factory=list)
    unsectioned: list[str] = field(default_factory=list)

    @property
    def visible_songs(self) -> list[str]:
        """All filtered unplayed songs, sectioned first."""
        songs = [song for group in self.groups for song in group.songs]
        return songs + self.unsectioned


@dataclass
class CategorizedResult:
    """Unplayed songs for both collections."""

    primary: CollectionSummary
    marked: CollectionSummary


def leading_number(song: str, marker: str = DEFAULT_MARKER) -> Optional[int]:
    """Extract the number a song title starts with.

    Args:
        song: Song display string
        marker: Marker prefix, skipped for marked songs

    Returns:
        Leading number, or None if the title doesn't start with one
    """
    title = song[len(marker):] if is_marked(song, marker) else song
    match = _LEADING_NUMBER.match(title)
    if not match:
        return None
    return int(match.group(1))


def percent_complete(total: int, unplayed: int) -> int:
    """Rounded percentage of a collection already sung (0 for empty)."""
    if total == 0:
        return 0
    return math.floor((total - unplayed) / total * 100 + 0.5)


def played_songs(records: Iterable[ServiceRecord]) -> set[str]:
    """Set of every song sung in any record, trimmed."""
    return {song.strip() for record in records for song in record.songs}


def _summarize(
    songs: list[str],
    played: set[str],
    sections: Iterable[CatalogSection],
    search: str,
    marker: str,
) -> CollectionSummary:
    unplayed = [song for song in songs if song.strip() not in played]
    summary = CollectionSummary(
        total=len(songs),
        unplayed=len(unplayed),
        percent_complete=percent_complete(len(songs), len(unplayed)),
        groups=[SectionGroup(section=section) for section in sections],
    )

    for song in unplayed:
        if search and search not in song.lower():
            continue

        number = leading_number(song, marker)
        group = None
        if number is not None:
            group = next((g for g in summary.groups if g.section.contains(number)), None)

        if group is None:
            summary.unsectioned.append(song)
        else:
            group.songs.append(song)

    return summary


def categorize(
    catalog: list[str],
    records: Iterable[ServiceRecord],
    sections: SectionConfig = DEFAULT_SECTIONS,
    query: Optional[str] = None,
    marker: str = DEFAULT_MARKER,
) -> CategorizedResult:
    """Group never-sung songs by collection and section.

    Totals and percentages always cover the whole collection; the query
    only narrows which unplayed songs are listed.

    Args:
        catalog: Sorted catalog (see build_catalog)
        records: Service history
        sections: Section ranges, applied as given
        query: Optional case-insensitive substring filter
        marker: Marker prefix for the secondary collection

    Returns:
        CategorizedResult with a summary per collection
    """
    played = played_songs(records)
    search = (query or "").strip().lower()

    primary = [song for song in catalog if not is_marked(song, marker)]
    marked = [song for song in catalog if is_marked(song, marker)]

    return CategorizedResult(
        primary=_summarize(primary, played, sections.primary, search, marker),
        marked=_summarize(marked, played, sections.marked, search, marker),
    )


def _parse_sections(entries: list, label: str) -> tuple[CatalogSection, ...]:
    if not isinstance(entries, list):
        raise ValueError(f"'{label}' must be an array of tables")

    sections = []
    for entry in entries:
        try:
            section = CatalogSection(
                name=str(entry["name"]),
                min=int(entry["min"]),
                max=int(entry["max"]),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Invalid section in '{label}': {entry!r}") from e
        if section.min > section.max:
            raise ValueError(f"Section '{section.name}' has min greater than max")
        sections.append(section)
    return tuple(sections)


def load_sections(path: Path) -> SectionConfig:
    """Load section ranges from a TOML file.

    Expected layout::

        [[primary]]
        name = "1-100"
        min = 1
        max = 100

        [[marked]]
        name = "CIAS 1-50"
        min = 1
        max = 50

    Args:
        path: Path to the sections file

    Returns:
        SectionConfig with sections in file order

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If a section is malformed
    """
    if not path.exists():
        raise FileNotFoundError(f"Sections file not found: {path}")

    with open(path, "rb") as f:
        data = tomllib.load(f)

    return SectionConfig(
        primary=_parse_sections(data.get("primary", []), "primary"),
        marked=_parse_sections(data.get("marked", []), "marked"),
    )
