"""In-progress service being assembled before it is saved."""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional, Union

from worship_log.core.recency import (
    DEFAULT_THRESHOLD_DAYS,
    RecencyResult,
    check_recency,
    parse_date,
)
from worship_log.core.stats import SongStat
from worship_log.db.models import ServiceRecord

PERIODS = ("Manhã", "Noite", "Especial")


class DraftError(ValueError):
    """Raised when a draft cannot be turned into a record."""


@dataclass(frozen=True)
class AddResult:
    """Outcome of adding a song to a draft.

    Attributes:
        song: Trimmed song name
        added: Whether the song was appended
        recency: Recency check result; blocked means confirmation is needed
    """

    song: str
    added: bool
    recency: RecencyResult = RecencyResult(blocked=False)

    @property
    def needs_confirmation(self) -> bool:
        return not self.added and self.recency.blocked


@dataclass
class Draft:
    """Unsaved service record.

    Attributes:
        date: Service date as YYYY-MM-DD
        description: Period label
        songs: Songs added so far, in order
    """

    date: str = field(default_factory=lambda: date.today().isoformat())
    description: str = PERIODS[0]
    songs: list[str] = field(default_factory=list)

    def add_song(
        self,
        song: str,
        stats: dict[str, SongStat],
        today: Optional[Union[date, datetime]] = None,
        threshold_days: int = DEFAULT_THRESHOLD_DAYS,
        force: bool = False,
    ) -> AddResult:
        """Add a song unless it was sung too recently.

        Args:
            song: Song to add (trimmed before use)
            stats: Output of compute_stats
            today: Reference day for the recency check (defaults to today)
            threshold_days: Recency window in days
            force: Add even when the song was sung recently

        Returns:
            AddResult describing what happened
        """
        name = song.strip()
        if not name:
            return AddResult(song=name, added=False)

        recency = check_recency(name, stats, today or date.today(), threshold_days)
        if recency.blocked and not force:
            return AddResult(song=name, added=False, recency=recency)

        self.songs.append(name)
        return AddResult(song=name, added=True, recency=recency)

    def remove_song(self, index: int) -> str:
        """Remove the song at a position.

        Raises:
            IndexError: If the position is out of range
        """
        return self.songs.pop(index)

    def finalize(self) -> ServiceRecord:
        """Build the service record for this draft.

        Returns:
            ServiceRecord with a fresh ID

        Raises:
            DraftError: If the draft has no songs or an invalid date
        """
        if not self.songs:
            raise DraftError("Cannot save a service without songs")
        try:
            parse_date(self.date)
        except ValueError as e:
            raise DraftError(f"Invalid service date: {self.date}") from e

        return ServiceRecord(
            id=ServiceRecord.generate_id(),
            date=self.date,
            description=self.description,
            songs=list(self.songs),
        )
