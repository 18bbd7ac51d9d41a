"""Per-song usage statistics derived from the service history."""

from dataclasses import dataclass, field
from typing import Iterable, Optional

from worship_log.db.models import ServiceRecord


@dataclass
class SongStat:
    """Usage statistics for one song.

    Attributes:
        song: Song display string
        count: Number of occurrences across all records (repeats count)
        last_date: Most recent date sung, or None
        history: Dates sung, most recent first
    """

    song: str
    count: int = 0
    last_date: Optional[str] = None
    history: list[str] = field(default_factory=list)


def compute_stats(records: Iterable[ServiceRecord]) -> dict[str, SongStat]:
    """Aggregate per-song statistics.

    Dates are YYYY-MM-DD strings, so string order is chronological order.

    Args:
        records: Service records in any order

    Returns:
        Mapping of song to its statistics; only songs sung at least once
    """
    stats: dict[str, SongStat] = {}

    for record in records:
        for song in record.songs:
            stat = stats.get(song)
            if stat is None:
                stat = stats[song] = SongStat(song=song)
            stat.count += 1
            stat.history.append(record.date)

    for stat in stats.values():
        stat.history.sort(reverse=True)
        stat.last_date = stat.history[0] if stat.history else None

    return stats


def most_sung(stats: dict[str, SongStat], limit: int = 10) -> list[SongStat]:
    """Rank repeated songs by how often they were sung.

    Args:
        stats: Output of compute_stats
        limit: Maximum number of entries

    Returns:
        Songs sung more than once, highest count first
    """
    repeated = [stat for stat in stats.values() if stat.count > 1]
    repeated.sort(key=lambda stat: stat.count, reverse=True)
    return repeated[:limit]


class StatsCache:
    """Memoizes compute_stats by record collection version.

    Recomputing from scratch always gives the same result; the cache only
    avoids redoing it while the collection is unchanged.
    """

    def __init__(self) -> None:
        self._version: Optional[int] = None
        self._stats: dict[str, SongStat] = {}

    def get(self, version: int, records: Iterable[ServiceRecord]) -> dict[str, SongStat]:
        """Get statistics, recomputing only when the version changed.

        Args:
            version: Version of the record collection
            records: Records to aggregate on a miss

        Returns:
            Mapping of song to its statistics
        """
        if version != self._version:
            self._stats = compute_stats(records)
            self._version = version
        return self._stats

    def invalidate(self) -> None:
        """Drop the cached statistics."""
        self._version = None
        self._stats = {}
