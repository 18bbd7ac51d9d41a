"""Detection of songs sung too recently."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Union

from worship_log.core.stats import SongStat

DEFAULT_THRESHOLD_DAYS = 30


@dataclass(frozen=True)
class RecencyResult:
    """Outcome of a recency check.

    Attributes:
        blocked: Whether the song was sung within the threshold
        days_since: Whole days since the song was last sung (set when blocked)
        last_date: Last date sung as YYYY-MM-DD (set when blocked)
    """

    blocked: bool
    days_since: Optional[int] = None
    last_date: Optional[str] = None


def parse_date(value: str) -> date:
    """Parse a YYYY-MM-DD string.

    Raises:
        ValueError: If the string is not a valid date
    """
    return datetime.strptime(value, "%Y-%m-%d").date()


def check_recency(
    song: str,
    stats: dict[str, SongStat],
    today: Union[date, datetime],
    threshold_days: int = DEFAULT_THRESHOLD_DAYS,
) -> RecencyResult:
    """Check whether a song was sung within the last threshold_days.

    Only calendar days are compared, so time of day and daylight saving
    changes never shift the result.

    Args:
        song: Candidate song
        stats: Output of compute_stats
        today: Reference day
        threshold_days: Window in days (inclusive)

    Returns:
        RecencyResult; advisory only, the caller may add the song anyway
    """
    stat = stats.get(song)
    if stat is None or not stat.last_date:
        return RecencyResult(blocked=False)

    if isinstance(today, datetime):
        today = today.date()

    days_since = abs((today - parse_date(stat.last_date)).days)
    if days_since <= threshold_days:
        return RecencyResult(blocked=True, days_since=days_since, last_date=stat.last_date)
    return RecencyResult(blocked=False)
