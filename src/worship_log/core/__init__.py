"""Catalog and service-history analytics for Worship Log."""

from worship_log.core.catalog import DEFAULT_MARKER, build_catalog, is_marked
from worship_log.core.records import RecordStore
from worship_log.core.stats import SongStat, compute_stats

__all__ = [
    "DEFAULT_MARKER",
    "build_catalog",
    "is_marked",
    "RecordStore",
    "SongStat",
    "compute_stats",
]
