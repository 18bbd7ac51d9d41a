"""Application state for worship-log.

AppState is the single owner of the service history and the custom song
list. It applies one mutation at a time, saves the full document to the
store after each one, and hands snapshots to the analytics functions.
"""

import json
from datetime import date, datetime
from typing import Any, Optional, Union

from worship_log.core.backup import BackupData, BackupError, export_backup, import_backup
from worship_log.core.catalog import DEFAULT_MARKER, build_catalog, register_song
from worship_log.core.draft import AddResult, Draft
from worship_log.core.recency import DEFAULT_THRESHOLD_DAYS, RecencyResult, check_recency
from worship_log.core.records import RecordStore
from worship_log.core.stats import SongStat, StatsCache
from worship_log.db.models import ServiceRecord
from worship_log.db.schema import STORAGE_KEY
from worship_log.db.store import DocumentStore
from worship_log.logging_config import get_logger

logger = get_logger(__name__)


class AppState:
    """Explicit container for all mutable application state.

    Attributes:
        store: Persistent document store (None keeps state in memory only)
        base_catalog: Fixed base song list
        marker: Marker prefix for the secondary collection
        recency_days: Recency window used when adding songs to a draft
        records: Service record collection
        custom_songs: Songs registered by the operator
    """

    def __init__(
        self,
        store: Optional[DocumentStore] = None,
        base_catalog: Optional[list[str]] = None,
        marker: str = DEFAULT_MARKER,
        recency_days: int = DEFAULT_THRESHOLD_DAYS,
    ):
        self.store = store
        self.base_catalog = list(base_catalog or [])
        self.marker = marker
        self.recency_days = recency_days

        self.records = RecordStore()
        self.custom_songs: list[str] = []

        self._stats_cache = StatsCache()
        self._catalog: Optional[list[str]] = None

    # Persistence

    def load(self) -> None:
        """Load state from the store.

        A missing document leaves the state empty. An unreadable document is
        logged and also leaves the state empty.
        """
        if self.store is None:
            return

        self.store.initialize_schema()
        try:
            document = self.store.get(STORAGE_KEY)
            if document is None:
                logger.info("No saved data found; starting empty")
                return
            data = import_backup(document)
        except (json.JSONDecodeError, BackupError) as e:
            logger.error(f"Failed to load saved data: {e}")
            return

        self._apply(data)
        logger.info(
            f"Loaded {len(data.records)} services and {len(data.custom_songs)} custom songs"
        )

    def save(self) -> None:
        """Save the full state document to the store."""
        if self.store is None:
            return
        self.store.put(STORAGE_KEY, self.to_document())

    def to_document(self) -> dict[str, Any]:
        """Get the full state as a backup document."""
        return export_backup(self.records.all(), self.custom_songs)

    def _apply(self, data: BackupData) -> None:
        self.records.replace_all(data.records)
        self.custom_songs = list(data.custom_songs)
        self._catalog = None

    # Derived views

    @property
    def catalog(self) -> list[str]:
        """Merged, sorted catalog of base and custom songs."""
        if self._catalog is None:
            self._catalog = build_catalog(self.base_catalog, self.custom_songs, self.marker)
        return self._catalog

    @property
    def stats(self) -> dict[str, SongStat]:
        """Per-song statistics for the current history."""
        return self._stats_cache.get(self.records.version, self.records.all())

    # Catalog

    def register_song(self, song: str) -> bool:
        """Register a song in the custom list if it is not yet known.

        Returns:
            True if the song was added
        """
        custom = register_song(self.catalog, self.custom_songs, song)
        if len(custom) == len(self.custom_songs):
            return False

        self.custom_songs = custom
        self._catalog = None
        logger.info(f"Registered new song: {song.strip()}")
        self.save()
        return True

    # Records

    def add_record(self, record: ServiceRecord) -> ServiceRecord:
        """Store a finished service.

        Returns:
            The stored record with its assigned ID
        """
        stored = self.records.add(record)
        logger.info(f"Added service {stored.id} on {stored.date} with {len(stored.songs)} songs")
        self.save()
        return stored

    def update_record(self, record_id: str, record: ServiceRecord) -> bool:
        """Replace a stored service.

        Returns:
            True if updated, False if no record has that ID
        """
        updated = self.records.update(record_id, record)
        if updated:
            logger.info(f"Updated service {record_id}")
            self.save()
        else:
            logger.debug(f"Update ignored, service not found: {record_id}")
        return updated

    def delete_record(self, record_id: str) -> bool:
        """Delete a stored service.

        Returns:
            True if deleted, False if no record has that ID
        """
        removed = self.records.remove(record_id)
        if removed:
            logger.info(f"Deleted service {record_id}")
            self.save()
        else:
            logger.debug(f"Delete ignored, service not found: {record_id}")
        return removed

    def clear_records(self) -> None:
        """Delete the whole service history."""
        count = len(self.records)
        self.records.clear()
        logger.warning(f"Cleared {count} services from history")
        self.save()

    def restore(self, document: Union[str, bytes, dict[str, Any]]) -> BackupData:
        """Replace all state with a backup document.

        The current state is untouched if the document is invalid.

        Raises:
            BackupError: If the document fails validation
        """
        data = import_backup(document)
        self._apply(data)
        logger.info(
            f"Restored {len(data.records)} services and {len(data.custom_songs)} custom songs"
        )
        self.save()
        return data

    # Draft workflow

    def check_song(self, song: str, today: Optional[Union[date, datetime]] = None) -> RecencyResult:
        """Check whether a song was sung within the recency window."""
        return check_recency(song.strip(), self.stats, today or date.today(), self.recency_days)

    def add_to_draft(
        self,
        draft: Draft,
        song: str,
        today: Optional[Union[date, datetime]] = None,
        force: bool = False,
    ) -> AddResult:
        """Add a song to a draft, registering it first when unknown.

        Args:
            draft: Draft being assembled
            song: Song to add
            today: Reference day for the recency check
            force: Add even if the song was sung recently

        Returns:
            AddResult from the draft
        """
        if song.strip() and song.strip() not in self.catalog:
            self.register_song(song)

        return draft.add_song(
            song,
            self.stats,
            today=today,
            threshold_days=self.recency_days,
            force=force,
        )
