"""In-memory collection of service records.

RecordStore is the system of record for what was sung when. Callers get
snapshots; the store never hands out its internal list.
"""

from dataclasses import replace
from typing import Iterable, Optional

from worship_log.db.models import ServiceRecord


class RecordStore:
    """Ordered collection of service records, newest additions first.

    Attributes:
        version: Counter bumped on every mutation, usable as a cache key
    """

    def __init__(self, records: Optional[Iterable[ServiceRecord]] = None):
        """Initialize the store.

        Args:
            records: Initial records, kept as given (ids are not reassigned)
        """
        self._records: list[ServiceRecord] = list(records or [])
        self.version = 0

    def __len__(self) -> int:
        return len(self._records)

    def add(self, record: ServiceRecord) -> ServiceRecord:
        """Add a record under a fresh identifier.

        Args:
            record: Record to add; its id is replaced

        Returns:
            The stored record
        """
        stored = replace(record, id=ServiceRecord.generate_id(), songs=list(record.songs))
        self._records.insert(0, stored)
        self.version += 1
        return stored

    def update(self, record_id: str, record: ServiceRecord) -> bool:
        """Replace a whole record, keeping its identifier.

        Args:
            record_id: ID of the record to replace
            record: New record contents

        Returns:
            True if replaced, False if no record has that ID
        """
        for i, existing in enumerate(self._records):
            if existing.id == record_id:
                self._records[i] = replace(record, id=record_id, songs=list(record.songs))
                self.version += 1
                return True
        return False

    def remove(self, record_id: str) -> bool:
        """Remove a record.

        Args:
            record_id: ID of the record to remove

        Returns:
            True if removed, False if no record has that ID
        """
        remaining = [r for r in self._records if r.id != record_id]
        if len(remaining) == len(self._records):
            return False
        self._records = remaining
        self.version += 1
        return True

    def clear(self) -> None:
        """Remove all records."""
        self._records = []
        self.version += 1

    def replace_all(self, records: Iterable[ServiceRecord]) -> None:
        """Replace the whole collection (used when restoring a backup)."""
        self._records = list(records)
        self.version += 1

    def all(self) -> list[ServiceRecord]:
        """Get a snapshot of all records in storage order."""
        return list(self._records)

    def get(self, record_id: str) -> Optional[ServiceRecord]:
        """Get a record by ID.

        Args:
            record_id: Record ID to look up

        Returns:
            ServiceRecord if found, None otherwise
        """
        for record in self._records:
            if record.id == record_id:
                return record
        return None

    def sorted_by_date(self) -> list[ServiceRecord]:
        """Get all records, most recent date first."""
        return sorted(self._records, key=lambda r: r.date, reverse=True)

    def search(self, term: str) -> list[ServiceRecord]:
        """Search records by date, period label or song.

        Args:
            term: Search text; blank returns every record

        Returns:
            Matching records, most recent date first
        """
        records = self.sorted_by_date()
        search = term.strip().lower()
        if not search:
            return records

        return [
            r
            for r in records
            if search in r.date
            or search in r.description.lower()
            or any(search in song.lower() for song in r.songs)
        ]
