"""Export and import of the full Worship Log state.

A backup document is exactly ``{"history": [...], "customSongs": [...]}``.
The same shape is stored in the persistent document store.
"""

import json
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Union

from worship_log.core.recency import parse_date
from worship_log.db.models import ServiceRecord


class BackupError(ValueError):
    """Raised when a backup document fails validation."""


@dataclass
class BackupData:
    """Contents of a validated backup document."""

    records: list[ServiceRecord] = field(default_factory=list)
    custom_songs: list[str] = field(default_factory=list)


def export_backup(records: list[ServiceRecord], custom_songs: list[str]) -> dict[str, Any]:
    """Build the backup document.

    Args:
        records: Service records, in the order to preserve
        custom_songs: Songs registered by the operator

    Returns:
        Document with history and customSongs keys
    """
    return {
        "history": [record.to_dict() for record in records],
        "customSongs": list(custom_songs),
    }


def dumps_backup(records: list[ServiceRecord], custom_songs: list[str]) -> str:
    """Serialize the backup document as pretty-printed JSON."""
    return json.dumps(export_backup(records, custom_songs), indent=2, ensure_ascii=False)


def import_backup(document: Union[str, bytes, dict[str, Any]]) -> BackupData:
    """Validate and decode a backup document.

    Args:
        document: JSON text or an already-parsed document

    Returns:
        BackupData with records and custom songs

    Raises:
        BackupError: If the document is not valid JSON or has the wrong shape
    """
    if isinstance(document, (str, bytes)):
        try:
            document = json.loads(document)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise BackupError(f"Backup is not valid JSON: {e}") from e

    if not isinstance(document, dict):
        raise BackupError("Backup must be a JSON object")

    history = document.get("history")
    if not isinstance(history, list):
        raise BackupError("Backup is missing a 'history' list")

    custom_songs = document.get("customSongs")
    if custom_songs is None:
        custom_songs = []
    if not isinstance(custom_songs, list) or not all(isinstance(s, str) for s in custom_songs):
        raise BackupError("'customSongs' must be a list of strings")

    records = []
    for index, entry in enumerate(history):
        if not isinstance(entry, dict):
            raise BackupError(f"History entry {index} is not an object")
        try:
            record = ServiceRecord.from_dict(entry)
        except (KeyError, TypeError) as e:
            raise BackupError(f"History entry {index} is invalid: {e}") from e

        try:
            parse_date(record.date)
        except ValueError as e:
            raise BackupError(f"History entry {index} has an invalid date: {record.date}") from e
        records.append(record)

    return BackupData(records=records, custom_songs=list(custom_songs))


def backup_filename(context: str, day: date) -> str:
    """Get the file name for a backup taken on a given day.

    Args:
        context: Short name of the congregation or installation
        day: Day of the backup

    Returns:
        File name like backup_igreja_2024-02-20.json
    """
    return f"backup_{context}_{day.isoformat()}.json"
