"""Data models for Worship Log persisted entities.

Provides the ServiceRecord dataclass with serialization to/from the
document shape used by the persistent store and backup files.
"""

import uuid
from dataclasses import dataclass, field
from typing import Any


@dataclass
class ServiceRecord:
    """One completed service and the songs sung at it.

    Attributes:
        id: Unique record ID (UUID string)
        date: Service date as a YYYY-MM-DD string
        description: Free-text period label (e.g., "Manhã", "Noite", "Especial")
        songs: Songs in performance order; a song may repeat
    """

    id: str
    date: str
    description: str = ""
    songs: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ServiceRecord":
        """Create a ServiceRecord from a document dictionary.

        Args:
            data: Dictionary with id, date, description and songs keys

        Returns:
            ServiceRecord instance

        Raises:
            KeyError: If id or date is missing
            TypeError: If songs is not a list
        """
        songs = data.get("songs", [])
        if not isinstance(songs, list):
            raise TypeError(f"songs must be a list, got {type(songs).__name__}")

        return cls(
            id=str(data["id"]),
            date=str(data["date"]),
            description=data.get("description") or "",
            songs=[str(song) for song in songs],
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert ServiceRecord to dictionary.

        Returns:
            Dictionary representation of the record
        """
        return {
            "id": self.id,
            "date": self.date,
            "description": self.description,
            "songs": list(self.songs),
        }

    @classmethod
    def generate_id(cls) -> str:
        """Generate a new unique record ID.

        Returns:
            Unique ID string
        """
        return str(uuid.uuid4())

    @property
    def display_date(self) -> str:
        """Get the date formatted as DD/MM/YYYY."""
        return format_display_date(self.date)


def format_display_date(date_str: str) -> str:
    """Format a YYYY-MM-DD string as DD/MM/YYYY.

    Args:
        date_str: Date in YYYY-MM-DD format

    Returns:
        Date in DD/MM/YYYY format, or the input unchanged if it is not
        in the expected format
    """
    parts = date_str.split("-")
    if len(parts) != 3:
        return date_str
    year, month, day = parts
    return f"{day}/{month}/{year}"
