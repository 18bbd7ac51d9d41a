"""SQLite-backed document store for Worship Log.

Holds the full application state as a single JSON document under a
well-known key. The store knows nothing about the document's contents.
"""

import json
import sqlite3
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any, Generator, Optional

from worship_log.db.schema import (
    ALL_SCHEMA_STATEMENTS,
    SELECT_DOCUMENT_QUERY,
    UPSERT_DOCUMENT_QUERY,
)
from worship_log.logging_config import get_logger

logger = get_logger(__name__)


class DocumentStore:
    """Key-value store of JSON documents.

    Attributes:
        db_path: Path to the SQLite database file
        connection: Active database connection
    """

    def __init__(self, db_path: Path):
        """Initialize the document store.

        Args:
            db_path: Path to the SQLite database file
        """
        self.db_path = db_path
        self._connection: Optional[sqlite3.Connection] = None

    @property
    def connection(self) -> sqlite3.Connection:
        """Get or create database connection.

        Returns:
            Active SQLite connection
        """
        if self._connection is None:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            self._connection = sqlite3.connect(self.db_path)
            self._connection.row_factory = sqlite3.Row

        return self._connection

    def close(self) -> None:
        """Close the database connection."""
        if self._connection:
            self._connection.close()
            self._connection = None

    def __enter__(self) -> "DocumentStore":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()

    @contextmanager
    def transaction(self) -> Generator[sqlite3.Connection, None, None]:
        """Context manager for database transactions.

        Yields:
            SQLite connection with active transaction
        """
        conn = self.connection
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise

    def initialize_schema(self) -> None:
        """Create the documents table if it doesn't exist."""
        with self.transaction() as conn:
            cursor = conn.cursor()
            for statement in ALL_SCHEMA_STATEMENTS:
                cursor.execute(statement)

    def put(self, key: str, document: Any) -> None:
        """Store a document under a key, replacing any previous value.

        Args:
            key: Document key
            document: JSON-serializable document
        """
        value = json.dumps(document, ensure_ascii=False)
        with self.transaction() as conn:
            conn.execute(UPSERT_DOCUMENT_QUERY, (key, value, datetime.now().isoformat()))
        logger.debug(f"Saved document '{key}' ({len(value)} bytes)")

    def get(self, key: str) -> Optional[Any]:
        """Get a document by key.

        Args:
            key: Document key

        Returns:
            Parsed document, or None if the key is not present

        Raises:
            json.JSONDecodeError: If the stored value is not valid JSON
        """
        cursor = self.connection.cursor()
        cursor.execute(SELECT_DOCUMENT_QUERY, (key,))
        row = cursor.fetchone()

        if row is None:
            return None
        return json.loads(row["value"])
