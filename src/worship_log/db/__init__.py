"""Persistent document storage for Worship Log."""

from worship_log.db.store import DocumentStore

__all__ = ["DocumentStore"]
