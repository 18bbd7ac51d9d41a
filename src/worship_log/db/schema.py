"""SQL schema definitions for the Worship Log document store.

The store is a single key-value table; each value is a JSON document.
"""

# Well-known key holding the full application state
STORAGE_KEY = "worship_log_data"

# SQL to create the documents table
CREATE_DOCUMENTS_TABLE = """
CREATE TABLE IF NOT EXISTS documents (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TEXT DEFAULT (datetime('now'))
);
"""

# All schema creation statements in order
ALL_SCHEMA_STATEMENTS = [
    CREATE_DOCUMENTS_TABLE,
]

# SQL to insert or replace a document
UPSERT_DOCUMENT_QUERY = """
INSERT INTO documents (key, value, updated_at)
VALUES (?, ?, ?)
ON CONFLICT(key) DO UPDATE SET
    value = excluded.value,
    updated_at = excluded.updated_at;
"""

# SQL to fetch a document by key
SELECT_DOCUMENT_QUERY = """
SELECT value FROM documents WHERE key = ?;
"""
