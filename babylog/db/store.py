"""SQLite document store for raw entry documents.

Documents are stored exactly as written, at whatever schema version they
carry. Migration happens on read, in the pipeline, never here.
"""

import json
import sqlite3
from datetime import date, datetime
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional


def _json_default(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class EntryStore:
    """SQLite-based store for entry documents."""

    REQUIRED_TABLES = ["entries"]

    def __init__(self, db_path: Path):
        """Initialize the store.

        Args:
            db_path: Path to the SQLite database file.
        """
        self.db_path = db_path
        self._ensure_db_dir()
        self._init_schema()

    def _ensure_db_dir(self) -> None:
        """Ensure the database directory exists."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _get_connection(self) -> sqlite3.Connection:
        """Get a database connection."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_schema(self) -> None:
        """Initialize database schema on first run."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS entries (
                    id TEXT PRIMARY KEY,
                    baby_id TEXT,
                    doc TEXT NOT NULL
                )
            """)
            cursor.execute(
                "CREATE INDEX IF NOT EXISTS idx_entries_baby ON entries (baby_id)"
            )
            conn.commit()
        finally:
            conn.close()

    def get_tables(self) -> list[str]:
        """Get list of all tables in the database."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%'"
            )
            return [row["name"] for row in cursor.fetchall()]
        finally:
            conn.close()

    @staticmethod
    def _row_values(doc: Mapping[str, Any]) -> tuple[str, Optional[str], str]:
        if not isinstance(doc, Mapping):
            raise ValueError(f"Entry document must be an object, got {type(doc).__name__}")
        doc_id = doc.get("id")
        if not isinstance(doc_id, str) or not doc_id:
            raise ValueError(f"Entry document needs a string 'id', got {doc_id!r}")
        baby_id = doc.get("babyId")
        return (
            doc_id,
            str(baby_id) if baby_id is not None else None,
            json.dumps(dict(doc), default=_json_default),
        )

    def put_entry(self, doc: Mapping[str, Any]) -> None:
        """Insert or replace one document.

        Raises:
            ValueError: If the document is not an object or has no string ``id``.
        """
        self.put_entries([doc])

    def put_entries(self, docs: Iterable[Mapping[str, Any]]) -> int:
        """Insert or replace documents. Returns how many were written."""
        rows = [self._row_values(doc) for doc in docs]
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.executemany(
                "INSERT OR REPLACE INTO entries (id, baby_id, doc) VALUES (?, ?, ?)",
                rows,
            )
            conn.commit()
        finally:
            conn.close()
        return len(rows)

    def get_entry(self, entry_id: str) -> Optional[dict[str, Any]]:
        """Get one document by ID, or None if absent."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("SELECT doc FROM entries WHERE id = ?", (entry_id,))
            row = cursor.fetchone()
            return json.loads(row["doc"]) if row else None
        finally:
            conn.close()

    def list_entries(self, baby_id: Optional[str] = None) -> list[dict[str, Any]]:
        """Get all documents, optionally only one child's.

        Args:
            baby_id: Optional child filter. If None, returns every document.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            if baby_id:
                cursor.execute(
                    "SELECT doc FROM entries WHERE baby_id = ? ORDER BY id", (baby_id,)
                )
            else:
                cursor.execute("SELECT doc FROM entries ORDER BY id")
            return [json.loads(row["doc"]) for row in cursor.fetchall()]
        finally:
            conn.close()

    def delete_entry(self, entry_id: str) -> bool:
        """Delete a document. Returns True if it existed."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM entries WHERE id = ?", (entry_id,))
            conn.commit()
            return cursor.rowcount > 0
        finally:
            conn.close()
