"""
SQLite document store and simple migration system.

This module provides the default :class:`DocumentStore` backend.  Each
document is one row of the ``documents`` table: the collection name, a
generated id and the document fields serialized as JSON text.  Field
equality queries use SQLite's built‑in ``json_extract``.

Connections are opened per operation (``get_connection``) and closed
in ``finally``; schema changes are applied by ``init_db`` from the
``MIGRATIONS`` list, whose applied versions are recorded in the
``migrations`` table.
"""

import json
import logging
import os
import sqlite3
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping, Optional

from .exceptions import StoreError
from .store import Document, DocumentStore

logger = logging.getLogger(__name__)


MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: document table
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS documents (
            id TEXT NOT NULL,
            collection TEXT NOT NULL,
            data TEXT NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            PRIMARY KEY (collection, id)
        );
        """,
    ),
    # Migration 2: every patient lookup filters a collection by PersonalNumber
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_documents_personal_number
            ON documents(collection, json_extract(data, '$.PersonalNumber'));
        """,
    ),
]


def get_database_path(database_url: str) -> str:
    """Compute the path to the SQLite database file.

    Absolute paths are used as is; relative paths are resolved against
    the project root.
    """
    if os.path.isabs(database_url):
        return database_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent  # project root
    return str((base_dir / database_url).resolve())


def get_connection(db_path: str) -> sqlite3.Connection:
    """Create and return a new SQLite connection with name‑based row access."""
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


@contextmanager
def get_cursor(db_path: str) -> Iterator[sqlite3.Cursor]:
    """Yield a cursor, commit on success and always close the connection."""
    conn = get_connection(db_path)
    try:
        yield conn.cursor()
        conn.commit()
    finally:
        conn.close()


def _json_path(field_name: str) -> str:
    # Quoted label, so names are never parsed as path syntax.
    return f'$."{field_name}"'


class SQLiteDocumentStore(DocumentStore):
    """Document store kept in a single SQLite file."""

    def __init__(self, db_path: str) -> None:
        self.db_path = db_path

    def init_db(self) -> None:
        """Create the database file if needed and apply pending migrations."""
        try:
            with get_cursor(self.db_path) as cursor:
                cursor.execute("CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)")
                cursor.execute("SELECT MAX(version) AS version FROM migrations")
                row = cursor.fetchone()
                current_version = row["version"] if row and row["version"] is not None else 0

                for version, sql in MIGRATIONS:
                    if version > current_version:
                        cursor.executescript(sql)
                        cursor.execute("INSERT INTO migrations (version) VALUES (?)", (version,))
                        current_version = version
                        logger.info("Applied migration %s to %s", version, self.db_path)
        except sqlite3.Error as exc:
            raise StoreError(f"Cannot initialise database {self.db_path}: {exc}") from exc

    @staticmethod
    def _row_to_document(row: sqlite3.Row) -> Document:
        return Document(id=row["id"], collection=row["collection"], data=json.loads(row["data"]))

    def add(self, collection: str, data: Mapping[str, Any]) -> Document:
        doc_id = uuid.uuid4().hex
        payload: Dict[str, Any] = dict(data)
        try:
            with get_cursor(self.db_path) as cursor:
                cursor.execute(
                    "INSERT INTO documents (id, collection, data) VALUES (?, ?, ?)",
                    (doc_id, collection, json.dumps(payload)),
                )
        except sqlite3.Error as exc:
            raise StoreError(f"Failed to add document to {collection}: {exc}") from exc
        return Document(id=doc_id, collection=collection, data=payload)

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        conn = get_connection(self.db_path)
        try:
            row = conn.execute(
                "SELECT * FROM documents WHERE collection = ? AND id = ?",
                (collection, doc_id),
            ).fetchone()
        except sqlite3.Error as exc:
            raise StoreError(f"Failed to read {collection}/{doc_id}: {exc}") from exc
        finally:
            conn.close()
        return self._row_to_document(row) if row else None

    def find(self, collection: str, field_name: str, value: Any, limit: Optional[int] = None) -> List[Document]:
        query = (
            "SELECT * FROM documents WHERE collection = ? AND json_extract(data, ?) = ? "
            "ORDER BY created_at ASC, rowid ASC"
        )
        params: list = [collection, _json_path(field_name), value]
        if limit is not None:
            query += " LIMIT ?"
            params.append(limit)
        conn = get_connection(self.db_path)
        try:
            rows = conn.execute(query, params).fetchall()
        except sqlite3.Error as exc:
            raise StoreError(f"Failed to query {collection} by {field_name}: {exc}") from exc
        finally:
            conn.close()
        return [self._row_to_document(row) for row in rows]

    def list_documents(self, collection: str, limit: Optional[int] = None) -> List[Document]:
        query = "SELECT * FROM documents WHERE collection = ? ORDER BY created_at ASC, rowid ASC"
        params: list = [collection]
        if limit is not None:
            query += " LIMIT ?"
            params.append(limit)
        conn = get_connection(self.db_path)
        try:
            rows = conn.execute(query, params).fetchall()
        except sqlite3.Error as exc:
            raise StoreError(f"Failed to list {collection}: {exc}") from exc
        finally:
            conn.close()
        return [self._row_to_document(row) for row in rows]

    def update(self, collection: str, doc_id: str, changes: Mapping[str, Any]) -> Optional[Document]:
        conn = get_connection(self.db_path)
        try:
            cursor = conn.cursor()
            row = cursor.execute(
                "SELECT * FROM documents WHERE collection = ? AND id = ?",
                (collection, doc_id),
            ).fetchone()
            if not row:
                return None
            data = json.loads(row["data"])
            data.update(changes)
            cursor.execute(
                """
                UPDATE documents
                SET data = ?, updated_at = CURRENT_TIMESTAMP
                WHERE collection = ? AND id = ?
                """,
                (json.dumps(data), collection, doc_id),
            )
            conn.commit()
        except sqlite3.Error as exc:
            raise StoreError(f"Failed to update {collection}/{doc_id}: {exc}") from exc
        finally:
            conn.close()
        return Document(id=doc_id, collection=collection, data=data)

    def delete(self, collection: str, doc_id: str) -> bool:
        try:
            with get_cursor(self.db_path) as cursor:
                cursor.execute(
                    "DELETE FROM documents WHERE collection = ? AND id = ?",
                    (collection, doc_id),
                )
                affected = cursor.rowcount
        except sqlite3.Error as exc:
            raise StoreError(f"Failed to delete {collection}/{doc_id}: {exc}") from exc
        return affected > 0
