"""
Document store interface.

A store keeps schemaless documents grouped in named collections, the
way Firestore does.  Every service form writes to the collection named
after the service.  Backends guarantee per‑document atomicity only;
``add`` always creates a new document (no upsert).

Backends:

* ``sqlite`` – :class:`~maternity_records_api.app.core.db.SQLiteDocumentStore`
* ``firestore`` – :class:`~maternity_records_api.app.core.firestore.FirestoreDocumentStore`

All backends raise :class:`~maternity_records_api.app.core.exceptions.StoreError`
when the underlying driver fails.
"""

from __future__ import annotations

import abc
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from .config import Settings
from .exceptions import ConfigurationError


@dataclass
class Document:
    """A stored document: its id, collection and field data."""

    id: str
    collection: str
    data: Dict[str, Any] = field(default_factory=dict)


class DocumentStore(abc.ABC):
    """Abstract collection‑oriented store."""

    @abc.abstractmethod
    def add(self, collection: str, data: Mapping[str, Any]) -> Document:
        """Create a new document with a generated id."""

    @abc.abstractmethod
    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        """Return the document or ``None`` if it does not exist."""

    @abc.abstractmethod
    def find(self, collection: str, field_name: str, value: Any, limit: Optional[int] = None) -> List[Document]:
        """Return documents whose ``field_name`` equals ``value``, oldest first."""

    @abc.abstractmethod
    def list_documents(self, collection: str, limit: Optional[int] = None) -> List[Document]:
        """Return all documents of a collection, oldest first."""

    @abc.abstractmethod
    def update(self, collection: str, doc_id: str, changes: Mapping[str, Any]) -> Optional[Document]:
        """Merge ``changes`` into a document; ``None`` if it does not exist."""

    @abc.abstractmethod
    def delete(self, collection: str, doc_id: str) -> bool:
        """Delete a document; ``False`` if it did not exist."""

    def find_first(self, collection: str, field_name: str, value: Any) -> Optional[Document]:
        docs = self.find(collection, field_name, value, limit=1)
        return docs[0] if docs else None


def build_store(app_settings: Settings) -> DocumentStore:
    """Create the store selected by ``STORE_BACKEND``."""
    backend = app_settings.store_backend
    if backend == "sqlite":
        from .db import SQLiteDocumentStore, get_database_path

        store = SQLiteDocumentStore(get_database_path(app_settings.database_url))
        store.init_db()
        return store
    if backend == "firestore":
        from .firestore import FirestoreDocumentStore

        return FirestoreDocumentStore.from_settings(app_settings)
    raise ConfigurationError(f"Unknown STORE_BACKEND {backend!r}; expected 'sqlite' or 'firestore'")
