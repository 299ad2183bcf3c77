"""
Firestore document store.

Uses the Firebase Admin SDK, as the hosted deployment of the service
does.  The Admin app is initialised from the credentials returned by
:func:`~maternity_records_api.app.core.credentials.resolve_credentials`
and the ``FIREBASE_DB_URL`` setting.

Firestore orders auto‑generated ids randomly, so results of ``find``
and ``list_documents`` come back in the backend's natural order rather
than by insertion time.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

import firebase_admin
from firebase_admin import credentials, firestore
from google.api_core import exceptions as google_exceptions
from google.cloud.firestore_v1.base_query import FieldFilter

from .config import Settings
from .credentials import resolve_credentials
from .exceptions import StoreError
from .store import Document, DocumentStore

logger = logging.getLogger(__name__)

FIREBASE_APP_NAME = "maternity-records"


class FirestoreDocumentStore(DocumentStore):
    """Document store backed by a Firestore client."""

    def __init__(self, client: Any) -> None:
        self._client = client

    @classmethod
    def from_settings(cls, app_settings: Settings) -> "FirestoreDocumentStore":
        """Initialise the Firebase Admin app (once) and return a store."""
        try:
            app = firebase_admin.get_app(FIREBASE_APP_NAME)
        except ValueError:
            cert = credentials.Certificate(resolve_credentials(app_settings))
            app = firebase_admin.initialize_app(
                cert,
                {"databaseURL": app_settings.firebase_db_url},
                name=FIREBASE_APP_NAME,
            )
            logger.info("Initialised Firebase app for %s", app_settings.firebase_db_url)
        return cls(firestore.client(app))

    @staticmethod
    def _snapshot_to_document(collection: str, snapshot: Any) -> Document:
        return Document(id=snapshot.id, collection=collection, data=snapshot.to_dict() or {})

    def add(self, collection: str, data: Mapping[str, Any]) -> Document:
        payload: Dict[str, Any] = dict(data)
        try:
            _, ref = self._client.collection(collection).add(payload)
        except google_exceptions.GoogleAPIError as exc:
            raise StoreError(f"Failed to add document to {collection}: {exc}") from exc
        return Document(id=ref.id, collection=collection, data=payload)

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        try:
            snapshot = self._client.collection(collection).document(doc_id).get()
        except google_exceptions.GoogleAPIError as exc:
            raise StoreError(f"Failed to read {collection}/{doc_id}: {exc}") from exc
        if not snapshot.exists:
            return None
        return self._snapshot_to_document(collection, snapshot)

    def find(self, collection: str, field_name: str, value: Any, limit: Optional[int] = None) -> List[Document]:
        query = self._client.collection(collection).where(filter=FieldFilter(field_name, "==", value))
        if limit is not None:
            query = query.limit(limit)
        try:
            return [self._snapshot_to_document(collection, snap) for snap in query.stream()]
        except google_exceptions.GoogleAPIError as exc:
            raise StoreError(f"Failed to query {collection} by {field_name}: {exc}") from exc

    def list_documents(self, collection: str, limit: Optional[int] = None) -> List[Document]:
        query = self._client.collection(collection)
        if limit is not None:
            query = query.limit(limit)
        try:
            return [self._snapshot_to_document(collection, snap) for snap in query.stream()]
        except google_exceptions.GoogleAPIError as exc:
            raise StoreError(f"Failed to list {collection}: {exc}") from exc

    def update(self, collection: str, doc_id: str, changes: Mapping[str, Any]) -> Optional[Document]:
        ref = self._client.collection(collection).document(doc_id)
        try:
            snapshot = ref.get()
            if not snapshot.exists:
                return None
            ref.update(dict(changes))
        except google_exceptions.GoogleAPIError as exc:
            raise StoreError(f"Failed to update {collection}/{doc_id}: {exc}") from exc
        data = snapshot.to_dict() or {}
        data.update(changes)
        return Document(id=doc_id, collection=collection, data=data)

    def delete(self, collection: str, doc_id: str) -> bool:
        ref = self._client.collection(collection).document(doc_id)
        try:
            if not ref.get().exists:
                return False
            ref.delete()
        except google_exceptions.GoogleAPIError as exc:
            raise StoreError(f"Failed to delete {collection}/{doc_id}: {exc}") from exc
        return True
