"""
Service layer for generic record CRUD.

These operations act directly on the document store by id and are
independent of the form flow: they let staff browse, correct or remove
individual submissions.  Only catalog services are valid collection
names.
"""

from __future__ import annotations

import logging
from typing import List, Mapping, Optional

from ..core.exceptions import NotFoundError
from ..core.store import DocumentStore
from ..schemas.record import RecordRead
from .catalog import IDENTIFIER_FIELD, ServiceCatalog

logger = logging.getLogger(__name__)


class RecordService:
    """List, read, update and delete stored submissions."""

    def __init__(self, store: DocumentStore, catalog: ServiceCatalog) -> None:
        self.store = store
        self.catalog = catalog

    async def list_records(self, service: str, personal_number: Optional[str] = None) -> List[RecordRead]:
        """Return the records of ``service``, optionally for one patient only."""
        self.catalog.fields_for(service)
        if personal_number:
            documents = self.store.find(service, IDENTIFIER_FIELD, personal_number)
        else:
            documents = self.store.list_documents(service)
        return [RecordRead.from_document(doc) for doc in documents]

    async def get_record(self, service: str, record_id: str) -> RecordRead:
        self.catalog.fields_for(service)
        document = self.store.get(service, record_id)
        if document is None:
            raise NotFoundError("Record not found.")
        return RecordRead.from_document(document)

    async def update_record(self, service: str, record_id: str, changes: Mapping[str, str]) -> RecordRead:
        """Merge ``changes`` into a record.

        A blank ``PersonalNumber`` in ``changes`` is ignored so an edit
        can never detach a record from its patient.
        """
        self.catalog.fields_for(service)
        changes = dict(changes)
        if IDENTIFIER_FIELD in changes and not str(changes[IDENTIFIER_FIELD]).strip():
            del changes[IDENTIFIER_FIELD]
        document = self.store.update(service, record_id, changes)
        if document is None:
            raise NotFoundError("Record not found.")
        logger.info("Updated %s record %s", service, record_id)
        return RecordRead.from_document(document)

    async def delete_record(self, service: str, record_id: str) -> None:
        self.catalog.fields_for(service)
        if not self.store.delete(service, record_id):
            raise NotFoundError("Record not found.")
        logger.info("Deleted %s record %s", service, record_id)
