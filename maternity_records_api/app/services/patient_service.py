"""
Service layer for patient lookups.

The summary of a patient starts from the first ``PatientRegistration``
document whose ``PersonalNumber`` matches, then collects the records
stored for that patient in every service of the traversal order.  The
first service without a record is reported as the next pending one, so
an interrupted workflow can be resumed.
"""

from __future__ import annotations

import logging

from ..core.exceptions import NotFoundError, ValidationError
from ..core.store import Document, DocumentStore
from ..schemas.patient import PatientSummaryRead, ServiceRecordsRead
from ..schemas.record import RecordRead
from .catalog import IDENTIFIER_FIELD, REGISTRATION, ServiceCatalog

logger = logging.getLogger(__name__)


def check_personal_number(personal_number: str) -> str:
    # "null" is what a client sends when it lost the identifier.
    if not personal_number or not personal_number.strip() or personal_number == "null":
        raise ValidationError("Invalid Personal Number.")
    return personal_number


class PatientService:
    def __init__(self, store: DocumentStore, catalog: ServiceCatalog) -> None:
        self.store = store
        self.catalog = catalog

    async def get_registration(self, personal_number: str) -> Document:
        """Return the patient's registration document.

        Raises ``ValidationError`` for a blank or ``"null"`` identifier and
        ``NotFoundError`` when no registration matches.
        """
        personal_number = check_personal_number(personal_number)
        document = self.store.find_first(REGISTRATION, IDENTIFIER_FIELD, personal_number)
        if document is None:
            raise NotFoundError("Patient not found.")
        return document

    async def get_summary(self, personal_number: str) -> PatientSummaryRead:
        registration = await self.get_registration(personal_number)
        personal_number = check_personal_number(personal_number)

        services = []
        next_pending = None
        completed = 0
        for service in self.catalog.traversal_order():
            documents = self.store.find(service, IDENTIFIER_FIELD, personal_number)
            if documents:
                completed += 1
            elif next_pending is None:
                next_pending = service
            services.append(
                ServiceRecordsRead(service=service, records=[RecordRead.from_document(doc) for doc in documents])
            )
        logger.debug("Patient %s has %s of %s services recorded", personal_number, completed, len(services))

        return PatientSummaryRead(
            personal_number=personal_number,
            registration=RecordRead.from_document(registration),
            services=services,
            completed=completed,
            total=len(services),
            next_pending_service=next_pending,
        )
