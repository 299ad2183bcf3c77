"""
Service layer for form submissions.

A submission is accepted in a fixed sequence:

1. the service must exist in the catalog (404 otherwise);
2. a personal number must be present (400 otherwise);
3. the routing decision is computed, so a service outside the flow is
   rejected before anything is written;
4. the record, tagged with ``PersonalNumber``, is added to the
   collection named after the service;
5. the decision is returned to the caller, who redirects.

Store failures propagate as ``StoreError``; nothing is retried and a
record already written is never rolled back.
"""

from __future__ import annotations

import logging
from typing import Mapping, Optional, Tuple

from ..core.exceptions import UnknownServiceError, ValidationError
from ..core.store import Document, DocumentStore
from .catalog import IDENTIFIER_FIELD, REGISTRATION, ServiceCatalog
from .flow_service import FlowDecision, FormFlowController, UnknownService

logger = logging.getLogger(__name__)

# Hidden form field carrying the identifier between service forms.
TRANSPORT_FIELD = "personalNumber"


def resolve_personal_number(form: Mapping[str, str], query_value: Optional[str] = None) -> Optional[str]:
    """Pick the patient identifier of a submission.

    Looked up in the hidden ``personalNumber`` field, then the
    ``PersonalNumber`` form field, then the query string.  Blank values
    are skipped; the chosen value is returned exactly as given.
    """
    for candidate in (form.get(TRANSPORT_FIELD), form.get(IDENTIFIER_FIELD), query_value):
        if candidate is not None and str(candidate).strip():
            return str(candidate)
    return None


class SubmissionService:
    """Stores service form submissions and routes to the next form."""

    def __init__(self, store: DocumentStore, catalog: ServiceCatalog, flow: FormFlowController) -> None:
        self.store = store
        self.catalog = catalog
        self.flow = flow

    async def submit(
        self,
        service: str,
        form: Mapping[str, str],
        query_personal_number: Optional[str] = None,
    ) -> Tuple[Document, FlowDecision]:
        """Store one submission for ``service`` and return the next step."""
        self.catalog.fields_for(service)

        personal_number = resolve_personal_number(form, query_personal_number)
        if personal_number is None:
            if service == REGISTRATION:
                raise ValidationError("Personal Number is required.")
            raise ValidationError("Missing Personal Number.")

        decision = self.flow.advance(service, personal_number)
        if isinstance(decision, UnknownService):
            raise UnknownServiceError(service, f"{service} is not part of the patient workflow.")

        record = {key: value for key, value in form.items() if key != TRANSPORT_FIELD}
        record[IDENTIFIER_FIELD] = personal_number

        document = self.store.add(service, record)
        logger.info("Stored %s record %s for patient %s", service, document.id, personal_number)
        return document, decision
