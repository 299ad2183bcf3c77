"""
Service endpoints for API v1.

These routes expose the catalog and the records stored per service.
Submitting a record runs the same sequence as the HTML forms (identifier
check, store write, routing decision) and returns the decision in the
response body instead of redirecting.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from maternity_records_api.app.api.deps import get_catalog, get_record_service, get_submission_service
from maternity_records_api.app.schemas.record import RecordCreate, RecordRead, RecordUpdate, SubmissionRead
from maternity_records_api.app.schemas.service import FlowDecisionRead, ServiceDefinitionRead
from maternity_records_api.app.services.catalog import IDENTIFIER_FIELD, ServiceCatalog
from maternity_records_api.app.services.record_service import RecordService
from maternity_records_api.app.services.submission_service import TRANSPORT_FIELD, SubmissionService

router = APIRouter()


def _definition(catalog: ServiceCatalog, name: str) -> ServiceDefinitionRead:
    position = catalog.position(name)
    return ServiceDefinitionRead(
        name=name,
        fields=list(catalog.fields_for(name)),
        position=position if position >= 0 else None,
    )


@router.get("/", response_model=List[ServiceDefinitionRead])
async def list_services(catalog: ServiceCatalog = Depends(get_catalog)) -> List[ServiceDefinitionRead]:
    """Return every service definition, registration first."""
    return [_definition(catalog, name) for name in catalog.names()]


@router.get("/order", response_model=List[str])
async def get_service_order(catalog: ServiceCatalog = Depends(get_catalog)) -> List[str]:
    """Return the order in which services follow registration."""
    return list(catalog.traversal_order())


@router.get("/{service}", response_model=ServiceDefinitionRead)
async def get_service(service: str, catalog: ServiceCatalog = Depends(get_catalog)) -> ServiceDefinitionRead:
    """Return one service definition; 404 for unknown names."""
    return _definition(catalog, service)


@router.post("/{service}/records", response_model=SubmissionRead, status_code=status.HTTP_201_CREATED)
async def create_record(
    service: str,
    record_in: RecordCreate,
    submissions: SubmissionService = Depends(get_submission_service),
) -> SubmissionRead:
    """Store a submission and return it with the next step of the flow.

    Returns HTTP 400 when neither ``personal_number`` nor
    ``data.PersonalNumber`` is given; nothing is stored in that case.
    """
    form = dict(record_in.data)
    if record_in.personal_number:
        # The explicit identifier wins over anything carried in ``data``.
        form.pop(TRANSPORT_FIELD, None)
        form[IDENTIFIER_FIELD] = record_in.personal_number
    document, decision = await submissions.submit(service, form)
    return SubmissionRead(record=RecordRead.from_document(document), next=FlowDecisionRead.from_decision(decision))


@router.get("/{service}/records", response_model=List[RecordRead])
async def list_records(
    service: str,
    personal_number: Optional[str] = Query(None),
    records: RecordService = Depends(get_record_service),
) -> List[RecordRead]:
    return await records.list_records(service, personal_number)


@router.get("/{service}/records/{record_id}", response_model=RecordRead)
async def get_record(
    service: str,
    record_id: str,
    records: RecordService = Depends(get_record_service),
) -> RecordRead:
    return await records.get_record(service, record_id)


@router.put("/{service}/records/{record_id}", response_model=RecordRead)
async def update_record(
    service: str,
    record_id: str,
    record_in: RecordUpdate,
    records: RecordService = Depends(get_record_service),
) -> RecordRead:
    """Merge the given fields into a stored record."""
    return await records.update_record(service, record_id, record_in.data)


@router.delete("/{service}/records/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_record(
    service: str,
    record_id: str,
    records: RecordService = Depends(get_record_service),
) -> None:
    await records.delete_record(service, record_id)
    return None
