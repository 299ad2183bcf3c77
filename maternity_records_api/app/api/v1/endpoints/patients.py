"""
Patient endpoints for API v1.
"""

from fastapi import APIRouter, Depends

from maternity_records_api.app.api.deps import get_patient_service
from maternity_records_api.app.schemas.patient import PatientSummaryRead
from maternity_records_api.app.services.patient_service import PatientService

router = APIRouter()


@router.get("/{personal_number:path}", response_model=PatientSummaryRead)
async def get_patient(
    personal_number: str,
    patients: PatientService = Depends(get_patient_service),
) -> PatientSummaryRead:
    """Return the registration and all service records of a patient.

    HTTP 400 for the literal ``null``; HTTP 404 when the patient was
    never registered.
    """
    return await patients.get_summary(personal_number)
