"""
Patient summary page.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from maternity_records_api.app.api.deps import get_catalog, get_patient_service
from maternity_records_api.app.services.catalog import ServiceCatalog
from maternity_records_api.app.services.patient_service import PatientService

from .rendering import templates

router = APIRouter()


@router.get("/patientSummary/", response_class=HTMLResponse)
@router.get("/patientSummary/{personal_number:path}", response_class=HTMLResponse)
async def patient_summary(
    request: Request,
    personal_number: str = "",
    patients: PatientService = Depends(get_patient_service),
    catalog: ServiceCatalog = Depends(get_catalog),
):
    """Show the registration of a patient and their service records.

    400 for a missing identifier or the literal ``null``; 404 when no
    registration matches.
    """
    summary = await patients.get_summary(personal_number)
    return templates.TemplateResponse(
        request,
        "patient_summary.html",
        {
            "personal_number": summary.personal_number,
            "patient_data": summary.registration.data,
            "registration_fields": catalog.fields_for(summary.registration.collection),
            "summary": summary,
        },
    )
