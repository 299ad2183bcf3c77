"""
Form routes: service list, registration and the service forms.

Registration and every service share one GET handler (render the form)
and one POST handler (store, then redirect to whatever the flow
controller decides).
"""

from typing import Optional
from urllib.parse import quote, urlencode

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from maternity_records_api.app.api.deps import get_catalog, get_submission_service
from maternity_records_api.app.services.catalog import REGISTRATION, ServiceCatalog
from maternity_records_api.app.services.submission_service import SubmissionService

from .rendering import read_form, templates

router = APIRouter()


def form_action(service: str, personal_number: Optional[str]) -> str:
    path = "/PatientRegistration" if service == REGISTRATION else f"/addData/{quote(service, safe='')}"
    if personal_number:
        path += "?" + urlencode({"personalNumber": personal_number})
    return path


def render_form(request: Request, catalog: ServiceCatalog, service: str, personal_number: Optional[str]):
    fields = catalog.fields_for(service)
    position = catalog.position(service)
    return templates.TemplateResponse(
        request,
        "form.html",
        {
            "table": service,
            "fields": fields,
            "personal_number": personal_number,
            "action": form_action(service, personal_number),
            "step": position + 1 if position >= 0 else None,
            "steps": len(catalog.traversal_order()),
        },
    )


async def handle_submission(
    request: Request,
    service: str,
    personal_number: Optional[str],
    submissions: SubmissionService,
) -> RedirectResponse:
    form = await read_form(request)
    _, decision = await submissions.submit(service, form, personal_number)
    return RedirectResponse(decision.location, status_code=303)


@router.get("/", response_class=HTMLResponse)
async def home(request: Request, catalog: ServiceCatalog = Depends(get_catalog)):
    """List every service form."""
    return templates.TemplateResponse(request, "home.html", {"tables": catalog.names()})


@router.get("/PatientRegistration", response_class=HTMLResponse)
async def registration_form(
    request: Request,
    personal_number: Optional[str] = Query(None, alias="personalNumber"),
    catalog: ServiceCatalog = Depends(get_catalog),
):
    return render_form(request, catalog, REGISTRATION, personal_number)


@router.post("/PatientRegistration")
async def submit_registration(
    request: Request,
    personal_number: Optional[str] = Query(None, alias="personalNumber"),
    submissions: SubmissionService = Depends(get_submission_service),
):
    """Register a patient and continue with the first service form."""
    return await handle_submission(request, REGISTRATION, personal_number, submissions)


@router.get("/addData/{service}", response_class=HTMLResponse)
async def service_form(
    request: Request,
    service: str,
    personal_number: Optional[str] = Query(None, alias="personalNumber"),
    catalog: ServiceCatalog = Depends(get_catalog),
):
    """Render the form of ``service``; 404 when it is not in the catalog."""
    return render_form(request, catalog, service, personal_number)


@router.post("/addData/{service}")
async def submit_service(
    request: Request,
    service: str,
    personal_number: Optional[str] = Query(None, alias="personalNumber"),
    submissions: SubmissionService = Depends(get_submission_service),
):
    """Store a service form and redirect to the next form or the summary."""
    return await handle_submission(request, service, personal_number, submissions)
