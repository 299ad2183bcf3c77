"""
Generic record pages: browse, edit and delete stored submissions.

These pages work on any catalog service by document id and are not part
of the registration flow.
"""

from typing import Optional
from urllib.parse import quote, urlencode

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from maternity_records_api.app.api.deps import get_catalog, get_record_service
from maternity_records_api.app.services.catalog import IDENTIFIER_FIELD, ServiceCatalog
from maternity_records_api.app.services.record_service import RecordService

from .rendering import read_form, templates

router = APIRouter()


def view_location(service: str, personal_number: Optional[str] = None) -> str:
    location = f"/view/{quote(service, safe='')}"
    if personal_number:
        location += "?" + urlencode({"personalNumber": personal_number})
    return location


@router.get("/view/{service}", response_class=HTMLResponse)
async def view_records(
    request: Request,
    service: str,
    personal_number: Optional[str] = Query(None, alias="personalNumber"),
    records: RecordService = Depends(get_record_service),
    catalog: ServiceCatalog = Depends(get_catalog),
):
    """List the records of a service, optionally for one patient."""
    items = await records.list_records(service, personal_number)
    return templates.TemplateResponse(
        request,
        "view.html",
        {
            "table": service,
            "fields": catalog.fields_for(service),
            "records": items,
            "personal_number": personal_number,
        },
    )


@router.get("/edit/{service}/{record_id}", response_class=HTMLResponse)
async def edit_record_form(
    request: Request,
    service: str,
    record_id: str,
    records: RecordService = Depends(get_record_service),
    catalog: ServiceCatalog = Depends(get_catalog),
):
    record = await records.get_record(service, record_id)
    fields = list(catalog.fields_for(service))
    # Fields stored outside the form definition stay editable.
    fields += [name for name in record.data if name not in fields]
    return templates.TemplateResponse(
        request,
        "edit.html",
        {"table": service, "fields": fields, "record": record},
    )


@router.post("/edit/{service}/{record_id}")
async def edit_record(
    request: Request,
    service: str,
    record_id: str,
    records: RecordService = Depends(get_record_service),
):
    form = await read_form(request)
    record = await records.update_record(service, record_id, form)
    return RedirectResponse(view_location(service, record.data.get(IDENTIFIER_FIELD)), status_code=303)


@router.get("/delete/{service}/{record_id}", response_class=HTMLResponse)
async def delete_record_confirm(
    request: Request,
    service: str,
    record_id: str,
    records: RecordService = Depends(get_record_service),
):
    """Ask for confirmation before deleting a record."""
    record = await records.get_record(service, record_id)
    return templates.TemplateResponse(request, "delete.html", {"table": service, "record": record})


@router.post("/delete/{service}/{record_id}")
async def delete_record(
    service: str,
    record_id: str,
    records: RecordService = Depends(get_record_service),
):
    await records.delete_record(service, record_id)
    return RedirectResponse(view_location(service), status_code=303)
