"""
FastAPI dependencies.

The catalog, settings and document store are created once per
application and kept on ``app.state``; handlers obtain them (and the
services built on them) through these functions so tests can swap the
store by passing one to ``create_app``.
"""

from fastapi import Depends, Request

from ..core.store import DocumentStore, build_store
from ..services.catalog import ServiceCatalog
from ..services.flow_service import FormFlowController
from ..services.patient_service import PatientService
from ..services.record_service import RecordService
from ..services.submission_service import SubmissionService


def get_catalog(request: Request) -> ServiceCatalog:
    return request.app.state.catalog


def get_store(request: Request) -> DocumentStore:
    """Return the application's store, building it on first use.

    The startup hook normally builds it; this covers test clients that
    are used without entering their lifespan context.
    """
    store = getattr(request.app.state, "store", None)
    if store is None:
        store = build_store(request.app.state.settings)
        request.app.state.store = store
    return store


def get_flow(catalog: ServiceCatalog = Depends(get_catalog)) -> FormFlowController:
    return FormFlowController(catalog)


def get_submission_service(
    store: DocumentStore = Depends(get_store),
    catalog: ServiceCatalog = Depends(get_catalog),
    flow: FormFlowController = Depends(get_flow),
) -> SubmissionService:
    return SubmissionService(store, catalog, flow)


def get_record_service(
    store: DocumentStore = Depends(get_store),
    catalog: ServiceCatalog = Depends(get_catalog),
) -> RecordService:
    return RecordService(store, catalog)


def get_patient_service(
    store: DocumentStore = Depends(get_store),
    catalog: ServiceCatalog = Depends(get_catalog),
) -> PatientService:
    return PatientService(store, catalog)
