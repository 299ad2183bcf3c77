"""
Main entrypoint for the Maternity Records API.

This module assembles the FastAPI application: it sets up logging,
puts the settings, service catalog and document store on
``app.state``, mounts the HTML routes at the root and the JSON API
under ``/api/v1``, and maps application errors to responses.  The app
is instantiated at module import time as ``app``, e.g.::

    uvicorn maternity_records_api.app.main:app --reload
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from .api.v1.router import router as v1_router
from .core.config import Settings, settings
from .core.exceptions import AppError, StoreError
from .core.logging_config import setup_logging
from .core.store import DocumentStore, build_store
from .services.catalog import ServiceCatalog, default_catalog
from .web.router import router as web_router

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


def register_exception_handlers(app: FastAPI) -> None:
    """Render ``AppError`` as JSON under the API prefix, plain text elsewhere."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if isinstance(exc, StoreError):
            logger.error("Store failure on %s %s: %s", request.method, request.url.path, exc.detail, exc_info=exc)
        else:
            logger.info("%s on %s %s: %s", exc.code, request.method, request.url.path, exc.detail)
        if request.url.path.startswith(API_PREFIX):
            return JSONResponse({"code": exc.code, "detail": exc.public_detail}, status_code=exc.status_code)
        return PlainTextResponse(exc.public_detail, status_code=exc.status_code)


def create_app(
    app_settings: Optional[Settings] = None,
    store: Optional[DocumentStore] = None,
    catalog: Optional[ServiceCatalog] = None,
) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    app_settings : Optional[Settings]
        Settings to use; defaults to the module‑level ``settings``.
    store : Optional[DocumentStore]
        Pre‑built document store.  When omitted the store selected by
        ``STORE_BACKEND`` is built on startup.
    catalog : Optional[ServiceCatalog]
        Service catalog; defaults to the maternity care workflow.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    app_settings = app_settings or settings
    setup_logging(app_settings.log_level, app_settings.log_file or None)

    app = FastAPI(title=app_settings.project_name, version=app_settings.api_version)
    app.state.settings = app_settings
    app.state.catalog = catalog or default_catalog()
    app.state.store = store

    app.include_router(v1_router, prefix=API_PREFIX)
    app.include_router(web_router)
    register_exception_handlers(app)

    @app.on_event("startup")
    async def startup_event() -> None:
        # Build the store (and apply SQLite migrations) before serving.
        if app.state.store is None:
            app.state.store = build_store(app_settings)
            logger.info("Using %s document store", app_settings.store_backend)

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
