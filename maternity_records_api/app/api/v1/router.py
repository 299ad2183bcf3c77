"""
Top‑level router for version 1 of the API.

This router aggregates the resource routers under a unified prefix.
"""

from fastapi import APIRouter

from .endpoints import flow, patients, services

router = APIRouter()

router.include_router(services.router, prefix="/services", tags=["services"])
router.include_router(patients.router, prefix="/patients", tags=["patients"])
router.include_router(flow.router, prefix="/flow", tags=["flow"])
