"""
Router for the HTML pages, mounted at the application root.
"""

from fastapi import APIRouter

from . import forms, patients, records

router = APIRouter()

router.include_router(forms.router, tags=["forms"])
router.include_router(patients.router, tags=["patients"])
router.include_router(records.router, tags=["records"])
