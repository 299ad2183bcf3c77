"""
Application package initializer.

This package contains the main entrypoint for the service and all of
its submodules.  The HTML data‑entry workflow lives in ``web``; the
same operations are exposed as JSON under ``api/v1``.  Both surfaces
share the service layer in ``services`` and the document store
backends in ``core``.
"""

from .main import app  # noqa: F401
