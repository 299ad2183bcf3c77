"""
Top‑level package for the Maternity Records API.

This file makes ``maternity_records_api`` a Python package so that
modules within ``app`` can be imported using fully qualified names
like ``maternity_records_api.app.main``.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
