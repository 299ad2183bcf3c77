"""
Template rendering helpers for the HTML routes.
"""

from pathlib import Path
from typing import Dict

from fastapi import Request
from fastapi.templating import Jinja2Templates

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


async def read_form(request: Request) -> Dict[str, str]:
    """Return the submitted form fields as plain strings.

    File uploads are not part of any service form and are dropped.
    """
    form = await request.form()
    return {key: value for key, value in form.items() if isinstance(value, str)}
