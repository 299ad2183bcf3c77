"""
Form‑flow controller.

Decides where a patient goes after a form has been stored: the next
service form, or the patient summary once the last service is done.
The decision is a pure function of the catalog's traversal order and
the current service name; the caller stores the submission before
asking and performs the redirect afterwards.

A service that is neither the registration entry point nor part of
the traversal order yields :class:`UnknownService` instead of silently
restarting the flow at the first service.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Union
from urllib.parse import quote, urlencode

from ..core.exceptions import ValidationError
from .catalog import REGISTRATION, ServiceCatalog

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NextForm:
    """Present the form of ``service`` for the same patient."""

    service: str
    personal_number: str
    outcome = "next_form"

    @property
    def location(self) -> str:
        query = urlencode({"personalNumber": self.personal_number})
        return f"/addData/{quote(self.service, safe='')}?{query}"


@dataclass(frozen=True)
class Summary:
    """All services are done; show the patient summary."""

    personal_number: str
    outcome = "summary"
    service = None

    @property
    def location(self) -> str:
        return f"/patientSummary/{quote(self.personal_number, safe='')}"


@dataclass(frozen=True)
class UnknownService:
    """``service`` is not a step of the flow; there is nowhere to go."""

    service: str
    personal_number: str
    outcome = "unknown_service"

    @property
    def location(self) -> None:
        return None


FlowDecision = Union[NextForm, Summary, UnknownService]


class FormFlowController:
    """Computes the next step of the data‑entry workflow."""

    def __init__(self, catalog: ServiceCatalog) -> None:
        self.catalog = catalog

    def first_step(self, personal_number: str) -> FlowDecision:
        order = self.catalog.traversal_order()
        if not order:
            return Summary(personal_number)
        return NextForm(order[0], personal_number)

    def advance(self, current_service: str, personal_number: str) -> FlowDecision:
        """Return the step that follows ``current_service``.

        Raises
        ------
        ValidationError
            If ``personal_number`` is empty.
        """
        if not personal_number or not personal_number.strip():
            raise ValidationError("Missing Personal Number.")

        if current_service == REGISTRATION:
            decision = self.first_step(personal_number)
        else:
            order = self.catalog.traversal_order()
            index = self.catalog.position(current_service)
            if index < 0:
                decision = UnknownService(current_service, personal_number)
            elif index + 1 < len(order):
                decision = NextForm(order[index + 1], personal_number)
            else:
                decision = Summary(personal_number)

        logger.debug("Flow %s -> %s for %s", current_service, decision.outcome, personal_number)
        return decision
