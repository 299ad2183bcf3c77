"""
Pydantic models for catalog entries and routing decisions.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class ServiceDefinitionRead(BaseModel):
    """One form of the workflow."""

    name: str = Field(..., example="MidwifeNotes")
    fields: List[str] = Field(..., example=["Time", "MidwifeNote", "DayNote"])
    position: Optional[int] = Field(
        None, description="Index in the traversal order; null for the registration entry point"
    )


class FlowDecisionRead(BaseModel):
    """Where the patient goes next.

    ``outcome`` is ``next_form``, ``summary`` or ``unknown_service``.
    ``location`` is the HTML route to redirect to, when there is one.
    """

    outcome: str = Field(..., example="next_form")
    service: Optional[str] = Field(None, example="LaborProgressChart")
    personal_number: str = Field(..., example="19900101-1234")
    location: Optional[str] = Field(None, example="/addData/LaborProgressChart?personalNumber=19900101-1234")

    @classmethod
    def from_decision(cls, decision) -> "FlowDecisionRead":
        return cls(
            outcome=decision.outcome,
            service=decision.service,
            personal_number=decision.personal_number,
            location=decision.location,
        )
