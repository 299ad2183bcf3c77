"""
Pydantic models for submission records.

A record is one stored form submission: a flat mapping of field name
to value that always carries the patient's ``PersonalNumber``.  No
per‑field validation is performed; unknown fields are stored as given.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from .service import FlowDecisionRead


class RecordCreate(BaseModel):
    """Schema for submitting a service form through the JSON API.

    ``personal_number`` may be omitted when ``data`` already contains
    ``PersonalNumber``.  A missing identifier is rejected with HTTP 400
    by the submission service, not by schema validation.
    """

    personal_number: Optional[str] = Field(None, example="19900101-1234")
    data: Dict[str, str] = Field(default_factory=dict, example={"Time": "08:30", "MidwifeNote": "Stable"})


class RecordUpdate(BaseModel):
    """Fields to merge into an existing record."""

    data: Dict[str, str] = Field(..., example={"MidwifeNote": "Discharged"})


class RecordRead(BaseModel):
    """Schema for reading a stored record."""

    id: str
    collection: str
    data: Dict[str, Any]

    @classmethod
    def from_document(cls, document) -> "RecordRead":
        return cls(id=document.id, collection=document.collection, data=dict(document.data))


class SubmissionRead(BaseModel):
    """The stored record plus the routing decision that follows it."""

    record: RecordRead
    next: FlowDecisionRead
