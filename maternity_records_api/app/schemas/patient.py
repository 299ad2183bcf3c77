"""
Pydantic models for the patient summary.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from .record import RecordRead


class ServiceRecordsRead(BaseModel):
    service: str
    records: List[RecordRead] = Field(default_factory=list)


class PatientSummaryRead(BaseModel):
    """Registration of a patient and everything stored for them since.

    ``next_pending_service`` is the first service in the traversal
    order without any record for the patient, or ``null`` when every
    service has at least one.
    """

    personal_number: str
    registration: RecordRead
    services: List[ServiceRecordsRead] = Field(default_factory=list)
    completed: int = 0
    total: int = 0
    next_pending_service: Optional[str] = None
