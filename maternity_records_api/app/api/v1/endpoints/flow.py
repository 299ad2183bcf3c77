"""
Routing endpoint for API v1.

Lets a client ask where the workflow goes after a given service without
storing anything.
"""

from fastapi import APIRouter, Depends, Query

from maternity_records_api.app.api.deps import get_flow
from maternity_records_api.app.schemas.service import FlowDecisionRead
from maternity_records_api.app.services.flow_service import FormFlowController

router = APIRouter()


@router.get("/next", response_model=FlowDecisionRead)
async def next_step(
    current: str = Query(..., description="Service that was just completed, or PatientRegistration"),
    personal_number: str = Query(""),
    flow: FormFlowController = Depends(get_flow),
) -> FlowDecisionRead:
    """Return the step after ``current``.

    Unknown services are reported with ``outcome = unknown_service``
    rather than an error, since nothing is being stored.
    """
    return FlowDecisionRead.from_decision(flow.advance(current, personal_number))
