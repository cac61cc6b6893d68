"""
Inspection data API endpoints.

Read-only access to a single inspection and to its field change history.
Errors raised by the query service are turned into responses by the
exception handlers registered in main.py.
"""

from fastapi import APIRouter, Path

from inspection_api.schemas.inspection import (
    InspectionChangeLogResponse,
    InspectionResponse,
    change_log_to_response,
    inspection_to_response,
)
from inspection_api.services.inspections import get_change_history, get_inspection

router = APIRouter(prefix="/inspections", tags=["Inspection Data"])

NOT_FOUND_RESPONSE = {404: {"description": "Inspection not found."}}


@router.get(
    "/{inspection_id}",
    response_model=InspectionResponse,
    summary="Retrieve a specific inspection by ID",
    responses=NOT_FOUND_RESPONSE,
)
async def read_inspection(
    inspection_id: str = Path(..., description="The UUID of the inspection to retrieve."),
):
    """Get an inspection record with its photos."""
    inspection = await get_inspection(inspection_id)
    return inspection_to_response(inspection)


@router.get(
    "/{inspection_id}/changelog",
    response_model=list[InspectionChangeLogResponse],
    summary="Get inspection change log",
    responses=NOT_FOUND_RESPONSE,
)
async def read_inspection_changelog(
    inspection_id: str = Path(..., description="The ID of the inspection."),
):
    """Get the latest change for every edited field of an inspection, newest first."""
    changes = await get_change_history(inspection_id)
    return [change_log_to_response(entry) for entry in changes]
