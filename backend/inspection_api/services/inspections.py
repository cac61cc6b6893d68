"""
Inspection query service.

Looks inspections up in the store, turns a missing row into
InspectionNotFoundError and any other database failure into
InspectionStoreError (logged here, never shown to the client).
"""

import logging

import aiosqlite

from inspection_api import db
from inspection_api.exceptions import InspectionNotFoundError, InspectionStoreError
from inspection_api.utils.changelog import latest_changes_per_field

logger = logging.getLogger(__name__)


async def get_inspection(inspection_id: str) -> dict:
    """
    Get one inspection with its photos.

    Raises InspectionNotFoundError if no such inspection exists and
    InspectionStoreError if the database fails. InspectionAccessForbiddenError
    from a collaborator passes through untouched.
    """
    try:
        inspection = await db.find_inspection_by_id(inspection_id)
    except (aiosqlite.Error, ValueError) as e:  # ValueError: corrupt JSON column
        logger.exception(f"Failed to retrieve inspection ID {inspection_id}: {e}")
        raise InspectionStoreError(inspection_id) from e

    if inspection is None:
        raise InspectionNotFoundError(inspection_id)
    return inspection


async def get_change_history(inspection_id: str) -> list[dict]:
    """
    Get the latest change log entry per field path for an inspection.

    The inspection must exist; the existence check runs before any change
    log rows are read. An inspection with no edits yields an empty list.
    """
    try:
        exists = await db.inspection_exists(inspection_id)
    except aiosqlite.Error as e:
        logger.exception(f"Failed to look up inspection ID {inspection_id}: {e}")
        raise InspectionStoreError(inspection_id) from e

    if not exists:
        raise InspectionNotFoundError(inspection_id)

    try:
        change_logs = await db.find_change_logs(inspection_id)
    except aiosqlite.Error as e:
        logger.exception(f"Failed to retrieve change logs for inspection ID {inspection_id}: {e}")
        raise InspectionStoreError(inspection_id) from e

    latest = latest_changes_per_field(change_logs)
    logger.debug(f"Inspection {inspection_id}: {len(change_logs)} change log entries, {len(latest)} distinct fields")
    return latest
