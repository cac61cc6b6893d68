"""
Errors raised by the inspection query service.

The HTTP layer maps these onto status codes in main.py.
"""


class InspectionError(Exception):
    """Base class for inspection lookup failures."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InspectionNotFoundError(InspectionError):
    """No inspection exists with the requested ID."""

    status_code = 404

    def __init__(self, inspection_id: str):
        super().__init__(f'Inspection with ID "{inspection_id}" not found.')
        self.inspection_id = inspection_id


class InspectionStoreError(InspectionError):
    """The database failed for a reason other than a missing record.

    The message is safe to return to clients; the underlying error is
    only logged and chained as __cause__.
    """

    status_code = 500

    def __init__(self, inspection_id: str):
        super().__init__(f"Could not retrieve inspection {inspection_id}.")
        self.inspection_id = inspection_id


class InspectionAccessForbiddenError(InspectionError):
    """Caller's role may not view the inspection in its current status."""

    status_code = 403
