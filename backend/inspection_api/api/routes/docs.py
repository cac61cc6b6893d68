"""
API documentation endpoints: the OpenAPI document and the Scalar reference page.

The document is generated once in main.py and handed to this router through an
ApiDocumentHolder, so nothing here reaches back into the application module.
"""

import logging
from pathlib import Path
from typing import Any

from fastapi import APIRouter, HTTPException
from fastapi.responses import FileResponse

logger = logging.getLogger(__name__)


class ApiDocumentHolder:
    """Holds the generated OpenAPI document until it is available."""

    def __init__(self, document: dict[str, Any] | None = None):
        self.document = document

    def set(self, document: dict[str, Any]):
        self.document = document


def create_docs_router(holder: ApiDocumentHolder, html_path: Path) -> APIRouter:
    """Build the docs router around a document holder and the Scalar HTML page."""
    router = APIRouter(tags=["docs"], include_in_schema=False)

    @router.get("/openapi.json")
    async def openapi_document():
        """Get the generated OpenAPI specification."""
        if holder.document is None:
            logger.error("OpenAPI document is not generated yet.")
            raise HTTPException(status_code=500, detail="API documentation is not available yet.")
        return holder.document

    @router.get("/docs")
    async def scalar_docs():
        """Serve the Scalar API reference page."""
        if not html_path.is_file():
            logger.error(f"Scalar HTML file not found at: {html_path}")
            raise HTTPException(status_code=500, detail="Could not load API documentation.")
        return FileResponse(html_path, media_type="text/html")

    return router
