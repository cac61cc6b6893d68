"""
CAR-dano inspection API entry point.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from inspection_api.api.routes import inspections
from inspection_api.api.routes.docs import ApiDocumentHolder, create_docs_router
from inspection_api.config import settings
from inspection_api.db import close_db, get_db
from inspection_api.exceptions import InspectionError

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle."""
    # Startup
    logger.info("Starting CAR-dano inspection API...")
    try:
        await get_db()
    except Exception as e:
        logger.error(f"SQLite initialization failed: {e}")

    base_url = f"http://localhost:{settings.port}{settings.api_prefix}"
    logger.info(f"Application running on: {base_url}")
    logger.info(f"API Documentation available at: {base_url}/docs")
    logger.info(f"OpenAPI JSON specification available at: {base_url}/openapi.json")

    yield

    # Shutdown
    logger.info("Shutting down CAR-dano inspection API...")
    await close_db()


# Create FastAPI app; the built-in doc pages are replaced by the docs router
app = FastAPI(
    title=settings.api_title,
    version=settings.api_version,
    description=settings.api_description,
    debug=settings.debug,
    lifespan=lifespan,
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(InspectionError)
async def inspection_error_handler(request: Request, exc: InspectionError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


# Include routers
docs_holder = ApiDocumentHolder()
app.state.docs_holder = docs_holder

app.include_router(inspections.router, prefix=settings.api_prefix)
app.include_router(create_docs_router(docs_holder, settings.docs_html_path), prefix=settings.api_prefix)


@app.get("/", include_in_schema=False)
async def root():
    """Root endpoint."""
    return {
        "message": settings.api_title,
        "version": settings.api_version,
        "endpoints": {
            "inspection": f"{settings.api_prefix}/inspections/{{id}}",
            "changelog": f"{settings.api_prefix}/inspections/{{id}}/changelog",
            "docs": f"{settings.api_prefix}/docs",
            "openapi": f"{settings.api_prefix}/openapi.json",
        },
    }


@app.get("/health", include_in_schema=False)
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


# Generated after every route is registered
docs_holder.set(app.openapi())


def serve():
    """Run the API with uvicorn on the configured host and port."""
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    serve()
