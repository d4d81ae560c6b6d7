"""
FastAPI application entry point.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from errata import __version__
from errata.config import settings
from errata.middleware.logging import RequestLoggingMiddleware
from errata.api import errors
from errata.utils.logging import setup_logging, get_logger

# Configure structured logging
setup_logging(settings.log_level)

logger = get_logger(__name__)

# Create FastAPI application
app = FastAPI(
    title="Errata",
    description="Searchable catalog of normalized API error patterns",
    version=__version__
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add request logging middleware
app.add_middleware(RequestLoggingMiddleware)


@app.get("/health")
async def health_check():
    """Health check endpoint for container orchestration."""
    return {
        "status": "healthy",
        "version": __version__,
        "catalog_loaded": errors.search_engine is not None,
    }


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Errata API error catalog",
        "version": __version__,
        "docs": "/docs"
    }


# Include API routers
app.include_router(errors.router)


def load_records():
    """
    Load the dataset snapshot, building it in memory when no snapshot exists.

    Raises:
        ValueError: If the snapshot file is not a JSON array
    """
    from errata.pipeline import build_dataset, load_snapshot

    try:
        return load_snapshot(settings.snapshot_path)
    except FileNotFoundError:
        logger.warning(
            f"Snapshot {settings.snapshot_path} not found, building dataset in memory"
        )
        return build_dataset()


@app.on_event("startup")
async def startup_event():
    """Load the catalog on application startup."""
    logger.info("Starting Errata API")

    from errata.services.search import SearchEngine
    records = load_records()
    errors.set_search_engine(SearchEngine(records, page_size=settings.page_size))
    logger.info(f"Catalog loaded with {len(records)} records")


@app.on_event("shutdown")
async def shutdown_event():
    """Release the catalog on application shutdown."""
    logger.info("Shutting down Errata API")
    errors.set_search_engine(None)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
