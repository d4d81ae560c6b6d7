"""
Error catalog REST API endpoints.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query

from errata.errors import NotFoundError
from errata.models.error_record import ErrorRecord
from errata.models.search import APIStats, PagedResult
from errata.services.search import SearchEngine

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["errors"])

# Set at application startup once the snapshot is loaded
search_engine: Optional[SearchEngine] = None


def set_search_engine(engine: Optional[SearchEngine]) -> None:
    """Install the engine that serves every request."""
    global search_engine
    search_engine = engine


def get_search_engine() -> SearchEngine:
    """
    Get the loaded search engine.

    Raises:
        HTTPException: 503 while no dataset is loaded
    """
    if search_engine is None:
        raise HTTPException(status_code=503, detail="Error catalog not loaded")
    return search_engine


@router.get("/errors", response_model=PagedResult)
async def list_errors(
    page: int = Query(1, ge=1),
    api: Optional[str] = None,
    severity: Optional[str] = None,
) -> PagedResult:
    """
    Browse the catalog.

    Args:
        page: 1-based page number
        api: API name or "all"
        severity: critical, error, warning or "all"; other values match nothing

    Returns:
        One page of records

    Raises:
        HTTPException: 400 for an invalid page
    """
    engine = get_search_engine()
    try:
        return engine.list_all(page=page, api_filter=api, severity_filter=severity)

    except ValueError as e:
        logger.warning(f"Invalid list request: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error listing errors: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/errors/search", response_model=PagedResult)
async def search_errors(
    q: str = "",
    page: int = Query(1, ge=1),
    api: Optional[str] = None,
) -> PagedResult:
    """
    Search the catalog by code, description or resource.

    Exact code matches rank first, then codes starting with the query.
    """
    engine = get_search_engine()
    try:
        logger.info(f"Searching errors: q={q!r} page={page} api={api}")
        return engine.search(q, page=page, api_filter=api)

    except ValueError as e:
        logger.warning(f"Invalid search request: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error searching errors: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/errors/{code}", response_model=ErrorRecord)
async def get_error(code: str, api: Optional[str] = None) -> ErrorRecord:
    """
    Get one error by its natural code.

    Raises:
        HTTPException: 404 if no record has this code
    """
    engine = get_search_engine()
    try:
        return engine.get_by_code(code, api=api)

    except NotFoundError as e:
        logger.warning(f"Error not found: {e}")
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Error getting error {code}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/apis/stats", response_model=List[APIStats])
async def get_api_stats() -> List[APIStats]:
    """Error count and categories per API."""
    engine = get_search_engine()
    try:
        return engine.api_stats()

    except Exception as e:
        logger.error(f"Error computing API stats: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")
