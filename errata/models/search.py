"""Search result data models."""

from typing import List, Optional

from pydantic import BaseModel

from errata.models.error_record import ErrorRecord


class PagedResult(BaseModel):
    """One page of filtered, ranked error records."""

    errors: List[ErrorRecord]
    total: int
    page: int
    pages: int
    hasMore: bool


class APIStats(BaseModel):
    """Per-API summary shown on the dashboard."""

    name: str
    errorCount: int
    categories: List[str] = []


class CatalogResult(BaseModel):
    """Search outcome from the store-backed catalog.

    ``degraded`` is set when the store could not be reached; ``result`` is
    then empty and ``message`` explains what to check.
    """

    result: PagedResult
    degraded: bool = False
    message: Optional[str] = None
