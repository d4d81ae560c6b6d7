"""
Store-backed error catalog.

Fetches error patterns from the remote store per API, converts them into
normalized records and answers queries with the same ``SearchEngine`` used for
snapshots. Store outages surface as a degraded ``CatalogResult`` instead of an
exception.
"""

from typing import Callable, List, Optional, Sequence, Tuple

from errata.errors import ErrataError, UpstreamUnavailableError
from errata.models.error_record import ErrorRecord
from errata.models.search import CatalogResult, PagedResult
from errata.models.store import StoredErrorPattern
from errata.pipeline.normalizer import DEFAULT_ERROR_TYPE, normalize_loaded
from errata.services.api_registry import APIRegistry, get_api_registry
from errata.services.search import ALL, PAGE_SIZE, SearchEngine
from errata.services.store import ErrorStore
from errata.utils.logging import get_logger

logger = get_logger(__name__, stage="catalog")

DEGRADED_MESSAGE = "Search failed. Verify the backend is running."


def split_description(description: Optional[str]) -> Tuple[Optional[str], Optional[str]]:
    """Split a stored ``"<error_type>: <message>"`` description."""
    if description and ": " in description:
        error_type, message = description.split(": ", 1)
        if error_type and " " not in error_type:
            return error_type, message
    return None, description


def pattern_to_record(
    pattern: StoredErrorPattern,
    api: str,
    registry: Optional[APIRegistry] = None,
) -> ErrorRecord:
    """
    Convert a stored error pattern into a normalized record.

    Missing display fields are repaired with fallbacks; the record keeps the
    store's node id.
    """
    error_type, described = split_description(pattern.description)
    error_type = error_type or DEFAULT_ERROR_TYPE

    return normalize_loaded(
        {
            "id": pattern.id,
            "api": api,
            "resource": pattern.resource,
            "method": pattern.method,
            "error_type": error_type,
            "error_code": pattern.code if pattern.code != error_type else None,
            "http_status": pattern.http_status,
            "error_message": pattern.message or described,
            "solution_title": pattern.code,
            "severity": pattern.severity,
        },
        registry,
        api=api,
    )


def _empty_page(page: int) -> PagedResult:
    return PagedResult(errors=[], total=0, page=page, pages=0, hasMore=False)


class RemoteErrorCatalog:
    """
    Query facade over the remote store.

    Args:
        store: Remote store port
        registry: API registry; its active APIs are queried when no API
            filter is given
        page_size: Records per page
        engine_factory: Builds the search engine for fetched records
    """

    def __init__(
        self,
        store: ErrorStore,
        registry: Optional[APIRegistry] = None,
        page_size: int = PAGE_SIZE,
        engine_factory: Optional[Callable[[Sequence[ErrorRecord]], SearchEngine]] = None,
    ):
        self.store = store
        self.registry = registry or get_api_registry()
        self.page_size = page_size
        self._engine_factory = engine_factory or (
            lambda records: SearchEngine(records, self.page_size, known_apis=self.registry.names)
        )

    async def fetch_records(self, api_filter: Optional[str] = None) -> List[ErrorRecord]:
        """
        Fetch and convert the patterns of one API or of every active API.

        An API that fails is skipped with a warning. An unregistered API
        filter yields no records.

        Raises:
            UpstreamUnavailableError: If every queried API failed
        """
        if api_filter and api_filter != ALL:
            if api_filter not in self.registry:
                logger.warning(f"Unknown API filter '{api_filter}'", extra={"api": api_filter})
                return []
            apis = [self.registry.get(api_filter).name]
        else:
            apis = self.registry.active_names

        records: List[ErrorRecord] = []
        failures: List[UpstreamUnavailableError] = []

        for api in apis:
            try:
                patterns = await self.store.get_api_errors(api)
            except UpstreamUnavailableError as e:
                logger.warning(f"Failed to fetch errors from {api}: {e}", extra={"api": api})
                failures.append(e)
                continue
            records.extend(pattern_to_record(p, api, self.registry) for p in patterns)

        if apis and len(failures) == len(apis):
            raise failures[-1]

        return records

    async def query(
        self,
        query: str = "",
        page: int = 1,
        api_filter: Optional[str] = None,
        severity_filter: Optional[str] = None,
    ) -> CatalogResult:
        """Filter, search, rank and paginate the store's error patterns."""
        try:
            records = await self.fetch_records(api_filter)
        except UpstreamUnavailableError as e:
            logger.error(f"Catalog query degraded: {e}")
            return CatalogResult(result=_empty_page(page), degraded=True, message=DEGRADED_MESSAGE)

        engine = self._engine_factory(records)
        return CatalogResult(result=engine.query(query, page, api_filter, severity_filter))

    async def search(
        self, query: str, page: int = 1, api_filter: Optional[str] = None
    ) -> CatalogResult:
        """Text search across the store's error patterns."""
        return await self.query(query, page, api_filter, None)

    async def list_all(
        self,
        page: int = 1,
        api_filter: Optional[str] = None,
        severity_filter: Optional[str] = None,
    ) -> CatalogResult:
        """Browse the store's error patterns."""
        return await self.query("", page, api_filter, severity_filter)

    async def get_error_detail(self, code: str) -> ErrorRecord:
        """
        Look up one error by code with its best solution.

        The top solution's description becomes the record's fix; when the
        solution lookup fails the record keeps its fallback text.

        Raises:
            NotFoundError: If no active API has this code
            UpstreamUnavailableError: If every API fetch failed
        """
        engine = self._engine_factory(await self.fetch_records())
        record = engine.get_by_code(code)

        try:
            found = await self.store.find_solutions_by_error_code(code)
        except ErrataError as e:
            logger.warning(f"Solution lookup failed for {code}: {e}", extra={"error_code": code})
            return record

        if not found.solutions:
            return record

        best = found.solutions[0]
        return record.model_copy(update={
            "solution_title": best.title or record.solution_title,
            "solution_description": best.description,
        })
