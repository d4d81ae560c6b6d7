"""
Search, filter, rank and paginate over a read-only record collection.

The engine prepares the collection once (cross-API exclusion, then
deduplication) and answers every query from that prepared tuple, so
concurrent queries share no mutable state.
"""

import math
from typing import List, Optional, Sequence, Tuple

from errata.errors import NotFoundError
from errata.models.error_record import ErrorRecord
from errata.models.search import APIStats, PagedResult
from errata.models.severity import BuildSeverity, Severity, to_severity
from errata.pipeline.classifiers import categorize_for_dashboard, infer_severity
from errata.pipeline.normalizer import deduplicate, natural_key
from errata.utils.logging import get_logger

logger = get_logger(__name__, stage="search")

PAGE_SIZE = 20
ALL = "all"


def paginate(items: Sequence[ErrorRecord], page: int, page_size: int = PAGE_SIZE) -> PagedResult:
    """
    Slice one page out of ``items``.

    A page past the end yields no errors but still reports the totals.

    Raises:
        ValueError: If ``page`` is less than 1
    """
    if page < 1:
        raise ValueError(f"page must be >= 1, got {page}")

    total = len(items)
    start = (page - 1) * page_size
    end = start + page_size

    return PagedResult(
        errors=list(items[start:end]),
        total=total,
        page=page,
        pages=math.ceil(total / page_size),
        hasMore=end < total,
    )


def parse_severity(value: str) -> Severity:
    """
    Parse a severity filter value.

    Seed vocabulary values are accepted and mapped.

    Raises:
        ValueError: If the value belongs to neither vocabulary
    """
    if value in BuildSeverity._value2member_map_:
        return to_severity(BuildSeverity(value))
    return Severity(value)


def is_contaminated(record: ErrorRecord, known_apis: Sequence[str]) -> bool:
    """True when the record's code carries another API's name."""
    code = natural_key(record).lower()
    return any(
        api.lower() in code
        for api in known_apis
        if api.lower() != record.api.lower()
    )


def _rank(record: ErrorRecord, query: str) -> int:
    code = natural_key(record).lower()
    if code == query:
        return 0
    if code.startswith(query):
        return 1
    return 2


def _matches(record: ErrorRecord, query: str) -> bool:
    fields = (natural_key(record), record.error_message, record.resource)
    return any(query in (field or "").lower() for field in fields)


class SearchEngine:
    """
    Query engine over a normalized snapshot.

    Args:
        records: Normalized records, treated as read-only
        page_size: Records per page
        known_apis: API names used by the cross-API exclusion filter;
            the registry's names when None
    """

    def __init__(
        self,
        records: Sequence[ErrorRecord],
        page_size: int = PAGE_SIZE,
        known_apis: Optional[Sequence[str]] = None,
    ):
        if known_apis is None:
            from errata.services.api_registry import get_api_registry
            known_apis = get_api_registry().names

        self.page_size = page_size
        self._known_apis: Tuple[str, ...] = tuple(known_apis)

        kept = [r for r in records if not is_contaminated(r, self._known_apis)]
        excluded = len(records) - len(kept)
        if excluded:
            logger.warning(f"Excluded {excluded} records carrying another API's code")

        self._records: Tuple[ErrorRecord, ...] = tuple(deduplicate(kept))
        logger.info(f"Search engine ready with {len(self._records)} unique records")

    @property
    def records(self) -> Tuple[ErrorRecord, ...]:
        return self._records

    def query(
        self,
        query: str = "",
        page: int = 1,
        api_filter: Optional[str] = None,
        severity_filter: Optional[str] = None,
    ) -> PagedResult:
        """
        Filter, search, rank and paginate.

        Args:
            query: Case-insensitive substring; empty matches everything
            page: 1-based page number
            api_filter: API name, or None/"all" for every API
            severity_filter: Severity, or None/"all" for every severity

        Returns:
            PagedResult for the requested page

        Raises:
            ValueError: If ``page`` < 1
        """
        results: List[ErrorRecord] = list(self._records)

        if api_filter and api_filter != ALL:
            wanted = api_filter.lower()
            results = [r for r in results if r.api.lower() == wanted]

        if severity_filter and severity_filter != ALL:
            try:
                severity = parse_severity(severity_filter)
            except ValueError:
                logger.warning(f"Unknown severity filter '{severity_filter}'")
                results = []
            else:
                results = [
                    r for r in results
                    if infer_severity(natural_key(r), r.error_message) == severity
                ]

        # Matched as typed: a whitespace query only hits fields containing it
        needle = (query or "").lower()
        if needle:
            results = [r for r in results if _matches(r, needle)]
            # sorted() is stable: equal ranks keep input order
            results = sorted(results, key=lambda r: _rank(r, needle))

        return paginate(results, page, self.page_size)

    def search(self, query: str, page: int = 1, api_filter: Optional[str] = None) -> PagedResult:
        """Text search restricted to an API."""
        return self.query(query=query, page=page, api_filter=api_filter)

    def list_all(
        self,
        page: int = 1,
        api_filter: Optional[str] = None,
        severity_filter: Optional[str] = None,
    ) -> PagedResult:
        """Browse every record, optionally filtered by API and severity."""
        return self.query(page=page, api_filter=api_filter, severity_filter=severity_filter)

    def get_by_code(self, code: str, api: Optional[str] = None) -> ErrorRecord:
        """
        Find the record for a natural code.

        Raises:
            NotFoundError: If no record has this code
        """
        for record in self._records:
            if natural_key(record) != code:
                continue
            if api and api != ALL and record.api.lower() != api.lower():
                continue
            return record

        raise NotFoundError(f"Error code '{code}' not found")

    def api_stats(self) -> List[APIStats]:
        """Error count and dashboard categories per API, in dataset order."""
        stats: dict = {}
        for record in self._records:
            entry = stats.setdefault(record.api, {"count": 0, "categories": {}})
            entry["count"] += 1
            entry["categories"][categorize_for_dashboard(natural_key(record))] = None

        return [
            APIStats(name=name, errorCount=entry["count"], categories=list(entry["categories"]))
            for name, entry in stats.items()
        ]
