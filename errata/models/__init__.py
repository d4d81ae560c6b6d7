"""Data models for the Errata catalog."""

from .error_record import ErrorRecord, LinkTarget, SeedRecord
from .search import APIStats, CatalogResult, PagedResult
from .severity import BUILD_TO_SEVERITY, BuildSeverity, Severity, to_severity
from .store import (
    APIDefinition,
    ErrorSolutions,
    IngestReport,
    StoredErrorPattern,
    StoredParameter,
    StoredSolution,
)

__all__ = [
    # Record models
    "ErrorRecord",
    "SeedRecord",
    "LinkTarget",
    # Severity
    "Severity",
    "BuildSeverity",
    "BUILD_TO_SEVERITY",
    "to_severity",
    # Search models
    "PagedResult",
    "APIStats",
    "CatalogResult",
    # Store models
    "APIDefinition",
    "StoredErrorPattern",
    "StoredSolution",
    "StoredParameter",
    "ErrorSolutions",
    "IngestReport",
]
