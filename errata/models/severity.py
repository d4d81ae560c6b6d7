"""Severity vocabularies and the mapping between them."""

from enum import Enum
from typing import Dict


class Severity(str, Enum):
    """Canonical severity used for display, filtering and ingestion."""

    CRITICAL = "critical"
    ERROR = "error"
    WARNING = "warning"


class BuildSeverity(str, Enum):
    """Severity vocabulary of the curated seed data."""

    BLOCKING = "blocking"
    TRANSIENT = "transient"
    CONFIG = "config"


BUILD_TO_SEVERITY: Dict[BuildSeverity, Severity] = {
    BuildSeverity.BLOCKING: Severity.CRITICAL,
    BuildSeverity.CONFIG: Severity.ERROR,
    BuildSeverity.TRANSIENT: Severity.WARNING,
}


def to_severity(build_severity: BuildSeverity) -> Severity:
    """Map a seed severity onto the canonical vocabulary."""
    return BUILD_TO_SEVERITY[BuildSeverity(build_severity)]
