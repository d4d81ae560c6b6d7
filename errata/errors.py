"""
Error taxonomy for the catalog pipeline, search engine and store boundary.
"""

from typing import List, Optional


class ErrataError(Exception):
    """Base exception for all catalog errors."""
    pass


class MalformedRecordError(ErrataError):
    """Raised when a loaded record is missing a display field.

    Never escapes the repair routine: the field is replaced by its fallback
    and the record is kept.
    """

    def __init__(self, field: str, code: Optional[str] = None):
        self.field = field
        self.code = code
        super().__init__(f"Record {code or '<unknown>'} is missing '{field}'")


class NotFoundError(ErrataError):
    """Raised when a lookup by id or code finds no match."""
    pass


class UpstreamUnavailableError(ErrataError):
    """Raised when the remote store fails to respond or returns non-success."""

    def __init__(self, operation: str, detail: str, status_code: Optional[int] = None):
        self.operation = operation
        self.detail = detail
        self.status_code = status_code
        super().__init__(f"Store operation '{operation}' failed: {detail}")


class RecordValidationError(ErrataError):
    """Raised at build time when seed records are incomplete."""

    def __init__(self, problems: List[str]):
        self.problems = problems
        super().__init__(
            f"{len(problems)} invalid seed record(s): " + "; ".join(problems)
        )
