"""
Transform raw error-code listings into seed records.

The input is plain text copied from an API's error-code reference: a line
holding only a snake_case code starts a new entry, and the lines that follow
form its description.
"""

import re
from typing import List, Optional, Tuple

from errata.models.error_record import SeedRecord
from errata.pipeline.classifiers import categorize, infer_severity, suggest_solution
from errata.utils.logging import get_logger, log_pipeline_stage

logger = get_logger(__name__, stage="transform")

ERROR_CODE_LINE = re.compile(r"^[a-z][a-z0-9_]*[a-z0-9]$")

DEFAULT_ERROR_TYPE = "invalid_request_error"


def parse_entries(raw_content: str) -> List[Tuple[str, str]]:
    """
    Split raw text into (code, description) pairs.

    Blank lines are ignored; codes that never receive a description are
    skipped.
    """
    entries: List[Tuple[str, str]] = []
    current_code: Optional[str] = None
    description_lines: List[str] = []

    def flush() -> None:
        if current_code and description_lines:
            entries.append((current_code, " ".join(description_lines)))

    for line in (raw.strip() for raw in raw_content.splitlines()):
        if not line:
            continue

        if ERROR_CODE_LINE.match(line):
            flush()
            current_code = line
            description_lines = []
        elif current_code:
            description_lines.append(line)

    flush()
    return entries


def transform_raw_errors(raw_content: str, api: str = "Stripe") -> List[SeedRecord]:
    """
    Build seed records from a raw error-code listing.

    Args:
        raw_content: Text copied from the error-code reference
        api: API the listing belongs to

    Returns:
        One seed record per parsed code, in listing order
    """
    log_pipeline_stage(logger, "transform", "started")

    records = []
    for code, description in parse_entries(raw_content):
        category = categorize(code)
        records.append(
            SeedRecord(
                api=api,
                resource="any",
                error_type=DEFAULT_ERROR_TYPE,
                error_code=code,
                error_message=description,
                solution_title=f"{api} {code} error",
                solution_description=suggest_solution(category, api),
                severity=infer_severity(code, description),
            )
        )

    if not records:
        logger.warning("Could not parse any errors from raw content", extra={"api": api})

    log_pipeline_stage(logger, "transform", "completed", count=len(records))
    return records
