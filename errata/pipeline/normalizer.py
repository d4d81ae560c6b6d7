"""
Normalizer/classifier for error records.

Turns partially specified seed records into fully normalized ``ErrorRecord``
values: default HTTP status, resource heuristic, documentation link,
authentication-code hygiene and the derived category, severity, frequency
and tags. Every function here is pure; a second pass over an already
normalized record returns an identical record.
"""

from datetime import date
from typing import Any, Dict, Iterable, List, Optional, TypeVar, Union

from errata.errors import MalformedRecordError
from errata.models.error_record import ErrorRecord, LinkTarget, SeedRecord
from errata.models.severity import BuildSeverity, Severity, to_severity
from errata.models.store import APIDefinition
from errata.pipeline.classifiers import (
    categorize,
    derive_tags,
    estimate_frequency,
    infer_severity,
)
from errata.services.api_registry import APIRegistry, get_api_registry
from errata.utils.logging import get_logger

logger = get_logger(__name__, stage="normalize")

DEFAULT_STATUS_BY_TYPE: Dict[str, int] = {
    "invalid_request_error": 400,
    "authentication_error": 401,
    "card_error": 402,
    "rate_limit_error": 429,
}

RATE_LIMIT_STATUS = 429
ANY_RESOURCE = "any"
DEFAULT_ERROR_TYPE = "api_error"

MISSING_DESCRIPTION = "No description available"
MISSING_SOLUTION = "Check {api} documentation for solutions"

R = TypeVar("R", SeedRecord, ErrorRecord)


def natural_key(record: Union[SeedRecord, ErrorRecord, Dict[str, Any]]) -> str:
    """Deduplication key: ``error_code`` when set, else ``error_type``."""
    if isinstance(record, dict):
        return record.get("error_code") or record.get("error_type") or ""
    return record.error_code or record.error_type


def link_target(row: Dict[str, Any]) -> LinkTarget:
    """Which documentation page a record links to."""
    if row.get("decline_code"):
        return LinkTarget.DECLINE_CODE
    if row.get("error_code"):
        return LinkTarget.ERROR_CODE
    if row.get("error_type") == "authentication_error":
        return LinkTarget.API_ERRORS
    return LinkTarget.ERROR_CODES_INDEX


def link_for(row: Dict[str, Any], definition: APIDefinition) -> str:
    """
    Deep link into the API's documentation.

    Decline codes win over error codes; type-only authentication errors link
    to the generic API-errors page.
    """
    target = link_target(row)

    if target is LinkTarget.DECLINE_CODE:
        base = definition.decline_codes_url or definition.error_codes_url
        return f"{base}#{row['decline_code']}"
    if target is LinkTarget.ERROR_CODE:
        return f"{definition.error_codes_url}#{row['error_code']}"
    if target is LinkTarget.API_ERRORS:
        return definition.api_errors_url
    return definition.error_codes_url


def _resolve_severity(row: Dict[str, Any], code: str) -> Dict[str, Any]:
    """Canonical severity plus the seed's build severity, if any."""
    build_severity = row.get("build_severity")
    explicit = row.get("severity")

    if isinstance(explicit, BuildSeverity):
        build_severity = explicit
        explicit = None

    if build_severity is not None:
        severity = to_severity(build_severity)
    elif explicit is not None:
        severity = explicit
    else:
        severity = infer_severity(code, row.get("error_message") or "")

    return {"severity": severity, "build_severity": build_severity}


def normalize(
    record: Union[SeedRecord, ErrorRecord],
    registry: Optional[APIRegistry] = None,
    verified_on: Optional[date] = None,
) -> ErrorRecord:
    """
    Normalize one record.

    Args:
        record: Seed record or an already normalized record
        registry: API registry supplying defaults and doc links
        verified_on: Build date; records that already carry one keep it

    Returns:
        Normalized ErrorRecord

    Raises:
        NotFoundError: If the record's API is not registered
        pydantic.ValidationError: If ``error_message`` is missing
    """
    registry = registry or get_api_registry()
    row = record.model_dump(exclude={"code"})
    definition = registry.get(row["api"])

    if row.get("http_status") is None:
        default_status = DEFAULT_STATUS_BY_TYPE.get(row["error_type"])
        if default_status is not None:
            row["http_status"] = default_status

    if row["error_type"] == "rate_limit_error":
        row["http_status"] = RATE_LIMIT_STATUS

    if row["resource"] == ANY_RESOURCE:
        row["resource"] = definition.default_resource

    row["source_url"] = link_for(row, definition)

    # No canonical fine-grained code is published for authentication errors
    if row["error_type"] == "authentication_error" and row.get("error_code"):
        row["error_code"] = None
        row["source_url"] = link_for(row, definition)

    code = natural_key(row)
    row.update(_resolve_severity(row, code))

    category = categorize(code)
    row["category"] = category
    row["frequency"] = estimate_frequency(code)
    row["tags"] = derive_tags(code, category, base=(row["api"].lower(), "api"))
    row["last_verified"] = row.get("last_verified") or verified_on or date.today()

    return ErrorRecord(**row)


def normalize_all(
    records: Iterable[Union[SeedRecord, ErrorRecord]],
    registry: Optional[APIRegistry] = None,
    verified_on: Optional[date] = None,
) -> List[ErrorRecord]:
    """Normalize a collection, preserving order."""
    registry = registry or get_api_registry()
    verified_on = verified_on or date.today()
    return [normalize(record, registry, verified_on) for record in records]


def deduplicate(records: Iterable[R]) -> List[R]:
    """
    Collapse records sharing a natural key to the first occurrence.

    Keys are qualified by API so that identical codes from different APIs
    stay distinct; within one API the natural key alone decides.
    """
    seen = set()
    unique: List[R] = []

    for record in records:
        key = (record.api, natural_key(record))
        if key in seen:
            continue
        seen.add(key)
        unique.append(record)

    return unique


def _require_field(raw: Dict[str, Any], field: str) -> None:
    if not raw.get(field):
        raise MalformedRecordError(field, natural_key(raw) or None)


def repair_record(raw: Dict[str, Any], api: Optional[str] = None) -> Dict[str, Any]:
    """
    Fill missing display fields of a loaded record with fallbacks.

    The record is never dropped: each missing field is reported as a
    warning and replaced.

    Args:
        raw: Record as loaded from a snapshot or the store
        api: API name used in the solution fallback when the record has none

    Returns:
        Copy of ``raw`` with display fields populated
    """
    repaired = dict(raw)
    api_name = repaired.get("api") or api or "API"
    repaired["api"] = api_name
    fallbacks = {
        "error_message": MISSING_DESCRIPTION,
        "solution_description": MISSING_SOLUTION.format(api=api_name),
    }

    for field, fallback in fallbacks.items():
        try:
            _require_field(repaired, field)
        except MalformedRecordError as e:
            logger.warning(
                f"{e}; using fallback",
                extra={"api": api_name, "error_code": e.code, "field": field},
            )
            repaired[field] = fallback

    return repaired


def _loaded_severity(row: Dict[str, Any]) -> Optional[Union[BuildSeverity, Severity]]:
    """Severity of a loaded row in either vocabulary; unknown values are dropped."""
    for value in (row.get("build_severity"), row.get("severity")):
        if not value:
            continue
        if value in BuildSeverity._value2member_map_:
            return BuildSeverity(value)
        if value in Severity._value2member_map_:
            return Severity(value)
        logger.warning(
            f"Unknown severity {value!r}; inferring it",
            extra={"api": row.get("api"), "error_code": natural_key(row) or None},
        )
    return None


def _loaded_verification_date(row: Dict[str, Any]) -> Optional[date]:
    value = row.get("last_verified")
    if not value or isinstance(value, date):
        return value or None
    try:
        return date.fromisoformat(str(value))
    except ValueError:
        logger.warning(f"Invalid last_verified {value!r}; using the load date")
        return None


def normalize_loaded(
    raw: Dict[str, Any],
    registry: Optional[APIRegistry] = None,
    verified_on: Optional[date] = None,
    api: Optional[str] = None,
) -> ErrorRecord:
    """
    Rebuild a canonical record from a loaded row.

    Display fields are repaired, a missing ``resource`` or ``error_type``
    gets its fallback, and the derived fields are recomputed, so rows that
    lack them or carry the seed severity vocabulary still load. The row's
    id and verification date are kept.

    Args:
        raw: Row from a snapshot or the store
        registry: API registry supplying defaults and doc links
        verified_on: Verification date for rows that carry none
        api: API name for rows that carry none

    Raises:
        NotFoundError: If the row's API is not registered
    """
    row = repair_record(raw, api=api)

    for field, fallback in (("resource", ANY_RESOURCE), ("error_type", DEFAULT_ERROR_TYPE)):
        try:
            _require_field(row, field)
        except MalformedRecordError as e:
            logger.warning(
                f"{e}; using fallback",
                extra={"api": row["api"], "error_code": e.code, "field": field},
            )
            row[field] = fallback

    row["severity"] = _loaded_severity(row)
    row["solution_title"] = row.get("solution_title") or ""
    row["params_implicated"] = row.get("params_implicated") or []
    seed = SeedRecord(**row)

    record = normalize(seed, registry, _loaded_verification_date(row) or verified_on)
    if row.get("id") is not None:
        record = record.model_copy(update={"id": str(row["id"])})
    return record
