"""
Dataset snapshot persistence.

A snapshot is a UTF-8 JSON array of normalized error records. Writes replace
the whole file atomically; loads repair missing display fields instead of
dropping records.
"""

import json
from collections import Counter
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from errata.models.error_record import ErrorRecord
from errata.pipeline.normalizer import normalize_loaded
from errata.services.api_registry import APIRegistry, get_api_registry
from errata.utils.logging import get_logger, log_pipeline_stage

logger = get_logger(__name__, stage="snapshot")


def write_snapshot(records: Sequence[ErrorRecord], path: Union[str, Path]) -> Path:
    """
    Persist records to disk atomically.

    Args:
        records: Normalized records
        path: Target JSON file; parent directories are created

    Returns:
        Path written
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")

    payload = [record.model_dump(mode="json", exclude={"code"}) for record in records]
    tmp_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2),
        encoding="utf-8",
    )
    tmp_path.replace(path)

    logger.info(f"Wrote {len(records)} records to {path}")
    return path


def load_snapshot(
    path: Union[str, Path],
    registry: Optional[APIRegistry] = None,
) -> List[ErrorRecord]:
    """
    Load a snapshot written by ``write_snapshot``.

    Every row is repaired and renormalized, so rows missing display or
    derived fields are kept rather than rejected.

    Raises:
        FileNotFoundError: If the snapshot does not exist
        ValueError: If the file is not a JSON array
        NotFoundError: If a row names an unregistered API
    """
    path = Path(path)
    log_pipeline_stage(logger, "load_snapshot", "started")

    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, list):
        raise ValueError(f"Snapshot {path} is not a JSON array")

    registry = registry or get_api_registry()
    records = [normalize_loaded(raw, registry) for raw in data]

    log_pipeline_stage(logger, "load_snapshot", "completed", count=len(records))
    return records


def summarize(records: Sequence[ErrorRecord]) -> Dict[str, Any]:
    """Counts by error type, resource and severity for the build report."""
    by_build_severity = Counter(
        r.build_severity.value for r in records if r.build_severity is not None
    )
    return {
        "total": len(records),
        "by_error_type": dict(Counter(r.error_type for r in records)),
        "by_resource": dict(Counter(r.resource for r in records)),
        "by_severity": dict(Counter(r.severity.value for r in records)),
        "by_build_severity": dict(by_build_severity),
        "categories": sorted({r.category for r in records}),
    }
