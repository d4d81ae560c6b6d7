"""
Dataset build: seed -> normalize -> (dedupe) -> snapshot.
"""

from datetime import date
from pathlib import Path
from typing import Iterable, List, Optional, Union

from errata.models.error_record import ErrorRecord
from errata.pipeline.normalizer import deduplicate, normalize_all
from errata.pipeline.seed import build_seed
from errata.pipeline.snapshot import write_snapshot
from errata.services.api_registry import APIRegistry, get_api_registry
from errata.utils.logging import get_logger, log_pipeline_stage

logger = get_logger(__name__, stage="build")


def build_dataset(
    apis: Optional[Iterable[str]] = None,
    registry: Optional[APIRegistry] = None,
    verified_on: Optional[date] = None,
    dedupe: bool = False,
) -> List[ErrorRecord]:
    """
    Build the normalized dataset from the curated seed.

    Args:
        apis: APIs to include; every active API in the registry when None
        registry: API registry; the global registry when None
        verified_on: Verification date stamped on every record
        dedupe: Collapse records sharing a natural key

    Returns:
        Normalized records in seed order

    Raises:
        NotFoundError: If an API is unknown or has no curated seed
        RecordValidationError: If a seed row is incomplete
    """
    registry = registry or get_api_registry()
    if apis is None:
        names = registry.active_names
    else:
        names = [registry.get(name).name for name in apis]

    log_pipeline_stage(logger, "seed", "started")
    seed = build_seed(names)
    log_pipeline_stage(logger, "seed", "completed", count=len(seed))

    log_pipeline_stage(logger, "normalize", "started")
    records = normalize_all(seed, registry, verified_on)
    if dedupe:
        records = deduplicate(records)
    log_pipeline_stage(logger, "normalize", "completed", count=len(records))

    return records


def build_snapshot(
    output: Union[str, Path],
    apis: Optional[Iterable[str]] = None,
    registry: Optional[APIRegistry] = None,
    verified_on: Optional[date] = None,
    dedupe: bool = False,
) -> List[ErrorRecord]:
    """
    Build the dataset and write it as a snapshot.

    Nothing is written when the seed fails validation.
    """
    records = build_dataset(apis, registry, verified_on, dedupe)
    write_snapshot(records, output)
    return records
