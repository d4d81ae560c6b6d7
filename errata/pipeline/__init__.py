"""Dataset pipeline: curated seed, normalization, transformation and snapshots."""

from errata.pipeline.build import build_dataset, build_snapshot
from errata.pipeline.normalizer import deduplicate, natural_key, normalize, normalize_all
from errata.pipeline.seed import build_seed, validate_seed
from errata.pipeline.snapshot import load_snapshot, summarize, write_snapshot
from errata.pipeline.transformer import transform_raw_errors

__all__ = [
    "build_dataset",
    "build_snapshot",
    "build_seed",
    "validate_seed",
    "normalize",
    "normalize_all",
    "deduplicate",
    "natural_key",
    "load_snapshot",
    "write_snapshot",
    "summarize",
    "transform_raw_errors",
]
