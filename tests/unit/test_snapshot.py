"""
Unit tests for snapshot persistence.
"""

import json

import pytest

from errata.models.severity import BuildSeverity, Severity
from errata.pipeline.normalizer import MISSING_DESCRIPTION
from errata.pipeline.snapshot import load_snapshot, summarize, write_snapshot


@pytest.fixture
def records(make_record):
    return [
        make_record("card_declined", error_type="card_error", decline_code="generic_decline", severity="blocking"),
        make_record("parameter_missing", resource="customer", severity="config"),
        make_record(None, error_type="rate_limit_error", severity="transient"),
    ]


def test_write_and_load_snapshot(tmp_path, records):
    """Test a written snapshot loads back to the same records."""
    path = tmp_path / "errors.json"

    write_snapshot(records, path)

    assert load_snapshot(path) == records


def test_write_snapshot_format(tmp_path, records):
    """Test the snapshot is a JSON array without computed fields."""
    path = tmp_path / "nested" / "dir" / "errors.json"

    write_snapshot(records, path)

    data = json.loads(path.read_text(encoding="utf-8"))
    assert isinstance(data, list)
    assert len(data) == 3
    assert "code" not in data[0]
    assert data[0]["last_verified"] == "2024-01-15"
    assert data[0]["severity"] == "critical"
    assert not (path.parent / "errors.json.tmp").exists()


def test_write_snapshot_replaces_existing(tmp_path, records):
    """Test rewriting replaces the whole file."""
    path = tmp_path / "errors.json"
    write_snapshot(records, path)

    write_snapshot(records[:1], path)

    assert len(load_snapshot(path)) == 1


def test_load_snapshot_repairs_missing_fields(tmp_path, records):
    """Test records missing display fields are kept with fallbacks."""
    raw = records[0].model_dump(mode="json", exclude={"code"})
    raw["error_message"] = ""
    raw["solution_description"] = None
    path = tmp_path / "errors.json"
    path.write_text(json.dumps([raw]), encoding="utf-8")

    loaded = load_snapshot(path)

    assert len(loaded) == 1
    assert loaded[0].error_message == MISSING_DESCRIPTION
    assert loaded[0].solution_description == "Check Stripe documentation for solutions"


def test_load_snapshot_rebuilds_derived_fields(tmp_path, records):
    """Test rows without derived fields are renormalized instead of rejected."""
    raw = records[0].model_dump(mode="json", exclude={"code"})
    for field in ("category", "frequency", "source_url", "tags", "severity", "build_severity"):
        raw.pop(field)
    path = tmp_path / "errors.json"
    path.write_text(json.dumps([raw]), encoding="utf-8")

    loaded = load_snapshot(path)

    assert len(loaded) == 1
    assert loaded[0].category == records[0].category
    assert loaded[0].source_url == records[0].source_url
    assert loaded[0].tags == records[0].tags
    assert loaded[0].last_verified == records[0].last_verified


def test_load_snapshot_maps_build_severity(tmp_path, records):
    """Test a seed-vocabulary severity is mapped onto the canonical one."""
    raw = records[1].model_dump(mode="json", exclude={"code"})
    raw["severity"] = "blocking"
    raw.pop("build_severity")
    path = tmp_path / "errors.json"
    path.write_text(json.dumps([raw]), encoding="utf-8")

    loaded = load_snapshot(path)

    assert loaded[0].severity == Severity.CRITICAL
    assert loaded[0].build_severity == BuildSeverity.BLOCKING


def test_load_snapshot_keeps_minimal_rows(tmp_path):
    """Test a row with only an API and a code still loads with fallbacks."""
    path = tmp_path / "errors.json"
    path.write_text(json.dumps([{"api": "GitHub", "error_code": "not_found", "id": 7}]), encoding="utf-8")

    loaded = load_snapshot(path)

    assert len(loaded) == 1
    assert loaded[0].id == "7"
    assert loaded[0].error_type == "api_error"
    assert loaded[0].resource == "repositories"
    assert loaded[0].error_message == MISSING_DESCRIPTION


def test_load_snapshot_rejects_non_array(tmp_path):
    """Test a snapshot must be a JSON array."""
    path = tmp_path / "errors.json"
    path.write_text(json.dumps({"errors": []}), encoding="utf-8")

    with pytest.raises(ValueError):
        load_snapshot(path)


def test_load_snapshot_missing_file(tmp_path):
    """Test a missing snapshot raises FileNotFoundError."""
    with pytest.raises(FileNotFoundError):
        load_snapshot(tmp_path / "missing.json")


def test_summarize(records):
    """Test the build summary counts."""
    summary = summarize(records)

    assert summary["total"] == 3
    assert summary["by_error_type"] == {
        "card_error": 1,
        "invalid_request_error": 1,
        "rate_limit_error": 1,
    }
    assert summary["by_resource"] == {"payment_intent": 2, "customer": 1}
    assert summary["by_severity"] == {"critical": 1, "error": 1, "warning": 1}
    assert summary["by_build_severity"] == {"blocking": 1, "config": 1, "transient": 1}
    assert summary["categories"] == sorted({r.category for r in records})
