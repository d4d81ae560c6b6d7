"""
Unit tests for the curated seed and the dataset build.
"""

import json
from datetime import date
from unittest.mock import patch

import pytest

from errata.errors import NotFoundError, RecordValidationError
from errata.pipeline.build import build_dataset, build_snapshot
from errata.pipeline.normalizer import natural_key
from errata.pipeline.seed import GITHUB_SEED, STRIPE_SEED, build_seed, validate_seed

VERIFIED_ON = date(2024, 1, 15)


def test_build_seed_is_deterministic():
    """Test the seed yields the same records in the same order."""
    assert build_seed() == build_seed()
    assert len(build_seed()) == len(STRIPE_SEED) + len(GITHUB_SEED)


def test_stripe_seed_covers_curated_codes():
    """Test the Stripe seed carries the full curated code set once each."""
    codes = [row.get("error_code") for row in STRIPE_SEED]

    for code in (
        "country_code_invalid",
        "customer_tax_location_invalid",
        "billing_invalid_mandate",
        "financial_connections_account_inactive",
        "instant_payouts_limit_exceeded",
        "invoice_not_editable",
        "bank_account_unusable",
        "charge_exceeds_transaction_limit",
        "out_of_inventory",
        "debit_not_authorized",
    ):
        assert codes.count(code) == 1, code
    assert len(STRIPE_SEED) == 65


def test_build_seed_for_selected_apis():
    """Test APIs are emitted in the order requested."""
    records = build_seed(["GitHub", "Stripe"])

    assert records[0].api == "GitHub"
    assert records[-1].api == "Stripe"


def test_build_seed_unknown_api():
    """Test an API without curated rows is rejected."""
    with pytest.raises(NotFoundError):
        build_seed(["Twilio"])


def test_validate_seed_reports_every_problem():
    """Test all incomplete rows are reported at once."""
    rows = [
        {"api": "Stripe", "resource": "any", "error_type": "api_error", "error_message": "ok"},
        {"api": "Stripe", "resource": "any", "error_type": "api_error", "error_code": "no_message"},
        {"api": "Stripe", "resource": "any", "error_type": "api_error", "error_message": "   "},
        {"api": "Stripe", "error_type": "api_error", "error_message": "no resource"},
    ]

    with pytest.raises(RecordValidationError) as exc_info:
        validate_seed(rows)

    problems = exc_info.value.problems
    assert len(problems) == 3
    assert "no_message" in problems[0]
    assert "row 3" in problems[2]


def test_validate_seed_accepts_curated_rows():
    """Test every curated row is complete."""
    assert len(validate_seed(STRIPE_SEED + GITHUB_SEED)) == len(STRIPE_SEED) + len(GITHUB_SEED)


def test_build_dataset_invariants(registry):
    """Test status and authentication invariants hold on the built dataset."""
    records = build_dataset(registry=registry, verified_on=VERIFIED_ON)

    assert {r.api for r in records} == {"Stripe", "GitHub"}
    assert all(r.last_verified == VERIFIED_ON for r in records)
    for record in records:
        if record.error_type == "rate_limit_error":
            assert record.http_status == 429
        if record.error_type == "authentication_error":
            assert record.error_code is None
        assert record.resource != "any"
        assert record.error_message


def test_build_dataset_is_deterministic(registry):
    """Test two builds with the same date are identical."""
    first = build_dataset(registry=registry, verified_on=VERIFIED_ON)
    second = build_dataset(registry=registry, verified_on=VERIFIED_ON)

    assert first == second


def test_build_dataset_keeps_duplicates_by_default(registry):
    """Test card decline variants survive unless deduplication is requested."""
    records = build_dataset(["Stripe"], registry, VERIFIED_ON)
    deduped = build_dataset(["Stripe"], registry, VERIFIED_ON, dedupe=True)

    declines = [r for r in records if natural_key(r) == "card_declined"]
    assert len(declines) == 3
    assert [natural_key(r) for r in deduped].count("card_declined") == 1
    assert [natural_key(r) for r in deduped].count("authentication_error") == 1


def test_build_dataset_resolves_api_names(registry):
    """Test API names are matched case-insensitively."""
    records = build_dataset(["github"], registry, VERIFIED_ON)

    assert {r.api for r in records} == {"GitHub"}


def test_build_dataset_unknown_api(registry):
    """Test unknown APIs are rejected."""
    with pytest.raises(NotFoundError):
        build_dataset(["Nope"], registry, VERIFIED_ON)


def test_build_snapshot_writes_file(tmp_path, registry):
    """Test the snapshot is written with every record."""
    path = tmp_path / "errors.json"

    records = build_snapshot(path, registry=registry, verified_on=VERIFIED_ON)

    assert len(json.loads(path.read_text(encoding="utf-8"))) == len(records)


def test_build_snapshot_writes_nothing_on_invalid_seed(tmp_path, registry):
    """Test a failed validation leaves no snapshot behind."""
    path = tmp_path / "errors.json"

    with patch("errata.pipeline.build.build_seed", side_effect=RecordValidationError(["row 0: bad"])):
        with pytest.raises(RecordValidationError):
            build_snapshot(path, registry=registry, verified_on=VERIFIED_ON)

    assert not path.exists()
