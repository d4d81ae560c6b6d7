"""
Unit tests for the normalizer.
"""

from datetime import date

import pytest
from pydantic import ValidationError

from errata.errors import NotFoundError
from errata.models.error_record import LinkTarget, SeedRecord
from errata.models.severity import BuildSeverity, Severity
from errata.pipeline.build import build_dataset
from errata.pipeline.normalizer import (
    MISSING_DESCRIPTION,
    deduplicate,
    link_target,
    natural_key,
    normalize,
    normalize_all,
    normalize_loaded,
    repair_record,
)

VERIFIED_ON = date(2024, 1, 15)


def test_end_to_end_card_decline(registry):
    """Test a declined card gets its status, decline link and category."""
    seed = SeedRecord(
        api="Stripe",
        resource="payment_intent",
        error_type="card_error",
        error_code="card_declined",
        decline_code="insufficient_funds",
        error_message="The customer's account has insufficient funds",
    )

    record = normalize(seed, registry, VERIFIED_ON)

    assert record.http_status == 402
    assert record.source_url.endswith("#insufficient_funds")
    assert record.source_url.startswith("https://docs.stripe.com/declines/codes")
    assert "Payment" in record.category
    assert record.last_verified == VERIFIED_ON


def test_normalize_is_idempotent(registry):
    """Test a second pass over every built record changes nothing."""
    records = build_dataset(registry=registry, verified_on=VERIFIED_ON)

    assert records
    for record in records:
        assert normalize(record, registry, date(2030, 1, 1)) == record


def test_link_precedence_decline_over_error_code(make_record):
    """Test decline codes win over error codes."""
    record = make_record("card_declined", error_type="card_error", decline_code="expired_card")

    assert record.source_url == "https://docs.stripe.com/declines/codes#expired_card"
    assert "error-codes" not in record.source_url


def test_link_for_error_code(make_record):
    """Test error codes deep-link into the error-code page."""
    record = make_record("parameter_missing")

    assert record.source_url == "https://docs.stripe.com/error-codes#parameter_missing"


def test_link_for_type_only_record(make_record):
    """Test records without any code link to the error-code index."""
    record = make_record(None, error_type="api_error")

    assert record.source_url == "https://docs.stripe.com/error-codes"


def test_link_target_selection():
    """Test the link branch chosen from the present fields."""
    assert link_target({"decline_code": "x", "error_code": "y"}) is LinkTarget.DECLINE_CODE
    assert link_target({"error_code": "y"}) is LinkTarget.ERROR_CODE
    assert link_target({"error_type": "authentication_error"}) is LinkTarget.API_ERRORS
    assert link_target({"error_type": "api_error"}) is LinkTarget.ERROR_CODES_INDEX


def test_rate_limit_status_is_always_429(make_record):
    """Test the rate-limit override ignores any supplied status."""
    record = make_record(None, error_type="rate_limit_error", http_status=400)

    assert record.http_status == 429


def test_default_status_only_fills_missing(make_record):
    """Test explicit statuses are kept for non rate-limit errors."""
    assert make_record("resource_missing", http_status=404).http_status == 404
    assert make_record("resource_missing").http_status == 400
    assert make_record(None, error_type="api_error").http_status is None


def test_authentication_errors_never_keep_a_code(make_record):
    """Test authentication errors drop their code and link to the errors page."""
    record = make_record("api_key_expired", error_type="authentication_error")

    assert record.error_code is None
    assert record.http_status == 401
    assert record.source_url == "https://docs.stripe.com/api/errors"
    assert natural_key(record) == "authentication_error"
    assert record.category == "Authentication"


def test_authentication_hygiene_applies_to_every_api(make_record):
    """Test GitHub authentication errors are stripped as well."""
    record = make_record(
        "bad_credentials",
        api="GitHub",
        resource="authentication",
        error_type="authentication_error",
        http_status=401,
    )

    assert record.error_code is None
    assert record.source_url.startswith("https://docs.github.com/en/rest/authentication")


def test_any_resource_uses_api_default(make_record):
    """Test the resource heuristic per API."""
    assert make_record("parameter_missing", resource="any").resource == "payment_intent"
    assert make_record("validation_failed", api="GitHub", resource="any").resource == "repositories"
    assert make_record("parameter_missing", resource="customer").resource == "customer"


def test_build_severity_is_mapped(make_record):
    """Test seed severities map onto the canonical vocabulary."""
    blocking = make_record("amount_too_small", severity="blocking")
    transient = make_record("idempotency_key_in_use", severity="transient")
    config = make_record("country_unsupported", severity="config")

    assert blocking.severity == Severity.CRITICAL
    assert blocking.build_severity == BuildSeverity.BLOCKING
    assert transient.severity == Severity.WARNING
    assert config.severity == Severity.ERROR


def test_display_severity_is_kept(make_record):
    """Test a canonical seed severity passes through unchanged."""
    record = make_record("not_found", api="GitHub", severity="warning")

    assert record.severity == Severity.WARNING
    assert record.build_severity is None


def test_missing_severity_is_inferred(make_record):
    """Test severity inference when the seed has none."""
    assert make_record("coupon_expired").severity == Severity.WARNING
    assert make_record("amount_too_small").severity == Severity.ERROR


def test_derived_fields(make_record):
    """Test category, frequency and tags are computed from the natural code."""
    record = make_record("card_declined", error_type="card_error")

    assert record.category == "Payment Processing"
    assert record.frequency == "Common"
    assert record.tags[:2] == ["stripe", "api"]
    assert "card" in record.tags
    assert "payment_processing" in record.tags


def test_existing_verification_date_is_kept(make_record, registry):
    """Test re-normalizing keeps the original verification date."""
    record = make_record("parameter_missing")

    again = normalize(record, registry, date(2030, 1, 1))

    assert again.last_verified == record.last_verified


def test_unknown_api_raises(make_seed, registry):
    """Test records of unregistered APIs are rejected."""
    with pytest.raises(NotFoundError):
        normalize(make_seed("x_y", api="Nope"), registry, VERIFIED_ON)


def test_missing_message_is_rejected(make_seed, registry):
    """Test a record without description cannot be normalized."""
    with pytest.raises(ValidationError):
        normalize(make_seed("parameter_missing", error_message=None), registry, VERIFIED_ON)


def test_deduplicate_keeps_first_occurrence(make_seed, registry):
    """Test records sharing a code collapse to the first normalized one."""
    first = make_seed("card_declined", error_type="card_error", decline_code="generic_decline")
    second = make_seed("card_declined", error_type="card_error", decline_code="insufficient_funds")

    records = deduplicate(normalize_all([first, second], registry, VERIFIED_ON))

    assert len(records) == 1
    assert records[0] == normalize(first, registry, VERIFIED_ON)


def test_deduplicate_uses_error_type_without_code(make_record):
    """Test type-only records dedupe on their error type."""
    records = [
        make_record(None, error_type="rate_limit_error"),
        make_record(None, error_type="rate_limit_error", error_message="Slow down"),
        make_record("parameter_missing"),
    ]

    assert [natural_key(r) for r in deduplicate(records)] == ["rate_limit_error", "parameter_missing"]


def test_deduplicate_keeps_same_code_of_different_apis(make_record):
    """Test identical codes from different APIs stay distinct."""
    records = [
        make_record("validation_failed"),
        make_record("validation_failed", api="GitHub"),
    ]

    assert len(deduplicate(records)) == 2


def test_repair_record_fills_fallbacks():
    """Test missing display fields are replaced, not dropped."""
    repaired = repair_record({"api": "GitHub", "error_code": "not_found", "error_message": ""})

    assert repaired["error_message"] == MISSING_DESCRIPTION
    assert repaired["solution_description"] == "Check GitHub documentation for solutions"


def test_repair_record_keeps_present_fields():
    """Test present fields are untouched and the input is not mutated."""
    raw = {"api": "Stripe", "error_message": "Boom", "solution_description": "Retry"}

    repaired = repair_record(raw)

    assert repaired == raw
    assert repaired is not raw


def test_repair_record_uses_fallback_api_name():
    """Test the API argument fills a missing api."""
    repaired = repair_record({"error_message": "Boom"}, api="Stripe")

    assert repaired["api"] == "Stripe"
    assert repaired["solution_description"] == "Check Stripe documentation for solutions"


def test_normalize_loaded_keeps_well_formed_rows(registry):
    """Test reloading a normalized row yields the identical record."""
    for record in build_dataset(registry=registry, verified_on=VERIFIED_ON):
        raw = record.model_dump(mode="json", exclude={"code"})
        assert normalize_loaded(raw, registry) == record


def test_normalize_loaded_drops_unknown_severity(make_record, registry):
    """Test an unknown severity is replaced by the inferred one."""
    raw = make_record("coupon_expired").model_dump(mode="json", exclude={"code"})
    raw["severity"] = "fatal"

    record = normalize_loaded(raw, registry)

    assert record.severity == Severity.WARNING
    assert record.last_verified == VERIFIED_ON
