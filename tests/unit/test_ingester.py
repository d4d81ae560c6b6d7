"""
Unit tests for snapshot ingestion.
"""

from unittest.mock import AsyncMock, patch

import pytest

from errata.errors import UpstreamUnavailableError
from errata.models.severity import Severity
from errata.services.ingester import Ingester, calculate_upvotes, generate_code_example
from errata.services.store import InMemoryErrorStore


@pytest.fixture
def records(make_record):
    return [
        make_record("parameter_missing", params_implicated=["amount", "currency"], severity="blocking"),
        make_record("coupon_expired", method=None),
        make_record(None, error_type="api_error"),
        make_record("not_found", api="GitHub", resource="repositories", http_status=404),
    ]


@pytest.mark.asyncio
async def test_ingest_creates_nodes(records, registry):
    """Test every record becomes a pattern with one solution."""
    store = InMemoryErrorStore()

    reports = await Ingester(store, registry).ingest(records)

    assert [r.api for r in reports] == ["Stripe", "GitHub"]
    assert [(r.total, r.succeeded, r.failed) for r in reports] == [(3, 3, 0), (1, 1, 0)]
    assert reports[0].success_rate == 100.0
    assert len(store.apis) == 2
    assert len(store.patterns) == 4
    assert len(store.solutions) == 4
    assert len(store.parameters) == 2


@pytest.mark.asyncio
async def test_ingest_pattern_fields(records, registry):
    """Test pattern descriptions and defaults."""
    store = InMemoryErrorStore()

    await Ingester(store, registry).ingest(records)

    patterns = {p.code: p for p in store.patterns.values()}
    assert patterns["parameter_missing"].description == (
        "invalid_request_error: parameter_missing happened"
    )
    assert patterns["parameter_missing"].severity == "critical"
    assert patterns["coupon_expired"].method == "POST"
    assert patterns["api_error"].http_status == 400
    assert patterns["not_found"].http_status == 404


@pytest.mark.asyncio
async def test_ingest_parameters(records, registry):
    """Test one parameter node per implicated parameter."""
    store = InMemoryErrorStore()

    await Ingester(store, registry).ingest(records[:1])

    parameters = sorted(store.parameters.values(), key=lambda p: p.name)
    assert [p.name for p in parameters] == ["amount", "currency"]
    assert parameters[0].example == '"example_amount"'
    assert parameters[0].description == "Parameter involved in parameter_missing"
    assert parameters[0].required is True


@pytest.mark.asyncio
async def test_ingest_upvotes_follow_severity(records, registry):
    """Test solution upvotes by record severity."""
    store = InMemoryErrorStore()

    await Ingester(store, registry).ingest(records[:2])

    found = await store.find_solutions_by_error_code("parameter_missing")
    assert found.solutions[0].upvotes == 10
    found = await store.find_solutions_by_error_code("coupon_expired")
    assert found.solutions[0].upvotes == 5


@pytest.mark.asyncio
async def test_ingest_continues_after_failure(records, registry):
    """Test a failing record is counted and the run continues."""
    store = InMemoryErrorStore()
    original = store.create_error_pattern

    async def flaky(**kwargs):
        if kwargs["code"] == "coupon_expired":
            raise UpstreamUnavailableError("createErrorPattern", "HTTP 500", 500)
        return await original(**kwargs)

    with patch.object(store, "create_error_pattern", side_effect=flaky):
        reports = await Ingester(store, registry).ingest(records)

    assert reports[0].succeeded == 2
    assert reports[0].failed == 1
    assert reports[0].failed_codes == ["coupon_expired"]
    assert reports[1].succeeded == 1
    assert len(store.patterns) == 3


@pytest.mark.asyncio
async def test_ingest_propagates_api_node_failure(records, registry):
    """Test the run stops when the API node cannot be created."""
    store = InMemoryErrorStore()
    store.create_api = AsyncMock(side_effect=UpstreamUnavailableError("createAPI", "refused"))

    with pytest.raises(UpstreamUnavailableError):
        await Ingester(store, registry).ingest(records)


def test_calculate_upvotes():
    """Test upvotes per severity."""
    assert calculate_upvotes(Severity.CRITICAL) == 10
    assert calculate_upvotes(Severity.ERROR) == 7
    assert calculate_upvotes(Severity.WARNING) == 5


def test_stripe_code_example(make_record):
    """Test Stripe examples use the resource class and code."""
    example = generate_code_example(make_record("parameter_missing", resource="payment_intent"))

    assert "stripe.PaymentIntent.create(" in example
    assert 'e.code == "parameter_missing"' in example
    assert "# Do the right thing." in example


def test_github_code_example(make_record):
    """Test GitHub examples call the resource URL and check the status."""
    record = make_record("not_found", api="GitHub", resource="repositories", http_status=404)

    example = generate_code_example(record)

    assert "https://api.github.com/repositories" in example
    assert "response.status_code == 404" in example
