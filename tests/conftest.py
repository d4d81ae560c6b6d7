"""
Shared fixtures for the unit tests.
"""

from datetime import date

import pytest

from errata.models.error_record import SeedRecord
from errata.pipeline.normalizer import normalize
from errata.services.api_registry import DEFAULT_REGISTRY_PATH, APIRegistry

VERIFIED_ON = date(2024, 1, 15)


@pytest.fixture
def registry():
    """Registry loaded from the packaged apis.yaml."""
    return APIRegistry.from_yaml(DEFAULT_REGISTRY_PATH)


@pytest.fixture
def make_seed():
    """Factory for seed records with sensible defaults."""
    def _make(code=None, **overrides):
        fields = {
            "api": "Stripe",
            "resource": "payment_intent",
            "method": "POST",
            "error_type": "invalid_request_error",
            "error_code": code,
            "error_message": f"{code or 'error'} happened",
            "solution_title": "Fix it",
            "solution_description": "Do the right thing.",
        }
        fields.update(overrides)
        return SeedRecord(**fields)
    return _make


@pytest.fixture
def make_record(make_seed, registry):
    """Factory for normalized records."""
    def _make(code=None, **overrides):
        return normalize(make_seed(code, **overrides), registry, VERIFIED_ON)
    return _make
