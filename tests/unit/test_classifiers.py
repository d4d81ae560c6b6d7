"""
Unit tests for the rule-based classifiers.
"""

import pytest

from errata.models.severity import Severity
from errata.pipeline.classifiers import (
    CATEGORY_RULES,
    categorize,
    categorize_for_dashboard,
    derive_tags,
    estimate_frequency,
    first_match,
    infer_severity,
    suggest_solution,
)


@pytest.mark.parametrize("code,expected", [
    ("rate_limit_exceeded", "Rate Limiting"),
    ("customer_max_subscriptions", "Account Management"),
    ("api_key_expired", "Authentication"),
    ("card_declined", "Payment Processing"),
    ("parameter_missing", "Validation"),
    ("webhook_signature_verification_failed", "Webhooks"),
    ("payouts_not_allowed", "Transfers & Payouts"),
    ("invoice_upcoming_none", "Subscriptions"),
    ("platform_api_key_expired", "Authentication"),
    ("shipping_calculation_failed", "Tax & Shipping"),
    ("not_found", "General"),
])
def test_categorize(code, expected):
    """Test category rules are evaluated first-match-wins."""
    assert categorize(code) == expected


def test_categorize_rule_order_matters():
    """Test a code matching two rules gets the earlier rule's category."""
    # "card" (payment) precedes "invalid" (validation)
    assert categorize("card_number_invalid") == "Payment Processing"
    reversed_rules = list(reversed(CATEGORY_RULES))
    assert first_match(reversed_rules, "card_number_invalid", "General") == "Validation"


def test_categorize_is_case_sensitive():
    """Test markers are matched against the code as written."""
    assert categorize("CARD_DECLINED") == "General"


@pytest.mark.parametrize("code,expected", [
    ("authentication_error", "Authentication"),
    ("api_key_expired", "Authentication"),
    ("card_declined", "Payment"),
    ("parameter_missing", "Validation"),
    ("rate_limit", "Rate Limiting"),
    ("balance_insufficient", "Account"),
    ("not_found", "General"),
])
def test_categorize_for_dashboard(code, expected):
    """Test the lighter dashboard grouping."""
    assert categorize_for_dashboard(code) == expected


@pytest.mark.parametrize("code,expected", [
    ("parameter_missing", "Very Common"),
    ("card_declined", "Common"),
    ("api_key_expired", "Common"),
    ("rate_limit", "Uncommon"),
    ("webhook_timeout", "Rare"),
    ("not_found", "Moderate"),
])
def test_estimate_frequency(code, expected):
    """Test frequency estimation from code keywords."""
    assert estimate_frequency(code) == expected


def test_infer_severity_critical_from_code():
    """Test credential-related codes are critical."""
    assert infer_severity("api_key_expired") == Severity.CRITICAL
    assert infer_severity("forbidden") == Severity.CRITICAL


def test_infer_severity_critical_from_description():
    """Test authentication wording in the description is critical."""
    assert infer_severity("card_declined", "Authentication is required") == Severity.CRITICAL


def test_infer_severity_warning():
    """Test expiry and advisory wording are warnings."""
    assert infer_severity("coupon_expired") == Severity.WARNING
    assert infer_severity("amount_too_small", "We recommend a larger amount") == Severity.WARNING


def test_infer_severity_default_error():
    """Test everything else is an error."""
    assert infer_severity("not_found", "Not Found") == Severity.ERROR
    assert infer_severity("amount_too_small") == Severity.ERROR


def test_derive_tags():
    """Test tags combine base, keyword and category tags."""
    tags = derive_tags("card_declined", "Payment Processing", base=("stripe", "api"))

    assert tags == ["stripe", "api", "card", "payment", "payment_processing"]


def test_derive_tags_removes_duplicates():
    """Test duplicate tags keep their first position."""
    tags = derive_tags("card_declined", "Payment Processing", base=("card",))

    assert tags == ["card", "payment", "payment_processing"]


def test_suggest_solution_mentions_api():
    """Test solution templates are filled with the API name."""
    assert "GitHub" in suggest_solution("Authentication", "GitHub")
    assert suggest_solution("Tax & Shipping", "Stripe") == (
        "Review the Stripe API documentation for this specific error."
    )
