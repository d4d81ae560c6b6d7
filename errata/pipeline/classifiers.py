"""
Rule-based classifiers over error codes.

Every classifier is an ordered list of (substrings, result) rules evaluated
first-match-wins against the case-sensitive natural code. Rule order is
significant: codes such as ``customer_max_subscriptions`` match several rules.
"""

from typing import Iterable, List, Sequence, Tuple

from errata.models.severity import Severity

Rule = Tuple[Tuple[str, ...], str]

CATEGORY_RULES: List[Rule] = [
    (("auth", "key", "token", "secret"), "Authentication"),
    (("card", "payment", "charge", "source"), "Payment Processing"),
    (("parameter", "missing", "required", "invalid"), "Validation"),
    (("rate", "limit", "quota"), "Rate Limiting"),
    (("webhook", "event"), "Webhooks"),
    (("account", "customer", "person"), "Account Management"),
    (("transfer", "payout", "balance"), "Transfers & Payouts"),
    (("subscription", "plan", "invoice"), "Subscriptions"),
    (("connect", "platform"), "Stripe Connect"),
    (("tax", "shipping"), "Tax & Shipping"),
]

# Lighter grouping used by the dashboard stats
DASHBOARD_CATEGORY_RULES: List[Rule] = [
    (("authentication", "api_key"), "Authentication"),
    (("card", "payment"), "Payment"),
    (("parameter", "invalid"), "Validation"),
    (("rate_limit",), "Rate Limiting"),
    (("account", "balance"), "Account"),
]

FREQUENCY_RULES: List[Rule] = [
    (("invalid", "missing", "required"), "Very Common"),
    (("card", "payment", "charge"), "Common"),
    (("auth", "key"), "Common"),
    (("rate", "limit"), "Uncommon"),
    (("webhook", "connect"), "Rare"),
]

TAG_RULES: List[Tuple[str, Tuple[str, ...]]] = [
    ("card", ("card", "payment")),
    ("customer", ("customer", "account")),
    ("auth", ("authentication", "security")),
    ("webhook", ("webhook", "events")),
    ("connect", ("connect", "platform")),
    ("subscription", ("subscription", "recurring")),
    ("transfer", ("transfer", "payout")),
]

CRITICAL_CODE_MARKERS = ("auth", "key", "secret", "forbidden", "unauthorized")
CRITICAL_DESCRIPTION_MARKERS = ("authentication", "unauthorized")
WARNING_CODE_MARKERS = ("expired", "deprecated")
WARNING_DESCRIPTION_MARKERS = ("warning", "recommend")

DEFAULT_CATEGORY = "General"
DEFAULT_FREQUENCY = "Moderate"

SOLUTIONS_BY_CATEGORY = {
    "Authentication": "Verify your {api} API key is correct and has the necessary permissions.",
    "Payment Processing": "Verify the payment method details are correct and valid.",
    "Validation": "Check that all required parameters are included in your request.",
    "Account Management": "Verify the account or customer ID exists and is accessible.",
    "Rate Limiting": "Implement exponential backoff in your retry logic.",
    "Webhooks": "Verify your webhook endpoint is accessible and returns a 2xx status.",
    DEFAULT_CATEGORY: "Review the {api} API documentation for this specific error.",
}


def _contains_any(text: str, markers: Iterable[str]) -> bool:
    return any(marker in text for marker in markers)


def first_match(rules: Sequence[Rule], text: str, default: str) -> str:
    """Return the result of the first rule with a substring contained in ``text``."""
    for markers, result in rules:
        if _contains_any(text, markers):
            return result
    return default


def categorize(code: str) -> str:
    """Coarse category of an error code."""
    return first_match(CATEGORY_RULES, code, DEFAULT_CATEGORY)


def categorize_for_dashboard(code: str) -> str:
    return first_match(DASHBOARD_CATEGORY_RULES, code, DEFAULT_CATEGORY)


def estimate_frequency(code: str) -> str:
    """How often developers hit this error, estimated from its code."""
    return first_match(FREQUENCY_RULES, code, DEFAULT_FREQUENCY)


def infer_severity(code: str, description: str = "") -> Severity:
    """
    Infer severity from the code and its human-readable description.

    Code markers are matched case-sensitively, description markers against
    the lower-cased description.
    """
    lowered = (description or "").lower()

    if _contains_any(code, CRITICAL_CODE_MARKERS) or _contains_any(lowered, CRITICAL_DESCRIPTION_MARKERS):
        return Severity.CRITICAL

    if _contains_any(code, WARNING_CODE_MARKERS) or _contains_any(lowered, WARNING_DESCRIPTION_MARKERS):
        return Severity.WARNING

    return Severity.ERROR


def derive_tags(code: str, category: str, base: Sequence[str] = ()) -> List[str]:
    """
    Keyword tags for a code.

    Starts from ``base``, adds keyword tags, then the snake-cased category.
    Duplicates are removed keeping first-seen order.
    """
    tags = list(base)

    for marker, keyword_tags in TAG_RULES:
        if marker in code:
            tags.extend(keyword_tags)

    tags.append(category.lower().replace(" ", "_"))

    return list(dict.fromkeys(tags))


def suggest_solution(category: str, api: str) -> str:
    """Generic fix for a category, used when no curated solution exists."""
    template = SOLUTIONS_BY_CATEGORY.get(category, SOLUTIONS_BY_CATEGORY[DEFAULT_CATEGORY])
    return template.format(api=api)
