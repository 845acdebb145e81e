"""
Creator plan catalog.

Each plan bounds how many resources a creator may upload and what share of
each sale the marketplace keeps.

Dependencies: None
System role: Plan limits and commission rules
"""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class PlanTerms:
    """Upload limit and commission for one creator plan."""

    name: str
    monthly_price: Decimal
    max_resources: int | None
    commission_rate: Decimal
    featured_placement: bool = False


PLANS: dict[str, PlanTerms] = {
    "free": PlanTerms("free", Decimal("0.00"), 5, Decimal("0.25")),
    "basic": PlanTerms("basic", Decimal("9.99"), 20, Decimal("0.20")),
    "premium": PlanTerms("premium", Decimal("24.99"), 100, Decimal("0.15"), True),
    "professional": PlanTerms("professional", Decimal("49.99"), None, Decimal("0.10"), True),
}

DEFAULT_PLAN = "free"


def get_plan(name: str | None) -> PlanTerms:
    """Return plan terms, falling back to the free plan for unknown names."""
    return PLANS.get(name or DEFAULT_PLAN, PLANS[DEFAULT_PLAN])


def can_upload(plan_name: str | None, current_count: int) -> bool:
    """Check whether a creator with current_count resources may add another."""
    limit = get_plan(plan_name).max_resources
    return limit is None or current_count < limit


def net_earnings(plan_name: str | None, gross: Decimal) -> Decimal:
    """Creator earnings after the plan's commission, rounded to cents."""
    rate = get_plan(plan_name).commission_rate
    return (gross * (Decimal("1") - rate)).quantize(Decimal("0.01"))
