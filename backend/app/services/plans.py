"""
Plan limits and month accounting.

Defines the monthly allowance of each subscription plan. Unknown plan values
fall back to the free tier.
"""
import enum
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, Optional


class Plan(str, enum.Enum):
    """Subscription plans."""
    FREE = "free"
    PLUS = "plus"
    PREMIUM = "premium"


@dataclass(frozen=True)
class PlanLimits:
    """Monthly allowance for one plan."""
    dreams: int
    images: int


PLAN_LIMITS: Dict[Plan, PlanLimits] = {
    Plan.FREE: PlanLimits(dreams=3, images=0),
    Plan.PLUS: PlanLimits(dreams=20, images=10),
    Plan.PREMIUM: PlanLimits(dreams=50, images=20),
}

DEFAULT_PLAN = Plan.FREE


def normalize_plan_name(plan: Optional[str]) -> str:
    """Lowercased plan name; empty values mean the default plan."""
    return (plan or DEFAULT_PLAN.value).lower()


def get_plan_limits(plan: Optional[str]) -> PlanLimits:
    """
    Get the monthly limits for a plan name.

    Args:
        plan: Stored plan value (case-insensitive)

    Returns:
        Limits for the plan, or the free tier's limits if unrecognized
    """
    try:
        return PLAN_LIMITS[Plan(normalize_plan_name(plan))]
    except ValueError:
        return PLAN_LIMITS[DEFAULT_PLAN]


def current_month_key(now: Optional[datetime] = None) -> str:
    """Accounting month for a moment in time, formatted as YYYY-MM (UTC)."""
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    return now.strftime("%Y-%m")
