"""
Plan Catalog - Membership Service
Tiers: BRONZE | SILVER | GOLD, plus a fallback for any other plan string.
"""

from dataclasses import dataclass
from enum import Enum

UNKNOWN_PLAN_PRICE = "N/A"
UNKNOWN_PLAN_COLOR = "#7c3aed"


@dataclass(frozen=True)
class PlanDetails:
    display_name: str
    price: str
    accent_color: str
    tier: "Plan | None" = None

    @property
    def is_known(self):
        return self.tier is not None

    def to_dict(self):
        return {
            "plan": self.display_name,
            "price": self.price,
        }


class Plan(Enum):
    BRONZE = ("bronze", "Bronze Membership", "€453.32", "#cd7f32")
    SILVER = ("silver", "Silver Membership", "€649.99", "#c0c0c0")
    GOLD = ("gold", "Gold Membership", "€999.99", "#ffd700")

    def __init__(self, key, display_name, price, accent_color):
        self.key = key
        self.display_name = display_name
        self.price = price
        self.accent_color = accent_color

    @classmethod
    def from_key(cls, plan_key):
        """Case-insensitive match against the tier keys, None when unrecognised."""
        normalized = (plan_key or "").lower()
        for plan in cls:
            if plan.key == normalized:
                return plan
        return None

    def details(self):
        return PlanDetails(
            display_name=self.display_name,
            price=self.price,
            accent_color=self.accent_color,
            tier=self,
        )


def unknown_plan(plan_key):
    return PlanDetails(
        display_name=plan_key,
        price=UNKNOWN_PLAN_PRICE,
        accent_color=UNKNOWN_PLAN_COLOR,
    )


def lookup_plan(plan_key):
    """Resolve a plan key to its details. Never fails."""
    plan = Plan.from_key(plan_key)
    if plan is None:
        return unknown_plan(plan_key)
    return plan.details()
