"""
orbitrum/features/plans/catalog.py

Plan tiers, plan prices and token packs.

Handles:
- Plan token grants (used once, at plan activation)
- Monthly plan prices
- Token pack lookup and BRL-to-token conversion for purchases
"""

from decimal import Decimal, ROUND_FLOOR
from typing import Dict, Optional, Union

from orbitrum.core.config import settings
from orbitrum.core.errors import ValidationError
from orbitrum.models.account import PlanName, to_decimal


DEFAULT_PLANS = {
    PlanName.NONE: {"name": "No plan", "price_brl": Decimal("0.00"), "tokens": 0},
    PlanName.BASIC: {"name": "Basic Plan", "price_brl": Decimal("7.00"), "tokens": 7000},
    PlanName.STANDARD: {"name": "Standard Plan", "price_brl": Decimal("14.00"), "tokens": 14000},
    PlanName.PRO: {"name": "Pro Plan", "price_brl": Decimal("21.00"), "tokens": 21000},
    PlanName.MAX: {"name": "Max Plan", "price_brl": Decimal("30.00"), "tokens": 30000},
}

PLAN_TOKEN_GRANTS: Dict[PlanName, int] = {plan: cfg["tokens"] for plan, cfg in DEFAULT_PLANS.items()}
PLAN_PRICES_BRL: Dict[PlanName, Decimal] = {
    plan: cfg["price_brl"] for plan, cfg in DEFAULT_PLANS.items() if plan != PlanName.NONE
}

# Token packs keyed by price in BRL
TOKEN_PACKAGES = {
    Decimal("3"): {"tokens": 2160, "name": "Starter Pack"},
    Decimal("6"): {"tokens": 4320, "name": "Pro Boost"},
    Decimal("9"): {"tokens": 6480, "name": "Max Expansion"},
    Decimal("18"): {"tokens": 12960, "name": "Orbit Premium"},
    Decimal("32"): {"tokens": 23040, "name": "Galaxy Vault"},
}


def resolve_plan(plan: Union[PlanName, str]) -> Optional[PlanName]:
    if isinstance(plan, PlanName):
        return plan
    try:
        return PlanName((plan or "").lower())
    except ValueError:
        return None


def initial_tokens(plan: Union[PlanName, str]) -> int:
    """Token grant for a plan tier; unknown tiers grant nothing."""
    resolved = resolve_plan(plan)
    if resolved is None:
        return 0
    return PLAN_TOKEN_GRANTS[resolved]


def token_package(amount_brl) -> Optional[dict]:
    return TOKEN_PACKAGES.get(to_decimal(amount_brl))


def tokens_for_payment(amount_brl, tokens_per_brl: Optional[int] = None) -> int:
    """
    Tokens credited for a payment.

    A known pack price returns the pack grant; any other amount converts at
    the configured rate, rounded down.

    Raises:
        ValidationError: if the amount is not positive
    """
    amount = to_decimal(amount_brl)
    if amount <= 0:
        raise ValidationError(f"Payment amount must be positive (got {amount})")

    package = token_package(amount)
    if package:
        return package["tokens"]

    rate = tokens_per_brl or settings.TOKENS_PER_BRL
    return int((amount * rate).to_integral_value(rounding=ROUND_FLOOR))
