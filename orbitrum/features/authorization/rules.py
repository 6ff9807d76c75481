"""
orbitrum/features/authorization/rules.py

Action authorization gate.

Decides whether a user may attempt a class of action, from role and document
verification alone. It does not look at balances: the withdrawal and
consumption checks decide whether a specific amount fits. A request succeeds
end-to-end only when both agree.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Dict, Optional, Union

from orbitrum.models.account import Role
from orbitrum.models.results import GateDecision


class Action(str, Enum):
    BUY_TOKENS = "buyTokens"
    HIRE_SERVICES = "hireServices"
    SUBSCRIBE_PLAN = "subscribePlan"
    WITHDRAW_CASHBACK = "withdrawCashback"
    WORK_AS_PROFESSIONAL = "workAsProfessional"


@dataclass(frozen=True)
class CapabilityRule:
    """What a product line grants and what it demands."""
    requires_documents: bool
    description: str
    has_cashback: bool = False
    cashback_rate: Optional[Decimal] = None
    can_withdraw: bool = False


BUSINESS_RULES: Dict[str, CapabilityRule] = {
    # Token packs (R$ 3, 6, 9, 18, 32): immediate use, no paperwork
    "token_purchase": CapabilityRule(
        requires_documents=False,
        description="Tokens to spend on professional services, usable immediately without documents",
    ),
    "service_hiring": CapabilityRule(
        requires_documents=True,
        description="Hiring professionals requires verified documents",
    ),
    # Monthly plans (R$ 7, 14, 21, 30)
    "monthly_plan": CapabilityRule(
        requires_documents=True,
        description="Monthly plans; verified documents required for cashback and withdrawals",
        has_cashback=True,
        cashback_rate=Decimal("8.7"),
        can_withdraw=True,
    ),
    "professional": CapabilityRule(
        requires_documents=True,
        description="Professionals must have verified documents to offer services",
    ),
}

NOTIFICATION_MESSAGES: Dict[str, str] = {
    "token_purchase_success": "Tokens credited! Subscribe to a monthly plan to get 8.7% cashback and withdrawals.",
    "service_hiring_blocked": "Verify your documents before hiring professionals.",
    "plan_without_documents": "Plan active! Send your documents to receive 8.7% monthly cashback and withdraw.",
    "professional_blocked": "Professionals need verified documents to offer services on the platform.",
    "withdrawal_blocked": "Withdrawals are only available to users with verified documents.",
}

REASON_HIRE_DOCUMENTS = "Verified documents are required to hire professional services."
REASON_PLAN_DOCUMENTS = "Documents are required to receive 8.7% cashback and make withdrawals."
REASON_WITHDRAW_DOCUMENTS = "Document verification is required for withdrawals."
REASON_ROLE_MISMATCH = "Only registered professionals can offer services."
REASON_WORK_DOCUMENTS = "Professionals must have verified documents to work on the platform."
REASON_UNRECOGNIZED = "Unrecognized action."


def _coerce(enum_cls, value):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        return None


def authorize(
    role: Union[Role, str],
    action: Union[Action, str],
    has_verified_documents: bool,
) -> GateDecision:
    """
    Eligibility decision for one action.

    Args:
        role: client, professional or admin (enum or string value)
        action: One of the Action values (enum or string value)
        has_verified_documents: Whether identity documents are approved

    Returns:
        GateDecision; unknown actions are denied, never raised
    """
    user_role = _coerce(Role, role)
    requested = _coerce(Action, action)

    if requested == Action.BUY_TOKENS:
        return GateDecision(allowed=True, requires_documents=False)

    if requested == Action.HIRE_SERVICES:
        if not has_verified_documents:
            return GateDecision(allowed=False, reason=REASON_HIRE_DOCUMENTS, requires_documents=True)
        return GateDecision(allowed=True)

    if requested == Action.SUBSCRIBE_PLAN:
        # Subscribing is open; cashback and withdrawals wait for documents
        return GateDecision(
            allowed=True,
            requires_documents=True,
            reason=None if has_verified_documents else REASON_PLAN_DOCUMENTS,
        )

    if requested == Action.WITHDRAW_CASHBACK:
        if not has_verified_documents:
            return GateDecision(allowed=False, reason=REASON_WITHDRAW_DOCUMENTS, requires_documents=True)
        return GateDecision(allowed=True)

    if requested == Action.WORK_AS_PROFESSIONAL:
        if user_role != Role.PROFESSIONAL:
            return GateDecision(allowed=False, reason=REASON_ROLE_MISMATCH)
        if not has_verified_documents:
            return GateDecision(allowed=False, reason=REASON_WORK_DOCUMENTS, requires_documents=True)
        return GateDecision(allowed=True)

    return GateDecision(allowed=False, reason=REASON_UNRECOGNIZED)
