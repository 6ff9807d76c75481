"""
Result values returned by the token engine.

Every outcome, positive or negative, is one of these values. Nothing in the
policy layer raises for a denial.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Union

Number = Union[int, Decimal]


def _num(value: Optional[Number]) -> Optional[Union[int, str]]:
    # Decimals are rendered as strings so callers never see float rounding
    if value is None or isinstance(value, int):
        return value
    return str(value)


@dataclass(frozen=True)
class OperationResult:
    """
    Outcome of a feasibility check (consumption or withdrawal).

    Attributes:
        allowed: True when the requested amount fits the current limits
        message: Human-readable confirmation or denial reason
        new_balance: Projected balance after the operation (allowed only)
        limit: The numeric ceiling that was violated (denials only)
        requires_documents: Set when an eligibility check denied the request
    """

    allowed: bool
    message: str
    new_balance: Optional[Number] = None
    limit: Optional[Number] = None
    requires_documents: Optional[bool] = None

    def to_dict(self) -> dict:
        payload = {"allowed": self.allowed, "message": self.message}
        if self.new_balance is not None:
            payload["newBalance"] = _num(self.new_balance)
        if self.limit is not None:
            payload["limit"] = _num(self.limit)
        if self.requires_documents is not None:
            payload["requiresDocuments"] = self.requires_documents
        return payload


@dataclass(frozen=True)
class GateDecision:
    """Outcome of the action authorization gate (eligibility only)."""

    allowed: bool
    reason: Optional[str] = None
    requires_documents: Optional[bool] = None

    def to_dict(self) -> dict:
        payload: dict = {"allowed": self.allowed}
        if self.reason is not None:
            payload["reason"] = self.reason
        if self.requires_documents is not None:
            payload["requiresDocuments"] = self.requires_documents
        return payload


@dataclass(frozen=True)
class WalletView:
    """Read-only wallet summary for display."""

    plan_tokens: int
    earned_tokens: int
    purchased_tokens: int
    spent_tokens: int
    total_balance: int
    accrued_credits: Decimal
    withdrawn_credits: Decimal
    available_withdrawal_balance: Decimal
    monthly_withdrawal_limit: int
    months_active: int

    def to_dict(self) -> dict:
        return {
            "planTokens": self.plan_tokens,
            "earnedTokens": self.earned_tokens,
            "purchasedTokens": self.purchased_tokens,
            "spentTokens": self.spent_tokens,
            "totalBalance": self.total_balance,
            "accruedCredits": _num(self.accrued_credits),
            "withdrawnCredits": _num(self.withdrawn_credits),
            "availableWithdrawalBalance": _num(self.available_withdrawal_balance),
            "monthlyWithdrawalLimit": self.monthly_withdrawal_limit,
            "monthsActive": self.months_active,
        }
