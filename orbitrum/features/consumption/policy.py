"""Token consumption checks.

A spend is either fully covered by the spendable balance or refused; requests
are never truncated to what is left. Tokens are whole units, so fractional or
non-numeric amounts are refused like non-positive ones.
"""
from __future__ import annotations

from decimal import InvalidOperation
from typing import Optional

from orbitrum.models.account import AccountSnapshot, to_decimal
from orbitrum.models.results import OperationResult


def total_available_tokens(snapshot: AccountSnapshot) -> int:
    return (
        snapshot.plan_tokens
        + snapshot.earned_tokens
        + snapshot.purchased_tokens
        - snapshot.spent_tokens
    )


def whole_tokens(amount) -> Optional[int]:
    """Return ``amount`` as an int when it is a whole number of tokens, else None."""
    if isinstance(amount, bool):
        return None
    if isinstance(amount, int):
        return amount
    try:
        value = to_decimal(amount)
    except (InvalidOperation, TypeError, ValueError):
        return None
    if not value.is_finite() or value != value.to_integral_value():
        return None
    return int(value)


def validate_consumption(snapshot: AccountSnapshot, requested_amount: int) -> OperationResult:
    amount = whole_tokens(requested_amount)
    if amount is None:
        return OperationResult(allowed=False, message="Token amount must be a whole number.")
    if amount <= 0:
        return OperationResult(allowed=False, message="Token amount must be positive.")

    total = total_available_tokens(snapshot)
    if amount > total:
        return OperationResult(
            allowed=False,
            message="Insufficient balance to consume tokens.",
            limit=total,
        )

    return OperationResult(
        allowed=True,
        message=f"{amount} tokens authorized for consumption.",
        new_balance=total - amount,
    )
