"""Withdrawal feasibility checks.

Evaluated in order, first failure wins:
1. tenure (six full months of active plan)
2. positive, finite amount
3. monthly ceiling: 8.7% of lifetime accrued credits
4. available balance: accrued minus withdrawn

The ceiling is recomputed from lifetime accrued credits on every call. It is
not a monthly quota: nothing here knows what was already withdrawn this month.
"""
from __future__ import annotations

from decimal import Decimal
from typing import Optional, Union

from orbitrum.core.clock import Moment
from orbitrum.features.cashback.engine import CashbackEngine, round_tokens
from orbitrum.models.account import AccountSnapshot, to_decimal
from orbitrum.models.results import OperationResult

WITHDRAWAL_RATE = Decimal("0.087")
MIN_TENURE_MONTHS = 6


def monthly_withdrawal_limit(snapshot: AccountSnapshot) -> int:
    return round_tokens(snapshot.accrued_credits * WITHDRAWAL_RATE)


def available_withdrawal_balance(snapshot: AccountSnapshot) -> Decimal:
    return snapshot.accrued_credits - snapshot.withdrawn_credits


def validate_withdrawal(
    snapshot: AccountSnapshot,
    requested_amount: Union[int, Decimal, float],
    now: Optional[Moment] = None,
) -> OperationResult:
    months = CashbackEngine.months_active(snapshot.plan_start_date, now)
    if months < MIN_TENURE_MONTHS:
        return OperationResult(
            allowed=False,
            message="Withdrawal unavailable before six months of active plan.",
        )

    amount = to_decimal(requested_amount)
    if not amount.is_finite() or amount <= 0:
        return OperationResult(allowed=False, message="Withdrawal amount must be positive.")

    limit = monthly_withdrawal_limit(snapshot)
    if amount > limit:
        return OperationResult(
            allowed=False,
            message=f"Amount exceeds the monthly withdrawal limit ({limit:.2f} tokens).",
            limit=limit,
        )

    available = available_withdrawal_balance(snapshot)
    if amount > available:
        return OperationResult(
            allowed=False,
            message=f"Insufficient balance for withdrawal. Available balance: {available:.2f} tokens.",
            limit=available,
        )

    return OperationResult(
        allowed=True,
        message=f"Withdrawal of {amount} tokens authorized.",
        new_balance=available - amount,
    )
