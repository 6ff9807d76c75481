"""Wallet read model. No validation, no side effects."""
from __future__ import annotations

from typing import Optional

from orbitrum.core.clock import Moment
from orbitrum.features.cashback.engine import CashbackEngine
from orbitrum.features.consumption.policy import total_available_tokens
from orbitrum.features.withdrawals.policy import (
    available_withdrawal_balance,
    monthly_withdrawal_limit,
)
from orbitrum.models.account import AccountSnapshot
from orbitrum.models.results import WalletView


def project_wallet(snapshot: AccountSnapshot, now: Optional[Moment] = None) -> WalletView:
    return WalletView(
        plan_tokens=snapshot.plan_tokens,
        earned_tokens=snapshot.earned_tokens,
        purchased_tokens=snapshot.purchased_tokens,
        spent_tokens=snapshot.spent_tokens,
        total_balance=total_available_tokens(snapshot),
        accrued_credits=snapshot.accrued_credits,
        withdrawn_credits=snapshot.withdrawn_credits,
        available_withdrawal_balance=available_withdrawal_balance(snapshot),
        monthly_withdrawal_limit=monthly_withdrawal_limit(snapshot),
        months_active=CashbackEngine.months_active(snapshot.plan_start_date, now),
    )
