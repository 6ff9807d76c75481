"""
Cashback Accrual Engine

Pure, deterministic computation of cashback from plan tenure.
No external calls, no randomness, no side effects.

Accrual rules:
- Nothing accrues before six full calendar months of active plan
- Fixed part: six months' worth of the 8.7% monthly rate, applied once
- Activity bonus: 2% of plan tokens per month, capped at 2% in total
- Total capped at 60% of plan tokens
- Rounded to whole tokens, halves away from zero
"""

from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from orbitrum.core.clock import Moment, business_today
from orbitrum.models.account import AccountSnapshot


def round_tokens(value: Decimal) -> int:
    """Round a non-negative amount to the nearest whole token."""
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class CashbackEngine:
    """Pure deterministic cashback accrual."""

    MONTHLY_RATE = Decimal("0.087")
    GRACE_MONTHS = 6
    FIXED_MONTHS = 6
    ACTIVITY_BONUS_RATE = Decimal("0.02")
    CEILING_RATE = Decimal("0.60")

    @staticmethod
    def months_active(plan_start_date: Optional[date], now: Optional[Moment] = None) -> int:
        """
        Whole calendar months between the plan start and today.

        Year-month arithmetic only: 31 Jan -> 1 Feb counts as one month,
        1 Jan -> 31 Jan counts as zero. A start date in the future counts as 0.
        """
        if plan_start_date is None:
            return 0
        today = business_today(now)
        months = (today.year - plan_start_date.year) * 12 + (today.month - plan_start_date.month)
        return max(0, months)

    @staticmethod
    def compute_cashback(snapshot: AccountSnapshot, now: Optional[Moment] = None) -> int:
        """
        Cashback entitlement in whole tokens.

        Args:
            snapshot: Account state
            now: Reference moment (defaults to the business clock)

        Returns:
            Non-negative cashback, 0 during the grace period
        """
        months = CashbackEngine.months_active(snapshot.plan_start_date, now)
        if months < CashbackEngine.GRACE_MONTHS:
            return 0

        plan_tokens = Decimal(snapshot.plan_tokens)
        fixed = CashbackEngine.MONTHLY_RATE * plan_tokens * CashbackEngine.FIXED_MONTHS
        # min(a * months, a) is constant once months >= 1; kept literal so the
        # cap still applies if the grace period is ever shortened
        bonus = min(
            CashbackEngine.ACTIVITY_BONUS_RATE * plan_tokens * months,
            CashbackEngine.ACTIVITY_BONUS_RATE * plan_tokens,
        )
        total = min(fixed + bonus, CashbackEngine.CEILING_RATE * plan_tokens)
        return round_tokens(total)


compute_months_active = CashbackEngine.months_active
compute_cashback = CashbackEngine.compute_cashback
