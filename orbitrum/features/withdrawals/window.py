"""Monthly withdrawal window.

Withdrawals are processed during a 24h window that opens at 00:00 (business
time) on a fixed day of every month, day 3 by default.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from orbitrum.core.clock import Moment, business_now, business_zone
from orbitrum.core.config import settings

WINDOW_LENGTH = timedelta(hours=24)


@dataclass(frozen=True)
class WithdrawalWindow:
    is_open: bool
    opens_at: datetime
    closes_at: datetime

    def to_dict(self) -> dict:
        return {
            "isOpen": self.is_open,
            "opensAt": self.opens_at.isoformat(),
            "closesAt": self.closes_at.isoformat(),
        }


def _opening(year: int, month: int, day: int, tz: Optional[str]) -> datetime:
    return datetime(year, month, day, tzinfo=business_zone(tz))


def withdrawal_window(
    now: Optional[Moment] = None,
    *,
    window_day: Optional[int] = None,
    tz: Optional[str] = None,
) -> WithdrawalWindow:
    """
    Current window if open, otherwise the next one.

    A plain ``date`` is checked at its local midnight.

    Returns:
        WithdrawalWindow whose bounds are in the business time zone
    """
    day = window_day or settings.WITHDRAWAL_WINDOW_DAY
    local = business_now(now, tz)

    opens_at = _opening(local.year, local.month, day, tz)
    closes_at = opens_at + WINDOW_LENGTH
    if opens_at <= local < closes_at:
        return WithdrawalWindow(is_open=True, opens_at=opens_at, closes_at=closes_at)

    if local >= closes_at:
        year, month = (local.year + 1, 1) if local.month == 12 else (local.year, local.month + 1)
        opens_at = _opening(year, month, day, tz)
        closes_at = opens_at + WINDOW_LENGTH

    return WithdrawalWindow(is_open=False, opens_at=opens_at, closes_at=closes_at)
