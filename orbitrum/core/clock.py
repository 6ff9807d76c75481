"""Business calendar helpers.

Plan tenure and the withdrawal window are counted in the business time zone,
not in the server's local time.
"""

from datetime import date, datetime, timezone
from typing import Optional, Union
from zoneinfo import ZoneInfo

from orbitrum.core.config import settings

Moment = Union[date, datetime]


def _is_plain_date(value) -> bool:
    return isinstance(value, date) and not isinstance(value, datetime)


def normalize_now(now: Optional[datetime] = None) -> datetime:
    """Return an aware datetime; naive values are taken as UTC."""
    if now is None:
        return datetime.now(timezone.utc)
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now


def business_zone(tz: Optional[str] = None) -> ZoneInfo:
    return ZoneInfo(tz or settings.BUSINESS_TIMEZONE)


def business_now(now: Optional[Moment] = None, tz: Optional[str] = None) -> datetime:
    """Current instant in the business time zone.

    A plain ``date`` is a business date and stands for its local midnight.
    """
    zone = business_zone(tz)
    if _is_plain_date(now):
        return datetime(now.year, now.month, now.day, tzinfo=zone)
    return normalize_now(now).astimezone(zone)


def business_today(now: Optional[Moment] = None, tz: Optional[str] = None) -> date:
    """Calendar date in the business time zone.

    A plain ``date`` is already a business date and is returned unchanged.
    """
    if _is_plain_date(now):
        return now
    return business_now(now, tz).date()
