"""Tests for the monthly withdrawal window (day 3, São Paulo time)."""

from datetime import date, datetime, timedelta, timezone

from orbitrum.features.withdrawals.window import withdrawal_window

SAO_PAULO = "America/Sao_Paulo"


def _utc(*args):
    return datetime(*args, tzinfo=timezone.utc)


def test_open_during_window_day():
    window = withdrawal_window(_utc(2026, 10, 3, 13, 0), tz=SAO_PAULO)
    assert window.is_open is True
    assert (window.opens_at.year, window.opens_at.month, window.opens_at.day) == (2026, 10, 3)
    assert window.opens_at.hour == 0
    assert window.closes_at - window.opens_at == timedelta(hours=24)


def test_closed_before_window_points_to_this_month():
    window = withdrawal_window(_utc(2026, 10, 2, 12, 0), tz=SAO_PAULO)
    assert window.is_open is False
    assert window.opens_at.day == 3
    assert window.opens_at.month == 10


def test_closed_after_window_points_to_next_month():
    window = withdrawal_window(_utc(2026, 10, 4, 12, 0), tz=SAO_PAULO)
    assert window.is_open is False
    assert (window.opens_at.month, window.opens_at.day) == (11, 3)


def test_december_rolls_over_to_january():
    window = withdrawal_window(_utc(2026, 12, 20, 12, 0), tz=SAO_PAULO)
    assert (window.opens_at.year, window.opens_at.month) == (2027, 1)


def test_window_follows_business_time_not_utc():
    # 02:00 UTC on the 3rd is still 23:00 on the 2nd in São Paulo
    assert withdrawal_window(_utc(2026, 10, 3, 2, 0), tz=SAO_PAULO).is_open is False
    # 02:00 UTC on the 4th is 23:00 on the 3rd in São Paulo
    assert withdrawal_window(_utc(2026, 10, 4, 2, 0), tz=SAO_PAULO).is_open is True


def test_custom_window_day():
    window = withdrawal_window(_utc(2026, 10, 10, 15, 0), window_day=10, tz=SAO_PAULO)
    assert window.is_open is True


def test_to_dict_uses_iso_timestamps():
    payload = withdrawal_window(_utc(2026, 10, 3, 13, 0), tz=SAO_PAULO).to_dict()
    assert payload["isOpen"] is True
    assert payload["opensAt"].startswith("2026-10-03T00:00:00")
    assert payload["closesAt"].startswith("2026-10-04T00:00:00")


def test_plain_date_is_checked_at_local_midnight():
    window = withdrawal_window(date(2026, 10, 3), tz=SAO_PAULO)
    assert window.is_open is True
    assert window.opens_at.isoformat().startswith("2026-10-03T00:00:00")

    closed = withdrawal_window(date(2026, 10, 4), tz=SAO_PAULO)
    assert closed.is_open is False
    assert (closed.opens_at.month, closed.opens_at.day) == (11, 3)
