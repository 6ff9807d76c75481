# orbitrum/conftest.py
import sys
from datetime import date, datetime, timezone
from decimal import Decimal
from pathlib import Path

import pytest

# Add repository root to PYTHONPATH
REPO_ROOT = Path(__file__).resolve().parent.parent
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from orbitrum.core.config import Settings
from orbitrum.features.accounts.service import TokenEngineService
from orbitrum.features.accounts.store import InMemoryAccountStore
from orbitrum.models.account import AccountSnapshot


# 12:00 in São Paulo (UTC-3)
FIXED_NOW = datetime(2026, 10, 19, 15, 0, tzinfo=timezone.utc)
FIXED_TODAY = date(2026, 10, 19)


def shift_months(day: date, months: int) -> date:
    """Same day-of-month ``months`` calendar months earlier (negative = later)."""
    index = day.year * 12 + (day.month - 1) - months
    return date(index // 12, index % 12 + 1, day.day)


@pytest.fixture
def now():
    return FIXED_NOW


@pytest.fixture
def today():
    return FIXED_TODAY


@pytest.fixture
def months_ago():
    """Return a plan start date ``n`` calendar months before the fixed today."""
    return lambda n: shift_months(FIXED_TODAY, n)


@pytest.fixture
def make_snapshot():
    """
    Snapshot factory with empty counters.

    Credits given as int/str are converted to Decimal by the model.
    """
    def _make(**overrides) -> AccountSnapshot:
        fields = {"id": "acct_1"}
        fields.update(overrides)
        for key in ("accrued_credits", "withdrawn_credits"):
            if isinstance(fields.get(key), str):
                fields[key] = Decimal(fields[key])
        return AccountSnapshot(**fields)

    return _make


@pytest.fixture
def engine_settings():
    return Settings(WITHDRAWAL_WINDOW_ENFORCED=False, BUSINESS_TIMEZONE="America/Sao_Paulo")


@pytest.fixture
def store():
    return InMemoryAccountStore()


@pytest.fixture
def service(store, engine_settings):
    return TokenEngineService(store, settings_obj=engine_settings)
