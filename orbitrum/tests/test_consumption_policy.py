"""Tests for token consumption checks."""

from decimal import Decimal

import pytest

from orbitrum.features.consumption.policy import total_available_tokens, validate_consumption, whole_tokens


@pytest.fixture
def funded(make_snapshot):
    return make_snapshot(plan_tokens=7000, earned_tokens=500, purchased_tokens=2160, spent_tokens=660)


class TestTotalAvailable:
    def test_sums_all_sources_minus_spent(self, funded):
        assert total_available_tokens(funded) == 9000

    def test_empty_account(self, make_snapshot):
        assert total_available_tokens(make_snapshot()) == 0


class TestValidateConsumption:
    def test_allowed_returns_projected_balance(self, funded):
        result = validate_consumption(funded, 1500)
        assert result.allowed is True
        assert result.new_balance == 7500
        assert "1500" in result.message

    def test_whole_balance_can_be_spent(self, funded):
        result = validate_consumption(funded, 9000)
        assert result.allowed is True
        assert result.new_balance == 0

    def test_over_balance_denied_entirely(self, funded):
        result = validate_consumption(funded, 9001)
        assert result.allowed is False
        assert "Insufficient balance" in result.message
        assert result.new_balance is None
        assert result.limit == 9000

    @pytest.mark.parametrize("amount", [0, -1])
    def test_non_positive_denied(self, funded, amount):
        result = validate_consumption(funded, amount)
        assert result.allowed is False
        assert result.new_balance is None

    def test_overspent_record_denies_everything(self, make_snapshot):
        snapshot = make_snapshot(plan_tokens=10, spent_tokens=20)
        assert validate_consumption(snapshot, 1).allowed is False

    def test_never_allows_more_than_available(self, funded):
        total = total_available_tokens(funded)
        for amount in (1, total - 1, total, total + 1, total * 2):
            assert validate_consumption(funded, amount).allowed == (amount <= total)

    def test_same_snapshot_same_result(self, funded):
        assert validate_consumption(funded, 100) == validate_consumption(funded, 100)

    def test_to_dict_omits_missing_balance(self, funded):
        assert validate_consumption(funded, 10_000).to_dict() == {
            "allowed": False,
            "message": "Insufficient balance to consume tokens.",
            "limit": 9000,
        }

    @pytest.mark.parametrize("amount", [1.5, Decimal("2.5"), float("nan"), float("inf"), "ten", None, True])
    def test_non_whole_amounts_denied(self, funded, amount):
        result = validate_consumption(funded, amount)
        assert result.allowed is False
        assert "whole number" in result.message
        assert result.new_balance is None

    def test_integral_decimal_accepted(self, funded):
        result = validate_consumption(funded, Decimal("100"))
        assert result.allowed is True
        assert result.new_balance == 8900
        assert result.message == "100 tokens authorized for consumption."


class TestWholeTokens:
    @pytest.mark.parametrize(
        "amount,expected",
        [(7, 7), (Decimal("7"), 7), (7.0, 7), ("7", 7), (7.25, None), (False, None)],
    )
    def test_whole_tokens(self, amount, expected):
        assert whole_tokens(amount) == expected
