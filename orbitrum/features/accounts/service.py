"""
orbitrum/features/accounts/service.py

Token engine service.

Composes the two independent policies over a stored account:
- eligibility: the action gate (role, documents)
- feasibility: the consumption and withdrawal checks (balances, limits)

Every mutating call holds the store's per-account lock across fetch,
authorize and save. Counters are written only after both policies allow the
request, and only ever increase. Denials are returned, never raised.
"""

from decimal import Decimal
from typing import Optional, Union

from orbitrum.core.clock import Moment, business_today
from orbitrum.core.config import Settings, settings
from orbitrum.core.errors import ValidationError
from orbitrum.core.logging import log_event
from orbitrum.features.accounts.store import AccountStore
from orbitrum.features.authorization.rules import NOTIFICATION_MESSAGES, Action, authorize
from orbitrum.features.cashback.engine import compute_cashback
from orbitrum.features.consumption.policy import total_available_tokens, validate_consumption, whole_tokens
from orbitrum.features.plans.catalog import initial_tokens, resolve_plan, tokens_for_payment
from orbitrum.features.wallet.projector import project_wallet
from orbitrum.features.withdrawals.policy import validate_withdrawal
from orbitrum.features.withdrawals.window import withdrawal_window
from orbitrum.models.account import AccountSnapshot, PlanName, to_decimal
from orbitrum.models.results import GateDecision, OperationResult, WalletView


def _gate_denial(decision: GateDecision) -> OperationResult:
    return OperationResult(
        allowed=False,
        message=decision.reason or "Action not allowed.",
        requires_documents=decision.requires_documents,
    )


def _updated(snapshot: AccountSnapshot, **changes) -> AccountSnapshot:
    """Copy with changes applied, re-validated so counters keep their constraints."""
    return AccountSnapshot.model_validate({**snapshot.model_dump(), **changes})


class TokenEngineService:
    """Store-backed token operations."""

    def __init__(self, store: AccountStore, *, settings_obj: Optional[Settings] = None):
        self.store = store
        self.settings = settings_obj or settings

    def _today(self, now: Optional[Moment]):
        return business_today(now, self.settings.BUSINESS_TIMEZONE)

    def _log_decision(self, event_type: str, account_id: str, result: OperationResult, **extra) -> None:
        log_event(
            "info" if result.allowed else "warning",
            f"[tokens] {event_type} {'allowed' if result.allowed else 'denied'}",
            request_id=None,
            account_id=account_id,
            event_type=event_type,
            error_code=None if result.allowed else "denied",
            extra={"detail": result.message, **extra},
        )

    def wallet(self, account_id: str, now: Optional[Moment] = None) -> WalletView:
        return project_wallet(self.store.get(account_id), self._today(now))

    def consume(
        self,
        account_id: str,
        amount: int,
        *,
        action: Optional[Action] = None,
    ) -> OperationResult:
        """
        Spend tokens.

        Args:
            account_id: Account to charge
            amount: Tokens to spend
            action: Optional action class to gate first (e.g. hireServices)
        """
        with self.store.lock(account_id):
            snapshot = self.store.get(account_id)

            if action is not None:
                decision = authorize(snapshot.role, action, snapshot.has_verified_documents)
                if not decision.allowed:
                    result = _gate_denial(decision)
                    self._log_decision("consume", account_id, result, amount=amount, action=action)
                    return result

            result = validate_consumption(snapshot, amount)
            if result.allowed:
                self.store.save(_updated(snapshot, spent_tokens=snapshot.spent_tokens + whole_tokens(amount)))

        self._log_decision("consume", account_id, result, amount=amount)
        return result

    def withdraw(
        self,
        account_id: str,
        amount: Union[int, Decimal],
        now: Optional[Moment] = None,
    ) -> OperationResult:
        with self.store.lock(account_id):
            snapshot = self.store.get(account_id)

            decision = authorize(snapshot.role, Action.WITHDRAW_CASHBACK, snapshot.has_verified_documents)
            if not decision.allowed:
                result = _gate_denial(decision)
                self._log_decision("withdraw", account_id, result, amount=amount)
                return result

            if self.settings.WITHDRAWAL_WINDOW_ENFORCED:
                window = withdrawal_window(
                    now,
                    window_day=self.settings.WITHDRAWAL_WINDOW_DAY,
                    tz=self.settings.BUSINESS_TIMEZONE,
                )
                if not window.is_open:
                    result = OperationResult(
                        allowed=False,
                        message=f"Withdrawal window closed. Next window opens {window.opens_at:%d/%m/%Y %H:%M}.",
                    )
                    self._log_decision("withdraw", account_id, result, amount=amount)
                    return result

            result = validate_withdrawal(snapshot, amount, self._today(now))
            if result.allowed:
                withdrawn = snapshot.withdrawn_credits + to_decimal(amount)
                self.store.save(_updated(snapshot, withdrawn_credits=withdrawn))

        self._log_decision("withdraw", account_id, result, amount=amount)
        return result

    def purchase_tokens(self, account_id: str, amount_brl) -> OperationResult:
        """
        Credit purchased tokens for a confirmed payment.

        Raises:
            ValidationError: if the amount is not positive
        """
        tokens = tokens_for_payment(amount_brl, self.settings.TOKENS_PER_BRL)

        with self.store.lock(account_id):
            snapshot = self.store.get(account_id)

            decision = authorize(snapshot.role, Action.BUY_TOKENS, snapshot.has_verified_documents)
            if not decision.allowed:
                result = _gate_denial(decision)
                self._log_decision("purchase", account_id, result, amount_brl=amount_brl)
                return result

            updated = _updated(snapshot, purchased_tokens=snapshot.purchased_tokens + tokens)
            self.store.save(updated)

        message = f"{tokens} tokens credited."
        if not snapshot.has_active_plan:
            message = f"{message} {NOTIFICATION_MESSAGES['token_purchase_success']}"
        result = OperationResult(allowed=True, message=message, new_balance=total_available_tokens(updated))
        self._log_decision("purchase", account_id, result, amount_brl=amount_brl, tokens=tokens)
        return result

    def activate_plan(
        self,
        account_id: str,
        plan_name: Union[PlanName, str],
        now: Optional[Moment] = None,
    ) -> OperationResult:
        """
        Activate or renew a plan and credit its token grant.

        Tenure keeps counting from the original start date while a plan is
        active; it starts today otherwise.

        Raises:
            ValidationError: for unknown tiers or ``none``
        """
        plan = resolve_plan(plan_name)
        if plan is None or plan == PlanName.NONE:
            raise ValidationError(f"Unknown plan: {plan_name}")

        with self.store.lock(account_id):
            snapshot = self.store.get(account_id)

            decision = authorize(snapshot.role, Action.SUBSCRIBE_PLAN, snapshot.has_verified_documents)
            if not decision.allowed:
                result = _gate_denial(decision)
                self._log_decision("activate_plan", account_id, result, plan=plan.value)
                return result

            grant = initial_tokens(plan)
            start_date = snapshot.plan_start_date if snapshot.has_active_plan else self._today(now)
            updated = _updated(
                snapshot,
                plan_name=plan,
                plan_tokens=snapshot.plan_tokens + grant,
                plan_start_date=start_date,
            )
            self.store.save(updated)

        message = f"{plan.value} plan activated with {grant} tokens."
        if decision.reason:
            message = f"{message} {NOTIFICATION_MESSAGES['plan_without_documents']}"
        result = OperationResult(
            allowed=True,
            message=message,
            new_balance=total_available_tokens(updated),
            requires_documents=decision.requires_documents,
        )
        self._log_decision("activate_plan", account_id, result, plan=plan.value, grant=grant)
        return result

    def sync_cashback(self, account_id: str, now: Optional[Moment] = None) -> AccountSnapshot:
        """Raise accrued credits to the current cashback entitlement; never lowers them."""
        with self.store.lock(account_id):
            snapshot = self.store.get(account_id)
            entitlement = Decimal(compute_cashback(snapshot, self._today(now)))
            if entitlement <= snapshot.accrued_credits:
                return snapshot

            updated = _updated(snapshot, accrued_credits=entitlement)
            self.store.save(updated)

        log_event(
            "info",
            "[tokens] cashback accrued",
            request_id=None,
            account_id=account_id,
            event_type="sync_cashback",
            extra={"previous": snapshot.accrued_credits, "accrued": entitlement},
        )
        return updated
