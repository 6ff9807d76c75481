"""
Account store interface and in-memory implementation.

The engine never owns account records. A store hands out snapshots, persists
updated ones and serializes read-modify-write cycles per account, so two
concurrent spends cannot both pass validation against the same balance.
"""
from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import ContextManager, Dict, Iterator, Protocol

from orbitrum.core.errors import ConflictError, NotFoundError
from orbitrum.models.account import AccountSnapshot


class AccountStore(Protocol):
    def get(self, account_id: str) -> AccountSnapshot:
        """Return the current snapshot or raise NotFoundError."""
        ...

    def save(self, snapshot: AccountSnapshot) -> None:
        ...

    def lock(self, account_id: str) -> ContextManager[None]:
        """Hold exclusive access to one account for a read-modify-write cycle."""
        ...


class InMemoryAccountStore:
    """Dict-backed store with one lock per account, scoped to the instance."""

    def __init__(self) -> None:
        self._records: Dict[str, AccountSnapshot] = {}
        self._locks: Dict[str, threading.Lock] = {}
        self._guard = threading.Lock()

    def add(self, snapshot: AccountSnapshot) -> None:
        with self._guard:
            if snapshot.id in self._records:
                raise ConflictError(f"Account already exists: {snapshot.id}")
            self._records[snapshot.id] = snapshot

    def get(self, account_id: str) -> AccountSnapshot:
        try:
            return self._records[account_id]
        except KeyError:
            raise NotFoundError(f"Account not found: {account_id}") from None

    def save(self, snapshot: AccountSnapshot) -> None:
        if snapshot.id not in self._records:
            raise NotFoundError(f"Account not found: {snapshot.id}")
        self._records[snapshot.id] = snapshot

    def _lock_for(self, account_id: str) -> threading.Lock:
        with self._guard:
            if account_id not in self._locks:
                self._locks[account_id] = threading.Lock()
            return self._locks[account_id]

    @contextmanager
    def lock(self, account_id: str) -> Iterator[None]:
        account_lock = self._lock_for(account_id)
        with account_lock:
            yield
