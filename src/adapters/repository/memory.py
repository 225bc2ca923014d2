"""
In-memory repository adapter - Implements UserRepository protocol.

Process-local store for development runs (repository_backend=memory)
and tests. Records are copied on the way in and out so that, like the
PostgreSQL adapter, mutations only become visible after save().
"""

import threading
import uuid
from dataclasses import replace
from datetime import UTC, datetime

from src.domain.account import UserAccount
from src.domain.exceptions import DuplicateKey


class InMemoryUserRepository:
    """
    Implements UserRepository protocol with a dict keyed by email.

    The lock keeps the dict consistent across threads; it does not
    isolate a caller's read-modify-write sequence.
    """

    def __init__(self) -> None:
        self._accounts: dict[str, UserAccount] = {}
        self._lock = threading.Lock()

    def find_by_email(self, email: str) -> UserAccount | None:
        with self._lock:
            stored = self._accounts.get(email)
            return replace(stored) if stored is not None else None

    def create(self, email: str) -> UserAccount:
        now = datetime.now(UTC)
        account = UserAccount(id=str(uuid.uuid4()), email=email, created_at=now, updated_at=now)
        with self._lock:
            if email in self._accounts:
                raise DuplicateKey(email)
            self._accounts[email] = account
            return replace(account)

    def save(self, account: UserAccount) -> None:
        account.updated_at = datetime.now(UTC)
        with self._lock:
            self._accounts[account.email] = replace(account)

    def __len__(self) -> int:
        with self._lock:
            return len(self._accounts)
