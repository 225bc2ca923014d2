"""
Adversarial tests for concurrent operations on one account.

No per-account lock is taken: concurrent writers race and the last
save wins. These tests pin down what still holds under that model:
- One record per email, even under concurrent signup starts
- The stored code always pairs with an expiry
- The stored code is always one that was actually sent
"""

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from src.adapters.repository.memory import InMemoryUserRepository
from src.domain.authentication import AuthenticationService
from src.domain.exceptions import InvalidOrExpiredCode

pytestmark = pytest.mark.adversarial


class TestConcurrentSignup:
    """Concurrent signup_start calls for one email."""

    def test_concurrent_signup_starts_create_one_account(
        self, service: AuthenticationService, repository: InMemoryUserRepository
    ) -> None:
        """Create races resolve to a single record; no caller sees a duplicate-key error."""
        barrier = threading.Barrier(8)

        def attack() -> str:
            barrier.wait()
            return service.signup_start("race@example.com").email

        with ThreadPoolExecutor(max_workers=8) as executor:
            results = list(executor.map(lambda _: attack(), range(8)))

        assert results == ["race@example.com"] * 8
        assert len(repository) == 1


class TestConcurrentResend:
    """Concurrent resends for one account."""

    def test_last_write_wins_with_a_sent_code(
        self, service: AuthenticationService, repository: InMemoryUserRepository, notifier
    ) -> None:
        service.signup_start("user@example.com")

        with ThreadPoolExecutor(max_workers=5) as executor:
            futures = [executor.submit(service.resend_otp, "user@example.com", "Signup") for _ in range(10)]
            for f in futures:
                f.result()

        account = repository.find_by_email("user@example.com")
        sent_codes = {s.code for s in notifier.sent}
        assert account.verification_code in sent_codes
        assert account.verification_code_expires_at is not None

    def test_only_stored_code_verifies_after_race(
        self, service: AuthenticationService, repository: InMemoryUserRepository, notifier
    ) -> None:
        service.signup_start("user@example.com")

        with ThreadPoolExecutor(max_workers=5) as executor:
            futures = [executor.submit(service.resend_otp, "user@example.com", "Signup") for _ in range(10)]
            for f in futures:
                f.result()

        stored = repository.find_by_email("user@example.com").verification_code
        for code in {s.code for s in notifier.sent} - {stored}:
            with pytest.raises(InvalidOrExpiredCode):
                service.verify_email("user@example.com", code)

        service.verify_email("user@example.com", stored)
        assert repository.find_by_email("user@example.com").is_verified is True
