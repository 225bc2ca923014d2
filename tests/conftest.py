"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- A controllable clock
- A recording notifier double
- An AuthenticationService wired to the in-memory store
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

import pytest

from src.adapters.repository.memory import InMemoryUserRepository
from src.adapters.security.bcrypt_hasher import BcryptPasswordHasher
from src.adapters.security.jwt_issuer import JwtTokenIssuer
from src.domain.authentication import AuthenticationService
from src.domain.ports import NotifyResult

TEST_JWT_SECRET = "test-secret-key-with-at-least-32-bytes"


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2026, 1, 15, 12, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now = self.now + delta


@dataclass
class SentOtp:
    to_email: str
    code: str
    label: str


@dataclass
class RecordingNotifier:
    """OtpNotifier double that records every send."""

    result: NotifyResult = field(default_factory=lambda: NotifyResult(sent=True))
    sent: list[SentOtp] = field(default_factory=list)

    def send_otp(self, to_email: str, code: str, label: str) -> NotifyResult:
        self.sent.append(SentOtp(to_email, code, label))
        return self.result

    @property
    def last_code(self) -> str:
        return self.sent[-1].code


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def hasher() -> BcryptPasswordHasher:
    # Minimum bcrypt cost keeps the suite fast
    return BcryptPasswordHasher(rounds=4)


@pytest.fixture
def token_issuer() -> JwtTokenIssuer:
    return JwtTokenIssuer(secret=TEST_JWT_SECRET)


@pytest.fixture
def service(
    repository: InMemoryUserRepository,
    notifier: RecordingNotifier,
    hasher: BcryptPasswordHasher,
    token_issuer: JwtTokenIssuer,
    clock: FakeClock,
) -> AuthenticationService:
    return AuthenticationService(
        repository=repository,
        notifier=notifier,
        hasher=hasher,
        token_issuer=token_issuer,
        clock=clock,
    )


@pytest.fixture
def registered(service: AuthenticationService, notifier: RecordingNotifier) -> str:
    """Email of a fully registered account with password 'pw123456'."""
    email = "registered@example.com"
    service.signup_start(email)
    service.verify_email(email, notifier.last_code)
    service.signup_complete(email, "pw123456")
    return email
