"""
User account model - Identity and OTP challenge state for one principal.

Account States (derived, from the caller's perspective)
=======================================================

    UNREGISTERED          no record for the normalized email
    PENDING_VERIFICATION  record exists, email ownership not proven
    VERIFIED_NO_PASSWORD  email verified, signup not completed
    FULLY_REGISTERED      email verified and password set

The verification code and its expiry always travel together: they are
only ever written through set_challenge() and clear_challenge().
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from .exceptions import InvalidEmail


class AccountState(str, Enum):
    """Authentication lifecycle states."""

    UNREGISTERED = "UNREGISTERED"
    PENDING_VERIFICATION = "PENDING_VERIFICATION"
    VERIFIED_NO_PASSWORD = "VERIFIED_NO_PASSWORD"
    FULLY_REGISTERED = "FULLY_REGISTERED"


def state_of(account: "UserAccount | None") -> AccountState:
    """Derive the lifecycle state, treating a missing record as UNREGISTERED."""
    if account is None:
        return AccountState.UNREGISTERED
    return account.state


def normalize_email(email: str) -> str:
    """
    Normalize email address for consistent storage and lookup.

    Applies: strip whitespace + lowercase. Idempotent.

    Raises:
        InvalidEmail: If nothing is left after stripping
    """
    normalized = email.strip().lower()
    if not normalized:
        raise InvalidEmail()
    return normalized


@dataclass
class UserAccount:
    """Durable account record keyed by normalized email."""

    id: str
    email: str
    password_hash: str | None = None
    is_verified: bool = False
    verification_code: str | None = None
    verification_code_expires_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def state(self) -> AccountState:
        if not self.is_verified:
            return AccountState.PENDING_VERIFICATION
        if self.password_hash is None:
            return AccountState.VERIFIED_NO_PASSWORD
        return AccountState.FULLY_REGISTERED

    @property
    def is_fully_registered(self) -> bool:
        return self.is_verified and self.password_hash is not None

    @property
    def has_challenge(self) -> bool:
        return self.verification_code is not None

    def set_challenge(self, code: str, expires_at: datetime) -> None:
        """Overwrite any outstanding challenge with a new code and expiry."""
        self.verification_code = code
        self.verification_code_expires_at = expires_at

    def clear_challenge(self) -> None:
        self.verification_code = None
        self.verification_code_expires_at = None

    def code_matches(self, code: str, now: datetime) -> bool:
        """
        Check a supplied code against the outstanding challenge.

        Exact string comparison, no normalization. The expiry bound is
        exclusive: a code is rejected at its expiry instant.
        """
        if not self.has_challenge or self.verification_code_expires_at is None:
            return False
        if self.verification_code != code:
            return False
        return now < self.verification_code_expires_at
