"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure. Adapters implement these protocols.
"""

from dataclasses import dataclass
from typing import Protocol

from .account import UserAccount


@dataclass(frozen=True)
class NotifyResult:
    """
    In-band outcome of an OTP delivery attempt.

    Notifiers never raise: a failed or unconfigured transport is
    reported as sent=False with an optional error description.
    """

    sent: bool
    error: str | None = None


class UserRepository(Protocol):
    """Port interface for account persistence."""

    def find_by_email(self, email: str) -> UserAccount | None:
        """
        Load the account stored under a normalized email.

        Args:
            email: Normalized email address

        Returns:
            The account, or None if no record exists
        """
        ...

    def create(self, email: str) -> UserAccount:
        """
        Insert a new unverified, password-less account.

        Args:
            email: Normalized email address

        Returns:
            The stored account with its durable id assigned

        Raises:
            DuplicateKey: If an account already exists for the email
        """
        ...

    def save(self, account: UserAccount) -> None:
        """
        Persist all mutable fields of an existing account.

        Last write wins; no optimistic concurrency check is applied.
        """
        ...


class OtpNotifier(Protocol):
    """Port interface for OTP delivery."""

    def send_otp(self, to_email: str, code: str, label: str) -> NotifyResult:
        """
        Deliver a verification code.

        Args:
            to_email: Recipient (normalized) email address
            code: 6-digit verification code
            label: Triggering flow, e.g. "Signup", "Login", "Signup resend"
        """
        ...


class PasswordHasher(Protocol):
    """Port interface for one-way password hashing."""

    def hash(self, plaintext: str) -> str: ...

    def verify(self, plaintext: str, digest: str) -> bool: ...


class TokenIssuer(Protocol):
    """Port interface for session credential minting."""

    def sign(self, subject_id: str) -> str:
        """Return a signed bearer token for the account id."""
        ...
