"""
Authentication domain service - OTP-gated state machine implementation.

This module contains the core business logic for signup, email
verification, password completion, login and OTP resend.

Signup Flow
===========

    UNREGISTERED
        -- signup_start -->    PENDING_VERIFICATION   (code issued)
        -- verify_email -->    VERIFIED_NO_PASSWORD   (code consumed)
        -- signup_complete --> FULLY_REGISTERED       (token issued)

Login Flow
==========

    login on a verified account            -> token
    login on an unverified account         -> challenge (code issued, no token)
    login_verify with the challenge code   -> token

Incomplete accounts (unverified, or verified without a password) are
reused in place by signup_start, so a user can restart signup without
hitting the email uniqueness constraint.

Note: No per-account locking is applied. Each operation is a
read-modify-write against the repository; concurrent writers race
and the last save wins.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

from .account import AccountState, UserAccount, normalize_email, state_of
from .exceptions import (
    AccountExists,
    AccountNotFound,
    DuplicateKey,
    IncompleteAccount,
    InvalidCredentials,
    InvalidOrExpiredCode,
    NotVerified,
    PasswordAlreadySet,
)
from .otp import generate_otp
from .ports import OtpNotifier, PasswordHasher, TokenIssuer, UserRepository

logger = logging.getLogger(__name__)

DEFAULT_OTP_TTL = timedelta(minutes=10)


def utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True)
class AuthResult:
    """Outcome of a successful operation."""

    email: str
    token: str | None = None
    requires_verification: bool = False


@dataclass
class AuthenticationService:
    """
    Domain service for email/OTP authentication.

    All collaborators are injected; the service holds no global state.
    """

    repository: UserRepository
    notifier: OtpNotifier
    hasher: PasswordHasher
    token_issuer: TokenIssuer
    otp_ttl: timedelta = DEFAULT_OTP_TTL
    clock: Callable[[], datetime] = field(default=utc_now)

    def signup_start(self, email: str) -> AuthResult:
        """
        Begin signup for an email address and send a verification code.

        Args:
            email: User's email address (will be normalized)

        Returns:
            AuthResult carrying the normalized email

        Raises:
            AccountExists: If a verified account with a password owns the email
        """
        normalized_email = normalize_email(email)

        account = self.repository.find_by_email(normalized_email)
        if state_of(account) is AccountState.UNREGISTERED:
            try:
                account = self.repository.create(normalized_email)
            except DuplicateKey:
                # Lost a create race; continue with whichever record won
                account = self.repository.find_by_email(normalized_email)
                if account is None:
                    raise

        if account.is_fully_registered:
            raise AccountExists(normalized_email)

        self.issue_otp(account, "Signup")
        return AuthResult(email=account.email)

    def verify_email(self, email: str, code: str) -> AuthResult:
        """
        Prove email ownership with the outstanding code.

        Raises:
            AccountNotFound: If no account exists
            InvalidOrExpiredCode: If the code is wrong, consumed, or expired
        """
        account = self._require_account(email)
        self.verify_otp(account, code, self.clock())
        return AuthResult(email=account.email)

    def signup_complete(self, email: str, password: str) -> AuthResult:
        """
        Set the password on a verified account and issue a token.

        Completion is one-shot; there is no password reset through here.

        Raises:
            AccountNotFound: If no account exists
            NotVerified: If the email has not been verified
            PasswordAlreadySet: If a password hash is already stored
        """
        account = self._require_account(email)

        if not account.is_verified:
            raise NotVerified()
        if account.password_hash is not None:
            raise PasswordAlreadySet()

        account.password_hash = self.hasher.hash(password)
        self.repository.save(account)

        token = self.token_issuer.sign(account.id)
        return AuthResult(email=account.email, token=token)

    def login(self, email: str, password: str) -> AuthResult:
        """
        Authenticate with email and password.

        Unverified accounts receive a fresh code and a challenge result
        (requires_verification=True, no token) instead of a token.

        Raises:
            InvalidCredentials: Unknown account or wrong password (same error)
            IncompleteAccount: If signup was never completed
        """
        account = self.repository.find_by_email(normalize_email(email))
        if account is None:
            raise InvalidCredentials()

        if account.password_hash is None:
            raise IncompleteAccount()

        if not self.hasher.verify(password, account.password_hash):
            raise InvalidCredentials()

        if not account.is_verified:
            self.issue_otp(account, "Login")
            return AuthResult(email=account.email, requires_verification=True)

        return AuthResult(email=account.email, token=self.token_issuer.sign(account.id))

    def login_verify(self, email: str, code: str) -> AuthResult:
        """Clear a login challenge and complete the paused login with a token."""
        account = self._require_account(email)
        self.verify_otp(account, code, self.clock())
        return AuthResult(email=account.email, token=self.token_issuer.sign(account.id))

    def resend_otp(self, email: str, context: str = "Generic") -> AuthResult:
        """
        Re-issue a code for an existing account.

        No gating beyond existence: verified accounts get a code too.
        """
        account = self._require_account(email)
        self.issue_otp(account, f"{context} resend")
        return AuthResult(email=account.email)

    def issue_otp(self, account: UserAccount, label: str) -> str:
        """
        Generate, persist, then deliver a new verification code.

        Delivery is best-effort. When the notifier reports a failure the
        code is written to the log instead and issuance still succeeds.

        Args:
            account: Account to challenge
            label: Human-readable triggering flow

        Returns:
            The generated code (never returned to HTTP callers)
        """
        code = generate_otp()
        account.set_challenge(code, self.clock() + self.otp_ttl)
        self.repository.save(account)

        result = self.notifier.send_otp(account.email, code, label)
        if result.sent:
            logger.info("%s OTP sent to %s", label, account.email)
        else:
            logger.warning(
                "%s OTP email failed for %s: %s",
                label,
                account.email,
                result.error or "not configured",
            )
            logger.info("Fallback OTP for %s: %s", account.email, code)

        return code

    def verify_otp(self, account: UserAccount, code: str, now: datetime) -> None:
        """
        Consume the outstanding code if it matches and has not expired.

        On failure the account is left untouched and not saved.

        Raises:
            InvalidOrExpiredCode: Without saying which check failed
        """
        if not account.code_matches(code, now):
            raise InvalidOrExpiredCode()

        account.clear_challenge()
        account.is_verified = True
        self.repository.save(account)

    def _require_account(self, email: str) -> UserAccount:
        account = self.repository.find_by_email(normalize_email(email))
        if account is None:
            raise AccountNotFound()
        return account
