"""
Domain exceptions - Semantic error types for authentication.

This module defines domain-specific exceptions that communicate
business rule violations without leaking infrastructure details.

Each exception carries a stable ``code`` (the taxonomy name surfaced
to API clients) and a ``message`` that is safe to echo back. The
messages for InvalidCredentials and InvalidOrExpiredCode are fixed
strings: they must not vary with the underlying cause.
"""


class AuthError(Exception):
    """Base class for authentication domain errors."""

    code = "AuthError"
    message = "Authentication error"

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(detail or self.message)


class InvalidEmail(AuthError):
    """Email is empty or blank after normalization."""

    code = "ValidationError"
    message = "Email is required"


class AccountExists(AuthError):
    """A verified account with a password already owns this email."""

    code = "Conflict"
    message = "User already exists"


class AccountNotFound(AuthError):
    """No account is stored for this email."""

    code = "NotFound"
    message = "User not found"


class InvalidOrExpiredCode(AuthError):
    """Code missing, mismatched, or past its expiry instant."""

    code = "InvalidOrExpiredCode"
    message = "Invalid or expired code"

    def __init__(self) -> None:
        super().__init__()


class InvalidCredentials(AuthError):
    """Unknown account or wrong password."""

    code = "InvalidCredentials"
    message = "Invalid credentials"

    def __init__(self) -> None:
        super().__init__()


class IncompleteAccount(AuthError):
    """Password login attempted before signup was completed."""

    code = "IncompleteAccount"
    message = "Account setup incomplete. Please finish signup."


class NotVerified(AuthError):
    """Password completion attempted before email verification."""

    code = "NotVerified"
    message = "Email not verified yet"


class PasswordAlreadySet(AuthError):
    """Signup completion is one-shot."""

    code = "PasswordAlreadySet"
    message = "Password already set for this account"


class DuplicateKey(AuthError):
    """Store rejected a write that would violate email uniqueness."""

    code = "Conflict"
    message = "User already exists"
