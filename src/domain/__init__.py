"""
Domain layer - Pure business logic with zero framework imports.

This package contains the OTP-gated authentication state machine.
It defines its own port interfaces for infrastructure abstraction,
so storage, mail transport, hashing and token signing stay outside.
"""

from .account import AccountState, UserAccount, normalize_email, state_of
from .authentication import AuthenticationService, AuthResult
from .exceptions import (
    AccountExists,
    AccountNotFound,
    AuthError,
    DuplicateKey,
    IncompleteAccount,
    InvalidCredentials,
    InvalidEmail,
    InvalidOrExpiredCode,
    NotVerified,
    PasswordAlreadySet,
)
from .otp import generate_otp
from .ports import NotifyResult, OtpNotifier, PasswordHasher, TokenIssuer, UserRepository

__all__ = [
    "AccountExists",
    "AccountNotFound",
    "AccountState",
    "AuthError",
    "AuthResult",
    "AuthenticationService",
    "DuplicateKey",
    "IncompleteAccount",
    "InvalidCredentials",
    "InvalidEmail",
    "InvalidOrExpiredCode",
    "NotVerified",
    "NotifyResult",
    "OtpNotifier",
    "PasswordAlreadySet",
    "PasswordHasher",
    "TokenIssuer",
    "UserAccount",
    "UserRepository",
    "generate_otp",
    "normalize_email",
    "state_of",
]
