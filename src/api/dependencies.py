"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes.
"""

from datetime import timedelta
from functools import lru_cache

from fastapi import Request
from psycopg_pool import ConnectionPool

from src.adapters.repository.postgres import PostgresUserRepository
from src.adapters.security.bcrypt_hasher import BcryptPasswordHasher
from src.adapters.security.jwt_issuer import JwtTokenIssuer
from src.adapters.smtp.console import ConsoleOtpNotifier
from src.adapters.smtp.smtp import SmtpOtpNotifier
from src.config.settings import get_settings
from src.domain.authentication import AuthenticationService
from src.domain.ports import OtpNotifier, UserRepository


def get_pool(request: Request) -> ConnectionPool:
    """
    Get connection pool from app state.

    The pool is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.pool


def get_repository(request: Request) -> UserRepository:
    """
    Select the account store for this request.

    The in-memory store lives in app.state for the process lifetime.
    """
    memory_repository = getattr(request.app.state, "memory_repository", None)
    if memory_repository is not None:
        return memory_repository
    return PostgresUserRepository(get_pool(request))


@lru_cache
def get_notifier() -> OtpNotifier:
    """Build the configured notifier (singleton)."""
    settings = get_settings()
    if settings.notifier_backend == "console":
        return ConsoleOtpNotifier()
    return SmtpOtpNotifier(
        host=settings.smtp_host,
        port=settings.smtp_port,
        username=settings.smtp_user,
        password=settings.smtp_pass,
        sender=settings.sender_address,
        app_name=settings.app_name,
        secure=settings.smtp_secure,
        timeout=settings.smtp_timeout_seconds,
        expiry_minutes=settings.otp_ttl_seconds // 60,
    )


@lru_cache
def get_hasher() -> BcryptPasswordHasher:
    return BcryptPasswordHasher(rounds=get_settings().bcrypt_cost)


@lru_cache
def get_token_issuer() -> JwtTokenIssuer:
    settings = get_settings()
    return JwtTokenIssuer(
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        ttl=timedelta(days=settings.token_ttl_days),
    )


def get_auth_service(request: Request) -> AuthenticationService:
    """
    Create authentication service with injected dependencies.

    Wires together the store, notifier, hasher and token issuer.
    """
    settings = get_settings()
    return AuthenticationService(
        repository=get_repository(request),
        notifier=get_notifier(),
        hasher=get_hasher(),
        token_issuer=get_token_issuer(),
        otp_ttl=timedelta(seconds=settings.otp_ttl_seconds),
    )
