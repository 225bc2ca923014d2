"""
API error handling - Domain exception to HTTP response mapping.

Every AuthError becomes {"detail": <safe message>, "code": <taxonomy>}
with the status below. Anything else is logged server-side and
surfaced as an opaque 500.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from src.domain.exceptions import (
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

logger = logging.getLogger(__name__)

STATUS_BY_ERROR: dict[type[AuthError], int] = {
    InvalidEmail: status.HTTP_400_BAD_REQUEST,
    AccountExists: status.HTTP_409_CONFLICT,
    DuplicateKey: status.HTTP_409_CONFLICT,
    AccountNotFound: status.HTTP_404_NOT_FOUND,
    InvalidOrExpiredCode: status.HTTP_400_BAD_REQUEST,
    InvalidCredentials: status.HTTP_401_UNAUTHORIZED,
    IncompleteAccount: status.HTTP_400_BAD_REQUEST,
    NotVerified: status.HTTP_400_BAD_REQUEST,
    PasswordAlreadySet: status.HTTP_400_BAD_REQUEST,
}


def error_status(exc: AuthError) -> int:
    for error_type in type(exc).__mro__:
        if error_type in STATUS_BY_ERROR:
            return STATUS_BY_ERROR[error_type]
    return status.HTTP_400_BAD_REQUEST


async def auth_error_handler(request: Request, exc: AuthError) -> JSONResponse:
    # Class-level message only: instance args may carry the email
    return JSONResponse(
        status_code=error_status(exc),
        content={"detail": exc.message, "code": exc.code},
    )


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Server error", "code": "InternalError"},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AuthError, auth_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
