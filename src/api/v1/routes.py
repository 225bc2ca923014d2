"""
API v1 routes.

Defines REST endpoints for the email/OTP authentication API.

Handlers are plain functions so FastAPI runs them in its threadpool;
the domain service and its adapters (psycopg, bcrypt, smtplib) block.
Domain errors raised here are turned into structured error bodies by
the exception handlers registered in src.api.errors.
"""

from fastapi import APIRouter, Depends, status

from src.api.dependencies import get_auth_service
from src.api.models import (
    CodeRequest,
    EmailResponse,
    ErrorResponse,
    LoginResponse,
    OtpResendRequest,
    PasswordRequest,
    SignupStartRequest,
    TokenResponse,
)
from src.domain.authentication import AuthenticationService

router = APIRouter(prefix="/auth", tags=["v1"])


@router.post(
    "/signup/start",
    response_model=EmailResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        409: {"model": ErrorResponse, "description": "User already exists"},
        422: {"description": "Validation error"},
    },
    summary="Start signup",
    description="Submit an email address to begin signup. "
    "A 6-digit verification code is sent to the address.",
)
def signup_start(
    request_data: SignupStartRequest,
    service: AuthenticationService = Depends(get_auth_service),
) -> EmailResponse:
    result = service.signup_start(request_data.email)
    return EmailResponse(
        message="User created. Verify your email with the code sent.",
        email=result.email,
    )


@router.post(
    "/verify-email",
    response_model=EmailResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid or expired code"},
        404: {"model": ErrorResponse, "description": "User not found"},
    },
    summary="Verify email with code",
)
def verify_email(
    request_data: CodeRequest,
    service: AuthenticationService = Depends(get_auth_service),
) -> EmailResponse:
    result = service.verify_email(request_data.email, request_data.code)
    return EmailResponse(
        message="Email verified. You can now create a password.",
        email=result.email,
    )


@router.post(
    "/signup/complete",
    response_model=TokenResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Email not verified or password already set"},
        404: {"model": ErrorResponse, "description": "User not found"},
    },
    summary="Complete signup with a password",
)
def signup_complete(
    request_data: PasswordRequest,
    service: AuthenticationService = Depends(get_auth_service),
) -> TokenResponse:
    """
    Set the account password after email verification.

    Returns a session token valid for 7 days.
    """
    result = service.signup_complete(request_data.email, request_data.password)
    return TokenResponse(
        message="Account created successfully",
        token=result.token,
        email=result.email,
    )


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Account setup incomplete"},
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
    },
    summary="Log in with email and password",
    description="Returns a token, or requires_verification=true when the "
    "email still has to be verified. In that case a code is sent.",
)
def login(
    request_data: PasswordRequest,
    service: AuthenticationService = Depends(get_auth_service),
) -> LoginResponse:
    result = service.login(request_data.email, request_data.password)
    if result.requires_verification:
        return LoginResponse(
            message="Email not verified. Verification code sent.",
            email=result.email,
            requires_verification=True,
        )
    return LoginResponse(message="Login successful", email=result.email, token=result.token)


@router.post(
    "/login/verify",
    response_model=TokenResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid or expired code"},
        404: {"model": ErrorResponse, "description": "User not found"},
    },
    summary="Complete a login challenge with a code",
)
def login_verify(
    request_data: CodeRequest,
    service: AuthenticationService = Depends(get_auth_service),
) -> TokenResponse:
    result = service.login_verify(request_data.email, request_data.code)
    return TokenResponse(message="Login verified", token=result.token, email=result.email)


@router.post(
    "/otp/resend",
    response_model=EmailResponse,
    responses={404: {"model": ErrorResponse, "description": "User not found"}},
    summary="Resend a verification code",
)
def otp_resend(
    request_data: OtpResendRequest,
    service: AuthenticationService = Depends(get_auth_service),
) -> EmailResponse:
    # Usable from both signup and login flows
    result = service.resend_otp(request_data.email, request_data.context)
    return EmailResponse(message="A new verification code has been sent.", email=result.email)
