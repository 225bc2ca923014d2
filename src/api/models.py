"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
"""

from pydantic import BaseModel, EmailStr, Field, field_validator

# bcrypt only considers the first 72 bytes of a password
_PASSWORD_MAX_BYTES = 72


class SignupStartRequest(BaseModel):
    """Request model for starting signup."""

    email: EmailStr


class CodeRequest(BaseModel):
    """Request model for submitting a verification code (signup or login)."""

    email: EmailStr
    code: str = Field(..., min_length=1, max_length=16, description="6-digit verification code")


class PasswordRequest(BaseModel):
    """Request model for signup completion and login."""

    email: EmailStr
    password: str = Field(..., min_length=1, max_length=_PASSWORD_MAX_BYTES)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v: str) -> str:
        """Reject passwords longer than 72 bytes once UTF-8 encoded."""
        if len(v.encode("utf-8")) > _PASSWORD_MAX_BYTES:
            raise ValueError(f"Password must be at most {_PASSWORD_MAX_BYTES} bytes")
        return v


class OtpResendRequest(BaseModel):
    """Request model for resending a verification code."""

    email: EmailStr
    context: str = Field(
        "Generic",
        min_length=1,
        max_length=32,
        description="Flow the resend belongs to, e.g. Signup or Login",
    )


class EmailResponse(BaseModel):
    """Response model for operations that only echo the email."""

    message: str
    email: str


class TokenResponse(BaseModel):
    """Response model for operations that issue a session token."""

    message: str
    token: str
    email: str


class LoginResponse(BaseModel):
    """
    Response model for login.

    Either a token, or requires_verification=True with no token when
    the account still has to clear an email challenge.
    """

    message: str
    email: str
    token: str | None = None
    requires_verification: bool = False


class ErrorResponse(BaseModel):
    """Standard error response model."""

    detail: str
    code: str
