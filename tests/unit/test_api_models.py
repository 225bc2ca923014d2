"""
Unit tests for API request/response models.

Tests Pydantic model validation for the authentication endpoints.
"""

import pytest
from pydantic import ValidationError

from src.api.models import (
    CodeRequest,
    ErrorResponse,
    LoginResponse,
    OtpResendRequest,
    PasswordRequest,
    SignupStartRequest,
    TokenResponse,
)


class TestSignupStartRequest:
    """Tests for SignupStartRequest model."""

    def test_valid_email(self) -> None:
        assert SignupStartRequest(email="user@example.com").email == "user@example.com"

    def test_email_domain_normalized(self) -> None:
        """EmailStr lowercases the domain; the domain layer lowercases the rest."""
        assert SignupStartRequest(email="USER@EXAMPLE.COM").email == "USER@example.com"

    def test_invalid_email_rejected(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            SignupStartRequest(email="not-an-email")
        assert "email" in str(exc_info.value)

    def test_missing_email_rejected(self) -> None:
        with pytest.raises(ValidationError):
            SignupStartRequest()  # type: ignore[call-arg]


class TestCodeRequest:
    """Tests for CodeRequest model."""

    def test_valid(self) -> None:
        request = CodeRequest(email="user@example.com", code="123456")
        assert request.code == "123456"

    def test_code_kept_verbatim(self) -> None:
        """No trimming: exact comparison happens in the domain."""
        assert CodeRequest(email="user@example.com", code=" 123456").code == " 123456"

    def test_empty_code_rejected(self) -> None:
        with pytest.raises(ValidationError):
            CodeRequest(email="user@example.com", code="")

    def test_missing_code_rejected(self) -> None:
        with pytest.raises(ValidationError):
            CodeRequest(email="user@example.com")  # type: ignore[call-arg]


class TestPasswordRequest:
    """Tests for PasswordRequest model."""

    def test_valid(self) -> None:
        assert PasswordRequest(email="user@example.com", password="pw123").password == "pw123"

    def test_empty_password_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PasswordRequest(email="user@example.com", password="")

    def test_password_over_72_chars_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PasswordRequest(email="user@example.com", password="x" * 73)

    def test_password_exactly_72_chars(self) -> None:
        assert len(PasswordRequest(email="user@example.com", password="x" * 72).password) == 72

    def test_multibyte_password_over_72_bytes_rejected(self) -> None:
        """40 two-byte characters fit the character limit but not bcrypt's byte limit."""
        with pytest.raises(ValidationError):
            PasswordRequest(email="user@example.com", password="é" * 40)

    def test_multibyte_password_exactly_72_bytes(self) -> None:
        assert PasswordRequest(email="user@example.com", password="é" * 36).password == "é" * 36


class TestOtpResendRequest:
    """Tests for OtpResendRequest model."""

    def test_context_defaults_to_generic(self) -> None:
        assert OtpResendRequest(email="user@example.com").context == "Generic"

    def test_custom_context(self) -> None:
        assert OtpResendRequest(email="user@example.com", context="Login").context == "Login"


class TestResponses:
    """Tests for response models."""

    def test_login_response_challenge_shape(self) -> None:
        response = LoginResponse(message="m", email="user@example.com", requires_verification=True)
        assert response.model_dump() == {
            "message": "m",
            "email": "user@example.com",
            "token": None,
            "requires_verification": True,
        }

    def test_token_response_requires_token(self) -> None:
        with pytest.raises(ValidationError):
            TokenResponse(message="m", email="user@example.com")  # type: ignore[call-arg]

    def test_error_response(self) -> None:
        error = ErrorResponse(detail="User not found", code="NotFound")
        assert error.model_dump() == {"detail": "User not found", "code": "NotFound"}
