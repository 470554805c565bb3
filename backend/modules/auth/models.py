"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import EmailStr, Field, field_validator, model_validator

from shared.models import CamelModel


def normalize_email(email: str) -> str:
    """Lowercase, whitespace-trimmed form used as the lookup key."""
    return email.strip().lower()


class Role(str, Enum):
    """Account roles. The same email may hold one account per role."""

    USER = "user"
    ADMIN = "admin"


class OtpPurpose(str, Enum):
    """Flows an OTP can be issued for. Codes never cross flows."""

    LOGIN = "login"
    RESET = "reset"


class Account(CamelModel):
    """
    A persisted account record.

    Serialized with camelCase keys (firstName, passwordHash, ...) in the
    accounts document. Uniqueness key is (email, role).
    """

    email: str = Field(..., description="Normalized email address")
    first_name: str = Field(default="", description="First name")
    role: Role = Field(default=Role.USER, description="Account role")
    password_hash: str = Field(..., description="Encoded password hash")
    created_at: Optional[datetime] = Field(None, description="Account creation time")
    updated_at: Optional[datetime] = Field(None, description="Last password change")

    model_config = {"extra": "ignore"}

    @field_validator("email", mode="before")
    @classmethod
    def _normalize_email(cls, value: Any) -> Any:
        if isinstance(value, str):
            return normalize_email(value)
        return value

    @model_validator(mode="before")
    @classmethod
    def _default_role(cls, data: Any) -> Any:
        # Older documents may store null for the role
        if isinstance(data, dict) and data.get("role") is None:
            data = {**data, "role": Role.USER.value}
        return data

    @property
    def key(self) -> tuple[str, str]:
        return (self.email, self.role.value)


class AccountProfile(CamelModel):
    """Account data that is safe to expose (no password hash)."""

    email: str
    first_name: str
    role: Role
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_account(cls, account: Account) -> "AccountProfile":
        return cls(
            email=account.email,
            first_name=account.first_name,
            role=account.role,
            created_at=account.created_at,
            updated_at=account.updated_at,
        )


class OtpRecord(CamelModel):
    """A live one-time passcode. Never persisted."""

    code: str = Field(..., pattern=r"^\d{6}$")
    expires_at: datetime


# -----------------------------------------------------------------------------
# Request models
# -----------------------------------------------------------------------------


class _EmailRequest(CamelModel):
    """Base for requests keyed by an email address."""

    email: EmailStr

    @field_validator("email", mode="before")
    @classmethod
    def _normalize_email(cls, value: Any) -> Any:
        if isinstance(value, str):
            return normalize_email(value)
        return value


class SignUpRequest(_EmailRequest):
    """Request to create an account."""

    password: str = Field(..., min_length=6, description="At least 6 characters")
    first_name: str = Field(..., min_length=1)
    role: Role = Role.USER

    @field_validator("first_name")
    @classmethod
    def _first_name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("First name is required")
        return value


class SignInRequest(_EmailRequest):
    """Request to check credentials and send a login OTP."""

    password: str = Field(..., min_length=1)
    role: Role = Role.USER


class VerifyOtpRequest(_EmailRequest):
    """Request to exchange an OTP for a session token."""

    code: str = Field(..., pattern=r"^\d{6}$", description="6-digit numeric code")
    role: Role = Role.USER
    purpose: OtpPurpose = OtpPurpose.LOGIN


class ForgotPasswordRequest(_EmailRequest):
    """Request to send a password reset OTP."""

    role: Role = Role.USER


class ResetPasswordRequest(_EmailRequest):
    """Request to set a new password using a reset OTP."""

    code: str = Field(..., pattern=r"^\d{6}$", description="6-digit numeric code")
    new_password: str = Field(..., min_length=6)
    role: Role = Role.USER


# -----------------------------------------------------------------------------
# Response models
# -----------------------------------------------------------------------------


class MessageResponse(CamelModel):
    """Plain acknowledgement."""

    ok: bool = True
    message: str


class OtpIssuedResponse(CamelModel):
    """Outcome of a sign-in or forgot-password request."""

    otp_sent: bool = True
    expires_in_seconds: int
    email_sent: bool
    dev_otp: Optional[str] = Field(
        None,
        description="Only present in dev mode when email was not delivered",
    )


class SessionUser(CamelModel):
    """Minimal profile returned alongside a session token."""

    email: str
    first_name: str
    role: Role


class SessionResponse(CamelModel):
    """Successful OTP verification."""

    token: str
    user: SessionUser
