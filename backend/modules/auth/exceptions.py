"""
Authentication module exceptions.

These exceptions are raised by the auth module and can be caught
by API error handlers to return appropriate HTTP responses.
"""

from shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
)


class AccountExistsError(ConflictError):
    """Raised when an account already exists for (email, role)."""

    def __init__(self, email: str, role: str):
        super().__init__(
            "Account already exists for this email.",
            code="ACCOUNT_EXISTS",
            details={"email": email, "role": role},
        )


class AccountNotFoundError(NotFoundError):
    """Raised when no account exists for (email, role)."""

    def __init__(self, email: str, role: str):
        super().__init__(
            "Account not found for this role.",
            code="ACCOUNT_NOT_FOUND",
            details={"email": email, "role": role},
        )


class InvalidCredentialsError(AuthenticationError):
    """Raised when sign-in credentials do not match an account."""

    def __init__(self, message: str = "Invalid credentials."):
        super().__init__(message, code="INVALID_CREDENTIALS")


class OtpError(AuthenticationError):
    """Base exception for OTP verification failures."""

    pass


class OtpNotRequestedError(OtpError):
    """Raised when no live OTP exists for the key."""

    def __init__(self):
        super().__init__("No OTP requested for this account.", code="OTP_NOT_REQUESTED")


class OtpExpiredError(OtpError):
    """Raised when the OTP expiry has passed. The record is discarded."""

    def __init__(self):
        super().__init__("OTP expired. Please request a new one.", code="OTP_EXPIRED")


class OtpMismatchError(OtpError):
    """Raised when the submitted code differs. The record is kept."""

    def __init__(self):
        super().__init__("Invalid OTP. Please try again.", code="OTP_MISMATCH")


class InvalidTokenError(AuthenticationError):
    """Raised when a session token is invalid or malformed."""

    def __init__(self, message: str = "Invalid authentication token"):
        super().__init__(message, code="INVALID_TOKEN")


class ExpiredTokenError(AuthenticationError):
    """Raised when a session token has expired."""

    def __init__(self, message: str = "Authentication token has expired"):
        super().__init__(message, code="TOKEN_EXPIRED")


class MissingTokenError(AuthenticationError):
    """Raised when no authentication token is provided."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="MISSING_TOKEN")


class InsufficientPermissionsError(AuthorizationError):
    """Raised when user lacks required permissions."""

    def __init__(self, required_role: str, user_role: str):
        super().__init__(
            f"Insufficient permissions. Required: {required_role}, has: {user_role}",
            code="INSUFFICIENT_PERMISSIONS",
            details={"required_role": required_role, "user_role": user_role},
        )
