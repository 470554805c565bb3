"""
Authentication module.

Handles account persistence, one-time passcodes, session tokens and the
sign-up / sign-in / password reset flows.

Public API:
- IAuthService, ICredentialStore: Interfaces for auth operations
- Account, AccountProfile, Role, OtpPurpose: Core models
- Auth exceptions: AccountExistsError, OtpExpiredError, etc.
"""

from .interfaces import IAuthService, ICredentialStore
from .models import (
    Account,
    AccountProfile,
    OtpPurpose,
    OtpRecord,
    Role,
    normalize_email,
)
from .exceptions import (
    AccountExistsError,
    AccountNotFoundError,
    InvalidCredentialsError,
    OtpError,
    OtpNotRequestedError,
    OtpExpiredError,
    OtpMismatchError,
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    InsufficientPermissionsError,
)

__all__ = [
    # Interfaces
    "IAuthService",
    "ICredentialStore",
    # Models
    "Account",
    "AccountProfile",
    "OtpPurpose",
    "OtpRecord",
    "Role",
    "normalize_email",
    # Exceptions
    "AccountExistsError",
    "AccountNotFoundError",
    "InvalidCredentialsError",
    "OtpError",
    "OtpNotRequestedError",
    "OtpExpiredError",
    "OtpMismatchError",
    "InvalidTokenError",
    "ExpiredTokenError",
    "MissingTokenError",
    "InsufficientPermissionsError",
]
