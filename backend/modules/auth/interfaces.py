"""
Authentication module interfaces.

The API layer should depend on IAuthService and ICredentialStore, not the
concrete implementations. This enables testing with mocks.
"""

from typing import Optional, Protocol, runtime_checkable

from .models import (
    Account,
    AccountProfile,
    ForgotPasswordRequest,
    MessageResponse,
    OtpIssuedResponse,
    ResetPasswordRequest,
    Role,
    SessionResponse,
    SignInRequest,
    SignUpRequest,
    VerifyOtpRequest,
)


@runtime_checkable
class ICredentialStore(Protocol):
    """Durable mapping of (normalized email, role) to an account."""

    def load(self) -> None:
        """Read persisted accounts, reseeding defaults on any failure."""
        ...

    def get(self, email: str, role: Role) -> Optional[Account]:
        """Return the account or None."""
        ...

    def list_accounts(self) -> list[Account]:
        """Return every account."""
        ...

    def create(self, email: str, role: Role, first_name: str, password: str) -> Account:
        """
        Create an account.

        Raises:
            AccountExistsError: If (email, role) already exists
        """
        ...

    def set_password(self, email: str, role: Role, new_password: str) -> Account:
        """
        Replace an account's password.

        Raises:
            AccountNotFoundError: If the account does not exist
        """
        ...

    def verify_password(self, email: str, role: Role, password: str) -> bool:
        """Return True if the password matches."""
        ...


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for the sign-in / sign-up / password reset flows.

    This protocol defines the contract that the auth module exposes
    to the API layer. Implementations must provide all these methods.
    """

    async def sign_up(self, request: SignUpRequest) -> MessageResponse:
        """
        Create an account.

        Raises:
            AccountExistsError: If the account already exists
        """
        ...

    async def sign_in(self, request: SignInRequest) -> OtpIssuedResponse:
        """
        Check credentials, then issue and deliver a login OTP.

        Raises:
            InvalidCredentialsError: Unknown account or wrong password
            DeliveryUnavailableError: Delivery is mandatory and failed
        """
        ...

    async def verify_otp(self, request: VerifyOtpRequest) -> SessionResponse:
        """
        Exchange a valid OTP for a session token.

        Raises:
            InvalidCredentialsError: Unknown account
            OtpError: Code not requested, expired or wrong
        """
        ...

    async def forgot_password(self, request: ForgotPasswordRequest) -> OtpIssuedResponse:
        """
        Issue and deliver a reset OTP.

        Raises:
            AccountNotFoundError: Unknown account
            DeliveryUnavailableError: Delivery is mandatory and failed
        """
        ...

    async def reset_password(self, request: ResetPasswordRequest) -> MessageResponse:
        """
        Verify a reset OTP and store the new password.

        Raises:
            AccountNotFoundError: Unknown account
            OtpError: Code not requested, expired or wrong
        """
        ...

    async def get_profile(self, email: str, role: Role) -> AccountProfile:
        """
        Get the profile of an existing account.

        Raises:
            AccountNotFoundError: Unknown account
        """
        ...

    async def list_profiles(self) -> list[AccountProfile]:
        """Get profiles of every account."""
        ...
