"""
Authentication service implementation.

Orchestrates the credential store, the OTP issuer, the notification gateway
and the session token issuer into the sign-up, sign-in, OTP verification and
password reset flows.
"""

import logging
from typing import Optional

from modules.notifications.exceptions import DeliveryUnavailableError
from modules.notifications.interfaces import INotificationGateway
from modules.notifications.models import DeliveryFailure, DeliveryResult

from .exceptions import AccountNotFoundError, InvalidCredentialsError
from .interfaces import IAuthService, ICredentialStore
from .models import (
    Account,
    AccountProfile,
    ForgotPasswordRequest,
    MessageResponse,
    OtpIssuedResponse,
    OtpPurpose,
    ResetPasswordRequest,
    Role,
    SessionResponse,
    SessionUser,
    SignInRequest,
    SignUpRequest,
    VerifyOtpRequest,
)
from .otp import OtpService
from .tokens import SessionTokenIssuer

logger = logging.getLogger(__name__)


class AuthService(IAuthService):
    """
    Implementation of the authentication flows.

    Args:
        store: Account persistence
        otp: One-time passcode issuer/verifier
        tokens: Session token issuer
        notifier: OTP delivery gateway, or None when no delivery channel exists
        dev_mode: Allow returning the OTP in the response when it was not emailed
        require_delivery: Fail sign-in / forgot-password when the email was not sent
    """

    def __init__(
        self,
        store: ICredentialStore,
        otp: OtpService,
        tokens: SessionTokenIssuer,
        notifier: Optional[INotificationGateway] = None,
        dev_mode: bool = False,
        require_delivery: bool = True,
    ):
        self._store = store
        self._otp = otp
        self._tokens = tokens
        self._notifier = notifier
        self._dev_mode = dev_mode
        self._require_delivery = require_delivery

    async def sign_up(self, request: SignUpRequest) -> MessageResponse:
        self._store.create(
            email=request.email,
            role=request.role,
            first_name=request.first_name,
            password=request.password,
        )
        return MessageResponse(message="User created successfully.")

    async def sign_in(self, request: SignInRequest) -> OtpIssuedResponse:
        account = self._store.get(request.email, request.role)
        if account is None:
            raise InvalidCredentialsError("Account not found for this role.")
        if not self._store.verify_password(request.email, request.role, request.password):
            raise InvalidCredentialsError()

        return await self._issue_and_deliver(account, OtpPurpose.LOGIN)

    async def verify_otp(self, request: VerifyOtpRequest) -> SessionResponse:
        account = self._store.get(request.email, request.role)
        if account is None:
            raise InvalidCredentialsError("Account not found for this role.")

        self._otp.verify(account.email, account.role, request.purpose, request.code)

        token = self._tokens.issue(account.email, account.role)
        logger.info(f"Session issued for {account.role.value} {account.email}")
        return SessionResponse(
            token=token,
            user=SessionUser(
                email=account.email,
                first_name=account.first_name,
                role=account.role,
            ),
        )

    async def forgot_password(self, request: ForgotPasswordRequest) -> OtpIssuedResponse:
        account = self._require_account(request.email, request.role)
        return await self._issue_and_deliver(account, OtpPurpose.RESET)

    async def reset_password(self, request: ResetPasswordRequest) -> MessageResponse:
        account = self._require_account(request.email, request.role)
        self._otp.verify(account.email, account.role, OtpPurpose.RESET, request.code)
        self._store.set_password(account.email, account.role, request.new_password)
        return MessageResponse(message="Password updated successfully.")

    async def get_profile(self, email: str, role: Role) -> AccountProfile:
        return AccountProfile.from_account(self._require_account(email, role))

    async def list_profiles(self) -> list[AccountProfile]:
        return [AccountProfile.from_account(a) for a in self._store.list_accounts()]

    def _require_account(self, email: str, role: Role) -> Account:
        account = self._store.get(email, role)
        if account is None:
            raise AccountNotFoundError(email, Role(role).value)
        return account

    async def _issue_and_deliver(
        self,
        account: Account,
        purpose: OtpPurpose,
    ) -> OtpIssuedResponse:
        """Issue an OTP, try to deliver it and apply the disclosure policy."""
        code = self._otp.issue(account.email, account.role, purpose)
        result = await self._deliver(account, code, purpose)

        if self._require_delivery and not result.sent:
            raise DeliveryUnavailableError(result.reason)

        return OtpIssuedResponse(
            otp_sent=True,
            expires_in_seconds=self._otp.ttl_seconds,
            email_sent=result.sent,
            dev_otp=code if self._dev_mode and not result.sent else None,
        )

    async def _deliver(self, account: Account, code: str, purpose: OtpPurpose) -> DeliveryResult:
        if self._notifier is None:
            return DeliveryResult.failed(DeliveryFailure.NOT_CONFIGURED)
        return await self._notifier.send_otp(
            email=account.email,
            role=account.role.value,
            code=code,
            purpose=purpose.value,
        )
