"""
Authentication API endpoints.

Provides sign-up, sign-in (password + OTP), OTP verification and the
forgot / reset password flow.
"""

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_auth_service
from modules.notifications.exceptions import DeliveryUnavailableError

from .interfaces import IAuthService
from .models import (
    ForgotPasswordRequest,
    MessageResponse,
    OtpIssuedResponse,
    ResetPasswordRequest,
    SessionResponse,
    SignInRequest,
    SignUpRequest,
    VerifyOtpRequest,
)
from .exceptions import (
    AccountExistsError,
    AccountNotFoundError,
    InvalidCredentialsError,
    OtpError,
)

router = APIRouter()


@router.post("/signup", response_model=MessageResponse)
async def sign_up(
    request: SignUpRequest,
    service: IAuthService = Depends(get_auth_service),
) -> MessageResponse:
    """
    Create an account for (email, role).

    The same email may hold one user and one admin account.
    """
    try:
        return await service.sign_up(request)
    except AccountExistsError as e:
        raise HTTPException(status_code=409, detail=e.message)


@router.post("/signin", response_model=OtpIssuedResponse, response_model_exclude_none=True)
async def sign_in(
    request: SignInRequest,
    service: IAuthService = Depends(get_auth_service),
) -> OtpIssuedResponse:
    """
    Check credentials and send a login OTP.

    In dev mode, when the email was not sent, the response carries the code
    in `devOtp`.
    """
    try:
        return await service.sign_in(request)
    except InvalidCredentialsError as e:
        raise HTTPException(status_code=401, detail=e.message)
    except DeliveryUnavailableError as e:
        raise HTTPException(status_code=500, detail=e.message)


@router.post("/verify-otp", response_model=SessionResponse)
async def verify_otp(
    request: VerifyOtpRequest,
    service: IAuthService = Depends(get_auth_service),
) -> SessionResponse:
    """
    Exchange a one-time passcode for a session token.
    """
    try:
        return await service.verify_otp(request)
    except (InvalidCredentialsError, OtpError) as e:
        raise HTTPException(status_code=401, detail=e.message)


@router.post(
    "/forgot-password",
    response_model=OtpIssuedResponse,
    response_model_exclude_none=True,
)
async def forgot_password(
    request: ForgotPasswordRequest,
    service: IAuthService = Depends(get_auth_service),
) -> OtpIssuedResponse:
    """
    Send a password reset OTP.

    Unknown accounts answer 404 here, unlike sign-in which answers 401.
    """
    try:
        return await service.forgot_password(request)
    except AccountNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except DeliveryUnavailableError as e:
        raise HTTPException(status_code=500, detail=e.message)


@router.post("/reset-password", response_model=MessageResponse)
async def reset_password(
    request: ResetPasswordRequest,
    service: IAuthService = Depends(get_auth_service),
) -> MessageResponse:
    """
    Set a new password using a reset OTP.
    """
    try:
        return await service.reset_password(request)
    except AccountNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except OtpError as e:
        raise HTTPException(status_code=401, detail=e.message)
