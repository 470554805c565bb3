"""
User-related endpoints.

Provides endpoints for the signed-in user's profile and the admin account list.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from modules.auth.exceptions import AccountNotFoundError
from modules.auth.interfaces import IAuthService
from modules.auth.models import AccountProfile, Role
from shared.models import AuthenticatedUser

from ..dependencies import get_auth_service
from ..middleware.auth import RequireAdmin, RequireAuth

router = APIRouter()


@router.get("/me", response_model=AccountProfile)
async def get_current_user_profile(
    user: AuthenticatedUser = RequireAuth,
    auth_service: IAuthService = Depends(get_auth_service),
) -> AccountProfile:
    """
    Get the current user's profile.

    Requires authentication.
    """
    try:
        return await auth_service.get_profile(user.email, Role(user.role))
    except (AccountNotFoundError, ValueError):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Account not found")


@router.get("", response_model=list[AccountProfile])
async def list_users(
    user: AuthenticatedUser = RequireAdmin,
    auth_service: IAuthService = Depends(get_auth_service),
) -> list[AccountProfile]:
    """
    List every account.

    Requires an admin session.
    """
    return await auth_service.list_profiles()
