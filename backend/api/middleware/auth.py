"""
Session token authentication.

Verifies bearer session tokens minted by the OTP flow and extracts the
signed-in identity.
"""

from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from modules.auth.exceptions import (
    ExpiredTokenError,
    InsufficientPermissionsError,
    InvalidTokenError,
    MissingTokenError,
)
from modules.auth.tokens import SessionTokenIssuer
from shared.models import AuthenticatedUser

from ..dependencies import get_token_issuer

# Bearer token extractor
bearer_scheme = HTTPBearer(auto_error=False)


class AuthError(HTTPException):
    """Authentication error with consistent format."""
    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


def decode_token(token: str, issuer: SessionTokenIssuer) -> AuthenticatedUser:
    """
    Decode and validate a session token.

    Args:
        token: The JWT token string
        issuer: Issuer holding the signing secret

    Returns:
        AuthenticatedUser with the token's email and role

    Raises:
        AuthError: If token is missing, invalid or expired
    """
    try:
        return issuer.decode(token)
    except (MissingTokenError, ExpiredTokenError, InvalidTokenError) as e:
        raise AuthError(e.message)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    issuer: SessionTokenIssuer = Depends(get_token_issuer),
) -> AuthenticatedUser:
    """
    Dependency that requires authentication.

    Use this for endpoints that require a signed-in user.

    Usage:
        @router.get("/protected")
        async def protected_route(user: AuthenticatedUser = Depends(get_current_user)):
            return {"email": user.email}
    """
    if credentials is None:
        raise AuthError("Missing authorization header")

    return decode_token(credentials.credentials, issuer)


async def require_admin(
    user: AuthenticatedUser = Depends(get_current_user),
) -> AuthenticatedUser:
    """
    Dependency that requires an admin session.
    """
    if not user.is_admin:
        error = InsufficientPermissionsError(required_role="admin", user_role=user.role)
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=error.message)
    return user


# Type aliases for cleaner route definitions
RequireAuth = Depends(get_current_user)
RequireAdmin = Depends(require_admin)
