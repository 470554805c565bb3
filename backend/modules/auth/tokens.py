"""
Session token issuer.

Tokens are HS256 JWTs carrying ``{"user": {"email", "role"}}`` plus ``sub``,
``role``, ``iat`` and ``exp`` claims. Nothing is stored server-side.
"""

from datetime import timedelta

import jwt

from shared.models import AuthenticatedUser

from .exceptions import ExpiredTokenError, InvalidTokenError, MissingTokenError
from .models import Role, normalize_email
from .store import Clock, utc_now

ALGORITHM = "HS256"
DEFAULT_SESSION_TTL = timedelta(hours=2)


class SessionTokenIssuer:
    """Mints and verifies signed, time-limited session tokens."""

    def __init__(
        self,
        secret: str,
        expires_in: timedelta = DEFAULT_SESSION_TTL,
        clock: Clock = utc_now,
    ) -> None:
        self._secret = secret
        self._expires_in = expires_in
        self._clock = clock

    def issue(self, email: str, role: Role) -> str:
        """Sign a token for (email, role) that expires after the session TTL."""
        now = self._clock()
        email = normalize_email(email)
        role = Role(role).value
        payload = {
            "user": {"email": email, "role": role},
            "sub": email,
            "role": role,
            "iat": int(now.timestamp()),
            "exp": int((now + self._expires_in).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=ALGORITHM)

    def decode(self, token: str) -> AuthenticatedUser:
        """
        Verify signature and expiry and return the embedded identity.

        Expiry is checked against the injected clock rather than wall time.

        Raises:
            MissingTokenError: If token is empty
            ExpiredTokenError: If the token has expired
            InvalidTokenError: If the token is malformed or badly signed
        """
        if not token:
            raise MissingTokenError()

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[ALGORITHM],
                options={
                    "require": ["exp", "iat"],
                    "verify_exp": False,
                    "verify_iat": False,
                },
            )
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(f"Invalid token: {e}")

        if payload["exp"] <= int(self._clock().timestamp()):
            raise ExpiredTokenError("Token has expired")

        claims = payload.get("user") or {}
        try:
            return AuthenticatedUser(email=claims["email"], role=claims.get("role", "user"))
        except (KeyError, ValueError) as e:
            raise InvalidTokenError(f"Invalid token: {e}")
