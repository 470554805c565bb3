"""
One-time passcode issuer and verifier.

Each (email, role, purpose) key holds at most one live code. Lifecycle:
absent -> issued -> verified | expired | overwritten by a new issue.
Records live in process memory only.
"""

import hmac
import logging
import secrets
from datetime import datetime, timedelta
from typing import Callable, Optional

from .exceptions import OtpExpiredError, OtpMismatchError, OtpNotRequestedError
from .models import OtpPurpose, OtpRecord, Role, normalize_email
from .store import Clock, utc_now

logger = logging.getLogger(__name__)

DEFAULT_OTP_TTL = timedelta(minutes=10)


def generate_code() -> str:
    """Uniformly random 6-digit code (100000-999999)."""
    return str(100000 + secrets.randbelow(900000))


class OtpService:
    """Issues, validates and invalidates one-time passcodes."""

    def __init__(
        self,
        ttl: timedelta = DEFAULT_OTP_TTL,
        clock: Clock = utc_now,
        code_factory: Callable[[], str] = generate_code,
    ) -> None:
        self._ttl = ttl
        self._clock = clock
        self._code_factory = code_factory
        self._records: dict[tuple[str, str, str], OtpRecord] = {}

    @property
    def ttl_seconds(self) -> int:
        return int(self._ttl.total_seconds())

    @staticmethod
    def _key(email: str, role: Role, purpose: OtpPurpose) -> tuple[str, str, str]:
        return (normalize_email(email), Role(role).value, OtpPurpose(purpose).value)

    def issue(self, email: str, role: Role, purpose: OtpPurpose) -> str:
        """
        Issue a fresh code for the key, replacing any earlier one.

        Returns:
            The code. Delivery is up to the caller.
        """
        key = self._key(email, role, purpose)
        record = OtpRecord(code=self._code_factory(), expires_at=self._clock() + self._ttl)
        self._records[key] = record
        logger.info(f"Issued {key[2]} OTP for {key[1]} {key[0]}")
        return record.code

    def peek(self, email: str, role: Role, purpose: OtpPurpose) -> Optional[OtpRecord]:
        """Current record for the key, if any. Does not check expiry."""
        return self._records.get(self._key(email, role, purpose))

    def verify(self, email: str, role: Role, purpose: OtpPurpose, code: str) -> None:
        """
        Check a submitted code. Codes are single-use.

        Raises:
            OtpNotRequestedError: No record exists for the key
            OtpExpiredError: The record has expired; it is discarded
            OtpMismatchError: Wrong code; the record is kept for retries
        """
        key = self._key(email, role, purpose)
        record = self._records.get(key)
        if record is None:
            raise OtpNotRequestedError()

        if self._clock() > record.expires_at:
            del self._records[key]
            raise OtpExpiredError()

        if not hmac.compare_digest(record.code, code):
            raise OtpMismatchError()

        del self._records[key]
