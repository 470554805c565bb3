"""
Password hashing.

New hashes are salted PBKDF2-HMAC-SHA256, encoded as
``pbkdf2_sha256$<iterations>$<salt_b64>$<hash_b64>``. Bare SHA-256 hex digests
written by older deployments are still accepted by verify_password.
"""

import base64
import hashlib
import hmac
import re
import secrets
from typing import Optional

ALGORITHM = "pbkdf2_sha256"
DEFAULT_ITERATIONS = 310_000

_LEGACY_SHA256 = re.compile(r"^[0-9a-f]{64}$")


def hash_password(
    password: str,
    salt: Optional[bytes] = None,
    iterations: int = DEFAULT_ITERATIONS,
) -> str:
    """Return an encoded, salted hash of ``password``."""
    salt = salt if salt is not None else secrets.token_bytes(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
    return "$".join(
        [
            ALGORITHM,
            str(iterations),
            base64.b64encode(salt).decode("ascii"),
            base64.b64encode(digest).decode("ascii"),
        ]
    )


def verify_password(password: str, encoded: str) -> bool:
    """Recompute the hash of ``password`` and compare it to ``encoded``."""
    if _LEGACY_SHA256.match(encoded):
        legacy = hashlib.sha256(password.encode("utf-8")).hexdigest()
        return hmac.compare_digest(legacy, encoded)

    try:
        algorithm, iterations, salt_b64, _ = encoded.split("$")
        if algorithm != ALGORITHM:
            return False
        salt = base64.b64decode(salt_b64)
        expected = hash_password(password, salt=salt, iterations=int(iterations))
    except ValueError:
        return False
    return hmac.compare_digest(expected, encoded)
