"""
Credential store.

Keeps every account in memory, keyed by (normalized email, role), and
rewrites the whole accounts document on each mutation. The document layout
is ``{"users": [Account, ...]}`` with camelCase keys.

Single-process only: two processes writing the same file will lose updates.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from pydantic import ValidationError

from shared.repository import BaseRepository, DocumentStorage

from .exceptions import AccountExistsError, AccountNotFoundError
from .models import Account, Role, normalize_email
from .passwords import DEFAULT_ITERATIONS, hash_password, verify_password

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


# Demo accounts seeded on first start: (email, first name, role, password)
DEFAULT_ACCOUNTS: tuple[tuple[str, str, Role, str], ...] = (
    ("member@tasktracker.io", "Team Member", Role.USER, "password123"),
    ("admin@tasktracker.io", "Admin", Role.ADMIN, "admin123"),
)


class CredentialStore(BaseRepository[Account]):
    """
    File-backed account store.

    Loading is lazy and fails soft: a missing or unreadable document is
    replaced by a fresh one holding only the default accounts. Individual
    records that fail validation are skipped, the rest are kept.
    """

    def __init__(
        self,
        storage: DocumentStorage,
        clock: Clock = utc_now,
        hash_iterations: int = DEFAULT_ITERATIONS,
    ) -> None:
        super().__init__(storage)
        self._clock = clock
        self._hash_iterations = hash_iterations
        self._accounts: Optional[dict[tuple[str, str], Account]] = None

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    def load(self) -> None:
        """Read persisted accounts, seeding defaults where needed."""
        try:
            document = self._storage.read()
        except Exception:
            logger.warning("Accounts document unreadable, reseeding defaults", exc_info=True)
            self._reseed()
            return

        if document is None:
            logger.info("No accounts document found, seeding defaults")
            self._reseed()
            return

        if not isinstance(document, dict):
            logger.warning("Accounts document is not an object, reseeding defaults")
            self._reseed()
            return

        self._accounts = self._parse(document)
        if self._add_missing_defaults():
            self._save()
        logger.info(f"Loaded {len(self._accounts)} accounts")

    def _parse(self, document: dict) -> dict[tuple[str, str], Account]:
        records = document.get("users")
        if not isinstance(records, list):
            records = []

        accounts: dict[tuple[str, str], Account] = {}
        for record in records:
            if not isinstance(record, dict) or not record.get("email"):
                continue
            try:
                account = Account.model_validate(record)
            except ValidationError as e:
                logger.warning(f"Skipping invalid account record for {record.get('email')}: {e}")
                continue
            accounts[account.key] = account
        return accounts

    def _reseed(self) -> None:
        self._accounts = {}
        self._add_missing_defaults()
        self._save()

    def _add_missing_defaults(self) -> bool:
        changed = False
        for email, first_name, role, password in DEFAULT_ACCOUNTS:
            key = (email, role.value)
            if key in self._accounts:
                continue
            self._accounts[key] = Account(
                email=email,
                first_name=first_name,
                role=role,
                password_hash=hash_password(password, iterations=self._hash_iterations),
                created_at=self._clock(),
            )
            changed = True
        return changed

    def _ensure_loaded(self) -> dict[tuple[str, str], Account]:
        if self._accounts is None:
            self.load()
        return self._accounts

    def _save(self) -> None:
        users = [
            account.model_dump(mode="json", by_alias=True, exclude_none=True)
            for account in self._accounts.values()
        ]
        self._storage.write({"users": users})

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get(self, email: str, role: Role) -> Optional[Account]:
        """Look up an account by normalized email and role."""
        return self._ensure_loaded().get((normalize_email(email), Role(role).value))

    def list_accounts(self) -> list[Account]:
        """All accounts in insertion order."""
        return list(self._ensure_loaded().values())

    def verify_password(self, email: str, role: Role, password: str) -> bool:
        """True if the account exists and the password matches its hash."""
        account = self.get(email, role)
        if account is None:
            return False
        return verify_password(password, account.password_hash)

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def create(self, email: str, role: Role, first_name: str, password: str) -> Account:
        """
        Create and persist a new account.

        Raises:
            AccountExistsError: If (email, role) is already taken. The existing
                record is left untouched.
        """
        accounts = self._ensure_loaded()
        role = Role(role)
        key = (normalize_email(email), role.value)
        if key in accounts:
            raise AccountExistsError(key[0], role.value)

        account = Account(
            email=key[0],
            first_name=first_name,
            role=role,
            password_hash=hash_password(password, iterations=self._hash_iterations),
            created_at=self._clock(),
        )
        accounts[key] = account
        self._save()
        logger.info(f"Created {role.value} account for {account.email}")
        return account

    def set_password(self, email: str, role: Role, new_password: str) -> Account:
        """
        Overwrite the password hash of an existing account.

        Raises:
            AccountNotFoundError: If the account does not exist
        """
        accounts = self._ensure_loaded()
        role = Role(role)
        key = (normalize_email(email), role.value)
        account = accounts.get(key)
        if account is None:
            raise AccountNotFoundError(key[0], role.value)

        updated = account.model_copy(
            update={
                "password_hash": hash_password(new_password, iterations=self._hash_iterations),
                "updated_at": self._clock(),
            }
        )
        accounts[key] = updated
        self._save()
        logger.info(f"Password updated for {role.value} account {updated.email}")
        return updated
