"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import pytest
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from fastapi.testclient import TestClient

from api import app
from api.dependencies import ServiceContainer, reset_container, set_container
from modules.auth.store import CredentialStore
from shared.config import Settings


# Test JWT secret (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only"

# Keep PBKDF2 cheap in tests
TEST_HASH_ITERATIONS = 1_000


class FakeClock:
    """Controllable clock for expiry tests."""

    def __init__(self, start: Optional[datetime] = None):
        self.now = start or datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


class MemoryStorage:
    """In-memory document storage that records every write."""

    def __init__(self, document: Optional[dict[str, Any]] = None, fail_read: bool = False):
        self.document = document
        self.fail_read = fail_read
        self.writes: list[dict[str, Any]] = []

    def read(self) -> Optional[dict[str, Any]]:
        if self.fail_read:
            raise OSError("disk on fire")
        return self.document

    def write(self, document: dict[str, Any]) -> None:
        self.document = document
        self.writes.append(document)


@pytest.fixture(autouse=True)
def reset_container_singleton():
    """Reset the service container before and after each test."""
    reset_container()
    yield
    reset_container()


@pytest.fixture
def clock() -> FakeClock:
    """Provide a fixed, advanceable clock."""
    return FakeClock()


@pytest.fixture
def memory_storage() -> MemoryStorage:
    """Provide an empty in-memory document storage."""
    return MemoryStorage()


@pytest.fixture
def make_storage():
    """Factory for in-memory storages with a preset document."""
    def _make(document: Optional[dict[str, Any]] = None, fail_read: bool = False) -> MemoryStorage:
        return MemoryStorage(document=document, fail_read=fail_read)
    return _make


@pytest.fixture
def credential_store(memory_storage: MemoryStorage, clock: FakeClock) -> CredentialStore:
    """Credential store over in-memory storage with cheap hashing."""
    return CredentialStore(memory_storage, clock=clock, hash_iterations=TEST_HASH_ITERATIONS)


@pytest.fixture
def jwt_secret() -> str:
    """Provide the test JWT secret."""
    return TEST_JWT_SECRET


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Settings pointing at a temporary data directory, dev mode on, no SMTP."""
    return Settings(
        _env_file=None,
        data_dir=tmp_path,
        jwt_secret=TEST_JWT_SECRET,
        password_hash_iterations=TEST_HASH_ITERATIONS,
        otp_dev_mode=True,
        smtp_host="",
        smtp_user="",
        smtp_pass="",
        board_sync_mode="replace",
        seed_demo_tasks=True,
    )


@pytest.fixture
def container(test_settings: Settings) -> ServiceContainer:
    """Install a service container built from the test settings."""
    container = ServiceContainer(settings=test_settings)
    set_container(container)
    return container


@pytest.fixture
def client(container: ServiceContainer):
    """Test client running the app lifespan against the test container."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def sign_in_with_dev_otp(client: TestClient):
    """Run sign-in and OTP verification, returning the session response body."""
    def _sign_in(email: str, password: str, role: str = "user") -> dict[str, Any]:
        response = client.post(
            "/api/auth/signin",
            json={"email": email, "password": password, "role": role},
        )
        assert response.status_code == 200, response.text
        code = response.json()["devOtp"]
        response = client.post(
            "/api/auth/verify-otp",
            json={"email": email, "code": code, "role": role},
        )
        assert response.status_code == 200, response.text
        return response.json()
    return _sign_in
