"""
Centralized configuration for the Task Tracker backend.

All settings are loaded from environment variables with sensible defaults.
Module-specific settings should be namespaced (e.g., SMTP_*, OTP_*, JWT_*).
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Task Tracker API"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 5002
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["*"]
    cors_allow_credentials: bool = False
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Persistence
    data_dir: Path = Path("data")

    # Password hashing (PBKDF2-HMAC-SHA256 rounds)
    password_hash_iterations: int = 310_000

    # Session tokens
    jwt_secret: str = "dev-secret"
    jwt_expires_minutes: int = 120

    # One-time passcodes
    otp_ttl_seconds: int = 600
    otp_dev_mode: bool = False

    # Email delivery (SMTP)
    smtp_host: str = ""
    smtp_port: int = 587
    smtp_user: str = ""
    smtp_pass: str = ""
    smtp_secure: bool = False
    from_email: str = ""

    # Task board
    board_sync_mode: Literal["replace", "relay"] = "replace"
    seed_demo_tasks: bool = True

    @property
    def users_file(self) -> Path:
        """Location of the persisted accounts document."""
        return self.data_dir / "users.json"

    @property
    def require_email_delivery(self) -> bool:
        """Delivery is mandatory unless dev mode allows disclosing the code."""
        return not self.otp_dev_mode


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
