"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations from settings.
"""

from datetime import timedelta
from typing import TYPE_CHECKING, Optional

from shared.config import Settings, get_settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.auth.interfaces import IAuthService, ICredentialStore
    from modules.auth.otp import OtpService
    from modules.auth.tokens import SessionTokenIssuer
    from modules.notifications.interfaces import INotificationGateway
    from modules.tasks.interfaces import ITaskBoard
    from modules.tasks.realtime import BoardBroadcaster


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access.

    All services are cached as singletons within the container.
    Use reset() to clear all cached services for testing.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings
        self._credential_store: "ICredentialStore | None" = None
        self._otp_service: "OtpService | None" = None
        self._token_issuer: "SessionTokenIssuer | None" = None
        self._notifier: "INotificationGateway | None" = None
        self._auth_service: "IAuthService | None" = None
        self._task_board: "ITaskBoard | None" = None
        self._broadcaster: "BoardBroadcaster | None" = None

    @property
    def settings(self) -> Settings:
        """Settings the services are built from."""
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def credential_store(self) -> "ICredentialStore":
        """Get the credential store instance."""
        if self._credential_store is None:
            from modules.auth.store import CredentialStore
            from shared.repository import JsonFileStorage
            self._credential_store = CredentialStore(
                JsonFileStorage(self.settings.users_file),
                hash_iterations=self.settings.password_hash_iterations,
            )
        return self._credential_store

    @property
    def otp(self) -> "OtpService":
        """Get the OTP issuer/verifier instance."""
        if self._otp_service is None:
            from modules.auth.otp import OtpService
            self._otp_service = OtpService(ttl=timedelta(seconds=self.settings.otp_ttl_seconds))
        return self._otp_service

    @property
    def tokens(self) -> "SessionTokenIssuer":
        """Get the session token issuer instance."""
        if self._token_issuer is None:
            from modules.auth.tokens import SessionTokenIssuer
            self._token_issuer = SessionTokenIssuer(
                secret=self.settings.jwt_secret,
                expires_in=timedelta(minutes=self.settings.jwt_expires_minutes),
            )
        return self._token_issuer

    @property
    def notifier(self) -> "INotificationGateway":
        """Get the notification gateway instance."""
        if self._notifier is None:
            from modules.notifications.service import SmtpNotificationGateway
            self._notifier = SmtpNotificationGateway.from_settings(self.settings)
        return self._notifier

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.service import AuthService
            self._auth_service = AuthService(
                store=self.credential_store,
                otp=self.otp,
                tokens=self.tokens,
                notifier=self.notifier,
                dev_mode=self.settings.otp_dev_mode,
                require_delivery=self.settings.require_email_delivery,
            )
        return self._auth_service

    @property
    def task_board(self) -> "ITaskBoard":
        """Get the task board instance."""
        if self._task_board is None:
            from modules.tasks.service import TaskBoard
            if self.settings.seed_demo_tasks:
                self._task_board = TaskBoard.with_demo_tasks()
            else:
                self._task_board = TaskBoard()
        return self._task_board

    @property
    def broadcaster(self) -> "BoardBroadcaster":
        """Get the realtime board broadcaster instance."""
        if self._broadcaster is None:
            from modules.tasks.realtime import BoardBroadcaster
            self._broadcaster = BoardBroadcaster(
                board=self.task_board,
                mode=self.settings.board_sync_mode,
            )
        return self._broadcaster

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._credential_store = None
        self._otp_service = None
        self._token_issuer = None
        self._notifier = None
        self._auth_service = None
        self._task_board = None
        self._broadcaster = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def set_container(container: ServiceContainer) -> None:
    """Install a pre-built container (used by tests and embedding apps)."""
    global _container
    _container = container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_auth_service() -> "IAuthService":
    """FastAPI dependency for auth service."""
    return get_container().auth


def get_token_issuer() -> "SessionTokenIssuer":
    """FastAPI dependency for the session token issuer."""
    return get_container().tokens


def get_task_board() -> "ITaskBoard":
    """FastAPI dependency for the task board."""
    return get_container().task_board


def get_board_broadcaster() -> "BoardBroadcaster":
    """FastAPI dependency for the realtime board broadcaster."""
    return get_container().broadcaster
