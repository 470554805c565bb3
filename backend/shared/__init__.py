"""
Shared infrastructure for the Task Tracker backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- repository: JSON document storage and repository base class
- exceptions: Base exception classes

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .repository import BaseRepository, DocumentStorage, JsonFileStorage
from .exceptions import (
    TaskTrackerError,
    NotFoundError,
    ValidationError,
    ConflictError,
    AuthenticationError,
    AuthorizationError,
    ExternalServiceError,
)
from .models import AuthenticatedUser, CamelModel

__all__ = [
    "Settings",
    "get_settings",
    "BaseRepository",
    "DocumentStorage",
    "JsonFileStorage",
    "TaskTrackerError",
    "NotFoundError",
    "ValidationError",
    "ConflictError",
    "AuthenticationError",
    "AuthorizationError",
    "ExternalServiceError",
    "AuthenticatedUser",
    "CamelModel",
]
