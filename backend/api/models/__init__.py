"""API models package."""

from .errors import ValidationErrorResponse

__all__ = [
    "ValidationErrorResponse",
]
