"""
Error response models.

Route handlers raise HTTPException, which FastAPI renders as
{"detail": "..."}. Request bodies that fail schema validation are answered
with ValidationErrorResponse and status 400.
"""

from typing import Any

from pydantic import BaseModel


class ValidationErrorResponse(BaseModel):
    """Body returned when a request does not match its schema."""

    error: str = "Validation Error"
    detail: list[dict[str, Any]]
