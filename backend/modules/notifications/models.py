"""
Notifications module data models.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class DeliveryFailure(str, Enum):
    """Why a message was not delivered."""

    NOT_CONFIGURED = "not_configured"  # No transport configured
    SEND_FAILED = "send_failed"        # Transport raised while sending


class DeliveryResult(BaseModel):
    """Structured outcome of a delivery attempt. Never raised."""

    sent: bool = Field(..., description="Whether the message was handed to the transport")
    reason: Optional[DeliveryFailure] = Field(None, description="Failure reason if not sent")

    model_config = {"frozen": True}

    @classmethod
    def delivered(cls) -> "DeliveryResult":
        return cls(sent=True)

    @classmethod
    def failed(cls, reason: DeliveryFailure) -> "DeliveryResult":
        return cls(sent=False, reason=reason)


class SmtpConfig(BaseModel):
    """Transport settings for the SMTP gateway."""

    host: str = ""
    port: int = 587
    user: str = ""
    password: str = ""
    secure: bool = False
    from_address: str = ""

    model_config = {"frozen": True}

    @property
    def is_configured(self) -> bool:
        return bool(self.host and self.user and self.password)

    @property
    def sender(self) -> str:
        return self.from_address or self.user or "no-reply@tasktracker.local"
