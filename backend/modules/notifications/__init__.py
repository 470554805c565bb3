"""
Notifications module.

Delivers one-time passcodes to users over email.

Public API:
- INotificationGateway: Interface for OTP delivery
- SmtpNotificationGateway: SMTP implementation
- DeliveryResult, DeliveryFailure: Structured delivery outcome
- DeliveryUnavailableError: Raised by callers when delivery is mandatory
"""

from .interfaces import INotificationGateway
from .models import DeliveryFailure, DeliveryResult, SmtpConfig
from .service import SmtpNotificationGateway
from .exceptions import DeliveryUnavailableError

__all__ = [
    # Interface
    "INotificationGateway",
    # Implementation
    "SmtpNotificationGateway",
    # Models
    "DeliveryFailure",
    "DeliveryResult",
    "SmtpConfig",
    # Exceptions
    "DeliveryUnavailableError",
]
