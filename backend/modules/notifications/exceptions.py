"""
Notifications module exceptions.
"""

from typing import Optional

from shared.exceptions import ExternalServiceError

from .models import DeliveryFailure


class DeliveryUnavailableError(ExternalServiceError):
    """Raised when delivery is mandatory and the gateway did not send."""

    def __init__(self, reason: Optional[DeliveryFailure] = None):
        if reason == DeliveryFailure.NOT_CONFIGURED:
            message = "Email delivery not configured. Set SMTP_* values in the environment."
        else:
            message = "Failed to send OTP email. Check SMTP settings."
        super().__init__(
            message,
            service="email",
            code="DELIVERY_UNAVAILABLE",
            details={"reason": reason.value if reason else None},
        )
        self.reason = reason
