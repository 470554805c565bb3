"""
Notifications module interface.

The auth module depends on INotificationGateway to deliver one-time codes,
not on any particular transport.
"""

from typing import Protocol, runtime_checkable

from .models import DeliveryResult


@runtime_checkable
class INotificationGateway(Protocol):
    """
    Interface for delivering one-time passcodes to users.

    Implementations must never raise for transport problems; they report
    them through the returned DeliveryResult.
    """

    async def send_otp(
        self,
        email: str,
        role: str,
        code: str,
        purpose: str,
    ) -> DeliveryResult:
        """
        Deliver a one-time passcode.

        Args:
            email: Recipient address
            role: Account role the code belongs to
            code: The 6-digit code
            purpose: "login" or "reset"

        Returns:
            DeliveryResult describing whether the message was sent
        """
        ...
