"""
SMTP notification gateway.

Sends OTP emails with smtplib. The blocking SMTP conversation runs in a
worker thread so the event loop keeps serving requests meanwhile.
"""

import asyncio
import logging
import smtplib
from email.message import EmailMessage
from typing import Optional

from shared.config import Settings

from .interfaces import INotificationGateway
from .models import DeliveryFailure, DeliveryResult, SmtpConfig

logger = logging.getLogger(__name__)

SUBJECTS = {
    "login": "Your Task Tracker sign-in code",
    "reset": "Reset your Task Tracker password",
}


def build_otp_message(
    sender: str,
    email: str,
    role: str,
    code: str,
    purpose: str,
) -> EmailMessage:
    """Compose the OTP email."""
    message = EmailMessage()
    message["Subject"] = SUBJECTS.get(purpose, SUBJECTS["login"])
    message["From"] = sender
    message["To"] = email
    message.set_content(f"Your {role} OTP is {code}. It expires in 10 minutes.")
    return message


class SmtpNotificationGateway(INotificationGateway):
    """Delivers OTP codes by email over SMTP."""

    def __init__(self, config: SmtpConfig, timeout: float = 15.0):
        self._config = config
        self._timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "SmtpNotificationGateway":
        return cls(
            SmtpConfig(
                host=settings.smtp_host,
                port=settings.smtp_port,
                user=settings.smtp_user,
                password=settings.smtp_pass,
                secure=settings.smtp_secure,
                from_address=settings.from_email,
            )
        )

    @property
    def is_configured(self) -> bool:
        return self._config.is_configured

    async def send_otp(
        self,
        email: str,
        role: str,
        code: str,
        purpose: str,
    ) -> DeliveryResult:
        if not self._config.is_configured:
            logger.info("SMTP not configured, OTP email not sent")
            return DeliveryResult.failed(DeliveryFailure.NOT_CONFIGURED)

        message = build_otp_message(self._config.sender, email, role, code, purpose)
        try:
            await asyncio.to_thread(self._send_sync, message)
        except (smtplib.SMTPException, OSError):
            logger.warning(f"Failed to send {purpose} OTP email to {email}", exc_info=True)
            return DeliveryResult.failed(DeliveryFailure.SEND_FAILED)

        logger.info(f"Sent {purpose} OTP email to {email}")
        return DeliveryResult.delivered()

    def _send_sync(self, message: EmailMessage) -> None:
        config = self._config
        smtp: Optional[smtplib.SMTP] = None
        try:
            if config.secure:
                smtp = smtplib.SMTP_SSL(config.host, config.port, timeout=self._timeout)
            else:
                smtp = smtplib.SMTP(config.host, config.port, timeout=self._timeout)
                smtp.ehlo()
                if smtp.has_extn("starttls"):
                    smtp.starttls()
                    smtp.ehlo()
            smtp.login(config.user, config.password)
            smtp.send_message(message)
        finally:
            if smtp is not None:
                try:
                    smtp.quit()
                except smtplib.SMTPException:
                    smtp.close()
