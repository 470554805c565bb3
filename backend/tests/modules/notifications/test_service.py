import smtplib

import pytest
from unittest.mock import MagicMock, patch

from modules.notifications.exceptions import DeliveryUnavailableError
from modules.notifications.interfaces import INotificationGateway
from modules.notifications.models import DeliveryFailure, DeliveryResult, SmtpConfig
from modules.notifications.service import SmtpNotificationGateway, build_otp_message
from shared.config import Settings


CONFIGURED = SmtpConfig(
    host="smtp.tasktracker.io",
    port=587,
    user="mailer@tasktracker.io",
    password="hunter2",
)


class TestSmtpConfig:
    def test_requires_host_user_and_password(self):
        """Delivery should only be configured with host, user and password."""
        assert CONFIGURED.is_configured is True
        assert SmtpConfig(host="smtp.tasktracker.io", user="u").is_configured is False
        assert SmtpConfig().is_configured is False

    def test_sender_fallbacks(self):
        """Sender should fall back to the SMTP user, then a no-reply address."""
        assert SmtpConfig(user="u@tasktracker.io", from_address="f@tasktracker.io").sender == "f@tasktracker.io"
        assert SmtpConfig(user="u@tasktracker.io").sender == "u@tasktracker.io"
        assert SmtpConfig().sender == "no-reply@tasktracker.local"

    def test_from_settings(self):
        """Gateway should read SMTP_* settings."""
        settings = Settings(
            _env_file=None,
            smtp_host="smtp.tasktracker.io",
            smtp_user="mailer",
            smtp_pass="secret",
        )
        assert SmtpNotificationGateway.from_settings(settings).is_configured is True


class TestBuildOtpMessage:
    def test_login_message(self):
        """Login codes should use the sign-in subject."""
        message = build_otp_message("from@tasktracker.io", "to@tasktracker.io", "user", "123456", "login")
        assert message["Subject"] == "Your Task Tracker sign-in code"
        assert message["To"] == "to@tasktracker.io"
        assert message["From"] == "from@tasktracker.io"
        assert "Your user OTP is 123456. It expires in 10 minutes." in message.get_content()

    def test_reset_message(self):
        """Reset codes should use the reset subject."""
        message = build_otp_message("from@tasktracker.io", "to@tasktracker.io", "admin", "654321", "reset")
        assert message["Subject"] == "Reset your Task Tracker password"
        assert "admin OTP is 654321" in message.get_content()


class TestSmtpNotificationGateway:
    def test_implements_interface(self):
        """Gateway should satisfy INotificationGateway."""
        assert isinstance(SmtpNotificationGateway(CONFIGURED), INotificationGateway)

    @pytest.mark.asyncio
    async def test_not_configured(self):
        """An unconfigured gateway should report not_configured without connecting."""
        gateway = SmtpNotificationGateway(SmtpConfig())
        with patch("modules.notifications.service.smtplib.SMTP") as mock_smtp:
            result = await gateway.send_otp("to@tasktracker.io", "user", "123456", "login")
        assert result == DeliveryResult.failed(DeliveryFailure.NOT_CONFIGURED)
        mock_smtp.assert_not_called()

    @pytest.mark.asyncio
    async def test_sends_with_starttls(self):
        """Plain SMTP should upgrade with STARTTLS when offered."""
        gateway = SmtpNotificationGateway(CONFIGURED)
        with patch("modules.notifications.service.smtplib.SMTP") as mock_smtp:
            conn = mock_smtp.return_value
            conn.has_extn.return_value = True
            result = await gateway.send_otp("to@tasktracker.io", "user", "123456", "login")

        assert result.sent is True
        assert result.reason is None
        mock_smtp.assert_called_once_with("smtp.tasktracker.io", 587, timeout=15.0)
        conn.starttls.assert_called_once()
        conn.login.assert_called_once_with("mailer@tasktracker.io", "hunter2")
        sent = conn.send_message.call_args.args[0]
        assert sent["To"] == "to@tasktracker.io"
        conn.quit.assert_called_once()

    @pytest.mark.asyncio
    async def test_secure_uses_ssl(self):
        """secure=True should connect with implicit TLS."""
        gateway = SmtpNotificationGateway(CONFIGURED.model_copy(update={"secure": True, "port": 465}))
        with patch("modules.notifications.service.smtplib.SMTP_SSL") as mock_ssl, \
             patch("modules.notifications.service.smtplib.SMTP") as mock_smtp:
            result = await gateway.send_otp("to@tasktracker.io", "user", "123456", "login")

        assert result.sent is True
        mock_ssl.assert_called_once_with("smtp.tasktracker.io", 465, timeout=15.0)
        mock_smtp.assert_not_called()

    @pytest.mark.asyncio
    async def test_transport_failure_is_reported(self):
        """SMTP errors should become send_failed, never raise."""
        gateway = SmtpNotificationGateway(CONFIGURED)
        with patch("modules.notifications.service.smtplib.SMTP") as mock_smtp:
            conn = mock_smtp.return_value
            conn.has_extn.return_value = False
            conn.login.side_effect = smtplib.SMTPAuthenticationError(535, b"bad auth")
            result = await gateway.send_otp("to@tasktracker.io", "user", "123456", "login")

        assert result == DeliveryResult.failed(DeliveryFailure.SEND_FAILED)
        conn.quit.assert_called_once()

    @pytest.mark.asyncio
    async def test_connection_refused_is_reported(self):
        """Network errors should become send_failed."""
        gateway = SmtpNotificationGateway(CONFIGURED)
        with patch(
            "modules.notifications.service.smtplib.SMTP",
            side_effect=ConnectionRefusedError(),
        ):
            result = await gateway.send_otp("to@tasktracker.io", "user", "123456", "login")
        assert result.reason == DeliveryFailure.SEND_FAILED


class TestDeliveryUnavailableError:
    def test_not_configured_message(self):
        """Missing transport should point at the SMTP settings."""
        error = DeliveryUnavailableError(DeliveryFailure.NOT_CONFIGURED)
        assert error.message == "Email delivery not configured. Set SMTP_* values in the environment."
        assert error.service == "email"

    def test_send_failed_message(self):
        """Transport failures should use the generic message."""
        error = DeliveryUnavailableError(DeliveryFailure.SEND_FAILED)
        assert error.message == "Failed to send OTP email. Check SMTP settings."
        assert error.details["reason"] == "send_failed"
