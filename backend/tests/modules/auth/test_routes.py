"""Tests for the authentication endpoints."""

import pytest
from unittest.mock import AsyncMock

from fastapi.testclient import TestClient

from api import app
from api.dependencies import ServiceContainer, set_container
from modules.auth.otp import OtpService
from modules.notifications.models import DeliveryResult
from shared.config import Settings


MEMBER = {"email": "member@tasktracker.io", "password": "password123"}


class TestSignUpEndpoint:
    def test_signup_then_signin_flow(self, client, sign_in_with_dev_otp):
        """A new account should be able to sign in through the dev OTP."""
        response = client.post("/api/auth/signup", json={
            "email": "New@TaskTracker.io",
            "password": "secret1",
            "firstName": "Newbie",
        })
        assert response.status_code == 200
        assert response.json() == {"ok": True, "message": "User created successfully."}

        session = sign_in_with_dev_otp("new@tasktracker.io", "secret1")
        assert session["token"]
        assert session["user"] == {
            "email": "new@tasktracker.io",
            "firstName": "Newbie",
            "role": "user",
        }

    def test_signup_duplicate(self, client):
        """Duplicate sign-up should return 409."""
        response = client.post("/api/auth/signup", json={
            **MEMBER, "firstName": "Again",
        })
        assert response.status_code == 409
        assert response.json()["detail"] == "Account already exists for this email."

    def test_signup_short_password(self, client):
        """Validation failures should return 400."""
        response = client.post("/api/auth/signup", json={
            "email": "x@tasktracker.io", "password": "123", "firstName": "X",
        })
        assert response.status_code == 400
        assert response.json()["error"] == "Validation Error"

    def test_signup_persists_to_disk(self, client, test_settings):
        """New accounts should be written to the accounts document."""
        client.post("/api/auth/signup", json={
            "email": "disk@tasktracker.io", "password": "secret1", "firstName": "Disk",
        })
        assert "disk@tasktracker.io" in test_settings.users_file.read_text()


class TestSignInEndpoint:
    def test_signin_dev_mode_returns_code(self, client):
        """Dev mode without SMTP should disclose the code."""
        response = client.post("/api/auth/signin", json=MEMBER)
        assert response.status_code == 200
        data = response.json()
        assert data["otpSent"] is True
        assert data["emailSent"] is False
        assert data["expiresInSeconds"] == 600
        assert len(data["devOtp"]) == 6

    def test_signin_delivered_hides_code(self, client, container):
        """When the email is sent the response must not carry the code."""
        notifier = AsyncMock()
        notifier.send_otp.return_value = DeliveryResult.delivered()
        container._notifier = notifier

        response = client.post("/api/auth/signin", json=MEMBER)
        assert response.status_code == 200
        assert "devOtp" not in response.json()
        assert response.json()["emailSent"] is True

    def test_signin_wrong_password(self, client):
        """Bad credentials should return 401."""
        response = client.post("/api/auth/signin", json={**MEMBER, "password": "nope"})
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid credentials."

    def test_signin_wrong_role(self, client):
        """Signing in with the wrong role should return 401."""
        response = client.post("/api/auth/signin", json={**MEMBER, "role": "admin"})
        assert response.status_code == 401
        assert response.json()["detail"] == "Account not found for this role."

    def test_signin_requires_delivery_outside_dev_mode(self, tmp_path):
        """Without dev mode and SMTP, sign-in should fail with 500."""
        set_container(ServiceContainer(Settings(
            _env_file=None,
            data_dir=tmp_path,
            password_hash_iterations=1_000,
            otp_dev_mode=False,
        )))
        with TestClient(app) as client:
            response = client.post("/api/auth/signin", json=MEMBER)
        assert response.status_code == 500
        assert response.json()["detail"] == (
            "Email delivery not configured. Set SMTP_* values in the environment."
        )


class TestVerifyOtpEndpoint:
    def test_wrong_code(self, client):
        """A wrong code should return 401."""
        code = client.post("/api/auth/signin", json=MEMBER).json()["devOtp"]
        wrong = "100000" if code != "100000" else "100001"
        response = client.post("/api/auth/verify-otp", json={
            "email": MEMBER["email"], "code": wrong,
        })
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid OTP. Please try again."

    def test_not_requested(self, client):
        """Verifying before sign-in should return 401."""
        response = client.post("/api/auth/verify-otp", json={
            "email": MEMBER["email"], "code": "123456",
        })
        assert response.status_code == 401
        assert response.json()["detail"] == "No OTP requested for this account."

    def test_expired_code(self, client, container, clock):
        """Expired codes should return 401."""
        container._otp_service = OtpService(clock=clock)
        code = client.post("/api/auth/signin", json=MEMBER).json()["devOtp"]
        clock.advance(minutes=10, seconds=1)
        response = client.post("/api/auth/verify-otp", json={
            "email": MEMBER["email"], "code": code,
        })
        assert response.status_code == 401
        assert response.json()["detail"] == "OTP expired. Please request a new one."

    def test_malformed_code(self, client):
        """Non-numeric codes should be rejected as a bad request."""
        response = client.post("/api/auth/verify-otp", json={
            "email": MEMBER["email"], "code": "abc",
        })
        assert response.status_code == 400


class TestPasswordResetEndpoints:
    def test_forgot_unknown_account(self, client):
        """Forgot-password for an unknown account should return 404."""
        response = client.post("/api/auth/forgot-password", json={"email": "ghost@tasktracker.io"})
        assert response.status_code == 404
        assert response.json()["detail"] == "Account not found for this role."

    def test_reset_flow(self, client, sign_in_with_dev_otp):
        """Reset should replace the password used for sign-in."""
        code = client.post(
            "/api/auth/forgot-password", json={"email": MEMBER["email"]}
        ).json()["devOtp"]

        response = client.post("/api/auth/reset-password", json={
            "email": MEMBER["email"], "code": code, "newPassword": "newpass1",
        })
        assert response.status_code == 200
        assert response.json()["message"] == "Password updated successfully."

        old = client.post("/api/auth/signin", json=MEMBER)
        assert old.status_code == 401
        assert sign_in_with_dev_otp(MEMBER["email"], "newpass1")["token"]

    def test_reset_unknown_account(self, client):
        """Reset for an unknown account should return 404."""
        response = client.post("/api/auth/reset-password", json={
            "email": "ghost@tasktracker.io", "code": "123456", "newPassword": "newpass1",
        })
        assert response.status_code == 404

    def test_reset_without_code(self, client):
        """Reset without a requested code should return 401."""
        response = client.post("/api/auth/reset-password", json={
            "email": MEMBER["email"], "code": "123456", "newPassword": "newpass1",
        })
        assert response.status_code == 401
