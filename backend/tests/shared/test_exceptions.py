"""Tests for shared/exceptions.py."""

import pytest

from shared.exceptions import (
    TaskTrackerError,
    NotFoundError,
    ValidationError,
    ConflictError,
    AuthenticationError,
    AuthorizationError,
    ExternalServiceError,
)


class TestTaskTrackerError:
    def test_error_message(self):
        """TaskTrackerError should store message."""
        error = TaskTrackerError("Test error")
        assert error.message == "Test error"
        assert str(error) == "Test error"

    def test_error_default_code(self):
        """TaskTrackerError should default code to class name."""
        error = TaskTrackerError("Test error")
        assert error.code == "TaskTrackerError"

    def test_error_custom_code(self):
        """TaskTrackerError should accept custom code."""
        error = TaskTrackerError("Test error", code="CUSTOM_ERROR")
        assert error.code == "CUSTOM_ERROR"

    def test_error_default_details(self):
        """TaskTrackerError should default details to empty dict."""
        error = TaskTrackerError("Test error")
        assert error.details == {}

    def test_error_to_dict(self):
        """TaskTrackerError should convert to dict."""
        error = TaskTrackerError("Test error", code="TEST_ERROR", details={"key": "value"})
        result = error.to_dict()

        assert result["error"] == "TEST_ERROR"
        assert result["message"] == "Test error"
        assert result["details"]["key"] == "value"


class TestSubclasses:
    @pytest.mark.parametrize("cls", [
        NotFoundError,
        ValidationError,
        ConflictError,
        AuthenticationError,
        AuthorizationError,
    ])
    def test_inherits_base(self, cls):
        """Every category should be a TaskTrackerError."""
        error = cls("boom")
        assert isinstance(error, TaskTrackerError)
        assert error.code == cls.__name__

    def test_external_service_error_records_service(self):
        """ExternalServiceError should expose the service in details."""
        error = ExternalServiceError("SMTP down", service="email")
        assert error.service == "email"
        assert error.details["service"] == "email"

    def test_external_service_error_keeps_details(self):
        """ExternalServiceError should merge service into given details."""
        error = ExternalServiceError("SMTP down", service="email", details={"host": "smtp"})
        assert error.details == {"host": "smtp", "service": "email"}
