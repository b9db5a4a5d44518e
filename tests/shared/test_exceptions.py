"""Tests for shared/exceptions.py."""

import pytest

from shared.exceptions import (
    PetConnectError,
    NotFoundError,
    ValidationError,
    AuthenticationError,
    AuthorizationError,
    RateLimitedError,
    ExternalServiceError,
)


class TestPetConnectError:
    def test_petconnect_error_message(self):
        """PetConnectError should store message."""
        error = PetConnectError("Test error")
        assert error.message == "Test error"
        assert str(error) == "Test error"

    def test_petconnect_error_default_code(self):
        """PetConnectError should default code to class name."""
        error = PetConnectError("Test error")
        assert error.code == "PetConnectError"

    def test_petconnect_error_custom_code(self):
        """PetConnectError should accept custom code."""
        error = PetConnectError("Test error", code="CUSTOM_ERROR")
        assert error.code == "CUSTOM_ERROR"

    def test_petconnect_error_default_details(self):
        """PetConnectError should default details to empty dict."""
        error = PetConnectError("Test error")
        assert error.details == {}

    def test_petconnect_error_custom_details(self):
        """PetConnectError should accept custom details."""
        error = PetConnectError("Test error", details={"key": "value"})
        assert error.details == {"key": "value"}

    def test_petconnect_error_to_dict(self):
        """PetConnectError should convert to dict."""
        error = PetConnectError("Test error", code="TEST_ERROR", details={"key": "value"})
        result = error.to_dict()

        assert result["error"] == "TEST_ERROR"
        assert result["message"] == "Test error"
        assert result["details"]["key"] == "value"

    def test_petconnect_error_to_dict_minimal(self):
        """PetConnectError.to_dict should work with minimal args."""
        error = PetConnectError("Test error")
        result = error.to_dict()

        assert result["error"] == "PetConnectError"
        assert result["message"] == "Test error"
        assert result["details"] == {}


class TestNotFoundError:
    def test_not_found_error_inherits_petconnect_error(self):
        """NotFoundError should inherit from PetConnectError."""
        error = NotFoundError("Resource not found")
        assert isinstance(error, PetConnectError)

    def test_not_found_error_default_code(self):
        """NotFoundError should default code to class name."""
        error = NotFoundError("Resource not found")
        assert error.code == "NotFoundError"


class TestValidationError:
    def test_validation_error_inherits_petconnect_error(self):
        """ValidationError should inherit from PetConnectError."""
        error = ValidationError("Invalid input")
        assert isinstance(error, PetConnectError)

    def test_validation_error_with_details(self):
        """ValidationError should support field-level details."""
        error = ValidationError(
            "Validation failed",
            details={"fields": {"email": "Invalid format"}}
        )
        assert error.details["fields"]["email"] == "Invalid format"


class TestAuthenticationError:
    def test_authentication_error_inherits_petconnect_error(self):
        """AuthenticationError should inherit from PetConnectError."""
        error = AuthenticationError("Invalid token")
        assert isinstance(error, PetConnectError)


class TestAuthorizationError:
    def test_authorization_error_inherits_petconnect_error(self):
        """AuthorizationError should inherit from PetConnectError."""
        error = AuthorizationError("Insufficient permissions")
        assert isinstance(error, PetConnectError)


class TestExternalServiceError:
    def test_external_service_error_inherits_petconnect_error(self):
        """ExternalServiceError should inherit from PetConnectError."""
        error = ExternalServiceError("Connection failed", service="supabase")
        assert isinstance(error, PetConnectError)

    def test_external_service_error_stores_service(self):
        """ExternalServiceError should store service name."""
        error = ExternalServiceError("Connection failed", service="supabase")
        assert error.service == "supabase"

    def test_external_service_error_includes_service_in_details(self):
        """ExternalServiceError should include service in details."""
        error = ExternalServiceError("Connection failed", service="supabase")
        result = error.to_dict()

        assert result["details"]["service"] == "supabase"

    def test_external_service_error_preserves_other_details(self):
        """ExternalServiceError should preserve other details."""
        error = ExternalServiceError(
            "Connection failed",
            service="supabase",
            details={"status_code": 500}
        )
        result = error.to_dict()

        assert result["details"]["service"] == "supabase"
        assert result["details"]["status_code"] == 500


class TestRateLimitedError:
    def test_rate_limited_error_inherits_petconnect_error(self):
        """RateLimitedError should inherit from PetConnectError."""
        error = RateLimitedError("Slow down", details={"remaining_seconds": 30})
        assert isinstance(error, PetConnectError)
        assert error.details["remaining_seconds"] == 30
