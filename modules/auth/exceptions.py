"""
Authentication module exceptions.

These exceptions are raised by the auth module and can be caught
by API error handlers to return appropriate HTTP responses.
"""

from shared.exceptions import AuthenticationError


class InvalidTokenError(AuthenticationError):
    """Raised when a JWT token is invalid or malformed."""

    def __init__(self, message: str = "Invalid authentication token"):
        super().__init__(message, code="INVALID_TOKEN")


class ExpiredTokenError(AuthenticationError):
    """Raised when a JWT token has expired."""

    def __init__(self, message: str = "Authentication token has expired"):
        super().__init__(message, code="TOKEN_EXPIRED")


class MissingTokenError(AuthenticationError):
    """Raised when no authentication token is provided."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="MISSING_TOKEN")


class SignUpError(AuthenticationError):
    """Raised when the auth subsystem rejects a sign-up (e.g. duplicate email)."""

    def __init__(self, message: str):
        super().__init__(message, code="SIGN_UP_FAILED")


class SignInError(AuthenticationError):
    """Raised when the auth subsystem rejects credentials."""

    def __init__(self, message: str):
        super().__init__(message, code="SIGN_IN_FAILED")


class SessionExpiredError(AuthenticationError):
    """Raised when a session ended because of inactivity."""

    def __init__(self):
        super().__init__(
            "You have been logged out due to inactivity.",
            code="SESSION_EXPIRED",
        )
