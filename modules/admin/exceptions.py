"""
Admin module exceptions.
"""

from typing import Optional

from shared.exceptions import AuthenticationError, AuthorizationError, RateLimitedError


class AdminSignInError(AuthenticationError):
    """Raised when admin credentials are rejected."""

    def __init__(self, message: str = "Invalid credentials", remaining_attempts: Optional[int] = None):
        details = {}
        if remaining_attempts is not None:
            details["remaining_attempts"] = remaining_attempts
        super().__init__(message, code="ADMIN_SIGN_IN_FAILED", details=details)


class AdminSessionInvalidError(AuthenticationError):
    """Raised when an admin session token is missing, expired or revoked."""

    def __init__(self, message: str = "Admin session is not valid"):
        super().__init__(message, code="ADMIN_SESSION_INVALID")


class AdminPermissionError(AuthorizationError):
    """Raised when an admin lacks the rights for an action."""

    def __init__(self, message: str = "Only super admins can create co-admins"):
        super().__init__(message, code="ADMIN_PERMISSION_DENIED")


class AdminLockedOutError(RateLimitedError):
    """
    Raised when the sign-in form is locked after repeated failures.

    The lock lives in the browser's storage only. It is a usability
    measure, not a security control; throttling that matters has to be
    enforced by the gateway per identity and IP.
    """

    def __init__(self, remaining_seconds: int):
        minutes = max(1, -(-remaining_seconds // 60))
        super().__init__(
            f"Too many failed attempts. Try again in {minutes} minutes.",
            code="ADMIN_LOCKED_OUT",
            details={"remaining_seconds": remaining_seconds},
        )
        self.remaining_seconds = remaining_seconds
