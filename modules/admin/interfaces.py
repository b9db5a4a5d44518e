"""
Admin module interface.

The admin context depends on IAdminGateway, not on the Supabase client.
Credential checks, token minting, expiry and server-side throttling all
happen behind this interface.
"""

from typing import Any, Optional, Protocol, runtime_checkable

from .models import AdminVerification, SessionValidation


@runtime_checkable
class IAdminGateway(Protocol):
    """Remote procedures for admin authentication and auditing."""

    def verify_password_with_session(
        self,
        email: str,
        password: str,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> AdminVerification:
        """Verify credentials and, on success, mint a session token."""
        ...

    def validate_session(self, session_token: str) -> SessionValidation:
        """Check a session token and return the admin behind it."""
        ...

    def invalidate_session(self, session_token: str) -> None:
        """Revoke a session token."""
        ...

    def create_admin(
        self,
        name: str,
        email: str,
        password: str,
        permissions: dict[str, Any],
        created_by: str,
    ) -> Optional[str]:
        """
        Create a co-admin.

        Returns:
            The new admin's ID, if the gateway returns one
        """
        ...

    def log_activity(
        self,
        admin_id: str,
        action: str,
        details: Optional[dict[str, Any]] = None,
        target_type: Optional[str] = None,
        target_id: Optional[str] = None,
    ) -> Optional[str]:
        """Record an admin action in the audit log."""
        ...
