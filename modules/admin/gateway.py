"""
Supabase implementation of the admin gateway.

Every call is a named RPC; parameter names match the database functions.
"""

import logging
from typing import Any, Optional

from supabase import Client

from shared.exceptions import ExternalServiceError
from .interfaces import IAdminGateway
from .models import AdminVerification, SessionValidation

logger = logging.getLogger(__name__)


class SupabaseAdminGateway(IAdminGateway):
    """Admin RPCs over a Supabase client."""

    def __init__(self, client: Client):
        self._db = client

    def verify_password_with_session(
        self,
        email: str,
        password: str,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> AdminVerification:
        data = self._rpc("verify_admin_password_with_session", {
            "email_input": email,
            "password_input": password,
            "ip_address_input": ip_address,
            "user_agent_input": user_agent,
        })
        row = _first_row(data)
        if row is None:
            return AdminVerification(success=False, error_message="Invalid credentials")
        return AdminVerification(**row)

    def validate_session(self, session_token: str) -> SessionValidation:
        data = self._rpc("validate_admin_session", {
            "p_session_token": session_token,
        })
        row = _first_row(data)
        if row is None:
            return SessionValidation(session_valid=False)
        return SessionValidation(**row)

    def invalidate_session(self, session_token: str) -> None:
        self._rpc("invalidate_admin_session", {
            "p_session_token": session_token,
        })

    def create_admin(
        self,
        name: str,
        email: str,
        password: str,
        permissions: dict[str, Any],
        created_by: str,
    ) -> Optional[str]:
        data = self._rpc("create_admin", {
            "p_name": name,
            "p_email": email,
            "p_password": password,
            "p_permissions": permissions,
            "p_created_by": created_by,
        })
        return str(data) if data else None

    def log_activity(
        self,
        admin_id: str,
        action: str,
        details: Optional[dict[str, Any]] = None,
        target_type: Optional[str] = None,
        target_id: Optional[str] = None,
    ) -> Optional[str]:
        data = self._rpc("log_admin_activity", {
            "p_admin_id": admin_id,
            "p_action": action,
            "p_details": details or {},
            "p_target_type": target_type,
            "p_target_id": target_id,
        })
        return str(data) if data else None

    def _rpc(self, name: str, params: dict[str, Any]) -> Any:
        try:
            result = self._db.rpc(name, params).execute()
        except Exception as e:
            logger.warning("RPC %s failed: %s", name, e)
            raise ExternalServiceError(
                f"RPC {name} failed: {e}",
                service="supabase",
                code="RPC_FAILED",
                details={"rpc": name},
            ) from e
        return result.data


def _first_row(data: Any) -> Optional[dict[str, Any]]:
    """Set-returning RPCs come back as a list of rows."""
    if isinstance(data, list):
        return data[0] if data else None
    if isinstance(data, dict):
        return data
    return None
