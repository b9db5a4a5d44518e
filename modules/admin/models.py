"""
Admin module data models.

Admins live in their own namespace, separate from end users, and
authenticate through RPCs that mint opaque session tokens.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from pydantic import BaseModel, EmailStr, Field


class AdminPermissions(BaseModel):
    """What an admin may manage in the back office."""

    manage_users: bool = False
    manage_pets: bool = False
    manage_products: bool = False
    manage_admins: bool = False
    manage_pet_sitter_verification: bool = False
    manage_pet_shelter_verification: bool = False

    model_config = {"extra": "ignore"}

    @classmethod
    def defaults(cls, is_super_admin: bool) -> "AdminPermissions":
        """Permissions assumed when the gateway returns none."""
        return cls(
            manage_users=True,
            manage_pets=True,
            manage_products=is_super_admin,
        )


class AdminIdentity(BaseModel):
    """A signed-in admin."""

    id: str
    name: str
    email: str
    is_super_admin: bool = False
    permissions: AdminPermissions

    model_config = {"frozen": True}

    @classmethod
    def from_admin_data(cls, data: dict[str, Any]) -> "AdminIdentity":
        """Build from the ``admin_data`` JSON returned by the session RPCs."""
        is_super_admin = bool(data.get("is_super_admin", False))
        permissions = data.get("permissions")
        return cls(
            id=str(data["id"]),
            name=data.get("name") or "",
            email=data.get("email") or "",
            is_super_admin=is_super_admin,
            permissions=(
                AdminPermissions(**permissions)
                if permissions
                else AdminPermissions.defaults(is_super_admin)
            ),
        )


class AdminVerification(BaseModel):
    """Row returned by ``verify_admin_password_with_session``."""

    success: bool = False
    session_token: Optional[str] = None
    admin_data: Optional[dict[str, Any]] = None
    error_message: Optional[str] = None
    expires_at: Optional[datetime] = None

    model_config = {"extra": "ignore"}


class SessionValidation(BaseModel):
    """Row returned by ``validate_admin_session``."""

    session_valid: bool = False
    admin_data: Optional[dict[str, Any]] = None

    model_config = {"extra": "ignore"}


class ClientInfo(BaseModel):
    """Where an admin sign-in comes from."""

    ip_address: Optional[str] = None
    user_agent: Optional[str] = None


class GuardState(str, Enum):
    """Admin route guard states."""

    VALIDATING = "validating"
    AUTHORIZED = "authorized"
    UNAUTHORIZED = "unauthorized"


class LockoutState(BaseModel):
    """Client-side login throttle as shown to the sign-in form."""

    attempt_count: int = 0
    lockout_until: Optional[datetime] = None
    locked: bool = False
    remaining_seconds: int = 0
    remaining_attempts: int = 0


# -------------------------------------------------------------------------
# Requests / responses
# -------------------------------------------------------------------------


class AdminSignInRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class CreateCoAdminRequest(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=8)
    permissions: Optional[AdminPermissions] = None


class CreateCoAdminResponse(BaseModel):
    id: Optional[str] = Field(None, description="New admin ID, if returned")


class ActivityLogRequest(BaseModel):
    action: str = Field(..., min_length=1)
    details: dict[str, Any] = Field(default_factory=dict)
    target_type: Optional[str] = None
    target_id: Optional[str] = None


class AdminSessionResponse(BaseModel):
    admin: Optional[AdminIdentity] = None
    redirect: Optional[str] = None
