"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, EmailStr

from shared.models import UserIdentity
from modules.profiles.models import UserType


class AuthEvent(str, Enum):
    """Auth-state changes emitted by the Supabase auth subsystem."""

    INITIAL_SESSION = "INITIAL_SESSION"
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    TOKEN_REFRESHED = "TOKEN_REFRESHED"
    USER_UPDATED = "USER_UPDATED"
    PASSWORD_RECOVERY = "PASSWORD_RECOVERY"


class AuthSession(BaseModel):
    """A signed-in session: the tokens plus the identity they carry."""

    access_token: str
    refresh_token: str = ""
    expires_at: Optional[int] = Field(None, description="Access token expiry (epoch seconds)")
    user: UserIdentity

    model_config = {"frozen": True}


class JWTPayload(BaseModel):
    """
    Decoded JWT token payload from Supabase.

    This matches the structure of Supabase Auth JWTs.
    """

    sub: str = Field(..., description="Subject (user ID)")
    email: Optional[str] = Field(None, description="User's email")
    exp: int = Field(..., description="Expiration timestamp")
    iat: int = Field(..., description="Issued at timestamp")
    aud: str = Field(default="authenticated", description="Audience")
    role: str = Field(default="authenticated", description="User role")

    # Supabase-specific claims
    app_metadata: dict = Field(default_factory=dict)
    user_metadata: dict = Field(default_factory=dict)


class SignUpRequest(BaseModel):
    """Sign-up form."""

    email: EmailStr
    password: str = Field(..., min_length=6)
    full_name: str = Field(..., min_length=1)
    user_type: Optional[UserType] = None


class SignInRequest(BaseModel):
    """Sign-in form."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class SessionResponse(BaseModel):
    """Current session as seen by the browser."""

    user: Optional[UserIdentity] = None
    redirect: Optional[str] = Field(None, description="Path to replace-navigate to")
    session_warning: bool = Field(False, description="Inactivity timeout is close")


class SignUpResponse(BaseModel):
    """Sign-up accepted; the account is confirmed by email."""

    email: str
    message: str = "Check your email to confirm your account."
