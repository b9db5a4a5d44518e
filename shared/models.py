"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from typing import Optional
from pydantic import BaseModel, Field


class UserMetadata(BaseModel):
    """User metadata captured at sign-up and carried in the access token."""

    full_name: Optional[str] = Field(None, description="Full name given at sign-up")
    user_type: Optional[str] = Field(None, description="Role chosen at sign-up")

    model_config = {
        "frozen": True,
        "extra": "ignore",
    }


class UserIdentity(BaseModel):
    """
    Represents a signed-in end user.

    Owned by the Supabase auth subsystem and mirrored read-only into the
    session context for the lifetime of the browser session.
    """

    id: str = Field(..., description="User ID (UUID from Supabase)")
    email: str = Field(default="", description="User's email address")
    metadata: UserMetadata = Field(default_factory=UserMetadata)

    model_config = {
        "frozen": True,  # Make immutable for safety
        "extra": "ignore",  # Ignore extra fields from JWT
    }
