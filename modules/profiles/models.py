"""
Profile module data models.

Profile is the base per-user record (role + contact completeness).
SitterProfile and ShelterProfile are the role-specific records whose
existence gates the sitter and shelter dashboards.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from pydantic import BaseModel, Field, field_validator


class UserType(str, Enum):
    """Marketplace roles an end user can pick."""

    PET_OWNER = "pet_owner"
    PET_SITTER = "pet_sitter"
    PET_SHELTER = "pet_shelter"


# Roles that need a second setup step (a role profile row).
ROLES_WITH_ROLE_PROFILE = frozenset({UserType.PET_SITTER.value, UserType.PET_SHELTER.value})


class Profile(BaseModel):
    """
    Base profile row from the ``profiles`` table.

    One-to-one with the auth user (``id`` is the user ID). ``user_type``
    is kept as a plain string so unrecognized roles survive the mapping.
    """

    id: str = Field(..., description="User ID")
    user_type: Optional[str] = Field(None, description="pet_owner, pet_sitter or pet_shelter")
    full_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    pincode: Optional[str] = None
    avatar_url: Optional[str] = None
    is_verified: Optional[bool] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"extra": "ignore"}

    @property
    def is_complete(self) -> bool:
        """A profile is complete when both phone and city are filled in."""
        return bool(self.phone) and bool(self.city)


class SitterProfile(BaseModel):
    """Row from ``pet_sitter_profiles``."""

    id: Optional[str] = None
    user_id: str
    experience_years: int = 0
    pet_preferences: list[str] = Field(default_factory=list)
    availability_schedule: dict[str, Any] = Field(default_factory=dict)
    hourly_rate: float = 0.0
    about_me: Optional[str] = None
    profile_image_url: Optional[str] = None
    introduction_video_url: Optional[str] = None
    verification_status: Optional[str] = None

    model_config = {"extra": "ignore"}


class ShelterProfile(BaseModel):
    """Row from ``pet_shelter_profiles``."""

    id: Optional[str] = None
    user_id: str
    shelter_name: str
    capacity: int = 0
    license_number: Optional[str] = None
    about_shelter: Optional[str] = None
    profile_image_url: Optional[str] = None
    introduction_video_url: Optional[str] = None
    verification_status: Optional[str] = None

    model_config = {"extra": "ignore"}


class BasicProfileRequest(BaseModel):
    """Step 1 of profile setup."""

    full_name: str = Field(..., description="Full name")
    phone: str = Field(..., description="Contact phone")
    city: str = Field(..., description="City")
    address: Optional[str] = None
    state: Optional[str] = None
    pincode: Optional[str] = None
    user_type: Optional[UserType] = Field(
        None, description="Role; defaults to the role chosen at sign-up"
    )

    @field_validator("full_name", "phone", "city")
    @classmethod
    def required_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Full name, phone, and city are required.")
        return v


class SitterProfileRequest(BaseModel):
    """Step 2 of profile setup for pet sitters."""

    experience_years: int = Field(default=0, ge=0)
    pet_preferences: list[str] = Field(default_factory=list)
    availability_schedule: dict[str, Any] = Field(default_factory=dict)
    hourly_rate: float = Field(default=0.0, ge=0)
    about_me: Optional[str] = None
    profile_image_url: Optional[str] = None
    introduction_video_url: Optional[str] = None


class ShelterProfileRequest(BaseModel):
    """Step 2 of profile setup for pet shelters."""

    shelter_name: str = Field(..., min_length=1)
    capacity: int = Field(default=0, ge=0)
    license_number: Optional[str] = None
    about_shelter: Optional[str] = None
    profile_image_url: Optional[str] = None
    introduction_video_url: Optional[str] = None


class ProfileSetupResponse(BaseModel):
    """Outcome of a setup step: the saved profile and where to go next."""

    profile: Profile
    step: int = Field(..., description="Setup step the user is on after saving")
    next_path: str = Field(..., description="Path to navigate to")
