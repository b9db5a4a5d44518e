"""
Profiles module.

Base profiles, sitter/shelter role records and the profile setup flow.

Public API:
- Profile, SitterProfile, ShelterProfile, UserType: Data models
- ProfileRepository: Supabase access to the profile tables
- Profile exceptions: ProfileNotFoundError, RoleMismatchError, etc.

ProfileService lives in .service and is imported from there; it depends
on the routing module, which itself depends on these models.
"""

from .models import (
    UserType,
    Profile,
    SitterProfile,
    ShelterProfile,
    BasicProfileRequest,
    SitterProfileRequest,
    ShelterProfileRequest,
    ProfileSetupResponse,
)
from .repository import ProfileRepository
from .exceptions import ProfileNotFoundError, RoleMismatchError, MissingUserTypeError

__all__ = [
    # Models
    "UserType",
    "Profile",
    "SitterProfile",
    "ShelterProfile",
    "BasicProfileRequest",
    "SitterProfileRequest",
    "ShelterProfileRequest",
    "ProfileSetupResponse",
    # Repository
    "ProfileRepository",
    # Exceptions
    "ProfileNotFoundError",
    "RoleMismatchError",
    "MissingUserTypeError",
]
