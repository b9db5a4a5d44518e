"""
Profile setup service.

Drives the two-step setup: the basic profile first, then the sitter or
shelter record for those roles. Each step reports where to go next using
the same role router as the sign-in redirect.
"""

import logging
from typing import Optional

from shared.models import UserIdentity
from modules.routing.gate import dashboard_path
from modules.routing.models import Paths
from .exceptions import MissingUserTypeError, ProfileNotFoundError, RoleMismatchError
from .models import (
    BasicProfileRequest,
    ROLES_WITH_ROLE_PROFILE,
    Profile,
    ProfileSetupResponse,
    ShelterProfileRequest,
    SitterProfileRequest,
    UserType,
)
from .repository import ProfileRepository

logger = logging.getLogger(__name__)


class ProfileService:
    """Profile reads and the setup flow for one signed-in user."""

    def __init__(self, repository: ProfileRepository):
        self._repo = repository

    async def get_profile(self, identity: UserIdentity) -> Profile:
        """
        Get the caller's base profile.

        Raises:
            ProfileNotFoundError: If setup has not been started
        """
        profile = self._repo.get_profile(identity.id)
        if profile is None:
            raise ProfileNotFoundError(identity.id)
        return profile

    async def save_basic_profile(
        self,
        identity: UserIdentity,
        request: BasicProfileRequest,
    ) -> ProfileSetupResponse:
        """
        Save step 1.

        The role comes from the form, or from the sign-up metadata when the
        form leaves it out. Owners are done after this step; sitters and
        shelters continue to step 2.
        """
        user_type = request.user_type.value if request.user_type else identity.metadata.user_type
        if not user_type:
            raise MissingUserTypeError()

        data = request.model_dump(exclude={"user_type"})
        data.update({"id": identity.id, "email": identity.email, "user_type": user_type})
        profile = self._repo.upsert_profile(data)
        logger.info("Saved basic profile for %s (%s)", identity.id, user_type)

        if user_type in ROLES_WITH_ROLE_PROFILE:
            return ProfileSetupResponse(profile=profile, step=2, next_path=Paths.PROFILE_SETUP)
        return ProfileSetupResponse(
            profile=profile,
            step=2,
            next_path=dashboard_path(profile, role_profile_exists=False),
        )

    async def save_sitter_profile(
        self,
        identity: UserIdentity,
        request: SitterProfileRequest,
    ) -> ProfileSetupResponse:
        """Save step 2 for a pet sitter."""
        profile = self._require_role(identity, UserType.PET_SITTER)
        self._repo.upsert_sitter_profile(identity.id, request.model_dump())
        logger.info("Saved sitter profile for %s", identity.id)
        return ProfileSetupResponse(
            profile=profile,
            step=3,
            next_path=dashboard_path(profile, role_profile_exists=True),
        )

    async def save_shelter_profile(
        self,
        identity: UserIdentity,
        request: ShelterProfileRequest,
    ) -> ProfileSetupResponse:
        """Save step 2 for a pet shelter."""
        profile = self._require_role(identity, UserType.PET_SHELTER)
        self._repo.upsert_shelter_profile(identity.id, request.model_dump())
        logger.info("Saved shelter profile for %s", identity.id)
        return ProfileSetupResponse(
            profile=profile,
            step=3,
            next_path=dashboard_path(profile, role_profile_exists=True),
        )

    def _require_role(self, identity: UserIdentity, role: UserType) -> Profile:
        profile: Optional[Profile] = self._repo.get_profile(identity.id)
        if profile is None:
            raise ProfileNotFoundError(identity.id)
        if profile.user_type != role:
            raise RoleMismatchError(role.value, profile.user_type)
        return profile
