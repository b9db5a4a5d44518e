"""
Profile repository for database access.

Encapsulates all Supabase queries and data mapping for profile tables:
- profiles
- pet_sitter_profiles
- pet_shelter_profiles
"""

from typing import Any, Optional

from shared.repository import BaseRepository
from .models import Profile, ShelterProfile, SitterProfile, UserType


class ProfileRepository(BaseRepository[Profile]):
    """
    Repository for profile data access.

    Note: This repository does NOT perform authorization checks.
    Callers pass the user ID taken from a verified session.
    """

    # -------------------------------------------------------------------------
    # Base profile
    # -------------------------------------------------------------------------

    def get_profile(self, user_id: str) -> Optional[Profile]:
        """
        Get a user's base profile.

        Returns:
            Profile, or None if the user has not saved one yet.
        """
        row = self._first(
            self._db.table("profiles").select("*").eq("id", user_id).limit(1).execute()
        )
        if row is None:
            return None
        return Profile(**row)

    def upsert_profile(self, data: dict[str, Any]) -> Profile:
        """
        Create or update a base profile keyed by ``id``.

        Args:
            data: Column values, must include ``id``.
        """
        result = self._db.table("profiles").upsert(data).execute()
        return Profile(**result.data[0])

    # -------------------------------------------------------------------------
    # Role profiles
    # -------------------------------------------------------------------------

    def has_sitter_profile(self, user_id: str) -> bool:
        """Whether a pet_sitter_profiles row exists for the user."""
        return self._exists("pet_sitter_profiles", user_id)

    def has_shelter_profile(self, user_id: str) -> bool:
        """Whether a pet_shelter_profiles row exists for the user."""
        return self._exists("pet_shelter_profiles", user_id)

    def has_role_profile(self, user_id: str, user_type: Optional[str]) -> bool:
        """
        Whether the role-specific record for ``user_type`` exists.

        Pet owners have no role record; the answer for them is False.
        """
        if user_type == UserType.PET_SITTER:
            return self.has_sitter_profile(user_id)
        if user_type == UserType.PET_SHELTER:
            return self.has_shelter_profile(user_id)
        return False

    def upsert_sitter_profile(self, user_id: str, data: dict[str, Any]) -> SitterProfile:
        """Create or update the sitter record, one per user."""
        result = (
            self._db.table("pet_sitter_profiles")
            .upsert({**data, "user_id": user_id}, on_conflict="user_id")
            .execute()
        )
        return SitterProfile(**result.data[0])

    def upsert_shelter_profile(self, user_id: str, data: dict[str, Any]) -> ShelterProfile:
        """Create or update the shelter record, one per user."""
        result = (
            self._db.table("pet_shelter_profiles")
            .upsert({**data, "user_id": user_id}, on_conflict="user_id")
            .execute()
        )
        return ShelterProfile(**result.data[0])

    def _exists(self, table: str, user_id: str) -> bool:
        result = self._db.table(table).select("id").eq("user_id", user_id).limit(1).execute()
        return bool(result.data)
