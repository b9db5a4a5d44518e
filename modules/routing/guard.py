"""
Profile gate service.

Loads the profile state for an identity and runs the pure redirect rules
on it. Both the post-sign-in redirect and the page guards go through one
ProfileGate, and its lock keeps their decisions from interleaving.
"""

import asyncio
import logging
from typing import Optional

from shared.models import UserIdentity
from modules.profiles.repository import ProfileRepository
from .gate import evaluate_access, guard_for, landing_path, normalize_path, profile_setup_entry
from .models import AccessSnapshot, GuardKind, Paths, RouteDecision

logger = logging.getLogger(__name__)


class ProfileGate:
    """
    Shared guard for end-user pages.

    State is re-read from the database on every decision; nothing is
    cached between calls.
    """

    def __init__(self, profiles: ProfileRepository) -> None:
        self._profiles = profiles
        self._lock = asyncio.Lock()

    async def load_snapshot(self, identity: Optional[UserIdentity]) -> AccessSnapshot:
        """
        Read profile and role-record existence for ``identity``.

        Any fetch failure yields a snapshot without a profile, which the
        rules route to profile setup. Ambiguous state never grants access.
        """
        if identity is None:
            return AccessSnapshot()

        try:
            profile = self._profiles.get_profile(identity.id)
            role_profile_exists = False
            if profile is not None:
                role_profile_exists = self._profiles.has_role_profile(identity.id, profile.user_type)
        except Exception as e:
            logger.warning("Profile lookup failed for %s, treating as incomplete: %s", identity.id, e)
            return AccessSnapshot(identity=identity)

        return AccessSnapshot(
            identity=identity,
            profile=profile,
            role_profile_exists=role_profile_exists,
        )

    async def check(self, identity: Optional[UserIdentity], current_path: str) -> RouteDecision:
        """Guard a role-specific page."""
        async with self._lock:
            snapshot = await self.load_snapshot(identity)
            decision = evaluate_access(snapshot, current_path)
        logger.debug("Guard %s for %s: %s", current_path, identity.id if identity else None, decision)
        return decision

    async def landing(self, identity: UserIdentity) -> str:
        """Destination right after sign-in."""
        async with self._lock:
            snapshot = await self.load_snapshot(identity)
            path = landing_path(snapshot)
        logger.debug("Landing path for %s: %s", identity.id, path)
        return path

    async def check_profile_setup(
        self,
        identity: Optional[UserIdentity],
        edit_mode: bool = False,
    ) -> RouteDecision:
        """Guard the profile-setup page itself."""
        if identity is None:
            return RouteDecision.redirect(Paths.AUTH)

        async with self._lock:
            try:
                profile = self._profiles.get_profile(identity.id)
                user_type = profile.user_type if profile else identity.metadata.user_type
                role_profile_exists = self._profiles.has_role_profile(identity.id, user_type)
            except Exception as e:
                logger.warning("Profile lookup failed for %s on setup entry: %s", identity.id, e)
                return RouteDecision.stay()

        snapshot = AccessSnapshot(
            identity=identity,
            profile=profile,
            role_profile_exists=role_profile_exists,
        )
        return profile_setup_entry(snapshot, edit_mode, fallback_user_type=user_type)

    async def resolve(
        self,
        identity: Optional[UserIdentity],
        path: str,
        edit_mode: bool = False,
    ) -> RouteDecision:
        """
        Run whichever guard ``path`` sits behind.

        Public and admin pages always resolve to stay here; admin pages
        are guarded by the admin session instead.
        """
        path = normalize_path(path)
        kind = guard_for(path)
        if kind == GuardKind.PROFILE:
            return await self.check(identity, path)
        if kind == GuardKind.SIGNED_IN:
            return require_identity(identity)
        if kind == GuardKind.PROFILE_SETUP:
            return await self.check_profile_setup(identity, edit_mode)
        return RouteDecision.stay()


def require_identity(identity: Optional[UserIdentity]) -> RouteDecision:
    """Guard for pages that only need a signed-in user (checkout, orders)."""
    if identity is None:
        return RouteDecision.redirect(Paths.AUTH)
    return RouteDecision.stay()
